"""User lookup and persistence helpers shared by the services."""

import logging
from dataclasses import dataclass
from typing import Protocol

from photo_library.domain.results import ErrorKind, OperationResult, PersistenceError
from photo_library.domain.users import User

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Whole-graph persistence interface for the username to user map."""

    def load(self) -> None:
        """Populate the in-memory map from the durable store."""

    def save(self, user: User) -> None:
        """Upsert the user and write the entire map."""

    def save_all(self) -> None:
        """Write the current map as is."""

    def get(self, username: str) -> User | None:
        """Return the user whose name matches ignoring case, if present."""

    def delete(self, username: str) -> User | None:
        """Remove a user from the in-memory map and return it, if present."""

    def list_users(self) -> list[User]:
        """Return all known users."""


def save_user(repository: UserRepository, user: User) -> OperationResult[None]:
    """Persist a user, turning storage errors into a failed result."""
    try:
        repository.save(user)
    except PersistenceError as exc:
        logger.exception("Failed to save user %s", user.username)
        return OperationResult.failure(ErrorKind.PERSISTENCE_FAILURE, str(exc))
    return OperationResult.success()


def save_all_users(repository: UserRepository) -> OperationResult[None]:
    """Persist the whole map, turning storage errors into a failed result."""
    try:
        repository.save_all()
    except PersistenceError as exc:
        logger.exception("Failed to save user data")
        return OperationResult.failure(ErrorKind.PERSISTENCE_FAILURE, str(exc))
    return OperationResult.success()


@dataclass
class UserService:
    """Application service for user lookups."""

    repository: UserRepository

    def get_user(self, username: str) -> User | None:
        return self.repository.get(username.strip())

    def ensure_user(self, username: str) -> OperationResult[User]:
        """Return the user for the name, creating and saving it if missing."""
        existing = self.get_user(username)
        if existing is not None:
            return OperationResult.success(existing)

        created = User(username.strip())
        saved = save_user(self.repository, created)
        if not saved:
            return OperationResult.failure(ErrorKind.PERSISTENCE_FAILURE, saved.reason)
        logger.info("Created user %s", created.username)
        return OperationResult.success(created)
