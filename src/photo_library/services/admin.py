"""Admin service for user lifecycle."""

import logging
from dataclasses import dataclass

from photo_library.domain.results import ErrorKind, OperationResult
from photo_library.domain.users import User
from photo_library.services.users import UserRepository, save_all_users, save_user

logger = logging.getLogger(__name__)


@dataclass
class AdminService:
    """Creates, deletes and lists users."""

    repository: UserRepository

    def list_users(self) -> list[User]:
        """Return a snapshot of all users."""
        return list(self.repository.list_users())

    def deletable_usernames(self) -> list[str]:
        """Return usernames that may be offered for deletion."""
        return [user.username for user in self.list_users() if not user.is_admin]

    def create_user(self, username: str) -> OperationResult[User]:
        cleaned = username.strip()
        if not cleaned:
            return OperationResult.failure(
                ErrorKind.INVALID_INPUT, "Username cannot be empty."
            )
        if self.repository.get(cleaned) is not None:
            return OperationResult.failure(
                ErrorKind.DUPLICATE_NAME, f"User {cleaned} already exists."
            )
        user = User(cleaned)
        saved = save_user(self.repository, user)
        if not saved:
            return OperationResult.failure(ErrorKind.PERSISTENCE_FAILURE, saved.reason)
        logger.info("Created user %s", cleaned)
        return OperationResult.success(user)

    def delete_user(self, username: str) -> OperationResult[User]:
        removed = self.repository.delete(username.strip())
        if removed is None:
            return OperationResult.failure(
                ErrorKind.NOT_FOUND, f"User {username.strip()} does not exist."
            )
        saved = save_all_users(self.repository)
        if not saved:
            return OperationResult.failure(ErrorKind.PERSISTENCE_FAILURE, saved.reason)
        logger.info("Deleted user %s", removed.username)
        return OperationResult.success(removed)
