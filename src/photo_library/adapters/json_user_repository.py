"""JSON file implementation of the user repository."""

import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from photo_library.adapters.storage_models import (
    LibraryDocument,
    dump_user,
    load_user,
)
from photo_library.domain.matching import fold
from photo_library.domain.results import PersistenceError
from photo_library.domain.users import User
from photo_library.services.users import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class JsonUserRepository(UserRepository):
    """Keeps every user in memory and writes them all to one JSON file."""

    path: Path
    _users: dict[str, User] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def load(self) -> None:
        """Read the file into memory; a missing file means an empty library."""
        if not self.path.exists():
            logger.info("No user data at %s, starting empty", self.path)
            self._users = {}
            return
        try:
            raw = self.path.read_text(encoding="utf-8")
            document = LibraryDocument.model_validate_json(raw)
            users = {doc.username: load_user(doc) for doc in document.users}
            if len({fold(name) for name in users}) != len(document.users):
                raise ValueError("duplicate usernames")
        except OSError as exc:
            raise PersistenceError(f"Failed to read {self.path}: {exc}") from exc
        except ValidationError as exc:
            raise PersistenceError(f"Invalid user data in {self.path}") from exc
        except ValueError as exc:
            # Undecodable bytes or a document that breaks the domain rules.
            raise PersistenceError(f"Invalid user data in {self.path}: {exc}") from exc
        self._users = users
        logger.info("Loaded %d user(s) from %s", len(self._users), self.path)

    def save(self, user: User) -> None:
        """Upsert the user and write the whole map."""
        existing = self._key_for(user.username)
        if existing is not None and existing != user.username:
            self._users.pop(existing)
        self._users[user.username] = user
        self.save_all()

    def save_all(self) -> None:
        with self._lock:
            document = LibraryDocument(
                users=[dump_user(user) for user in self._users.values()]
            )
            payload = document.model_dump_json(indent=2)
            try:
                _atomic_write_text(self.path, payload)
            except OSError as exc:
                raise PersistenceError(f"Failed to write {self.path}: {exc}") from exc

    def get(self, username: str) -> User | None:
        key = self._key_for(username)
        return self._users.get(key) if key is not None else None

    def delete(self, username: str) -> User | None:
        key = self._key_for(username)
        if key is None:
            return None
        return self._users.pop(key)

    def list_users(self) -> list[User]:
        return list(self._users.values())

    def _key_for(self, username: str) -> str | None:
        wanted = fold(username)
        for key in self._users:
            if fold(key) == wanted:
                return key
        return None


def _atomic_write_text(path: Path, data: str) -> None:
    """Write to a sibling temp file, then rename it over ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
