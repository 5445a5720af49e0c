"""Login sessions and the checkpoints that reconcile and save edits."""

import logging
from dataclasses import dataclass

from photo_library.domain.albums import Album
from photo_library.domain.results import ErrorKind, OperationResult
from photo_library.domain.users import User, is_admin_name
from photo_library.services.sync import reconcile_album
from photo_library.services.users import (
    UserRepository,
    UserService,
    save_all_users,
    save_user,
)

logger = logging.getLogger(__name__)


@dataclass
class LibrarySession:
    """The signed-in user and the album currently being viewed."""

    user: User
    open_album: Album | None = None

    @property
    def is_admin(self) -> bool:
        return self.user.is_admin


@dataclass
class SessionService:
    """Drives login, album navigation, logout and quit."""

    repository: UserRepository
    user_service: UserService

    def login(self, username: str) -> OperationResult[LibrarySession]:
        cleaned = username.strip()
        if not cleaned:
            return OperationResult.failure(
                ErrorKind.INVALID_INPUT, "Please enter a username."
            )
        if is_admin_name(cleaned):
            ensured = self.user_service.ensure_user(cleaned)
            if not ensured:
                return OperationResult.failure(
                    ErrorKind.PERSISTENCE_FAILURE, ensured.reason
                )
            return OperationResult.success(LibrarySession(user=ensured.value))
        user = self.user_service.get_user(cleaned)
        if user is None:
            return OperationResult.failure(
                ErrorKind.NOT_FOUND, f"User {cleaned} does not exist."
            )
        logger.info("User %s logged in", user.username)
        return OperationResult.success(LibrarySession(user=user))

    def open_album(
        self, session: LibrarySession, name: str
    ) -> OperationResult[Album]:
        album = session.user.get_album_by_name(name)
        if album is None:
            return OperationResult.failure(
                ErrorKind.NOT_FOUND, f"Album not found: {name}"
            )
        session.open_album = album
        return OperationResult.success(album)

    def leave_album(self, session: LibrarySession) -> OperationResult[int]:
        """Checkpoint: copy edits from the open album to the others and save."""
        updated = self._reconcile(session)
        session.open_album = None
        saved = save_user(self.repository, session.user)
        if not saved:
            return OperationResult.failure(ErrorKind.PERSISTENCE_FAILURE, saved.reason)
        return OperationResult.success(updated)

    def logout(self, session: LibrarySession) -> OperationResult[int]:
        """Checkpoint: reconcile, then save every user."""
        updated = self._reconcile(session)
        session.open_album = None
        saved = save_all_users(self.repository)
        if not saved:
            return OperationResult.failure(ErrorKind.PERSISTENCE_FAILURE, saved.reason)
        logger.info("User %s logged out", session.user.username)
        return OperationResult.success(updated)

    def quit(self, session: LibrarySession | None) -> OperationResult[int]:
        updated = self._reconcile(session) if session else 0
        saved = save_all_users(self.repository)
        if not saved:
            return OperationResult.failure(ErrorKind.PERSISTENCE_FAILURE, saved.reason)
        return OperationResult.success(updated)

    @staticmethod
    def _reconcile(session: LibrarySession) -> int:
        if session.open_album is None:
            return 0
        return reconcile_album(session.user, session.open_album)
