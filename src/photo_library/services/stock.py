"""Seeding of the built-in stock user."""

import logging
from pathlib import PurePath

from photo_library.domain.albums import Album
from photo_library.domain.photos import Photo
from photo_library.domain.results import ErrorKind, OperationResult
from photo_library.domain.users import User
from photo_library.services.albums import PhotoFileInspector
from photo_library.services.users import UserRepository, save_user

logger = logging.getLogger(__name__)


def ensure_stock_user(
    repository: UserRepository,
    inspector: PhotoFileInspector,
    username: str,
    album_name: str,
    photo_paths: list[str],
) -> OperationResult[User]:
    """Create the stock user with one album of sample photos if it is missing."""
    existing = repository.get(username)
    if existing is not None:
        return OperationResult.success(existing)

    album = Album(album_name)
    for path in photo_paths:
        try:
            timestamp = inspector.modified_at(path)
        except OSError:
            logger.warning("Skipping missing stock photo %s", path)
            continue
        album.add_photo(
            Photo(path=path, timestamp=timestamp, caption=PurePath(path).stem)
        )

    user = User(username)
    user.create_album(album)
    saved = save_user(repository, user)
    if not saved:
        return OperationResult.failure(ErrorKind.PERSISTENCE_FAILURE, saved.reason)
    logger.info(
        "Seeded stock user %s with %d photo(s)", username, album.photo_count
    )
    return OperationResult.success(user)
