"""Album and photo editing operations for a signed-in user."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, TypeVar

from photo_library.domain.albums import Album, AlbumSummary
from photo_library.domain.photos import Photo
from photo_library.domain.results import ErrorKind, OperationResult
from photo_library.domain.tags import Tag
from photo_library.domain.users import User
from photo_library.services.users import UserRepository, save_user

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PhotoFileInspector(Protocol):
    """Access to photo files on disk."""

    def modified_at(self, path: str) -> datetime:
        """Return the last modification time, raising ``FileNotFoundError``."""


@dataclass
class AlbumService:
    """Validates, applies and persists album edits.

    Every mutator returns an ``OperationResult``; the user is saved after each
    successful change.
    """

    repository: UserRepository
    inspector: PhotoFileInspector

    def list_albums(self, user: User) -> list[AlbumSummary]:
        return [album.summary() for album in user.albums]

    def create_album(self, user: User, name: str) -> OperationResult[Album]:
        cleaned = name.strip()
        if not cleaned:
            return _invalid("Album name cannot be empty.")
        album = Album(cleaned)
        if not user.create_album(album):
            return _duplicate_name(cleaned)
        return self._persist(user, album)

    def rename_album(
        self, user: User, album: Album, new_name: str
    ) -> OperationResult[Album]:
        if album not in user.albums:
            return _album_not_found(album.name)
        if not new_name.strip():
            return _invalid("Album name cannot be empty.")
        if not user.rename_album(album, new_name):
            return _duplicate_name(new_name.strip())
        return self._persist(user, album)

    def delete_album(self, user: User, album: Album) -> OperationResult[Album]:
        if not user.delete_album(album):
            return _album_not_found(album.name)
        return self._persist(user, album)

    def add_photo(self, user: User, album: Album, path: str) -> OperationResult[Photo]:
        """Add the file at ``path``, stamping it with its modification time."""
        cleaned = path.strip()
        if not cleaned:
            return _invalid("Photo path cannot be empty.")
        if album not in user.albums:
            return _album_not_found(album.name)
        try:
            timestamp = self.inspector.modified_at(cleaned)
        except OSError:
            logger.info("Photo file %s is not readable", cleaned)
            return OperationResult.failure(
                ErrorKind.NOT_FOUND, f"Photo file not found: {cleaned}"
            )
        photo = Photo(path=cleaned, timestamp=timestamp)
        if not album.add_photo(photo):
            return _duplicate_photo(album.name)
        return self._persist(user, photo)

    def remove_photo(
        self, user: User, album: Album, photo: Photo
    ) -> OperationResult[Photo]:
        if album not in user.albums:
            return _album_not_found(album.name)
        target = album.own_photo(photo)
        if target is None:
            return _photo_not_found(album.name)
        album.remove_photo(target)
        return self._persist(user, target)

    def caption_photo(
        self, user: User, album: Album, photo: Photo, caption: str
    ) -> OperationResult[Photo]:
        target = album.own_photo(photo)
        if target is None:
            return _photo_not_found(album.name)
        target.set_caption(caption.strip())
        return self._persist(user, target)

    def add_tag_type(
        self, user: User, tag_type: str, multiplicity: int | None
    ) -> OperationResult[str]:
        cleaned = tag_type.strip()
        if not cleaned:
            return _invalid("Tag type cannot be empty.")
        try:
            user.add_tag_type(cleaned, multiplicity)
        except ValueError as exc:
            return _invalid(str(exc))
        return self._persist(user, cleaned)

    def add_tag(
        self, user: User, album: Album, photo: Photo, tag_type: str, tag_value: str
    ) -> OperationResult[Tag]:
        """Attach a tag after checking the type registry and its cap."""
        target = album.own_photo(photo)
        if target is None:
            return _photo_not_found(album.name)
        tag_type, tag_value = tag_type.strip(), tag_value.strip()
        if not tag_type or not tag_value:
            return _invalid("Both tag type and value must be filled in.")
        if not user.tag_types.is_valid_type(tag_type):
            return _invalid(f"Unknown tag type: {tag_type}")
        if not user.tag_types.can_add(target, tag_type):
            if user.tag_types.is_single_valued(tag_type):
                reason = (
                    f"Tag type {tag_type} only supports a single value, "
                    "which already exists for this photo."
                )
            else:
                reason = f"Photo already has the maximum number of {tag_type} tags."
            return OperationResult.failure(ErrorKind.TAG_CAPACITY_EXCEEDED, reason)
        tag = Tag(tag_type, tag_value)
        if not target.add_tag(tag):
            return OperationResult.failure(
                ErrorKind.DUPLICATE_TAG,
                "This tag already exists for the selected photo.",
            )
        return self._persist(user, tag)

    def delete_tag(
        self, user: User, album: Album, photo: Photo, tag: Tag
    ) -> OperationResult[Tag]:
        target = album.own_photo(photo)
        if target is None:
            return _photo_not_found(album.name)
        if not target.delete_tag(tag):
            return OperationResult.failure(
                ErrorKind.NOT_FOUND, f"Tag {tag} is not on the selected photo."
            )
        return self._persist(user, tag)

    def copy_photo(
        self, user: User, source: Album, photo: Photo, destination_name: str
    ) -> OperationResult[Photo]:
        """Place a copy of the photo, with its caption and tags, in another album."""
        resolved = self._destination(user, source, photo, destination_name)
        if isinstance(resolved, OperationResult):
            return resolved
        original, destination = resolved
        copy = Photo(
            path=original.path,
            timestamp=original.timestamp,
            caption=original.caption,
            tags=list(original.tags),
        )
        destination.add_photo(copy)
        return self._persist(user, copy)

    def move_photo(
        self, user: User, source: Album, photo: Photo, destination_name: str
    ) -> OperationResult[Photo]:
        resolved = self._destination(user, source, photo, destination_name)
        if isinstance(resolved, OperationResult):
            return resolved
        original, destination = resolved
        destination.add_photo(original)
        source.remove_photo(original)
        return self._persist(user, original)

    def _destination(
        self, user: User, source: Album, photo: Photo, destination_name: str
    ) -> tuple[Photo, Album] | OperationResult[Photo]:
        original = source.own_photo(photo)
        if original is None:
            return _photo_not_found(source.name)
        destination = user.get_album_by_name(destination_name)
        if destination is None or destination is source:
            return _album_not_found(destination_name)
        if destination.contains(original):
            return _duplicate_photo(destination.name)
        return original, destination

    def _persist(self, user: User, value: T) -> OperationResult[T]:
        saved = save_user(self.repository, user)
        if not saved:
            return OperationResult.failure(ErrorKind.PERSISTENCE_FAILURE, saved.reason)
        return OperationResult.success(value)


def _invalid(reason: str) -> OperationResult:
    return OperationResult.failure(ErrorKind.INVALID_INPUT, reason)


def _duplicate_name(name: str) -> OperationResult:
    return OperationResult.failure(
        ErrorKind.DUPLICATE_NAME, f"An album named {name} already exists."
    )


def _duplicate_photo(album_name: str) -> OperationResult:
    return OperationResult.failure(
        ErrorKind.DUPLICATE_PHOTO, f"Album {album_name} already contains this photo."
    )


def _album_not_found(name: str) -> OperationResult:
    return OperationResult.failure(ErrorKind.NOT_FOUND, f"Album not found: {name}")


def _photo_not_found(album_name: str) -> OperationResult:
    return OperationResult.failure(
        ErrorKind.NOT_FOUND, f"Photo is not in album {album_name}."
    )
