"""Pydantic models for the persisted user library document."""

from datetime import datetime

from pydantic import BaseModel, Field

from photo_library.domain.albums import Album
from photo_library.domain.photos import Photo
from photo_library.domain.tags import Tag, TagTypeRegistry
from photo_library.domain.users import User

SCHEMA_VERSION = 1


class TagDocument(BaseModel):
    """Serialized tag."""

    type: str
    value: str


class PhotoDocument(BaseModel):
    """Serialized photo."""

    path: str
    timestamp: datetime
    caption: str = ""
    tags: list[TagDocument] = Field(default_factory=list)


class AlbumDocument(BaseModel):
    """Serialized album."""

    name: str
    date_created: datetime
    date_modified: datetime
    photos: list[PhotoDocument] = Field(default_factory=list)


class UserDocument(BaseModel):
    """Serialized user with its albums and tag types."""

    username: str
    albums: list[AlbumDocument] = Field(default_factory=list)
    tag_types: dict[str, int | None] = Field(default_factory=dict)


class LibraryDocument(BaseModel):
    """Root of the persisted file."""

    version: int = SCHEMA_VERSION
    users: list[UserDocument] = Field(default_factory=list)


def dump_user(user: User) -> UserDocument:
    return UserDocument(
        username=user.username,
        albums=[_dump_album(album) for album in user.albums],
        tag_types=user.tag_types.as_dict(),
    )


def load_user(document: UserDocument) -> User:
    """Rebuild a user through the domain rules.

    Raises ``ValueError`` for documents holding duplicate tags, photos or
    album names.
    """
    user = User(
        username=document.username,
        tag_types=TagTypeRegistry.from_mapping(document.tag_types),
    )
    for album_document in document.albums:
        if not user.create_album(_load_album(album_document)):
            raise ValueError(
                f"User {document.username} has a duplicate or blank album "
                f"name: {album_document.name!r}"
            )
    return user


def _dump_album(album: Album) -> AlbumDocument:
    return AlbumDocument(
        name=album.name,
        date_created=album.date_created,
        date_modified=album.date_modified,
        photos=[
            PhotoDocument(
                path=photo.path,
                timestamp=photo.timestamp,
                caption=photo.caption,
                tags=[
                    TagDocument(type=tag.type, value=tag.value) for tag in photo.tags
                ],
            )
            for photo in album.photos
        ],
    )


def _load_album(document: AlbumDocument) -> Album:
    album = Album(name=document.name, date_created=document.date_created)
    for photo_document in document.photos:
        photo = Photo(
            path=photo_document.path,
            timestamp=photo_document.timestamp,
            caption=photo_document.caption,
        )
        for tag_document in photo_document.tags:
            if not photo.add_tag(Tag(tag_document.type, tag_document.value)):
                raise ValueError(
                    f"Photo {photo.path} has duplicate tag "
                    f"{tag_document.type}: {tag_document.value}"
                )
        if not album.add_photo(photo):
            raise ValueError(f"Album {document.name} lists {photo.path} twice")
    album.date_modified = document.date_modified
    return album
