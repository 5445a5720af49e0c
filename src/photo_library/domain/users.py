"""User entity owning albums and tag types."""

from dataclasses import dataclass, field

from photo_library.domain.albums import Album
from photo_library.domain.matching import fold, same_text
from photo_library.domain.tags import Tag, TagTypeRegistry

ADMIN_USERNAME = "admin"


def is_admin_name(username: str) -> bool:
    return same_text(username, ADMIN_USERNAME)


@dataclass(eq=False)
class User:
    """Owner of an album collection and a tag type registry."""

    username: str
    albums: list[Album] = field(default_factory=list)
    tag_types: TagTypeRegistry = field(default_factory=TagTypeRegistry)

    @property
    def is_admin(self) -> bool:
        return is_admin_name(self.username)

    def has_album_named(self, name: str, exclude: Album | None = None) -> bool:
        """Return True if another album already uses this name, ignoring case."""
        return any(
            same_text(album.name, name)
            for album in self.albums
            if album is not exclude
        )

    def create_album(self, album: Album) -> bool:
        """Add the album unless one with the same name already exists."""
        name = album.name.strip()
        if not name or self.has_album_named(name):
            return False
        album.name = name
        self.albums.append(album)
        return True

    def rename_album(self, album: Album, new_name: str) -> bool:
        name = new_name.strip()
        if not name or self.has_album_named(name, exclude=album):
            return False
        album.name = name
        return True

    def delete_album(self, album: Album) -> bool:
        if album not in self.albums:
            return False
        self.albums.remove(album)
        return True

    def get_album_by_name(self, name: str) -> Album | None:
        """Return the album with exactly this name."""
        for album in self.albums:
            if album.name == name:
                return album
        return None

    def find_album(self, name: str) -> Album | None:
        """Return the album whose name matches ignoring case."""
        key = fold(name)
        for album in self.albums:
            if fold(album.name) == key:
                return album
        return None

    def add_tag_type(self, tag_type: str, multiplicity: int | None) -> None:
        self.tag_types.add_type(tag_type, multiplicity)

    def albums_with_tag(self, tag: Tag) -> list[Album]:
        return [album for album in self.albums if album.photos_with_tag(tag)]

    def albums_with_caption(self, text: str) -> list[Album]:
        needle = fold(text)
        return [
            album
            for album in self.albums
            if any(needle in fold(photo.caption) for photo in album.photos)
        ]

    def __str__(self) -> str:
        return f"Username: {self.username}\nAlbums: {len(self.albums)}"
