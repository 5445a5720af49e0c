"""Album entity and its read-side helpers."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from photo_library.domain.photos import Photo
from photo_library.domain.tags import Tag


def _now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class AlbumSummary:
    """Row shown in an album listing."""

    name: str
    photo_count: int
    earliest: datetime | None
    latest: datetime | None


@dataclass(eq=False)
class Album:
    """Named, ordered collection of photos."""

    name: str
    photos: list[Photo] = field(default_factory=list)
    date_created: datetime = field(default_factory=_now)
    date_modified: datetime = field(default_factory=_now)

    def add_photo(self, photo: Photo) -> bool:
        """Append the photo unless the same photo is already in the album."""
        if photo in self.photos:
            return False
        self.photos.append(photo)
        self.date_modified = _now()
        return True

    def remove_photo(self, photo: Photo) -> bool:
        if photo not in self.photos:
            return False
        self.photos.remove(photo)
        self.date_modified = _now()
        return True

    def contains(self, photo: Photo) -> bool:
        return photo in self.photos

    def own_photo(self, photo: Photo) -> Photo | None:
        """Return this album's instance of an equal photo, if any.

        Other albums and search results hold their own objects for the same
        file, so edits must go through the instance returned here.
        """
        for candidate in self.photos:
            if candidate == photo:
                return candidate
        return None

    def find_by_path(self, path: str) -> list[Photo]:
        return [photo for photo in self.photos if photo.path == path]

    @property
    def photo_count(self) -> int:
        return len(self.photos)

    def date_range(self) -> tuple[datetime, datetime] | None:
        """Return the earliest and latest photo timestamps, if any."""
        if not self.photos:
            return None
        stamps = [photo.timestamp for photo in self.photos]
        return min(stamps), max(stamps)

    def summary(self) -> AlbumSummary:
        span = self.date_range()
        return AlbumSummary(
            name=self.name,
            photo_count=self.photo_count,
            earliest=span[0] if span else None,
            latest=span[1] if span else None,
        )

    def photos_in_date_range(self, start: datetime, end: datetime) -> list[Photo]:
        """Return photos whose timestamp lies within ``[start, end]``."""
        return [photo for photo in self.photos if start <= photo.timestamp <= end]

    def photos_with_tag(self, tag: Tag) -> list[Photo]:
        return [photo for photo in self.photos if tag in photo.tags]

    def all_tags(self) -> list[Tag]:
        """Return every distinct tag used in the album, in first-seen order."""
        seen: list[Tag] = []
        for photo in self.photos:
            for tag in photo.tags:
                if tag not in seen:
                    seen.append(tag)
        return seen

    def sort_by_date(self) -> None:
        self.photos.sort(key=lambda photo: photo.timestamp)

    def sort_by_tag_signature(self) -> None:
        self.photos.sort(key=lambda photo: photo.tag_signature())

    def __str__(self) -> str:
        return (
            f"Album name: {self.name}\n"
            f"Date created: {self.date_created.isoformat()}\n"
            f"Date last modified: {self.date_modified.isoformat()}\n"
            f"Number of photos: {self.photo_count}"
        )
