"""Photo search across all albums of a user."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from enum import StrEnum
from zoneinfo import ZoneInfo

from photo_library.domain.albums import Album
from photo_library.domain.photos import Photo
from photo_library.domain.results import ErrorKind, OperationResult
from photo_library.domain.users import User
from photo_library.services.users import UserRepository, save_user

logger = logging.getLogger(__name__)


class SearchMode(StrEnum):
    """How two tag criteria combine."""

    SINGLE = "Single"
    CONJUNCTIVE = "Conjunctive"
    DISJUNCTIVE = "Disjunctive"


@dataclass(frozen=True)
class TagCriterion:
    """One tag type/value pair typed into the search form."""

    type: str = ""
    value: str = ""

    @classmethod
    def of(cls, tag_type: str | None, tag_value: str | None) -> "TagCriterion":
        return cls((tag_type or "").strip(), (tag_value or "").strip())

    @property
    def is_complete(self) -> bool:
        return bool(self.type and self.value)

    @property
    def is_empty(self) -> bool:
        return not self.type and not self.value

    def matches(self, photo: Photo) -> bool:
        # An unsupplied criterion never matches.
        return self.is_complete and photo.matches(self.type, self.value)


def _unique(photos: Iterable[Photo]) -> list[Photo]:
    """Drop repeated photos by identity, keeping first-seen order."""
    seen: set[tuple[str, datetime]] = set()
    result = []
    for photo in photos:
        if photo.identity in seen:
            continue
        seen.add(photo.identity)
        result.append(photo)
    return result


def _all_photos(user: User) -> Iterable[Photo]:
    for album in user.albums:
        yield from album.photos


def _parse_mode(mode: SearchMode | str | None) -> SearchMode | None:
    if mode is None or isinstance(mode, SearchMode):
        return mode
    for candidate in SearchMode:
        if candidate.value.casefold() == mode.strip().casefold():
            return candidate
    return None


def _validate_tag_query(
    first: TagCriterion, second: TagCriterion, mode: SearchMode
) -> str | None:
    """Return an error message for an incomplete query, or None."""
    if mode is SearchMode.SINGLE:
        if not first.is_complete and not second.is_complete:
            return (
                "Please fill in at least one tag type-value pair "
                "for single tag search."
            )
        for criterion in (first, second):
            if not criterion.is_complete and not criterion.is_empty:
                return "Both tag type and value must be filled in."
        if first.is_complete and second.is_complete:
            return (
                "Only one tag type-value pair should be filled in "
                "for single tag search."
            )
        return None
    if not first.is_complete or not second.is_complete:
        return "All fields must be filled in for conjunctive/disjunctive tag search."
    return None


def _day_window(
    start: date, end: date, timezone_name: str | None
) -> tuple[datetime, datetime]:
    """Return UTC bounds from the start of ``start`` to the end of ``end``.

    Days are calendar days in ``timezone_name``, or in the local timezone
    when no name is configured.
    """
    if timezone_name:
        tz = ZoneInfo(timezone_name)
        window_start = datetime.combine(start, time.min, tzinfo=tz)
        window_end = datetime.combine(end, time.max, tzinfo=tz)
    else:
        window_start = datetime.combine(start, time.min).astimezone()
        window_end = datetime.combine(end, time.max).astimezone()
    return window_start.astimezone(UTC), window_end.astimezone(UTC)


_COMBINERS: dict[SearchMode, Callable[[bool, bool], bool]] = {
    SearchMode.SINGLE: lambda left, right: left != right,
    SearchMode.CONJUNCTIVE: lambda left, right: left and right,
    SearchMode.DISJUNCTIVE: lambda left, right: left or right,
}


@dataclass
class SearchService:
    """Evaluates date, tag and caption queries over a user's albums."""

    repository: UserRepository
    timezone_name: str | None = None

    def search_by_date(
        self, user: User, start: date | None, end: date | None
    ) -> OperationResult[list[Photo]]:
        """Return photos taken from the start of ``start`` to the end of ``end``."""
        if start is None or end is None or start > end:
            return OperationResult.failure(
                ErrorKind.INVALID_INPUT, "Please select a valid start and end date."
            )
        window_start, window_end = _day_window(start, end, self.timezone_name)
        matches = _unique(
            photo
            for album in user.albums
            for photo in album.photos_in_date_range(window_start, window_end)
        )
        if not matches:
            return OperationResult.failure(
                ErrorKind.NOT_FOUND, "No photos found in the specified date range."
            )
        return OperationResult.success(matches)

    def search_by_tags(
        self,
        user: User,
        first: TagCriterion,
        second: TagCriterion,
        mode: SearchMode | str | None,
    ) -> OperationResult[list[Photo]]:
        """Return photos matching one or two tag criteria combined by ``mode``."""
        resolved = _parse_mode(mode)
        if resolved is None:
            return OperationResult.failure(
                ErrorKind.INVALID_INPUT, "Please select a search type."
            )
        first = TagCriterion.of(first.type, first.value)
        second = TagCriterion.of(second.type, second.value)
        error = _validate_tag_query(first, second, resolved)
        if error:
            return OperationResult.failure(ErrorKind.INVALID_INPUT, error)

        combine = _COMBINERS[resolved]
        matches = _unique(
            photo
            for photo in _all_photos(user)
            if combine(first.matches(photo), second.matches(photo))
        )
        logger.debug(
            "Tag search %s for %s returned %d photo(s)",
            resolved,
            user.username,
            len(matches),
        )
        if not matches:
            return OperationResult.failure(
                ErrorKind.NOT_FOUND,
                "No photos found matching the specified tag criteria.",
            )
        return OperationResult.success(matches)

    def search_by_caption(self, user: User, text: str) -> OperationResult[list[Photo]]:
        needle = text.strip().casefold()
        if not needle:
            return OperationResult.failure(
                ErrorKind.INVALID_INPUT, "Please enter caption text to search for."
            )
        matches = _unique(
            photo
            for photo in _all_photos(user)
            if needle in photo.caption.casefold()
        )
        if not matches:
            return OperationResult.failure(
                ErrorKind.NOT_FOUND, "No photos found with a matching caption."
            )
        return OperationResult.success(matches)

    def create_album_from_results(
        self, user: User, name: str, photos: list[Photo]
    ) -> OperationResult[Album]:
        """Create an album holding the same photo objects as a search result."""
        if not photos:
            return OperationResult.failure(
                ErrorKind.INVALID_INPUT,
                "Cannot create an empty album. Please perform a search first.",
            )
        cleaned = name.strip()
        if not cleaned:
            return OperationResult.failure(
                ErrorKind.INVALID_INPUT, "Album name cannot be empty."
            )
        if user.has_album_named(cleaned):
            return OperationResult.failure(
                ErrorKind.DUPLICATE_NAME, "An album with this name already exists."
            )
        album = Album(cleaned)
        for photo in photos:
            album.add_photo(photo)
        user.create_album(album)
        saved = save_user(self.repository, user)
        if not saved:
            return OperationResult.failure(ErrorKind.PERSISTENCE_FAILURE, saved.reason)
        return OperationResult.success(album)
