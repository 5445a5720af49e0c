"""Photo entity."""

from dataclasses import dataclass, field
from datetime import datetime

from photo_library.domain.matching import fold
from photo_library.domain.tags import Tag


@dataclass(eq=False)
class Photo:
    """A photo file placed in an album.

    Each album holds its own ``Photo`` object, so the same file is recognized
    across albums by its identity: the path together with the timestamp taken
    from the file when it was first added.
    """

    path: str
    timestamp: datetime
    caption: str = ""
    tags: list[Tag] = field(default_factory=list)

    @property
    def identity(self) -> tuple[str, datetime]:
        return self.path, self.timestamp

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Photo):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    def set_caption(self, text: str) -> None:
        self.caption = text

    def add_tag(self, tag: Tag) -> bool:
        """Append the tag unless an equal one is already present."""
        if tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def delete_tag(self, tag: Tag) -> bool:
        """Remove the tag if present."""
        if tag not in self.tags:
            return False
        self.tags.remove(tag)
        return True

    def has_tag_of_type(self, tag_type: str) -> bool:
        return self.count_tags_of_type(tag_type) > 0

    def count_tags_of_type(self, tag_type: str) -> int:
        wanted = fold(tag_type)
        return sum(1 for tag in self.tags if fold(tag.type) == wanted)

    def matches(self, tag_type: str, tag_value: str) -> bool:
        """Return True if any tag has this type and value."""
        return any(tag.matches(tag_type, tag_value) for tag in self.tags)

    def tag_signature(self) -> str:
        """Render the tag list as a string, used to sort photos by tags."""
        return "[" + ", ".join(str(tag) for tag in self.tags) + "]"

    def __str__(self) -> str:
        return (
            f"Photo: {self.path}, Date: {self.timestamp.isoformat()}, "
            f"Caption: {self.caption}, Tags: {self.tag_signature()}"
        )
