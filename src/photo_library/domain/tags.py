"""Tag values and the per-user tag type registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from photo_library.domain.matching import fold

if TYPE_CHECKING:
    from photo_library.domain.photos import Photo

UNBOUNDED: None = None
DEFAULT_TAG_TYPES: dict[str, int | None] = {"location": 1, "person": UNBOUNDED}


@dataclass(frozen=True, eq=False)
class Tag:
    """A typed piece of photo metadata, e.g. ``location: Paris``."""

    type: str
    value: str

    @property
    def key(self) -> tuple[str, str]:
        """Identity used for equality, folded for case-insensitive matching."""
        return fold(self.type), fold(self.value)

    def matches(self, tag_type: str, tag_value: str) -> bool:
        """Return True if this tag has the given type and value."""
        return self.key == (fold(tag_type), fold(tag_value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return f"{self.type}: {self.value}"


@dataclass
class TagTypeRegistry:
    """Maps tag type names to the number of values a photo may hold.

    Keys are stored folded so that ``Location`` and ``location`` name the same
    type. A multiplicity of ``UNBOUNDED`` allows any number of distinct values.
    """

    _types: dict[str, int | None] = field(
        default_factory=lambda: dict(DEFAULT_TAG_TYPES)
    )

    @classmethod
    def from_mapping(cls, mapping: dict[str, int | None]) -> TagTypeRegistry:
        registry = cls(_types={})
        for tag_type, multiplicity in mapping.items():
            registry.add_type(tag_type, multiplicity)
        return registry

    def is_valid_type(self, tag_type: str) -> bool:
        """Return True if the tag type is registered."""
        return fold(tag_type) in self._types

    def add_type(self, tag_type: str, multiplicity: int | None) -> None:
        """Register a tag type or overwrite its multiplicity."""
        key = fold(tag_type)
        if not key:
            raise ValueError("Tag type cannot be empty")
        if multiplicity is not None and multiplicity < 1:
            raise ValueError(f"Multiplicity must be at least 1, got {multiplicity}")
        self._types[key] = multiplicity

    def multiplicity(self, tag_type: str) -> int | None:
        """Return the cap for a registered type.

        Raises ``KeyError`` for unknown types, since ``None`` means unbounded.
        """
        return self._types[fold(tag_type)]

    def is_single_valued(self, tag_type: str) -> bool:
        return self.multiplicity(tag_type) == 1

    def can_add(self, photo: Photo, tag_type: str) -> bool:
        """Return True if the photo has room for another value of this type."""
        cap = self.multiplicity(tag_type)
        if cap is UNBOUNDED:
            return True
        return photo.count_tags_of_type(tag_type) < cap

    def types(self) -> list[str]:
        return sorted(self._types)

    def as_dict(self) -> dict[str, int | None]:
        return dict(self._types)

    def __len__(self) -> int:
        return len(self._types)
