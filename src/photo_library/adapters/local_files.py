"""Filesystem access for photo files."""

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from photo_library.services.albums import PhotoFileInspector


@dataclass
class LocalPhotoFiles(PhotoFileInspector):
    """Reads modification times from the local filesystem."""

    def modified_at(self, path: str) -> datetime:
        stat = Path(path).stat()
        return datetime.fromtimestamp(stat.st_mtime, tz=UTC)
