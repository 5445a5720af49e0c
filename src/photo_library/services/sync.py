"""Cross-album reconciliation of photo captions and tags.

Each album keeps its own ``Photo`` objects, so edits made while viewing one
album are copied to the other albums of the same user at checkpoints
(leaving an album, logging out, quitting) rather than propagated live.
Photos are matched by path alone because copies of a file may carry
different timestamps.
"""

import logging

from photo_library.domain.albums import Album
from photo_library.domain.photos import Photo
from photo_library.domain.users import User

logger = logging.getLogger(__name__)


def _snapshot(photo: Photo) -> tuple[str, list[tuple[str, str]]]:
    # Exact text, so case-only edits are still copied.
    return photo.caption, [(tag.type, tag.value) for tag in photo.tags]


def reconcile_album(user: User, album: Album) -> int:
    """Copy captions and tags from ``album`` to matching photos elsewhere.

    Returns the number of photos that were changed.
    """
    updated = 0
    for source in album.photos:
        for other in user.albums:
            if other is album:
                continue
            for target in other.find_by_path(source.path):
                if target is source:
                    continue
                if _snapshot(target) == _snapshot(source):
                    continue
                target.caption = source.caption
                target.tags = list(source.tags)
                updated += 1
    if updated:
        logger.debug(
            "Reconciled %d photo(s) from album %s for %s",
            updated,
            album.name,
            user.username,
        )
    return updated
