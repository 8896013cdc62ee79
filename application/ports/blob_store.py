from __future__ import annotations

from typing import Protocol


class LocalBlobStore(Protocol):
    """Local tier holding the working copy of every content-addressed file."""

    def exists(self, content_hash: str) -> bool: ...
    def delete_local(self, content_hash: str) -> None:
        """Remove the local copy of the file.

        Raises LocalDeletionError when the file system refuses the removal.
        A file that is already absent counts as removed.
        """
        ...
