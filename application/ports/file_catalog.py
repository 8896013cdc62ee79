from __future__ import annotations

from typing import Protocol


class FileCatalog(Protocol):
    def max_size_for(self, content_hash: str) -> int | None:
        """Return the largest size recorded for any local file with this content hash.

        Several catalog rows may share one content hash; their sizes are
        aggregated with ``max``. Returns None when no row exists.
        """
        ...
