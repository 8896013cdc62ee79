from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from domain.value_objects.file_state import FileState
    from domain.value_objects.file_state_record import FileStateRecord


class FileStateLedger(ABC):
    """Port for the persisted per-file storage state."""

    @abstractmethod
    def query_duplicated_before(self, threshold: datetime) -> list[str]:
        """Return content hashes in state DUPLICATED with time_duplicated <= threshold.

        Raises LedgerQueryError when the ledger cannot be queried.
        """

    @abstractmethod
    def write_state(self, content_hash: str, state: FileState) -> None:
        """Record a state transition for a content hash.

        Raises LedgerWriteError when the write fails.
        """

    @abstractmethod
    def get_record(self, content_hash: str) -> FileStateRecord | None:
        """Return the ledger entry for a content hash, if any."""
