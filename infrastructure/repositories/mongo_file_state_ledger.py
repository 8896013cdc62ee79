"""MongoDB-backed ledger of where each content-addressed file lives.

One document per content hash:

    {"content_hash": str, "state": str, "time_duplicated": datetime, "time_updated": datetime}
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog
from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError

from application.ports.repositories.file_state_ledger import FileStateLedger
from domain.exceptions import LedgerQueryError, LedgerWriteError
from domain.value_objects.file_state import FileState
from domain.value_objects.file_state_record import FileStateRecord

if TYPE_CHECKING:
    from pymongo.collection import Collection

    from infrastructure.config import Settings

logger = structlog.get_logger()


class MongoFileStateLedger(FileStateLedger):
    """Stores the per-file state transitions in a single collection.

    Records are upserted and never deleted, so the collection doubles as an
    audit trail of which tier holds each file. The collection and its indexes
    belong to the duplication process; constructing the ledger does no I/O.
    """

    def __init__(self, client: MongoClient, settings: Settings) -> None:
        self.client = client
        self.db = self.client[settings.mongo_db]
        self.file_state: Collection = self.db[settings.mongo_file_state_collection]

    def query_duplicated_before(self, threshold: datetime) -> list[str]:
        """Return DUPLICATED content hashes, oldest duplication first."""
        try:
            cursor = self.file_state.find(
                {
                    "state": FileState.DUPLICATED.value,
                    "time_duplicated": {"$lte": threshold},
                },
                projection={"_id": False, "content_hash": True},
            ).sort("time_duplicated", ASCENDING)
            return [doc["content_hash"] for doc in cursor]
        except PyMongoError as e:
            msg = f"Failed to query duplicated files before {threshold.isoformat()}: {e!s}"
            raise LedgerQueryError(msg) from e

    def write_state(self, content_hash: str, state: FileState) -> None:
        now = datetime.now(UTC)
        fields: dict[str, object] = {"state": state.value, "time_updated": now}
        if state is FileState.DUPLICATED:
            fields["time_duplicated"] = now

        try:
            self.file_state.update_one(
                {"content_hash": content_hash},
                {"$set": fields},
                upsert=True,
            )
        except PyMongoError as e:
            msg = f"Failed to write state {state.value} for {content_hash}: {e!s}"
            raise LedgerWriteError(msg) from e

        logger.debug("file_state_written", content_hash=content_hash, state=state.value)

    def get_record(self, content_hash: str) -> FileStateRecord | None:
        try:
            doc = self.file_state.find_one({"content_hash": content_hash}, projection={"_id": False})
        except PyMongoError as e:
            msg = f"Failed to read state for {content_hash}: {e!s}"
            raise LedgerQueryError(msg) from e
        if not doc:
            return None
        return FileStateRecord(**doc)
