from __future__ import annotations

from typing import TYPE_CHECKING

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from application.ports.file_catalog import FileCatalog
from domain.exceptions import CatalogLookupError

if TYPE_CHECKING:
    from infrastructure.config import Settings


class MongoFileCatalog(FileCatalog):
    """Read-only view over the local file rows.

    Each row is ``{"content_hash": str, "filesize": int, ...}``. Several rows
    may point at the same content (one per logical file name).
    """

    def __init__(self, client: MongoClient, settings: Settings) -> None:
        self.client = client
        self.db = self.client[settings.mongo_db]
        self.files = self.db[settings.mongo_files_collection]

    def max_size_for(self, content_hash: str) -> int | None:
        # Looked up per file so the candidate query needs no large group-by
        pipeline = [
            {"$match": {"content_hash": content_hash}},
            {"$group": {"_id": "$content_hash", "max_size": {"$max": "$filesize"}}},
        ]
        try:
            rows = list(self.files.aggregate(pipeline))
        except PyMongoError as e:
            msg = f"Failed to look up size for {content_hash}: {e!s}"
            raise CatalogLookupError(msg) from e

        if not rows or rows[0].get("max_size") is None:
            return None
        return int(rows[0]["max_size"])
