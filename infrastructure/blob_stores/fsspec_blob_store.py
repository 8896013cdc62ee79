from __future__ import annotations

import fsspec
import structlog

from application.ports.blob_store import LocalBlobStore
from domain.exceptions import LocalDeletionError
from domain.value_objects.content_hash import content_path

logger = structlog.get_logger()


class FsspecLocalBlobStore(LocalBlobStore):
    def __init__(self, base_url: str, *, storage_options: dict | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.storage_options = storage_options or {}

    def _url(self, content_hash: str) -> str:
        return f"{self.base_url}/{content_path(content_hash)}"

    def exists(self, content_hash: str) -> bool:
        fs, path = fsspec.core.url_to_fs(self._url(content_hash), **self.storage_options)
        return fs.exists(path)

    def delete_local(self, content_hash: str) -> None:
        fs, path = fsspec.core.url_to_fs(self._url(content_hash), **self.storage_options)
        try:
            fs.rm(path)
        except FileNotFoundError:
            # A previous run removed it but could not record the new state
            logger.warning("local_file_already_absent", content_hash=content_hash, path=path)
        except OSError as e:
            msg = f"Failed to delete local copy of {content_hash}: {e!s}"
            raise LocalDeletionError(msg) from e
