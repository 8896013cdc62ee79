from __future__ import annotations

import fsspec
import structlog

from application.ports.remote_tier import RemoteTier
from domain.exceptions import RemoteTransportError, RemoteVerificationError
from domain.value_objects.content_hash import content_path

logger = structlog.get_logger()


class FsspecRemoteTier(RemoteTier):
    """Remote object storage reached through fsspec (s3://, gs://, az://, ...).

    Files use the same ``aa/bb/<hash>`` layout as the local tier.
    """

    def __init__(self, base_url: str, *, storage_options: dict | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.storage_options = storage_options or {}

    def _url(self, content_hash: str) -> str:
        return f"{self.base_url}/{content_path(content_hash)}"

    def check_file(self, content_hash: str, size: int) -> None:
        url = self._url(content_hash)
        try:
            fs, path = fsspec.core.url_to_fs(url, **self.storage_options)
            info = fs.info(path)
        except FileNotFoundError as e:
            msg = f"{content_hash} not found at {url}"
            raise RemoteVerificationError(msg) from e
        except Exception as e:
            # Object store clients raise their own error types (botocore, aiohttp, ...)
            msg = f"Failed to reach remote tier for {content_hash}: {e!s}"
            raise RemoteTransportError(msg) from e

        if info.get("type", "file") != "file":
            msg = f"{url} is a {info.get('type')}, not a file"
            raise RemoteVerificationError(msg)

        remote_size = info.get("size")
        if isinstance(remote_size, bool) or remote_size is None:
            msg = f"Remote tier returned no size for {content_hash}"
            raise RemoteTransportError(msg)
        try:
            remote_size = int(remote_size)
        except (TypeError, ValueError) as e:
            msg = f"Remote tier returned a malformed size for {content_hash}: {remote_size!r}"
            raise RemoteTransportError(msg) from e

        if remote_size != size:
            msg = f"Size mismatch for {content_hash}: local {size}, remote {remote_size}"
            raise RemoteVerificationError(msg)

        logger.debug("remote_file_verified", content_hash=content_hash, size=size)
