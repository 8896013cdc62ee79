from __future__ import annotations

from typing import Protocol


class RemoteTier(Protocol):
    """Durable object-storage tier that holds duplicated files."""

    def check_file(self, content_hash: str, size: int) -> None:
        """Confirm the file exists remotely with exactly ``size`` bytes.

        Raises:
            RemoteTransportError: the remote tier is unreachable or answered
                with a malformed response.
            RemoteVerificationError: the file is missing or its size differs.

        """
        ...
