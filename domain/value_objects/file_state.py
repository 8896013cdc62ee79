from enum import Enum


class FileState(str, Enum):
    """Enumerate where the authoritative copy of a file lives."""

    LOCAL = "LOCAL"
    DUPLICATED = "DUPLICATED"
    EXTERNAL = "EXTERNAL"
    ERRORED = "ERRORED"
