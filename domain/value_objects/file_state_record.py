from datetime import datetime

from pydantic import BaseModel, Field

from domain.value_objects.file_state import FileState


class FileStateRecord(BaseModel):
    """Value object representing the ledger entry tracked for one content hash."""

    content_hash: str = Field(..., description="Content hash identifying the file")
    state: FileState = Field(..., description="Tier currently holding the authoritative copy")
    time_duplicated: datetime | None = Field(
        None,
        description="When the file was confirmed duplicated to the remote tier",
    )
    time_updated: datetime | None = Field(None, description="When the state was last written")
