from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, Field


class SkippedFile(BaseModel):
    content_hash: str = Field(..., description="Content hash of the file left in place")
    category: str = Field(..., description="Fault category that stopped the clean-up")
    message: str = Field(..., description="Human readable fault description")


class CleanReport(BaseModel):
    """Outcome of one clean-up invocation."""

    delete_local: bool = Field(True, description="Whether local deletion was enabled")
    candidates: int = Field(0, description="Number of candidates handed to the cleaner")
    cleaned: list[str] = Field(default_factory=list, description="Files now marked EXTERNAL")
    skipped: list[SkippedFile] = Field(
        default_factory=list,
        description="Files left untouched because of a per-file fault",
    )
    remaining: list[str] = Field(
        default_factory=list,
        description="Files not reached before the deadline",
    )
    truncated: bool = Field(False, description="Whether the deadline stopped the run early")
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def processed(self) -> int:
        return len(self.cleaned) + len(self.skipped)

    def summary(self) -> dict[str, int | bool]:
        return {
            "candidates": self.candidates,
            "cleaned": len(self.cleaned),
            "skipped": len(self.skipped),
            "remaining": len(self.remaining),
            "truncated": self.truncated,
        }
