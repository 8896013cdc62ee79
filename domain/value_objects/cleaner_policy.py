from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from pydantic import BaseModel, Field


class CleanerPolicy(BaseModel):
    """Value object holding the configured rules for reclaiming local storage."""

    consistency_delay: int = Field(
        ...,
        ge=0,
        description="Seconds a file must stay duplicated before its local copy may be removed",
    )
    delete_local: bool = Field(..., description="Master switch for local deletion")
    max_task_runtime: int = Field(
        ...,
        gt=0,
        description="Seconds one clean-up invocation may run before it stops picking new files",
    )

    def duplicated_threshold(self, now: datetime) -> datetime:
        """Latest duplication time that makes a file eligible for cleaning."""
        return now - timedelta(seconds=self.consistency_delay)


@dataclass(frozen=True)
class CleanerContext:
    """Per-invocation execution context: a hard deadline and the deletion switch."""

    deadline: datetime
    delete_local: bool

    @classmethod
    def start(cls, policy: CleanerPolicy, started_at: datetime) -> CleanerContext:
        return cls(
            deadline=started_at + timedelta(seconds=policy.max_task_runtime),
            delete_local=policy.delete_local,
        )

    def expired(self, now: datetime) -> bool:
        return now >= self.deadline
