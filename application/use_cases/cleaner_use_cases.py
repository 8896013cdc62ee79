"""Reclaim local storage for files already duplicated to the remote tier.

A clean-up invocation has two stages:

1. ``CandidateSelector`` reads the ledger for files that have been DUPLICATED
   for longer than the consistency delay.
2. ``TieredCleaner`` walks that snapshot until the deadline, and for each file
   verifies the remote copy, removes the local copy and records EXTERNAL.

Each step of a file only runs once the previous one succeeded, so the ledger
never claims EXTERNAL for a file whose local copy still exists or whose remote
copy was not verified.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from uuid import uuid4

import structlog
from returns.result import Failure, Result, Success

from application.dtos.cleaner_dtos import CleanReport, SkippedFile
from application.dtos.errors import AppError
from application.ports.blob_store import LocalBlobStore
from application.ports.file_catalog import FileCatalog
from application.ports.remote_tier import RemoteTier
from application.ports.repositories.file_state_ledger import FileStateLedger
from domain.exceptions import (
    CatalogLookupError,
    LedgerQueryError,
    LedgerWriteError,
    LocalDeletionError,
    RemoteTransportError,
    RemoteVerificationError,
    ValidationError,
)
from domain.value_objects.cleaner_policy import CleanerContext, CleanerPolicy
from domain.value_objects.file_state import FileState

logger = structlog.get_logger()

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class CandidateSelector:
    """Select files whose local copy is ready to be removed."""

    def __init__(
        self,
        ledger: FileStateLedger,
        policy: CleanerPolicy,
        clock: Clock = utc_now,
    ) -> None:
        self.ledger = ledger
        self.policy = policy
        self.clock = clock

    def select_candidates(self) -> list[str]:
        """Return content hashes DUPLICATED for at least the consistency delay.

        Returns an empty list without querying the ledger when local deletion
        is disabled. LedgerQueryError propagates to the caller.
        """
        if not self.policy.delete_local:
            logger.info("cleaner_candidates_skipped_delete_local_disabled")
            return []

        threshold = self.policy.duplicated_threshold(self.clock())
        content_hashes = self.ledger.query_duplicated_before(threshold)

        # Keep ledger order, drop repeated rows.
        candidates = list(dict.fromkeys(content_hashes))
        logger.info(
            "cleaner_candidates_selected",
            candidates=len(candidates),
            threshold=threshold.isoformat(),
        )
        return candidates


class TieredCleaner:
    """Remove local copies of verified remote files within a time budget."""

    def __init__(
        self,
        context: CleanerContext,
        ledger: FileStateLedger,
        catalog: FileCatalog,
        remote_tier: RemoteTier,
        local_store: LocalBlobStore,
        clock: Clock = utc_now,
    ) -> None:
        self.context = context
        self.ledger = ledger
        self.catalog = catalog
        self.remote_tier = remote_tier
        self.local_store = local_store
        self.clock = clock

    def execute(self, candidates: Iterable[str]) -> CleanReport:
        """Clean candidates in order until they run out or the deadline passes.

        Per-file faults are logged and recorded as skipped; they never stop
        the batch. Files not reached before the deadline are left untouched
        and reported as remaining.
        """
        candidates = list(candidates)
        report = CleanReport(
            delete_local=self.context.delete_local,
            candidates=len(candidates),
            started_at=self.clock(),
        )

        if not self.context.delete_local:
            logger.info("cleaner_skipped_delete_local_disabled", candidates=len(candidates))
            report.finished_at = self.clock()
            return report

        for index, content_hash in enumerate(candidates):
            if self.context.expired(self.clock()):
                report.remaining = candidates[index:]
                report.truncated = True
                logger.info(
                    "cleaner_deadline_reached",
                    deadline=self.context.deadline.isoformat(),
                    processed=index,
                    remaining=len(report.remaining),
                )
                break

            result = self.clean_file(content_hash)

            if isinstance(result, Success):
                report.cleaned.append(content_hash)
                logger.info("cleaner_file_cleaned", content_hash=content_hash)
            else:
                error = result.failure()
                report.skipped.append(
                    SkippedFile(
                        content_hash=content_hash,
                        category=error.category,
                        message=error.message,
                    ),
                )
                log = logger.error if error.category == "ledger_write" else logger.warning
                log(
                    "cleaner_file_skipped",
                    content_hash=content_hash,
                    category=error.category,
                    error=error.message,
                )

        report.finished_at = self.clock()
        return report

    def clean_file(self, content_hash: str) -> Result[str, AppError]:
        """Verify, delete and record one file.

        Returns Success with the content hash once the ledger says EXTERNAL,
        or Failure describing the first step that failed. Later steps never
        run after a failure.
        """
        try:
            size = self.catalog.max_size_for(content_hash)
            if size is None:
                return Failure(
                    AppError("verification", f"No local size recorded for {content_hash}"),
                )

            self.remote_tier.check_file(content_hash, size)
            self.local_store.delete_local(content_hash)
            self.ledger.write_state(content_hash, FileState.EXTERNAL)

            return Success(content_hash)
        except RemoteVerificationError as e:
            return Failure(AppError("verification", f"Remote verification failed: {e!s}"))
        except RemoteTransportError as e:
            return Failure(AppError("transport", f"Remote tier unavailable: {e!s}"))
        except CatalogLookupError as e:
            return Failure(AppError("catalog_lookup", f"Size lookup failed: {e!s}"))
        except LocalDeletionError as e:
            return Failure(AppError("local_deletion", f"Local deletion failed: {e!s}"))
        except LedgerWriteError as e:
            return Failure(AppError("ledger_write", f"Local copy removed, state not recorded: {e!s}"))
        except ValidationError as e:
            return Failure(AppError("validation", f"Validation error: {e!s}"))
        except Exception as e:
            logger.exception("cleaner_file_unexpected_error", content_hash=content_hash)
            return Failure(AppError("internal_error", f"Unexpected error: {e!s}"))


class CleanLocalFilesUseCase:
    """Run one clean-up invocation: select candidates, then clean them."""

    def __init__(
        self,
        ledger: FileStateLedger,
        catalog: FileCatalog,
        remote_tier: RemoteTier,
        local_store: LocalBlobStore,
        policy: CleanerPolicy,
        clock: Clock = utc_now,
    ) -> None:
        self.ledger = ledger
        self.catalog = catalog
        self.remote_tier = remote_tier
        self.local_store = local_store
        self.policy = policy
        self.clock = clock

    def execute(self) -> Result[CleanReport, AppError]:
        started_at = self.clock()
        context = CleanerContext.start(self.policy, started_at)

        with structlog.contextvars.bound_contextvars(run_id=str(uuid4())):
            logger.info(
                "cleaner_run_started",
                delete_local=context.delete_local,
                consistency_delay=self.policy.consistency_delay,
                deadline=context.deadline.isoformat(),
            )

            selector = CandidateSelector(self.ledger, self.policy, clock=self.clock)
            try:
                candidates = selector.select_candidates()
            except LedgerQueryError as e:
                logger.exception("cleaner_candidate_query_failed")
                return Failure(AppError("ledger_query", f"Failed to select candidates: {e!s}"))

            cleaner = TieredCleaner(
                context,
                self.ledger,
                self.catalog,
                self.remote_tier,
                self.local_store,
                clock=self.clock,
            )
            report = cleaner.execute(candidates)
            report.started_at = started_at

            logger.info("cleaner_run_finished", **report.summary())
            return Success(report)
