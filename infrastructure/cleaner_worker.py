"""One-shot clean-up worker for the local storage tier.

Meant to be started periodically by an external scheduler (cron, systemd
timer, Kubernetes CronJob). Each run:
1. selects files DUPLICATED for longer than CONSISTENCY_DELAY,
2. re-checks each one against the remote tier,
3. deletes the local copy and records EXTERNAL in the ledger,
and stops picking up new files once MAX_TASK_RUNTIME has elapsed. Files not
reached are picked up again by the next run.
"""

from __future__ import annotations

import sys

import structlog
from returns.result import Success

from application.use_cases.cleaner_use_cases import CleanLocalFilesUseCase
from infrastructure.di.container import create_container
from infrastructure.logging import setup_logging

logger = structlog.get_logger()


def run() -> int:
    """Run one clean-up invocation and return the process exit code."""
    container = create_container()

    logger.info("cleaner_worker_started")
    try:
        use_case = container[CleanLocalFilesUseCase]
        result = use_case.execute()
    except Exception:
        logger.exception("cleaner_worker_error")
        return 1

    if isinstance(result, Success):
        report = result.unwrap()
        logger.info("cleaner_worker_stopped", **report.summary())
        return 0

    error = result.failure()
    logger.error("cleaner_worker_failed", category=error.category, error=error.message)
    return 1


def run_sync() -> None:
    """Run the worker and exit with its status code."""
    setup_logging()
    sys.exit(run())


if __name__ == "__main__":
    run_sync()
