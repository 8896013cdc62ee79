"""Shared test fixtures and configuration."""

from __future__ import annotations

from datetime import timedelta

import pytest

from domain.value_objects.cleaner_policy import CleanerPolicy
from domain.value_objects.file_state import FileState
from tests.mocks import (
    CONSISTENCY_DELAY,
    FakeClock,
    MockFileCatalog,
    MockFileStateLedger,
    MockLocalBlobStore,
    MockRemoteTier,
)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def policy() -> CleanerPolicy:
    """Return a policy with deletion enabled and a one hour delay."""
    return CleanerPolicy(
        consistency_delay=CONSISTENCY_DELAY,
        delete_local=True,
        max_task_runtime=600,
    )


@pytest.fixture
def disabled_policy() -> CleanerPolicy:
    return CleanerPolicy(
        consistency_delay=CONSISTENCY_DELAY,
        delete_local=False,
        max_task_runtime=600,
    )


@pytest.fixture
def journal() -> list[tuple[str, str]]:
    """Ordered record of every port call, shared by the mocks."""
    return []


@pytest.fixture
def ledger(journal: list[tuple[str, str]]) -> MockFileStateLedger:
    return MockFileStateLedger(journal)


@pytest.fixture
def catalog(journal: list[tuple[str, str]]) -> MockFileCatalog:
    return MockFileCatalog(journal)


@pytest.fixture
def remote_tier(journal: list[tuple[str, str]]) -> MockRemoteTier:
    return MockRemoteTier(journal)


@pytest.fixture
def local_store(journal: list[tuple[str, str]]) -> MockLocalBlobStore:
    return MockLocalBlobStore(journal)


@pytest.fixture
def seed_file(
    clock: FakeClock,
    ledger: MockFileStateLedger,
    catalog: MockFileCatalog,
    remote_tier: MockRemoteTier,
    local_store: MockLocalBlobStore,
):
    """Register a file that is duplicated, old enough and consistent on both tiers."""

    def _seed(
        content_hash: str,
        size: int = 1024,
        *,
        age: int = CONSISTENCY_DELAY + 1,
        remote_size: int | None = None,
    ) -> str:
        ledger.add(content_hash, FileState.DUPLICATED, clock.now - timedelta(seconds=age))
        catalog.add(content_hash, size)
        remote_tier.files[content_hash] = size if remote_size is None else remote_size
        local_store.files.add(content_hash)
        return content_hash

    return _seed
