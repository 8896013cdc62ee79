"""Tests for domain value objects."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError as PydanticValidationError

from domain.exceptions import ValidationError
from domain.value_objects.cleaner_policy import CleanerContext, CleanerPolicy
from domain.value_objects.content_hash import content_path, validate_content_hash
from domain.value_objects.file_state import FileState
from domain.value_objects.file_state_record import FileStateRecord

SHA1_EMPTY = "da39a3ee5e6b4b0d3255bfef95601890afd80709"


class TestFileState:
    """Test FileState enum."""

    def test_file_state_values(self) -> None:
        assert FileState.LOCAL == "LOCAL"
        assert FileState.DUPLICATED == "DUPLICATED"
        assert FileState.EXTERNAL == "EXTERNAL"
        assert FileState.ERRORED == "ERRORED"

    def test_file_state_from_string(self) -> None:
        assert FileState("EXTERNAL") is FileState.EXTERNAL


class TestContentHash:
    def test_validate_normalises_case_and_whitespace(self) -> None:
        assert validate_content_hash(f"  {SHA1_EMPTY.upper()} ") == SHA1_EMPTY

    @pytest.mark.parametrize("value", ["", "abc", "xyz0", "da39a3ee5e6b4b0d3255bfef95601890afd8070"])
    def test_validate_rejects_invalid_hashes(self, value: str) -> None:
        with pytest.raises(ValidationError):
            validate_content_hash(value)

    def test_validate_rejects_non_string(self) -> None:
        with pytest.raises(ValidationError):
            validate_content_hash(1234)  # type: ignore[arg-type]

    def test_content_path_uses_two_level_fan_out(self) -> None:
        assert content_path(SHA1_EMPTY) == f"da/39/{SHA1_EMPTY}"


class TestFileStateRecord:
    def test_record_parses_state_string(self) -> None:
        record = FileStateRecord(content_hash=SHA1_EMPTY, state="DUPLICATED")
        assert record.state is FileState.DUPLICATED
        assert record.time_duplicated is None
        assert record.time_updated is None


class TestCleanerPolicy:
    def test_duplicated_threshold(self) -> None:
        policy = CleanerPolicy(consistency_delay=60, delete_local=True, max_task_runtime=10)
        now = datetime(2024, 1, 1, tzinfo=UTC)
        assert policy.duplicated_threshold(now) == now - timedelta(seconds=60)

    def test_zero_delay_threshold_is_now(self) -> None:
        policy = CleanerPolicy(consistency_delay=0, delete_local=True, max_task_runtime=10)
        now = datetime(2024, 1, 1, tzinfo=UTC)
        assert policy.duplicated_threshold(now) == now

    def test_negative_delay_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            CleanerPolicy(consistency_delay=-1, delete_local=True, max_task_runtime=10)

    def test_runtime_must_be_positive(self) -> None:
        with pytest.raises(PydanticValidationError):
            CleanerPolicy(consistency_delay=0, delete_local=True, max_task_runtime=0)


class TestCleanerContext:
    def test_start_computes_deadline(self) -> None:
        policy = CleanerPolicy(consistency_delay=0, delete_local=True, max_task_runtime=30)
        started_at = datetime(2024, 1, 1, tzinfo=UTC)

        context = CleanerContext.start(policy, started_at)

        assert context.deadline == started_at + timedelta(seconds=30)
        assert context.delete_local is True

    def test_expired_at_and_after_deadline(self) -> None:
        deadline = datetime(2024, 1, 1, tzinfo=UTC)
        context = CleanerContext(deadline=deadline, delete_local=True)

        assert not context.expired(deadline - timedelta(microseconds=1))
        assert context.expired(deadline)
        assert context.expired(deadline + timedelta(seconds=1))
