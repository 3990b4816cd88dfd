"""Tests for operation outcomes and the error taxonomy."""

import pytest

from py_vfs.fs.result import FsError, Outcome, VfsError


class TestOutcome:
    """Verify success and failure outcomes."""

    def test_success_is_truthy(self) -> None:
        """A successful outcome is ok and truthy."""
        outcome: Outcome[str] = Outcome.success("data", path="/f")
        assert outcome.ok
        assert outcome
        assert outcome.value == "data"
        assert outcome.error is None

    def test_failure_is_falsy(self) -> None:
        """A failed outcome carries its error and no value."""
        outcome: Outcome[str] = Outcome.failure(FsError.NOT_FOUND, path="/f")
        assert not outcome.ok
        assert not outcome
        assert outcome.value is None
        assert outcome.error is FsError.NOT_FOUND

    def test_unwrap_success_returns_value(self) -> None:
        """unwrap() hands back the value."""
        assert Outcome.success(42).unwrap() == 42

    def test_unwrap_failure_raises(self) -> None:
        """unwrap() on a failure raises VfsError with the details."""
        outcome: Outcome[None] = Outcome.failure(FsError.ALREADY_EXISTS, path="/d")
        with pytest.raises(VfsError, match="already exists") as info:
            outcome.unwrap()
        assert info.value.error is FsError.ALREADY_EXISTS
        assert info.value.path == "/d"


class TestFsError:
    """Verify the error taxonomy."""

    def test_all_kinds_present(self) -> None:
        """Every failure class has a member."""
        assert {e.name for e in FsError} == {
            "NOT_FOUND",
            "WRONG_TYPE",
            "ALREADY_EXISTS",
            "ROOT_VIOLATION",
            "ALREADY_MOUNTED",
            "NOT_MOUNTED",
        }

    def test_values_are_readable(self) -> None:
        """Errors format as plain English."""
        assert str(FsError.NOT_MOUNTED) == "not mounted"
