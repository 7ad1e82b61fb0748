"""Unit tests for CallRecord case due dates."""

from datetime import date

from sirtis.domain.value_objects import CallStatus

from tests.conftest import make_call


def test_due_date_defaults_to_a_week_after_logging() -> None:
    record = make_call("00000001/2025", "CASE-2025-00000001")
    assert record.due_date == date(2025, 3, 21)


def test_due_date_prefers_follow_up_date() -> None:
    record = make_call("00000001/2025", follow_up_date=date(2025, 3, 16))
    assert record.due_date == date(2025, 3, 16)


def test_overdue_after_due_date() -> None:
    record = make_call("00000001/2025", follow_up_date=date(2025, 3, 16))
    assert not record.is_overdue(date(2025, 3, 16))
    assert record.is_overdue(date(2025, 3, 17))


def test_settled_cases_are_never_overdue() -> None:
    for status in (CallStatus.RESOLVED, CallStatus.CLOSED):
        record = make_call("00000001/2025", follow_up_date=date(2025, 1, 1), status=status)
        assert not record.is_overdue(date(2025, 3, 17))
