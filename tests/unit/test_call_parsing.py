"""Unit tests for call request body parsing and serialization."""

from datetime import date
from decimal import Decimal

import pytest

from sirtis.domain.exceptions import ValidationError
from sirtis.domain.value_objects import CallStatus, CallType, CommunicationMode, Priority
from sirtis.interfaces.api.resources.calls import (
    parse_call_create,
    parse_call_update,
    serialize_call,
)

from tests.conftest import make_call


class TestParseCallCreate:
    def test_defaults(self) -> None:
        data = parse_call_create({})
        assert data.communication_mode == CommunicationMode.PHONE
        assert data.call_type == CallType.INBOUND
        assert data.priority == Priority.MEDIUM
        assert data.is_case is False

    def test_coerces_form_values(self) -> None:
        data = parse_call_create(
            {
                "caller_name": "  Rudo  ",
                "communication_mode": "Walk-in",
                "priority": "URGENT",
                "follow_up_required": "YES",
                "voucher_issued": "no",
                "voucher_value": "12.50",
                "follow_up_date": "2025-04-01T00:00:00Z",
                "is_case": True,
            }
        )
        assert data.caller_name == "Rudo"
        assert data.communication_mode == CommunicationMode.WALK_IN
        assert data.priority == Priority.URGENT
        assert data.follow_up_required is True
        assert data.voucher_issued is False
        assert data.voucher_value == Decimal("12.50")
        assert data.follow_up_date == date(2025, 4, 1)
        assert data.is_case is True

    def test_walk_alias(self) -> None:
        assert parse_call_create({"communication_mode": "walk"}).communication_mode == (
            CommunicationMode.WALK_IN
        )

    def test_blank_strings_become_none(self) -> None:
        data = parse_call_create({"caller_phone": "   ", "voucher_value": ""})
        assert data.caller_phone is None
        assert data.voucher_value is None

    def test_unknown_keys_ignored(self) -> None:
        data = parse_call_create({"callerName": "x", "purpose": "Food aid"})
        assert data.purpose == "Food aid"

    @pytest.mark.parametrize("field", ["call_number", "case_number"])
    def test_identifier_fields_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError, match="assigned by the server"):
            parse_call_create({field: "00000001/2025"})

    def test_invalid_enum(self) -> None:
        with pytest.raises(ValidationError, match="must be one of"):
            parse_call_create({"call_type": "sideways"})

    def test_invalid_bool(self) -> None:
        with pytest.raises(ValidationError, match="follow_up_required"):
            parse_call_create({"follow_up_required": "maybe"})

    def test_invalid_decimal(self) -> None:
        with pytest.raises(ValidationError, match="voucher_value"):
            parse_call_create({"voucher_value": "ten"})


class TestParseCallUpdate:
    def test_changes_and_promotion(self) -> None:
        data = parse_call_update({"status": "in-progress", "is_case": "true"})
        assert data.changes == {"status": CallStatus.IN_PROGRESS}
        assert data.is_case is True

    def test_is_case_absent(self) -> None:
        assert parse_call_update({"notes": "n"}).is_case is None

    def test_unknown_fields_passed_through(self) -> None:
        assert parse_call_update({"colour": "red"}).changes == {"colour": "red"}

    def test_null_enum_rejected(self) -> None:
        with pytest.raises(ValidationError, match="status cannot be null"):
            parse_call_update({"status": None})


def test_serialize_call() -> None:
    record = make_call(
        "00000001/2025",
        "CASE-2025-00000001",
        voucher_value=Decimal("5.00"),
        follow_up_date=date(2025, 4, 1),
    )
    data = serialize_call(record)
    assert data["is_case"] is True
    assert data["case_number"] == "CASE-2025-00000001"
    assert data["voucher_value"] == "5.00"
    assert data["follow_up_date"] == "2025-04-01"
    assert data["status"] == "open"
    assert data["created_at"] == "2025-03-14T09:30:00+00:00"
