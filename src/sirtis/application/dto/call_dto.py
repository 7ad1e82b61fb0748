"""Call record DTOs."""

from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal

from sirtis.domain.value_objects import (
    CallStatus,
    CallType,
    CommunicationMode,
    Priority,
)


@dataclass
class CallCreateInput:
    """Input for logging a new call."""

    caller_name: str | None = None
    caller_phone: str | None = None
    caller_email: str | None = None
    caller_age: str | None = None
    caller_gender: str | None = None
    caller_province: str | None = None
    caller_address: str | None = None
    client_name: str | None = None
    client_age: str | None = None
    client_sex: str | None = None
    client_province: str | None = None
    communication_mode: CommunicationMode = CommunicationMode.PHONE
    call_type: CallType = CallType.INBOUND
    purpose: str | None = None
    validity: str | None = None
    description: str | None = None
    notes: str | None = None
    priority: Priority = Priority.MEDIUM
    assigned_officer: str | None = None
    follow_up_required: bool = False
    follow_up_date: date | None = None
    voucher_issued: bool = False
    voucher_value: Decimal | None = None
    is_case: bool = False


@dataclass
class CallUpdateInput:
    """Partial update of a call record. Only fields in `changes` are applied.

    Identifiers are not updatable; is_case=True promotes a call to a case.
    """

    changes: dict[str, object] = field(default_factory=dict)
    is_case: bool | None = None


UPDATABLE_FIELDS: frozenset[str] = frozenset(
    f.name for f in fields(CallCreateInput) if f.name != "is_case"
) | {"status", "resolution"}

ENUM_FIELDS: dict[str, type] = {
    "communication_mode": CommunicationMode,
    "call_type": CallType,
    "priority": Priority,
    "status": CallStatus,
}
