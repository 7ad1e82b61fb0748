"""Call record entity - one logged call, optionally tracked as a case."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from uuid import UUID

from sirtis.domain.value_objects import (
    CallStatus,
    CallType,
    CommunicationMode,
    Priority,
)

# Cases without a follow-up date are due this many days after logging.
CASE_FOLLOW_UP_DAYS = 7

_SETTLED = (CallStatus.RESOLVED, CallStatus.CLOSED)


@dataclass
class CallRecord:
    """Call record. call_number and case_number never change once set."""

    id: UUID
    call_number: str
    created_at: datetime
    updated_at: datetime
    case_number: str | None = None
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
    status: CallStatus = CallStatus.OPEN
    assigned_officer: str | None = None
    follow_up_required: bool = False
    follow_up_date: date | None = None
    resolution: str | None = None
    voucher_issued: bool = False
    voucher_value: Decimal | None = None
    created_by: str | None = None

    @property
    def is_case(self) -> bool:
        return self.case_number is not None

    @property
    def due_date(self) -> date:
        """Follow-up date, else CASE_FOLLOW_UP_DAYS after the call was logged."""
        if self.follow_up_date:
            return self.follow_up_date
        return self.created_at.date() + timedelta(days=CASE_FOLLOW_UP_DAYS)

    def is_overdue(self, today: date) -> bool:
        """Past its due date and not yet resolved or closed."""
        return today > self.due_date and self.status not in _SETTLED
