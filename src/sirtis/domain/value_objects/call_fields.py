"""Enumerated call record fields."""

from enum import StrEnum


class CallStatus(StrEnum):
    """Lifecycle of a call or case."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class Priority(StrEnum):
    """Follow-up priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class CommunicationMode(StrEnum):
    """Channel the caller used."""

    PHONE = "phone"
    WHATSAPP = "whatsapp"
    WALK_IN = "walk_in"
    TEXT = "text"


class CallType(StrEnum):
    """Direction of the call."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"
