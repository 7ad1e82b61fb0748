"""Domain value objects."""

from sirtis.domain.value_objects.authorization import AccessPolicy, AuthorizationSubject
from sirtis.domain.value_objects.call_fields import (
    CallStatus,
    CallType,
    CommunicationMode,
    Priority,
)
from sirtis.domain.value_objects.entity_kind import EntityKind
from sirtis.domain.value_objects.identifier import AllocatedIdentifier, SequenceScope

__all__ = [
    "AccessPolicy",
    "AllocatedIdentifier",
    "AuthorizationSubject",
    "CallStatus",
    "CallType",
    "CommunicationMode",
    "EntityKind",
    "Priority",
    "SequenceScope",
]
