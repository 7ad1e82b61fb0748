"""Repository ports."""

from sirtis.application.ports.repositories.call_record_repository import (
    CallRecordRepository,
)
from sirtis.application.ports.repositories.role_repository import RoleRepository
from sirtis.application.ports.repositories.sequence_lock import SequenceLock

__all__ = [
    "CallRecordRepository",
    "RoleRepository",
    "SequenceLock",
]
