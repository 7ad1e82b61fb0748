"""Domain entities."""

from sirtis.domain.entities.call_record import CallRecord
from sirtis.domain.entities.role import Role

__all__ = [
    "CallRecord",
    "Role",
]
