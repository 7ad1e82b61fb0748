"""Role entity for RBAC."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass
class Role:
    """Role - named bundle of permission strings, e.g. callcentre_officer."""

    id: UUID
    name: str
    description: str
    permissions: list[str] = field(default_factory=list)
