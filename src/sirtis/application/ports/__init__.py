"""Application ports - interfaces for external adapters."""

from sirtis.application.ports.clock import Clock
from sirtis.application.ports.permission_checker import PermissionChecker
from sirtis.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "Clock",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
