"""Access policies per externally reachable operation.

Every endpoint resolves its policy here; nothing inlines its own role or
permission lists.
"""

from enum import StrEnum
from types import MappingProxyType

from sirtis.domain.value_objects import AccessPolicy


class Operation(StrEnum):
    """Guarded operations."""

    CALLS_LIST = "calls.list"
    CALLS_CREATE = "calls.create"
    CALLS_VIEW = "calls.view"
    CALLS_UPDATE = "calls.update"
    CASES_LIST = "cases.list"
    NUMBERING_PREVIEW = "numbering.preview"
    ROLES_LIST = "roles.list"
    ROLES_CREATE = "roles.create"


_ADMIN_ROLES = ("admin", "system_administrator", "super_admin")

POLICIES: MappingProxyType[Operation, AccessPolicy] = MappingProxyType({
    Operation.CALLS_LIST: AccessPolicy(
        any_of_roles=(*_ADMIN_ROLES, "manager", "callcentre_head", "callcentre_officer"),
        any_of_permissions=("callcentre.access", "calls.view", "calls.full_access"),
    ),
    Operation.CALLS_VIEW: AccessPolicy(
        any_of_roles=(*_ADMIN_ROLES, "manager", "callcentre_head", "callcentre_officer"),
        any_of_permissions=("callcentre.access", "calls.view", "calls.full_access"),
    ),
    Operation.CALLS_CREATE: AccessPolicy(
        any_of_roles=(*_ADMIN_ROLES, "manager"),
        any_of_permissions=(
            "calls.create",
            "calls.full_access",
            "callcentre.officer",
            "callcentre.data_entry",
        ),
    ),
    Operation.CALLS_UPDATE: AccessPolicy(
        any_of_roles=(
            *_ADMIN_ROLES,
            "manager",
            "advance_user_1",
            "call_center_officer",
            "call_center_agent",
            "data_capturer",
        ),
        any_of_permissions=(
            "calls.edit",
            "calls.full_access",
            "callcentre.officer",
            "data_capturer",
        ),
    ),
    Operation.CASES_LIST: AccessPolicy(
        any_of_roles=(*_ADMIN_ROLES, "manager", "callcentre_head"),
        any_of_permissions=("callcentre.cases", "callcentre.access", "calls.full_access"),
    ),
    Operation.NUMBERING_PREVIEW: AccessPolicy(
        any_of_roles=(*_ADMIN_ROLES, "callcentre_head"),
        any_of_permissions=(
            "callcentre.admin",
            "callcentre.management",
            "calls.full_access",
        ),
    ),
    Operation.ROLES_LIST: AccessPolicy(
        any_of_roles=_ADMIN_ROLES,
        any_of_permissions=("admin.roles", "admin.access", "system.permissions"),
    ),
    Operation.ROLES_CREATE: AccessPolicy(
        any_of_roles=_ADMIN_ROLES,
        any_of_permissions=("admin.roles", "system.permissions"),
    ),
})


def policy_for(operation: Operation) -> AccessPolicy:
    """Policy for operation. Unknown operation names raise ValueError."""
    return POLICIES[Operation(operation)]
