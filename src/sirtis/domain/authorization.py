"""Role/permission resolution - pure decision over a subject and a policy."""

from collections.abc import Iterable

from sirtis.domain.exceptions import Forbidden, Unauthenticated
from sirtis.domain.value_objects import AccessPolicy, AuthorizationSubject

WILDCARD_PERMISSION = "*"


def normalize_role(role: str) -> str:
    """Canonical role form: trimmed, uppercase."""
    return role.strip().upper()


def normalize_roles(roles: Iterable[str]) -> frozenset[str]:
    return frozenset(normalize_role(r) for r in roles if r and r.strip())


def is_authorized(subject: AuthorizationSubject | None, policy: AccessPolicy) -> bool:
    """True if subject holds any policy permission or any policy role.

    Roles compare case-insensitively, permissions exactly. A missing subject
    is never authorized.
    """
    if subject is None:
        return False
    if WILDCARD_PERMISSION in subject.permissions:
        return True
    if subject.permissions.intersection(policy.any_of_permissions):
        return True
    return not normalize_roles(subject.roles).isdisjoint(
        normalize_roles(policy.any_of_roles)
    )


def ensure_authorized(
    subject: AuthorizationSubject | None, policy: AccessPolicy, operation: str = ""
) -> AuthorizationSubject:
    """Return subject if authorized, else raise Unauthenticated or Forbidden."""
    if subject is None:
        raise Unauthenticated("Authentication required")
    if not is_authorized(subject, policy):
        raise Forbidden(f"Insufficient permissions for {operation or 'operation'}")
    return subject
