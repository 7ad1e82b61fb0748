"""Authorization subject and access policy."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthorizationSubject:
    """Authenticated user: free-text roles plus fine-grained permission grants."""

    user_id: str
    roles: tuple[str, ...] = ()
    permissions: frozenset[str] = frozenset()
    email: str | None = None
    username: str | None = None


@dataclass(frozen=True)
class AccessPolicy:
    """Disjunction: any listed role OR any listed permission suffices."""

    any_of_roles: tuple[str, ...] = ()
    any_of_permissions: tuple[str, ...] = ()
