"""Permission checker implementation - policy table plus role grants."""

from dataclasses import replace

from sirtis.application.policies import Operation, policy_for
from sirtis.domain.authorization import ensure_authorized, is_authorized
from sirtis.domain.exceptions import Unauthenticated
from sirtis.domain.value_objects import AuthorizationSubject


class SirtisPermissionChecker:
    """Checks a subject against the operation's policy.

    Token permissions are tried first; if they do not suffice, permissions
    granted to the subject's roles (role_permission table) are added.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def effective_subject(self, subject: AuthorizationSubject) -> AuthorizationSubject:
        """Subject with role-granted permissions merged into explicit ones."""
        if not subject.roles:
            return subject
        async with self._uow_factory() as uow:
            granted = await uow.roles.get_permissions_for_roles(list(subject.roles))
        if not granted:
            return subject
        return replace(subject, permissions=subject.permissions | frozenset(granted))

    async def check(self, subject: AuthorizationSubject | None, operation: Operation) -> bool:
        """Check if subject may perform operation."""
        if subject is None:
            return False
        policy = policy_for(operation)
        if is_authorized(subject, policy):
            return True
        return is_authorized(await self.effective_subject(subject), policy)

    async def ensure(
        self, subject: AuthorizationSubject | None, operation: Operation
    ) -> AuthorizationSubject:
        """Return subject or raise Unauthenticated / Forbidden."""
        if subject is None:
            raise Unauthenticated("Authentication required")
        if await self.check(subject, operation):
            return subject
        return ensure_authorized(subject, policy_for(operation), str(operation))
