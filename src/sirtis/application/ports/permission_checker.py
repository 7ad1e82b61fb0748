"""Permission checker port - RBAC authorization."""

from typing import Protocol

from sirtis.application.policies import Operation
from sirtis.domain.value_objects import AuthorizationSubject


class PermissionChecker(Protocol):
    """Port for checking a subject against an operation's policy."""

    async def check(self, subject: AuthorizationSubject | None, operation: Operation) -> bool: ...

    async def ensure(
        self, subject: AuthorizationSubject | None, operation: Operation
    ) -> AuthorizationSubject: ...

    async def effective_subject(self, subject: AuthorizationSubject) -> AuthorizationSubject: ...
