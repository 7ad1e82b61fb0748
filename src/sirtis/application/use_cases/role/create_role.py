"""Create role use case."""

import logging
import re
from uuid import uuid4

from sirtis.application.policies import Operation
from sirtis.application.ports import PermissionChecker
from sirtis.domain.entities import Role
from sirtis.domain.exceptions import Conflict, ValidationError
from sirtis.domain.value_objects import AuthorizationSubject

logger = logging.getLogger(__name__)

_ROLE_NAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]{1,49}")
_PERMISSION_RE = re.compile(r"\*|[a-z][a-z0-9_]*(\.[a-z0-9_]+)*")


class CreateRoleUseCase:
    """Create a role granting a set of permission strings."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self,
        subject: AuthorizationSubject | None,
        name: str,
        description: str = "",
        permissions: list[str] | None = None,
    ) -> Role:
        """Role names are stored lowercase and compared case-insensitively."""
        actor = await self._permission_checker.ensure(subject, Operation.ROLES_CREATE)

        if not _ROLE_NAME_RE.fullmatch(name or ""):
            raise ValidationError(f"Invalid role name: {name!r}")
        perms = sorted(set(permissions or []))
        bad = [p for p in perms if not _PERMISSION_RE.fullmatch(p)]
        if bad:
            raise ValidationError(f"Invalid permission strings: {', '.join(bad)}")

        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(name):
                raise Conflict(f"Role {name!r} already exists")
            role = Role(
                id=uuid4(),
                name=name.lower(),
                description=description,
                permissions=perms,
            )
            await uow.roles.create(role)

        logger.info("Role %s created by %s", role.name, actor.user_id)
        return role
