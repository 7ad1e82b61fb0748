"""List roles use case."""

from sirtis.application.policies import Operation
from sirtis.application.ports import PermissionChecker
from sirtis.domain.entities import Role
from sirtis.domain.value_objects import AuthorizationSubject


class ListRolesUseCase:
    """List roles with the permissions each grants."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, subject: AuthorizationSubject | None) -> list[Role]:
        await self._permission_checker.ensure(subject, Operation.ROLES_LIST)
        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()
        return sorted(roles, key=lambda r: r.name)
