"""Get call use case."""

from uuid import UUID

from sirtis.application.policies import Operation
from sirtis.application.ports import PermissionChecker
from sirtis.domain.entities import CallRecord
from sirtis.domain.exceptions import NotFound
from sirtis.domain.value_objects import AuthorizationSubject


class GetCallUseCase:
    """Get call record by id."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, subject: AuthorizationSubject | None, call_id: UUID) -> CallRecord:
        await self._permission_checker.ensure(subject, Operation.CALLS_VIEW)
        async with self._uow_factory() as uow:
            record = await uow.calls.get_by_id(call_id)
        if not record:
            raise NotFound("CallRecord", str(call_id))
        return record
