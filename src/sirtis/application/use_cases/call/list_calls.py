"""List calls and cases use case."""

from sirtis.application.policies import Operation
from sirtis.application.ports import PermissionChecker
from sirtis.domain.entities import CallRecord
from sirtis.domain.value_objects import AuthorizationSubject, CallStatus


class ListCallsUseCase:
    """List call records with cursor pagination; optionally cases only."""

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
        *,
        cursor: str | None = None,
        limit: int = 20,
        cases_only: bool = False,
        status: CallStatus | None = None,
    ) -> tuple[list[CallRecord], str | None]:
        operation = Operation.CASES_LIST if cases_only else Operation.CALLS_LIST
        await self._permission_checker.ensure(subject, operation)
        async with self._uow_factory() as uow:
            return await uow.calls.list(
                cursor=cursor,
                limit=limit,
                cases_only=cases_only,
                status=status.value if status else None,
            )
