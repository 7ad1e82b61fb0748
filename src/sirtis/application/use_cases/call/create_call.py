"""Create call use case."""

import logging
from dataclasses import asdict
from uuid import uuid4

from sirtis.application.dto.call_dto import CallCreateInput
from sirtis.application.policies import Operation
from sirtis.application.ports import Clock, PermissionChecker
from sirtis.application.use_cases.numbering.identifier_allocator import IdentifierAllocator
from sirtis.domain.entities import CallRecord
from sirtis.domain.value_objects import AuthorizationSubject, CallStatus, EntityKind

logger = logging.getLogger(__name__)


class CreateCallUseCase:
    """Log a call, allocating its call number and, for cases, a case number."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        allocator: IdentifierAllocator,
        clock: Clock,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._allocator = allocator
        self._clock = clock

    async def execute(
        self, subject: AuthorizationSubject | None, input_data: CallCreateInput
    ) -> CallRecord:
        """Create the record. Numbers are allocated in the inserting transaction."""
        actor = await self._permission_checker.ensure(subject, Operation.CALLS_CREATE)

        fields = asdict(input_data)
        is_case = fields.pop("is_case")
        now = self._clock.now()
        year = now.year

        async with self._uow_factory() as uow:
            # Call scope is always locked before case scope.
            call_number = await self._allocator.allocate_next(uow, EntityKind.CALL, year)
            case_number = None
            if is_case:
                case_number = await self._allocator.allocate_next(uow, EntityKind.CASE, year)

            record = CallRecord(
                id=uuid4(),
                call_number=call_number.value,
                case_number=case_number.value if case_number else None,
                created_at=now,
                updated_at=now,
                status=CallStatus.OPEN,
                created_by=actor.user_id,
                **fields,
            )
            await uow.calls.create(record)

        logger.info(
            "Call %s created by %s%s",
            record.call_number,
            actor.user_id,
            f" as case {record.case_number}" if record.case_number else "",
        )
        return record
