"""Update call use case."""

import logging
from uuid import UUID

from sirtis.application.dto.call_dto import UPDATABLE_FIELDS, CallUpdateInput
from sirtis.application.policies import Operation
from sirtis.application.ports import Clock, PermissionChecker
from sirtis.application.use_cases.numbering.identifier_allocator import IdentifierAllocator
from sirtis.domain.entities import CallRecord
from sirtis.domain.exceptions import NotFound, ValidationError
from sirtis.domain.value_objects import AuthorizationSubject, EntityKind

logger = logging.getLogger(__name__)


class UpdateCallUseCase:
    """Update mutable call fields; promote a call to a case on request."""

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
        self,
        subject: AuthorizationSubject | None,
        call_id: UUID,
        input_data: CallUpdateInput,
    ) -> CallRecord:
        """Apply changes. call_number and case_number are never rewritten."""
        actor = await self._permission_checker.ensure(subject, Operation.CALLS_UPDATE)

        unknown = set(input_data.changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields not updatable: {', '.join(sorted(unknown))}")

        async with self._uow_factory() as uow:
            # Row lock serializes concurrent updates and promotions of one call.
            record = await uow.calls.get_for_update(call_id)
            if not record:
                raise NotFound("CallRecord", str(call_id))

            if input_data.is_case is False and record.is_case:
                raise ValidationError(f"Case {record.case_number} cannot be reverted to a call")

            for name, value in input_data.changes.items():
                setattr(record, name, value)

            now = self._clock.now()
            if input_data.is_case and not record.is_case:
                # Case numbers follow the year of promotion.
                case_number = await self._allocator.allocate_next(
                    uow, EntityKind.CASE, now.year
                )
                record.case_number = case_number.value
                logger.info(
                    "Call %s promoted to case %s by %s",
                    record.call_number,
                    record.case_number,
                    actor.user_id,
                )

            record.updated_at = now
            await uow.calls.update(record)

        return record
