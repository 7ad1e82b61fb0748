"""Preview next case and call numbers use case."""

from dataclasses import dataclass

from sirtis.application.policies import Operation
from sirtis.application.ports import PermissionChecker
from sirtis.application.use_cases.numbering.identifier_allocator import IdentifierAllocator
from sirtis.domain.value_objects import AuthorizationSubject, EntityKind


@dataclass
class NumberingPreview:
    """Next numbers as they would be issued now. Not reserved."""

    year: int
    next_case_number: str
    next_call_number: str


class PreviewNextNumbersUseCase:
    """Predict the next case and call numbers for a year."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        allocator: IdentifierAllocator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._allocator = allocator

    async def execute(
        self, subject: AuthorizationSubject | None, year: int | None = None
    ) -> NumberingPreview:
        await self._permission_checker.ensure(subject, Operation.NUMBERING_PREVIEW)
        year = year if year is not None else self._allocator.current_year()
        async with self._uow_factory() as uow:
            case_number = await self._allocator.peek_next(uow, EntityKind.CASE, year)
            call_number = await self._allocator.peek_next(uow, EntityKind.CALL, year)
        return NumberingPreview(
            year=year,
            next_case_number=case_number.value,
            next_call_number=call_number.value,
        )
