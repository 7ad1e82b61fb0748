"""Call record repository port."""

from typing import Protocol
from uuid import UUID

from sirtis.domain.entities import CallRecord
from sirtis.domain.value_objects import SequenceScope


class CallRecordRepository(Protocol):
    """Port for call record persistence."""

    async def get_by_id(self, call_id: UUID) -> CallRecord | None: ...

    async def get_for_update(self, call_id: UUID) -> CallRecord | None:
        """Read and row-lock a record until the unit of work ends."""
        ...

    async def list(
        self,
        *,
        cursor: str | None = None,
        limit: int = 20,
        cases_only: bool = False,
        status: str | None = None,
    ) -> tuple[list[CallRecord], str | None]: ...

    async def find_latest_identifier(self, scope: SequenceScope) -> str | None: ...

    async def create(self, record: CallRecord) -> CallRecord: ...

    async def update(self, record: CallRecord) -> None: ...
