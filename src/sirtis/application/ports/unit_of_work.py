"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from sirtis.application.ports.repositories.call_record_repository import (
    CallRecordRepository,
)
from sirtis.application.ports.repositories.role_repository import RoleRepository
from sirtis.application.ports.repositories.sequence_lock import SequenceLock


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def calls(self) -> CallRecordRepository: ...

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def sequence_locks(self) -> SequenceLock: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
