"""PostgreSQL Unit of Work implementation."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg import errors
from psycopg_pool import AsyncConnectionPool

from sirtis.domain.exceptions import Conflict, StorageUnavailable
from sirtis.infrastructure.persistence.postgres.call_record_repository import (
    PostgresCallRecordRepository,
)
from sirtis.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from sirtis.infrastructure.persistence.postgres.sequence_lock import (
    PostgresSequenceLock,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._calls = PostgresCallRecordRepository(self._conn)
        self._roles = PostgresRoleRepository(self._conn)
        self._sequence_locks = PostgresSequenceLock(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def calls(self) -> PostgresCallRecordRepository:
        return self._calls

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def sequence_locks(self) -> PostgresSequenceLock:
        return self._sequence_locks

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Database errors leave as domain exceptions: uniqueness violations as
    Conflict, connection and pool failures as StorageUnavailable.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            uow = PostgresUnitOfWork(pool)
            async with uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except errors.UniqueViolation as e:
            raise Conflict(e.diag.message_detail or str(e)) from e
        except (psycopg.OperationalError, psycopg.InterfaceError) as e:
            logger.error("Database unavailable: %s", e)
            raise StorageUnavailable("Database unavailable") from e

    return factory
