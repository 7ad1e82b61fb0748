"""PostgreSQL advisory lock serializing identifier allocation."""

from psycopg import AsyncConnection

from sirtis.domain.value_objects import SequenceScope


class PostgresSequenceLock:
    """Transaction-scoped advisory lock per (entity kind, year).

    pg_advisory_xact_lock blocks until concurrent holders commit or roll back,
    so the latest identifier read afterwards includes their inserts.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def acquire(self, scope: SequenceScope) -> None:
        """Block until the scope lock is held by this transaction."""
        await self._conn.execute(
            "SELECT pg_advisory_xact_lock(hashtextextended(%s, 0))",
            (f"sirtis.sequence:{scope.lock_key}",),
        )
