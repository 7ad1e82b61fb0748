"""Sequence lock port - serializes identifier allocation per scope."""

from typing import Protocol

from sirtis.domain.value_objects import SequenceScope


class SequenceLock(Protocol):
    """Port for a transaction-scoped lock on one (entity kind, year) scope.

    The lock is held until the enclosing unit of work commits or rolls back.
    """

    async def acquire(self, scope: SequenceScope) -> None: ...
