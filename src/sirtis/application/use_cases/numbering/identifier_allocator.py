"""Sequential identifier allocator - next case/call number per calendar year."""

import logging

from sirtis.application.ports import Clock, UnitOfWork
from sirtis.domain.exceptions import MalformedIdentifier
from sirtis.domain.value_objects import AllocatedIdentifier, EntityKind, SequenceScope

logger = logging.getLogger(__name__)


class IdentifierAllocator:
    """Allocates monotonically increasing identifiers within (kind, year).

    allocate_next must run inside the unit of work that inserts the record:
    it takes the scope lock first, and the lock is held until that
    transaction commits or rolls back.
    """

    def __init__(self, clock: Clock, strict_parsing: bool = False) -> None:
        self._clock = clock
        self._strict_parsing = strict_parsing

    def current_year(self) -> int:
        return self._clock.now().year

    def scope_for(self, entity_kind: EntityKind | str, year: int | None = None) -> SequenceScope:
        return SequenceScope(
            EntityKind(entity_kind),
            year if year is not None else self.current_year(),
        )

    async def allocate_next(
        self,
        uow: UnitOfWork,
        entity_kind: EntityKind | str,
        year: int | None = None,
    ) -> AllocatedIdentifier:
        """Lock the scope, read the latest identifier and return its successor."""
        scope = self.scope_for(entity_kind, year)
        await uow.sequence_locks.acquire(scope)
        identifier = await self._successor(uow, scope)
        logger.debug("Allocated %s %s", scope.entity_kind, identifier)
        return identifier

    async def peek_next(
        self,
        uow: UnitOfWork,
        entity_kind: EntityKind | str,
        year: int | None = None,
    ) -> AllocatedIdentifier:
        """Predict the next identifier without locking. Not a reservation."""
        return await self._successor(uow, self.scope_for(entity_kind, year))

    async def _successor(self, uow: UnitOfWork, scope: SequenceScope) -> AllocatedIdentifier:
        latest = await uow.calls.find_latest_identifier(scope)
        if latest is None:
            return AllocatedIdentifier.first(scope)

        try:
            previous = AllocatedIdentifier.parse(scope.entity_kind, latest)
            if previous.scope != scope:
                raise MalformedIdentifier(latest, f"outside scope {scope.lock_key}")
        except MalformedIdentifier as e:
            if self._strict_parsing:
                raise
            # Restarting at 1 can reissue a number already in use; the unique
            # index on the column rejects that insert.
            logger.warning(
                "Latest %s number unusable (%s); restarting %d sequence at 1",
                scope.entity_kind,
                e,
                scope.year,
            )
            return AllocatedIdentifier.first(scope)

        return previous.next()
