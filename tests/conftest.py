"""Pytest fixtures for SIRTIS tests."""

from __future__ import annotations

import asyncio
import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from sirtis.domain.entities import CallRecord, Role
from sirtis.domain.exceptions import Conflict
from sirtis.domain.value_objects import AuthorizationSubject, EntityKind, SequenceScope


# --- Shared in-memory state ---


class FakeStore:
    """State shared by every FakeUnitOfWork of one test, standing in for the database."""

    def __init__(self) -> None:
        self.calls: dict[UUID, CallRecord] = {}
        self.roles: dict[UUID, Role] = {}
        self.scope_locks: dict[str, asyncio.Lock] = {}
        self.row_locks: dict[UUID, asyncio.Lock] = {}


# --- Fake repositories ---


class FakeCallRecordRepository:
    """In-memory call record repository with unique call/case numbers.

    Reads return copies, so changes reach the store only through create/update.
    """

    def __init__(self, store: FakeStore) -> None:
        self._store = store
        self._held: list[asyncio.Lock] = []

    async def get_by_id(self, call_id: UUID) -> CallRecord | None:
        record = copy.deepcopy(self._store.calls.get(call_id))
        # Round-trip: let concurrent units of work run between read and write.
        await asyncio.sleep(0)
        return record

    async def get_for_update(self, call_id: UUID) -> CallRecord | None:
        lock = self._store.row_locks.setdefault(call_id, asyncio.Lock())
        if lock not in self._held:
            await lock.acquire()
            self._held.append(lock)
        return await self.get_by_id(call_id)

    def release_all(self) -> None:
        while self._held:
            self._held.pop().release()

    async def list(
        self,
        *,
        cursor: str | None = None,
        limit: int = 20,
        cases_only: bool = False,
        status: str | None = None,
    ) -> tuple[list[CallRecord], str | None]:
        items = list(self._store.calls.values())
        if cases_only:
            items = [c for c in items if c.case_number is not None]
        if status:
            items = [c for c in items if c.status.value == status]
        items.sort(key=lambda c: c.id)
        if cursor:
            cursor_uuid = UUID(cursor)
            items = [c for c in items if c.id > cursor_uuid]
        page = items[: limit + 1]
        next_cursor = str(page[limit - 1].id) if len(page) > limit else None
        return (copy.deepcopy(page[:limit]), next_cursor)

    async def find_latest_identifier(self, scope: SequenceScope) -> str | None:
        # Yield so that unlocked concurrent allocations would interleave.
        await asyncio.sleep(0)
        column = "case_number" if scope.entity_kind == EntityKind.CASE else "call_number"
        values = [
            v
            for v in (getattr(c, column) for c in self._store.calls.values())
            if v is not None and scope.matches(v)
        ]
        if not values:
            return None
        return max(values, key=lambda v: (len(v), v))

    async def create(self, record: CallRecord) -> CallRecord:
        await asyncio.sleep(0)
        for other in self._store.calls.values():
            if other.call_number == record.call_number:
                raise Conflict(f"Key (call_number)=({record.call_number}) already exists.")
            if record.case_number and other.case_number == record.case_number:
                raise Conflict(f"Key (case_number)=({record.case_number}) already exists.")
        self._store.calls[record.id] = copy.deepcopy(record)
        return record

    async def update(self, record: CallRecord) -> None:
        await asyncio.sleep(0)
        stored = self._store.calls.get(record.id)
        updated = copy.deepcopy(record)
        # case_number = COALESCE(case_number, new value)
        if stored is not None and stored.case_number is not None:
            updated.case_number = stored.case_number
        self._store.calls[record.id] = updated

    def add(self, record: CallRecord) -> None:
        """Seed a record without uniqueness checks."""
        self._store.calls[record.id] = record


class FakeRoleRepository:
    """In-memory role repository. Names compare case-insensitively."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def get_by_id(self, role_id: UUID) -> Role | None:
        return self._store.roles.get(role_id)

    async def get_by_name(self, name: str) -> Role | None:
        for r in self._store.roles.values():
            if r.name.upper() == name.strip().upper():
                return r
        return None

    async def list_all(self) -> list[Role]:
        return list(self._store.roles.values())

    async def get_permissions_for_roles(self, names: list[str]) -> set[str]:
        wanted = {n.strip().upper() for n in names}
        return {
            p
            for r in self._store.roles.values()
            if r.name.upper() in wanted
            for p in r.permissions
        }

    async def create(self, role: Role) -> Role:
        self._store.roles[role.id] = role
        return role

    def add_role(self, role: Role) -> None:
        self._store.roles[role.id] = role


class FakeSequenceLock:
    """Per-scope asyncio.Lock held until the owning unit of work exits."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store
        self._held: list[asyncio.Lock] = []
        self.acquired: list[SequenceScope] = []

    async def acquire(self, scope: SequenceScope) -> None:
        lock = self._store.scope_locks.setdefault(scope.lock_key, asyncio.Lock())
        self.acquired.append(scope)
        if lock in self._held:
            return
        await lock.acquire()
        self._held.append(lock)

    def release_all(self) -> None:
        while self._held:
            self._held.pop().release()


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self, store: FakeStore | None = None) -> None:
        self.store = store or FakeStore()
        self.calls = FakeCallRecordRepository(self.store)
        self.roles = FakeRoleRepository(self.store)
        self.sequence_locks = FakeSequenceLock(self.store)
        self.committed = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        pass


def make_uow_factory(store: FakeStore):
    """Factory yielding a FakeUnitOfWork over store; row and scope locks release on exit."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        uow = FakeUnitOfWork(store)
        try:
            yield uow
            await uow.commit()
        finally:
            uow.calls.release_all()
            uow.sequence_locks.release_all()

    return factory


# --- Test doubles and builders ---


class FixedClock:
    """Clock returning a settable instant."""

    def __init__(self, current: datetime) -> None:
        self.current = current

    def now(self) -> datetime:
        return self.current


def make_call(call_number: str, case_number: str | None = None, **kwargs) -> CallRecord:
    """Call record with fixed timestamps; kwargs override any other field."""
    now = datetime(2025, 3, 14, 9, 30, tzinfo=UTC)
    return CallRecord(
        id=kwargs.pop("id", None) or uuid4(),
        call_number=call_number,
        case_number=case_number,
        created_at=now,
        updated_at=now,
        **kwargs,
    )


SEED_ROLES = [
    ("admin", "System administrator", ["*"]),
    ("callcentre_officer", "Call centre officer", ["callcentre.access", "calls.create"]),
    ("employee", "Employee", ["dashboard.view"]),
]


def seed_roles(store: FakeStore) -> None:
    for name, desc, perms in SEED_ROLES:
        role = Role(id=uuid4(), name=name, description=desc, permissions=list(perms))
        store.roles[role.id] = role


# --- Fixtures ---


@pytest.fixture
def store() -> FakeStore:
    """Fresh in-memory state for each test."""
    return FakeStore()


@pytest.fixture
def fake_uow(store: FakeStore) -> FakeUnitOfWork:
    """UnitOfWork over the test's store, for seeding and direct repository calls."""
    return FakeUnitOfWork(store)


@pytest.fixture
def uow_factory(store: FakeStore):
    """Factory returning async context manager with FakeUnitOfWork over `store`."""
    return make_uow_factory(store)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2025, 3, 14, 9, 30, tzinfo=UTC))


@pytest.fixture
def admin_subject() -> AuthorizationSubject:
    return AuthorizationSubject(user_id="admin-1", roles=("ADMIN",), username="admin")


@pytest.fixture
def officer_subject() -> AuthorizationSubject:
    return AuthorizationSubject(
        user_id="officer-1",
        roles=("callcentre_officer",),
        permissions=frozenset({"calls.create"}),
        username="officer",
    )


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - allows everything by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.check.return_value = True
    mock.ensure.side_effect = lambda subject, operation: subject
    mock.effective_subject.side_effect = lambda subject: subject
    return mock
