"""PostgreSQL call record repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from sirtis.domain.entities import CallRecord
from sirtis.domain.value_objects import (
    CallStatus,
    CallType,
    CommunicationMode,
    EntityKind,
    Priority,
    SequenceScope,
)

_COLUMNS = (
    "id",
    "call_number",
    "case_number",
    "created_at",
    "updated_at",
    "caller_name",
    "caller_phone",
    "caller_email",
    "caller_age",
    "caller_gender",
    "caller_province",
    "caller_address",
    "client_name",
    "client_age",
    "client_sex",
    "client_province",
    "communication_mode",
    "call_type",
    "purpose",
    "validity",
    "description",
    "notes",
    "priority",
    "status",
    "assigned_officer",
    "follow_up_required",
    "follow_up_date",
    "resolution",
    "voucher_issued",
    "voucher_value",
    "created_by",
)
_SELECT = f"SELECT {', '.join(_COLUMNS)} FROM call_record"

# Identifiers are assigned once at insert.
_UPDATE_COLUMNS = tuple(
    c for c in _COLUMNS if c not in ("id", "call_number", "created_at", "created_by")
)

_ENUMS = {
    "communication_mode": CommunicationMode,
    "call_type": CallType,
    "priority": Priority,
    "status": CallStatus,
}


def _row_to_record(r: tuple) -> CallRecord:
    data = dict(zip(_COLUMNS, r, strict=True))
    for name, enum in _ENUMS.items():
        data[name] = enum(data[name])
    return CallRecord(**data)


def _record_values(record: CallRecord, columns: tuple[str, ...]) -> tuple:
    values = []
    for c in columns:
        v = getattr(record, c)
        values.append(str(v) if c in _ENUMS else v)
    return tuple(values)


class PostgresCallRecordRepository:
    """Call record repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, call_id: UUID) -> CallRecord | None:
        """Get call record by id."""
        cur = await self._conn.execute(f"{_SELECT} WHERE id = %s", (call_id,))
        r = await cur.fetchone()
        return _row_to_record(r) if r else None

    async def get_for_update(self, call_id: UUID) -> CallRecord | None:
        """Get call record by id, holding its row lock until commit or rollback."""
        cur = await self._conn.execute(f"{_SELECT} WHERE id = %s FOR UPDATE", (call_id,))
        r = await cur.fetchone()
        return _row_to_record(r) if r else None

    async def list(
        self,
        *,
        cursor: str | None = None,
        limit: int = 20,
        cases_only: bool = False,
        status: str | None = None,
    ) -> tuple[list[CallRecord], str | None]:
        """List call records with cursor pagination."""
        conditions = []
        _params: list[object] = []
        if cases_only:
            conditions.append("case_number IS NOT NULL")
        if status:
            conditions.append("status = %s")
            _params.append(status)
        if cursor:
            conditions.append("id > %s")
            _params.append(UUID(cursor))
        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""
        params = tuple(_params) + (limit + 1,)
        cur = await self._conn.execute(f"{_SELECT}{where} ORDER BY id LIMIT %s", params)
        rows = await cur.fetchall()
        records = [_row_to_record(r) for r in rows[:limit]]
        next_cursor = str(rows[limit - 1][0]) if len(rows) > limit else None
        return records, next_cursor

    async def find_latest_identifier(self, scope: SequenceScope) -> str | None:
        """Highest identifier in scope.

        Ordering by length first keeps legacy seven-digit call numbers from
        sorting above eight-digit ones.
        """
        column = "case_number" if scope.entity_kind == EntityKind.CASE else "call_number"
        cur = await self._conn.execute(
            f"SELECT {column} FROM call_record WHERE {column} LIKE %s "
            f"ORDER BY length({column}) DESC, {column} DESC LIMIT 1",
            (scope.like_pattern,),
        )
        r = await cur.fetchone()
        return r[0] if r else None

    async def create(self, record: CallRecord) -> CallRecord:
        """Create call record."""
        placeholders = ", ".join(["%s"] * len(_COLUMNS))
        await self._conn.execute(
            f"INSERT INTO call_record ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
            _record_values(record, _COLUMNS),
        )
        return record

    async def update(self, record: CallRecord) -> None:
        """Update call record. case_number may only go from NULL to a value."""
        assignments = ", ".join(
            f"{c} = COALESCE(case_number, %s)" if c == "case_number" else f"{c} = %s"
            for c in _UPDATE_COLUMNS
        )
        await self._conn.execute(
            f"UPDATE call_record SET {assignments} WHERE id = %s",
            _record_values(record, _UPDATE_COLUMNS) + (record.id,),
        )
