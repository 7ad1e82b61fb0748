"""PostgreSQL role repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from sirtis.domain.authorization import normalize_roles
from sirtis.domain.entities import Role

_SELECT_ROLES = (
    "SELECT r.id, r.name, r.description, "
    "COALESCE(array_agg(rp.permission ORDER BY rp.permission) "
    "FILTER (WHERE rp.permission IS NOT NULL), '{}') "
    "FROM role r LEFT JOIN role_permission rp ON rp.role_id = r.id"
)


def _row_to_role(r: tuple) -> Role:
    return Role(id=r[0], name=r[1], description=r[2] or "", permissions=list(r[3]))


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: UUID) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            f"{_SELECT_ROLES} WHERE r.id = %s GROUP BY r.id",
            (role_id,),
        )
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by name, case-insensitive."""
        cur = await self._conn.execute(
            f"{_SELECT_ROLES} WHERE upper(r.name) = upper(%s) GROUP BY r.id",
            (name,),
        )
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def list_all(self) -> list[Role]:
        """List all roles."""
        cur = await self._conn.execute(f"{_SELECT_ROLES} GROUP BY r.id ORDER BY r.name")
        rows = await cur.fetchall()
        return [_row_to_role(r) for r in rows]

    async def get_permissions_for_roles(self, names: list[str]) -> set[str]:
        """Union of permissions granted by the named roles."""
        normalized = sorted(normalize_roles(names))
        if not normalized:
            return set()
        cur = await self._conn.execute(
            "SELECT DISTINCT rp.permission FROM role_permission rp "
            "JOIN role r ON r.id = rp.role_id WHERE upper(r.name) = ANY(%s)",
            (normalized,),
        )
        rows = await cur.fetchall()
        return {r[0] for r in rows}

    async def create(self, role: Role) -> Role:
        """Create role with its permission grants."""
        await self._conn.execute(
            "INSERT INTO role (id, name, description) VALUES (%s, %s, %s)",
            (role.id, role.name, role.description),
        )
        if role.permissions:
            async with self._conn.cursor() as cur:
                await cur.executemany(
                    "INSERT INTO role_permission (role_id, permission) VALUES (%s, %s)",
                    [(role.id, p) for p in role.permissions],
                )
        return role
