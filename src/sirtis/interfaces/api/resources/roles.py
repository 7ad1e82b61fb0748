"""Role administration API resources."""

import falcon.asgi

from sirtis.application.use_cases.role.create_role import CreateRoleUseCase
from sirtis.application.use_cases.role.list_roles import ListRolesUseCase
from sirtis.domain.entities import Role
from sirtis.domain.exceptions import ValidationError
from sirtis.interfaces.api.context import read_json_object, require_subject


def serialize_role(role: Role) -> dict:
    return {
        "id": str(role.id),
        "name": role.name,
        "description": role.description,
        "permissions": list(role.permissions),
    }


class RolesResource:
    """GET/POST /v1/admin/roles - list and create roles."""

    def __init__(self, list_roles: ListRolesUseCase, create_role: CreateRoleUseCase) -> None:
        self._list_roles = list_roles
        self._create_role = create_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List roles with their permissions."""
        roles = await self._list_roles.execute(require_subject(req))
        resp.media = {"items": [serialize_role(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create role."""
        subject = require_subject(req)
        body = await read_json_object(req)
        try:
            name = body["name"]
        except KeyError as e:
            raise ValidationError(f"Missing required field: {e}") from None
        permissions = body.get("permissions") or []
        if not isinstance(permissions, list) or not all(isinstance(p, str) for p in permissions):
            raise ValidationError("permissions must be a list of strings")

        role = await self._create_role.execute(
            subject,
            name=str(name).strip(),
            description=str(body.get("description") or ""),
            permissions=permissions,
        )
        resp.media = serialize_role(role)
        resp.status = falcon.HTTP_201
