"""Current subject's effective roles and permissions."""

import falcon.asgi

from sirtis.application.policies import POLICIES
from sirtis.application.ports import PermissionChecker
from sirtis.domain.authorization import is_authorized
from sirtis.interfaces.api.context import require_subject


class MePermissionsResource:
    """GET /v1/me/permissions - what the caller may do."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        subject = require_subject(req)
        effective = await self._permission_checker.effective_subject(subject)
        resp.media = {
            "user_id": subject.user_id,
            "username": subject.username,
            "roles": list(subject.roles),
            "permissions": sorted(effective.permissions),
            "operations": {
                op.value: is_authorized(effective, policy) for op, policy in POLICIES.items()
            },
        }
        resp.status = falcon.HTTP_200
