"""Auth middleware - resolves the request's authorization subject from a JWT."""

import asyncio

import falcon.asgi

from sirtis.domain.value_objects import AuthorizationSubject


class AuthMiddleware:
    """Middleware that validates the bearer token and sets req.context.subject.

    Missing or rejected tokens leave the subject as None; resources answer
    those requests with 401.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract subject from Authorization header."""
        req.context.subject = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return

        user = await asyncio.to_thread(self._keycloak.decode_token, auth[7:])
        if not user or not user.user_id:
            return
        roles = tuple(dict.fromkeys([*user.realm_roles, *user.client_roles]))
        req.context.subject = AuthorizationSubject(
            user_id=user.user_id,
            roles=roles,
            permissions=frozenset(user.permissions),
            email=user.email,
            username=user.username,
        )
