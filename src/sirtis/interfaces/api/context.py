"""Request helpers shared by resources."""

import falcon.asgi

from sirtis.domain.exceptions import Unauthenticated, ValidationError
from sirtis.domain.value_objects import AuthorizationSubject


def require_subject(req: falcon.asgi.Request) -> AuthorizationSubject:
    """Subject set by AuthMiddleware, or raise Unauthenticated."""
    subject = getattr(req.context, "subject", None)
    if not subject:
        raise Unauthenticated("Authentication required")
    return subject


async def read_json_object(req: falcon.asgi.Request) -> dict:
    body = await req.get_media()
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body
