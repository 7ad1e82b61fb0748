"""Domain exception to HTTP response mapping."""

import logging

import falcon
import falcon.asgi

from sirtis.domain.exceptions import (
    Conflict,
    Forbidden,
    NotFound,
    SirtisError,
    StorageUnavailable,
    Unauthenticated,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS = (
    (Unauthenticated, falcon.HTTP_401, "Unauthorized"),
    (Forbidden, falcon.HTTP_403, "Permission denied"),
    (NotFound, falcon.HTTP_404, None),
    (ValidationError, falcon.HTTP_400, None),
    (Conflict, falcon.HTTP_409, None),
    (StorageUnavailable, falcon.HTTP_500, "Storage unavailable"),
)


async def handle_sirtis_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: SirtisError, params
) -> None:
    """Falcon error handler for SirtisError and subclasses."""
    for exc_type, status, message in _STATUS:
        if isinstance(ex, exc_type):
            break
    else:
        exc_type, status, message = SirtisError, falcon.HTTP_500, "Internal error"

    if status == falcon.HTTP_500:
        logger.error("%s %s failed: %r", req.method, req.path, ex, exc_info=ex)
    elif isinstance(ex, Forbidden):
        subject = getattr(req.context, "subject", None)
        logger.info(
            "Forbidden %s %s for %s",
            req.method,
            req.path,
            subject.user_id if subject else "-",
        )

    resp.status = status
    resp.media = {"error": message or str(ex)}


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params
) -> None:
    """Log any unhandled exception and answer 500."""
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(SirtisError, handle_sirtis_error)
