"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from sirtis.interfaces.api.errors import register_error_handlers
from sirtis.interfaces.api.resources.calls import CallResource, CallsResource, CasesResource
from sirtis.interfaces.api.resources.health import HealthResource
from sirtis.interfaces.api.resources.me import MePermissionsResource
from sirtis.interfaces.api.resources.numbering import NumberingPreviewResource
from sirtis.interfaces.api.resources.roles import RolesResource


@dataclass
class Resources:
    """All routable resources, built by the composition root."""

    calls: CallsResource
    call: CallResource
    cases: CasesResource
    numbering: NumberingPreviewResource
    me_permissions: MePermissionsResource
    roles: RolesResource
    health: HealthResource


def create_app(resources: Resources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    register_error_handlers(app)
    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")
    app.add_route("/v1/call-centre/calls", resources.calls)
    app.add_route("/v1/call-centre/calls/{call_id}", resources.call)
    app.add_route("/v1/call-centre/cases", resources.cases)
    app.add_route("/v1/call-centre/numbering/next", resources.numbering)
    app.add_route("/v1/me/permissions", resources.me_permissions)
    app.add_route("/v1/admin/roles", resources.roles)
    return app
