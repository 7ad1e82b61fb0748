"""Application entry point and composition root."""

import argparse
import logging

from sirtis import __version__
from sirtis.application.use_cases.call.create_call import CreateCallUseCase
from sirtis.application.use_cases.call.get_call import GetCallUseCase
from sirtis.application.use_cases.call.list_calls import ListCallsUseCase
from sirtis.application.use_cases.call.update_call import UpdateCallUseCase
from sirtis.application.use_cases.numbering.identifier_allocator import IdentifierAllocator
from sirtis.application.use_cases.numbering.preview_numbers import PreviewNextNumbersUseCase
from sirtis.application.use_cases.role.create_role import CreateRoleUseCase
from sirtis.application.use_cases.role.list_roles import ListRolesUseCase
from sirtis.config import Settings, get_settings
from sirtis.infrastructure.auth.keycloak_provider import KeycloakProvider
from sirtis.infrastructure.clock.system_clock import SystemClock
from sirtis.infrastructure.permission.permission_checker import SirtisPermissionChecker
from sirtis.infrastructure.persistence.postgres.connection import create_pool
from sirtis.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from sirtis.interfaces.api.app import Resources, create_app
from sirtis.interfaces.api.middleware.auth import AuthMiddleware
from sirtis.interfaces.api.middleware.cors import CORSMiddleware
from sirtis.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from sirtis.interfaces.api.resources.calls import CallResource, CallsResource, CasesResource
from sirtis.interfaces.api.resources.health import HealthResource
from sirtis.interfaces.api.resources.me import MePermissionsResource
from sirtis.interfaces.api.resources.numbering import NumberingPreviewResource
from sirtis.interfaces.api.resources.roles import RolesResource

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: `sirtis serve` runs the API, `sirtis version` prints the version."""
    parser = argparse.ArgumentParser(prog="sirtis")
    parser.add_argument("command", nargs="?", choices=["serve", "version"], default="version")
    args = parser.parse_args(argv)
    if args.command == "serve":
        run_server()
    else:
        print(f"SIRTIS v{__version__}")


def create_sirtis_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings)

    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
        timeout=settings.database_pool_timeout,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("KEYCLOAK_CLIENT_SECRET not set; all requests are unauthenticated")

    clock = SystemClock(settings.timezone)
    permission_checker = SirtisPermissionChecker(uow_factory)
    allocator = IdentifierAllocator(
        clock, strict_parsing=settings.strict_identifier_parsing
    )

    create_call = CreateCallUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        allocator=allocator,
        clock=clock,
    )
    update_call = UpdateCallUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        allocator=allocator,
        clock=clock,
    )
    get_call = GetCallUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )
    list_calls = ListCallsUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )
    preview_numbers = PreviewNextNumbersUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        allocator=allocator,
    )
    list_roles = ListRolesUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )
    create_role = CreateRoleUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )

    resources = Resources(
        calls=CallsResource(create_call, list_calls),
        call=CallResource(get_call, update_call),
        cases=CasesResource(list_calls, clock),
        numbering=NumberingPreviewResource(preview_numbers),
        me_permissions=MePermissionsResource(permission_checker),
        roles=RolesResource(list_roles, create_role),
        health=HealthResource(pool),
    )

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    app = create_app(
        resources,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
    )
    logger.info("SIRTIS v%s configured (%s)", __version__, settings.environment)
    return app


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    app = create_sirtis_app()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
