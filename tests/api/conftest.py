"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from sirtis.application.use_cases.call.create_call import CreateCallUseCase
from sirtis.application.use_cases.call.get_call import GetCallUseCase
from sirtis.application.use_cases.call.list_calls import ListCallsUseCase
from sirtis.application.use_cases.call.update_call import UpdateCallUseCase
from sirtis.application.use_cases.numbering.identifier_allocator import IdentifierAllocator
from sirtis.application.use_cases.numbering.preview_numbers import PreviewNextNumbersUseCase
from sirtis.application.use_cases.role.create_role import CreateRoleUseCase
from sirtis.application.use_cases.role.list_roles import ListRolesUseCase
from sirtis.domain.value_objects import AuthorizationSubject
from sirtis.infrastructure.permission.permission_checker import SirtisPermissionChecker
from sirtis.interfaces.api.app import Resources, create_app
from sirtis.interfaces.api.middleware.cors import CORSMiddleware
from sirtis.interfaces.api.resources.calls import CallResource, CallsResource, CasesResource
from sirtis.interfaces.api.resources.health import HealthResource
from sirtis.interfaces.api.resources.me import MePermissionsResource
from sirtis.interfaces.api.resources.numbering import NumberingPreviewResource
from sirtis.interfaces.api.resources.roles import RolesResource

from tests.conftest import seed_roles


class AuthBypassMiddleware:
    """Middleware that sets context.subject for testing; tests swap `subject`."""

    def __init__(self, subject: AuthorizationSubject | None) -> None:
        self.subject = subject

    async def process_request(self, req, resp):
        req.context.subject = self.subject


@pytest.fixture
def auth(admin_subject) -> AuthBypassMiddleware:
    return AuthBypassMiddleware(admin_subject)


@pytest.fixture
def app(store, uow_factory, clock, auth):
    """Falcon ASGI app wired like the composition root, over in-memory storage."""
    seed_roles(store)
    checker = SirtisPermissionChecker(unit_of_work_factory=uow_factory)
    allocator = IdentifierAllocator(clock)

    list_calls = ListCallsUseCase(uow_factory, checker)
    resources = Resources(
        calls=CallsResource(
            CreateCallUseCase(uow_factory, checker, allocator, clock),
            list_calls,
        ),
        call=CallResource(
            GetCallUseCase(uow_factory, checker),
            UpdateCallUseCase(uow_factory, checker, allocator, clock),
        ),
        cases=CasesResource(list_calls, clock),
        numbering=NumberingPreviewResource(
            PreviewNextNumbersUseCase(uow_factory, checker, allocator)
        ),
        me_permissions=MePermissionsResource(checker),
        roles=RolesResource(
            ListRolesUseCase(uow_factory, checker),
            CreateRoleUseCase(uow_factory, checker),
        ),
        health=HealthResource(),
    )
    return create_app(
        resources,
        middleware=[CORSMiddleware(["http://localhost:3000"]), auth],
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
