"""Common test fixtures."""

import uuid
from datetime import datetime
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from vaultsync import schemas
from vaultsync.api.context import ApiContext
from vaultsync.core.permission_service import ROLE_RULES, PermissionRule, ProjectPermission
from vaultsync.core.shared_models import ActorType, ProjectRole


def make_permission(project_id, role=ProjectRole.ADMIN, custom_rules=()):
    """Build a permission handle from a role plus extra rule dicts."""
    rules = [*ROLE_RULES[role], *(PermissionRule.from_dict(rule) for rule in custom_rules)]
    return ProjectPermission(project_id=project_id, rules=rules)


@pytest.fixture
def project_id():
    """Id of the project every fixture belongs to."""
    return uuid.uuid4()


@pytest.fixture
def org_id():
    """Organization of the test project."""
    return uuid.uuid4()


@pytest.fixture
def ctx(org_id):
    """Context of a user actor."""
    return ApiContext.build(
        request_id=str(uuid.uuid4()),
        actor=ActorType.USER,
        actor_id=uuid.uuid4(),
        actor_org_id=org_id,
        actor_auth_method="jwt",
    )


@pytest.fixture
def mock_db():
    """Mocked database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def prod_env():
    """The production environment descriptor."""
    return schemas.EnvironmentInfo(id=uuid.uuid4(), name="Production", slug="prod")


@pytest.fixture
def staging_env():
    """The staging environment descriptor."""
    return schemas.EnvironmentInfo(id=uuid.uuid4(), name="Staging", slug="staging")


@pytest.fixture
def mock_auth(project_id):
    """An integration auth for a github provider."""
    return schemas.IntegrationAuth(
        id=uuid.uuid4(),
        project_id=project_id,
        integration="github",
        team_id=None,
        url=None,
        namespace=None,
        account_id="acct-1",
        metadata={"installation": "42"},
        created_at=datetime(2024, 1, 1),
        modified_at=datetime(2024, 1, 1),
    )


@pytest.fixture
def make_folder(project_id):
    """Factory for resolved folders."""

    def _make(environment: schemas.EnvironmentInfo, name: str = "app") -> schemas.Folder:
        return schemas.Folder(
            id=uuid.uuid4(),
            name=name,
            env_id=environment.id,
            parent_id=uuid.uuid4(),
            project_id=project_id,
            environment=environment,
        )

    return _make


@pytest.fixture
def make_integration(project_id, prod_env, mock_auth):
    """Factory for integrations bound to prod:/app unless overridden."""

    def _make(**overrides) -> schemas.Integration:
        data = {
            "id": uuid.uuid4(),
            "env_id": prod_env.id,
            "integration_auth_id": mock_auth.id,
            "integration": "github",
            "is_active": True,
            "secret_path": "/app",
            "app": "acme/web",
            "owner": "acme",
            "metadata": {"a": 1, "b": 2},
            "created_at": datetime(2024, 1, 1),
            "modified_at": datetime(2024, 1, 1),
            "project_id": project_id,
            "environment": prod_env,
        }
        data.update(overrides)
        return schemas.Integration(**data)

    return _make
