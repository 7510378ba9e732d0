"""Common test fixtures and configuration for pytest.

Unit tests use the mocked fixtures from ``tests.fixtures.common``; integration tests
run against an in-memory SQLite database built from the model metadata.
"""

import uuid
from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from vaultsync import crud, models, schemas
from vaultsync.api.context import ApiContext
from vaultsync.core.shared_models import ActorType
from vaultsync.models._base import Base
from vaultsync.models.secret_folder import ROOT_FOLDER_NAME

# Import all fixtures so they are automatically available for all tests
from tests.fixtures.common import (  # noqa
    ctx,
    make_folder,
    make_integration,
    mock_auth,
    mock_db,
    org_id,
    prod_env,
    project_id,
    staging_env,
)


@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite engine with every table."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Session configured like the production one: expiring on commit, no autoflush."""
    session_factory = async_sessionmaker(db_engine, autoflush=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db_session, org_id):
    """A project with prod and staging environments and folders.

    Layout: prod has ``/`` and ``/app``; staging has only ``/``. The user actor is an
    admin of the project and one github auth exists.
    """
    project = models.Project(name="Acme", slug="acme", organization_id=org_id)
    db_session.add(project)
    await db_session.flush()

    prod = models.ProjectEnvironment(
        project_id=project.id, name="Production", slug="prod", position=1
    )
    staging = models.ProjectEnvironment(
        project_id=project.id, name="Staging", slug="staging", position=2
    )
    db_session.add_all([prod, staging])
    await db_session.flush()

    prod_root = models.SecretFolder(name=ROOT_FOLDER_NAME, env_id=prod.id, parent_id=None)
    staging_root = models.SecretFolder(name=ROOT_FOLDER_NAME, env_id=staging.id, parent_id=None)
    db_session.add_all([prod_root, staging_root])
    await db_session.flush()

    app_folder = models.SecretFolder(name="app", env_id=prod.id, parent_id=prod_root.id)
    db_session.add(app_folder)

    actor_id = uuid.uuid4()
    db_session.add(
        models.ProjectMembership(
            project_id=project.id, actor_id=actor_id, actor_type="user", role="admin"
        )
    )

    await db_session.flush()

    # Read ids before the commit expires the rows
    seed = {
        "project_id": project.id,
        "prod_env_id": prod.id,
        "staging_env_id": staging.id,
        "prod_root_id": prod_root.id,
        "app_folder_id": app_folder.id,
        "actor_id": actor_id,
        "ctx": ApiContext.build(
            request_id=str(uuid.uuid4()),
            actor=ActorType.USER,
            actor_id=actor_id,
            actor_org_id=org_id,
            actor_auth_method="jwt",
        ),
    }
    await db_session.commit()

    auth = await crud.integration_auth.create(
        db_session,
        obj_in=schemas.IntegrationAuthCreate(
            project_id=seed["project_id"],
            integration="github",
            encrypted_access="ciphertext",
            auth_metadata={"installation": "42"},
        ),
    )
    seed["auth_id"] = auth.id
    return seed
