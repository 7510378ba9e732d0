"""Unit tests for the integration sync activity."""

import uuid
from unittest.mock import AsyncMock

import pytest

from vaultsync.core.integration_sync_service import integration_sync_service
from vaultsync.platform.temporal.activities import sync_integrations_activity

pytestmark = pytest.mark.unit


@pytest.mark.asyncio
async def test_activity_runs_sync_pass_with_parsed_ids(monkeypatch):
    project_id = uuid.uuid4()
    integration_ids = [uuid.uuid4(), uuid.uuid4()]
    run_sync_pass = AsyncMock(return_value=integration_ids)
    monkeypatch.setattr(integration_sync_service, "run_sync_pass", run_sync_pass)

    result = await sync_integrations_activity(str(project_id), "prod", "/app")

    assert result == [str(integration_id) for integration_id in integration_ids]
    run_sync_pass.assert_awaited_once_with(
        project_id=project_id, environment="prod", secret_path="/app"
    )
