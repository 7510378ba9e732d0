"""Unit tests for the integration sync trigger."""

import hashlib
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from temporalio.common import WorkflowIDReusePolicy

from vaultsync.core import temporal_service as temporal_service_module
from vaultsync.core.config import settings
from vaultsync.core.temporal_service import sync_workflow_id, temporal_service
from vaultsync.platform.temporal.workflows import REQUEST_PASS_SIGNAL, SyncIntegrationsWorkflow

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_client(monkeypatch):
    """Temporal client returned by the process-wide client holder."""
    client = MagicMock()
    client.start_workflow = AsyncMock(return_value=MagicMock(id="handle"))
    monkeypatch.setattr(
        temporal_service_module.temporal_client, "get_client", AsyncMock(return_value=client)
    )
    return client


@pytest.fixture
def mock_sync_pass(monkeypatch):
    """Inline sync pass."""
    run_sync_pass = AsyncMock(return_value=[])
    monkeypatch.setattr(
        temporal_service_module.integration_sync_service, "run_sync_pass", run_sync_pass
    )
    return run_sync_pass


def test_workflow_id_is_deterministic_per_scope():
    project_id = uuid.uuid4()
    digest = hashlib.sha1(b"/app").hexdigest()[:12]

    assert sync_workflow_id(project_id, "prod", "/app") == (
        f"integration-sync-{project_id}-prod-{digest}"
    )
    assert sync_workflow_id(project_id, "prod", "app/") == sync_workflow_id(
        project_id, "prod", "/app"
    )
    assert sync_workflow_id(project_id, "prod", "/app") != sync_workflow_id(
        project_id, "staging", "/app"
    )


@pytest.mark.asyncio
class TestSyncIntegrations:
    async def test_runs_inline_when_temporal_disabled(
        self, monkeypatch, mock_client, mock_sync_pass
    ):
        monkeypatch.setattr(settings, "TEMPORAL_ENABLED", False)
        project_id = uuid.uuid4()

        handle = await temporal_service.sync_integrations(
            environment="prod", secret_path="/app", project_id=project_id
        )

        assert handle is None
        mock_sync_pass.assert_awaited_once_with(
            project_id=project_id, environment="prod", secret_path="/app"
        )
        mock_client.start_workflow.assert_not_called()

    async def test_starts_workflow_for_scope(self, monkeypatch, mock_client, mock_sync_pass):
        monkeypatch.setattr(settings, "TEMPORAL_ENABLED", True)
        project_id = uuid.uuid4()

        handle = await temporal_service.sync_integrations(
            environment="prod", secret_path="app//", project_id=project_id
        )

        assert handle is mock_client.start_workflow.return_value
        mock_sync_pass.assert_not_called()

        call = mock_client.start_workflow.call_args
        assert call.args == (SyncIntegrationsWorkflow.run,)
        assert call.kwargs["args"] == [
            str(project_id),
            "prod",
            "/app",
            settings.INTEGRATION_SYNC_TIMEOUT_SECONDS,
            settings.INTEGRATION_SYNC_MAX_ATTEMPTS,
        ]
        assert call.kwargs["id"] == sync_workflow_id(project_id, "prod", "/app")
        assert call.kwargs["task_queue"] == settings.TEMPORAL_TASK_QUEUE
        assert call.kwargs["id_reuse_policy"] == WorkflowIDReusePolicy.ALLOW_DUPLICATE
        assert call.kwargs["start_signal"] == REQUEST_PASS_SIGNAL

    async def test_every_trigger_signals_the_scope_workflow(
        self, monkeypatch, mock_client, mock_sync_pass
    ):
        monkeypatch.setattr(settings, "TEMPORAL_ENABLED", True)
        project_id = uuid.uuid4()

        for _ in range(2):
            await temporal_service.sync_integrations(
                environment="prod", secret_path="/app", project_id=project_id
            )

        assert mock_client.start_workflow.await_count == 2
        for call in mock_client.start_workflow.call_args_list:
            assert call.kwargs["id"] == sync_workflow_id(project_id, "prod", "/app")
            assert call.kwargs["start_signal"] == REQUEST_PASS_SIGNAL
        mock_sync_pass.assert_not_called()

    async def test_inline_failure_is_logged_not_raised(self, monkeypatch, mock_sync_pass):
        monkeypatch.setattr(settings, "TEMPORAL_ENABLED", False)
        mock_sync_pass.side_effect = RuntimeError("database unavailable")
        log_exception = MagicMock()
        monkeypatch.setattr(temporal_service_module.logger, "exception", log_exception)

        handle = await temporal_service.sync_integrations(
            environment="prod", secret_path="/app", project_id=uuid.uuid4()
        )

        assert handle is None
        mock_sync_pass.assert_awaited_once()
        log_exception.assert_called_once()

    async def test_temporal_errors_propagate(self, monkeypatch, mock_client, mock_sync_pass):
        monkeypatch.setattr(settings, "TEMPORAL_ENABLED", True)
        mock_client.start_workflow.side_effect = RuntimeError("temporal unavailable")

        with pytest.raises(RuntimeError):
            await temporal_service.sync_integrations(
                environment="prod", secret_path="/", project_id=uuid.uuid4()
            )
