"""Temporal worker for integration syncs.

Run with ``python -m vaultsync.platform.temporal.worker``.
"""

import asyncio
import signal

from temporalio.worker import UnsandboxedWorkflowRunner, Worker, WorkflowRunner
from temporalio.worker.workflow_sandbox import SandboxedWorkflowRunner

from vaultsync.core.config import settings
from vaultsync.core.logging import LoggerConfigurator
from vaultsync.platform.temporal.activities import sync_integrations_activity
from vaultsync.platform.temporal.client import temporal_client
from vaultsync.platform.temporal.workflows import SyncIntegrationsWorkflow

logger = LoggerConfigurator.configure_logger(__name__, dimensions={"component": "sync_worker"})


class TemporalWorker:
    """Polls the integration sync task queue."""

    def __init__(self) -> None:
        """Initialize the Temporal worker."""
        self.worker: Worker | None = None

    @property
    def running(self) -> bool:
        """Whether the worker is polling."""
        return self.worker is not None and self.worker.is_running

    async def start(self) -> None:
        """Connect and poll until the worker is shut down."""
        client = await temporal_client.get_client()
        self.worker = Worker(
            client,
            task_queue=settings.TEMPORAL_TASK_QUEUE,
            workflows=[SyncIntegrationsWorkflow],
            activities=[sync_integrations_activity],
            workflow_runner=self._workflow_runner(),
        )
        logger.info(f"Polling task queue {settings.TEMPORAL_TASK_QUEUE}")
        await self.worker.run()

    async def stop(self) -> None:
        """Finish in-flight sync passes, then drop the client."""
        if self.running:
            logger.info("Shutting down, waiting for in-flight sync passes")
            await self.worker.shutdown()
        await temporal_client.close()

    @staticmethod
    def _workflow_runner() -> WorkflowRunner:
        if settings.TEMPORAL_DISABLE_SANDBOX:
            logger.warning("Temporal sandbox disabled, use only for debugging")
            return UnsandboxedWorkflowRunner()
        return SandboxedWorkflowRunner()


async def main() -> None:
    """Run the worker until SIGINT or SIGTERM."""
    worker = TemporalWorker()
    shutdown = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, shutdown.set)

    polling = asyncio.create_task(worker.start())
    stopping = asyncio.create_task(shutdown.wait())
    done, _ = await asyncio.wait({polling, stopping}, return_when=asyncio.FIRST_COMPLETED)

    await worker.stop()
    stopping.cancel()
    if polling in done:
        # Surface connection or polling failures
        polling.result()
    else:
        await polling


if __name__ == "__main__":
    asyncio.run(main())
