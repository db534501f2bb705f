"""Composite readiness wait for a freshly started Redpanda container."""

import asyncio
import logging

import httpx
from pydantic import ValidationError

from redspawn.errors import ReadinessTimeoutError
from redspawn.redpanda.admin import AdminAPIClient
from redspawn.redpanda.constants import ADMIN_API_PORT, STARTUP_LOG_MARKER, host_port
from redspawn.runtime.base import ContainerHandle, ContainerRuntime


logger = logging.getLogger(__name__)

LOG_MARKER_CHECK = "log-marker"
HEALTH_CHECK = "health-check"


class ReadinessProber:
    """Waits until Redpanda logged its startup line and reports healthy.

    The log line can be written before Redpanda serves requests and the
    health endpoint can answer before the log is flushed, so both checks
    have to pass. Each check polls on its own; once passed it is not
    re-evaluated.
    """

    def __init__(self, runtime: ContainerRuntime, poll_interval: float = 0.1, request_timeout: float = 2.0):
        """Initialize readiness prober."""
        self.runtime = runtime
        self.poll_interval = poll_interval
        self.request_timeout = request_timeout

    async def await_ready(self, handle: ContainerHandle, timeout: float) -> None:
        """Block until both checks passed or raise ReadinessTimeoutError."""
        checks = {
            LOG_MARKER_CHECK: asyncio.create_task(self._wait_for_log(handle)),
            HEALTH_CHECK: asyncio.create_task(self._wait_for_health(handle)),
        }

        try:
            done, _ = await asyncio.wait(
                checks.values(),
                timeout=timeout,
                return_when=asyncio.FIRST_EXCEPTION,
            )
        finally:
            for task in checks.values():
                if not task.done():
                    task.cancel()
            await asyncio.gather(*checks.values(), return_exceptions=True)

        # Errors other than "not ready yet" are fatal
        for task in done:
            task.result()

        unsatisfied = [name for name, task in checks.items() if task not in done]
        if unsatisfied:
            logger.error(f"Readiness checks did not pass within {timeout}s: {', '.join(unsatisfied)}")
            raise ReadinessTimeoutError(unsatisfied, timeout)

        logger.debug("All readiness checks passed")

    async def _wait_for_log(self, handle: ContainerHandle) -> None:
        """Poll the container logs for the startup line."""
        while True:
            logs = await self.runtime.read_logs(handle)
            if STARTUP_LOG_MARKER in logs:
                logger.debug("Found Redpanda startup log line")
                return
            await asyncio.sleep(self.poll_interval)

    async def _wait_for_health(self, handle: ContainerHandle) -> None:
        """Poll the Admin API until the cluster reports itself healthy."""
        host = await self.runtime.get_host(handle)
        port = await self.runtime.get_mapped_port(handle, ADMIN_API_PORT)

        async with AdminAPIClient(f"http://{host_port(host, port)}", timeout=self.request_timeout) as admin:
            while True:
                try:
                    overview = await admin.health_overview()
                    if overview.is_healthy:
                        logger.debug("Redpanda cluster reports healthy")
                        return
                    logger.debug("Redpanda cluster not healthy yet")
                except (httpx.HTTPError, ValidationError) as e:
                    logger.debug(f"Health check not passing yet: {e}")
                await asyncio.sleep(self.poll_interval)
