"""Provisioning of single-node Redpanda containers."""

import logging
from typing import Optional

from redspawn.errors import (
    AdminAPIError,
    ConfigInjectionError,
    ContainerRuntimeError,
    ContainerStartError,
    EndpointResolutionError,
    PortResolutionError,
    ReadinessError,
    ServiceAccountError,
)
from redspawn.models.config import RedspawnConfig
from redspawn.models.settings import Option, RedpandaSettings, build_settings
from redspawn.redpanda.admin import AdminAPIClient
from redspawn.redpanda.constants import (
    ADMIN_API_PORT,
    BOOTSTRAP_CONFIG_PATH,
    CONTAINER_USER,
    ENTRYPOINT_PATH,
    KAFKA_API_PORT,
    NODE_CONFIG_PATH,
    REDPANDA_COMMAND,
    SCHEMA_REGISTRY_PORT,
    SCRAM_SHA_256,
    SIDE_FILE_MODE,
    host_port,
)
from redspawn.redpanda.entrypoint import SideFiles, materialize_side_files
from redspawn.redpanda.readiness import ReadinessProber
from redspawn.redpanda.rendering import render_node_config
from redspawn.runtime.base import ContainerFile, ContainerHandle, ContainerRequest, ContainerRuntime
from redspawn.runtime.docker_engine import DockerRuntime


logger = logging.getLogger(__name__)


class RedpandaContainer:
    """A running Redpanda container.

    The caller owns the container and must call ``terminate`` (or use it as
    an async context manager) once it is no longer needed.
    """

    def __init__(self, runtime: ContainerRuntime, handle: ContainerHandle):
        self.runtime = runtime
        self.handle = handle

    async def __aenter__(self) -> "RedpandaContainer":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.terminate()

    async def host(self) -> str:
        """Return the host under which the mapped ports are reachable."""
        try:
            return await self.runtime.get_host(self.handle)
        except ContainerRuntimeError as e:
            raise EndpointResolutionError(f"Failed to get container host: {e}") from e

    async def mapped_port(self, port: str) -> int:
        """Return the host port mapped to a container port like "9092/tcp"."""
        try:
            return await self.runtime.get_mapped_port(self.handle, port)
        except ContainerRuntimeError as e:
            raise EndpointResolutionError(f"Failed to get mapped port for {port}: {e}") from e

    async def kafka_seed_broker(self) -> str:
        """Return the seed broker for Kafka clients as "host:port"."""
        return await self._mapped_host_port(KAFKA_API_PORT)

    async def admin_api_address(self) -> str:
        """Return the Admin API address as "http://host:port"."""
        return f"http://{await self._mapped_host_port(ADMIN_API_PORT)}"

    async def schema_registry_address(self) -> str:
        """Return the schema registry address as "http://host:port"."""
        return f"http://{await self._mapped_host_port(SCHEMA_REGISTRY_PORT)}"

    async def terminate(self) -> None:
        """Stop and remove the container."""
        await self.runtime.terminate(self.handle)

    async def _mapped_host_port(self, port: str) -> str:
        # Resolved on every call, mappings are never cached
        host = await self.host()
        mapped_port = await self.mapped_port(port)
        return host_port(host, mapped_port)


def _container_request(settings: RedpandaSettings, side_files: SideFiles) -> ContainerRequest:
    return ContainerRequest(
        image=settings.image,
        user=CONTAINER_USER,
        exposed_ports=[KAFKA_API_PORT, ADMIN_API_PORT, SCHEMA_REGISTRY_PORT],
        files=[
            ContainerFile(
                host_path=side_files.entrypoint,
                container_path=ENTRYPOINT_PATH,
                mode=SIDE_FILE_MODE,
            ),
            ContainerFile(
                host_path=side_files.bootstrap_config,
                container_path=BOOTSTRAP_CONFIG_PATH,
                mode=SIDE_FILE_MODE,
            ),
        ],
        entrypoint=[],
        command=list(REDPANDA_COMMAND),
    )


async def start_container(
    *options: Option,
    runtime: Optional[ContainerRuntime] = None,
    config: Optional[RedspawnConfig] = None,
) -> RedpandaContainer:
    """Create and start a Redpanda container and wait until it is ready.

    Redpanda has to advertise a Kafka address that is reachable from the
    host, and the mapped port is only known once the container runs. The
    container is therefore started with an entrypoint shim that waits for
    the node config, which is rendered and copied in after start.

    Any failure aborts provisioning. An already started container is not
    removed; retry by calling ``start_container`` again.
    """
    config = config or RedspawnConfig()
    runtime = runtime or DockerRuntime(
        docker_host=config.runtime.docker_host,
        host_override=config.runtime.host_override,
    )
    settings = build_settings(*options)

    # Bootstrap config only takes effect on the first boot of a cluster, so
    # it must be present at creation time.
    side_files = materialize_side_files(settings)
    try:
        logger.info(f"Starting Redpanda container from {settings.image}")
        try:
            handle = await runtime.create_and_start(_container_request(settings, side_files))
        except ContainerRuntimeError as e:
            raise ContainerStartError(f"Failed to start Redpanda container: {e}") from e
    finally:
        side_files.cleanup()

    try:
        host = await runtime.get_host(handle)
    except ContainerRuntimeError as e:
        raise PortResolutionError(f"Failed to get container host: {e}") from e

    try:
        kafka_port = await runtime.get_mapped_port(handle, KAFKA_API_PORT)
    except ContainerRuntimeError as e:
        raise PortResolutionError(f"Failed to get mapped Kafka port: {e}") from e

    node_config = render_node_config(settings, host, kafka_port)

    # Copying the node config releases the entrypoint shim
    try:
        await runtime.copy_to_container(handle, node_config, NODE_CONFIG_PATH, SIDE_FILE_MODE)
    except ContainerRuntimeError as e:
        raise ConfigInjectionError(f"Failed to copy redpanda.yaml into container: {e}") from e
    logger.debug(f"Injected node config advertising {host_port(host, kafka_port)}")

    prober = ReadinessProber(
        runtime,
        poll_interval=config.readiness.poll_interval,
        request_timeout=config.readiness.request_timeout,
    )
    try:
        await prober.await_ready(handle, timeout=config.readiness.startup_timeout)
    except ContainerRuntimeError as e:
        raise ReadinessError(f"Failed to wait for Redpanda readiness: {e}") from e

    if settings.service_accounts:
        await _create_service_accounts(runtime, handle, host, settings)

    logger.info(f"Redpanda is ready, Kafka API at {host_port(host, kafka_port)}")
    return RedpandaContainer(runtime, handle)


async def _create_service_accounts(
    runtime: ContainerRuntime,
    handle: ContainerHandle,
    host: str,
    settings: RedpandaSettings,
) -> None:
    """Create the configured users one by one, stopping at the first failure."""
    try:
        admin_port = await runtime.get_mapped_port(handle, ADMIN_API_PORT)
    except ContainerRuntimeError as e:
        raise PortResolutionError(f"Failed to get mapped Admin API port: {e}") from e

    async with AdminAPIClient(f"http://{host_port(host, admin_port)}") as admin:
        for username, password in settings.service_accounts.items():
            try:
                await admin.create_user(username, password, SCRAM_SHA_256)
            except AdminAPIError as e:
                logger.error(f"Failed to create service account {username}: {e}")
                raise ServiceAccountError(username, e) from e
            logger.info(f"Created service account {username}")
