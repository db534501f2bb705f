"""Container runtime backed by the Docker Engine API."""

import asyncio
import io
import logging
import os
import tarfile
import time
from typing import Optional
from urllib.parse import urlparse

import docker
from docker.errors import DockerException, ImageNotFound

from redspawn.errors import ContainerRuntimeError
from redspawn.runtime.base import ContainerHandle, ContainerRequest, ContainerRuntime


logger = logging.getLogger(__name__)


def _build_archive(data: bytes, path: str, mode: int) -> tuple[str, bytes]:
    """Pack a single file into a tar archive for put_archive.

    Returns the target directory and the archive bytes.
    """
    directory, _, name = path.rpartition("/")
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w") as tar:
        info = tarfile.TarInfo(name=name)
        info.size = len(data)
        info.mode = mode
        info.mtime = int(time.time())
        tar.addfile(info, io.BytesIO(data))
    return directory or "/", buffer.getvalue()


class DockerRuntime(ContainerRuntime):
    """Runtime for managing containers through the docker SDK."""

    def __init__(self, docker_host: Optional[str] = None, host_override: Optional[str] = None,
                 client: Optional[docker.DockerClient] = None):
        """Initialize docker runtime.

        The client is created lazily from ``docker_host`` or the environment.
        """
        self.docker_host = docker_host
        self.host_override = host_override
        self._client = client

    def _connect(self) -> docker.DockerClient:
        """Create the docker client, which queries the daemon for its API version."""
        if self._client is None:
            try:
                if self.docker_host:
                    self._client = docker.DockerClient(base_url=self.docker_host)
                else:
                    self._client = docker.from_env()
            except DockerException as e:
                raise ContainerRuntimeError(f"Failed to connect to docker: {e}") from e
        return self._client

    async def _get_client(self) -> docker.DockerClient:
        """Get docker client, connecting from a worker thread."""
        if self._client is None:
            await asyncio.to_thread(self._connect)
        return self._client

    async def create_and_start(self, request: ContainerRequest) -> ContainerHandle:
        """Create the container, copy the files into it and start it."""
        await self._ensure_image(request.image)
        client = await self._get_client()

        try:
            container = await asyncio.to_thread(
                client.containers.create,
                request.image,
                command=request.command,
                # [""] resets the image entrypoint, an empty list would be dropped
                entrypoint=request.entrypoint or [""],
                user=request.user or None,
                ports={port: None for port in request.exposed_ports},
                detach=True,
            )
        except DockerException as e:
            raise ContainerRuntimeError(f"Failed to create container from {request.image}: {e}") from e

        handle = ContainerHandle(id=container.id, native=container)
        logger.debug(f"Created container {container.short_id} from {request.image}")

        for container_file in request.files:
            try:
                data = await asyncio.to_thread(container_file.host_path.read_bytes)
            except OSError as e:
                raise ContainerRuntimeError(f"Failed to read {container_file.host_path}: {e}") from e
            await self.copy_to_container(handle, data, container_file.container_path, container_file.mode)

        try:
            await asyncio.to_thread(container.start)
        except DockerException as e:
            raise ContainerRuntimeError(f"Failed to start container {container.short_id}: {e}") from e

        logger.info(f"Started container {container.short_id}")
        return handle

    async def copy_to_container(self, handle: ContainerHandle, data: bytes, path: str, mode: int) -> None:
        """Copy bytes into the container as a single file."""
        directory, archive = _build_archive(data, path, mode)
        try:
            ok = await asyncio.to_thread(handle.native.put_archive, directory, archive)
        except DockerException as e:
            raise ContainerRuntimeError(f"Failed to copy {path} into container: {e}") from e
        if not ok:
            raise ContainerRuntimeError(f"Docker refused to copy {path} into container")
        logger.debug(f"Copied {len(data)} bytes to {path} in container {handle.id[:12]}")

    async def get_mapped_port(self, handle: ContainerHandle, container_port: str) -> int:
        """Get the bound host port for a container port."""
        try:
            await asyncio.to_thread(handle.native.reload)
        except DockerException as e:
            raise ContainerRuntimeError(f"Failed to inspect container: {e}") from e

        ports = handle.native.attrs.get("NetworkSettings", {}).get("Ports") or {}
        bindings = ports.get(container_port)
        if not bindings:
            raise ContainerRuntimeError(f"Port {container_port} not mapped on container {handle.id[:12]}")
        return int(bindings[0]["HostPort"])

    async def get_host(self, handle: ContainerHandle) -> str:
        """Resolve the host to connect to published container ports.

        ``host_override`` wins when set, otherwise the host is derived from the
        daemon address, with local sockets mapping to localhost.
        """
        if self.host_override:
            return self.host_override

        # ssh:// daemons are tunnelled, their base_url reads http+docker://localhost
        daemon_url = self.docker_host or os.environ.get("DOCKER_HOST", "")
        if daemon_url.startswith("ssh://"):
            return urlparse(daemon_url).hostname or "localhost"

        client = await self._get_client()
        base_url = client.api.base_url
        if base_url.startswith(("unix://", "npipe://", "http+docker://")):
            return "localhost"
        parsed = urlparse(base_url)
        return parsed.hostname or "localhost"

    async def read_logs(self, handle: ContainerHandle) -> str:
        """Get container logs."""
        try:
            logs = await asyncio.to_thread(handle.native.logs, stdout=True, stderr=True)
        except DockerException as e:
            raise ContainerRuntimeError(f"Failed to read container logs: {e}") from e
        return logs.decode("utf-8", errors="replace")

    async def terminate(self, handle: ContainerHandle) -> None:
        """Stop and remove the container."""
        try:
            await asyncio.to_thread(handle.native.remove, force=True, v=True)
        except DockerException as e:
            raise ContainerRuntimeError(f"Failed to remove container {handle.id[:12]}: {e}") from e
        logger.info(f"Removed container {handle.id[:12]}")

    async def _ensure_image(self, image: str) -> None:
        """Pull the image if it is not available locally."""
        client = await self._get_client()
        try:
            await asyncio.to_thread(client.images.get, image)
            return
        except ImageNotFound:
            logger.info(f"Pulling image {image}")
        except DockerException as e:
            raise ContainerRuntimeError(f"Failed to inspect image {image}: {e}") from e

        try:
            await asyncio.to_thread(client.images.pull, image)
        except DockerException as e:
            raise ContainerRuntimeError(f"Failed to pull image {image}: {e}") from e
