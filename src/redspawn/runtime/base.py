"""Container runtime interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List


@dataclass
class ContainerFile:
    """A host file copied into the container before it starts."""
    host_path: Path
    container_path: str
    mode: int = 0o644


@dataclass
class ContainerRequest:
    """Everything needed to create and start a container."""
    image: str
    user: str = ""
    exposed_ports: List[str] = field(default_factory=list)
    files: List[ContainerFile] = field(default_factory=list)
    entrypoint: List[str] = field(default_factory=list)
    command: List[str] = field(default_factory=list)


@dataclass
class ContainerHandle:
    """Reference to a container created by a runtime."""
    id: str
    native: Any = None


class ContainerRuntime(ABC):
    """Base runtime interface that all container runtimes must implement.

    Every method raises ``ContainerRuntimeError`` on failure.
    """

    @abstractmethod
    async def create_and_start(self, request: ContainerRequest) -> ContainerHandle:
        """Create the container, copy the request files into it and start it."""
        pass

    @abstractmethod
    async def copy_to_container(self, handle: ContainerHandle, data: bytes, path: str, mode: int) -> None:
        """Write bytes to a file inside a running container."""
        pass

    @abstractmethod
    async def get_mapped_port(self, handle: ContainerHandle, container_port: str) -> int:
        """Return the host port mapped to a container port such as "9092/tcp"."""
        pass

    @abstractmethod
    async def get_host(self, handle: ContainerHandle) -> str:
        """Return the host under which mapped ports are reachable."""
        pass

    @abstractmethod
    async def read_logs(self, handle: ContainerHandle) -> str:
        """Return the container's stdout and stderr so far."""
        pass

    @abstractmethod
    async def terminate(self, handle: ContainerHandle) -> None:
        """Stop and remove the container."""
        pass
