"""Shared fixtures."""

from typing import Dict, List, Optional

import pytest

from redspawn.errors import ContainerRuntimeError
from redspawn.runtime.base import ContainerHandle, ContainerRequest, ContainerRuntime


class FakeRuntime(ContainerRuntime):
    """In-memory runtime recording every call in order."""

    def __init__(self, host: str = "localhost", ports: Optional[Dict[str, int]] = None, logs: str = ""):
        self.host = host
        self.ports = dict(ports or {})
        self.logs = logs
        self.calls: List[str] = []
        self.requests: List[ContainerRequest] = []
        self.request_files: Dict[str, tuple] = {}
        self.copied: Dict[str, tuple] = {}
        self.terminated = False
        # Operation name -> exception raised when it is called
        self.failures: Dict[str, Exception] = {}

    def _record(self, call: str, operation: str) -> None:
        self.calls.append(call)
        if operation in self.failures:
            raise self.failures[operation]

    async def create_and_start(self, request: ContainerRequest) -> ContainerHandle:
        self._record("create_and_start", "create_and_start")
        self.requests.append(request)
        # Side files are temporary, keep their content around
        for container_file in request.files:
            self.request_files[container_file.container_path] = (
                container_file.host_path.read_bytes(),
                container_file.mode,
            )
        return ContainerHandle(id="0123456789abcdef")

    async def copy_to_container(self, handle, data, path, mode):
        self._record(f"copy_to_container:{path}", "copy_to_container")
        self.copied[path] = (data, mode)

    async def get_mapped_port(self, handle, container_port):
        self._record(f"get_mapped_port:{container_port}", "get_mapped_port")
        if container_port not in self.ports:
            raise ContainerRuntimeError(f"Port {container_port} not mapped")
        return self.ports[container_port]

    async def get_host(self, handle):
        self._record("get_host", "get_host")
        return self.host

    async def read_logs(self, handle):
        self._record("read_logs", "read_logs")
        return self.logs

    async def terminate(self, handle):
        self._record("terminate", "terminate")
        self.terminated = True


@pytest.fixture
def fake_runtime():
    """Create a fake runtime with the default Redpanda port mappings."""
    return FakeRuntime(
        ports={"9092/tcp": 55001, "9644/tcp": 55002, "8081/tcp": 55003},
    )


@pytest.fixture
def make_runtime():
    """Return the fake runtime class for tests needing custom mappings."""
    return FakeRuntime
