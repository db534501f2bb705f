"""Container runtimes for redspawn."""

from redspawn.runtime.base import ContainerFile, ContainerHandle, ContainerRequest, ContainerRuntime

__all__ = [
    "ContainerFile",
    "ContainerHandle",
    "ContainerRequest",
    "ContainerRuntime",
]
