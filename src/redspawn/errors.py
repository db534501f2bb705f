"""Exception hierarchy for redspawn."""

from typing import Iterable, Optional


class RedspawnError(Exception):
    """Base class for all redspawn errors."""


class SideFileError(RedspawnError):
    """Raised when a local side file cannot be written."""


class TemplateRenderError(RedspawnError):
    """Raised when a config template cannot be rendered."""


class ContainerRuntimeError(RedspawnError):
    """Raised by a container runtime operation."""


class ContainerStartError(RedspawnError):
    """Raised when the container cannot be created or started."""


class PortResolutionError(RedspawnError):
    """Raised when the container host or a mapped port cannot be resolved."""


class ConfigInjectionError(RedspawnError):
    """Raised when the node config cannot be copied into the container."""


class AdminAPIError(RedspawnError):
    """Raised when a Redpanda Admin API request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ReadinessError(RedspawnError):
    """Raised when waiting for Redpanda readiness fails."""


class ReadinessTimeoutError(ReadinessError):
    """Raised when Redpanda does not become ready before the deadline."""

    def __init__(self, unsatisfied: Iterable[str], timeout: float):
        self.unsatisfied = list(unsatisfied)
        self.timeout = timeout
        super().__init__(
            f"Redpanda not ready after {timeout}s, "
            f"unsatisfied checks: {', '.join(self.unsatisfied)}"
        )


class ServiceAccountError(RedspawnError):
    """Raised when a service account cannot be created."""

    def __init__(self, username: str, cause: Exception):
        self.username = username
        super().__init__(f"Failed to create service account with username {username!r}: {cause}")


class EndpointResolutionError(RedspawnError):
    """Raised when an endpoint address cannot be resolved."""
