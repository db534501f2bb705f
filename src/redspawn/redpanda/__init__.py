"""Redpanda container module."""

from redspawn.redpanda.container import RedpandaContainer, start_container
from redspawn.redpanda.readiness import ReadinessProber

__all__ = [
    "RedpandaContainer",
    "ReadinessProber",
    "start_container",
]
