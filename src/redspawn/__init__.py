"""
Redspawn - ephemeral Redpanda containers for tests.

Starts a single-node Redpanda broker in Docker, advertises the host-mapped
Kafka port and waits until the broker is ready to serve requests.
"""

__version__ = "1.0.0"

# Re-export key components for easier access
from redspawn.models.config import RedspawnConfig
from redspawn.models.settings import (
    RedpandaSettings,
    build_settings,
    with_image,
    with_new_service_account,
    with_superusers,
    with_enable_sasl,
    with_enable_kafka_authorization,
    with_enable_schema_registry_http_basic_auth,
)
from redspawn.redpanda.container import RedpandaContainer, start_container

__all__ = [
    "RedspawnConfig",
    "RedpandaSettings",
    "RedpandaContainer",
    "build_settings",
    "start_container",
    "with_image",
    "with_new_service_account",
    "with_superusers",
    "with_enable_sasl",
    "with_enable_kafka_authorization",
    "with_enable_schema_registry_http_basic_auth",
]
