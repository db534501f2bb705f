"""Pydantic models for settings and configuration."""

from redspawn.models.config import RedspawnConfig, RuntimeConfig, ReadinessConfig
from redspawn.models.settings import (
    RedpandaSettings,
    Option,
    build_settings,
    with_image,
    with_new_service_account,
    with_superusers,
    with_enable_sasl,
    with_enable_kafka_authorization,
    with_enable_schema_registry_http_basic_auth,
)

__all__ = [
    "RedspawnConfig",
    "RuntimeConfig",
    "ReadinessConfig",
    "RedpandaSettings",
    "Option",
    "build_settings",
    "with_image",
    "with_new_service_account",
    "with_superusers",
    "with_enable_sasl",
    "with_enable_kafka_authorization",
    "with_enable_schema_registry_http_basic_auth",
]
