"""Redpanda container settings and the options that build them."""

from typing import Callable, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_IMAGE = "docker.redpanda.com/redpandadata/redpanda:v23.1.6"

KafkaAuthenticationMethod = Literal["none", "sasl"]
SchemaRegistryAuthenticationMethod = Literal["none", "http_basic"]


class RedpandaSettings(BaseModel):
    """Settings for a single Redpanda container.

    Instances are immutable. Use ``build_settings`` with option functions to
    derive new settings from the defaults.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    image: str = Field(default=DEFAULT_IMAGE, description="Docker image and version")
    superusers: List[str] = Field(
        default_factory=list,
        description="Service account names granted superuser rights",
    )
    kafka_enable_authorization: bool = Field(
        default=False,
        description="Require authorization for Kafka API connections",
    )
    kafka_authentication_method: KafkaAuthenticationMethod = Field(default="none")
    schema_registry_authentication_method: SchemaRegistryAuthenticationMethod = Field(default="none")
    service_accounts: Dict[str, str] = Field(
        default_factory=dict,
        description="Username to password of users created once Redpanda is ready",
    )


Option = Callable[[RedpandaSettings], RedpandaSettings]


def build_settings(*options: Option) -> RedpandaSettings:
    """Apply options in order over the default settings."""
    settings = RedpandaSettings()
    for option in options:
        settings = option(settings)
    return settings


def with_image(image: str) -> Option:
    """Use a different Redpanda image."""
    def apply(settings: RedpandaSettings) -> RedpandaSettings:
        return settings.model_copy(update={"image": image})
    return apply


def with_new_service_account(username: str, password: str) -> Option:
    """Create a SCRAM user once the container is ready.

    Adding the same username twice keeps the last password.
    """
    def apply(settings: RedpandaSettings) -> RedpandaSettings:
        accounts = dict(settings.service_accounts)
        accounts[username] = password
        return settings.model_copy(update={"service_accounts": accounts})
    return apply


def with_superusers(*superusers: str) -> Option:
    """Set the superusers added to the cluster bootstrap config.

    Replaces any previously configured superusers. By default there are none.
    """
    def apply(settings: RedpandaSettings) -> RedpandaSettings:
        return settings.model_copy(update={"superusers": list(superusers)})
    return apply


def with_enable_sasl() -> Option:
    """Enable SASL/SCRAM authentication on the Kafka API.

    When enabling authentication, also add users with
    ``with_new_service_account`` and authorize them with ``with_superusers``.
    """
    def apply(settings: RedpandaSettings) -> RedpandaSettings:
        return settings.model_copy(update={"kafka_authentication_method": "sasl"})
    return apply


def with_enable_kafka_authorization() -> Option:
    """Enable authorization for connections on the Kafka API."""
    def apply(settings: RedpandaSettings) -> RedpandaSettings:
        return settings.model_copy(update={"kafka_enable_authorization": True})
    return apply


def with_enable_schema_registry_http_basic_auth() -> Option:
    """Enable HTTP basic authentication on the schema registry."""
    def apply(settings: RedpandaSettings) -> RedpandaSettings:
        return settings.model_copy(update={"schema_registry_authentication_method": "http_basic"})
    return apply
