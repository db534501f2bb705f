"""Rendering of the Redpanda node and cluster bootstrap configs."""

from redspawn.models.settings import RedpandaSettings
from redspawn.redpanda.constants import (
    ADMIN_API_PORT,
    INTERNAL_KAFKA_API_PORT,
    KAFKA_API_PORT,
    SCHEMA_REGISTRY_PORT,
    port_number,
)
from redspawn.utils.templates import render_template


NODE_CONFIG_TEMPLATE = "redpanda.yaml.j2"
BOOTSTRAP_CONFIG_TEMPLATE = "bootstrap.yaml.j2"


def render_node_config(settings: RedpandaSettings, advertised_host: str, advertised_port: int) -> bytes:
    """Render redpanda.yaml for the given advertised Kafka address."""
    content = render_template(
        NODE_CONFIG_TEMPLATE,
        kafka_api={
            "advertised_host": advertised_host,
            "advertised_port": int(advertised_port),
            "authentication_method": settings.kafka_authentication_method,
            "enable_authorization": settings.kafka_enable_authorization,
        },
        schema_registry={
            "authentication_method": settings.schema_registry_authentication_method,
        },
        kafka_api_port=port_number(KAFKA_API_PORT),
        admin_api_port=port_number(ADMIN_API_PORT),
        schema_registry_port=port_number(SCHEMA_REGISTRY_PORT),
        internal_kafka_api_port=INTERNAL_KAFKA_API_PORT,
    )
    return content.encode("utf-8")


def render_bootstrap_config(settings: RedpandaSettings) -> bytes:
    """Render .bootstrap.yaml, the cluster properties applied on first boot.

    Reference: https://docs.redpanda.com/docs/reference/cluster-properties/
    """
    content = render_template(
        BOOTSTRAP_CONFIG_TEMPLATE,
        superusers=list(settings.superusers),
        kafka_enable_authorization=settings.kafka_enable_authorization,
        enable_sasl=settings.kafka_authentication_method == "sasl",
    )
    return content.encode("utf-8")
