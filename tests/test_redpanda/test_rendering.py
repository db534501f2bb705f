"""Tests for node and bootstrap config rendering."""

import pytest
from ruamel.yaml import YAML

from redspawn.errors import TemplateRenderError
from redspawn.models.settings import (
    build_settings,
    with_enable_kafka_authorization,
    with_enable_sasl,
    with_enable_schema_registry_http_basic_auth,
    with_superusers,
)
from redspawn.redpanda.rendering import render_bootstrap_config, render_node_config
from redspawn.utils.templates import render_template


def _parse(content: bytes):
    return YAML(typ="safe").load(content.decode("utf-8"))


def _listener(listeners, name):
    return next(listener for listener in listeners if listener["name"] == name)


class TestRenderNodeConfig:
    """Test redpanda.yaml rendering."""

    @pytest.mark.parametrize("options,auth,authz,sr_auth", [
        ([], "none", False, "none"),
        ([with_enable_sasl()], "sasl", False, "none"),
        ([with_enable_kafka_authorization()], "none", True, "none"),
        (
            [with_enable_sasl(), with_enable_kafka_authorization(), with_enable_schema_registry_http_basic_auth()],
            "sasl", True, "http_basic",
        ),
    ])
    def test_round_trip(self, options, auth, authz, sr_auth):
        """Test that rendered fields parse back to the inputs."""
        settings = build_settings(*options)

        config = _parse(render_node_config(settings, "10.1.2.3", 55001))

        redpanda = config["redpanda"]
        external = _listener(redpanda["advertised_kafka_api"], "external")
        assert external["address"] == "10.1.2.3"
        assert external["port"] == 55001
        assert _listener(redpanda["kafka_api"], "external")["authentication_method"] == auth
        assert redpanda["kafka_enable_authorization"] is authz
        assert config["schema_registry"]["schema_registry_api"][0]["authentication_method"] == sr_auth

    def test_contains_advertised_address(self):
        """Test that the exact host and port are in the rendered text."""
        content = render_node_config(build_settings(), "localhost", 32768).decode("utf-8")

        assert "address: localhost" in content
        assert "port: 32768" in content

    def test_starts_with_injection_marker(self):
        """Test that the entrypoint shim can detect the rendered config."""
        content = render_node_config(build_settings(), "localhost", 32768).decode("utf-8")

        assert content.startswith("# Injected by redspawn\n")

    def test_fixed_listeners(self):
        """Test the listeners that do not depend on settings."""
        config = _parse(render_node_config(build_settings(), "localhost", 32768))

        redpanda = config["redpanda"]
        assert redpanda["admin"]["port"] == 9644
        assert _listener(redpanda["kafka_api"], "external")["port"] == 9092
        internal = _listener(redpanda["advertised_kafka_api"], "internal")
        assert internal == {"address": "127.0.0.1", "name": "internal", "port": 9093}
        assert config["schema_registry"]["schema_registry_api"][0]["port"] == 8081
        assert config["schema_registry_client"]["brokers"][0]["port"] == 9093

    def test_deterministic(self):
        """Test that rendering is a pure function of its inputs."""
        settings = build_settings(with_enable_sasl())

        assert render_node_config(settings, "localhost", 1) == render_node_config(settings, "localhost", 1)


class TestRenderBootstrapConfig:
    """Test .bootstrap.yaml rendering."""

    def test_defaults(self):
        """Test bootstrap config without options."""
        config = _parse(render_bootstrap_config(build_settings()))

        assert config["superusers"] == []
        assert config["kafka_enable_authorization"] is False
        assert config["enable_sasl"] is False
        assert config["auto_create_topics_enabled"] is True

    def test_superusers_and_authorization(self):
        """Test that superusers and flags are rendered."""
        settings = build_settings(
            with_superusers("admin", "ops user"),
            with_enable_kafka_authorization(),
            with_enable_sasl(),
        )

        config = _parse(render_bootstrap_config(settings))

        assert config["superusers"] == ["admin", "ops user"]
        assert config["kafka_enable_authorization"] is True
        assert config["enable_sasl"] is True


def test_missing_template_raises():
    """Test that template errors are reported as TemplateRenderError."""
    with pytest.raises(TemplateRenderError):
        render_template("does-not-exist.j2")


def test_undefined_variable_raises():
    """Test that templates reject missing parameters."""
    with pytest.raises(TemplateRenderError):
        render_template("bootstrap.yaml.j2", superusers=[])
