"""Main CLI implementation using Typer."""

from pathlib import Path
from typing import Optional, List, Callable, Any

import typer
from pydantic import ValidationError
from rich.console import Console

from redspawn.cli.commands import print_bootstrap_config, print_node_config, run_container
from redspawn.config import load_config
from redspawn.errors import RedspawnError
from redspawn.models.settings import (
    DEFAULT_IMAGE,
    Option,
    with_enable_kafka_authorization,
    with_enable_sasl,
    with_enable_schema_registry_http_basic_auth,
    with_image,
    with_new_service_account,
    with_superusers,
)
from redspawn.utils.logging import setup_logging


# Create Typer app
app = typer.Typer(
    name="redspawn",
    help="Redspawn - ephemeral Redpanda containers for tests",
    add_completion=False,
)

# Console for rich output
console = Console()


def _run_cli_command(handler: Callable[..., Any], **kwargs: Any):
    """Helper to run a CLI command with error handling."""
    try:
        handler(**kwargs)
    except RedspawnError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def _parse_user(value: str) -> tuple[str, str]:
    username, sep, password = value.partition(":")
    if not sep or not username:
        raise typer.BadParameter(f"Expected NAME:PASSWORD, got {value!r}")
    return username, password


def _build_options(
    image: Optional[str] = None,
    superusers: Optional[List[str]] = None,
    sasl: bool = False,
    authz: bool = False,
    schema_registry_basic_auth: bool = False,
    users: Optional[List[str]] = None,
) -> List[Option]:
    """Translate CLI flags into settings options."""
    options: List[Option] = []
    if image:
        options.append(with_image(image))
    if superusers:
        options.append(with_superusers(*superusers))
    if sasl:
        options.append(with_enable_sasl())
    if authz:
        options.append(with_enable_kafka_authorization())
    if schema_registry_basic_auth:
        options.append(with_enable_schema_registry_http_basic_auth())
    for user in users or []:
        options.append(with_new_service_account(*_parse_user(user)))
    return options


@app.command("up")
def up_command(
    image: str = typer.Option(DEFAULT_IMAGE, "--image", "-i", help="Redpanda image"),
    superuser: Optional[List[str]] = typer.Option(
        None, "--superuser", help="Superuser name (repeatable)"
    ),
    sasl: bool = typer.Option(False, "--sasl", help="Enable SASL/SCRAM on the Kafka API"),
    authz: bool = typer.Option(False, "--authz", help="Enable Kafka API authorization"),
    schema_registry_basic_auth: bool = typer.Option(
        False, "--schema-registry-basic-auth", help="Enable HTTP basic auth on the schema registry"
    ),
    user: Optional[List[str]] = typer.Option(
        None, "--user", "-u", help="Service account as NAME:PASSWORD (repeatable)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a redspawn YAML config"
    ),
):
    """Start a Redpanda container and keep it until Ctrl+C."""
    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    setup_logging(config.log_level)
    options = _build_options(image, superuser, sasl, authz, schema_registry_basic_auth, user)
    _run_cli_command(run_container, options=options, config=config)


# Render subcommands
render_app = typer.Typer(help="Print rendered Redpanda config files")
app.add_typer(render_app, name="render")


@render_app.command("node-config")
def render_node_config_command(
    host: str = typer.Option("localhost", "--host", help="Advertised Kafka host"),
    port: int = typer.Option(9092, "--port", help="Advertised Kafka port"),
    sasl: bool = typer.Option(False, "--sasl", help="Enable SASL/SCRAM on the Kafka API"),
    authz: bool = typer.Option(False, "--authz", help="Enable Kafka API authorization"),
    schema_registry_basic_auth: bool = typer.Option(
        False, "--schema-registry-basic-auth", help="Enable HTTP basic auth on the schema registry"
    ),
):
    """Print the redpanda.yaml node config for an advertised address."""
    options = _build_options(sasl=sasl, authz=authz, schema_registry_basic_auth=schema_registry_basic_auth)
    _run_cli_command(print_node_config, options=options, host=host, port=port)


@render_app.command("bootstrap-config")
def render_bootstrap_config_command(
    superuser: Optional[List[str]] = typer.Option(
        None, "--superuser", help="Superuser name (repeatable)"
    ),
    sasl: bool = typer.Option(False, "--sasl", help="Enable SASL/SCRAM on the Kafka API"),
    authz: bool = typer.Option(False, "--authz", help="Enable Kafka API authorization"),
):
    """Print the .bootstrap.yaml cluster config."""
    options = _build_options(superusers=superuser, sasl=sasl, authz=authz)
    _run_cli_command(print_bootstrap_config, options=options)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
