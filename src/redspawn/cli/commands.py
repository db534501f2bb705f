"""Command implementations for CLI."""

import asyncio
from typing import List

from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from redspawn.models.config import RedspawnConfig
from redspawn.models.settings import Option, build_settings
from redspawn.redpanda.container import RedpandaContainer, start_container
from redspawn.redpanda.rendering import render_bootstrap_config, render_node_config


console = Console()


async def _endpoint_table(container: RedpandaContainer) -> Table:
    table = Table(title="Redpanda")
    table.add_column("Service", style="cyan")
    table.add_column("Address", style="green")

    table.add_row("Kafka API", await container.kafka_seed_broker())
    table.add_row("Admin API", await container.admin_api_address())
    table.add_row("Schema Registry", await container.schema_registry_address())
    return table


async def _run_until_interrupted(options: List[Option], config: RedspawnConfig) -> None:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Starting Redpanda...", total=None)
        container = await start_container(*options, config=config)
        progress.update(task, completed=True)

    try:
        console.print(await _endpoint_table(container))
        console.print("Press Ctrl+C to stop and remove the container")
        await asyncio.Event().wait()
    finally:
        await container.terminate()
        console.print(f"Removed container {container.handle.id[:12]}")


def run_container(options: List[Option], config: RedspawnConfig) -> None:
    """Start a container, print its endpoints and remove it on Ctrl+C."""
    try:
        asyncio.run(_run_until_interrupted(options, config))
    except KeyboardInterrupt:
        console.print("[yellow]Stopped[/yellow]")


def print_node_config(options: List[Option], host: str, port: int) -> None:
    """Print the redpanda.yaml rendered for an advertised address."""
    settings = build_settings(*options)
    console.out(render_node_config(settings, host, port).decode("utf-8"), end="")


def print_bootstrap_config(options: List[Option]) -> None:
    """Print the rendered .bootstrap.yaml."""
    settings = build_settings(*options)
    console.out(render_bootstrap_config(settings).decode("utf-8"), end="")
