"""
MCOP Hub CLI - Event delivery commands.

Provides commands for inspecting configuration, checking connectivity
and sending events by hand.
"""

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from mcop_hub import __version__

console = Console()

app = typer.Typer(
    name="mcop-hub",
    help="MCOP Hub event delivery commands",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"mcop-hub {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """MCOP Hub - outbound event delivery."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_config(project_path: Path):
    from mcop_hub.delivery.config import HubConfig, HubConfigError

    try:
        return HubConfig.load(project_path)
    except HubConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(2)


def _print_result(result) -> None:
    if result.ok:
        console.print(
            f"[green]Delivered[/green] in {result.attempts} attempt(s) "
            f"(status {result.status})"
        )
        return

    if result.was_skipped:
        console.print(f"[yellow]Skipped:[/yellow] {result.error}")
    else:
        console.print(
            f"[red]Failed[/red] after {result.attempts} attempt(s): "
            f"status={result.status or '-'} error={result.error}"
        )
    raise typer.Exit(1)


@app.command("events")
def events_list():
    """
    List the event types the Hub accepts.
    """
    from mcop_hub.events.models import PAYLOAD_TYPES

    table = Table(title="Hub Event Types", box=box.ROUNDED)
    table.add_column("Type", style="cyan")
    table.add_column("Payload")

    for event_type, payload_cls in PAYLOAD_TYPES.items():
        table.add_row(event_type.value, payload_cls.__name__)

    console.print(table)
    console.print(f"\n[dim]{len(PAYLOAD_TYPES)} event type(s)[/dim]")


@app.command("config")
def config_show(
    project_path: Path = typer.Option(
        Path("."),
        "--project-path",
        "-p",
        help="Directory containing .mcop/config.yaml",
    ),
):
    """
    Show the effective Hub configuration (token masked).
    """
    config = _load_config(project_path)
    values = config.to_dict()["hub"]

    table = Table(title="Hub Configuration", box=box.ROUNDED)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in values.items():
        table.add_row(key, "[dim]-[/dim]" if value in (None, "") else str(value))

    console.print(table)
    if not config.is_configured:
        console.print("\n[yellow]MCOP_HUB_URL is not set; events will be skipped.[/yellow]")


@app.command("ping")
def ping(
    project_path: Path = typer.Option(
        Path("."),
        "--project-path",
        "-p",
        help="Directory containing .mcop/config.yaml",
    ),
):
    """
    Check Hub connectivity by sending a ping event.
    """
    from mcop_hub.client import ping_hub

    config = _load_config(project_path)
    if config.is_configured:
        console.print(f"Pinging [cyan]{config.events_url}[/cyan]...")
    result = asyncio.run(ping_hub(config))
    _print_result(result)


@app.command("send")
def send(
    event_type: str = typer.Argument(
        ...,
        help="Event type (e.g. observation.created)",
    ),
    data: str = typer.Option(
        None,
        "--data",
        "-d",
        help="Payload as a JSON object",
    ),
    file: Path = typer.Option(
        None,
        "--file",
        "-f",
        help="Read the payload from a JSON file",
    ),
    source_version: str = typer.Option(
        None,
        "--source-version",
        help="Version tag for the envelope",
    ),
    project_path: Path = typer.Option(
        Path("."),
        "--project-path",
        "-p",
        help="Directory containing .mcop/config.yaml",
    ),
):
    """
    Send one event to the Hub.

    The payload uses the Hub's wire keys:
      mcop-hub send observation.created -d '{"observationId": "obs-1", ...}'
    """
    from mcop_hub.client import SendOptions, send_event
    from mcop_hub.events.models import HubEventType

    parsed = HubEventType.parse(event_type)
    if parsed is None:
        console.print(f"[red]Error: unknown event type '{event_type}'[/red]")
        console.print("[dim]Run 'mcop-hub events' to list event types.[/dim]")
        raise typer.Exit(2)

    if (data is None) == (file is None):
        console.print("[red]Error: provide exactly one of --data or --file[/red]")
        raise typer.Exit(2)

    try:
        raw = file.read_text() if file is not None else data
        payload = json.loads(raw)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error: could not read payload: {e}[/red]")
        raise typer.Exit(2)

    if not isinstance(payload, dict):
        console.print("[red]Error: payload must be a JSON object[/red]")
        raise typer.Exit(2)

    config = _load_config(project_path)
    result = asyncio.run(
        send_event(parsed, payload, config, SendOptions(source_version=source_version))
    )
    _print_result(result)
