"""Typer CLI for tlsmon."""

import logging
import os
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .alerts import select_alerts
from .checker import run_checker
from .config import Config, check_startup, generate_example_config, load_config
from .errors import CheckerError, ConfigError, ParseError
from .log import setup_logging
from .models import CertRecord
from .monitor import run_once
from .parser import parse_output

EXIT_NOTIFY_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_PARSE_ERROR = 3

app = typer.Typer(
    name="tlsmon",
    help="TLS certificate expiry monitor - run sslcheck and alert Slack about expiring certificates",
    add_completion=False,
)

config_app = typer.Typer(help="Configuration management commands")
app.add_typer(config_app, name="config")

console = Console()
logger = logging.getLogger(__name__)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", envvar="TLSMON_CONFIG", help="Path to configuration file"),
]
DebugOption = Annotated[
    bool,
    typer.Option("--debug", "-d", help="Enable debug logging"),
]


def _startup(config_path: Path | None, debug: bool, **overrides) -> Config:
    """Configure logging and load the configuration, aborting on errors."""
    setup_logging("DEBUG" if debug else os.environ.get("LOG_LEVEL", "INFO"))
    try:
        config = load_config(config_path, **overrides)
        check_startup(config)
    except ConfigError as e:
        logger.error("%s", e)
        raise typer.Exit(EXIT_CONFIG_ERROR)

    if not debug:
        setup_logging(config.log_level)
    return config


def print_records(records: list[CertRecord], threshold: int) -> None:
    """Print parsed checker records as a table.

    Args:
        records: Records to display.
        threshold: Alert threshold, rows at or below it are highlighted.
    """
    table = Table(title=f"{len(records)} hosts checked (alert threshold: {threshold} days)")
    table.add_column("Host")
    table.add_column("Common Name")
    table.add_column("Status")
    table.add_column("Days Left", justify="right")
    table.add_column("Expires")

    for record in records:
        style = "bold red" if record.in_alert_state(threshold) else None
        table.add_row(
            record.host,
            record.common_name,
            "[green]Valid[/green]" if record.valid else "[red]Invalid[/red]",
            str(record.days_left),
            record.expire_date,
            style=style,
        )

    console.print(table)


@app.command("run")
def run_command(
    config_path: ConfigOption = None,
    threshold: Annotated[
        Optional[int],
        typer.Option("--threshold", "-t", help="Override the alert threshold in days"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Log the Slack message instead of sending it"),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", "-j", help="Print the run result as JSON"),
    ] = False,
    debug: DebugOption = False,
) -> None:
    """Check all hosts once and notify Slack about expiring certificates."""
    config = _startup(config_path, debug, alert_threshold=threshold)

    try:
        result = run_once(config, dry_run=dry_run)
    except ParseError as e:
        logger.error("Could not parse sslcheck output: %s", e)
        raise typer.Exit(EXIT_PARSE_ERROR)

    if json_output:
        console.print_json(result.model_dump_json())

    if result.notification_failed:
        raise typer.Exit(EXIT_NOTIFY_FAILED)


@app.command("check")
def check_command(
    config_path: ConfigOption = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output records as JSON"),
    ] = False,
    debug: DebugOption = False,
) -> None:
    """Run the checker and show the parsed results without notifying anyone."""
    config = _startup(config_path, debug)

    try:
        records = parse_output(run_checker(config))
    except CheckerError as e:
        logger.error("Error while checking TLS hosts: %s", e)
        raise typer.Exit(1)
    except ParseError as e:
        logger.error("Could not parse sslcheck output: %s", e)
        raise typer.Exit(EXIT_PARSE_ERROR)

    if json_output:
        alerts = select_alerts(records, config.alert_threshold)
        console.print_json(data={
            "threshold": config.alert_threshold,
            "records": [record.model_dump() for record in records],
            "alerts": [record.host for record in alerts],
        })
        return

    print_records(records, config.alert_threshold)


@config_app.command("init")
def config_init_command(
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output file path"),
    ] = Path("tlsmon.yaml"),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing file"),
    ] = False,
) -> None:
    """Generate an example configuration file."""
    if output.exists() and not force:
        console.print(f"[red]Error:[/red] File already exists: {output}")
        console.print("[dim]Use --force to overwrite[/dim]")
        raise typer.Exit(1)

    with open(output, "w") as f:
        f.write(generate_example_config())

    console.print(f"[green]✓[/green] Created configuration file: {output}")


@config_app.command("validate")
def config_validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Configuration file to validate"),
    ],
) -> None:
    """Validate a configuration file together with the current environment."""
    try:
        config = load_config(config_file)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_CONFIG_ERROR)

    console.print("[green]✓[/green] Configuration is valid")
    console.print()
    console.print(f"[bold]Alert threshold:[/bold] {config.alert_threshold} days")
    console.print(f"[bold]Mention:[/bold] {config.mention or '(none)'}")
    console.print(f"[bold]Checker:[/bold] {config.checker_path} (timeout {config.checker_timeout:g}s)")

    hosts_state = "" if Path(config.hosts_file).is_file() else " [red](missing)[/red]"
    console.print(f"[bold]Hosts file:[/bold] {config.hosts_file}{hosts_state}")

    if config.statsd_address:
        console.print(f"[bold]Heartbeat:[/bold] {config.statsd_address} ({config.statsd_prefix}.runs)")
    else:
        console.print("[bold]Heartbeat:[/bold] [dim]disabled[/dim]")


@app.command("version")
def version_command() -> None:
    """Show version information."""
    console.print(f"[bold]tlsmon[/bold] v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
