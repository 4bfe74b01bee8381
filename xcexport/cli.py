"""
xcexport CLI.

Command-line interface for exporting a signed .ipa from an Xcode archive.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Optional

import pydantic
import typer
from rich.console import Console
from rich.table import Table

from .core.config import Config
from .core.exceptions import UserAbortError, XcExportError
from .core.logging import get_logger, setup_logging
from .orchestration import run_export_flow
from .services.archives import discover_archives
from .ui.console import Messenger

app = typer.Typer(
    name="xcexport",
    help="Export a signed .ipa from a previously built Xcode archive",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)

EXIT_INTERRUPTED = 130
EXIT_BAD_CONFIG = 2


class Naming(str, Enum):
    """How the .ipa name is derived from the archive name."""

    FIRST_WORD = "first-word"
    FULL_NAME = "full-name"


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"xcexport v{__version__}")
        raise typer.Exit()


def _load_config(**overrides: Any) -> Config:
    try:
        return Config.from_env(**overrides)
    except pydantic.ValidationError as e:
        console.print("[red]Invalid configuration:[/red]")
        for err in e.errors():
            location = ".".join(str(part) for part in err["loc"])
            console.print(f"  {location}: {err['msg']}", markup=False)
        raise typer.Exit(EXIT_BAD_CONFIG)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """xcexport: interactive .xcarchive to .ipa export."""
    pass


@app.command()
def run(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Answer 'y' to every confirmation prompt [env: XCEXPORT_AUTO_ACCEPT]",
    ),
    archive: Optional[Path] = typer.Option(
        None,
        "--archive",
        "-a",
        help="Operate on this .xcarchive instead of choosing from a list [env: XCEXPORT_ARCHIVE]",
    ),
    archives_dir: Optional[Path] = typer.Option(
        None,
        "--archives-dir",
        help="Where .xcarchive bundles are stored [env: XCEXPORT_ARCHIVES_DIR]",
    ),
    profiles_dir: Optional[Path] = typer.Option(
        None,
        "--profiles-dir",
        help="Where provisioning profiles are installed [env: XCEXPORT_PROFILES_DIR]",
    ),
    export_dir: Optional[Path] = typer.Option(
        None,
        "--export-dir",
        help="Where the .ipa is written [env: XCEXPORT_EXPORT_DIR]",
    ),
    count: Optional[int] = typer.Option(
        None,
        "--count",
        "-n",
        min=1,
        help="Number of recent archives to list [env: XCEXPORT_NUM_ARCHIVES]",
    ),
    naming: Optional[Naming] = typer.Option(
        None,
        "--naming",
        help="How the .ipa name is derived from the archive name [env: XCEXPORT_NAMING]",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the export command instead of running it [env: XCEXPORT_DRY_RUN]",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose diagnostic logging on stderr",
    ),
) -> None:
    """Select an archive, detect its provisioning profile and export a signed .ipa."""
    config = _load_config(
        auto_accept=True if yes else None,
        archive_override=archive,
        archives_dir=archives_dir,
        profiles_dir=profiles_dir,
        export_dir=export_dir,
        num_archives=count,
        naming_rule=naming.value if naming else None,
        dry_run=True if dry_run else None,
        log_level="DEBUG" if verbose else None,
    )
    setup_logging(config)

    messenger = Messenger.from_config(config)
    try:
        run_export_flow(config, messenger)
    except UserAbortError as e:
        messenger.warn(e.message)
        raise typer.Exit(e.exit_code)
    except XcExportError as e:
        logger.debug("Export workflow failed", error=str(e))
        for line in e.lines():
            messenger.error(line)
        raise typer.Exit(e.exit_code)
    except KeyboardInterrupt:
        messenger.error("Interrupted")
        raise typer.Exit(EXIT_INTERRUPTED)


@app.command("list")
def list_archives(
    archives_dir: Optional[Path] = typer.Option(
        None,
        "--archives-dir",
        help="Where .xcarchive bundles are stored [env: XCEXPORT_ARCHIVES_DIR]",
    ),
    count: Optional[int] = typer.Option(
        None,
        "--count",
        "-n",
        min=1,
        help="Number of recent archives to list [env: XCEXPORT_NUM_ARCHIVES]",
    ),
) -> None:
    """List the most recent archives without exporting anything."""
    config = _load_config(archives_dir=archives_dir, num_archives=count)
    setup_logging(config)

    candidates = discover_archives(config.archives_dir, config.num_archives, config.archive_suffix)
    if not candidates:
        console.print(f"[yellow]No archives found under[/yellow] {config.archives_dir}", highlight=False)
        raise typer.Exit(1)

    table = Table(title="Recent Archives")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Archive")
    table.add_column("Modified", style="dim")

    for number, candidate in enumerate(candidates, start=1):
        modified = candidate.modified_at.strftime("%Y-%m-%d %H:%M") if candidate.modified_at else "-"
        table.add_row(str(number), str(candidate.path), modified)

    console.print(table)


@app.command()
def config() -> None:
    """Show the effective configuration."""
    cfg = _load_config()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Auto Accept", str(cfg.auto_accept))
    table.add_row("Archives Listed", str(cfg.num_archives))
    table.add_row("Archive Override", str(cfg.archive_override or "-"))
    table.add_row("Archives Dir", str(cfg.archives_dir))
    table.add_row("Profiles Dir", str(cfg.profiles_dir))
    table.add_row("Export Dir", str(cfg.export_dir))
    table.add_row("Naming Rule", cfg.naming_rule)
    table.add_row("Export Tool", cfg.tool.executable)
    table.add_row("Dry Run", str(cfg.dry_run))
    table.add_row("Log Level", cfg.log_level)

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  XCEXPORT_AUTO_ACCEPT, XCEXPORT_NUM_ARCHIVES, XCEXPORT_ARCHIVE")
    console.print("  XCEXPORT_ARCHIVES_DIR, XCEXPORT_PROFILES_DIR, XCEXPORT_EXPORT_DIR")
    console.print("  XCEXPORT_NAMING, XCEXPORT_EXPORT_TOOL, XCEXPORT_DRY_RUN, XCEXPORT_LOG_LEVEL")


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
