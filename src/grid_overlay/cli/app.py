"""Typer CLI application."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from grid_overlay.config import ConfigError, PickerConfig, load_config

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Optional[Path], level: str = "INFO") -> None:
    """Send package logs to a file; the terminal belongs to the UI."""
    if log_file is None:
        return
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"unknown log level {level!r}", param_hint="--log-level")
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("grid_overlay")
    root.addHandler(handler)
    root.setLevel(numeric)


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="grid-overlay",
        help="Pick colors from a floating swatch grid in the terminal.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()
    err_console = Console(stderr=True)

    def load(config_path: Optional[Path]) -> PickerConfig:
        try:
            return load_config(config_path)
        except ConfigError as e:
            err_console.print(f"[red]Config error:[/] {e}")
            raise typer.Exit(1)

    @app.command()
    def pick(
        config_path: Annotated[Optional[Path], typer.Option("--config", "-c", help="Config file (JSON)")] = None,
        log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Write logs to this file")] = None,
        log_level: Annotated[str, typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = "INFO",
    ) -> None:
        """Launch the interactive text color picker."""
        configure_logging(log_file, log_level)
        config = load(config_path)

        from grid_overlay.cli.studio.picker import run_picker
        logger.info("Starting picker with %d colors", len(config.colors))
        run_picker(config)

    @app.command()
    def swatches(
        config_path: Annotated[Optional[Path], typer.Option("--config", "-c", help="Config file (JSON)")] = None,
        context: Annotated[Optional[str], typer.Option("--context", help="Editable whose palette to list")] = None,
        json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    ) -> None:
        """List the swatches the picker would show."""
        from grid_overlay.palette import SwatchIndex, generate_swatches

        config = load(config_path)
        colors = config.colors_for(context) if context else config.colors
        if not colors:
            console.print(f"[yellow]No color picker for {context}[/]")
            raise typer.Exit(1)

        try:
            items = generate_swatches(colors, SwatchIndex(config.colors))
        except ValueError as e:
            err_console.print(f"[red]Bad color:[/] {e}")
            raise typer.Exit(1)

        if json_output:
            data = [
                {
                    "id": swatch.swatch_id,
                    "value": swatch.value,
                    "hex": swatch.color.hex if swatch.color else None,
                    "clear": swatch.clear,
                }
                for swatch in items
            ]
            print(json.dumps(data, indent=2))
            return

        table = Table(title=f"Swatches ({context or 'default'})")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Id", style="cyan")
        table.add_column("Value")
        table.add_column("Color")
        for position, swatch in enumerate(items):
            if swatch.clear:
                sample = "[red]remove color[/]"
            elif swatch.color is not None:
                sample = f"[on {swatch.color.hex.lower()}]    [/] {swatch.color.hex}"
            else:
                sample = "[dim](unresolved)[/]"
            table.add_row(str(position), swatch.swatch_id or "-", swatch.value, sample)
        console.print(table)

    @app.command()
    def lookup(
        style: Annotated[str, typer.Argument(help="Style value, e.g. 'rgb(255, 0, 0)' or '#FF0000'")],
        config_path: Annotated[Optional[Path], typer.Option("--config", "-c", help="Config file (JSON)")] = None,
    ) -> None:
        """Find the swatch id for a color style."""
        from grid_overlay.palette import SwatchIndex

        config = load(config_path)
        swatch_id = SwatchIndex(config.colors).lookup(style)
        if swatch_id is None:
            console.print(f"[yellow]No swatch matches {style}[/]")
            raise typer.Exit(1)
        print(swatch_id)

    return app
