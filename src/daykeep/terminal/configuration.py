# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from daykeep import configuration
from daykeep.repository.configuration import CONFIGURATION_REPO
from daykeep.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _enabled(value: bool) -> str:
    return "✓ Enabled" if value else "✗ Disabled"


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("data_file", str(configuration.DATA_FILE_PATH))
    table.add_row("save_on_quit", _enabled(config["save_on_quit"]))
    table.add_row("show_header", _enabled(config["show_header"]))
    table.add_row("allow_past_reschedule", _enabled(config["allow_past_reschedule"]))
    table.add_row("log_level", config["log_level"])
    table.add_row("log_file", str(configuration.APP_LOG_PATH))

    console.print(table)
    console.print()
    console.print(f"Config file: {configuration.APP_CONFIG_PATH}")


def validate_log_level(log_level: Optional[str]) -> Optional[str]:
    if log_level is None:
        return None
    if log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"log level must be one of {', '.join(LOG_LEVELS)}")
    return log_level.upper()


@app.command("set, s")
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory holding the data file (default: home directory)",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the home directory",
        ),
    ] = False,
    save_on_quit: Annotated[
        Optional[bool],
        typer.Option(
            "--save-on-quit/--no-save-on-quit",
            help="Save automatically when leaving the full-screen view",
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Show the header above reports",
        ),
    ] = None,
    allow_past_reschedule: Annotated[
        Optional[bool],
        typer.Option(
            "--allow-past-reschedule/--no-allow-past-reschedule",
            help="Allow rescheduling tasks to dates before today",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            callback=validate_log_level,
            help="valid input: DEBUG, INFO, WARNING, ERROR",
        ),
    ] = None,
) -> None:
    """Update configuration settings."""
    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        save_on_quit=save_on_quit,
        show_header=show_header,
        allow_past_reschedule=allow_past_reschedule,
        log_level=log_level,
    )
    CONFIGURATION_REPO.flush()
    configuration.load_data_path_configuration()

    view()
