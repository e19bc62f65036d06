# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from daykeep.repository.configuration import CONFIGURATION_REPO
from daykeep.service.session import Session
from daykeep.terminal import configuration, note, task
from daykeep.terminal.custom_typer import AliasedTyperGroup
from daykeep.terminal.store import get_gateway
from daykeep.terminal.tui import run_tui
from daykeep.view import state as view_state

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="daykeep - Daily task planner in the terminal",
    invoke_without_command=True,
)
app.add_typer(task.app, name="task, t")
app.add_typer(note.app, name="note, n")
app.add_typer(configuration.app, name="config, c")


@app.command("ui, u")
def ui() -> None:
    """Open the full-screen day planner."""
    config = CONFIGURATION_REPO.get_config()
    session = Session.open(
        get_gateway(),
        save_on_quit=config["save_on_quit"],
        allow_past_reschedule=config["allow_past_reschedule"],
    )
    run_tui(session)


@app.callback()
def main_callback(
    ctx: typer.Context,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    daykeep - Daily task planner in the terminal

    Without a command the full-screen planner opens.
    """
    if no_header:
        view_state.set_show_header(False)
    if ctx.invoked_subcommand is None:
        ui()


def run() -> None:
    app()
