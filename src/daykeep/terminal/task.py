# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from daykeep.repository.configuration import CONFIGURATION_REPO
from daykeep.service.schedule import reschedule_task
from daykeep.terminal.custom_typer import AliasedTyperGroup
from daykeep.terminal.parse import parse_date
from daykeep.terminal.store import open_store
from daykeep.time import date_to_display_str, now_local, today_local
from daykeep.view.views import task as task_report

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    description: str,
    start: Annotated[str, typer.Option("--start", "-s", help="valid input: HH:MM")],
    end: Annotated[str, typer.Option("--end", "-e", help="valid input: HH:MM")],
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    with open_store() as store:
        id = store.add(description, date or today_local(), start, end)
        new_task = store.get(id)

    task_report.single_task_view(new_task)


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: int,
    description: Annotated[Optional[str], typer.Option("--description", "-D")] = None,
    start: Annotated[
        Optional[str], typer.Option("--start", "-s", help="valid input: HH:MM")
    ] = None,
    end: Annotated[
        Optional[str], typer.Option("--end", "-e", help="valid input: HH:MM")
    ] = None,
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    with open_store() as store:
        store.update(id, description=description, date=date, start=start, end=end)
        task = store.get(id)

    task_report.single_task_view(task)


@app.command("done, x", no_args_is_help=True)
def done(id: int) -> None:
    """Toggle the completion flag of a task."""
    with open_store() as store:
        store.toggle_complete(id)
        task = store.get(id)

    task_report.single_task_view(task)


@app.command("delete, rm", no_args_is_help=True)
def delete(id: int) -> None:
    with open_store() as store:
        store.delete(id)

    typer.echo(f"Deleted task {id}")


@app.command("reschedule, r", no_args_is_help=True)
def reschedule(
    id: int,
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    """Move a task to another day (today by default)."""
    config = CONFIGURATION_REPO.get_config()
    today = today_local()
    with open_store() as store:
        reschedule_task(
            store, id, date or today, today, config["allow_past_reschedule"]
        )
        task = store.get(id)

    task_report.single_task_view(task)


@app.command("list, ls")
def list_(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    day = date or today_local()
    with open_store() as store:
        tasks = store.tasks_for(day)
        summary = store.summary_for(day)

    title = date_to_display_str(day)
    if day == today_local():
        title += " (Today)"
    task_report.day_view(tasks, summary, title)


@app.command("overdue, o")
def overdue() -> None:
    with open_store() as store:
        tasks = store.overdue(now_local())

    task_report.overdue_view(tasks)
