# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from daykeep.color import (
    COMPLETED_TASK_COLOR,
    END_TIME_COLOR,
    OVERDUE_COLOR,
    START_TIME_COLOR,
)
from daykeep.model.task import DaySummary, Task
from daykeep.time import date_to_display_str, date_to_str, time_to_str
from daykeep.view.views.header import header


def task_state(task: Task) -> str:
    return "X" if task["completed"] else " "


def summary_line(summary: DaySummary) -> str:
    return (
        f"{summary['total']} total  •  {summary['pending']} pending  •  "
        f"{summary['done']} done"
    )


def day_view(tasks: list[Task], summary: DaySummary, title: str) -> None:
    header(title, summary_line(summary))

    tasks_table = Table(box=box.SIMPLE)
    for column in ("id", "state", "start", "end", "description"):
        tasks_table.add_column(column)

    for task in tasks:
        row = [
            str(task["id"]),
            task_state(task),
            time_to_str(task["start"]),
            time_to_str(task["end"]),
            escape(task["description"]),
        ]
        if task["completed"]:
            row = [
                f"[{COMPLETED_TASK_COLOR}]{value}[/{COMPLETED_TASK_COLOR}]"
                for value in row
            ]
        else:
            row[2] = f"[{START_TIME_COLOR}]{row[2]}[/{START_TIME_COLOR}]"
            row[3] = f"[{END_TIME_COLOR}]{row[3]}[/{END_TIME_COLOR}]"
        tasks_table.add_row(*row)

    console = Console()
    console.print(tasks_table)


def overdue_view(tasks: list[Task]) -> None:
    header("overdue", f"{len(tasks)} task(s)")

    overdue_table = Table(box=box.SIMPLE)
    for column in ("id", "date", "start", "end", "description"):
        overdue_table.add_column(column)

    for task in tasks:
        overdue_table.add_row(
            str(task["id"]),
            f"[{OVERDUE_COLOR}]{date_to_str(task['date'])}[/{OVERDUE_COLOR}]",
            time_to_str(task["start"]),
            time_to_str(task["end"]),
            escape(task["description"]),
        )

    console = Console()
    console.print(overdue_table)


def single_task_view(task: Task) -> None:
    header(date_to_display_str(task["date"]), "task")

    task_table = Table(box=box.SIMPLE)
    task_table.add_column("property")
    task_table.add_column("value")

    task_table.add_row("id", str(task["id"]))
    task_table.add_row("description", escape(task["description"]))
    task_table.add_row("date", date_to_str(task["date"]))
    task_table.add_row("start", time_to_str(task["start"]))
    task_table.add_row("end", time_to_str(task["end"]))
    task_table.add_row("completed", "yes" if task["completed"] else "no")

    console = Console()
    console.print(task_table)
