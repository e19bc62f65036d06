# SPDX-License-Identifier: MIT

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from daykeep.color import NOTES_COLOR
from daykeep.view.views.header import header


def notes_view(notes: str) -> None:
    header("notes")

    body = escape(notes) if notes else "[bright_black](empty)[/bright_black]"
    console = Console()
    console.print(Panel(body, border_style=NOTES_COLOR, expand=False))
