# SPDX-License-Identifier: MIT

import typer

from daykeep.terminal.custom_typer import AliasedTyperGroup
from daykeep.terminal.parse import open_editor_for_text
from daykeep.terminal.store import open_store
from daykeep.view.views import note as note_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("show, s")
def show() -> None:
    with open_store() as store:
        notes = store.notes()

    note_report.notes_view(notes)


@app.command("set", no_args_is_help=True)
def set(text: str) -> None:
    """Replace the notes with TEXT."""
    with open_store() as store:
        store.set_notes(text)


@app.command("append, a", no_args_is_help=True)
def append(text: str) -> None:
    """Add TEXT as a new line at the end of the notes."""
    with open_store() as store:
        current = store.notes()
        store.set_notes(f"{current}\n{text}" if current else text)


@app.command("edit, e")
def edit() -> None:
    """Edit the notes in $EDITOR."""
    with open_store() as store:
        store.set_notes(open_editor_for_text(store.notes()))
