# SPDX-License-Identifier: MIT

import os
import re
import subprocess
import tempfile
from typing import Optional

import pendulum
import typer

from daykeep.time import date_from_str, today_local


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    if date_param is None:
        return None

    date = str(date_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return date_from_str(date)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date '{date}': {e}")

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^[-+]?\d+$", date):
        return today_local().add(days=int(date))

    if date == "today" or date == "t":
        return today_local()
    if date == "yesterday" or date == "y":
        return today_local().subtract(days=1)
    if date == "tomorrow" or date == "o":
        return today_local().add(days=1)
    raise typer.BadParameter(
        "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"
    )


def open_editor_for_text(initial_text: Optional[str] = None) -> str:
    """
    Open the user's preferred editor to edit note text.
    Returns the edited text with trailing newlines removed.
    """
    editor = os.environ.get("EDITOR", "nano")

    with tempfile.NamedTemporaryFile(mode="w+", suffix=".txt") as tf:
        if initial_text is not None:
            tf.write(initial_text)
            tf.flush()

        subprocess.run([editor, tf.name], check=True)
        with open(tf.name, encoding="utf-8") as edited:
            text = edited.read()
        # Remove trailing newlines but preserve internal empty lines
        return text.rstrip("\n")
