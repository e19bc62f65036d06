# SPDX-License-Identifier: MIT

import logging
from contextlib import contextmanager
from typing import Iterator

import typer
from rich.console import Console
from rich.markup import escape

from daykeep import configuration
from daykeep.errors import DaykeepError, PersistenceFailure
from daykeep.repository.persistence import PersistenceGateway
from daykeep.repository.task import TaskStore

logger = logging.getLogger(__name__)

error_console = Console(stderr=True)


def get_gateway() -> PersistenceGateway:
    return PersistenceGateway(configuration.DATA_FILE_PATH)


def fail(message: str) -> typer.Exit:
    error_console.print(f"[red]{escape(message)}[/red]")
    return typer.Exit(code=1)


@contextmanager
def open_store() -> Iterator[TaskStore]:
    """
    Load the store for a single command and save it afterwards if changed.

    An unreadable data file aborts the command instead of starting empty,
    so a one-shot command never overwrites data it could not read.
    """
    gateway = get_gateway()
    try:
        store = gateway.load()
    except PersistenceFailure as e:
        raise fail(str(e))

    try:
        yield store
    except DaykeepError as e:
        logger.warning("command failed: %s", e)
        raise fail(str(e))

    if store.is_dirty:
        try:
            gateway.save(store)
        except PersistenceFailure as e:
            raise fail(str(e))
