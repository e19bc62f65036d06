"""Per-invocation report settings."""

# SPDX-License-Identifier: MIT

from contextvars import ContextVar

# Reports print the daykeep banner unless --no-header or show_header: false
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    """True when report views should print their header lines."""
    return _show_header_var.get()
