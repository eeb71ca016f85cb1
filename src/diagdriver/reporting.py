# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render collected diagnostics and driver failures on the console."""

from __future__ import annotations

from collections.abc import Mapping
from functools import cache

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import Position

FAILURE_SYMBOL = "❌ "


@cache
def get_console(*, color: bool) -> Console:
    """Return the shared console, with or without colour output."""

    return Console(no_color=not color, highlight=False, soft_wrap=True)


def diagnostics_table(result: Mapping[Position, str]) -> Table:
    """Build a table listing one row per position, sorted by file then line.

    Args:
        result: Mapping of positions to diagnostic messages.

    Returns:
        Table: Rich table with file, line and message columns.
    """

    table = Table(title="Diagnostics", caption=f"{len(result)} diagnostic(s)")
    table.add_column("File", style="cyan", no_wrap=True)
    table.add_column("Line", style="magenta", justify="right")
    table.add_column("Message", overflow="fold")
    for position in sorted(result):
        table.add_row(position.filename, str(position.line), result[position])
    return table


def render_result(result: Mapping[Position, str], *, color: bool) -> None:
    """Print ``result`` as a table."""

    get_console(color=color).print(diagnostics_table(result))


def fail(error: BaseException, *, color: bool, use_emoji: bool) -> None:
    """Print the message of a failure that aborted the collection.

    Args:
        error: Configuration or driver failure to report.
        color: Render the message in red when ``True``.
        use_emoji: Prefix the message with a failure symbol when ``True``.
    """

    text = Text(f"{FAILURE_SYMBOL if use_emoji else ''}{error}")
    if color:
        text.stylize("bold red")
    get_console(color=color).print(text)


__all__ = ["diagnostics_table", "fail", "get_console", "render_result"]
