"""Summary table rendering.

Columns are fixed (see ``COLUMNS``); each is as wide as its header or its
widest value, whichever is larger. Cells are left-aligned and joined with
``" | "``.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.text import Text

from demon.models.trace import COLUMNS, AggregateRow

_SEPARATOR = " | "


def format_table(rows: Sequence[AggregateRow]) -> list[str]:
    """Header line followed by one line per row. Empty rows → empty list."""
    if not rows:
        return []

    cells = [row.cells() for row in rows]
    widths = [
        max(len(column), *(len(row[i]) for row in cells))
        for i, column in enumerate(COLUMNS)
    ]

    header = _SEPARATOR.join(column.ljust(widths[i]) for i, column in enumerate(COLUMNS))
    lines = [header]
    for row in cells:
        lines.append(_SEPARATOR.join(value.ljust(widths[i]) for i, value in enumerate(row)))
    return lines


class TableRenderer:
    """Redraws the summary table in place on a rich Console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render(self, rows: Sequence[AggregateRow]) -> None:
        lines = format_table(rows)
        if not lines:
            return

        self.console.clear()
        header, *body = lines
        self.console.print(Text(header, style="bold"), soft_wrap=True)
        for line in body:
            self.console.print(line, markup=False, highlight=False, soft_wrap=True)
