"""OpAggregator — folds trace events into per-op counters.

Every ingested line is kept in ``events`` (None for lines that did not
parse) so the full history stays available in emission order. Counters are
updated as events arrive; ``snapshot()`` projects them into table rows and
always agrees with a full ``refold()`` of the buffer.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from demon.models.trace import AggregateRow, OpKind, TraceEvent
from demon.tracer.parser import parse_strace_line


class OpAggregator:
    """Owns the event buffer and the dispatched/completed/kind counters."""

    def __init__(self) -> None:
        self.events: list[TraceEvent | None] = []
        self._dispatched: Counter[str] = Counter()
        self._completed: Counter[str] = Counter()
        self._kinds: dict[str, Counter[OpKind]] = {}

    def __len__(self) -> int:
        return len(self.events)

    def ingest(self, event: TraceEvent | None) -> None:
        """Append one parse result to the buffer and count it."""
        self.events.append(event)
        if event is not None:
            self._count(event)

    def ingest_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.ingest(parse_strace_line(line))

    def _count(self, event: TraceEvent) -> None:
        if event.completed:
            self._completed[event.operation] += 1
            return
        self._dispatched[event.operation] += 1
        if event.kind is not None:
            self._kinds.setdefault(event.operation, Counter())[event.kind] += 1

    def refold(self) -> None:
        """Rebuild every counter from the buffered events."""
        self._dispatched.clear()
        self._completed.clear()
        self._kinds.clear()
        for event in self.events:
            if event is not None:
                self._count(event)

    def snapshot(self) -> list[AggregateRow]:
        """Rows for every dispatched op, busiest first.

        Ops that only ever completed are left out; the table follows dispatch
        activity. Ties keep first-dispatch order (stable sort), which callers
        should not rely on.
        """
        rows = []
        for operation, dispatched in self._dispatched.items():
            kinds = self._kinds.get(operation, Counter())
            rows.append(AggregateRow(
                operation=operation,
                dispatched=dispatched,
                completed=self._completed[operation],
                fast=kinds[OpKind.FAST],
                slow=kinds[OpKind.SLOW],
                async_=kinds[OpKind.ASYNC],
            ))
        rows.sort(key=lambda row: row.dispatched, reverse=True)
        return rows
