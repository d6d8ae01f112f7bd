"""Parser for the runtime's op-trace lines.

Lines look like::

    [    29.721] op_bootstrap_no_color                              : Dispatched Slow
    [    29.721] op_bootstrap_no_color                              : Completed Slow

Anything that does not fit is not an event. Parsing never raises.
"""

from __future__ import annotations

from demon.models.trace import OpKind, TraceEvent

# Excluded by exact match only; "op_run_microtasks" still counts.
_EXCLUDED_OP = "op_run_microtask"

_KINDS = {kind.value: kind for kind in (OpKind.FAST, OpKind.SLOW, OpKind.ASYNC)}


def parse_strace_line(line: str) -> TraceEvent | None:
    """Turn one trace line into a TraceEvent, or None if it is not one."""
    timestamp_end = line.find("]")
    if timestamp_end == -1:
        return None

    timestamp = line[1:timestamp_end]

    op_start = line.find("op_", timestamp_end)
    if op_start == -1:
        return None

    op_end = line.find(":", op_start)
    if op_end == -1:
        return None

    operation = line[op_start:op_end].strip()
    if not operation or operation == _EXCLUDED_OP:
        return None

    status = line[op_end + 1:].strip()
    if not status:
        return None

    tokens = status.split()
    if len(tokens) < 2 or tokens[1] not in _KINDS:
        return None

    return TraceEvent(
        timestamp=timestamp,
        operation=operation,
        completed="Completed" in status,
        kind=_KINDS[tokens[1]],
    )
