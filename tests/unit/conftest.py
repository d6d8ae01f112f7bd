"""Unit-test conftest — sample trace lines, fake renderer, shared fixtures.

All fixtures here are available to every test under tests/unit/ without import.
"""

from __future__ import annotations

import asyncio
import io

import pytest
from rich.console import Console

from demon.models.trace import AggregateRow
from demon.tracer.aggregator import OpAggregator


# ─────────────────────────────────────────────────────────────────────────────
# Sample trace
# ─────────────────────────────────────────────────────────────────────────────

SAMPLE_TRACE = (
    "[    29.721] op_run_microtasks                                  : Completed Slow\n"
    "[    29.721] op_bootstrap_no_color                              : Dispatched Slow\n"
    "[    29.721] op_bootstrap_no_color                              : Completed Slow\n"
    "[    29.721] op_bootstrap_is_stdout_tty                         : Dispatched Slow\n"
    "[    29.722] op_read_file_async                                 : Dispatched Async\n"
    "[    29.722] op_read_file_async                                 : Dispatched Async\n"
    "[    29.723] op_read_file_async                                 : Completed Async\n"
    "not a trace line at all\n"
)


# ─────────────────────────────────────────────────────────────────────────────
# Fakes
# ─────────────────────────────────────────────────────────────────────────────

class RecordingRenderer:
    """Stands in for TableRenderer; keeps every snapshot it was asked to draw.

    Args:
        raises: If set, render() raises this on every call.
    """

    def __init__(self, raises: Exception | None = None) -> None:
        self.raises = raises
        self.calls: list[list[AggregateRow]] = []
        self.attempts: int = 0

    def render(self, rows) -> None:
        self.attempts += 1
        if self.raises:
            raise self.raises
        self.calls.append(list(rows))


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def make_reader(data: bytes) -> asyncio.StreamReader:
    """A StreamReader pre-loaded with ``data`` and already at EOF.

    Must be called from inside a running event loop.
    """
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    reader.feed_eof()
    return reader


def plain_console() -> Console:
    """A non-terminal Console writing plain text to an in-memory buffer."""
    return Console(file=io.StringIO(), width=200, color_system=None)


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def aggregator():
    """A fresh OpAggregator for each test."""
    return OpAggregator()


@pytest.fixture
def renderer():
    """A RecordingRenderer that never fails."""
    return RecordingRenderer()


@pytest.fixture
def console():
    return plain_console()


@pytest.fixture
def sample_trace():
    """A short stderr capture mixing trace lines with other output."""
    return SAMPLE_TRACE


@pytest.fixture
def failing_renderer():
    """A RecordingRenderer whose render() always raises."""
    return RecordingRenderer(raises=RuntimeError("terminal gone"))


@pytest.fixture
def reader_factory():
    """Returns make_reader; call it inside the test's event loop."""
    return make_reader
