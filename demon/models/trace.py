"""Trace models — one parsed strace line, and one row of the summary table."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Fixed column schema of the summary table, in display order.
COLUMNS: tuple[str, ...] = (
    "operation",
    "dispatched",
    "completed",
    "pending",
    "fast",
    "slow",
    "async",
)


class OpKind(str, Enum):
    """Dispatch-time classification of an op."""

    FAST = "Fast"
    SLOW = "Slow"
    ASYNC = "Async"
    UNKNOWN = "Unknown"


class TraceEvent(BaseModel):
    """A single Dispatched/Completed point reported by the traced runtime."""

    model_config = ConfigDict(frozen=True)

    timestamp: str = Field(description="Bracketed label, kept verbatim (not parsed)")
    operation: str = Field(description="Op name, e.g. 'op_read_file_async'")
    completed: bool = Field(description="True for Completed, False for Dispatched")
    kind: OpKind | None = Field(default=None, description="Fast/Slow/Async classification")


class AggregateRow(BaseModel):
    """Per-op counters projected out of the aggregator for one render."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    operation: str
    dispatched: int = 0
    completed: int = 0
    fast: int = 0
    slow: int = 0
    async_: int = Field(default=0, alias="async")

    @property
    def pending(self) -> int:
        """Dispatched but not yet completed, floored at zero."""
        return max(0, self.dispatched - self.completed)

    def cells(self) -> list[str]:
        """Stringified values in COLUMNS order."""
        return [
            self.operation,
            str(self.dispatched),
            str(self.completed),
            str(self.pending),
            str(self.fast),
            str(self.slow),
            str(self.async_),
        ]
