"""Tracer — parse, aggregate, render and supervise the child's op trace."""

from demon.tracer.aggregator import OpAggregator
from demon.tracer.parser import parse_strace_line
from demon.tracer.render import TableRenderer, format_table

__all__ = ["OpAggregator", "TableRenderer", "format_table", "parse_strace_line"]
