"""StreamSupervisor — copies the child's two output pipes to their log files.

stdout is copied untouched. stderr is copied untouched too, and once each
chunk is on disk it is split into lines, parsed, aggregated and rendered.

A failing pipe never takes the process down: the failure is logged, the
log file is closed, and the rest of the pipe is read and discarded so the
child is never left blocked on a full pipe.
"""

from __future__ import annotations

import asyncio
import codecs
from pathlib import Path

import structlog

from demon.config import settings
from demon.tracer.aggregator import OpAggregator
from demon.tracer.render import TableRenderer

logger = structlog.get_logger().bind(component="tracer.supervisor")


class LineSplitter:
    """Splits decoded text into lines, holding back an unterminated tail."""

    def __init__(self) -> None:
        self._pending = ""

    def feed(self, text: str) -> list[str]:
        """Return the lines completed by ``text``; keep the remainder."""
        lines = (self._pending + text).split("\n")
        self._pending = lines.pop()
        return lines

    def flush(self) -> list[str]:
        """Return the held-back tail (if any) once the stream has ended."""
        tail, self._pending = self._pending, ""
        return [tail] if tail else []


class StreamSupervisor:
    """Drives the verbatim stdout pipe and the intercepting stderr pipe."""

    def __init__(
        self,
        aggregator: OpAggregator | None = None,
        renderer: TableRenderer | None = None,
        chunk_size: int | None = None,
    ) -> None:
        self.aggregator = aggregator if aggregator is not None else OpAggregator()
        self.renderer = renderer if renderer is not None else TableRenderer()
        self.chunk_size = chunk_size if chunk_size is not None else settings.read_chunk_size

    async def pipe_verbatim(self, reader: asyncio.StreamReader, path: Path) -> None:
        """Copy every byte from ``reader`` into ``path``."""
        await self._pipe(reader, path, stream="stdout", on_chunk=None)

    async def pipe_trace(self, reader: asyncio.StreamReader, path: Path) -> None:
        """Copy ``reader`` into ``path``, feeding each chunk through the tracer.

        A renderer failure only turns the live table off; the chunk is
        already on disk and the rest of the stream is still logged.
        """
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        splitter = LineSplitter()
        rendering = True

        def on_chunk(chunk: bytes) -> None:
            nonlocal rendering
            if chunk:
                lines = splitter.feed(decoder.decode(chunk))
            else:
                lines = splitter.feed(decoder.decode(b"", final=True)) + splitter.flush()
                if not lines:
                    return
            self.aggregator.ingest_lines(lines)
            rows = self.aggregator.snapshot()
            if not rows or not rendering:
                return
            try:
                self.renderer.render(rows)
            except Exception as exc:
                rendering = False
                logger.error("table_render_failed", error=str(exc))

        await self._pipe(reader, path, stream="stderr", on_chunk=on_chunk)

    async def _pipe(self, reader, path, *, stream, on_chunk) -> None:
        """Write chunks to ``path`` until EOF; ``on_chunk(b"")`` marks the end."""
        log = logger.bind(stream=stream, path=str(path))
        total = 0
        try:
            with open(path, "wb") as sink:
                while chunk := await reader.read(self.chunk_size):
                    sink.write(chunk)
                    sink.flush()
                    total += len(chunk)
                    if on_chunk is not None:
                        on_chunk(chunk)
                if on_chunk is not None:
                    on_chunk(b"")
        except Exception as exc:
            log.error("stream_pipe_failed", error=str(exc), bytes_written=total)
            await _drain(reader, self.chunk_size)
            return
        log.debug("stream_pipe_closed", bytes_written=total)


async def _drain(reader: asyncio.StreamReader, chunk_size: int) -> None:
    """Discard what is left on ``reader`` until EOF or until it fails too."""
    discarded = 0
    try:
        while chunk := await reader.read(chunk_size):
            discarded += len(chunk)
    except Exception as exc:
        logger.error("stream_drain_failed", error=str(exc), bytes_discarded=discarded)
        return
    if discarded:
        logger.warning("stream_drained", bytes_discarded=discarded)
