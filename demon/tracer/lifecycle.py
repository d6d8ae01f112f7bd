"""Lifecycle — spawn the traced child, wire its pipes, report its exit code.

The child gets no stdin. Its stdout and stderr are always piped through the
StreamSupervisor, never inherited. Whatever the child exits with becomes
our own exit code.
"""

from __future__ import annotations

import asyncio

import structlog
from rich.console import Console

from demon.config import DemonSettings, RunConfig, settings as default_settings
from demon.tracer.aggregator import OpAggregator
from demon.tracer.render import TableRenderer
from demon.tracer.supervisor import StreamSupervisor

logger = structlog.get_logger().bind(component="tracer.lifecycle")


def build_command(config: RunConfig, settings: DemonSettings | None = None) -> list[str]:
    """Executable, then the trace flag, then the forwarded arguments."""
    settings = settings or default_settings
    return [settings.executable, settings.trace_flag, *config.forward]


def exit_code_for(returncode: int) -> int:
    """Map an asyncio returncode to a process exit code.

    A child killed by signal N is reported by asyncio as -N; the shell
    convention for that is 128 + N.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


async def spawn_child(cmd: list[str]) -> asyncio.subprocess.Process:
    """Start the child with stdin closed and both outputs piped."""
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.error("child_spawn_failed", cmd=cmd, error=str(e))
        raise
    logger.info("child_spawned", pid=proc.pid, cmd=cmd)
    return proc


async def run_traced(
    config: RunConfig,
    console: Console | None = None,
    settings: DemonSettings | None = None,
) -> int:
    """Run the child to completion under the live table. Returns its exit code."""
    settings = settings or default_settings
    console = console or Console()

    proc = await spawn_child(build_command(config, settings))

    supervisor = StreamSupervisor(
        aggregator=OpAggregator(),
        renderer=TableRenderer(console),
        chunk_size=settings.read_chunk_size,
    )
    pipes = [
        asyncio.create_task(supervisor.pipe_verbatim(proc.stdout, config.stdout)),
        asyncio.create_task(supervisor.pipe_trace(proc.stderr, config.stderr)),
    ]

    returncode = await proc.wait()
    outcomes = await asyncio.gather(*pipes, return_exceptions=True)
    for stream, outcome in zip(("stdout", "stderr"), outcomes):
        if isinstance(outcome, Exception):
            logger.error("stream_task_failed", stream=stream, error=str(outcome))

    logger.info(
        "child_exited",
        pid=proc.pid,
        returncode=returncode,
        trace_lines=len(supervisor.aggregator),
    )
    console.print(f"Child process exited with status {returncode}", markup=False, highlight=False)
    return exit_code_for(returncode)
