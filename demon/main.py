"""demon CLI — run a command under the op tracer with a live summary table.

Usage:
    demon [--stdout PATH] [--stderr PATH] [--] ARGS...

Everything demon does not recognise is forwarded to the child, after the
instrumentation flag. The child's raw stdout and stderr land in the two log
files; the summary table of traced ops is redrawn on the terminal as the
trace arrives.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from demon.config import RunConfig, settings
from demon.utils import get_logger, setup_logging

# Initialize logging on import
setup_logging()

app = typer.Typer(
    name="demon",
    help="Run a command with op tracing and watch a live summary of its ops.",
    add_completion=False,
)
console = Console()
log = get_logger("main")


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def run(
    ctx: typer.Context,
    stdout: Path = typer.Option(
        Path(settings.stdout_log), "--stdout", help="Redirect the child's stdout to a file",
    ),
    stderr: Path = typer.Option(
        Path(settings.stderr_log), "--stderr", help="Redirect the child's stderr to a file",
    ),
):
    """Trace a child process and render a live table of its ops."""
    from demon.tracer.lifecycle import run_traced

    config = RunConfig(
        stdout=stdout,
        stderr=stderr,
        forward=list(ctx.args),
    )
    log.debug("run_config", stdout=str(config.stdout), stderr=str(config.stderr), forward=config.forward)

    code = asyncio.run(run_traced(config, console=console))
    raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
