"""CLI tests — argument forwarding, defaults, help, exit-code propagation.

run_traced is replaced with an AsyncMock so no child is ever spawned.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from demon.main import app

runner = CliRunner()


def test_help_exits_zero_without_spawning():
    with patch("demon.tracer.lifecycle.run_traced", new=AsyncMock(return_value=0)) as run:
        result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "--stdout" in result.output
    assert "--stderr" in result.output
    run.assert_not_called()


def test_defaults_and_forwarded_args():
    with patch("demon.tracer.lifecycle.run_traced", new=AsyncMock(return_value=0)) as run:
        result = runner.invoke(app, ["run", "--allow-read", "main.ts"])

    assert result.exit_code == 0
    config = run.await_args.args[0]
    assert config.stdout == Path("stdout.log")
    assert config.stderr == Path("stderr.log")
    assert config.forward == ["run", "--allow-read", "main.ts"]


def test_log_paths_from_options(tmp_path):
    out, err = tmp_path / "o.log", tmp_path / "e.log"
    with patch("demon.tracer.lifecycle.run_traced", new=AsyncMock(return_value=0)) as run:
        runner.invoke(app, ["--stdout", str(out), "--stderr", str(err), "main.ts"])

    config = run.await_args.args[0]
    assert (config.stdout, config.stderr) == (out, err)
    assert config.forward == ["main.ts"]


@pytest.mark.parametrize("child_code", [0, 1, 7])
def test_exit_code_is_the_childs(child_code):
    with patch("demon.tracer.lifecycle.run_traced", new=AsyncMock(return_value=child_code)):
        result = runner.invoke(app, ["main.ts"])

    assert result.exit_code == child_code
