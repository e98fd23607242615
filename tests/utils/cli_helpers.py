"""Helpers for invoking the fnresponse CLI in tests."""

from __future__ import annotations

from click.testing import CliRunner, Result

from fnresponse.cli import cli


def invoke_cli(*args: str, env: dict[str, str] | None = None) -> Result:
    """Invoke the Click CLI with the given arguments."""
    runner = CliRunner()
    return runner.invoke(cli, list(args), env=env, catch_exceptions=True)
