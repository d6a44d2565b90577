"""Pytest configuration and shared fixtures."""

import sys

import pytest
from click.testing import CliRunner

from nob.cli import cli


@pytest.fixture(autouse=True)
def clean_nob_state(tmp_path, monkeypatch):
    """Isolate every test from the caller's environment and cached state.

    Runs each test from an empty working directory so no stray nob.json is
    picked up, and clears the env vars the config layer reads.
    """
    import nob.arena
    import nob.config
    import nob.log

    for var in ("NOB_CONFIG", "CC", "NO_COLOR", "NOB_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    nob.config.reset()
    nob.arena.reset_temp()
    nob.log.configure(color=False, verbose=False)
    yield
    nob.config.reset()
    nob.arena.reset_temp()
    nob.log.configure(color=True, verbose=False)


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args.

    Usage:
        result = invoke(["stale", "out", "in.c"])  # exit_code, output, etc.
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke


@pytest.fixture
def py():
    """Build an argv that runs a snippet of Python in a child process."""

    def _py(code):
        return [sys.executable, "-c", code]

    return _py


@pytest.fixture
def set_mtime():
    """Set a path's modification time (whole seconds)."""
    import os

    def _set(path, seconds):
        os.utime(path, (seconds, seconds))

    return _set
