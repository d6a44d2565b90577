"""Tests for the CLI context object."""

from nob.config import NobConfig
from nob.containers import DA_INIT_CAP
from nob.context import NobContext
from nob.process import Cmd, Procs
from nob.tracks import Tracks


def test_array_uses_configured_init_cap():
    ctx = NobContext()
    ctx.config = NobConfig(da_init_cap=16)

    cmd = ctx.array(Cmd).append("cc")
    assert cmd.capacity == 16

    tracks = ctx.array(Tracks)
    assert tracks.init_cap == 16
    assert ctx.array(Procs).init_cap == 16


def test_array_with_items():
    ctx = NobContext()
    ctx.config = NobConfig(da_init_cap=4)

    cmd = ctx.array(Cmd, ["cc", "-c", "main.c", "-o", "main.o"])
    assert cmd.count == 5
    assert cmd.capacity == 8


def test_array_without_config_falls_back_to_default():
    ctx = NobContext()
    assert ctx.init_cap == DA_INIT_CAP
    assert ctx.array(Cmd).append("cc").capacity == DA_INIT_CAP
