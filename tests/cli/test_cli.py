"""CLI tests driven through click's CliRunner."""

import json
import sys
import textwrap
from pathlib import Path

import pytest

from nob import arena

NOW = 1_700_000_000

# Stand-in compiler invoked as: python fakecc.py <sources...> -o <binary>
FAKE_CC = textwrap.dedent(
    """
    import sys
    args = sys.argv[1:]
    out = args[args.index("-o") + 1]
    sources = [a for a in args if not a.startswith("-") and a != out]
    with open(out, "w") as f:
        for src in sources:
            f.write(open(src).read())
    """
)


@pytest.fixture
def c_project(tmp_path, set_mtime):
    work = Path.cwd()
    (work / "main.c").write_text("int main(void) { return 0; }\n")
    (work / "tracks.h").write_text("/* tracks */\n")
    for name in ("main.c", "tracks.h"):
        set_mtime(work / name, NOW)
    fakecc = tmp_path / "fakecc.py"
    fakecc.write_text(FAKE_CC)
    (work / "nob.json").write_text(
        json.dumps(
            {
                "cc": sys.executable,
                "cflags": [str(fakecc)],
                "binary": "main",
                "sources": ["main.c"],
                "inputs": ["tracks.h"],
            }
        )
    )
    return work


def test_help_lists_commands(invoke):
    result = invoke(["--help"])
    assert result.exit_code == 0
    for name in ("build", "stale", "run", "batch", "copy", "launch", "tracks"):
        assert name in result.output


def test_build_compiles_then_reports_up_to_date(invoke, c_project):
    result = invoke(["build"])
    assert result.exit_code == 0, result.output
    assert (c_project / "main").read_text() == "int main(void) { return 0; }\n"
    assert "CMD:" in result.output

    result = invoke(["build"])
    assert result.exit_code == 0
    assert "is up to date" in result.output


def test_build_after_touching_an_input(invoke, c_project, set_mtime):
    assert invoke(["build"]).exit_code == 0
    set_mtime(c_project / "main", NOW)
    set_mtime(c_project / "tracks.h", NOW + 10)

    result = invoke(["build"])
    assert result.exit_code == 0
    assert "CMD:" in result.output


def test_build_missing_input_fails(invoke, c_project):
    (c_project / "tracks.h").unlink()
    assert invoke(["build"]).exit_code == 0  # no binary yet: rebuild regardless

    result = invoke(["build"])
    assert result.exit_code == 1
    assert "Could not stat" in result.output


def test_build_compiler_failure(invoke, c_project):
    config_file = c_project / "nob.json"
    data = json.loads(config_file.read_text())
    data["cflags"] = ["-c", "raise SystemExit(4)"]
    config_file.write_text(json.dumps(data))

    result = invoke(["build"])
    assert result.exit_code == 1
    assert "exit code 4" in result.output


def test_build_clean(invoke, c_project):
    invoke(["build"])
    result = invoke(["build", "--clean"])
    assert result.exit_code == 0
    assert not (c_project / "main").exists()

    result = invoke(["build", "--clean"])
    assert result.exit_code == 0
    assert "Nothing to clean" in result.output


def test_stale_exit_codes(invoke, set_mtime):
    work = Path.cwd()
    (work / "out").write_text("")
    (work / "in.c").write_text("")
    set_mtime(work / "out", NOW)
    set_mtime(work / "in.c", NOW)

    result = invoke(["stale", "out", "in.c"])
    assert result.exit_code == 0
    assert "up-to-date" in result.output

    set_mtime(work / "in.c", NOW + 1)
    result = invoke(["stale", "out", "in.c"])
    assert result.exit_code == 1
    assert "needed" in result.output

    assert invoke(["stale", "missing-out", "in.c"]).exit_code == 1
    assert invoke(["stale", "out", "missing.c"]).exit_code == 2


def test_run_success_and_failure(invoke):
    assert invoke(["run", "--", sys.executable, "-c", "pass"]).exit_code == 0

    result = invoke(["run", "--", sys.executable, "-c", "raise SystemExit(2)"])
    assert result.exit_code == 1
    assert "exit code 2" in result.output


def test_batch_waits_for_every_command(invoke):
    work = Path.cwd()
    py = f'"{sys.executable}"' if " " in sys.executable else sys.executable
    result = invoke(
        [
            "batch",
            f"{py} -c \"raise SystemExit(1)\"",
            f"{py} -c \"open('second', 'w').write('done')\"",
        ]
    )
    assert result.exit_code == 1
    assert (work / "second").read_text() == "done"


def test_batch_all_ok(invoke):
    result = invoke(["batch", f"{sys.executable} -c pass", f"{sys.executable} -c pass"])
    assert result.exit_code == 0


def test_batch_unparseable_command(invoke):
    result = invoke(["batch", "echo 'unterminated"])
    assert result.exit_code == 1
    assert "Could not parse command" in result.output


def test_copy_tree(invoke):
    work = Path.cwd()
    (work / "src" / "sub").mkdir(parents=True)
    (work / "src" / "sub" / "f.txt").write_text("payload")

    result = invoke(["copy", "src", "dst"])
    assert result.exit_code == 0
    assert (work / "dst" / "sub" / "f.txt").read_text() == "payload"


def test_copy_missing_source(invoke):
    result = invoke(["copy", "nope", "dst"])
    assert result.exit_code == 1
    assert "Could not get stat" in result.output


def test_tracks_listing(invoke):
    work = Path.cwd()
    (work / "album.time").write_text("0:00\tIntro\n3:41\tSecond\n")

    result = invoke(["tracks", "album.time", "--length", "600"])
    assert result.exit_code == 0
    assert "0 : `Intro` 0:00-3:41" in result.output
    assert "1 : `Second` 3:41-10:00" in result.output


def test_tracks_from_music_file(invoke, tmp_path):
    (tmp_path / "music").mkdir()
    (tmp_path / "timestamps").mkdir()
    (tmp_path / "timestamps" / "rimworld.time").write_text("0:00\tOpening\n")

    result = invoke(["tracks", str(tmp_path / "music" / "RimWorld OST.mp3")])
    assert result.exit_code == 0
    assert "`Opening`" in result.output


def test_tracks_select_index(invoke):
    (Path.cwd() / "album.time").write_text("0:00\tIntro\n3:41\tSecond\n")

    result = invoke(["tracks", "album.time", "--index", "1"])
    assert result.exit_code == 0
    assert "Selected song 1: `Second`" in result.output

    result = invoke(["tracks", "album.time", "--index", "5"])
    assert result.exit_code == 1
    assert "No track 5" in result.output


def test_tracks_missing_file(invoke):
    assert invoke(["tracks", "nothing.time"]).exit_code == 1


@pytest.mark.skipif(sys.platform == "win32", reason="compiled test programs are /bin/sh scripts")
def test_launch_rebuilds_then_forwards_status(invoke, tmp_path, set_mtime):
    work = Path.cwd()
    compiler = tmp_path / "shcc.py"
    compiler.write_text(
        f"#!{sys.executable}\n"
        + textwrap.dedent(
            """
            import os, sys
            out, src = sys.argv[2], sys.argv[3]
            status = open(src).read().strip()
            with open(out, "w") as f:
                f.write("#!/bin/sh\\necho ran >> launched\\nexit %s\\n" % status)
            os.chmod(out, 0o755)
            """
        )
    )
    compiler.chmod(0o755)
    # The default rebuild command is "<cc> -o <binary> <source>".
    (work / "nob.json").write_text(json.dumps({"cc": str(compiler)}))
    (work / "prog.src").write_text("5")
    set_mtime(work / "prog.src", NOW)

    result = invoke(["launch", "prog.src", "./prog"])
    assert result.exit_code == 5, result.output
    assert (work / "launched").read_text() == "ran\n"

    result = invoke(["launch", "prog.src", "./prog"])
    assert result.exit_code == 5
    assert (work / "launched").read_text() == "ran\nran\n"
    assert not (work / "prog.old").exists()


@pytest.mark.skipif(sys.platform == "win32", reason="compiled test programs are /bin/sh scripts")
def test_launch_bare_binary_name_from_working_directory(invoke, tmp_path, set_mtime):
    work = Path.cwd()
    compiler = tmp_path / "shcc.py"
    compiler.write_text(
        f"#!{sys.executable}\n"
        + textwrap.dedent(
            """
            import os, sys
            out = sys.argv[2]
            with open(out, "w") as f:
                f.write("#!/bin/sh\\necho ran >> launched\\nexit 3\\n")
            os.chmod(out, 0o755)
            """
        )
    )
    compiler.chmod(0o755)
    (work / "nob.json").write_text(json.dumps({"cc": str(compiler)}))
    (work / "prog.src").write_text("")
    set_mtime(work / "prog.src", NOW)

    result = invoke(["launch", "prog.src", "prog"])
    assert result.exit_code == 3, result.output
    assert (work / "prog").exists()
    assert (work / "launched").read_text() == "ran\n"

    # Up to date: the binary is run straight from the working directory.
    result = invoke(["launch", "prog.src", "prog"])
    assert result.exit_code == 3, result.output
    assert (work / "launched").read_text() == "ran\nran\n"


def test_temp_arena_sized_from_config(invoke):
    (Path.cwd() / "nob.json").write_text(json.dumps({"temp_capacity": 128}))

    result = invoke(["build", "--clean"])
    assert result.exit_code == 0, result.output
    assert arena.temp().capacity == 128


def test_bad_config_exits_with_error(invoke):
    (Path.cwd() / "nob.json").write_text("{not json")
    result = invoke(["build"])
    assert result.exit_code == 1
    assert "could not load config" in result.output


def test_explicit_config_option(invoke, tmp_path):
    cfg = tmp_path / "custom.json"
    cfg.write_text(json.dumps({"binary": "custom-bin"}))
    result = invoke(["--config", str(cfg), "build", "--clean"])
    assert result.exit_code == 0
    assert "custom-bin" in result.output
