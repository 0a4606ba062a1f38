# CLI tests for fexpand.cli.
# These tests validate dispatch, output formats and argument errors.

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fexpand import __version__
from fexpand.cli import app

runner = CliRunner()


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(path.name, encoding="utf-8")
    return path


def test_cli_version() -> None:
    r = runner.invoke(app, ["--version"])
    assert r.exit_code == 0
    assert __version__ in r.stdout


def test_cli_without_command_prints_help() -> None:
    r = runner.invoke(app, [])
    assert r.exit_code == 0
    assert "expand" in r.stdout
    assert "render" in r.stdout


def test_cli_expand_prints_one_path_per_line(tmp_path: Path) -> None:
    a = _touch(tmp_path / "a.txt")
    b = _touch(tmp_path / "sub" / "b.txt")

    r = runner.invoke(app, ["expand", str(tmp_path)])

    assert r.exit_code == 0
    assert sorted(r.stdout.splitlines()) == sorted([str(a), str(b)])


def test_cli_expand_defaults_to_current_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _touch(tmp_path / "a.txt")
    monkeypatch.chdir(tmp_path)

    r = runner.invoke(app, ["expand"])

    assert r.exit_code == 0
    assert r.stdout.splitlines() == ["." + os.sep + "a.txt"]


def test_cli_expand_no_match_is_not_an_error(tmp_path: Path) -> None:
    r = runner.invoke(app, ["expand", str(tmp_path / "*.none")])
    assert r.exit_code == 0
    assert r.stdout == ""


def test_cli_expand_count(tmp_path: Path) -> None:
    f = _touch(tmp_path / "a.txt")
    _touch(tmp_path / "b.txt")

    r = runner.invoke(app, ["expand", "--count", str(tmp_path), str(f)])

    assert r.exit_code == 0
    assert r.stdout.strip() == "3"


def test_cli_expand_null_terminates_every_path(tmp_path: Path) -> None:
    a = _touch(tmp_path / "a.txt")

    r = runner.invoke(app, ["expand", "--null", str(a), str(a)])

    assert r.exit_code == 0
    assert r.stdout == f"{a}\0{a}\0"


def test_cli_expand_max_depth(tmp_path: Path) -> None:
    a = _touch(tmp_path / "a.txt")
    _touch(tmp_path / "sub" / "b.txt")

    r = runner.invoke(app, ["expand", "--max-depth", "0", str(tmp_path)])

    assert r.exit_code == 0
    assert r.stdout.splitlines() == [str(a)]


def test_cli_expand_rejects_negative_max_depth(tmp_path: Path) -> None:
    r = runner.invoke(app, ["expand", "--max-depth", "-1", str(tmp_path)])
    assert r.exit_code != 0


def test_cli_expand_rejects_null_with_count(tmp_path: Path) -> None:
    r = runner.invoke(app, ["expand", "--null", "--count", str(tmp_path)])
    assert r.exit_code != 0


def test_cli_render_substitutes_values(tmp_path: Path) -> None:
    src = tmp_path / "conf.tmpl"
    src.write_text("# comment\nurl = http://HOST:PORT\n", encoding="utf-8")
    dst = tmp_path / "conf.ini"

    r = runner.invoke(
        app,
        ["render", str(src), str(dst), "--set", "HOST=db", "--set", "PORT=5432"],
    )

    assert r.exit_code == 0
    assert dst.read_text(encoding="utf-8") == "url = http://db:5432\n"


def test_cli_render_value_may_contain_equals(tmp_path: Path) -> None:
    src = tmp_path / "t.txt"
    src.write_text("Q\n", encoding="utf-8")
    dst = tmp_path / "o.txt"

    r = runner.invoke(app, ["render", str(src), str(dst), "--set", "Q=a=b"])

    assert r.exit_code == 0
    assert dst.read_text(encoding="utf-8") == "a=b\n"


def test_cli_render_rejects_malformed_assignment(tmp_path: Path) -> None:
    src = tmp_path / "t.txt"
    src.write_text("x\n", encoding="utf-8")

    r = runner.invoke(app, ["render", str(src), str(tmp_path / "o.txt"), "--set", "NOEQUALS"])

    assert r.exit_code == 2
    assert not (tmp_path / "o.txt").exists()


def test_cli_render_missing_source_exits_with_error(tmp_path: Path) -> None:
    r = runner.invoke(app, ["render", str(tmp_path / "missing"), str(tmp_path / "o.txt")])

    assert r.exit_code == 1
    assert "Template not found" in r.output
    assert not (tmp_path / "o.txt").exists()


def test_cli_render_onto_itself_fails_without_touching_template(tmp_path: Path) -> None:
    src = tmp_path / "t.txt"
    src.write_text("host = HOST\n", encoding="utf-8")

    r = runner.invoke(app, ["render", str(src), str(src), "--set", "HOST=db"])

    assert r.exit_code == 1
    assert "FAILED" in r.output
    assert src.read_text(encoding="utf-8") == "host = HOST\n"


def test_cli_render_undecodable_template_reports_failure(tmp_path: Path) -> None:
    src = tmp_path / "latin1.tmpl"
    src.write_bytes("café\n".encode("latin-1"))
    dst = tmp_path / "o.txt"
    dst.write_text("previous\n", encoding="utf-8")

    r = runner.invoke(app, ["render", str(src), str(dst)])

    assert r.exit_code == 1
    assert r.exception is None or isinstance(r.exception, SystemExit)
    assert "FAILED" in r.output
    assert dst.read_text(encoding="utf-8") == "previous\n"


def test_cli_expand_no_cycle_check_still_terminates(tmp_path: Path) -> None:
    _touch(tmp_path / "a" / "x.txt")
    try:
        os.symlink(tmp_path / "a", tmp_path / "a" / "loop", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported on this platform")

    r = runner.invoke(app, ["expand", "--no-cycle-check", "--count", str(tmp_path)])

    assert r.exit_code == 0
    assert int(r.stdout.strip()) > 1


def test_cli_verbose_logging_does_not_propagate(tmp_path: Path) -> None:
    r = runner.invoke(app, ["--verbose", "expand", str(tmp_path)])

    assert r.exit_code == 0
    assert logging.getLogger("fexpand").propagate is False
