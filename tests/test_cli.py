import io
import sys

import pytest

from buildbar import cli

LOG = b"-- Configuring done\n[ 50%] Building x.o\n\xff undecodable\n[100%] Built target x\n"


@pytest.fixture
def piped_stdin(monkeypatch):
    monkeypatch.setattr(cli, "descriptor_in_use", lambda fd: True)
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(LOG), encoding="utf-8"))


def test_help(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--help"])
    assert exc.value.code == 2
    out = capsys.readouterr().out
    assert "terminal progress bar" in out
    assert "--replay" in out
    assert "--out" in out


def test_help_when_stdin_is_terminal(monkeypatch, capsys):
    monkeypatch.setattr(cli, "descriptor_in_use", lambda fd: False)
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 2
    assert "If nothing is provided on stdin" in capsys.readouterr().out


def test_run_with_mirror(piped_stdin, tmp_path, capsys):
    log = tmp_path / "build.log"
    cli.main(["-w", "40", "--out", str(log)])
    assert log.read_bytes() == LOG
    out = capsys.readouterr().out
    assert out.count("\r") == 2
    assert "Elapsed time:" in out
    assert "Configuring" not in out


def test_default_mirror_name(piped_stdin, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cli.main(["-o", "-w", "40", "--est", "--ema"])
    assert (tmp_path / "cmake.log").read_bytes() == LOG


def test_no_mirror_by_default(piped_stdin, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cli.main(["-w", "40"])
    assert list(tmp_path.iterdir()) == []


def test_mirror_create_failure(piped_stdin, tmp_path, capsys):
    target = tmp_path / "missing" / "build.log"
    with pytest.raises(SystemExit) as exc:
        cli.main(["-w", "40", "--out", str(target)])
    assert exc.value.code == 1
    assert "Could not create file" in capsys.readouterr().err


def test_invalid_width(piped_stdin, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["-w", "0"])
    assert exc.value.code == 1
    assert "Invalid width" in capsys.readouterr().err


def test_force_reads_terminal_stdin(monkeypatch, capsys):
    def not_called(fd):
        raise AssertionError("stdin should not be probed with --force")

    monkeypatch.setattr(cli, "descriptor_in_use", not_called)
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"[ 5%] a\n"), encoding="utf-8"))
    cli.main(["-f", "-w", "30"])
    assert "Elapsed time:" in capsys.readouterr().out


def test_version_matches_setup():
    """setup.py takes its version from the package, not a copy of it"""
    import pathlib
    import re

    import buildbar

    root = pathlib.Path(__file__).parent.parent
    assert "version=version" in (root / "setup.py").read_text()
    init = (root / "buildbar" / "__init__.py").read_text()
    m = re.search(r'^__version__ = "([^"]+)"', init, re.M)
    assert m.group(1) == buildbar.__version__ == "0.1.0"
