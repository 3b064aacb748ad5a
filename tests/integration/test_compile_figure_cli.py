"""Integration tests for scripts/compile_figure.py."""

import os
import stat
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
SCRIPT = REPO_ROOT / "scripts" / "compile_figure.py"

FIGURE_YAML = """\
pictures:
  - axes:
      - options:
          - title: Line
        plots:
          - coordinates: [[0, 0], [1, 1]]
"""

SUCCEED = '#!/bin/sh\nprintf "%%PDF-1.5\\n" > "${3%.tex}.pdf"\n'


def run_cli(*args, env_overrides=None, input_text=None):
    env = {**os.environ, "PYTHONPATH": str(REPO_ROOT), **(env_overrides or {})}
    return subprocess.run(
        [sys.executable, str(SCRIPT), *args],
        capture_output=True,
        text=True,
        env=env,
        input=input_text,
    )


@pytest.fixture(autouse=True)
def session_logs(tmp_path, monkeypatch):
    """Keep CLI session logs inside the test directory."""
    monkeypatch.setenv("FIGTEX_LOGS_PATH", str(tmp_path / "logs"))


@pytest.fixture
def figure(tmp_path):
    path = tmp_path / "line.yaml"
    path.write_text(FIGURE_YAML)
    return path


@pytest.fixture
def fake_bin(tmp_path):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    executable = bin_dir / "pdflatex"
    executable.write_text(SUCCEED)
    executable.chmod(executable.stat().st_mode | stat.S_IXUSR)
    return bin_dir


@pytest.mark.integration
def test_render_prints_source(figure):
    """Test that render prints the generated LaTeX."""
    result = run_cli("render", str(figure))

    assert result.returncode == 0, result.stderr
    assert result.stdout.startswith("\\documentclass{standalone}\n")
    assert "\ttitle={Line},\n" in result.stdout
    assert "\t\t(1,1)\n" in result.stdout


@pytest.mark.integration
def test_render_writes_file(figure, tmp_path):
    """Test that render --output writes the source to disk."""
    output = tmp_path / "tex" / "line.tex"

    result = run_cli("render", str(figure), "--output", str(output))

    assert result.returncode == 0, result.stderr
    assert output.read_text(encoding="utf-8").endswith("\\end{document}\n")


@pytest.mark.integration
def test_render_reports_bad_figure(tmp_path):
    """Test that malformed descriptions exit with status 1."""
    figure = tmp_path / "bad.yaml"
    figure.write_text("pictures:\n  - axes:\n      - plots:\n          - type: surface\n")

    result = run_cli("render", str(figure))

    assert result.returncode == 1
    assert "Unknown plot type 'surface'" in result.stderr


@pytest.mark.integration
def test_engines_lists_default():
    """Test the engines command."""
    result = run_cli("engines")

    assert result.returncode == 0, result.stderr
    assert "lualatex (default) [external]" in result.stdout
    assert "tectonic [in-process]" in result.stdout


@pytest.mark.integration
def test_compile_unknown_engine(figure):
    """Test that an unknown engine name is rejected."""
    result = run_cli("compile", str(figure), "--engine", "xelatex")

    assert result.returncode == 1
    assert "no such latex engine" in result.stderr


@pytest.mark.integration
@pytest.mark.skipif(os.name == "nt", reason="fake engine is a POSIX shell script")
def test_compile_with_fake_engine(figure, fake_bin, tmp_path):
    """Test compile and the overwrite confirmation with a fake engine."""
    env = {"PATH": f"{fake_bin}{os.pathsep}{os.environ.get('PATH', '')}"}
    destination = tmp_path / "out" / "line.pdf"

    first = run_cli("compile", str(figure), "-e", "pdflatex", "-o", str(destination), env_overrides=env)
    assert first.returncode == 0, first.stdout + first.stderr
    assert destination.read_bytes().startswith(b"%PDF")
    assert list((tmp_path / "logs").glob("compile_*/render.log"))

    destination.write_bytes(b"keep me")
    declined = run_cli(
        "compile", str(figure), "-e", "pdflatex", "-o", str(destination),
        env_overrides=env, input_text="n\n",
    )
    assert declined.returncode == 1
    assert destination.read_bytes() == b"keep me"

    forced = run_cli(
        "compile", str(figure), "-e", "pdflatex", "-o", str(destination), "--force",
        env_overrides=env,
    )
    assert forced.returncode == 0, forced.stdout + forced.stderr
    assert destination.read_bytes().startswith(b"%PDF")


@pytest.mark.integration
def test_render_reports_non_numeric_coordinates(tmp_path):
    """Test that non-numeric coordinates exit with status 1 and no traceback."""
    figure = tmp_path / "bad.yaml"
    figure.write_text('pictures:\n  - axes:\n      - plots:\n          - coordinates: [["a", 1]]\n')

    result = run_cli("render", str(figure))

    assert result.returncode == 1
    assert "Coordinates must be numeric" in result.stderr
    assert "Traceback" not in result.stderr


@pytest.mark.integration
@pytest.mark.skipif(os.name == "nt", reason="fake engine is a POSIX shell script")
def test_compile_into_new_directory(figure, fake_bin, tmp_path):
    """Test that an output with a trailing slash is created as a directory."""
    env = {"PATH": f"{fake_bin}{os.pathsep}{os.environ.get('PATH', '')}"}
    out_dir = tmp_path / "out"

    result = run_cli("compile", str(figure), "-e", "pdflatex", "-o", f"{out_dir}/", env_overrides=env)

    assert result.returncode == 0, result.stdout + result.stderr
    assert out_dir.is_dir()
    assert (out_dir / "pgfplot.pdf").read_bytes().startswith(b"%PDF")
