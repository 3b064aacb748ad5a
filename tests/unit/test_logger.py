"""Unit tests for context logger setup."""

import pytest
from loguru import logger

from figtex.contexts.rendering.logger import (
    log_compilation_result,
    log_save_result,
    setup_rendering_logger,
)
from figtex.contexts.templating.logger import _log_debug, setup_templating_logger


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()


@pytest.mark.unit
def test_rendering_logger_writes_provenance(tmp_path):
    """Test that the rendering log starts with a provenance header."""
    log_file = setup_rendering_logger(tmp_path / "session", "lualatex")
    log_save_result(tmp_path / "plot.pdf", saved=True)

    logger.remove()
    content = log_file.read_text()
    assert log_file.name == "render.log"
    assert "LaTeX engine: lualatex" in content
    assert "Executable: " in content
    assert "[render] PDF saved to:" in content


@pytest.mark.unit
def test_templating_logger_captures_debug(tmp_path):
    """Test that debug messages reach the file sink with the context prefix."""
    log_file = setup_templating_logger(tmp_path)
    _log_debug("built document")
    logger.remove()

    assert log_file.name == "template.log"
    assert "[template] built document" in log_file.read_text()


@pytest.mark.unit
def test_failed_compilation_keeps_log_tail(tmp_path):
    """Test that the end of the compiler log is copied into the session log."""
    log_file = setup_rendering_logger(tmp_path / "session", "pdflatex")
    compiler_log = tmp_path / "pgfplot.log"
    compiler_log.write_text("".join(f"line {i}\n" for i in range(100)) + "! Emergency stop.\n")

    log_compilation_result("pdflatex", False, 0.5, exit_status=1, log_path=compiler_log)
    logger.remove()

    content = log_file.read_text()
    assert "[render] pdflatex exited with status 1" in content
    assert "! Emergency stop." in content
    assert "line 99" in content
    assert "line 10\n" not in content
