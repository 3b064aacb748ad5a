"""
Rendering context logger.

Messages carry a [render] prefix. Rendering modules import from here rather
than from figtex.utils.logger.
"""

import shutil
from pathlib import Path
from typing import Optional

from loguru import logger

from figtex.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"

# Lines of the compiler log copied into the session log after a failure
LOG_TAIL_LINES = 40


def setup_rendering_logger(log_dir: Path, engine: str) -> Path:
    """
    Start a rendering session log in log_dir.

    The provenance header records the engine and the executable it resolves to.

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={
            "LaTeX engine": engine,
            "Executable": shutil.which(engine) or "not found on PATH",
        },
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_compilation_start(engine: str, tex_file: Path, working_dir: Path) -> None:
    _log_info(f"Compiling {tex_file.name} with {engine}")
    _log_debug(f"  Workspace: {working_dir}")


def log_compilation_result(
    engine: str,
    success: bool,
    elapsed_time: float,
    exit_status: Optional[int] = None,
    log_path: Optional[Path] = None,
) -> None:
    """
    Log how a compilation ended.

    On failure the tail of the compiler's own log goes to the session log file
    verbatim, since the workspace holding it is removed soon after.
    """
    if success:
        _log_success(f"{engine} finished ({elapsed_time:.2f}s)")
        return

    _log_error(f"{engine} exited with status {exit_status} ({elapsed_time:.2f}s)")
    if log_path is None:
        return

    try:
        tail = log_path.read_text(encoding="utf-8", errors="replace").splitlines()[-LOG_TAIL_LINES:]
    except OSError as e:
        _log_warning(f"Unable to read compiler log {log_path}: {e}")
        return

    # raw=True keeps loguru from prefixing every line of the compiler output
    logger.opt(raw=True).debug(
        f"{'=' * 80}\n{engine} log (last {len(tail)} lines):\n{'=' * 80}\n" + "\n".join(tail) + "\n"
    )


def log_save_result(destination: Path, saved: bool) -> None:
    if saved:
        _log_info(f"PDF saved to: {destination}")
    else:
        _log_warning(f"Kept existing file, PDF not saved: {destination}")
