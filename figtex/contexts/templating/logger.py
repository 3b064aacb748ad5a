"""
Templating context logger.

Messages carry a [template] prefix. Templating modules import from here rather
than from figtex.utils.logger.
"""

from pathlib import Path

from loguru import logger

from figtex.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, figure: Path = None) -> Path:
    """
    Start a templating session log in log_dir.

    Args:
        log_dir: Directory for this session
        figure: Figure description being rendered, recorded in the provenance header

    Returns:
        Path to log file
    """
    provenance = {"Figure description": figure} if figure is not None else None
    return _setup_logger(context_name="template", log_dir=log_dir, extra_provenance=provenance)


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")
