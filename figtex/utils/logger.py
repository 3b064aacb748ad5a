"""
Logger setup shared by the figtex contexts.

Each session gets a directory with one DEBUG log file per context, while the
console receives INFO and above on stderr. stdout is left to the command
output, since generated LaTeX may be printed there.

Context-specific wrappers live in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

import figtex

load_dotenv()
CONSOLE_LEVEL = os.getenv("FIGTEX_LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, object]] = None,
    console_level: Optional[str] = None,
) -> Path:
    """
    Send loguru output to {log_dir}/{context_name}.log and to stderr.

    Replaces any sinks configured earlier, so calling it again starts a new
    session. The log file opens with a provenance header.

    Args:
        context_name: Context identifier, also the log file stem ("render", "template")
        log_dir: Session directory, created if missing
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Minimum console level (default: FIGTEX_LOG_LEVEL or INFO)

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/render_20251114_123456"),
            extra_provenance={"LaTeX engine": "lualatex"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level or CONSOLE_LEVEL, colorize=True)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[Dict[str, object]] = None) -> None:
    """Log who ran what, where, with which figtex and Python versions."""
    logger.debug("=" * 80)
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"figtex: {figtex.__version__}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)
