"""Custom exceptions for the templating context."""

from pathlib import Path
from typing import Any, Optional, Sequence


class CompatVersionError(ValueError):
    """
    Exception raised when a PGFPlots compatibility version is not recognised.

    Attributes:
        version: The rejected version string
        accepted: The closed set of accepted version strings
    """

    def __init__(self, version: str, accepted: Sequence[str]):
        self.version = version
        self.accepted = tuple(accepted)
        super().__init__(
            f"pgfplots compatibility version `{version}` does not exist; "
            f"available values are: {', '.join(self.accepted)}"
        )


class FigureConfigError(ValueError):
    """
    Exception raised when a YAML figure description cannot be turned into a document.

    Attributes:
        message: Error description
        entry: The configuration entry that failed to load
        config_path: Path to the figure description, when loaded from disk
    """

    def __init__(
        self,
        message: str,
        entry: Any = None,
        config_path: Optional[Path] = None,
    ):
        self.message = message
        self.entry = entry
        self.config_path = config_path

        parts = [message]

        if config_path:
            parts.append(f"\nFigure description: {config_path}")

        if entry is not None:
            snippet = str(entry)
            snippet = snippet[:200] + "..." if len(snippet) > 200 else snippet
            parts.append(f"\nEntry: {snippet}")

        super().__init__("\n".join(parts))
