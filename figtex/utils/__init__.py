"""
Shared utilities for figtex.

Common functionality used across contexts:
- Logger setup with provenance tracking
- Deterministic number formatting for generated markup
"""

from figtex.utils.formatting import format_number, format_value

__all__ = ["format_number", "format_value"]
