"""
LaTeX Engines

Engines that compile a generated document into a PDF, and the command line
flags each one needs to run non-interactively.
"""

from enum import Enum
from typing import List

from figtex.contexts.rendering.exceptions import UnknownEngineError


class LatexEngine(Enum):
    """
    LaTeX engine used to compile a document into a PDF.

    PDFLATEX and LUALATEX run the external executable of the same name
    (both ship with TeX Live). LuaLaTeX allocates memory dynamically, so it
    copes with large axes that exhaust pdflatex, and is the default.
    TECTONIC processes documents in-process and is only usable when an
    in-process backend is available.
    """

    PDFLATEX = "pdflatex"
    LUALATEX = "lualatex"
    TECTONIC = "tectonic"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def default(cls) -> "LatexEngine":
        return cls.LUALATEX

    @classmethod
    def from_name(cls, name: str) -> "LatexEngine":
        """
        Look up an engine by executable name.

        Raises:
            UnknownEngineError: If no engine has that name
        """
        try:
            return cls(name)
        except ValueError:
            raise UnknownEngineError(name, [engine.value for engine in cls]) from None

    @property
    def is_external(self) -> bool:
        return self is not LatexEngine.TECTONIC

    def args(self) -> List[str]:
        """Batch-mode and halt-on-error flags for the external executable."""
        if self is LatexEngine.PDFLATEX:
            return ["-interaction=batchmode", "-halt-on-error"]
        if self is LatexEngine.LUALATEX:
            return ["--interaction=batchmode", "--halt-on-error"]
        raise ValueError(f"`{self}` does not run as an external process")
