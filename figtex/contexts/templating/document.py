"""
Standalone Document

Root of the document tree: a preamble plus the tikzpicture environments that
form the body. Renders to a standalone LaTeX document and compiles it to PDF.
"""

from typing import Iterable, List, Optional, Sequence, Union

from figtex.contexts.rendering.engine import LatexEngine
from figtex.contexts.rendering.workspace import LatexOutput
from figtex.contexts.templating.environments import Axis, TikzPicture, unique_in_order
from figtex.contexts.templating.logger import _log_debug
from figtex.contexts.templating.plots import Plot
from figtex.contexts.templating.preamble import (
    Library,
    Package,
    PgfPlotsCompat,
    Preamble,
    library_line,
)
from figtex.contexts.templating.registries import TemplateRegistry, default_registry


class Document:
    """
    Standalone LaTeX document used to generate a figure.

    Example:
        document = Document()
        document.add_picture(TikzPicture.from_axis(Axis()))
        print(document.standalone_string())
        # \\documentclass{standalone}
        # \\usepackage{pgfplots}
        # \\pgfplotsset{compat=default}
        #
        # \\begin{document}
        # \\begin{tikzpicture}
        # \\begin{axis}
        # \\end{axis}
        # \\end{tikzpicture}
        # \\end{document}
    """

    def __init__(self, preamble: Preamble = None, pictures: Iterable[TikzPicture] = ()):
        self.preamble = preamble or Preamble()
        self.pictures: List[TikzPicture] = []
        for picture in pictures:
            self.add_picture(picture)

    @classmethod
    def from_picture(cls, picture: TikzPicture) -> "Document":
        return cls(pictures=[picture])

    @classmethod
    def from_axis(cls, axis: Axis) -> "Document":
        return cls.from_picture(TikzPicture.from_axis(axis))

    @classmethod
    def from_plot(cls, plot: Plot) -> "Document":
        return cls.from_picture(TikzPicture.from_plot(plot))

    def set_compat(self, compat: PgfPlotsCompat) -> None:
        self.preamble.set_compat(compat)

    def set_compat_version(self, version: str) -> None:
        """
        Set the PGFPlots compatibility version.

        Raises:
            CompatVersionError: If the version is not a known compatibility version
        """
        self.preamble.set_compat_version(version)

    def add_library(self, lib: Union[Library, str]) -> None:
        self.preamble.add_library(lib)

    def add_libraries(self, libs: Iterable[Union[Library, str]]) -> None:
        self.preamble.add_libraries(libs)

    def add_package(self, package: Union[Package, str], options: Sequence[str] = ()) -> None:
        self.preamble.add_package(package, options)

    def add_picture(self, picture: TikzPicture) -> None:
        """
        Add a tikzpicture to the document body.

        Libraries required by the picture's plots are added to the preamble.
        """
        libs = picture.required_libraries()
        if libs:
            _log_debug(f"Picture requires: {', '.join(library_line(lib) for lib in libs)}")
        self.preamble.add_libraries(libs)
        self.pictures.append(picture)

    def required_libraries(self) -> List[Library]:
        return unique_in_order(
            lib for picture in self.pictures for lib in picture.required_libraries()
        )

    def standalone_string(self, registry: Optional[TemplateRegistry] = None) -> str:
        """
        Return LaTeX source that compiles to a standalone PDF.

        Args:
            registry: Registry providing the "standalone" layout (default: the packaged one)

        Returns:
            Complete LaTeX document string (no trailing newline)
        """
        registry = registry or default_registry()
        return registry.render(
            "standalone",
            preamble_lines=self.preamble.lines(),
            body="\n".join(str(picture) for picture in self.pictures),
        )

    def pdf(self, engine: LatexEngine, timeout: Optional[float] = None) -> LatexOutput:
        """
        Compile the document into a PDF inside a fresh temporary workspace.

        The source is written to a file rather than passed on the command line,
        which keeps large plots clear of argument length limits.

        Args:
            engine: LaTeX engine to compile with
            timeout: Seconds before the compiler is killed (default: wait forever)

        Returns:
            LatexOutput holding the compiled PDF; use it as a context manager
            or call cleanup() once the PDF has been saved or opened

        Raises:
            CompileError: If the workspace cannot be created or compilation fails
        """
        output = LatexOutput()
        try:
            output.compile(engine, self.standalone_string(), timeout=timeout)
        except BaseException:
            output.cleanup()
            raise
        return output
