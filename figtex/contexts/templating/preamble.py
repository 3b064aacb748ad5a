"""
Document Preamble

LaTeX packages, PGFPlots libraries and the PGFPlots compatibility layer of a
standalone figure document.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Sequence, Union

from figtex.contexts.templating.exceptions import CompatVersionError

# Available PGFPlots compatibility versions
COMPAT_VERSIONS = (
    "1.18", "1.17", "1.16", "1.15", "1.14", "1.13", "1.12", "1.11", "1.10", "1.9", "1.8",
    "1.7", "1.6", "1.5.1", "1.5", "1.4", "1.3", "pre1.3", "default",
)

DEFAULT_COMPAT_VERSION = "default"


@dataclass
class Package:
    """
    LaTeX package imported by the standalone document.

    Renders as ``\\usepackage{name}`` followed by ``[opt1, opt2]`` when options are set.
    """

    name: str
    options: List[str] = field(default_factory=list)

    def add_option(self, option: str) -> None:
        self.options.append(option)

    def __str__(self) -> str:
        line = f"\\usepackage{{{self.name}}}"
        if self.options:
            line += f"[{', '.join(self.options)}]"
        return line


class PgfPlotsLib(Enum):
    """PGFPlots libraries which need to be activated separately."""

    # Popups whenever one clicks into a plot
    CLICKABLE = "clickable"
    # Dates as input coordinates
    DATEPLOT = "dateplot"
    # Export pictures into separate files
    EXTERNAL = "external"
    # Fill the area between two named plots
    FILLBETWEEN = "fillbetween"
    # Plot handlers for statistics (histograms, box plots)
    STATISTICS = "statistics"
    # Automatic typesetting of units in labels
    UNITS = "units"


@dataclass(frozen=True)
class CustomLib:
    """PGFPlots library without a dedicated PgfPlotsLib member."""

    value: str


Library = Union[PgfPlotsLib, CustomLib]


def as_library(lib: Union[Library, str]) -> Library:
    """Coerce a library name into a PgfPlotsLib, or a CustomLib if it is not known."""
    if isinstance(lib, (PgfPlotsLib, CustomLib)):
        return lib
    try:
        return PgfPlotsLib(lib)
    except ValueError:
        return CustomLib(lib)


def library_line(lib: Library) -> str:
    return f"\\usepgfplotslibrary{{{lib.value}}}"


@dataclass(frozen=True)
class PgfPlotsCompat:
    """
    PGFPlots compatibility layer.

    The version is validated against COMPAT_VERSIONS on construction.

    Raises:
        CompatVersionError: If the version is not in COMPAT_VERSIONS
    """

    version: str = DEFAULT_COMPAT_VERSION

    def __post_init__(self):
        if self.version not in COMPAT_VERSIONS:
            raise CompatVersionError(self.version, COMPAT_VERSIONS)

    def __str__(self) -> str:
        return f"\\pgfplotsset{{compat={self.version}}}"


class Preamble:
    """
    LaTeX document preamble.

    Holds distinct packages (by name), a de-duplicated list of PGFPlots
    libraries and the compatibility layer.
    """

    def __init__(self, compat: PgfPlotsCompat = None):
        self.packages: List[Package] = []
        self.libraries: List[Library] = []
        self.compat = compat or PgfPlotsCompat()

    @classmethod
    def with_compat_version(cls, version: str) -> "Preamble":
        return cls(PgfPlotsCompat(version))

    def set_compat(self, compat: PgfPlotsCompat) -> None:
        self.compat = compat

    def set_compat_version(self, version: str) -> None:
        self.compat = PgfPlotsCompat(version)

    def add_library(self, lib: Union[Library, str]) -> None:
        lib = as_library(lib)
        if lib not in self.libraries:
            self.libraries.append(lib)

    def add_libraries(self, libs: Iterable[Union[Library, str]]) -> None:
        for lib in libs:
            self.add_library(lib)

    def add_package(self, package: Union[Package, str], options: Sequence[str] = ()) -> None:
        """
        Add a LaTeX package; options of an already imported package are merged.

        Args:
            package: Package or package name
            options: Extra options when package is given by name
        """
        if isinstance(package, str):
            package = Package(package, list(options))

        for existing in self.packages:
            if existing.name == package.name:
                for option in package.options:
                    if option not in existing.options:
                        existing.add_option(option)
                return

        self.packages.append(Package(package.name, list(package.options)))

    def lines(self) -> List[str]:
        """Preamble lines in output order (document class, pgfplots, compat, libraries, packages)."""
        return [
            "\\documentclass{standalone}",
            "\\usepackage{pgfplots}",
            str(self.compat),
            *(library_line(lib) for lib in self.libraries),
            *(str(package) for package in self.packages),
        ]

    def __str__(self) -> str:
        return "".join(f"{line}\n" for line in self.lines())
