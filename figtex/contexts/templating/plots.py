"""
Plot Data Structures

Leaf nodes of the document tree: free-form draw commands, two-dimensional
coordinate plots and histograms. Each renders itself as the body of an axis
environment.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from figtex.contexts.templating.attributes import Attribute, AttributeSet
from figtex.contexts.templating.keys import HistogramKey, PlotKey
from figtex.contexts.templating.preamble import PgfPlotsLib
from figtex.utils.formatting import format_number


@dataclass(frozen=True)
class Coordinate2D:
    """
    Coordinate in a two-dimensional plot.

    Error magnitudes are written next to the coordinate whenever one is set,
    but PGFPlots only draws the bars when the owning plot also sets both the
    error character and direction keys (PlotKey.X_ERROR and
    PlotKey.X_ERROR_DIRECTION for x).

    Attributes:
        x: Abscissa
        y: Ordinate
        error_x: Optional x error magnitude
        error_y: Optional y error magnitude
    """

    x: float
    y: float
    error_x: Optional[float] = None
    error_y: Optional[float] = None

    @classmethod
    def of(cls, point: Union["Coordinate2D", Sequence[float]]) -> "Coordinate2D":
        """Build a coordinate from an (x, y) or (x, y, error_x, error_y) tuple."""
        if isinstance(point, Coordinate2D):
            return point
        return cls(*point)

    def __str__(self) -> str:
        text = f"({format_number(self.x)},{format_number(self.y)})"

        if self.error_x is not None or self.error_y is not None:
            error_x = format_number(self.error_x if self.error_x is not None else 0.0)
            error_y = format_number(self.error_y if self.error_y is not None else 0.0)
            text += f"\t+- ({error_x},{error_y})"

        return text


@dataclass(frozen=True)
class Draw:
    """Free-form ``\\draw`` command for markup without a dedicated plot type."""

    command: str

    def __str__(self) -> str:
        return f"\\draw {self.command};"


class Plot2D:
    """
    Two-dimensional plot inside an axis environment.

    Equivalent to:

        \\addplot[PlotKeys] coordinates {
            % coordinates
        };
    """

    def __init__(self, coordinates: Iterable = (), options: Iterable = ()):
        self.options = AttributeSet(PlotKey, options)
        self.coordinates: List[Coordinate2D] = [Coordinate2D.of(c) for c in coordinates]

    def add_option(self, option: Union[Attribute, str]) -> None:
        """Add a PlotKey attribute, overwriting any previous attribute of the same kind."""
        self.options.insert(option)

    def add_coordinate(self, coordinate) -> None:
        self.coordinates.append(Coordinate2D.of(coordinate))

    def set_coordinates(self, coordinates: Iterable) -> None:
        self.coordinates = [Coordinate2D.of(c) for c in coordinates]

    def __str__(self) -> str:
        text = "\t\\addplot["
        # One key per line, easier to find by eye in the generated source
        if self.options:
            text += "\n" + "".join(f"{line}\n" for line in self.options.lines("\t\t")) + "\t"
        text += "] coordinates {\n"
        text += "".join(f"\t\t{coordinate}\n" for coordinate in self.coordinates)
        text += "\t};"
        return text


class Histogram:
    """
    Histogram plot inside an axis environment.

    Binning is done by the PGFPlots ``statistics`` library, which documents
    containing a histogram import automatically.
    """

    def __init__(self, data: Iterable[float] = (), options: Iterable = (), hist_options: Iterable = ()):
        self.options = AttributeSet(PlotKey, options)
        self.hist_options = AttributeSet(HistogramKey, hist_options)
        self.data: List[float] = list(data)

    def add_option(self, option: Union[Attribute, str]) -> None:
        self.options.insert(option)

    def add_hist_option(self, option: Union[Attribute, str]) -> None:
        self.hist_options.insert(option)

    def set_bins(self, bins: int) -> None:
        self.add_hist_option(Attribute(HistogramKey.BINS, bins))

    def set_data_min(self, minimum: float) -> None:
        self.add_hist_option(Attribute(HistogramKey.DATA_MIN, minimum))

    def set_data_max(self, maximum: float) -> None:
        self.add_hist_option(Attribute(HistogramKey.DATA_MAX, maximum))

    def set_normalize(self) -> None:
        """Enable density mode: bins are renormalised so the overall mass equals 1."""
        self.add_hist_option(Attribute(HistogramKey.DENSITY, True))

    def __str__(self) -> str:
        text = "\t\\addplot+ [\n"

        if self.hist_options:
            text += "\t\thist={\n"
            text += "".join(f"{line}\n" for line in self.hist_options.lines("\t\t\t"))
            text += "\t\t},\n"
        else:
            text += "\t\thist,\n"

        text += "".join(f"{line}\n" for line in self.options.lines("\t\t"))
        text += "\t] table [row sep=\\\\, y index=0] {\n\t\tdata \\\\\n"
        text += "".join(f"\t\t{format_number(datum)} \\\\\n" for datum in self.data)
        text += "\t};"
        return text


Plot = Union[Draw, Plot2D, Histogram]


def required_library(plot: Plot) -> Optional[PgfPlotsLib]:
    """Return the PGFPlots library a plot needs, or None."""
    if isinstance(plot, Histogram):
        return PgfPlotsLib.STATISTICS
    if isinstance(plot, (Draw, Plot2D)):
        return None
    raise TypeError(f"Unsupported plot type: {type(plot).__name__}")
