"""
PGFPlots Attribute Keys

Catalogue of attribute kinds for each node of the document tree and the value
types they accept. Each key maps to its markup template; CUSTOM keys are
written verbatim.
"""

from dataclasses import dataclass
from enum import Enum

from figtex.contexts.templating.attributes import AttributeKind
from figtex.utils.formatting import format_number


class PictureKey(AttributeKind):
    """Options of the tikzpicture environment."""

    CUSTOM = None


class AxisKey(AttributeKind):
    """Options of the axis environment."""

    CUSTOM = None
    X_MIN = "xmin={{{value}}}"
    X_MAX = "xmax={{{value}}}"
    Y_MIN = "ymin={{{value}}}"
    Y_MAX = "ymax={{{value}}}"
    Z_MIN = "zmin={{{value}}}"
    Z_MAX = "zmax={{{value}}}"
    MIN = "min={{{value}}}"
    MAX = "max={{{value}}}"
    X_MODE = "xmode={value}"
    Y_MODE = "ymode={value}"
    TITLE = "title={{{value}}}"
    X_LABEL = "xlabel={{{value}}}"
    Y_LABEL = "ylabel={{{value}}}"
    X_TICK = "xtick={{{value}}}"
    Y_TICK = "ytick={{{value}}}"
    X_TICK_LABEL = "xticklabel={{{value}}}"
    Y_TICK_LABEL = "yticklabel={{{value}}}"
    X_TICK_LABELS = "xticklabels={{{value}}}"
    Y_TICK_LABELS = "yticklabels={{{value}}}"
    Z_TICK_LABELS = "zticklabels={{{value}}}"
    AXIS_X_LINE = "axis x line={value}"
    AXIS_X_LINE_AST = "axis x line*={value}"
    AXIS_Y_LINE = "axis y line={value}"
    AXIS_Y_LINE_AST = "axis y line*={value}"
    AXIS_Z_LINE = "axis z line={value}"
    AXIS_Z_LINE_AST = "axis z line*={value}"
    AXIS_LINES = "axis lines={value}"
    AXIS_LINES_AST = "axis lines*={value}"
    GRID = "grid={value}"


class PlotKey(AttributeKind):
    """Options of an ``\\addplot`` command."""

    CUSTOM = None
    TYPE_2D = "{value}"
    # Error bars are drawn only when both the character and the direction are set
    X_ERROR = "error bars/x {value}"
    X_ERROR_DIRECTION = "error bars/x dir={value}"
    Y_ERROR = "error bars/y {value}"
    Y_ERROR_DIRECTION = "error bars/y dir={value}"


class HistogramKey(AttributeKind):
    """Options of the ``hist={...}`` block of a histogram plot."""

    CUSTOM = None
    DATA_MIN = "data min={{{value}}}"
    DATA_MAX = "data max={{{value}}}"
    BINS = "bins={value}"
    INTERVALS = "intervals={value}"
    CUMULATIVE = "cumulative={value}"
    DENSITY = "density={value}"
    HANDLER = "handler/.style={{{value}}}"


class Scale(Enum):
    LOG = "log"
    NORMAL = "normal"


class AxisXLine(Enum):
    BOX = "box"
    TOP = "top"
    MIDDLE = "middle"
    CENTER = "center"
    BOTTOM = "bottom"
    NONE = "none"


class AxisLines(Enum):
    BOX = "box"
    LEFT = "left"
    MIDDLE = "middle"
    CENTER = "center"
    RIGHT = "right"
    NONE = "none"


AxisYLine = AxisLines
AxisZLine = AxisLines


class Grid(Enum):
    MAJOR = "major"
    MINOR = "minor"
    BOTH = "both"
    NONE = "none"


class ErrorCharacter(Enum):
    """Whether error magnitudes are absolute or relative to the coordinate."""

    ABSOLUTE = "explicit"
    RELATIVE = "explicit relative"


class ErrorDirection(Enum):
    NONE = "none"
    PLUS = "plus"
    MINUS = "minus"
    BOTH = "both"


@dataclass(frozen=True)
class Type2D:
    """
    Style of a two-dimensional plot (value of PlotKey.TYPE_2D).

    Simple styles are class constants; parametrised ones are built with
    smooth(), xbar() and ybar().
    """

    style: str

    def __str__(self) -> str:
        return self.style

    @classmethod
    def smooth(cls, tension: float) -> "Type2D":
        """Smooth interpolation; 0.55 is a good starting tension."""
        return cls(f"smooth, tension={format_number(tension)}")

    @classmethod
    def xbar(cls, bar_width: float, bar_shift: float = 0.0) -> "Type2D":
        """Horizontal bars between y = 0 and each coordinate."""
        return cls(
            f"xbar, bar width={format_number(bar_width)}, bar shift={format_number(bar_shift)}"
        )

    @classmethod
    def ybar(cls, bar_width: float, bar_shift: float = 0.0) -> "Type2D":
        """Vertical bars between x = 0 and each coordinate."""
        return cls(
            f"ybar, bar width={format_number(bar_width)}, bar shift={format_number(bar_shift)}"
        )


Type2D.SHARP_PLOT = Type2D("sharp plot")
Type2D.CONST_LEFT = Type2D("const plot mark left")
Type2D.CONST_RIGHT = Type2D("const plot mark right")
Type2D.CONST_MID = Type2D("const plot mark mid")
Type2D.JUMP_LEFT = Type2D("jump mark left")
Type2D.JUMP_RIGHT = Type2D("jump mark right")
Type2D.JUMP_MID = Type2D("jump mark mid")
Type2D.X_COMB = Type2D("xcomb")
Type2D.Y_COMB = Type2D("ycomb")
Type2D.ONLY_MARKS = Type2D("only marks")
