"""
Templating Context

Responsibilities:
- Models figures as a tree: document -> pictures -> axes -> plots -> coordinates
- Keeps per-node attribute sets where the last write of a key wins
- Renders the tree to standalone LaTeX/PGFPlots source
- Propagates PGFPlots libraries required by plots into the preamble
- Loads figure descriptions from YAML

Owns: Document tree, attribute semantics, LaTeX source generation
Never: Runs the LaTeX compiler
"""

from figtex.contexts.templating.attributes import Attribute, AttributeKind, AttributeSet
from figtex.contexts.templating.converter import document_from_config, load_document
from figtex.contexts.templating.document import Document
from figtex.contexts.templating.environments import Axis, Environment, TikzPicture
from figtex.contexts.templating.exceptions import CompatVersionError, FigureConfigError
from figtex.contexts.templating.keys import (
    AxisKey,
    AxisLines,
    AxisXLine,
    ErrorCharacter,
    ErrorDirection,
    Grid,
    HistogramKey,
    PictureKey,
    PlotKey,
    Scale,
    Type2D,
)
from figtex.contexts.templating.plots import Coordinate2D, Draw, Histogram, Plot, Plot2D
from figtex.contexts.templating.preamble import (
    COMPAT_VERSIONS,
    CustomLib,
    Package,
    PgfPlotsCompat,
    PgfPlotsLib,
    Preamble,
)

__all__ = [
    # Attribute sets
    "Attribute",
    "AttributeKind",
    "AttributeSet",
    # Attribute keys and values
    "PictureKey",
    "AxisKey",
    "PlotKey",
    "HistogramKey",
    "Scale",
    "AxisLines",
    "AxisXLine",
    "Grid",
    "ErrorCharacter",
    "ErrorDirection",
    "Type2D",
    # Document tree
    "Document",
    "TikzPicture",
    "Axis",
    "Environment",
    "Plot",
    "Plot2D",
    "Histogram",
    "Draw",
    "Coordinate2D",
    # Preamble
    "Preamble",
    "Package",
    "PgfPlotsLib",
    "CustomLib",
    "PgfPlotsCompat",
    "COMPAT_VERSIONS",
    # YAML figure descriptions
    "load_document",
    "document_from_config",
    # Errors
    "CompatVersionError",
    "FigureConfigError",
]
