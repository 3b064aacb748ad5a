"""
YAML Figure Descriptions

Builds a Document from a YAML figure description, so figures can be kept as
data and compiled from the command line.

Format:
    compat: "1.18"
    packages:
      - siunitx
      - {name: babel, options: [italian]}
    libraries: [fillbetween]
    pictures:
      - options: [baseline]
        axes:
          - options:
              - title: Quadratic
              - x_min: 0
              - legend pos=north west      # plain strings are written verbatim
            plots:
              - type: plot2d
                options: [{type_2d: sharp plot}]
                coordinates: [[0, 0], [1, 1], [2, 4, null, 0.5]]
              - type: histogram
                hist_options: [{bins: 5}]
                data: [1, 2, 2, 3]
              - type: draw
                command: (axis cs:0,0) -- (axis cs:1,1)

Option keys are the lowercase member names of PictureKey, AxisKey, PlotKey
and HistogramKey.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Type, Union

from omegaconf import DictConfig, OmegaConf

from figtex.contexts.templating.attributes import Attribute, AttributeKind
from figtex.contexts.templating.document import Document
from figtex.contexts.templating.environments import Axis, TikzPicture
from figtex.contexts.templating.exceptions import FigureConfigError
from figtex.contexts.templating.keys import AxisKey, HistogramKey, PictureKey, PlotKey
from figtex.contexts.templating.logger import _log_debug, _log_info, _log_warning
from figtex.contexts.templating.plots import Coordinate2D, Draw, Histogram, Plot, Plot2D
from figtex.contexts.templating.preamble import Package

DOCUMENT_KEYS = {"compat", "packages", "libraries", "pictures"}
PACKAGE_KEYS = {"name", "options"}
PICTURE_KEYS = {"options", "axes"}
AXIS_KEYS = {"options", "plots"}
PLOT_KEYS = {"type", "options", "hist_options", "coordinates", "data", "command"}


def load_document(config_path: Path) -> Document:
    """
    Load a YAML figure description and build its Document.

    Args:
        config_path: Path to the YAML file

    Returns:
        Document described by the file

    Raises:
        FigureConfigError: If the description is malformed
        CompatVersionError: If the compat version is not recognised
    """
    config_path = Path(config_path)
    config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    _log_info(f"Loading figure description: {config_path}")
    try:
        return document_from_config(config)
    except FigureConfigError as e:
        raise FigureConfigError(e.message, entry=e.entry, config_path=config_path) from e


def document_from_config(config: Union[Dict[str, Any], DictConfig]) -> Document:
    """
    Build a Document from a figure description mapping.

    Args:
        config: Parsed figure description (see module docstring)

    Returns:
        Document described by the mapping
    """
    if isinstance(config, DictConfig):
        config = OmegaConf.to_container(config, resolve=True)
    if not isinstance(config, dict):
        raise FigureConfigError("Figure description must be a mapping", entry=config)
    _check_keys(config, DOCUMENT_KEYS, "figure description")

    document = Document()

    if config.get("compat") is not None:
        document.set_compat_version(str(config["compat"]))

    for package in config.get("packages") or []:
        document.add_package(_parse_package(package))

    for lib in config.get("libraries") or []:
        document.add_library(str(lib))

    for picture_config in config.get("pictures") or []:
        document.add_picture(_parse_picture(picture_config))

    if not document.pictures:
        _log_warning("Figure description has no pictures, the document body is empty")
    _log_debug(f"Built document with {len(document.pictures)} picture(s)")
    return document


def _check_keys(entry: Dict[str, Any], allowed: Set[str], what: str):
    """Raise FigureConfigError for keys outside the allowed set."""
    unknown = sorted(str(key) for key in entry if key not in allowed)
    if unknown:
        raise FigureConfigError(
            f"Unknown {what} key(s): {', '.join(unknown)} "
            f"(expected one of: {', '.join(sorted(allowed))})",
            entry=entry,
        )


def _to_float(value: Any) -> float:
    # bool is an int subclass
    if isinstance(value, bool):
        raise TypeError(f"not a number: {value!r}")
    return float(value)


def _parse_coordinate(point: Any) -> Coordinate2D:
    if not isinstance(point, (list, tuple)) or len(point) not in (2, 4):
        raise TypeError(f"bad coordinate: {point!r}")
    values = [None if value is None and i >= 2 else _to_float(value) for i, value in enumerate(point)]
    return Coordinate2D(*values)


def _parse_package(entry: Any) -> Package:
    if isinstance(entry, str):
        return Package(entry)
    if isinstance(entry, dict) and "name" in entry:
        _check_keys(entry, PACKAGE_KEYS, "package")
        return Package(str(entry["name"]), [str(option) for option in entry.get("options") or []])
    raise FigureConfigError("Package must be a name or a {name, options} mapping", entry=entry)


def _parse_options(entries: Optional[List[Any]], kind_type: Type[AttributeKind]) -> List:
    """Turn option entries into attributes; strings are custom attributes."""
    options = []
    for entry in entries or []:
        if isinstance(entry, str):
            options.append(entry)
            continue

        if not isinstance(entry, dict) or len(entry) != 1:
            raise FigureConfigError(
                f"{kind_type.__name__} option must be a string or a single-key mapping",
                entry=entry,
            )

        ((name, value),) = entry.items()
        try:
            kind = kind_type[str(name).upper()]
        except KeyError:
            raise FigureConfigError(
                f"Unknown {kind_type.__name__} option '{name}'", entry=entry
            ) from None
        if kind.is_custom:
            raise FigureConfigError("Custom options are written as plain strings", entry=entry)

        options.append(Attribute(kind, value))
    return options


def _parse_plot(entry: Dict[str, Any]) -> Plot:
    if not isinstance(entry, dict):
        raise FigureConfigError("Plot must be a mapping", entry=entry)

    _check_keys(entry, PLOT_KEYS, "plot")
    plot_type = entry.get("type", "plot2d")

    if plot_type == "draw":
        if "command" not in entry:
            raise FigureConfigError("Draw plot requires a 'command'", entry=entry)
        return Draw(str(entry["command"]))

    if plot_type == "plot2d":
        try:
            coordinates = [_parse_coordinate(point) for point in entry.get("coordinates") or []]
        except (TypeError, ValueError):
            raise FigureConfigError(
                "Coordinates must be numeric [x, y] or [x, y, error_x, error_y]", entry=entry
            ) from None
        return Plot2D(coordinates, _parse_options(entry.get("options"), PlotKey))

    if plot_type == "histogram":
        try:
            data = [_to_float(value) for value in entry.get("data") or []]
        except (TypeError, ValueError):
            raise FigureConfigError("Histogram data must be a list of numbers", entry=entry) from None
        return Histogram(
            data,
            _parse_options(entry.get("options"), PlotKey),
            _parse_options(entry.get("hist_options"), HistogramKey),
        )

    raise FigureConfigError(f"Unknown plot type '{plot_type}'", entry=entry)


def _parse_axis(entry: Dict[str, Any]) -> Axis:
    if not isinstance(entry, dict):
        raise FigureConfigError("Axis must be a mapping", entry=entry)
    _check_keys(entry, AXIS_KEYS, "axis")
    plots = [_parse_plot(plot) for plot in entry.get("plots") or []]
    return Axis(plots, _parse_options(entry.get("options"), AxisKey))


def _parse_picture(entry: Dict[str, Any]) -> TikzPicture:
    if not isinstance(entry, dict):
        raise FigureConfigError("Picture must be a mapping", entry=entry)
    _check_keys(entry, PICTURE_KEYS, "picture")
    axes = [_parse_axis(axis) for axis in entry.get("axes") or []]
    return TikzPicture(axes, _parse_options(entry.get("options"), PictureKey))
