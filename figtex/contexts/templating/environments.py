"""
Environment Data Structures

The axis environment and the tikzpicture environment that contains it.
Both render as:

    \\begin{env}[
        key,
    ]
    % children, one per line
    \\end{env}

with the option block omitted when no options are set.
"""

from typing import Iterable, List, Optional, TypeVar, Union

from figtex.contexts.templating.attributes import Attribute, AttributeSet
from figtex.contexts.templating.keys import AxisKey, Grid, PictureKey, Scale
from figtex.contexts.templating.plots import Plot, required_library
from figtex.contexts.templating.preamble import Library

T = TypeVar("T")


def unique_in_order(items: Iterable[Optional[T]]) -> List[T]:
    """Drop None and duplicates, keeping first-seen order."""
    unique: List[T] = []
    for item in items:
        if item is not None and item not in unique:
            unique.append(item)
    return unique


def render_environment(name: str, options: AttributeSet, children: Iterable) -> str:
    text = f"\\begin{{{name}}}"
    if options:
        text += "[\n" + "".join(f"{line}\n" for line in options.lines("\t")) + "]"
    text += "\n"
    text += "".join(f"{child}\n" for child in children)
    text += f"\\end{{{name}}}"
    return text


class Axis:
    """
    Axis environment inside a tikzpicture.

    Plots are drawn in insertion order, so later plots overlay earlier ones.

    Example:
        axis = Axis()
        axis.set_title("Picture of $\\gamma$ rays")
        axis.set_x_label("$x$~[m]")
        axis.add_plot(Plot2D([(0, 0), (1, 1)]))
    """

    def __init__(self, plots: Iterable[Plot] = (), options: Iterable = ()):
        self.options = AttributeSet(AxisKey, options)
        self.plots: List[Plot] = list(plots)

    @classmethod
    def from_plot(cls, plot: Plot) -> "Axis":
        return cls(plots=[plot])

    def add_option(self, option: Union[Attribute, str]) -> None:
        """Add an AxisKey attribute, overwriting any previous attribute of the same kind."""
        self.options.insert(option)

    def add_plot(self, plot: Plot) -> None:
        self.plots.append(plot)

    def set_x_min(self, minimum: float) -> None:
        self.add_option(Attribute(AxisKey.X_MIN, minimum))

    def set_x_max(self, maximum: float) -> None:
        self.add_option(Attribute(AxisKey.X_MAX, maximum))

    def set_y_min(self, minimum: float) -> None:
        self.add_option(Attribute(AxisKey.Y_MIN, minimum))

    def set_y_max(self, maximum: float) -> None:
        self.add_option(Attribute(AxisKey.Y_MAX, maximum))

    def set_z_min(self, minimum: float) -> None:
        self.add_option(Attribute(AxisKey.Z_MIN, minimum))

    def set_z_max(self, maximum: float) -> None:
        self.add_option(Attribute(AxisKey.Z_MAX, maximum))

    def set_min(self, minimum: float) -> None:
        """Lower limit shared by every axis direction."""
        self.add_option(Attribute(AxisKey.MIN, minimum))

    def set_max(self, maximum: float) -> None:
        """Upper limit shared by every axis direction."""
        self.add_option(Attribute(AxisKey.MAX, maximum))

    def set_x_ticks(self, ticks: Iterable[float]) -> None:
        """Place x ticks at the given positions, e.g. ``xtick={1, 2.5, 4}``."""
        self.add_option(Attribute(AxisKey.X_TICK, tuple(ticks)))

    def set_y_ticks(self, ticks: Iterable[float]) -> None:
        self.add_option(Attribute(AxisKey.Y_TICK, tuple(ticks)))

    def set_x_tick_labels(self, labels: Iterable[str]) -> None:
        """Label the x ticks in order; labels are written verbatim."""
        self.add_option(Attribute(AxisKey.X_TICK_LABELS, tuple(labels)))

    def set_y_tick_labels(self, labels: Iterable[str]) -> None:
        self.add_option(Attribute(AxisKey.Y_TICK_LABELS, tuple(labels)))

    def set_z_tick_labels(self, labels: Iterable[str]) -> None:
        self.add_option(Attribute(AxisKey.Z_TICK_LABELS, tuple(labels)))

    def set_title(self, title: str) -> None:
        self.add_option(Attribute(AxisKey.TITLE, title))

    def set_x_label(self, label: str) -> None:
        self.add_option(Attribute(AxisKey.X_LABEL, label))

    def set_y_label(self, label: str) -> None:
        self.add_option(Attribute(AxisKey.Y_LABEL, label))

    def set_x_mode(self, scale: Scale) -> None:
        self.add_option(Attribute(AxisKey.X_MODE, scale))

    def set_y_mode(self, scale: Scale) -> None:
        self.add_option(Attribute(AxisKey.Y_MODE, scale))

    def set_grid(self, grid: Grid) -> None:
        self.add_option(Attribute(AxisKey.GRID, grid))

    def required_libraries(self) -> List[Library]:
        return unique_in_order(required_library(plot) for plot in self.plots)

    def __str__(self) -> str:
        return render_environment("axis", self.options, self.plots)


# Environments allowed inside a tikzpicture
Environment = Axis


class TikzPicture:
    """
    TikZ picture environment holding one or more axis environments.
    """

    def __init__(self, environments: Iterable[Environment] = (), options: Iterable = ()):
        self.options = AttributeSet(PictureKey, options)
        self.environments: List[Environment] = list(environments)

    @classmethod
    def from_axis(cls, axis: Axis) -> "TikzPicture":
        return cls(environments=[axis])

    @classmethod
    def from_plot(cls, plot: Plot) -> "TikzPicture":
        return cls.from_axis(Axis.from_plot(plot))

    def add_option(self, option: Union[Attribute, str]) -> None:
        self.options.insert(option)

    def add_env(self, environment: Environment) -> None:
        self.environments.append(environment)

    def add_axis(self, axis: Axis) -> None:
        self.add_env(axis)

    def required_libraries(self) -> List[Library]:
        return unique_in_order(
            lib for environment in self.environments for lib in environment.required_libraries()
        )

    def __str__(self) -> str:
        return render_environment("tikzpicture", self.options, self.environments)
