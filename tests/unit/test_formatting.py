"""Unit tests for numeric formatting of generated markup."""

import pytest

from figtex.contexts.templating import Grid
from figtex.utils import format_number, format_value


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0"),
        (-3, "-3"),
        (1.0, "1"),
        (-0.0, "0"),
        (0.1, "0.1"),
        (2.5, "2.5"),
        (1e-7, "1e-07"),
        (1e20, "1e+20"),
        (float("inf"), "inf"),
        (True, "true"),
        (False, "false"),
    ],
)
def test_format_number(value, expected):
    """Test that numbers format identically on every platform."""
    assert format_number(value) == expected


@pytest.mark.unit
def test_format_value_enum():
    """Test that enum members render their markup value."""
    assert format_value(Grid.MINOR) == "minor"


@pytest.mark.unit
def test_format_value_sequence():
    """Test that sequences are comma separated."""
    assert format_value((0, 0.5, 1.0)) == "0, 0.5, 1"


@pytest.mark.unit
def test_format_value_string():
    """Test that strings pass through untouched."""
    assert format_value("$\\alpha$") == "$\\alpha$"
