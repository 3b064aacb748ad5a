"""Unit tests for the preamble and library-requirement propagation."""

import pytest

from figtex.contexts.templating import (
    COMPAT_VERSIONS,
    Axis,
    CompatVersionError,
    CustomLib,
    Document,
    Draw,
    Histogram,
    Package,
    PgfPlotsCompat,
    PgfPlotsLib,
    Plot2D,
    Preamble,
    TikzPicture,
)
from figtex.contexts.templating.plots import required_library


@pytest.mark.unit
def test_package_options():
    """Test package rendering with and without options."""
    package = Package("babel")
    assert str(package) == "\\usepackage{babel}"

    package.add_option("italian")
    assert str(package) == "\\usepackage{babel}[italian]"

    package.add_option("english")
    assert str(package) == "\\usepackage{babel}[italian, english]"


@pytest.mark.unit
def test_preamble_lines():
    """Test preamble output order."""
    preamble = Preamble()
    preamble.add_package(Package("babel", ["italian"]))
    preamble.add_package("braket")

    assert str(preamble) == (
        "\\documentclass{standalone}\n"
        "\\usepackage{pgfplots}\n"
        "\\pgfplotsset{compat=default}\n"
        "\\usepackage{babel}[italian]\n"
        "\\usepackage{braket}\n"
    )


@pytest.mark.unit
def test_libraries_precede_packages():
    """Test that libraries are listed before packages."""
    preamble = Preamble.with_compat_version("1.18")
    preamble.add_package("siunitx")
    preamble.add_library("fillbetween")

    assert preamble.lines() == [
        "\\documentclass{standalone}",
        "\\usepackage{pgfplots}",
        "\\pgfplotsset{compat=1.18}",
        "\\usepgfplotslibrary{fillbetween}",
        "\\usepackage{siunitx}",
    ]


@pytest.mark.unit
def test_same_package_merges_options():
    """Test that a repeated package merges its options into the first entry."""
    preamble = Preamble()
    preamble.add_package("babel", ["italian"])
    preamble.add_package("braket")
    preamble.add_package("babel", ["english", "italian"])

    assert [str(package) for package in preamble.packages] == [
        "\\usepackage{babel}[italian, english]",
        "\\usepackage{braket}",
    ]


@pytest.mark.unit
def test_library_names():
    """Test known and custom library names."""
    preamble = Preamble()
    preamble.add_libraries(["statistics", PgfPlotsLib.STATISTICS, "polar", CustomLib("polar")])

    assert preamble.libraries == [PgfPlotsLib.STATISTICS, CustomLib("polar")]
    assert preamble.lines()[3:] == [
        "\\usepgfplotslibrary{statistics}",
        "\\usepgfplotslibrary{polar}",
    ]


@pytest.mark.unit
@pytest.mark.parametrize("version", ["1.18", "1.5.1", "pre1.3", "default"])
def test_compat_accepts_known_versions(version):
    """Test that every documented compat version is accepted."""
    assert str(PgfPlotsCompat(version)) == f"\\pgfplotsset{{compat={version}}}"


@pytest.mark.unit
@pytest.mark.parametrize("version", ["3.0", "1.19", "", "Default"])
def test_compat_rejects_unknown_versions(version):
    """Test that unknown versions raise with the accepted set in the message."""
    with pytest.raises(CompatVersionError) as exc_info:
        PgfPlotsCompat(version)

    assert exc_info.value.version == version
    assert exc_info.value.accepted == COMPAT_VERSIONS
    assert f"`{version}`" in str(exc_info.value)
    assert "pre1.3" in str(exc_info.value)


@pytest.mark.unit
def test_compat_error_is_value_error():
    """Test that compat errors can be handled as ValueError."""
    document = Document()

    with pytest.raises(ValueError):
        document.set_compat_version("2.0")
    assert document.preamble.compat == PgfPlotsCompat()


@pytest.mark.unit
def test_required_library_per_plot():
    """Test that only histograms require a library."""
    assert required_library(Histogram()) is PgfPlotsLib.STATISTICS
    assert required_library(Plot2D()) is None
    assert required_library(Draw("x")) is None

    with pytest.raises(TypeError):
        required_library("not a plot")


@pytest.mark.unit
def test_picture_requires_statistics_once():
    """Test that two histograms yield a single requirement."""
    axis = Axis()
    axis.add_plot(Histogram())
    axis.add_plot(Plot2D())
    axis.add_plot(Histogram())

    picture = TikzPicture.from_axis(axis)
    picture.add_axis(Axis([Histogram()]))

    assert axis.required_libraries() == [PgfPlotsLib.STATISTICS]
    assert picture.required_libraries() == [PgfPlotsLib.STATISTICS]


@pytest.mark.unit
def test_document_imports_statistics_once():
    """Test propagation into the preamble when pictures are added."""
    document = Document()
    document.add_library("statistics")
    document.add_picture(TikzPicture.from_plot(Histogram([1, 2])))
    document.add_picture(TikzPicture.from_plot(Histogram([3])))

    source = document.standalone_string()
    assert source.count("\\usepgfplotslibrary{statistics}") == 1
    assert document.required_libraries() == [PgfPlotsLib.STATISTICS]


@pytest.mark.unit
def test_document_without_histogram_imports_nothing():
    """Test that plain plots add no library."""
    document = Document.from_plot(Plot2D([(0, 0)]))

    assert document.preamble.libraries == []
    assert "usepgfplotslibrary" not in document.standalone_string()
