"""
Integration tests for saving compiled PDFs out of the workspace.

The workspace artifact is written by hand, so no LaTeX installation is needed.
"""

import os

import pytest

from figtex.contexts.rendering import (
    InvalidDestinationError,
    LatexOutput,
    OpenArtifactError,
    SaveFailError,
    SavePermissionError,
)

PDF_BYTES = b"%PDF-1.5\n%fake\n"


@pytest.fixture
def output(tmp_path):
    """Workspace holding a fake compiled PDF."""
    workspace = LatexOutput(parent_dir=tmp_path)
    workspace.output_path.write_bytes(PDF_BYTES)
    yield workspace
    workspace.cleanup()


def never_called():
    raise AssertionError("overwrite() must not be asked")


@pytest.mark.integration
def test_save_creates_missing_parent_chain(output, tmp_path):
    """Test saving into a directory chain that does not exist yet."""
    destination = tmp_path / "a" / "b" / "c" / "plot.pdf"

    assert output.save(destination, overwrite=never_called) is True

    assert destination.read_bytes() == PDF_BYTES
    assert os.listdir(destination.parent) == ["plot.pdf"]


@pytest.mark.integration
def test_save_into_existing_directory(output, tmp_path):
    """Test that a directory destination receives the PDF under its own name."""
    destination = tmp_path / "figures"
    destination.mkdir()

    assert output.save(destination, overwrite=never_called) is True
    assert (destination / "pgfplot.pdf").read_bytes() == PDF_BYTES


@pytest.mark.integration
def test_save_to_new_file_in_existing_directory(output, tmp_path):
    """Test saving under a new name in an existing directory."""
    destination = tmp_path / "quadratic.pdf"

    assert output.save(str(destination), overwrite=never_called) is True
    assert destination.read_bytes() == PDF_BYTES


@pytest.mark.integration
def test_existing_file_overwrite_declined(output, tmp_path):
    """Test that a declined overwrite leaves the file untouched."""
    destination = tmp_path / "plot.pdf"
    destination.write_bytes(b"original")
    asked = []

    saved = output.save(destination, overwrite=lambda: asked.append(True) or False)

    assert saved is False
    assert asked == [True]
    assert destination.read_bytes() == b"original"


@pytest.mark.integration
def test_existing_file_overwrite_accepted(output, tmp_path):
    """Test that an accepted overwrite replaces the file."""
    destination = tmp_path / "plot.pdf"
    destination.write_bytes(b"original")

    assert output.save(destination, overwrite=lambda: True) is True
    assert destination.read_bytes() == PDF_BYTES


@pytest.mark.integration
def test_empty_destination_is_invalid(output):
    """Test that an empty path is rejected."""
    with pytest.raises(InvalidDestinationError):
        output.save("", overwrite=never_called)


@pytest.mark.integration
def test_parent_is_a_file(output, tmp_path):
    """Test that a destination below a regular file is rejected."""
    blocker = tmp_path / "notes.txt"
    blocker.write_text("not a directory")

    with pytest.raises(InvalidDestinationError):
        output.save(blocker / "plot.pdf", overwrite=never_called)


@pytest.mark.integration
@pytest.mark.skipif(not os.path.exists("/dev/null"), reason="needs a character device")
def test_special_file_is_invalid(output):
    """Test that a destination that is neither file nor directory is rejected."""
    with pytest.raises(InvalidDestinationError):
        output.save("/dev/null", overwrite=never_called)


@pytest.mark.integration
@pytest.mark.skipif(
    os.name == "nt" or os.geteuid() == 0, reason="needs POSIX permissions enforced"
)
def test_unreadable_parent_is_permission_error(output, tmp_path):
    """Test that permission failures are reported separately from I/O failures."""
    locked = tmp_path / "locked"
    locked.mkdir()
    locked.chmod(0o000)

    try:
        with pytest.raises(SavePermissionError) as exc_info:
            output.save(locked / "plot.pdf", overwrite=never_called)
        assert isinstance(exc_info.value.original_error, PermissionError)
    finally:
        locked.chmod(0o700)


@pytest.mark.integration
def test_missing_artifact_fails_to_save(tmp_path):
    """Test that saving before anything was produced fails on the copy."""
    with LatexOutput(parent_dir=tmp_path) as empty:
        with pytest.raises(SaveFailError):
            empty.save(tmp_path / "plot.pdf", overwrite=never_called)


@pytest.mark.integration
def test_cleanup_removes_workspace(tmp_path):
    """Test that leaving the context removes the workspace directory."""
    with LatexOutput(parent_dir=tmp_path) as workspace:
        workspace.output_path.write_bytes(PDF_BYTES)
        workspace_dir = workspace.dir_path
        assert workspace_dir.is_dir()
        assert workspace_dir.name.startswith("pgfplot")

    assert not workspace_dir.exists()
    workspace.cleanup()


@pytest.mark.integration
def test_open_missing_artifact(tmp_path):
    """Test that opening before compilation is an error."""
    with LatexOutput(parent_dir=tmp_path) as workspace:
        with pytest.raises(OpenArtifactError):
            workspace.open()


@pytest.mark.integration
def test_open_launches_viewer(output, monkeypatch):
    """Test that the artifact path is handed to the host launcher."""
    launched = []
    monkeypatch.setattr("typer.launch", lambda path: launched.append(path) or 0)

    output.open()

    assert launched == [str(output.output_path)]


@pytest.mark.integration
def test_open_reports_launcher_failure(output, monkeypatch):
    """Test that a failing launcher raises OpenArtifactError."""
    monkeypatch.setattr("typer.launch", lambda path: 1)

    with pytest.raises(OpenArtifactError, match="status 1"):
        output.open()
