"""
LaTeX Compilation Workspace

Each compilation runs in its own temporary directory holding the generated
source file and whatever the engine produces next to it (.aux, .log, .pdf).
The directory is removed when the workspace is cleaned up, when its `with`
block exits, or at the latest when the object is garbage collected.

Lifecycle (WorkspaceState):
    CREATED -> SOURCE_WRITTEN -> SUCCEEDED | FAILED | CANCELLED

Terminal states are final: a workspace compiles at most once.
"""

import contextlib
import os
import shutil
import stat
import subprocess
import tempfile
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

import typer
from dotenv import load_dotenv

from figtex.contexts.rendering.engine import LatexEngine
from figtex.contexts.rendering.exceptions import (
    BadExitStatusError,
    CompilationCancelledError,
    CompileIOError,
    CreateDestDirError,
    EngineUnavailableError,
    InvalidDestinationError,
    OpenArtifactError,
    SaveError,
    SaveFailError,
    SavePermissionError,
    TempDirError,
    WorkspaceStateError,
)
from figtex.contexts.rendering.logger import (
    _log_debug,
    _log_error,
    log_compilation_result,
    log_compilation_start,
    log_save_result,
)

load_dotenv()

TMP_PREFIX = os.getenv("FIGTEX_TMP_PREFIX", "pgfplot")
FILE_STEM = "pgfplot"


class LatexOutputType(Enum):
    """Kind of artifact the engine produces."""

    PDF = "pdf"

    @property
    def ext(self) -> str:
        return self.value


class WorkspaceState(Enum):
    CREATED = "created"
    SOURCE_WRITTEN = "source written"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


TERMINAL_STATES = {WorkspaceState.SUCCEEDED, WorkspaceState.FAILED, WorkspaceState.CANCELLED}


class LatexOutput:
    """
    Temporary workspace in which one LaTeX document is compiled.

    Example:
        with LatexOutput() as output:
            output.compile(LatexEngine.PDFLATEX, document.standalone_string())
            output.save("figures/plot.pdf", overwrite=lambda: False)
    """

    def __init__(
        self,
        output_type: LatexOutputType = LatexOutputType.PDF,
        file_stem: str = FILE_STEM,
        prefix: Optional[str] = None,
        parent_dir: Optional[Path] = None,
    ):
        """
        Create the temporary workspace directory.

        Args:
            output_type: Artifact produced by compilation
            file_stem: Stem of the source and output files
            prefix: Temporary directory prefix (default: FIGTEX_TMP_PREFIX or "pgfplot")
            parent_dir: Where to create the temporary directory (default: system temp dir)

        Raises:
            TempDirError: If the temporary directory cannot be created
        """
        try:
            self._tmp_dir = tempfile.TemporaryDirectory(
                prefix=prefix or TMP_PREFIX, dir=parent_dir
            )
        except OSError as e:
            raise TempDirError(e) from e

        self.output_type = output_type
        self.dir_path = Path(self._tmp_dir.name)
        self.tex_file = self.dir_path / f"{file_stem}.tex"
        self.state = WorkspaceState.CREATED

        _log_debug(f"Created workspace: {self.dir_path}")

    @property
    def output_path(self) -> Path:
        """Path of the produced artifact (exists only after a successful compilation)."""
        return self.tex_file.with_suffix(f".{self.output_type.ext}")

    @property
    def log_path(self) -> Path:
        return self.tex_file.with_suffix(".log")

    def cleanup(self) -> None:
        """Remove the workspace directory; safe to call more than once."""
        self._tmp_dir.cleanup()

    def __enter__(self) -> "LatexOutput":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.cleanup()

    def __repr__(self) -> str:
        return f"LatexOutput(dir={self.dir_path}, state={self.state.value})"

    def write_source(self, source: str) -> None:
        """
        Write the LaTeX source to the workspace's tex file.

        The text goes to a sibling file first and is renamed into place, so
        the tex file either holds the full source or does not exist.

        Raises:
            CompileIOError: If the file cannot be written
        """
        partial = self.dir_path / f"{self.tex_file.name}.part"
        try:
            partial.write_text(source, encoding="utf-8")
            os.replace(partial, self.tex_file)
        except OSError as e:
            with contextlib.suppress(OSError):
                partial.unlink(missing_ok=True)
            raise CompileIOError(e, self.tex_file) from e

        self.state = WorkspaceState.SOURCE_WRITTEN

    def compile(self, engine: LatexEngine, source: str, timeout: Optional[float] = None) -> None:
        """
        Write the source and run the LaTeX engine on it.

        The engine runs in the workspace directory in batch mode, halting on
        the first error; its stdout and stderr are discarded. Only the exit
        status decides success.

        Args:
            engine: LaTeX engine to run
            source: Complete LaTeX document
            timeout: Seconds before the engine is killed (default: wait forever)

        Raises:
            WorkspaceStateError: If this workspace has already compiled
            EngineUnavailableError: If the engine cannot run in this installation
            CompileIOError: If the source cannot be written or the engine cannot be spawned
            BadExitStatusError: If the engine exits with a non-zero status
            CompilationCancelledError: If the timeout expires
        """
        if self.state in TERMINAL_STATES:
            raise WorkspaceStateError(self.state)

        if not engine.is_external:
            raise EngineUnavailableError(engine, "no in-process TeX backend is installed")

        self.write_source(source)

        cmd = [str(engine), *engine.args(), str(self.tex_file)]
        log_compilation_start(str(engine), self.tex_file, self.dir_path)
        start_time = time.time()

        try:
            result = subprocess.run(
                cmd,
                cwd=self.dir_path,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            # subprocess.run has already killed and reaped the child
            self.state = WorkspaceState.CANCELLED
            _log_error(f"{engine} killed after {timeout}s")
            raise CompilationCancelledError(engine, timeout) from None
        except OSError as e:
            self.state = WorkspaceState.FAILED
            _log_error(f"Unable to run {engine}: {e}")
            raise CompileIOError(e, Path(cmd[0])) from e

        elapsed_time = time.time() - start_time

        if result.returncode != 0:
            self.state = WorkspaceState.FAILED
            log_path = self.log_path if self.log_path.exists() else None
            log_compilation_result(
                str(engine), False, elapsed_time, exit_status=result.returncode, log_path=log_path
            )
            raise BadExitStatusError(engine, result.returncode, log_path)

        self.state = WorkspaceState.SUCCEEDED
        log_compilation_result(str(engine), True, elapsed_time)

    def save(self, destination: Union[str, Path], overwrite: Callable[[], bool]) -> bool:
        """
        Copy the produced artifact to destination.

        - Existing directory: the artifact is copied into it under its own name.
        - Existing file: overwrite() is asked first; nothing is copied if it returns False.
        - Missing path: missing parent directories are created, then the artifact is copied.

        Args:
            destination: Target file or directory
            overwrite: Called only when destination is an existing file; returns
                       whether to replace it

        Returns:
            True if the artifact was copied, False if overwrite() declined

        Raises:
            InvalidDestinationError: If destination has no usable parent directory
            SavePermissionError: If destination or its parent cannot be accessed
            CreateDestDirError: If the parent directories cannot be created
            SaveFailError: If the copy itself fails
            SaveError: For any other OS error while inspecting destination
        """
        if isinstance(destination, str) and not destination.strip():
            raise InvalidDestinationError(destination)

        path = Path(destination)

        try:
            mode = path.stat().st_mode
        except FileNotFoundError:
            saved = self._save_to_new_path(path)
        except NotADirectoryError:
            raise InvalidDestinationError(path) from None
        except PermissionError as e:
            raise SavePermissionError(path, e) from e
        except OSError as e:
            raise SaveError(f"unable to inspect destination '{path}': {e}", e) from e
        else:
            if stat.S_ISDIR(mode):
                saved = self._copy_to(path / self.output_path.name)
            elif stat.S_ISREG(mode):
                saved = self._copy_to(path) if overwrite() else False
            else:
                raise InvalidDestinationError(path)

        log_save_result(path, saved)
        return saved

    def _save_to_new_path(self, path: Path) -> bool:
        parent = path.parent
        if parent == path:
            raise InvalidDestinationError(path)

        try:
            parent_mode = parent.stat().st_mode
        except FileNotFoundError:
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise CreateDestDirError(parent, e) from e
            _log_debug(f"Created destination directory: {parent}")
            return self._copy_to(path)
        except NotADirectoryError:
            raise InvalidDestinationError(path) from None
        except PermissionError as e:
            raise SavePermissionError(parent, e) from e
        except OSError as e:
            raise SaveError(f"unable to inspect destination directory '{parent}': {e}", e) from e

        if not stat.S_ISDIR(parent_mode):
            raise InvalidDestinationError(path)

        return self._copy_to(path)

    def _copy_to(self, target: Path) -> bool:
        try:
            shutil.copy(self.output_path, target)
        except OSError as e:
            raise SaveFailError(target, e) from e
        return True

    def open(self) -> None:
        """
        Open the produced artifact with the host's default viewer.

        Raises:
            OpenArtifactError: If the artifact is missing or no viewer could be launched
        """
        if not self.output_path.exists():
            raise OpenArtifactError(self.output_path, "file does not exist")

        status = typer.launch(str(self.output_path))
        if status != 0:
            raise OpenArtifactError(
                self.output_path, f"viewer launcher exited with status {status}"
            )
