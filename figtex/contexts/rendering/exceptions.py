"""
Custom exceptions for the rendering context.

Three families, so callers can react to each differently:
- CompileError: the workspace or the compiler failed
- SaveError: the compiled PDF could not be copied to its destination
- OpenArtifactError: no viewer could be launched for the PDF
"""

from pathlib import Path
from typing import Optional, Sequence


class UnknownEngineError(ValueError):
    """Raised when an engine name matches no supported LaTeX engine."""

    def __init__(self, name: str, available: Sequence[str]):
        self.name = name
        self.available = tuple(available)
        super().__init__(
            f"no such latex engine exists with name `{name}`; "
            f"available engines are: {', '.join(self.available)}"
        )


class CompileError(Exception):
    """Base class for compilation failures."""


class TempDirError(CompileError):
    """
    Raised when the temporary workspace directory cannot be created.

    Attributes:
        original_error: The underlying OSError
    """

    def __init__(self, original_error: OSError):
        self.original_error = original_error
        super().__init__(f"tmp directory: {original_error}")


class CompileIOError(CompileError):
    """
    Raised when the source cannot be written or the compiler cannot be spawned.

    Attributes:
        original_error: The underlying OSError
        path: File or executable involved, if known
    """

    def __init__(self, original_error: OSError, path: Optional[Path] = None):
        self.original_error = original_error
        self.path = path
        message = f"I/O: {original_error}"
        if path is not None:
            message += f" ({path})"
        super().__init__(message)


class BadExitStatusError(CompileError):
    """
    Raised when the compiler ran but exited with a non-zero status.

    Attributes:
        engine: LaTeX engine used
        exit_status: Compiler exit status
        log_path: Compiler log inside the workspace, if one was written
    """

    def __init__(self, engine, exit_status: int, log_path: Optional[Path] = None):
        self.engine = engine
        self.exit_status = exit_status
        self.log_path = log_path

        parts = [f"`{engine}` LaTeX compiler exited with non-zero exit code: {exit_status}"]
        if log_path is not None:
            parts.append(f"Compiler log: {log_path}")

        super().__init__("\n".join(parts))


class CompilationCancelledError(CompileError):
    """
    Raised when the compiler exceeded its timeout and was killed.

    Attributes:
        engine: LaTeX engine used
        timeout: Timeout in seconds
    """

    def __init__(self, engine, timeout: float):
        self.engine = engine
        self.timeout = timeout
        super().__init__(f"`{engine}` LaTeX compiler killed after {timeout}s timeout")


class EngineUnavailableError(CompileError):
    """Raised when an engine is known but cannot be used in this installation."""

    def __init__(self, engine, reason: str):
        self.engine = engine
        self.reason = reason
        super().__init__(f"`{engine}` engine is unavailable: {reason}")


class WorkspaceStateError(CompileError):
    """Raised when a workspace is asked to compile after reaching a terminal state."""

    def __init__(self, state):
        self.state = state
        super().__init__(
            f"workspace already finished ({state.value}); create a new workspace to compile again"
        )


class SaveError(Exception):
    """
    Base class for failures while saving the compiled PDF.

    Also raised directly for unexpected OS errors while probing the destination.

    Attributes:
        original_error: The underlying OSError, if any
    """

    def __init__(self, message: str, original_error: Optional[OSError] = None):
        self.original_error = original_error
        super().__init__(message)


class CreateDestDirError(SaveError):
    """Raised when the destination's parent directories cannot be created."""

    def __init__(self, path: Path, original_error: OSError):
        self.path = path
        super().__init__(
            f"unable to create destination directory '{path}': {original_error}", original_error
        )


class SavePermissionError(SaveError):
    """Raised when the destination (or its parent) cannot be accessed."""

    def __init__(self, path: Path, original_error: OSError):
        self.path = path
        super().__init__(
            f"unable to access destination path '{path}': {original_error}", original_error
        )


class InvalidDestinationError(SaveError):
    """Raised when the destination has no usable parent directory or is not a file path."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"invalid save path: '{path}'")


class SaveFailError(SaveError):
    """Raised when copying the PDF to its destination fails."""

    def __init__(self, path: Path, original_error: OSError):
        self.path = path
        super().__init__(
            f"unable to save to destination '{path}': {original_error}", original_error
        )


class OpenArtifactError(Exception):
    """Raised when the host cannot launch a viewer for the compiled PDF."""

    def __init__(self, path: Path, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"unable to open produced output '{path}': {detail}")
