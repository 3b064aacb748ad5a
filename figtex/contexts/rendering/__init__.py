"""
Rendering Context

Responsibilities:
- Selects the LaTeX engine and its non-interactive flags
- Owns the temporary compilation workspace
- Runs the engine and classifies the result
- Saves or opens the compiled PDF

Owns: LaTeX compilation, workspace lifetime, output management
Never: Generates or modifies LaTeX source
"""

from figtex.contexts.rendering.engine import LatexEngine
from figtex.contexts.rendering.exceptions import (
    BadExitStatusError,
    CompilationCancelledError,
    CompileError,
    CompileIOError,
    CreateDestDirError,
    EngineUnavailableError,
    InvalidDestinationError,
    OpenArtifactError,
    SaveError,
    SaveFailError,
    SavePermissionError,
    TempDirError,
    UnknownEngineError,
    WorkspaceStateError,
)
from figtex.contexts.rendering.workspace import LatexOutput, LatexOutputType, WorkspaceState

__all__ = [
    "LatexEngine",
    "LatexOutput",
    "LatexOutputType",
    "WorkspaceState",
    # Compilation errors
    "CompileError",
    "TempDirError",
    "CompileIOError",
    "BadExitStatusError",
    "CompilationCancelledError",
    "EngineUnavailableError",
    "WorkspaceStateError",
    "UnknownEngineError",
    # Persistence errors
    "SaveError",
    "CreateDestDirError",
    "SavePermissionError",
    "InvalidDestinationError",
    "SaveFailError",
    "OpenArtifactError",
]
