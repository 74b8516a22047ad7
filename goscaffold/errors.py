"""Exception hierarchy for goscaffold.

Low-level code raises one of these and never terminates the process itself.
``goscaffold.pipeline`` catches ``GoScaffoldError`` at the boundary, reports
it, and turns it into a non-zero exit status.
"""

from __future__ import annotations

from pathlib import Path


class GoScaffoldError(Exception):
    """Base class for every failure that aborts a scaffolding run."""


class PreconditionError(GoScaffoldError):
    """A precondition was not met (required tool missing, empty input)."""

    def __init__(self, message: str, hint: str = "") -> None:
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.hint:
            return f"{base}\n\n\t{self.hint}\n"
        return base


class ResolutionError(GoScaffoldError):
    """The current user's home directory could not be determined."""


class FilesystemError(GoScaffoldError):
    """Creating a directory or file failed."""

    def __init__(self, message: str, path: str | Path = "") -> None:
        self.path = Path(path) if path else None
        super().__init__(message)


class TemplateError(FilesystemError):
    """A template resource is missing from the store or cannot be read."""

    def __init__(self, message: str, name: str = "", path: str | Path = "") -> None:
        self.name = name
        super().__init__(message, path=path)


class ToolchainError(GoScaffoldError):
    """An external command could not be spawned or exited non-zero."""

    def __init__(self, message: str, command: str = "", returncode: int | None = None) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(message)
