"""Line-based prompts for the values a run needs."""

from __future__ import annotations

from typing import TextIO

from rich.console import Console

from goscaffold.errors import PreconditionError
from goscaffold.utils import console as default_console

BASE_PATH_PROMPT = "Enter the base path where you want to create the project: "
PROJECT_NAME_PROMPT = "Enter the project name: "


class ProjectPrompter:
    """Asks for the base path and project name.

    Reads from *stream* when given (tests pass a ``StringIO``), otherwise
    from standard input.  Answers are stripped; an empty answer or end of
    input raises ``PreconditionError``.
    """

    def __init__(self, console: Console | None = None, stream: TextIO | None = None) -> None:
        self.console = console or default_console
        self.stream = stream

    def ask_base_path(self) -> str:
        return self._ask(BASE_PATH_PROMPT, "Base path cannot be empty")

    def ask_project_name(self) -> str:
        return self._ask(PROJECT_NAME_PROMPT, "Project name cannot be empty")

    def _ask(self, prompt: str, empty_message: str) -> str:
        try:
            answer = self.console.input(prompt, markup=False, stream=self.stream)
        except EOFError:
            answer = ""
        except UnicodeDecodeError as exc:
            raise PreconditionError(f"Could not read input: {exc}") from exc
        answer = answer.strip()
        if not answer:
            raise PreconditionError(empty_message)
        return answer
