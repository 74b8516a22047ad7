"""External tool invocation for a new project.

Probes ``PATH`` for required executables and runs the Go toolchain inside the
generated project.  Child processes inherit this process's stdout/stderr so
their output streams straight to the user's terminal.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from rich.markup import escape

from goscaffold.errors import ToolchainError
from goscaffold.utils import console

AIR_INSTALL_HINT = (
    "curl -sSfL https://raw.githubusercontent.com/air-verse/air/master/install.sh"
    " | sh -s -- -b $(go env GOPATH)/bin"
)


def check_tool_available(name: str) -> bool:
    """Return ``True`` if *name* resolves to an executable on ``PATH``."""
    return shutil.which(name) is not None


async def run_tool(
    directory: str | Path,
    command: str,
    *args: str,
    timeout: float | None = None,
) -> None:
    """Run *command* with *args* in *directory* and wait for it to exit.

    The child inherits stdout/stderr.  With ``timeout=None`` the call waits
    for as long as the child runs.

    Raises:
        ToolchainError: If the process cannot be started, exceeds *timeout*,
            or exits with a non-zero code.
    """
    cmd_str = " ".join([command, *args])

    try:
        process = await asyncio.create_subprocess_exec(command, *args, cwd=str(directory))
    except OSError as exc:
        raise ToolchainError(f"Error running command {cmd_str}: {exc}", command=cmd_str) from exc

    try:
        returncode = await asyncio.wait_for(process.wait(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise ToolchainError(
            f"Command timed out after {timeout}s: {cmd_str}", command=cmd_str
        )

    if returncode != 0:
        raise ToolchainError(
            f"Command failed (exit {returncode}): {cmd_str}",
            command=cmd_str,
            returncode=returncode,
        )


class GoModule:
    """Initialises and tidies the Go module of a generated project."""

    def __init__(
        self,
        project_root: str | Path,
        go: str = "go",
        timeout: float | None = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.go = go
        self.timeout = timeout

    async def init(self, module_path: str) -> None:
        """Run ``go mod init <module_path>`` in the project root."""
        console.print(f"Initializing Go module [bold]{escape(module_path)}[/bold]...")
        await run_tool(self.project_root, self.go, "mod", "init", module_path, timeout=self.timeout)

    async def tidy(self) -> None:
        """Run ``go mod tidy`` in the project root."""
        console.print("Tidying up Go module dependencies...")
        await run_tool(self.project_root, self.go, "mod", "tidy", timeout=self.timeout)
