"""goscaffold builder module.

Runs the external tooling a freshly scaffolded project needs.

Key names:
    check_tool_available - PATH lookup for an executable
    run_tool             - Spawn a command with inherited stdio and wait for it
    GoModule             - ``go mod init`` / ``go mod tidy`` for a project root
"""

from .toolchain import AIR_INSTALL_HINT, GoModule, check_tool_available, run_tool

__all__ = [
    "AIR_INSTALL_HINT",
    "GoModule",
    "check_tool_available",
    "run_tool",
]
