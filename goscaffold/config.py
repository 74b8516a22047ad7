"""goscaffold configuration.

Typed settings for a scaffolding run. Everything uses Pydantic v2 models so
values are validated at construction time and can be round-tripped through
JSON or read from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Settings for one scaffolding run.

    ``base_path`` and ``project_name`` are normally collected interactively;
    when they are set here the matching prompt is skipped.  Empty strings mean
    "ask the user".
    """

    base_path: str = Field(default="", description="Directory the project is created in")
    project_name: str = Field(default="", description="Project directory and default module name")
    module_path: str = Field(
        default="", description="Module path for `go mod init` (defaults to the project name)"
    )
    template_dirs: list[Path] = Field(
        default_factory=list,
        description="Directories searched for templates before the packaged ones",
    )
    reload_tool: str = Field(default="air", description="Live-reload executable that must be on PATH")
    go_tool: str = Field(default="go", description="Go toolchain executable")
    skip_module: bool = Field(default=False, description="Skip `go mod init` / `go mod tidy`")
    command_timeout: Optional[int] = Field(
        default=None, ge=1, description="Per-command timeout in seconds (None waits forever)"
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            GOSCAFFOLD_BASE_PATH, GOSCAFFOLD_PROJECT_NAME, GOSCAFFOLD_MODULE_PATH,
            GOSCAFFOLD_TEMPLATE_DIRS (``os.pathsep`` separated),
            GOSCAFFOLD_RELOAD_TOOL, GOSCAFFOLD_GO, GOSCAFFOLD_SKIP_MODULE,
            GOSCAFFOLD_COMMAND_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("GOSCAFFOLD_BASE_PATH"):
            kwargs["base_path"] = os.environ["GOSCAFFOLD_BASE_PATH"]
        if os.environ.get("GOSCAFFOLD_PROJECT_NAME"):
            kwargs["project_name"] = os.environ["GOSCAFFOLD_PROJECT_NAME"]
        if os.environ.get("GOSCAFFOLD_MODULE_PATH"):
            kwargs["module_path"] = os.environ["GOSCAFFOLD_MODULE_PATH"]
        if os.environ.get("GOSCAFFOLD_TEMPLATE_DIRS"):
            kwargs["template_dirs"] = [
                Path(p) for p in os.environ["GOSCAFFOLD_TEMPLATE_DIRS"].split(os.pathsep) if p
            ]
        if os.environ.get("GOSCAFFOLD_RELOAD_TOOL"):
            kwargs["reload_tool"] = os.environ["GOSCAFFOLD_RELOAD_TOOL"]
        if os.environ.get("GOSCAFFOLD_GO"):
            kwargs["go_tool"] = os.environ["GOSCAFFOLD_GO"]
        if os.environ.get("GOSCAFFOLD_SKIP_MODULE"):
            kwargs["skip_module"] = os.environ["GOSCAFFOLD_SKIP_MODULE"].strip().lower() in _TRUTHY
        if os.environ.get("GOSCAFFOLD_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["GOSCAFFOLD_COMMAND_TIMEOUT"])

        return cls(**kwargs)
