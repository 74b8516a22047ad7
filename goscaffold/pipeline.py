"""goscaffold pipeline orchestrator.

Drives one scaffolding run through a fixed sequence of stages:

    TOOL_CHECK            -- live-reload tool on PATH, templates resolvable
    COLLECT_BASE_PATH     -- prompt (or config) + ``~/`` expansion
    COLLECT_PROJECT_NAME  -- prompt (or config)
    CREATE_BASE_DIR       -- ``<base>/<name>``, must not exist yet
    POPULATE_DIRS         -- layout directories and their seed files
    POPULATE_ROOT_FILES   -- Dockerfile, compose file, Makefile, .air.toml
    INIT_MODULE           -- ``go mod init <module>``
    TIDY_MODULE           -- ``go mod tidy``

Any error moves the run to ``ABORTED``; there are no retries and nothing
created so far is removed.

Usage::

    goscaffold
    goscaffold --base-path ~/code --project-name demo
    python -m goscaffold.pipeline --template-dir ./my-templates
"""

from __future__ import annotations

import asyncio
import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.panel import Panel

from goscaffold import __version__
from goscaffold.builder import AIR_INSTALL_HINT, GoModule, check_tool_available
from goscaffold.config import Config
from goscaffold.errors import GoScaffoldError, PreconditionError
from goscaffold.prompts import ProjectPrompter
from goscaffold.scaffolder import GenerationResult, ProjectGenerator, TemplateStore
from goscaffold.utils import (
    check_project_name,
    console,
    expand_tilde,
    format_duration,
    print_error,
    print_stage_header,
    print_success,
    print_summary_table,
    print_warning,
)

# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


class Stage(str, Enum):
    """Stages of a run, in execution order (plus the two terminal states)."""

    START = "start"
    TOOL_CHECK = "tool_check"
    COLLECT_BASE_PATH = "collect_base_path"
    COLLECT_PROJECT_NAME = "collect_project_name"
    CREATE_BASE_DIR = "create_base_dir"
    POPULATE_DIRS = "populate_dirs"
    POPULATE_ROOT_FILES = "populate_root_files"
    INIT_MODULE = "init_module"
    TIDY_MODULE = "tidy_module"
    DONE = "done"
    ABORTED = "aborted"


STAGE_TITLES: dict[Stage, str] = {
    Stage.TOOL_CHECK: "Checking tools",
    Stage.CREATE_BASE_DIR: "Creating project directory",
    Stage.POPULATE_DIRS: "Creating directories and files",
    Stage.POPULATE_ROOT_FILES: "Creating build and deploy files",
    Stage.INIT_MODULE: "Initializing Go module",
}


@dataclass
class PipelineState:
    """Outcome of a run, filled in as stages complete."""

    stage: Stage = Stage.START
    stages_completed: list[Stage] = field(default_factory=list)
    failed_stage: Stage | None = None
    error: str = ""
    base_path: str = ""
    project_name: str = ""
    project_root: Path | None = None
    created: list[Path] = field(default_factory=list)
    duration: str = ""

    @property
    def success(self) -> bool:
        return self.stage is Stage.DONE


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Runs the scaffolding stages in order and records the outcome.

    Collaborators can be injected for tests; by default they are built from
    *config*.
    """

    def __init__(
        self,
        config: Config,
        prompter: ProjectPrompter | None = None,
        generator: ProjectGenerator | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter or ProjectPrompter()
        self.generator = generator or ProjectGenerator(
            store=TemplateStore(override_dirs=config.template_dirs)
        )
        self.state = PipelineState()

    async def run(self) -> PipelineState:
        """Execute every stage; never raises ``GoScaffoldError``.

        Returns:
            The final state.  ``state.success`` is ``False`` when a stage
            failed, with ``failed_stage`` and ``error`` describing why.
        """
        start = time.monotonic()
        try:
            await self._run_stages()
        except GoScaffoldError as exc:
            self.state.failed_stage = self.state.stage
            self.state.error = str(exc)
            self.state.stage = Stage.ABORTED
            print_error(f"Error: {exc}")
        else:
            self.state.stage = Stage.DONE
        finally:
            self.state.duration = format_duration(time.monotonic() - start)

        if self.state.success:
            self._print_final_summary()
        return self.state

    # ------------------------------------------------------------------
    # Stage sequence
    # ------------------------------------------------------------------

    async def _run_stages(self) -> None:
        self._enter(Stage.TOOL_CHECK)
        self._check_tools()
        self._complete()

        self._enter(Stage.COLLECT_BASE_PATH)
        base_input = self.config.base_path.strip() or self.prompter.ask_base_path()
        self.state.base_path = expand_tilde(base_input)
        self._complete()

        self._enter(Stage.COLLECT_PROJECT_NAME)
        self.state.project_name = check_project_name(
            self.config.project_name.strip() or self.prompter.ask_project_name()
        )
        self._complete()

        self._enter(Stage.CREATE_BASE_DIR)
        root = await self.generator.create_project_root(
            self.state.base_path, self.state.project_name
        )
        self.state.project_root = root
        self.state.created.append(root)
        self._complete()

        result = GenerationResult(root=root)
        self._enter(Stage.POPULATE_DIRS)
        try:
            await self.generator.populate_directories(root, result)
        finally:
            self._record(result)
        self._complete()

        result = GenerationResult(root=root)
        self._enter(Stage.POPULATE_ROOT_FILES)
        try:
            await self.generator.populate_root_files(root, result)
        finally:
            self._record(result)
        self._complete()

        if self.config.skip_module:
            print_warning("Skipping Go module initialization.")
            return

        module = GoModule(root, go=self.config.go_tool, timeout=self.config.command_timeout)
        module_path = self.config.module_path.strip() or self.state.project_name

        self._enter(Stage.INIT_MODULE)
        await module.init(module_path)
        self._complete()

        self._enter(Stage.TIDY_MODULE)
        await module.tidy()
        self._complete()
        print_success("Go module initialized successfully!")

    def _check_tools(self) -> None:
        tool = self.config.reload_tool
        if not check_tool_available(tool):
            hint = AIR_INSTALL_HINT if tool == "air" else ""
            raise PreconditionError(
                f"'{tool}' is not installed."
                + (" Please install it by running:" if hint else ""),
                hint=hint,
            )
        self.generator.validate()

    # ------------------------------------------------------------------
    # State bookkeeping
    # ------------------------------------------------------------------

    def _enter(self, stage: Stage) -> None:
        self.state.stage = stage
        title = STAGE_TITLES.get(stage)
        if title:
            print_stage_header(title)

    def _complete(self) -> None:
        self.state.stages_completed.append(self.state.stage)

    def _record(self, result: GenerationResult) -> None:
        self.state.created.extend(result.directories)
        self.state.created.extend(result.files)

    def _print_final_summary(self) -> None:
        print_summary_table(
            {
                "Project": self.state.project_name,
                "Location": str(self.state.project_root),
                "Paths created": str(len(self.state.created)),
                "Duration": self.state.duration,
            },
            title="Project created",
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_config(args: Any) -> Config:
    """Merge environment, optional config file and CLI flags into a ``Config``.

    Precedence: CLI flag > config file > environment > defaults.  Only the
    keys present in the config file replace environment values.
    """
    values = Config.from_env().model_dump()
    if args.config:
        values.update(Config.load(Path(args.config)).model_dump(exclude_unset=True))

    if args.base_path is not None:
        values["base_path"] = args.base_path
    if args.project_name is not None:
        values["project_name"] = args.project_name
    if args.module_path is not None:
        values["module_path"] = args.module_path
    if args.template_dir:
        values["template_dirs"] = [Path(d) for d in args.template_dir]
    if args.skip_module:
        values["skip_module"] = True
    if args.timeout is not None:
        values["command_timeout"] = args.timeout

    return Config.model_validate(values)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``goscaffold`` / ``python -m goscaffold.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="goscaffold",
        description="Scaffold a Go web service project (chi router, Docker, air live reload)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  goscaffold\n"
            "  goscaffold --base-path ~/code --project-name demo\n"
            "  goscaffold -b ~/code -n demo --module-path github.com/acme/demo\n"
        ),
    )
    parser.add_argument("--base-path", "-b", default=None, help="Directory to create the project in (skips the prompt)")
    parser.add_argument("--project-name", "-n", default=None, help="Project name (skips the prompt)")
    parser.add_argument("--module-path", default=None, help="Module path for `go mod init` (default: project name)")
    parser.add_argument(
        "--template-dir",
        action="append",
        default=[],
        help="Directory with template overrides; repeatable, searched in order before the built-in templates",
    )
    parser.add_argument("--config", "-c", default=None, help="JSON config file; its keys override GOSCAFFOLD_* environment settings")
    parser.add_argument(
        "--save-config",
        default=None,
        help="Write the effective configuration to this JSON file before running",
    )
    parser.add_argument("--skip-module", action="store_true", help="Do not run `go mod init` / `go mod tidy`")
    parser.add_argument("--timeout", type=int, default=None, help="Per-command timeout in seconds (default: none)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
        if args.save_config:
            config.save(Path(args.save_config))
    except (OSError, ValueError, ValidationError) as exc:
        print_error(f"Error: invalid configuration: {exc}")
        sys.exit(1)

    console.print(
        Panel(
            "[bold bright_cyan]goscaffold[/bold bright_cyan] -- Go project generator",
            border_style="bright_cyan",
        )
    )

    pipeline = Pipeline(config)
    state = asyncio.run(pipeline.run())

    if not state.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
