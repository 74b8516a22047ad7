"""Static description of the generated project.

A ``ProjectLayout`` bundles the directory -> seed files table, the list of
root-level auxiliary files and the file -> template table.  It is immutable
and validated once at construction, so a gap in the tables is reported before
anything touches the filesystem.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProjectLayout(BaseModel):
    """Directory skeleton plus the template each file is copied from."""

    model_config = ConfigDict(frozen=True)

    directories: dict[str, tuple[str, ...]] = Field(
        ..., description="Relative directory path -> seed file names, in creation order"
    )
    root_files: tuple[str, ...] = Field(
        default=(), description="Auxiliary files created in the project root"
    )
    templates: dict[str, str] = Field(
        ..., description="Target file name -> template resource name"
    )

    @model_validator(mode="after")
    def _check_tables(self) -> "ProjectLayout":
        for directory in self.directories:
            rel = PurePosixPath(directory)
            if not directory or rel.is_absolute() or ".." in rel.parts:
                raise ValueError(f"Directory must be a relative path inside the project: {directory!r}")

        referenced = self.file_names()
        for name in referenced:
            if not name or "/" in name or "\\" in name or name in (".", ".."):
                raise ValueError(f"Seed file name must be a plain file name: {name!r}")

        missing = [name for name in referenced if name not in self.templates]
        if missing:
            raise ValueError(f"No template mapped for: {', '.join(missing)}")

        unused = [name for name in self.templates if name not in referenced]
        if unused:
            raise ValueError(f"Template mapped for a file that is never created: {', '.join(unused)}")
        return self

    def file_names(self) -> list[str]:
        """Every file name the layout produces, directory files first."""
        names: list[str] = []
        for files in self.directories.values():
            names.extend(files)
        names.extend(self.root_files)
        return names

    def template_for(self, file_name: str) -> str:
        """Return the template resource name for *file_name*."""
        return self.templates[file_name]

    def expected_paths(self) -> list[str]:
        """Relative POSIX paths of every file the layout produces."""
        paths = [
            str(PurePosixPath(directory) / name)
            for directory, files in self.directories.items()
            for name in files
        ]
        paths.extend(self.root_files)
        return paths


DEFAULT_LAYOUT = ProjectLayout(
    directories={
        "cmd": ("main.go",),
        "pkg/router": ("router.go",),
        "pkg/middleware": ("middleware.go",),
        "pkg/handlers": ("handlers.go",),
        "pkg/models": ("models.go",),
        "pkg/db": ("db.go",),
        "config": ("config.yaml",),
    },
    root_files=("Dockerfile", "docker-compose.yaml", "Makefile", ".air.toml"),
    templates={
        "main.go": "main.txt",
        "router.go": "routes.txt",
        "middleware.go": "middleware.txt",
        "handlers.go": "handlers.txt",
        "models.go": "models.txt",
        "db.go": "db.txt",
        "Dockerfile": "dockers.txt",
        "docker-compose.yaml": "docker.txt",
        "Makefile": "makerun.txt",
        ".air.toml": "air.txt",
        "config.yaml": "config.txt",
    },
)
