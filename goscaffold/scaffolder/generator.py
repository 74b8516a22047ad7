"""Main scaffolding orchestrator.

Takes a ``ProjectLayout`` and a ``TemplateStore`` and builds the project
skeleton: the project root, one directory per layout entry with its seed
files, then the root-level auxiliary files.  Every file's bytes come verbatim
from its template.

Failures raise ``FilesystemError`` / ``TemplateError`` immediately.  Nothing
is rolled back: whatever was created before the failure stays on disk.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from goscaffold.errors import FilesystemError, TemplateError
from goscaffold.utils import check_project_name, print_created

from .layout import DEFAULT_LAYOUT, ProjectLayout
from .templates import TemplateStore


@dataclass
class GenerationResult:
    """Paths created by one ``ProjectGenerator.generate`` call."""

    root: Path
    directories: list[Path] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)


class ProjectGenerator:
    """Creates a project tree from a layout.

    The steps are exposed separately so the pipeline can track them as
    distinct stages; :meth:`generate` runs all three in order.
    """

    def __init__(
        self,
        layout: ProjectLayout = DEFAULT_LAYOUT,
        store: TemplateStore | None = None,
    ) -> None:
        self.layout = layout
        self.store = store or TemplateStore()

    # -- Public API --------------------------------------------------------

    def validate(self) -> None:
        """Check that every template the layout names exists in the store.

        Raises:
            TemplateError: Listing every unresolved template.
        """
        needed = [self.layout.template_for(name) for name in self.layout.file_names()]
        missing = self.store.missing(dict.fromkeys(needed))
        if missing:
            raise TemplateError(
                f"Missing template resources: {', '.join(missing)}", name=missing[0]
            )

    async def generate(self, base_path: str | Path, project_name: str) -> GenerationResult:
        """Create the full project tree under ``<base_path>/<project_name>``."""
        root = await self.create_project_root(base_path, project_name)
        result = GenerationResult(root=root)
        await self.populate_directories(root, result)
        await self.populate_root_files(root, result)
        return result

    async def create_project_root(self, base_path: str | Path, project_name: str) -> Path:
        """Create the project root directory.

        The parent must exist and the root itself must not: running twice
        against the same path is an error, not a no-op.  *project_name* must
        be a single path segment so the root always lands inside *base_path*.
        """
        root = Path(base_path) / check_project_name(project_name)
        try:
            await asyncio.to_thread(root.mkdir, mode=0o755)
        except (OSError, ValueError) as exc:
            raise FilesystemError(
                f"Failed to create project base directory {root}: {exc}", path=root
            ) from exc
        print_created("project base directory", root)
        return root

    async def populate_directories(
        self, root: Path, result: GenerationResult | None = None
    ) -> GenerationResult:
        """Create each layout directory and the seed files inside it."""
        result = result or GenerationResult(root=root)
        for directory, files in self.layout.directories.items():
            dir_path = root / directory
            try:
                await asyncio.to_thread(dir_path.mkdir, mode=0o755, parents=True, exist_ok=True)
            except OSError as exc:
                raise FilesystemError(
                    f"Error creating directory {dir_path}: {exc}", path=dir_path
                ) from exc
            print_created("directory", dir_path)
            result.directories.append(dir_path)

            for name in files:
                result.files.append(await self._create_file(dir_path / name))
        return result

    async def populate_root_files(
        self, root: Path, result: GenerationResult | None = None
    ) -> GenerationResult:
        """Create the auxiliary build/deploy files in the project root."""
        result = result or GenerationResult(root=root)
        for name in self.layout.root_files:
            result.files.append(await self._create_file(root / name))
        return result

    # -- Internal helpers --------------------------------------------------

    async def _create_file(self, path: Path) -> Path:
        content = self.store.read_bytes(self.layout.template_for(path.name))
        try:
            await asyncio.to_thread(_write_new_file, path, content)
        except OSError as exc:
            raise FilesystemError(f"Error creating file {path}: {exc}", path=path) from exc
        print_created("file", path)
        return path


def _write_new_file(path: Path, content: bytes) -> None:
    """Synchronous helper: create *path* (which must not exist) and write *content*."""
    with open(path, "xb") as fh:
        fh.write(content)
