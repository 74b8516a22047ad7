"""Template resource lookup for project scaffolding.

Provides the TemplateStore class which locates template resources through a
Jinja2 ``FileSystemLoader`` search path: user override directories first,
the packaged ``goscaffold/scaffolder/templates/`` directory last.  Templates
are never rendered; their bytes are copied into the new project verbatim.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, TemplateNotFound
from jinja2.loaders import split_template_path

from goscaffold.errors import TemplateError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateStore
# ---------------------------------------------------------------------------


class TemplateStore:
    """Read-only access to the template resources.

    The first directory on the search path that contains a given template
    wins, so a user directory holding ``main.txt`` replaces only that one
    resource and inherits the rest from the packaged set.
    """

    def __init__(
        self,
        override_dirs: Iterable[str | Path] | None = None,
        *,
        template_dir: str | Path | None = None,
    ) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.search_path = [Path(d) for d in (override_dirs or [])] + [self.template_dir]
        self.loader = FileSystemLoader([str(p) for p in self.search_path])
        self.env = Environment(loader=self.loader, keep_trailing_newline=True)

    def resolve(self, name: str) -> Path:
        """Return the file that provides template *name*.

        Only the file's existence is checked; the content is never decoded,
        so templates in any encoding are copied unchanged.

        Raises:
            TemplateError: If no directory on the search path has it.
        """
        try:
            pieces = split_template_path(name)
        except TemplateNotFound:
            pieces = None
        if pieces:
            for directory in self.loader.searchpath:
                candidate = Path(directory, *pieces)
                if candidate.is_file():
                    return candidate
        searched = ", ".join(str(p) for p in self.search_path)
        raise TemplateError(f"Template {name!r} not found (searched: {searched})", name=name)

    def read_bytes(self, name: str) -> bytes:
        """Return the full, unmodified content of template *name*."""
        path = self.resolve(name)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise TemplateError(
                f"Error reading template file {path}: {exc}", name=name, path=path
            ) from exc

    def has(self, name: str) -> bool:
        """Return ``True`` if *name* resolves somewhere on the search path."""
        try:
            self.resolve(name)
        except TemplateError:
            return False
        return True

    def missing(self, names: Iterable[str]) -> list[str]:
        """Return the subset of *names* that do not resolve, in input order."""
        return [name for name in names if not self.has(name)]

    def list_templates(self) -> list[str]:
        """Return a sorted list of every ``.txt`` template on the search path."""
        return self.env.list_templates(extensions=["txt"])
