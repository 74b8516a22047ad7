"""Shared pytest fixtures for the goscaffold test suite.

Provides reusable fixtures for:
- Temporary base directories
- A minimal template directory and layout for generator tests
- Scripted stdin for the prompter
- Mock subprocess helpers
"""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from goscaffold.scaffolder.layout import ProjectLayout


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Existing directory that projects are generated into."""
    base = tmp_path / "x"
    base.mkdir()
    yield base


@pytest.fixture
def packaged_template_dir() -> Path:
    """The template directory shipped inside the package."""
    import goscaffold.scaffolder.templates as templates_module

    return Path(templates_module.__file__).parent / "templates"


@pytest.fixture
def mini_template_dir(tmp_path: Path) -> Path:
    """A template directory holding two small templates."""
    tpl = tmp_path / "tpl"
    tpl.mkdir()
    (tpl / "app.txt").write_bytes(b"package app\n")
    (tpl / "readme.txt").write_bytes(b"# readme\r\nwith CRLF\r\n")
    yield tpl


@pytest.fixture
def mini_layout() -> ProjectLayout:
    """A layout using the ``mini_template_dir`` templates."""
    return ProjectLayout(
        directories={"src/app": ("app.go",)},
        root_files=("README.md",),
        templates={"app.go": "app.txt", "README.md": "readme.txt"},
    )


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

@pytest.fixture
def scripted_input():
    """Factory returning a text stream that yields the given answers as lines."""
    def factory(*answers: str) -> io.StringIO:
        return io.StringIO("".join(f"{a}\n" for a in answers))

    return factory


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess whose ``wait()`` resolves to *returncode*.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(returncode=0)
            with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
                ...
    """
    def factory(returncode: int = 0) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
