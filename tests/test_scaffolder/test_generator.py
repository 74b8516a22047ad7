"""Tests for the project scaffolding generator.

Covers:
- Full project generation with the default layout
- Verbatim template copies
- Non-idempotent project root creation
- Fail-fast behaviour without rollback
- Template validation before any filesystem change
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from goscaffold.errors import FilesystemError, PreconditionError, TemplateError
from goscaffold.scaffolder.generator import GenerationResult, ProjectGenerator
from goscaffold.scaffolder.layout import DEFAULT_LAYOUT, ProjectLayout
from goscaffold.scaffolder.templates import TemplateStore


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _tree(root: Path) -> set[str]:
    """Every file below *root* as a relative POSIX path."""
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


# ---------------------------------------------------------------------------
# Full generation
# ---------------------------------------------------------------------------


class TestGenerate:
    async def test_creates_exact_tree(self, base_dir: Path):
        result = await ProjectGenerator().generate(base_dir, "demo")

        root = base_dir / "demo"
        assert result.root == root
        assert _tree(root) == set(DEFAULT_LAYOUT.expected_paths())

    async def test_directories_recorded_in_layout_order(self, base_dir: Path):
        result = await ProjectGenerator().generate(base_dir, "demo")
        assert result.directories == [base_dir / "demo" / d for d in DEFAULT_LAYOUT.directories]

    async def test_files_are_verbatim_template_copies(
        self, base_dir: Path, packaged_template_dir: Path
    ):
        result = await ProjectGenerator().generate(base_dir, "demo")

        assert len(result.files) == 11
        for path in result.files:
            template = DEFAULT_LAYOUT.template_for(path.name)
            assert path.read_bytes() == (packaged_template_dir / template).read_bytes(), path

    async def test_config_yaml_matches_config_template(
        self, base_dir: Path, packaged_template_dir: Path
    ):
        await ProjectGenerator().generate(base_dir, "demo")
        generated = base_dir / "demo" / "config" / "config.yaml"
        assert generated.read_bytes() == (packaged_template_dir / "config.txt").read_bytes()

    async def test_progress_lines_printed(self, base_dir: Path, capsys):
        await ProjectGenerator().generate(base_dir, "demo")
        out = capsys.readouterr().out
        root = base_dir / "demo"
        assert f"Created project base directory: {root}" in out
        assert f"Created directory: {root / 'pkg' / 'router'}" in out
        assert f"Created file: {root / 'pkg' / 'router' / 'router.go'}" in out
        assert f"Created file: {root / '.air.toml'}" in out

    async def test_non_utf8_override_copied_verbatim(
        self, base_dir: Path, mini_layout: ProjectLayout, mini_template_dir: Path, tmp_path: Path
    ):
        override = tmp_path / "override"
        override.mkdir()
        (override / "app.txt").write_bytes(b"// caf\xe9\n")
        store = TemplateStore(override_dirs=[override], template_dir=mini_template_dir)

        await ProjectGenerator(mini_layout, store).generate(base_dir, "demo")

        assert (base_dir / "demo" / "src" / "app" / "app.go").read_bytes() == b"// caf\xe9\n"

    async def test_custom_layout_and_store(
        self, base_dir: Path, mini_layout: ProjectLayout, mini_template_dir: Path
    ):
        gen = ProjectGenerator(mini_layout, TemplateStore(template_dir=mini_template_dir))
        await gen.generate(base_dir, "mini")
        root = base_dir / "mini"
        assert _tree(root) == {"src/app/app.go", "README.md"}
        assert (root / "README.md").read_bytes() == b"# readme\r\nwith CRLF\r\n"


# ---------------------------------------------------------------------------
# Project root
# ---------------------------------------------------------------------------


class TestCreateProjectRoot:
    async def test_existing_root_fails(self, base_dir: Path):
        (base_dir / "demo").mkdir()
        with pytest.raises(FilesystemError, match="Failed to create project base directory") as exc_info:
            await ProjectGenerator().create_project_root(base_dir, "demo")
        assert exc_info.value.path == base_dir / "demo"

    async def test_absolute_name_cannot_escape_base(self, base_dir: Path, tmp_path: Path):
        outside = tmp_path / "outside"
        with pytest.raises(PreconditionError, match="Invalid project name"):
            await ProjectGenerator().create_project_root(base_dir, str(outside))
        assert not outside.exists()
        assert list(base_dir.iterdir()) == []

    async def test_missing_parent_fails(self, tmp_path: Path):
        with pytest.raises(FilesystemError):
            await ProjectGenerator().create_project_root(tmp_path / "absent", "demo")
        assert not (tmp_path / "absent").exists()

    async def test_second_run_leaves_first_untouched(self, base_dir: Path):
        gen = ProjectGenerator()
        await gen.generate(base_dir, "demo")
        root = base_dir / "demo"
        before = {p: p.read_bytes() for p in root.rglob("*") if p.is_file()}

        with pytest.raises(FilesystemError):
            await gen.generate(base_dir, "demo")

        after = {p: p.read_bytes() for p in root.rglob("*") if p.is_file()}
        assert after == before


# ---------------------------------------------------------------------------
# Failures mid-scaffold
# ---------------------------------------------------------------------------


class TestFailFast:
    async def test_directory_failure_keeps_earlier_files(
        self, base_dir: Path, mini_template_dir: Path
    ):
        layout = ProjectLayout(
            directories={"src/app": ("app.go",), "src/app/app.go/nested": ("README.md",)},
            templates={"app.go": "app.txt", "README.md": "readme.txt"},
        )
        gen = ProjectGenerator(layout, TemplateStore(template_dir=mini_template_dir))
        root = await gen.create_project_root(base_dir, "demo")
        result = GenerationResult(root=root)

        with pytest.raises(FilesystemError, match="Error creating directory") as exc_info:
            await gen.populate_directories(root, result)

        assert exc_info.value.path == root / "src/app/app.go/nested"
        assert result.files == [root / "src" / "app" / "app.go"]
        assert (root / "src" / "app" / "app.go").read_bytes() == b"package app\n"

    async def test_file_failure_stops_before_later_files(
        self, base_dir: Path, mini_layout: ProjectLayout, mini_template_dir: Path
    ):
        gen = ProjectGenerator(mini_layout, TemplateStore(template_dir=mini_template_dir))
        root = await gen.create_project_root(base_dir, "demo")

        with patch(
            "goscaffold.scaffolder.generator._write_new_file",
            side_effect=PermissionError("denied"),
        ):
            with pytest.raises(FilesystemError, match="Error creating file"):
                await gen.populate_directories(root)

        assert (root / "src" / "app").is_dir()
        assert not (root / "README.md").exists()

    async def test_existing_file_is_not_overwritten(
        self, base_dir: Path, mini_layout: ProjectLayout, mini_template_dir: Path
    ):
        gen = ProjectGenerator(mini_layout, TemplateStore(template_dir=mini_template_dir))
        root = base_dir / "demo"
        root.mkdir()
        (root / "README.md").write_bytes(b"keep me")

        with pytest.raises(FilesystemError):
            await gen.populate_root_files(root)
        assert (root / "README.md").read_bytes() == b"keep me"

    async def test_unreadable_template_raises_template_error(
        self, base_dir: Path, mini_layout: ProjectLayout, tmp_path: Path
    ):
        empty = tmp_path / "empty-templates"
        empty.mkdir()
        gen = ProjectGenerator(mini_layout, TemplateStore(template_dir=empty))
        root = await gen.create_project_root(base_dir, "demo")

        with pytest.raises(TemplateError):
            await gen.populate_directories(root)
        assert not (root / "src" / "app" / "app.go").exists()


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidate:
    def test_default_layout_valid(self):
        ProjectGenerator().validate()

    def test_missing_templates_listed(self, mini_layout: ProjectLayout, tmp_path: Path):
        gen = ProjectGenerator(mini_layout, TemplateStore(template_dir=tmp_path))
        with pytest.raises(TemplateError, match="app.txt, readme.txt"):
            gen.validate()
