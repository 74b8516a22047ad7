"""goscaffold scaffolder -- builds the on-disk project skeleton.

Quick usage::

    from goscaffold.scaffolder import ProjectGenerator

    generator = ProjectGenerator()
    generator.validate()
    result = await generator.generate("/tmp/x", "demo")
"""

from goscaffold.scaffolder.generator import GenerationResult, ProjectGenerator
from goscaffold.scaffolder.layout import DEFAULT_LAYOUT, ProjectLayout
from goscaffold.scaffolder.templates import TemplateStore

__all__ = [
    "DEFAULT_LAYOUT",
    "GenerationResult",
    "ProjectGenerator",
    "ProjectLayout",
    "TemplateStore",
]
