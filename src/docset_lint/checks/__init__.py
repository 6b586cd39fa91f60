"""
Checks module for docset-lint.

``CHECKS`` maps check names to classes, in the order they run.
"""

from docset_lint.checks.base import BaseCheck, LintContext
from docset_lint.checks.fences import FenceCheck
from docset_lint.checks.front_matter import FrontMatterCheck
from docset_lint.checks.links import LinkCheck
from docset_lint.checks.structure import StructureCheck
from docset_lint.checks.templates import TemplateHeaderCheck

CHECKS: dict[str, type[BaseCheck]] = {
    "front-matter": FrontMatterCheck,
    "links": LinkCheck,
    "fences": FenceCheck,
    "structure": StructureCheck,
    "templates": TemplateHeaderCheck,
}

__all__ = [
    "BaseCheck",
    "LintContext",
    "CHECKS",
    "FenceCheck",
    "FrontMatterCheck",
    "LinkCheck",
    "StructureCheck",
    "TemplateHeaderCheck",
]
