"""
Documentation-set linter.

Validates the internal consistency of a Markdown documentation repository:
slash-command front-matter, relative links and anchors, code fence
language tags, document titles and code template headers.

Example:
    >>> from docset_lint import LintOrchestrator
    >>> from pathlib import Path
    >>> report = LintOrchestrator(Path(".")).run()
    >>> report.exit_code()
    0
"""

__version__ = "0.1.0"

from docset_lint.config import LintConfig
from docset_lint.errors import ConfigError, DocsetError, DocumentReadError, FrontMatterError
from docset_lint.findings import Finding, LintReport, Severity
from docset_lint.orchestrator import LintOrchestrator
from docset_lint.walker import Document, DocumentWalker

__all__ = [
    "LintConfig",
    "ConfigError",
    "DocsetError",
    "DocumentReadError",
    "FrontMatterError",
    "Finding",
    "LintReport",
    "Severity",
    "LintOrchestrator",
    "Document",
    "DocumentWalker",
    "__version__",
]
