"""
Base check and shared lint context.

Every check is a small class that looks at one ``Document`` at a time and
yields ``Finding`` objects with the rule's default severity. ``run()``
applies the configured severity overrides.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator

from docset_lint.config import LintConfig
from docset_lint.errors import DocumentReadError
from docset_lint.findings import Finding, Severity
from docset_lint.logging import get_logger
from docset_lint.walker import Document, DocumentWalker

logger = get_logger(__name__)


class LintContext:
    """State shared by all checks during one run.

    Holds the configuration and an index of loaded documents so link
    checks can look up anchors of other files without re-reading them.
    Markdown files outside the index (e.g. skipped directories) are loaded
    on demand and cached.
    """

    def __init__(self, config: LintConfig, documents: list[Document] | None = None):
        self.config = config
        self._walker = DocumentWalker(config)
        self._index: dict[Path, Document] = {}
        self._anchors: dict[Path, set[str] | None] = {}
        for document in documents or []:
            self.add(document)

    @property
    def project_root(self) -> Path:
        return self.config.project_root

    @property
    def documents(self) -> list[Document]:
        return list(self._index.values())

    def add(self, document: Document) -> None:
        self._index[document.path.resolve()] = document

    def document_at(self, path: Path) -> Document | None:
        return self._index.get(Path(path).resolve())

    def anchors_for(self, path: Path) -> set[str] | None:
        """Heading anchors of a Markdown file, or None if it cannot be read."""
        key = Path(path).resolve()
        if key in self._anchors:
            return self._anchors[key]

        document = self._index.get(key)
        if document is None:
            try:
                document = self._walker.walk_file(key)
            except DocumentReadError as e:
                logger.debug("anchor_target_unreadable", path=str(key), reason=e.message)
                document = None

        anchors = document.markdown.anchors if document is not None else None
        self._anchors[key] = anchors
        return anchors


class BaseCheck(ABC):
    """Base class for checks.

    Subclasses set ``name``, ``description`` and ``rules`` (rule id ->
    default severity) and implement ``check()``.
    """

    name: str = ""
    description: str = ""
    rules: dict[str, Severity] = {}

    def applies_to(self, document: Document, context: LintContext) -> bool:
        """Whether this check looks at the document (Markdown by default)."""
        return document.is_markdown

    @abstractmethod
    def check(self, document: Document, context: LintContext) -> Iterator[Finding]:
        """Yield findings for one document with default severities."""

    def run(self, document: Document, context: LintContext) -> list[Finding]:
        """Run the check and apply severity overrides.

        Returns:
            Findings that are not switched off
        """
        if not self.applies_to(document, context):
            return []

        findings = []
        for finding in self.check(document, context):
            severity = context.config.severity_for(finding.rule, finding.severity.value)
            if severity is None:
                continue
            if severity != finding.severity.value:
                finding = Finding(
                    rule=finding.rule,
                    severity=Severity(severity),
                    message=finding.message,
                    path=finding.path,
                    line=finding.line,
                    hint=finding.hint,
                )
            findings.append(finding)
        return findings

    def finding(
        self,
        rule: str,
        document: Document,
        message: str,
        line: int | None = None,
        hint: str | None = None,
    ) -> Finding:
        """Build a finding for one of this check's rules."""
        return Finding(
            rule=rule,
            severity=self.rules[rule],
            message=message,
            path=str(document.rel_path),
            line=line,
            hint=hint,
        )
