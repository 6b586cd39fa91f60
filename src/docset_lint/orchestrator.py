"""
Lint Orchestrator.

Coordinates one lint run: walk the repository once, run every selected
check over every applicable document, and collect the findings into a
``LintReport``.

Example:
    >>> orchestrator = LintOrchestrator(Path("."))
    >>> report = orchestrator.run()
    >>> report.exit_code()
    0
"""

import dataclasses
from collections import Counter
from pathlib import Path
from typing import Any

from docset_lint.checks import CHECKS, BaseCheck, LintContext
from docset_lint.config import LintConfig
from docset_lint.errors import ConfigError, DocumentReadError
from docset_lint.findings import Finding, LintReport, Severity
from docset_lint.logging import LogContext, get_logger
from docset_lint.walker import Document, DocumentWalker

logger = get_logger(__name__)


class LintOrchestrator:
    """Orchestrate a lint run across all checks.

    Architecture:
        ```
        LintOrchestrator
              │
              ├──► DocumentWalker.walk_directory()   (once)
              │         │
              │         ▼
              │    documents + read errors
              │
              ├──► For each check, for each document:
              │         └──► BaseCheck.run() ──► findings
              │
              └──► LintReport
        ```

    Guardrails:
        - Do NOT re-read files per check
          ✅ Walk once, share documents through LintContext
        - Do NOT stop at the first unreadable file
          ✅ Record it as a 'read-error' finding and carry on
    """

    def __init__(
        self,
        project_root: Path,
        config: LintConfig | None = None,
        checks: list[str] | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            project_root: Root directory of the documentation set
            config: Configuration (discovered from the root if not given; its
                project_root is replaced by the one given here)
            checks: Names of checks to run (all if None)

        Raises:
            ConfigError: If a check name is unknown
        """
        self.project_root = Path(project_root).resolve()
        if config is None:
            config = LintConfig.discover(self.project_root)
        elif config.project_root != self.project_root:
            # Everything downstream reads the root from config
            config = dataclasses.replace(config, project_root=self.project_root)
        self.config = config
        self.checks = self._select_checks(checks)

        self.documents: list[Document] | None = None
        self.read_errors: list[DocumentReadError] = []

    def _select_checks(self, names: list[str] | None) -> list[BaseCheck]:
        if not names:
            return [check_class() for check_class in CHECKS.values()]

        unknown = [name for name in names if name not in CHECKS]
        if unknown:
            raise ConfigError(
                f"Unknown check(s): {', '.join(unknown)}; "
                f"available: {', '.join(CHECKS)}"
            )
        # Keep registry order regardless of the order requested
        return [check_class() for name, check_class in CHECKS.items() if name in names]

    def collect(self) -> list[Document]:
        """Walk the repository and load all documents.

        Returns:
            Loaded documents (unreadable files are kept in ``read_errors``)
        """
        self.read_errors = []
        walker = DocumentWalker(self.config)
        self.documents = list(walker.walk_directory(errors=self.read_errors))

        logger.info(
            "documents_collected",
            root=str(self.project_root),
            documents=len(self.documents),
            unreadable=len(self.read_errors),
        )
        return self.documents

    def run(self) -> LintReport:
        """Run the selected checks.

        Returns:
            LintReport with all findings sorted by location
        """
        if self.documents is None:
            self.collect()

        context = LintContext(self.config, self.documents)
        findings: list[Finding] = []
        for error in self.read_errors:
            finding = self._read_error_finding(error)
            if finding is not None:
                findings.append(finding)

        for check in self.checks:
            with LogContext(check=check.name):
                before = len(findings)
                for document in self.documents:
                    findings.extend(check.run(document, context))
                logger.debug("check_finished", findings=len(findings) - before)

        report = LintReport(
            findings=findings,
            documents_scanned=len(self.documents),
            checks_run=[check.name for check in self.checks],
        )
        logger.info(
            "lint_finished",
            errors=len(report.errors),
            warnings=len(report.warnings),
        )
        return report

    def _read_error_finding(self, error: DocumentReadError) -> Finding | None:
        severity = self.config.severity_for("read-error", Severity.ERROR.value)
        if severity is None:
            return None
        return Finding(
            rule="read-error",
            severity=Severity(severity),
            message=error.message,
            path=error.path or "",
            line=error.line,
        )

    def get_stats(self) -> dict[str, Any]:
        """Statistics about the documentation set.

        Returns:
            Statistics dictionary
        """
        if self.documents is None:
            self.collect()

        kinds = Counter(doc.kind for doc in self.documents)
        markdown = [doc for doc in self.documents if doc.is_markdown]

        links_total = links_external = 0
        fences_total = fences_untagged = headings = 0
        for doc in markdown:
            parsed = doc.markdown
            links_total += len(parsed.links)
            links_external += sum(
                1 for link in parsed.links if link.is_external(self.config.external_schemes)
            )
            fences_total += len(parsed.fences)
            fences_untagged += sum(1 for fence in parsed.fences if not fence.language)
            headings += len(parsed.headings)

        return {
            "documents": len(self.documents),
            "unreadable": len(self.read_errors),
            "by_kind": dict(sorted(kinds.items())),
            "commands": sum(1 for doc in self.documents if doc.is_command),
            "links": {
                "total": links_total,
                "relative": links_total - links_external,
                "external": links_external,
            },
            "fences": {"total": fences_total, "untagged": fences_untagged},
            "headings": headings,
        }
