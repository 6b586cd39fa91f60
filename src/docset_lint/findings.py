"""
Findings and the aggregated lint report.

A ``Finding`` is one rule violation at one location. ``LintReport`` gathers
the findings of a run and decides the exit status.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Finding severity, ordered error > warning > info."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return {"error": 3, "warning": 2, "info": 1}[self.value]


@dataclass(frozen=True)
class Finding:
    """A single rule violation.

    Attributes:
        rule: Rule id (e.g. ``link-broken``)
        severity: Effective severity after overrides
        message: Human-readable description
        path: Document path relative to the project root
        line: 1-based line number, when known
        hint: Suggested fix
    """

    rule: str
    severity: Severity
    message: str
    path: str
    line: int | None = None
    hint: str | None = None

    @property
    def location(self) -> str:
        return f"{self.path}:{self.line}" if self.line is not None else self.path

    def sort_key(self) -> tuple[str, int, str]:
        return (self.path, self.line or 0, self.rule)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "rule": self.rule,
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
            "line": self.line,
        }
        if self.hint:
            result["hint"] = self.hint
        return result


@dataclass
class LintReport:
    """Result of one lint run."""

    findings: list[Finding] = field(default_factory=list)
    documents_scanned: int = 0
    checks_run: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.findings = sorted(self.findings, key=Finding.sort_key)

    @property
    def counts(self) -> dict[str, int]:
        counter = Counter(f.severity.value for f in self.findings)
        return {severity.value: counter.get(severity.value, 0) for severity in Severity}

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def exit_code(self, strict: bool = False) -> int:
        """0 when clean; 1 on errors, or on warnings when ``strict``."""
        if self.has_errors:
            return 1
        if strict and self.warnings:
            return 1
        return 0

    def by_path(self) -> dict[str, list[Finding]]:
        grouped: dict[str, list[Finding]] = {}
        for finding in self.findings:
            grouped.setdefault(finding.path, []).append(finding)
        return grouped

    def by_rule(self) -> dict[str, int]:
        return dict(sorted(Counter(f.rule for f in self.findings).items()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "documents_scanned": self.documents_scanned,
            "checks_run": list(self.checks_run),
            "counts": self.counts,
            "findings": [f.to_dict() for f in self.findings],
        }
