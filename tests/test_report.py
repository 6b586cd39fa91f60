"""Tests for findings, LintReport and the report printers."""

import json

import pytest

from docset_lint.errors import ConfigError
from docset_lint.findings import Finding, LintReport, Severity
from docset_lint.report import ConsoleReporter, JsonReporter, MarkdownReporter, get_reporter


@pytest.fixture
def report():
    return LintReport(
        findings=[
            Finding("title-missing", Severity.WARNING, "No title", "docs/b.md", line=1),
            Finding(
                "link-broken",
                Severity.ERROR,
                "Link target 'x|y.md' does not exist",
                "docs/a.md",
                line=12,
                hint="Did you mean 'xy.md'?",
            ),
            Finding("document-empty", Severity.ERROR, "Document has no content", "docs/a.md"),
        ],
        documents_scanned=4,
        checks_run=["links", "structure"],
    )


# =============================================================================
# LintReport Tests
# =============================================================================

class TestLintReport:

    def test_findings_are_sorted_by_location(self, report):
        assert [f.location for f in report.findings] == [
            "docs/a.md",
            "docs/a.md:12",
            "docs/b.md:1",
        ]

    def test_counts(self, report):
        assert report.counts == {"error": 2, "warning": 1, "info": 0}
        assert report.by_rule() == {"document-empty": 1, "link-broken": 1, "title-missing": 1}

    def test_exit_code(self):
        warning = Finding("title-missing", Severity.WARNING, "No title", "a.md", line=1)
        info = Finding("title-missing", Severity.INFO, "No title", "a.md", line=1)

        assert LintReport().exit_code() == 0
        assert LintReport(findings=[warning]).exit_code() == 0
        assert LintReport(findings=[warning]).exit_code(strict=True) == 1
        assert LintReport(findings=[info]).exit_code(strict=True) == 0

    def test_errors_fail_without_strict(self, report):
        assert report.has_errors is True
        assert report.exit_code() == 1

    def test_finding_to_dict_omits_empty_hint(self):
        finding = Finding("document-empty", Severity.ERROR, "Empty", "a.md")
        assert finding.to_dict() == {
            "rule": "document-empty",
            "severity": "error",
            "message": "Empty",
            "path": "a.md",
            "line": None,
        }


# =============================================================================
# Reporter Tests
# =============================================================================

class TestJsonReporter:

    def test_render(self, report):
        data = json.loads(JsonReporter().render(report))

        assert data["documents_scanned"] == 4
        assert data["checks_run"] == ["links", "structure"]
        assert data["counts"]["error"] == 2
        assert data["findings"][1]["hint"] == "Did you mean 'xy.md'?"


class TestMarkdownReporter:

    def test_render(self, report):
        text = MarkdownReporter().render(report)

        assert text.startswith("# Documentation Lint Report")
        assert "| 4 | 2 | 1 | 0 |" in text
        assert "Checks run: links, structure" in text
        assert "## `docs/a.md`" in text
        assert "| - | error | `document-empty` | Document has no content |" in text

    def test_pipes_are_escaped_in_cells(self, report):
        text = MarkdownReporter().render(report)
        assert "Link target 'x\\|y.md' does not exist (Did you mean 'xy.md'?)" in text

    def test_clean_report(self):
        text = MarkdownReporter().render(LintReport(documents_scanned=2, checks_run=["links"]))
        assert "No findings." in text


class TestConsoleReporter:

    def test_render_contains_findings_and_summary(self, report):
        text = ConsoleReporter().render(report)

        assert "docs/a.md" in text
        assert "link-broken" in text
        assert "4 documents checked: 2 errors, 1 warnings, 0 info" in text

    def test_clean_summary(self):
        text = ConsoleReporter().render(LintReport(documents_scanned=3))
        assert "✅ 3 documents checked: 0 errors, 0 warnings, 0 info" in text


class TestGetReporter:

    @pytest.mark.parametrize("name,cls", [
        ("console", ConsoleReporter),
        ("json", JsonReporter),
        ("markdown", MarkdownReporter),
    ])
    def test_known_formats(self, name, cls):
        assert isinstance(get_reporter(name), cls)

    def test_unknown_format(self):
        with pytest.raises(ConfigError, match="Unknown report format 'html'"):
            get_reporter("html")
