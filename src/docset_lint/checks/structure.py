"""
Document structure check: non-empty body, a single leading ``# Title``.
"""

from typing import Iterator

from docset_lint.checks.base import BaseCheck, LintContext
from docset_lint.findings import Finding, Severity
from docset_lint.walker import Document


class StructureCheck(BaseCheck):
    name = "structure"
    description = "Documents are non-empty and open with exactly one top-level heading"
    rules = {
        "document-empty": Severity.ERROR,
        "title-missing": Severity.WARNING,
        "title-multiple": Severity.WARNING,
    }

    def check(self, document: Document, context: LintContext) -> Iterator[Finding]:
        first_line = None
        for offset, line in enumerate(document.body_lines):
            stripped = line.strip()
            if not stripped or (stripped.startswith("<!--") and stripped.endswith("-->")):
                continue
            first_line = document.body_start + offset + 1
            break

        if first_line is None:
            yield self.finding("document-empty", document, "Document has no content")
            return

        if context.config.is_title_exempt(document.rel_path):
            return

        titles = document.markdown.titles
        if not any(title.line == first_line for title in titles):
            yield self.finding(
                "title-missing",
                document,
                "Document does not start with a top-level '# ' heading",
                line=first_line,
            )

        if len(titles) > 1:
            yield self.finding(
                "title-multiple",
                document,
                f"Document has {len(titles)} top-level headings (first at line {titles[0].line})",
                line=titles[1].line,
                hint="Demote later titles to '## '",
            )
