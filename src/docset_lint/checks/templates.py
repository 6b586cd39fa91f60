"""
Code template header check.

Template files open with a comment header naming the template and the
placeholder identifiers to replace::

    // Template: WinForms Form with MVP Pattern
    // Replace: YourForm, YourPresenter, YourView

Each placeholder listed under ``Replace`` has to occur in the template body,
otherwise the header has drifted from the code.
"""

import re
from typing import Iterator

from docset_lint.checks.base import BaseCheck, LintContext
from docset_lint.findings import Finding, Severity
from docset_lint.walker import Document

HEADER_FIELD_RE = re.compile(r"^(?P<field>[A-Za-z][\w-]*)\s*:\s*(?P<value>.*)$")


class TemplateHeaderCheck(BaseCheck):
    name = "templates"
    description = "Code templates carry a '// Template:' header and use their Replace placeholders"
    rules = {
        "template-header": Severity.ERROR,
        "template-replace-token": Severity.WARNING,
    }

    def applies_to(self, document: Document, context: LintContext) -> bool:
        return document.kind == "template"

    def check(self, document: Document, context: LintContext) -> Iterator[Finding]:
        header, body_start = self._read_header(document.lines)

        template = header.get("template")
        if template is None or not template[1]:
            yield self.finding(
                "template-header",
                document,
                "Template does not start with a '// Template: <name>' comment",
                line=template[0] if template else 1,
            )

        replace = header.get("replace")
        if replace is None:
            return

        line, value = replace
        body = "\n".join(document.lines[body_start:])
        for token in (t.strip() for t in re.split(r"[,;]", value)):
            if token and token not in body:
                yield self.finding(
                    "template-replace-token",
                    document,
                    f"Placeholder '{token}' is listed under Replace but never used",
                    line=line,
                    hint="Remove it from the Replace list or use it in the template",
                )

    def _read_header(self, lines: list[str]) -> tuple[dict[str, tuple[int, str]], int]:
        """Parse the leading ``//`` comment block.

        Returns:
            (field name lowercased -> (line, value), index of first body line)
        """
        fields: dict[str, tuple[int, str]] = {}
        index = 0
        while index < len(lines) and not lines[index].strip():
            index += 1

        while index < len(lines) and lines[index].lstrip().startswith("//"):
            text = lines[index].lstrip().lstrip("/").strip()
            match = HEADER_FIELD_RE.match(text)
            if match:
                fields.setdefault(match.group("field").lower(), (index + 1, match.group("value").strip()))
            index += 1

        return fields, index
