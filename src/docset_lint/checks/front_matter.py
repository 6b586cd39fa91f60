"""
Front-matter check.

Slash-command files (``.claude/commands/*.md``) are only picked up by the
assistant when they open with a YAML block carrying a ``description``.
Front-matter in any other document must at least parse.
"""

import re
from typing import Iterator

from docset_lint.checks.base import BaseCheck, LintContext
from docset_lint.errors import FrontMatterError
from docset_lint.findings import Finding, Severity
from docset_lint.walker import Document


class FrontMatterCheck(BaseCheck):
    """Require well-formed front-matter with the configured keys on command files."""

    name = "front-matter"
    description = "Slash-command files open with YAML front-matter holding the required keys"
    rules = {
        "front-matter-missing": Severity.ERROR,
        "front-matter-invalid": Severity.ERROR,
        "front-matter-key": Severity.ERROR,
    }

    def check(self, document: Document, context: LintContext) -> Iterator[Finding]:
        try:
            front_matter = document.front_matter
        except FrontMatterError as e:
            yield self.finding(
                "front-matter-invalid",
                document,
                e.message,
                line=e.line,
                hint="Front-matter is YAML between a leading '---' line and a closing '---' line",
            )
            return

        if not document.is_command:
            return

        if not front_matter.present:
            keys = ", ".join(f"'{k}:'" for k in context.config.required_front_matter)
            yield self.finding(
                "front-matter-missing",
                document,
                "Slash-command file has no YAML front-matter block",
                line=1,
                hint=f"Start the file with '---', {keys or 'your keys'} and a closing '---'",
            )
            return

        for key in context.config.required_front_matter:
            line = self._key_line(document, key) or 1
            if key not in front_matter.data:
                yield self.finding(
                    "front-matter-key",
                    document,
                    f"Front-matter is missing required key '{key}'",
                    line=1,
                )
                continue

            value = front_matter.data[key]
            if value is None or (isinstance(value, str) and not value.strip()):
                yield self.finding(
                    "front-matter-key", document, f"Front-matter key '{key}' is empty", line=line
                )
            elif not isinstance(value, str):
                yield self.finding(
                    "front-matter-key",
                    document,
                    f"Front-matter key '{key}' must be a string, got {type(value).__name__}",
                    line=line,
                )

    def _key_line(self, document: Document, key: str) -> int | None:
        """1-based line of a top-level key inside the front-matter block."""
        pattern = re.compile(rf"^{re.escape(key)}\s*:")
        for index in range(1, max(document.body_start - 1, 1)):
            if pattern.match(document.lines[index]):
                return index + 1
        return None
