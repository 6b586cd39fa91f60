"""
Code fence check.

Fenced code blocks carry a language tag so snippets get highlighted and
the assistant knows which language an example is in.
"""

from typing import Iterator

from docset_lint.checks.base import BaseCheck, LintContext
from docset_lint.findings import Finding, Severity
from docset_lint.walker import Document


class FenceCheck(BaseCheck):
    """Every code fence is closed and names a recognized language."""

    name = "fences"
    description = "Code fences are closed and tagged with a recognized language"
    rules = {
        "fence-language-missing": Severity.ERROR,
        "fence-language-unknown": Severity.WARNING,
        "fence-unclosed": Severity.ERROR,
    }

    def check(self, document: Document, context: LintContext) -> Iterator[Finding]:
        config = context.config

        for fence in document.markdown.fences:
            if not fence.closed:
                yield self.finding(
                    "fence-unclosed",
                    document,
                    f"Code fence opened with '{fence.marker}' is never closed",
                    line=fence.line,
                    hint=f"Add a closing '{fence.marker}' line",
                )

            if not fence.language:
                if not config.allow_untagged_fences:
                    yield self.finding(
                        "fence-language-missing",
                        document,
                        "Code fence has no language tag",
                        line=fence.line,
                        hint="Use e.g. ```csharp, ```xml or ```text",
                    )
            elif not config.is_known_language(fence.language):
                yield self.finding(
                    "fence-language-unknown",
                    document,
                    f"Unrecognized code fence language '{fence.language}'",
                    line=fence.line,
                    hint="Add it to 'known_languages' in .docset-lint.yaml if it is intended",
                )
