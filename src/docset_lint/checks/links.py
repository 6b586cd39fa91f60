"""
Relative link check.

Every link that is not an external URL must point at a file or directory
inside the repository, and its ``#fragment`` (if any) at a heading of the
target Markdown file.
"""

import difflib
from pathlib import Path
from typing import Iterator

from docset_lint.checks.base import BaseCheck, LintContext
from docset_lint.findings import Finding, Severity
from docset_lint.parser.markdown import Link
from docset_lint.walker import MARKDOWN_SUFFIXES, Document


class LinkCheck(BaseCheck):
    """Resolve relative links and their anchors."""

    name = "links"
    description = "Relative links resolve to files inside the repository, anchors to headings"
    rules = {
        "link-broken": Severity.ERROR,
        "link-anchor": Severity.WARNING,
        "link-absolute-path": Severity.WARNING,
    }

    def check(self, document: Document, context: LintContext) -> Iterator[Finding]:
        config = context.config

        for link in document.markdown.links:
            if not link.target.strip() or link.target.strip() == "<>":
                yield self.finding("link-broken", document, "Link has an empty target", line=link.line)
                continue

            if link.is_external(config.external_schemes):
                continue

            if link.is_filesystem_absolute():
                yield self.finding(
                    "link-absolute-path",
                    document,
                    f"Link '{link.target}' points at an absolute filesystem path",
                    line=link.line,
                    hint="Use a path relative to this document",
                )
                continue

            path_part, anchor = link.split()

            if not path_part:
                if anchor and config.check_anchors and not self._has_anchor(
                    document.markdown.anchors, anchor
                ):
                    yield self.finding(
                        "link-anchor",
                        document,
                        f"No heading for anchor '#{anchor}' in this document",
                        line=link.line,
                        hint=self._suggest(anchor, document.markdown.anchors),
                    )
                continue

            yield from self._check_target(document, context, link, path_part, anchor)

    def _check_target(
        self,
        document: Document,
        context: LintContext,
        link: Link,
        path_part: str,
        anchor: str,
    ) -> Iterator[Finding]:
        root = context.project_root
        if path_part.startswith("/"):
            resolved = (root / path_part.lstrip("/")).resolve()
        else:
            resolved = (document.path.parent / path_part).resolve()

        if not resolved.is_relative_to(root):
            yield self.finding(
                "link-broken",
                document,
                f"Link '{link.target}' points outside the repository",
                line=link.line,
            )
            return

        if not resolved.exists():
            yield self.finding(
                "link-broken",
                document,
                f"Link target '{path_part}' does not exist",
                line=link.line,
                hint=self._suggest_file(resolved),
            )
            return

        if not (anchor and context.config.check_anchors):
            return
        if not resolved.is_file() or resolved.suffix.lower() not in MARKDOWN_SUFFIXES:
            return

        anchors = context.anchors_for(resolved)
        if anchors is not None and not self._has_anchor(anchors, anchor):
            yield self.finding(
                "link-anchor",
                document,
                f"No heading for anchor '#{anchor}' in '{path_part}'",
                line=link.line,
                hint=self._suggest(anchor, anchors),
            )

    @staticmethod
    def _has_anchor(anchors: set[str], anchor: str) -> bool:
        return anchor in anchors or anchor.lower() in anchors

    @staticmethod
    def _suggest(anchor: str, anchors: set[str]) -> str | None:
        matches = difflib.get_close_matches(anchor.lower(), sorted(anchors), n=1)
        return f"Did you mean '#{matches[0]}'?" if matches else None

    @staticmethod
    def _suggest_file(missing: Path) -> str | None:
        parent = missing.parent
        if not parent.is_dir():
            return None
        names = sorted(p.name for p in parent.iterdir())
        matches = difflib.get_close_matches(missing.name, names, n=1)
        return f"Did you mean '{matches[0]}'?" if matches else None
