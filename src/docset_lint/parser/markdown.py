"""
Markdown structure extraction.

Pulls the three things the checks care about out of a Markdown body:
ATX and Setext headings (with their GitHub anchors), links, and fenced
code blocks.
Links inside fenced code and inline code spans are ignored.

Example:
    >>> parsed = MarkdownParser().parse("# Setup\\n\\nSee [guide](docs/guide.md#install).\\n")
    >>> parsed.headings[0].anchor
    'setup'
    >>> parsed.links[0].split()
    ('docs/guide.md', 'install')
"""

import re
from dataclasses import dataclass, field
from urllib.parse import unquote

FENCE_RE = re.compile(r"^(?P<indent> {0,3})(?P<marker>`{3,}|~{3,})(?P<info>.*)$")
HEADING_RE = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?:[ \t]+(?P<text>.*?))?[ \t]*$")
CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")
SETEXT_UNDERLINE_RE = re.compile(r"^ {0,3}(?P<underline>=+|-+)[ \t]*$")
# Lines that open a block other than a paragraph: quotes, list items, tables,
# HTML and indented code
NON_PARAGRAPH_RE = re.compile(r"^(?: {4}|\t| {0,3}(?:[>|<]|[-*+](?:[ \t]|$)|\d{1,9}[.)](?:[ \t]|$)))")
INLINE_CODE_RE = re.compile(r"(`+)(.+?)\1")
INLINE_LINK_RE = re.compile(
    r"(?P<bang>!?)\[(?P<text>(?:[^\[\]]|\[[^\[\]]*\])*)\]"
    r"\(\s*(?P<target><[^>]*>|[^\s()]*(?:\([^\s()]*\)[^\s()]*)*)"
    r"(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?\s*\)"
)
REFERENCE_DEF_RE = re.compile(r"^ {0,3}\[(?P<label>[^\]]+)\]:\s*(?P<target><[^>]*>|\S+)")
SCHEME_RE = re.compile(r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.\-]*):")
HTML_TAG_RE = re.compile(r"<[^>]+>")
MARKDOWN_LINK_TEXT_RE = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")


@dataclass
class Heading:
    """A heading (ATX or Setext).

    Attributes:
        level: 1-6
        text: Heading text with closing hashes removed
        line: 1-based line number (first text line for Setext headings)
        anchor: GitHub-style anchor (deduplicated within the document)
    """

    level: int
    text: str
    line: int
    anchor: str = ""


@dataclass
class Link:
    """A link, image, or reference definition."""

    text: str
    target: str
    line: int
    is_image: bool = False
    is_reference: bool = False

    @property
    def scheme(self) -> str | None:
        match = SCHEME_RE.match(self._bare_target())
        return match.group("scheme").lower() if match else None

    def is_external(self, schemes: list[str]) -> bool:
        """True for protocol-relative links and links with an external scheme."""
        target = self._bare_target()
        if target.startswith("//"):
            return True
        scheme = self.scheme
        return scheme is not None and scheme in {s.lower() for s in schemes}

    def is_filesystem_absolute(self) -> bool:
        """Windows drive paths (``C:\\...``) and ``file:`` URLs."""
        scheme = self.scheme
        return scheme == "file" or (scheme is not None and len(scheme) == 1)

    def split(self) -> tuple[str, str]:
        """Split into (path, anchor), percent-decoded, query string dropped."""
        target = self._bare_target()
        path, _, anchor = target.partition("#")
        path = path.split("?", 1)[0]
        return unquote(path), unquote(anchor)

    def _bare_target(self) -> str:
        target = self.target.strip()
        if target.startswith("<") and target.endswith(">"):
            target = target[1:-1].strip()
        return target


@dataclass
class CodeFence:
    """A fenced code block.

    Attributes:
        line: Line of the opening fence
        marker: The fence characters (three or more backticks or tildes)
        info: Full info string after the marker
        language: First word of the info string, braces and dots stripped
        closed: Whether a matching closing fence was found
        end_line: Line of the closing fence
    """

    line: int
    marker: str
    info: str = ""
    language: str = ""
    closed: bool = False
    end_line: int | None = None

    def closes_with(self, line: str) -> bool:
        match = FENCE_RE.match(line)
        if not match:
            return False
        marker = match.group("marker")
        return (
            marker[0] == self.marker[0]
            and len(marker) >= len(self.marker)
            and not match.group("info").strip()
        )


@dataclass
class ParsedMarkdown:
    """Structure extracted from one Markdown body."""

    headings: list[Heading] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    fences: list[CodeFence] = field(default_factory=list)

    @property
    def anchors(self) -> set[str]:
        return {h.anchor for h in self.headings}

    @property
    def titles(self) -> list[Heading]:
        return [h for h in self.headings if h.level == 1]


def slugify(text: str) -> str:
    """GitHub-flavoured heading anchor.

    Lowercase, drop everything that is not a word character, hyphen or
    space, then turn spaces into hyphens.

    >>> slugify("Step 2: Wire the Presenter (MVP)")
    'step-2-wire-the-presenter-mvp'
    """
    text = MARKDOWN_LINK_TEXT_RE.sub(r"\1", text)
    text = HTML_TAG_RE.sub("", text)
    slug = text.strip().lower()
    slug = re.sub(r"[^\w\- ]", "", slug)
    return slug.replace(" ", "-")


def fence_language(info: str) -> str:
    """Language named by a fence info string (``{.cs title=x}`` -> ``cs``)."""
    first = info.strip().split(None, 1)[0] if info.strip() else ""
    return first.strip("{}").lstrip(".")


class MarkdownParser:
    """Extract headings, links and fences from Markdown text."""

    def parse(self, text: str | list[str], first_line: int = 1) -> ParsedMarkdown:
        """Parse a Markdown body.

        Args:
            text: Body text, or its lines
            first_line: Line number of the first line (for bodies that follow
                front-matter)

        Returns:
            ParsedMarkdown
        """
        lines = text.splitlines() if isinstance(text, str) else text
        result = ParsedMarkdown()
        open_fence: CodeFence | None = None
        seen_anchors: dict[str, int] = {}
        # Setext candidates: lines of the current paragraph, with line numbers
        paragraph: list[tuple[str, int]] = []
        in_other_block = False

        for offset, line in enumerate(lines):
            lineno = first_line + offset

            if open_fence is not None:
                if open_fence.closes_with(line):
                    open_fence.closed = True
                    open_fence.end_line = lineno
                    open_fence = None
                continue

            fence_match = FENCE_RE.match(line)
            if fence_match and not (
                fence_match.group("marker")[0] == "`" and "`" in fence_match.group("info")
            ):
                info = fence_match.group("info").strip()
                open_fence = CodeFence(
                    line=lineno,
                    marker=fence_match.group("marker"),
                    info=info,
                    language=fence_language(info),
                )
                result.fences.append(open_fence)
                paragraph, in_other_block = [], False
                continue

            underline = SETEXT_UNDERLINE_RE.match(line)
            if underline and paragraph:
                heading_text = " ".join(part.strip() for part, _ in paragraph)
                result.headings.append(Heading(
                    level=1 if underline.group("underline")[0] == "=" else 2,
                    text=heading_text,
                    line=paragraph[0][1],
                    anchor=self._unique_anchor(slugify(heading_text), seen_anchors),
                ))
                paragraph = []
                continue

            heading_match = HEADING_RE.match(line)
            ref_match = REFERENCE_DEF_RE.match(line)

            if not line.strip() or heading_match or underline or ref_match:
                paragraph, in_other_block = [], False
            elif NON_PARAGRAPH_RE.match(line):
                paragraph, in_other_block = [], True
            elif paragraph or not in_other_block:
                paragraph.append((line, lineno))

            if heading_match:
                heading_text = CLOSING_HASHES_RE.sub("", heading_match.group("text") or "").strip()
                result.headings.append(Heading(
                    level=len(heading_match.group("hashes")),
                    text=heading_text,
                    line=lineno,
                    anchor=self._unique_anchor(slugify(heading_text), seen_anchors),
                ))

            if ref_match and not ref_match.group("label").startswith("^"):
                result.links.append(Link(
                    text=ref_match.group("label"),
                    target=ref_match.group("target"),
                    line=lineno,
                    is_reference=True,
                ))
                continue

            result.links.extend(self._inline_links(line, lineno))

        return result

    def _inline_links(self, line: str, lineno: int) -> list[Link]:
        """Find inline links and images, including ones nested in link text."""
        # Blank out code spans so their contents never look like links
        scrubbed = INLINE_CODE_RE.sub(lambda m: " " * len(m.group(0)), line)
        links: list[Link] = []
        for match in INLINE_LINK_RE.finditer(scrubbed):
            links.extend(self._inline_links(match.group("text"), lineno))
            links.append(Link(
                text=match.group("text"),
                target=match.group("target"),
                line=lineno,
                is_image=bool(match.group("bang")),
            ))
        return links

    def _unique_anchor(self, anchor: str, seen: dict[str, int]) -> str:
        count = seen.get(anchor, 0)
        seen[anchor] = count + 1
        return anchor if count == 0 else f"{anchor}-{count}"
