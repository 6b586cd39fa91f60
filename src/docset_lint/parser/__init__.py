"""
Parser module for docset-lint.

Front-matter and Markdown structure extraction.
"""

from docset_lint.parser.front_matter import FrontMatter, parse_front_matter, split_front_matter
from docset_lint.parser.markdown import (
    CodeFence,
    Heading,
    Link,
    MarkdownParser,
    ParsedMarkdown,
    fence_language,
    slugify,
)

__all__ = [
    "FrontMatter",
    "parse_front_matter",
    "split_front_matter",
    "CodeFence",
    "Heading",
    "Link",
    "MarkdownParser",
    "ParsedMarkdown",
    "fence_language",
    "slugify",
]
