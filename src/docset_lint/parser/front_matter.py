"""
YAML front-matter parsing.

A front-matter block exists only when the very first line of a document is
``---``. It runs to the next line that is exactly ``---`` or ``...``.

Example:
    >>> fm = parse_front_matter("---\\ndescription: Fix a form\\n---\\n# Body\\n")
    >>> fm.data
    {'description': 'Fix a form'}
    >>> fm.body_start
    3
"""

from dataclasses import dataclass, field
from typing import Any

import yaml

from docset_lint.errors import FrontMatterError

_OPEN = "---"
_CLOSE = ("---", "...")


@dataclass
class FrontMatter:
    """Parsed front-matter block.

    Attributes:
        data: Parsed YAML mapping (empty when absent)
        raw: Raw YAML text between the delimiters, None when absent
        body_start: 0-based index of the first line after the block
    """

    data: dict[str, Any] = field(default_factory=dict)
    raw: str | None = None
    body_start: int = 0

    @property
    def present(self) -> bool:
        return self.raw is not None

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


def split_front_matter(lines: list[str]) -> tuple[str | None, int]:
    """Locate the front-matter block without parsing it.

    Args:
        lines: Document lines (no line endings)

    Returns:
        (raw YAML or None, 0-based index of the first body line)

    Raises:
        FrontMatterError: If the block is opened but never closed
    """
    if not lines or lines[0].rstrip() != _OPEN:
        return None, 0

    for index in range(1, len(lines)):
        if lines[index].rstrip() in _CLOSE:
            return "\n".join(lines[1:index]), index + 1

    raise FrontMatterError("Front-matter block is never closed", line=1)


def parse_front_matter(text: str) -> FrontMatter:
    """Parse the front-matter block of a document.

    Args:
        text: Full document text

    Returns:
        FrontMatter (``present`` is False when the document has none)

    Raises:
        FrontMatterError: Unterminated block, invalid YAML, or a non-mapping
    """
    raw, body_start = split_front_matter(text.splitlines())
    if raw is None:
        return FrontMatter()

    try:
        data = yaml.safe_load(raw) if raw.strip() else {}
    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            # +2: the opening delimiter line, and marks are 0-based
            line = mark.line + 2
        problem = getattr(e, "problem", None) or str(e)
        raise FrontMatterError(f"Invalid YAML in front-matter: {problem}", line=line, cause=e) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front-matter must be a mapping, got {type(data).__name__}", line=2
        )

    return FrontMatter(data=data, raw=raw, body_start=body_start)
