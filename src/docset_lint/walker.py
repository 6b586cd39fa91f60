"""
File walker for documentation sets.

Finds the Markdown documents and code templates of a repository and loads
them as ``Document`` objects. Parsing of front-matter and Markdown structure
is lazy and cached on the document.

Example:
    >>> walker = DocumentWalker(LintConfig(project_root=Path("repo")))
    >>> for doc in walker.walk_directory():
    ...     print(doc.rel_path, doc.kind)
"""

from dataclasses import dataclass
from functools import cached_property
from pathlib import Path, PurePosixPath
from typing import Iterator

from docset_lint.config import LintConfig
from docset_lint.errors import DocumentReadError, FrontMatterError
from docset_lint.logging import get_logger
from docset_lint.parser.front_matter import FrontMatter, parse_front_matter, split_front_matter
from docset_lint.parser.markdown import MarkdownParser, ParsedMarkdown

logger = get_logger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")

_parser = MarkdownParser()


@dataclass(eq=False)
class Document:
    """A file loaded from the documentation set.

    Attributes:
        path: Absolute path on disk
        rel_path: Path relative to the project root (posix)
        kind: ``markdown`` or ``template``
        text: File contents
        is_command: Whether the file is a slash-command definition
    """

    path: Path
    rel_path: PurePosixPath
    kind: str
    text: str
    is_command: bool = False

    @property
    def is_markdown(self) -> bool:
        return self.kind == "markdown"

    @cached_property
    def lines(self) -> list[str]:
        return self.text.splitlines()

    @cached_property
    def front_matter(self) -> FrontMatter:
        """Parsed front-matter.

        Raises:
            FrontMatterError: If the block is malformed
        """
        try:
            return parse_front_matter(self.text)
        except FrontMatterError as e:
            if e.path is None:
                e.path = str(self.rel_path)
            raise

    @cached_property
    def body_start(self) -> int:
        """0-based index of the first line after any front-matter.

        An unterminated block counts as no front-matter, so the whole file is
        still scanned as body.
        """
        try:
            return split_front_matter(self.lines)[1]
        except FrontMatterError:
            return 0

    @property
    def body_lines(self) -> list[str]:
        return self.lines[self.body_start:]

    @cached_property
    def markdown(self) -> ParsedMarkdown:
        """Headings, links and fences of the body, numbered against the whole file."""
        return _parser.parse(self.body_lines, first_line=self.body_start + 1)


class DocumentWalker:
    """Walk a documentation repository and load its documents.

    Guardrails:
        - Do NOT follow files outside the project root
          ✅ Globs are expanded from the root only
        - Do NOT give up on the first unreadable file
          ✅ walk_directory collects DocumentReadError and keeps going
    """

    def __init__(self, config: LintConfig | None = None):
        self.config = config or LintConfig()

    @property
    def project_root(self) -> Path:
        return self.config.project_root

    def walk_file(self, file_path: Path) -> Document:
        """Load one file as a Document.

        Args:
            file_path: Path to a Markdown or template file

        Returns:
            Document

        Raises:
            FileNotFoundError: If the file doesn't exist
            DocumentReadError: If the file is not readable UTF-8 text
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        rel_path = self.config.relative(file_path)

        try:
            text = file_path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise DocumentReadError(
                f"Not valid UTF-8 (byte offset {e.start})", path=str(rel_path), cause=e
            ) from e
        except OSError as e:
            raise DocumentReadError(f"Cannot read file: {e.strerror}", path=str(rel_path), cause=e) from e

        kind = "markdown" if file_path.suffix.lower() in MARKDOWN_SUFFIXES else "template"
        return Document(
            path=file_path,
            rel_path=rel_path,
            kind=kind,
            text=text,
            is_command=self.config.is_command(rel_path),
        )

    def iter_paths(self, root: Path | None = None) -> list[Path]:
        """Sorted, de-duplicated paths matched by the configured globs."""
        root = Path(root) if root is not None else self.project_root
        matched: set[Path] = set()

        for pattern in [*self.config.markdown_globs, *self.config.template_globs]:
            for path in root.glob(pattern):
                if not path.is_file():
                    continue
                if self.config.should_skip(path):
                    continue
                matched.add(path)

        return sorted(matched, key=lambda p: p.as_posix())

    def walk_directory(
        self,
        root: Path | None = None,
        errors: list[DocumentReadError] | None = None,
    ) -> Iterator[Document]:
        """Load every matched document under the root.

        Args:
            root: Directory to walk (defaults to the project root)
            errors: Collects files that could not be read; without it the
                first DocumentReadError propagates

        Yields:
            Document for each readable file
        """
        paths = self.iter_paths(root)
        logger.debug("walk_started", root=str(root or self.project_root), files=len(paths))

        for path in paths:
            try:
                document = self.walk_file(path)
            except DocumentReadError as e:
                if errors is None:
                    raise
                logger.warning("document_unreadable", path=e.path, reason=e.message)
                errors.append(e)
                continue
            yield document
