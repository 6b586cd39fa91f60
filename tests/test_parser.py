"""Tests for the parser module."""

import pytest

from docset_lint.errors import FrontMatterError
from docset_lint.parser.front_matter import parse_front_matter
from docset_lint.parser.markdown import Link, MarkdownParser, fence_language, slugify


# =============================================================================
# Front-matter Tests
# =============================================================================

class TestFrontMatter:
    """Tests for parse_front_matter."""

    def test_parses_mapping(self):
        fm = parse_front_matter("---\ndescription: Fix a form\nmodel: fast\n---\n# Body\n")

        assert fm.present is True
        assert fm.data == {"description": "Fix a form", "model": "fast"}
        assert fm.body_start == 4

    def test_absent_front_matter(self):
        fm = parse_front_matter("# Title\n\n---\nnot front-matter\n---\n")

        assert fm.present is False
        assert fm.data == {}
        assert fm.body_start == 0

    def test_dots_close_block(self):
        fm = parse_front_matter("---\ndescription: x\n...\nbody\n")
        assert fm.data == {"description": "x"}
        assert fm.body_start == 3

    def test_empty_block(self):
        fm = parse_front_matter("---\n---\nbody\n")
        assert fm.present is True
        assert fm.data == {}

    def test_unterminated_block(self):
        with pytest.raises(FrontMatterError) as excinfo:
            parse_front_matter("---\ndescription: x\n# Body\n")
        assert excinfo.value.line == 1
        assert "never closed" in excinfo.value.message

    def test_invalid_yaml_reports_line(self):
        with pytest.raises(FrontMatterError) as excinfo:
            parse_front_matter("---\ndescription: ok\nbad: [unclosed\n---\n")
        assert excinfo.value.line is not None
        assert excinfo.value.line >= 3
        assert "Invalid YAML" in excinfo.value.message

    def test_non_mapping(self):
        with pytest.raises(FrontMatterError, match="must be a mapping"):
            parse_front_matter("---\n- a\n- b\n---\n")


# =============================================================================
# MarkdownParser Tests
# =============================================================================

class TestHeadings:
    """Tests for heading extraction."""

    @pytest.fixture
    def parser(self):
        return MarkdownParser()

    def test_levels_and_anchors(self, parser):
        parsed = parser.parse("# Customer Forms\n\n## Step 1: Create the View\n### Notes ###\n")

        assert [(h.level, h.text) for h in parsed.headings] == [
            (1, "Customer Forms"),
            (2, "Step 1: Create the View"),
            (3, "Notes"),
        ]
        assert [h.anchor for h in parsed.headings] == [
            "customer-forms",
            "step-1-create-the-view",
            "notes",
        ]

    def test_duplicate_anchors_get_suffix(self, parser):
        parsed = parser.parse("## Example\n## Example\n## Example\n")
        assert [h.anchor for h in parsed.headings] == ["example", "example-1", "example-2"]

    def test_hash_without_space_is_not_heading(self, parser):
        parsed = parser.parse("#region Designer\n#Hashtag\n")
        assert parsed.headings == []

    def test_headings_in_fences_ignored(self, parser):
        parsed = parser.parse("```bash\n# not a heading\n```\n# Real\n")
        assert [h.text for h in parsed.headings] == ["Real"]
        assert parsed.headings[0].line == 4

    def test_titles(self, parser):
        parsed = parser.parse("# One\n## Sub\n# Two\n")
        assert [h.text for h in parsed.titles] == ["One", "Two"]

    def test_setext_headings(self, parser):
        parsed = parser.parse("Customer Forms\n==============\n\nInitial Setup\n---\n")

        assert [(h.level, h.text, h.line, h.anchor) for h in parsed.headings] == [
            (1, "Customer Forms", 1, "customer-forms"),
            (2, "Initial Setup", 4, "initial-setup"),
        ]

    def test_setext_heading_spans_paragraph(self, parser):
        parsed = parser.parse("Wiring the\nPresenter\n=========\n")
        assert [(h.text, h.line) for h in parsed.headings] == [("Wiring the Presenter", 1)]

    def test_setext_anchors_share_deduplication(self, parser):
        parsed = parser.parse("## Example\n\nExample\n-------\n")
        assert [h.anchor for h in parsed.headings] == ["example", "example-1"]

    @pytest.mark.parametrize("text", [
        "# Title\n\n---\n",
        "- item\n---\n",
        "> quote\n---\n",
        "```\ncode\n```\n---\n",
        "    indented code\n---\n",
    ])
    def test_thematic_breaks_are_not_headings(self, parser, text):
        parsed = parser.parse(text)
        assert [h.level for h in parsed.headings if h.level == 2] == []


class TestLinks:
    """Tests for link extraction."""

    @pytest.fixture
    def parser(self):
        return MarkdownParser()

    def test_inline_link_with_title(self, parser):
        parsed = parser.parse('See [guide](docs/guide.md "The guide").\n')

        assert len(parsed.links) == 1
        link = parsed.links[0]
        assert link.text == "guide"
        assert link.target == "docs/guide.md"
        assert link.line == 1
        assert link.is_image is False

    def test_image(self, parser):
        parsed = parser.parse("![diagram](img/mvp.png)\n")
        assert parsed.links[0].is_image is True

    def test_image_nested_in_link(self, parser):
        parsed = parser.parse("[![badge](img/badge.svg)](docs/ci.md)\n")
        targets = {(link.target, link.is_image) for link in parsed.links}
        assert targets == {("img/badge.svg", True), ("docs/ci.md", False)}

    def test_reference_definition(self, parser):
        parsed = parser.parse("Read [the guide][g].\n\n[g]: ./guide.md\n[^1]: A footnote\n")

        refs = [link for link in parsed.links if link.is_reference]
        assert len(refs) == 1
        assert refs[0].target == "./guide.md"
        assert refs[0].line == 3

    def test_links_in_code_ignored(self, parser):
        text = "Use `[x](inline.md)` literally.\n\n```markdown\n[y](fenced.md)\n```\n"
        parsed = parser.parse(text)
        assert parsed.links == []

    def test_angle_bracket_target(self, parser):
        parsed = parser.parse("[spaced](<docs/my guide.md>)\n")
        assert parsed.links[0].split() == ("docs/my guide.md", "")

    def test_first_line_offset(self, parser):
        parsed = parser.parse(["", "[a](b.md)"], first_line=5)
        assert parsed.links[0].line == 6


class TestLinkHelpers:
    """Tests for Link classification and splitting."""

    SCHEMES = ["http", "https", "mailto"]

    def test_split_decodes_and_drops_query(self):
        link = Link(text="x", target="docs/a%20b.md?raw=1#Setup", line=1)
        assert link.split() == ("docs/a b.md", "Setup")

    def test_anchor_only(self):
        assert Link(text="x", target="#usage", line=1).split() == ("", "usage")

    @pytest.mark.parametrize("target", [
        "https://learn.microsoft.com/dotnet",
        "mailto:team@example.com",
        "//cdn.example.com/x.js",
    ])
    def test_external(self, target):
        assert Link(text="x", target=target, line=1).is_external(self.SCHEMES) is True

    @pytest.mark.parametrize("target", ["docs/a.md", "../b.md", "/docs/c.md", "#top"])
    def test_not_external(self, target):
        assert Link(text="x", target=target, line=1).is_external(self.SCHEMES) is False

    @pytest.mark.parametrize("target", ["C:\\Projects\\App\\README.md", "file:///tmp/a.md"])
    def test_filesystem_absolute(self, target):
        assert Link(text="x", target=target, line=1).is_filesystem_absolute() is True


class TestFences:
    """Tests for code fence extraction."""

    @pytest.fixture
    def parser(self):
        return MarkdownParser()

    def test_language_and_closing(self, parser):
        parsed = parser.parse("```csharp\nvar x = 1;\n```\n")

        fence = parsed.fences[0]
        assert fence.language == "csharp"
        assert fence.closed is True
        assert fence.line == 1
        assert fence.end_line == 3

    def test_untagged(self, parser):
        parsed = parser.parse("```\nplain\n```\n")
        assert parsed.fences[0].language == ""

    def test_tilde_fence_not_closed_by_backticks(self, parser):
        parsed = parser.parse("~~~xml\n```\n<a/>\n~~~\n")
        assert len(parsed.fences) == 1
        assert parsed.fences[0].closed is True
        assert parsed.fences[0].end_line == 4

    def test_shorter_marker_does_not_close(self, parser):
        parsed = parser.parse("````markdown\n```csharp\n```\n````\n")
        assert len(parsed.fences) == 1
        assert parsed.fences[0].end_line == 4

    def test_unclosed(self, parser):
        parsed = parser.parse("# T\n\n```json\n{}\n")
        assert parsed.fences[0].closed is False
        assert parsed.fences[0].end_line is None

    def test_backtick_in_info_is_not_fence(self, parser):
        parsed = parser.parse("``` inline ``` code\n")
        assert parsed.fences == []


@pytest.mark.parametrize("info, expected", [
    ("csharp", "csharp"),
    ("cs title=\"Form.cs\"", "cs"),
    ("{.python}", "python"),
    ("", ""),
])
def test_fence_language(info, expected):
    assert fence_language(info) == expected


@pytest.mark.parametrize("text, expected", [
    ("Getting Started", "getting-started"),
    ("Step 2: Wire the Presenter (MVP)", "step-2-wire-the-presenter-mvp"),
    ("`IRepository` usage", "irepository-usage"),
    ("See [the guide](guide.md)", "see-the-guide"),
    ("async/await & threads", "asyncawait--threads"),
])
def test_slugify(text, expected):
    assert slugify(text) == expected
