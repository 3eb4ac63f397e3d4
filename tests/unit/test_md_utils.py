"""
test_md_utils.py
----------------
Unit tests for blog.utils.md module.

Tests frontmatter splitting, leading-heading extraction and content
hashing.
"""
from blog.utils.md import (
    find_markdown_files,
    first_heading,
    get_text_hash,
    split_frontmatter,
)


class TestSplitFrontmatter:
    """Test split_frontmatter function."""

    def test_basic_frontmatter(self):
        """Test parsing basic YAML frontmatter."""
        content = """---
title: Hi
date: 2020-01-05
---

Body content here"""
        frontmatter, body = split_frontmatter(content)
        assert frontmatter == "title: Hi\ndate: 2020-01-05"
        assert body == ["Body content here"]

    def test_no_frontmatter(self):
        """Test content without frontmatter."""
        frontmatter, body = split_frontmatter("Just body content\nMore")
        assert frontmatter == ""
        assert body == ["Just body content", "More"]

    def test_unclosed_frontmatter(self):
        """An unterminated block is treated as body."""
        frontmatter, body = split_frontmatter("---\ntitle: Hi\nBody")
        assert frontmatter == ""
        assert body == ["---", "title: Hi", "Body"]

    def test_empty_content(self):
        assert split_frontmatter("") == ("", [])


class TestFirstHeading:
    """Test first_heading function."""

    def test_heading_popped(self):
        title, rest = first_heading(["# Title", "", "Body"])
        assert title == "Title"
        assert rest == ["Body"]

    def test_closing_hashes_stripped(self):
        title, _ = first_heading(["# Title ##"])
        assert title == "Title"

    def test_second_level_ignored(self):
        title, rest = first_heading(["## Section", "Body"])
        assert title is None
        assert rest == ["## Section", "Body"]

    def test_empty(self):
        assert first_heading([]) == (None, [])


class TestHashing:
    """Test get_text_hash function."""

    def test_known_value(self):
        assert get_text_hash("Hello, world!") == "6cd3556deb0da54bca060b4c39479839"

    def test_differs(self):
        assert get_text_hash("a") != get_text_hash("b")


class TestFindMarkdownFiles:
    def test_sorted_recursive(self, tmp_dir):
        (tmp_dir / "b").mkdir()
        for name in ["z.md", "a.md", "b/c.md", "notes.txt"]:
            (tmp_dir / name).write_text("x", encoding="utf-8")

        found = find_markdown_files(tmp_dir)

        assert [p.relative_to(tmp_dir).as_posix() for p in found] == ["a.md", "b/c.md", "z.md"]
