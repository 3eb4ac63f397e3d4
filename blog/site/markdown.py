#!/usr/bin/env python3
"""
markdown.py
-----------
Markdown → HTML conversion for entry bodies and ledes.

Uses markdown-it-py with the CommonMark preset plus GFM tables. Entry
content is trusted author input, so raw HTML blocks pass through.

Usage:
    from blog.site.markdown import render_markdown, render_lede

    body = render_markdown(entry.content)
    summary = render_lede(entry)

Dependencies:
    - markdown-it-py >= 3.0.0
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import TYPE_CHECKING, List, Optional

# --- Third-party imports ---
from markdown_it import MarkdownIt
from markdown_it.token import Token
from markupsafe import Markup

if TYPE_CHECKING:
    from blog.database.models import Entry


def create_parser() -> MarkdownIt:
    """Build the markdown parser used for all site content."""
    return MarkdownIt("commonmark").enable("table")


_md = create_parser()


def render_markdown(text: Optional[str]) -> Markup:
    """Render markdown text to safe HTML markup."""
    if not text:
        return Markup("")
    return Markup(_md.render(text))


def _first_paragraph(tokens: List[Token]) -> Optional[List[Token]]:
    """Tokens of the first top-level paragraph, open and close included."""
    start = None
    for i, token in enumerate(tokens):
        if token.type == "paragraph_open" and token.level == 0 and start is None:
            start = i
        elif token.type == "paragraph_close" and token.level == 0 and start is not None:
            return tokens[start:i + 1]
    return None


def first_paragraph(text: Optional[str]) -> Markup:
    """
    Render only the first paragraph of a markdown document.

    Headings, code blocks and other block elements before the first
    paragraph are skipped.
    """
    if not text:
        return Markup("")
    env: dict = {}
    tokens = _md.parse(text, env)
    paragraph = _first_paragraph(tokens)
    if paragraph is None:
        return Markup("")
    return Markup(_md.renderer.render(paragraph, _md.options, env))


def render_lede(entry: "Entry") -> Markup:
    """An entry's explicit lede, or the first paragraph of its content."""
    if entry.lede:
        return render_markdown(entry.lede)
    return first_paragraph(entry.content)
