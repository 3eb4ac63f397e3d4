#!/usr/bin/env python3
"""
md.py
-------------------
Markdown file utilities for the entry importer.

Provides:
- Frontmatter extraction and splitting
- First-heading lookup for titleless entries
- Content hashing for change detection
- Markdown file discovery
"""
from __future__ import annotations

# --- Standard library imports ---
import hashlib
import re
from pathlib import Path
from typing import List, Optional, Tuple

HEADING_RE = re.compile(r"^#\s+(.+?)\s*#*\s*$")


# ----- YAML Frontmatter Parsing -----
def split_frontmatter(content: str) -> Tuple[str, List[str]]:
    """
    Split markdown content into YAML frontmatter and body.

    Expected format:
        ---
        yaml: content
        ---

        Body content here...

    Args:
        content: Full markdown file content

    Returns:
        Tuple of (frontmatter_text, body_lines); frontmatter_text is
        empty when the file has none

    Examples:
        >>> fm, body = split_frontmatter("---\\ntitle: Hi\\n---\\n\\nBody text")
        >>> fm
        'title: Hi'
        >>> body
        ['Body text']
    """
    lines = content.splitlines()

    if not lines or lines[0].strip() != "---":
        return "", lines

    frontmatter_end = None
    for i, line in enumerate(lines[1:], 1):
        if line.strip() == "---":
            frontmatter_end = i
            break

    if frontmatter_end is None:
        return "", lines

    frontmatter_lines = lines[1:frontmatter_end]
    body_lines = lines[frontmatter_end + 1 :]

    while body_lines and body_lines[0].strip() == "":
        body_lines.pop(0)

    return "\n".join(frontmatter_lines), body_lines


def first_heading(body_lines: List[str]) -> Tuple[Optional[str], List[str]]:
    """
    Pop a leading level-one ATX heading off the body.

    Returns:
        Tuple of (heading text or None, remaining body lines)
    """
    if body_lines:
        match = HEADING_RE.match(body_lines[0])
        if match:
            rest = body_lines[1:]
            while rest and rest[0].strip() == "":
                rest = rest[1:]
            return match.group(1), rest
    return None, body_lines


# ----- Content Hashing -----
def get_text_hash(text: str) -> str:
    """
    Compute MD5 hash of text content for change detection.

    MD5 is used for change detection only, not security.

    Examples:
        >>> get_text_hash("Hello, world!")
        '6cd3556deb0da54bca060b4c39479839'
    """
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def find_markdown_files(directory: Path, pattern: str = "**/*.md") -> List[Path]:
    """Return markdown files under ``directory`` in sorted order."""
    return sorted(p for p in Path(directory).glob(pattern) if p.is_file())
