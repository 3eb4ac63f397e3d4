"""
Utilities package for the blog engine.

- md: Markdown frontmatter splitting and content hashing
- slugify: URL-safe slug generation

Import commonly-used utilities directly from this package:
    from blog.utils import split_frontmatter, get_text_hash, slugify
"""

from .md import (
    find_markdown_files,
    first_heading,
    get_text_hash,
    split_frontmatter,
)
from .slugify import slugify

__all__ = [
    "find_markdown_files",
    "first_heading",
    "get_text_hash",
    "split_frontmatter",
    "slugify",
]
