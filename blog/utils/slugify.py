#!/usr/bin/env python3
"""
slugify.py
----------
String slugification for entry and tag URLs.

Key Features:
    - Lowercase transformation
    - Accent/diacritic normalization (Yoneda Lémma → yoneda-lemma)
    - Space to hyphen conversion
    - Maximum length enforcement

Usage:
    from blog.utils.slugify import slugify

    slug = slugify("Introducing the Hamiltonian")  # "introducing-the-hamiltonian"
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
import unicodedata


def slugify(text: str, max_length: int = 200) -> str:
    """
    Convert text to a URL-safe slug.

    Args:
        text: Input text to slugify
        max_length: Maximum slug length (default 200)

    Returns:
        Slugified string safe for URL path segments

    Examples:
        >>> slugify("Practical Dependent Types in Haskell")
        'practical-dependent-types-in-haskell'
        >>> slugify("Functors & Monads")
        'functors-and-monads'
        >>> slugify("C'est la vie (part 2)")
        'cest-la-vie-part-2'
    """
    if not text:
        return ""

    # Decompose accents, keep ASCII
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")

    text = text.lower()
    text = text.replace("'", "")
    text = re.sub(r"[(){}\[\]]", " ", text)
    text = text.replace("&", "and")
    text = text.replace("/", "-")
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"[^a-z0-9-]", "", text)
    text = re.sub(r"-+", "-", text)
    text = text.strip("-")

    if len(text) > max_length:
        text = text[:max_length].rstrip("-")

    return text
