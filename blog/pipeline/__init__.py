"""
Pipeline package: getting content into the entry database.

- md2sql: Markdown + YAML frontmatter → Entry rows
"""
from .md2sql import (
    EntryFile,
    apply_tag_descriptions,
    import_directory,
    import_entry_file,
    load_tag_descriptions,
    parse_entry_file,
)

__all__ = [
    "EntryFile",
    "apply_tag_descriptions",
    "import_directory",
    "import_entry_file",
    "load_tag_descriptions",
    "parse_entry_file",
]
