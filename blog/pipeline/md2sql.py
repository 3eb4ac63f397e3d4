#!/usr/bin/env python3
"""
md2sql.py
---------
Import Markdown entries with YAML frontmatter into the entry database.

Each ``.md`` file under the entries directory becomes one Entry, keyed
by its path relative to that directory. Re-importing skips files whose
content hash is unchanged unless forced.

Frontmatter keys:
    title: Entry title; falls back to a leading ``# heading``
    slug: URL slug; defaults to the slugified title, ``null`` for none
    date / posted: Posting date or datetime; absent means draft
    tags, categories, series: A label or a list of labels
    lede: Summary shown on the home page

Example entry:
    ---
    title: Introducing the Hamiltonian
    date: 2014-06-08 12:00:00
    categories: Physics
    series: Hamiltonian Dynamics
    tags: [haskell, physics]
    ---

    Body text...

Tag descriptions come from a separate YAML file:
    categories:
      Physics: Entries about physics and simulation
    series:
      Hamiltonian Dynamics: A series on Hamiltonian mechanics in Haskell

Usage:
    from blog.pipeline.md2sql import import_directory

    stats = import_directory(db, Path("data/entries"), force=False, logger=logger)
    print(stats.summary())
"""
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

# --- Third party ---
import yaml

# --- Local imports ---
from blog.core.cli import ImportStats
from blog.core.exceptions import BlogError, EntryImportError, ValidationError
from blog.core.logging_manager import BlogLogger, safe_logger
from blog.core.validators import DataValidator
from blog.database.manager import BlogDB
from blog.database.models import TagKind
from blog.utils import find_markdown_files, first_heading, get_text_hash, slugify, split_frontmatter

# Frontmatter key → tag kind
TAG_KEYS: Dict[str, TagKind] = {
    "tags": TagKind.TAG,
    "categories": TagKind.CATEGORY,
    "series": TagKind.SERIES,
}

KNOWN_KEYS = {"title", "slug", "date", "posted", "lede"} | set(TAG_KEYS)


@dataclass
class EntryFile:
    """
    A parsed entry file.

    Attributes:
        path: File the entry was read from
        title: Entry title
        slug: URL slug, or None for id-only URLs
        posted_at: Posting time (aware UTC), None for drafts
        content: Markdown body without frontmatter (or leading heading
            when the title came from it)
        lede: Explicit summary, if any
        tags: Labels per tag kind
        source_hash: Hash of the complete file text
    """
    path: Path
    title: str
    slug: Optional[str]
    posted_at: Optional[datetime]
    content: str
    lede: Optional[str] = None
    tags: Dict[TagKind, List[str]] = field(default_factory=dict)
    source_hash: str = ""

    def to_database_metadata(self, source_path: Optional[str] = None) -> Dict[str, Any]:
        """Fields for ``EntryManager.create`` / ``upsert_from_source``."""
        return {
            "title": self.title,
            "slug": self.slug,
            "posted_at": self.posted_at,
            "content": self.content,
            "lede": self.lede,
            "source_path": source_path or str(self.path),
            "source_hash": self.source_hash,
            "tags": {kind: list(labels) for kind, labels in self.tags.items()},
        }


def _load_frontmatter(text: str, path: Path) -> Dict[str, Any]:
    if not text.strip():
        return {}
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise EntryImportError(f"Invalid YAML frontmatter in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise EntryImportError(f"Frontmatter in {path} must be a mapping")
    return data


def parse_entry_file(path: Path, logger: Optional[BlogLogger] = None) -> EntryFile:
    """
    Parse one markdown entry file.

    Args:
        path: Markdown file with optional YAML frontmatter
        logger: Optional logger for warnings about unknown keys

    Returns:
        EntryFile with normalized fields

    Raises:
        EntryImportError: If the file cannot be read, the frontmatter is
            malformed, no title can be found or the date is invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise EntryImportError(f"Cannot read {path}: {e}") from e

    fm_text, body_lines = split_frontmatter(text)
    metadata = _load_frontmatter(fm_text, path)

    unknown = sorted(set(metadata) - KNOWN_KEYS)
    if unknown:
        safe_logger(logger).log_warning(
            f"Ignoring unknown frontmatter keys in {path.name}", {"keys": unknown}
        )

    title = DataValidator.normalize_string(metadata.get("title"))
    if title is None:
        title, body_lines = first_heading(body_lines)
    if not title:
        raise EntryImportError(f"{path} has no title and no leading '# heading'")

    if "slug" in metadata:
        slug = DataValidator.normalize_string(metadata["slug"])
        slug = slugify(slug) if slug else None
    else:
        slug = slugify(title) or None

    raw_date = metadata.get("date", metadata.get("posted"))
    try:
        posted_at = DataValidator.normalize_datetime(raw_date)
    except ValidationError as e:
        raise EntryImportError(f"{path}: {e}") from e

    tags: Dict[TagKind, List[str]] = {}
    for key, kind in TAG_KEYS.items():
        labels = DataValidator.normalize_list(metadata.get(key))
        if labels:
            tags[kind] = labels

    content = "\n".join(body_lines).strip()
    return EntryFile(
        path=path,
        title=title,
        slug=slug,
        posted_at=posted_at,
        content=content + "\n" if content else "",
        lede=DataValidator.normalize_string(metadata.get("lede")),
        tags=tags,
        source_hash=get_text_hash(text),
    )


def load_tag_descriptions(path: Path) -> Dict[TagKind, Dict[str, str]]:
    """
    Read tag descriptions from YAML.

    Returns:
        Mapping of kind → {label: description}; empty if the file is missing

    Raises:
        EntryImportError: If the file is malformed or names an unknown section
    """
    path = Path(path)
    if not path.is_file():
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise EntryImportError(f"Cannot read tag descriptions {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise EntryImportError(f"Tag descriptions {path} must contain a mapping")

    descriptions: Dict[TagKind, Dict[str, str]] = {}
    for section, entries in data.items():
        if section not in TAG_KEYS:
            raise EntryImportError(
                f"Unknown section {section!r} in {path} "
                f"(expected one of {', '.join(TAG_KEYS)})"
            )
        if not isinstance(entries, dict):
            raise EntryImportError(f"Section {section!r} in {path} must be a mapping")
        descriptions[TAG_KEYS[section]] = {
            str(label).strip(): str(desc).strip()
            for label, desc in entries.items()
            if desc is not None
        }
    return descriptions


def import_entry_file(
    file_path: Path,
    db: BlogDB,
    source_path: Optional[str] = None,
    force: bool = False,
    logger: Optional[BlogLogger] = None,
) -> str:
    """
    Import a single markdown file.

    Args:
        file_path: Path to .md file
        db: Database manager instance
        source_path: Key identifying the file across imports
        force: Update even if the file hash is unchanged
        logger: Optional logger

    Returns:
        Status string: "created", "updated" or "skipped"

    Raises:
        EntryImportError: If parsing or the database write fails
    """
    log = safe_logger(logger)
    log.log_debug(f"Processing {file_path.name}")

    entry_file = parse_entry_file(file_path, logger)
    metadata = entry_file.to_database_metadata(source_path)

    try:
        with db.session_scope():
            entry, status = db.entries.upsert_from_source(metadata, force=force)
            entry_id = entry.id
    except BlogError as e:
        raise EntryImportError(f"Failed to import {file_path}: {e}") from e

    if status != "skipped":
        log.log_operation(
            f"entry_{status}",
            {"entry_id": entry_id, "file": str(file_path), "slug": entry_file.slug},
        )
    return status


def apply_tag_descriptions(
    db: BlogDB,
    descriptions: Dict[TagKind, Dict[str, str]],
    logger: Optional[BlogLogger] = None,
) -> int:
    """
    Store descriptions on existing tags.

    Labels that name no existing tag are logged and ignored.

    Returns:
        Number of tags whose description changed
    """
    log = safe_logger(logger)
    changed = 0
    with db.session_scope():
        for kind, by_label in descriptions.items():
            for label, description in by_label.items():
                if db.tags.get_by_label(kind, label) is None:
                    log.log_warning(
                        f"No {kind.value} named {label!r}; description ignored"
                    )
                    continue
                if db.tags.set_description(kind, label, description):
                    changed += 1
    return changed


def import_directory(
    db: BlogDB,
    directory: Path,
    force: bool = False,
    logger: Optional[BlogLogger] = None,
    tags_file: Optional[Path] = None,
    pattern: str = "**/*.md",
) -> ImportStats:
    """
    Import every markdown file under a directory.

    Failures are per file: they are logged and counted in
    ``stats.errors`` while the remaining files are still imported.

    Args:
        db: Database manager instance
        directory: Directory containing .md files
        force: Update all entries regardless of hash
        logger: Optional logger
        tags_file: Optional YAML file of tag descriptions
        pattern: Glob pattern for matching files

    Returns:
        ImportStats with processing results

    Raises:
        EntryImportError: If the directory does not exist or the tag
            descriptions file is malformed
    """
    log = safe_logger(logger)
    stats = ImportStats()
    directory = Path(directory)

    if not directory.is_dir():
        raise EntryImportError(f"Directory not found: {directory}")

    md_files = find_markdown_files(directory, pattern)
    log.log_operation("import_start", {"input": str(directory), "files_found": len(md_files)})

    for md_file in md_files:
        source_path = md_file.relative_to(directory).as_posix()
        try:
            status = import_entry_file(md_file, db, source_path, force, logger)
            stats.record(status)
        except EntryImportError as e:
            stats.files_processed += 1
            stats.errors += 1
            log.log_error(e, {"operation": "import_file", "file": str(md_file)})

    if tags_file is not None:
        descriptions = load_tag_descriptions(tags_file)
        if descriptions:
            stats.tags_described = apply_tag_descriptions(db, descriptions, logger)

    log.log_operation("import_complete", stats.to_dict())
    return stats
