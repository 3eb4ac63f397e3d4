#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the Scriptorium blog engine.

All project paths are Path objects resolved at import time, relative to
the project root directory.

The project structure:
    ROOT/
    ├── blog/          # Engine code (site, database, pipeline, cli)
    ├── data/          # Site data (entries, database, config)
    └── logs/          # Application logs
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import sys
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/blog/core/paths.py and navigates up
    the directory tree to find ROOT.

    Returns:
        Path object for project root

    Raises:
        RuntimeError: If project root cannot be determined
    """
    current_file = Path(__file__).resolve()

    # paths.py -> core/ -> blog/ -> ROOT/
    root = current_file.parent.parent.parent

    if not (root / "blog").is_dir():
        raise RuntimeError(
            f"Cannot determine valid project root. "
            f"Expected {root / 'blog'} to exist. "
            f"Current file: {current_file}"
        )

    return root


# ----- Project directory -----
ROOT: Path = _get_project_root()
DATA_DIR = ROOT / "data"

# ---- Engine ----
BLOG_DIR = ROOT / "blog"
TEMPLATES_DIR = BLOG_DIR / "site" / "templates"

# ---- Content ----
ENTRIES_DIR = DATA_DIR / "entries"
TAGS_FILE = DATA_DIR / "tags.yaml"

# ---- Database ----
DB_DIR = DATA_DIR / "db"
DB_PATH = DB_DIR / "blog.db"

# ---- Config ----
CONFIG_PATH = DATA_DIR / "site.yaml"

# ---- Logs ----
LOG_DIR = ROOT / "logs"


# ----- Path Validation -----
def _validate_critical_paths() -> None:
    """
    Warn about missing critical paths.

    Data directories are allowed to be absent so the package can be
    imported before a site has been initialised.
    """
    critical_paths = [
        (ROOT, "project root"),
        (BLOG_DIR, "engine directory"),
        (TEMPLATES_DIR, "templates directory"),
    ]

    missing_paths = []
    for path, description in critical_paths:
        if not path.exists():
            missing_paths.append(f"{description} ({path})")

    if missing_paths:
        print(
            "Warning: Critical paths missing:\n  " + "\n  ".join(missing_paths),
            file=sys.stderr,
        )


_validate_critical_paths()
