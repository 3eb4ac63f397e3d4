#!/usr/bin/env python3
"""
cli.py
------
Shared CLI utilities and statistics for blog commands.

Functions:
    setup_logger: Initialize BlogLogger for CLI operations

Classes:
    OperationStats: Base class for all statistics
    ImportStats: For markdown → database imports

Usage:
    from blog.core.cli import setup_logger, ImportStats

    logger = setup_logger(log_dir, "import")
    stats = ImportStats()
    stats.entries_created += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

# --- Local imports ---
from blog.core.logging_manager import BlogLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str) -> BlogLogger:
    """
    Setup logging for CLI operations.

    Args:
        log_dir: Base log directory (typically SiteConfig.log_dir)
        component_name: Component identifier for logging (e.g., 'import', 'site')

    Returns:
        Configured BlogLogger writing under ``log_dir/operations``
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return BlogLogger(operations_log_dir, component_name=component_name)


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS CLASSES
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OperationStats:
    """
    Base class for CLI operation statistics.

    Attributes:
        files_processed: Number of files successfully processed
        errors: Number of errors encountered
        start_time: Operation start timestamp
    """
    files_processed: int = 0
    errors: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate statistics on initialization."""
        if self.files_processed < 0:
            raise ValueError(f"files_processed must be non-negative, got {self.files_processed}")
        if self.errors < 0:
            raise ValueError(f"errors must be non-negative, got {self.errors}")

    def duration(self) -> float:
        """Seconds elapsed since start_time (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        """Human-readable summary of operation statistics."""
        return (
            f"{self.files_processed} files processed, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for log details."""
        return {
            "files_processed": self.files_processed,
            "errors": self.errors,
            "duration": self.duration(),
        }


@dataclass
class ImportStats(OperationStats):
    """
    Statistics for entry imports.

    Attributes:
        entries_created: Number of new entries created
        entries_updated: Number of existing entries updated
        entries_skipped: Number of entries skipped (unchanged source)
        tags_described: Number of tag descriptions applied
    """
    entries_created: int = 0
    entries_updated: int = 0
    entries_skipped: int = 0
    tags_described: int = 0

    def record(self, status: str) -> None:
        """Count one processed file by its import status."""
        self.files_processed += 1
        if status == "created":
            self.entries_created += 1
        elif status == "updated":
            self.entries_updated += 1
        elif status == "skipped":
            self.entries_skipped += 1
        else:
            raise ValueError(f"Unknown import status: {status!r}")

    def summary(self) -> str:
        """Formatted summary with entry metrics."""
        parts = [
            f"{self.files_processed} files processed",
            f"{self.entries_created} created",
            f"{self.entries_updated} updated",
            f"{self.entries_skipped} skipped",
        ]
        if self.tags_described:
            parts.append(f"{self.tags_described} tag descriptions")
        parts.append(f"{self.errors} errors")
        parts.append(f"{self.duration():.2f}s")
        return ", ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with entry metrics."""
        d = super().to_dict()
        d.update({
            "entries_created": self.entries_created,
            "entries_updated": self.entries_updated,
            "entries_skipped": self.entries_skipped,
            "tags_described": self.tags_described,
        })
        return d
