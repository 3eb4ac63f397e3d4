"""
Database Commands
-----------------

Commands for creating the entry database and filling it from Markdown.

Commands:
    - init: Create the database schema
    - import: Import Markdown entries and tag descriptions
    - list: List posted entries or drafts
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from blog.core.config import SiteConfig
from blog.core.logging_manager import BlogLogger, handle_cli_error
from blog.core.paths import ENTRIES_DIR, TAGS_FILE
from blog.database.manager import BlogDB
from blog.pipeline.md2sql import import_directory
from blog.site.filters import datetime_attr


def _open_db(ctx: click.Context) -> BlogDB:
    config: SiteConfig = ctx.obj["config"]
    return BlogDB(db_path=config.db_path, logger=ctx.obj["logger"])


@click.command("init")
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create the database schema (safe to re-run)."""
    config: SiteConfig = ctx.obj["config"]
    try:
        db = _open_db(ctx)
        db.dispose()
        click.echo(f"✅ Database ready: {config.db_path}")
    except Exception as e:
        handle_cli_error(ctx, e, "init", additional_context={"db_path": str(config.db_path)})


@click.command("import")
@click.argument(
    "directory",
    type=click.Path(file_okay=False),
    default=str(ENTRIES_DIR),
)
@click.option("-f", "--force", is_flag=True, help="Re-import unchanged files")
@click.option(
    "-t",
    "--tags-file",
    type=click.Path(dir_okay=False),
    default=str(TAGS_FILE),
    help="YAML file of tag, category and series descriptions",
)
@click.pass_context
def import_entries(ctx: click.Context, directory: str, force: bool, tags_file: str) -> None:
    """Import Markdown entries from DIRECTORY into the database."""
    logger: BlogLogger = ctx.obj["logger"]

    click.echo(f"🔄 Importing entries from {directory}...")
    try:
        db = _open_db(ctx)
        stats = import_directory(
            db, Path(directory), force=force, logger=logger, tags_file=Path(tags_file)
        )
        db.dispose()
    except Exception as e:
        handle_cli_error(ctx, e, "import", additional_context={"directory": directory})
        return

    click.echo("\n✅ Import complete:")
    click.echo(f"  Files processed: {stats.files_processed}")
    click.echo(f"  Entries created: {stats.entries_created}")
    click.echo(f"  Entries updated: {stats.entries_updated}")
    click.echo(f"  Entries skipped: {stats.entries_skipped}")
    if stats.tags_described:
        click.echo(f"  Tag descriptions: {stats.tags_described}")
    if stats.errors:
        click.echo(f"  ⚠️  Errors: {stats.errors} (see logs)")
    click.echo(f"  Duration: {stats.duration():.2f}s")

    if stats.errors:
        ctx.exit(1)


@click.command("list")
@click.option("-d", "--drafts", is_flag=True, help="List drafts and scheduled entries")
@click.option("-n", "--limit", type=click.IntRange(min=1), default=None, help="Maximum entries")
@click.pass_context
def list_entries(ctx: click.Context, drafts: bool, limit: Optional[int]) -> None:
    """List posted entries, newest first."""
    try:
        db = _open_db(ctx)
        with db.session_scope():
            entries = db.entries.drafts() if drafts else db.entries.all_posted()
            if limit is not None:
                entries = entries[:limit]
            lines = [
                f"{entry.id:>5}  {datetime_attr(entry.posted_at) or 'draft':<20}  "
                f"{entry.url}  {entry.title}"
                for entry in entries
            ]
        db.dispose()
    except Exception as e:
        handle_cli_error(ctx, e, "list")
        return

    if not lines:
        click.echo("No drafts found." if drafts else "No entries found.")
        return
    for line in lines:
        click.echo(line)
