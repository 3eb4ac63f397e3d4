#!/usr/bin/env python3
"""
Blog CLI
--------

Command-line interface for managing and serving the blog.

Command Groups:
    - Database: init, import, list
    - Site: serve

Usage:
    # Create the database schema
    blog init

    # Import markdown entries (and tag descriptions)
    blog import data/entries
    blog import --force

    # Inspect entries
    blog list --limit 10
    blog list --drafts

    # Serve the site
    blog serve --port 8000
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from blog.core.cli import setup_logger
from blog.core.config import load_config
from blog.core.exceptions import ConfigError


@click.group()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Site configuration file (default: $BLOG_CONFIG or data/site.yaml)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for log files (default: from configuration)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(
    ctx: click.Context, config_path: Optional[str], log_dir: Optional[str], verbose: bool
) -> None:
    """Scriptorium blog engine"""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        click.echo(f"❌ ConfigError: {e}", err=True)
        ctx.exit(1)

    ctx.obj["config"] = config
    ctx.obj["log_dir"] = Path(log_dir) if log_dir else config.log_dir
    ctx.obj["logger"] = setup_logger(ctx.obj["log_dir"], "blog")


# Import and register commands from submodules
from .database import init, import_entries, list_entries  # noqa: E402
from .site import serve  # noqa: E402

cli.add_command(init)
cli.add_command(import_entries)
cli.add_command(list_entries)
cli.add_command(serve)


if __name__ == "__main__":
    cli(obj={})
