"""
Site Commands
-------------

Commands:
    - serve: Run the site with Flask's development server
"""
from __future__ import annotations

import click

from blog.core.config import SiteConfig
from blog.core.logging_manager import handle_cli_error
from blog.site.app import create_app


@click.command("serve")
@click.option("-h", "--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("-p", "--port", type=int, default=5000, show_default=True, help="Port to listen on")
@click.option("--debug", is_flag=True, help="Enable Flask debug mode and reloader")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, debug: bool) -> None:
    """Serve the blog over HTTP."""
    config: SiteConfig = ctx.obj["config"]
    try:
        app = create_app(config, logger=ctx.obj["logger"])
    except Exception as e:
        handle_cli_error(ctx, e, "serve", additional_context={"db_path": str(config.db_path)})
        return

    click.echo(f"🚀 Serving {config.title} on http://{host}:{port}")
    app.run(host=host, port=port, debug=debug)
