#!/usr/bin/env python3
"""
app.py
------
Flask application factory for the blog site.

Every view function opens a short-lived read session, builds a
SiteContext, calls a handler from ``blog.site.routes`` and passes the
result through ``route_either``. Nothing is cached or shared between
requests besides the database engine and the renderer, both read-only.

Usage:
    from blog.site.app import create_app

    app = create_app()                      # config from BLOG_CONFIG / data/site.yaml
    app = create_app(config, db=BlogDB())   # tests: in-memory database

Dependencies:
    - flask>=3.0
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Any, Callable, Optional

# --- Third-party imports ---
from flask import Flask, Response, current_app, redirect, request
from werkzeug.exceptions import NotFound

# --- Local imports ---
from blog.core.config import SiteConfig, load_config
from blog.core.logging_manager import BlogLogger, safe_logger
from blog.database.manager import BlogDB
from blog.database.managers import EntryManager, TagManager
from blog.database.models import TagKind
from blog.site import routes
from blog.site.archive import ArchiveAll
from blog.site.renderer import SiteRenderer
from blog.site.routes import NOT_FOUND_PATH, Page, Redirect, RouteResult, SiteContext

EXTENSION_KEY = "blog"


@dataclass
class SiteState:
    """Per-application objects shared read-only by every request."""
    config: SiteConfig
    db: BlogDB
    renderer: SiteRenderer
    logger: BlogLogger


def route_either(result: RouteResult, state: SiteState) -> Response:
    """
    Convert a handler result into an HTTP response.

    A Redirect becomes a 302; a Page is wrapped in the site layout and
    served with its status code.
    """
    if isinstance(result, Redirect):
        return redirect(result.target)
    if isinstance(result, Page):
        html = state.renderer.render(
            "layout.jinja2",
            {
                "site": state.config,
                "body": result.body,
                "page_title": result.data.title,
                "page_description": result.data.description,
                "canonical_url": result.data.canonical_url,
            },
        )
        return Response(html, status=result.data.status, mimetype="text/html")
    raise TypeError(f"Unknown route result: {result!r}")


def dispatch(handler: Callable[..., RouteResult], *args: Any) -> Response:
    """Run a handler inside a fresh read session and convert its result."""
    state: SiteState = current_app.extensions[EXTENSION_KEY]
    state.logger.log_request(handler.__name__, args)
    with state.db.read_session() as session:
        ctx = SiteContext(
            config=state.config,
            renderer=state.renderer,
            entries=EntryManager(session, state.logger),
            tags=TagManager(session, state.logger),
            logger=state.logger,
        )
        try:
            result = handler(ctx, *args)
            return route_either(result, state)
        except Exception as e:
            state.logger.log_request_error(e, handler.__name__)
            raise


def create_app(
    config: Optional[SiteConfig] = None,
    db: Optional[BlogDB] = None,
    logger: Optional[BlogLogger] = None,
    renderer: Optional[SiteRenderer] = None,
) -> Flask:
    """
    Build the Flask application.

    Args:
        config: Site configuration; loaded from file when None
        db: Entry database; opened from ``config.db_path`` when None
        logger: Logger for request handling; silent when None
        renderer: Template renderer; package templates when None

    Returns:
        Configured Flask app
    """
    config = config or load_config()
    logger = safe_logger(logger)
    if db is None:
        db = BlogDB(db_path=config.db_path, logger=logger)

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = SiteState(
        config=config,
        db=db,
        renderer=renderer or SiteRenderer(),
        logger=logger,
    )

    # ---- Home ----
    @app.route("/")
    def home() -> Response:
        return dispatch(routes.route_home, 1)

    @app.route("/home")
    @app.route("/home/1")
    def home_first() -> Response:
        return redirect("/")

    @app.route("/home/<int:page>")
    def home_page(page: int) -> Response:
        return dispatch(routes.route_home, page)

    # ---- Short links ----
    @app.route("/e/<ident>")
    def legacy_entry(ident: str) -> Response:
        return route_either(routes.route_legacy_entry(ident), current_app.extensions[EXTENSION_KEY])

    @app.route("/e/id/<ident>")
    @app.route("/id/e/<ident>")
    def legacy_entry_id(ident: str) -> Response:
        return route_either(routes.route_legacy_entry_id(ident), current_app.extensions[EXTENSION_KEY])

    # ---- Entries ----
    @app.route("/entry/id/<int:entry_id>")
    def entry_by_id(entry_id: int) -> Response:
        return dispatch(routes.route_entry_id, entry_id)

    @app.route("/entry/<slug>")
    def entry_by_slug(slug: str) -> Response:
        return dispatch(routes.route_entry_slug, slug)

    # ---- Archives ----
    @app.route("/entries")
    def archive_all() -> Response:
        return dispatch(routes.route_archive, ArchiveAll())

    @app.route("/entries/in/<int:year>")
    def archive_year(year: int) -> Response:
        return dispatch(routes.route_archive_year, year)

    @app.route("/entries/in/<int:year>/<int:month>")
    def archive_month(year: int, month: int) -> Response:
        return dispatch(routes.route_archive_month, year, month)

    for kind in TagKind:
        _register_tag_routes(app, kind)

    # ---- Not found ----
    @app.route(NOT_FOUND_PATH)
    def not_found_page() -> Response:
        return dispatch(routes.route_not_found)

    @app.errorhandler(NotFound)
    def unmatched(error: NotFound) -> Response:
        logger.log_not_found("unmatched path", {"path": request.path})
        return redirect(NOT_FOUND_PATH)

    logger.log_operation("app_created", {"db_url": db.db_url, "title": config.title})
    return app


def _register_tag_routes(app: Flask, kind: TagKind) -> None:
    """Index and per-tag archive routes for one tag kind."""
    index_path = kind.index_path

    def tag_index() -> Response:
        return dispatch(routes.route_tag_index, kind)

    def tag_archive(slug: str) -> Response:
        return dispatch(routes.route_archive_tag, kind, slug)

    app.add_url_rule(index_path, f"{kind.value}_index", tag_index)
    app.add_url_rule(f"{index_path}/<slug>", f"{kind.value}_archive", tag_archive)
