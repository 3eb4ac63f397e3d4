#!/usr/bin/env python3
"""
renderer.py
-----------
Jinja2 template engine for site pages.

Configures the Jinja2 environment with the site filters and template
loading. Supports both filesystem-based templates (production) and
dict-based templates (testing). Autoescaping is always on; fragments
rendered by one template and embedded in another are returned as
``Markup`` so they are not escaped twice.

Usage:
    from blog.site.renderer import SiteRenderer

    # Production: loads from blog/site/templates/
    renderer = SiteRenderer()
    html = renderer.render("entry.jinja2", context)

    # Testing: supply templates as dict
    renderer = SiteRenderer(templates={"test.jinja2": "Hello {{ name }}"})
    html = renderer.render("test.jinja2", {"name": "World"})

Dependencies:
    - jinja2>=3.1.0
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third-party imports ---
from jinja2 import BaseLoader, DictLoader, Environment, FileSystemLoader
from markupsafe import Markup

# --- Local imports ---
from blog.core.paths import TEMPLATES_DIR
from blog.site import filters as site_filters


class SiteRenderer:
    """
    Jinja2-based HTML renderer.

    Attributes:
        env: Configured Jinja2 Environment instance
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        templates: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize the site renderer.

        Provide either a filesystem templates directory or a dict of
        template strings. If neither is provided, defaults to the
        package's templates directory.

        Args:
            templates_dir: Path to templates directory (FileSystemLoader)
            templates: Dict of template_name → template_string (DictLoader)

        Raises:
            ValueError: If both templates_dir and templates are provided
        """
        if templates_dir and templates:
            raise ValueError("Provide either templates_dir or templates, not both")

        loader: BaseLoader
        if templates is not None:
            loader = DictLoader(templates)
        elif templates_dir is not None:
            loader = FileSystemLoader(str(templates_dir))
        else:
            loader = FileSystemLoader(str(TEMPLATES_DIR))

        self.env = Environment(
            loader=loader,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self._register_filters()

    def _register_filters(self) -> None:
        """Register the site filters for use as ``{{ value | filter_name }}``."""
        self.env.filters["friendly_time"] = site_filters.friendly_time
        self.env.filters["datetime_attr"] = site_filters.datetime_attr
        self.env.filters["year_path"] = site_filters.year_path
        self.env.filters["comments_url"] = site_filters.comments_url
        self.env.filters["page_path"] = site_filters.page_path

        self.env.globals["month_display"] = site_filters.month_display
        self.env.globals["month_path"] = site_filters.month_path

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Template path relative to templates root
            context: Template variables

        Returns:
            Rendered HTML string
        """
        template = self.env.get_template(template_name)
        return template.render(**context)

    def render_fragment(self, template_name: str, context: Dict[str, Any]) -> Markup:
        """Render a template as safe markup for embedding in another page."""
        return Markup(self.render(template_name, context))
