#!/usr/bin/env python3
"""
test_renderer.py
----------------
Tests for the Jinja2 site renderer.
"""
import pytest
from markupsafe import Markup

from blog.site.renderer import SiteRenderer


class TestSiteRenderer:
    """Environment configuration and loaders."""

    def test_dict_templates(self):
        """Dict templates are rendered with the given context."""
        renderer = SiteRenderer(templates={"t.jinja2": "Hello {{ name }}"})
        assert renderer.render("t.jinja2", {"name": "World"}) == "Hello World"

    def test_autoescape(self):
        """Context values are escaped."""
        renderer = SiteRenderer(templates={"t.jinja2": "{{ v }}"})
        assert renderer.render("t.jinja2", {"v": "<b>"}) == "&lt;b&gt;"

    def test_fragment_is_markup(self):
        """Fragments embed without double escaping."""
        renderer = SiteRenderer(templates={"inner": "<i>{{ v }}</i>", "outer": "<p>{{ body }}</p>"})
        inner = renderer.render_fragment("inner", {"v": "x"})
        assert isinstance(inner, Markup)
        assert renderer.render("outer", {"body": inner}) == "<p><i>x</i></p>"

    def test_filters_registered(self):
        """Site filters are available to templates."""
        renderer = SiteRenderer(templates={"t": "{{ 2020 | year_path }} {{ month_path(2020, 3) }}"})
        assert renderer.render("t", {}) == "/entries/in/2020 /entries/in/2020/03"

    def test_both_sources_rejected(self, tmp_dir):
        """A directory and a dict cannot both be given."""
        with pytest.raises(ValueError):
            SiteRenderer(templates_dir=tmp_dir, templates={"t": ""})

    def test_package_templates_load(self, renderer):
        """The default loader finds the packaged templates."""
        for name in ("layout.jinja2", "archive.jinja2", "sidebar.jinja2", "home.jinja2",
                     "entry.jinja2", "tag_index.jinja2", "not_found.jinja2"):
            assert renderer.env.get_template(name) is not None
