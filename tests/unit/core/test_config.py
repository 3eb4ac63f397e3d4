#!/usr/bin/env python3
"""
test_config.py
--------------
Tests for SiteConfig and YAML configuration loading.
"""
from pathlib import Path

import pytest

from blog.core.config import CONFIG_ENV_VAR, SiteConfig, load_config, resolve_config_path
from blog.core.exceptions import ConfigError


class TestSiteConfig:
    """Defaults and validation."""

    def test_defaults(self):
        config = SiteConfig()
        assert config.entries_per_page == 5
        assert config.recent_count == 5
        assert config.disqus_shortname is None

    def test_from_dict_merges(self):
        config = SiteConfig.from_dict({"title": "in Code", "entries_per_page": "3"})
        assert config.title == "in Code"
        assert config.entries_per_page == 3
        assert config.recent_count == 5

    def test_from_dict_normalizes_paths_and_url(self):
        config = SiteConfig.from_dict({"db_path": "~/blog.db", "base_url": "https://blog.example/"})
        assert config.db_path == Path("~/blog.db").expanduser()
        assert config.base_url == "https://blog.example"

    def test_unknown_keys_rejected(self):
        with pytest.raises(ConfigError, match="entries_per_pag"):
            SiteConfig.from_dict({"entries_per_pag": 3})

    @pytest.mark.parametrize("value", [0, -2, "many", True])
    def test_invalid_counts_rejected(self, value):
        with pytest.raises(ConfigError):
            SiteConfig.from_dict({"entries_per_page": value})

    def test_frozen(self):
        with pytest.raises(AttributeError):
            SiteConfig().title = "Changed"


class TestLoadConfig:
    """File resolution and parsing."""

    def test_missing_file_gives_defaults(self, tmp_dir):
        assert load_config(tmp_dir / "absent.yaml") == SiteConfig()

    def test_reads_yaml(self, tmp_dir):
        path = tmp_dir / "site.yaml"
        path.write_text("title: My Blog\ndisqus_shortname: myblog\n", encoding="utf-8")

        config = load_config(path)

        assert config.title == "My Blog"
        assert config.disqus_shortname == "myblog"

    def test_empty_file_gives_defaults(self, tmp_dir):
        path = tmp_dir / "site.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == SiteConfig()

    def test_non_mapping_rejected(self, tmp_dir):
        path = tmp_dir / "site.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_malformed_yaml_rejected(self, tmp_dir):
        path = tmp_dir / "site.yaml"
        path.write_text("title: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_env_var(self, tmp_dir, monkeypatch):
        """BLOG_CONFIG is used when no path is given."""
        path = tmp_dir / "env.yaml"
        path.write_text("title: From Env\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert resolve_config_path() == path
        assert load_config().title == "From Env"

    def test_explicit_path_beats_env(self, tmp_dir, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_dir / "env.yaml"))
        assert resolve_config_path(tmp_dir / "explicit.yaml") == tmp_dir / "explicit.yaml"
