#!/usr/bin/env python3
"""
config.py
---------
Site configuration loaded from YAML.

Resolution order for the configuration file:
  1. Explicit path argument (``blog --config``)
  2. BLOG_CONFIG environment variable
  3. data/site.yaml under the project root

A missing file yields the defaults. Values in the file are merged over
the defaults; unknown keys are rejected so typos surface immediately.

Example site.yaml:
    title: "in Code"
    author: "Justin Le"
    entries_per_page: 5
    disqus_shortname: incode
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import yaml

# --- Local imports ---
from blog.core.exceptions import ConfigError, ValidationError
from blog.core.paths import CONFIG_PATH, DB_PATH, LOG_DIR
from blog.core.validators import DataValidator

CONFIG_ENV_VAR = "BLOG_CONFIG"


@dataclass(frozen=True)
class SiteConfig:
    """
    Immutable site settings shared by the web app and the CLI.

    Attributes:
        title: Site title shown in the layout and page titles
        author: Site author
        description: Default meta description
        base_url: Absolute URL of the deployed site (no trailing slash)
        entries_per_page: Entries per home page
        recent_count: Entries in the sidebar "Recent" list
        disqus_shortname: Disqus site name; comments are off when unset
        db_path: SQLite database file
        log_dir: Directory for log files
    """

    title: str = "Scriptorium"
    author: str = "Anonymous"
    description: str = "Weblog"
    base_url: str = "http://localhost:5000"
    entries_per_page: int = 5
    recent_count: int = 5
    disqus_shortname: Optional[str] = None
    db_path: Path = DB_PATH
    log_dir: Path = LOG_DIR

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SiteConfig":
        """
        Build a config from a mapping, validating keys and counts.

        Raises:
            ConfigError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

        values = dict(data)
        try:
            for key in ("entries_per_page", "recent_count"):
                if key in values:
                    values[key] = DataValidator.normalize_positive_int(values[key], key)
        except ValidationError as e:
            raise ConfigError(str(e)) from e

        for key in ("db_path", "log_dir"):
            if values.get(key) is not None:
                values[key] = Path(values[key]).expanduser()

        if "base_url" in values and values["base_url"]:
            values["base_url"] = str(values["base_url"]).rstrip("/")

        return replace(cls(), **values)


def resolve_config_path(path: Optional[Path] = None) -> Path:
    """Return the configuration path to use, following the resolution order."""
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return CONFIG_PATH


def load_config(path: Optional[Path] = None) -> SiteConfig:
    """
    Load site configuration.

    Args:
        path: Optional explicit path to a YAML file

    Returns:
        SiteConfig with file values merged over defaults

    Raises:
        ConfigError: If the file cannot be parsed or contains invalid values
    """
    config_path = resolve_config_path(path)
    if not config_path.is_file():
        return SiteConfig()

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e

    if data is None:
        return SiteConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping")

    return SiteConfig.from_dict(data)
