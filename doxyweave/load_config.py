"""Loading of the YAML configuration file and its defaults."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from doxyweave.deep_merge import deep_merge
from doxyweave.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "verbose": False,
    "output_format": "markdown",
    "base_url": "/api/",
    "workers": 1,
    "render_program_listing": True,
    "render_program_listing_inline": True,
    "suggest_to_do_descriptions": False,
    "sidebar_collections": ["groups", "namespaces", "classes", "files", "pages"],
    "front_matter": {},
}


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not path:
        return config
    p = Path(path)
    if not p.exists():
        logger.warning("Config file %s not found, using defaults.", p)
        return config
    try:
        user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        msg = f"{p}: invalid YAML: {e}"
        raise ConfigError(msg) from e
    if not isinstance(user_config, dict):
        msg = f"{p}: top level must be a mapping"
        raise ConfigError(msg)
    return deep_merge(config, user_config)
