"""
Application configuration.

Defaults ship with the package in defaults.json. A user config.json in the
config directory overrides them section by section.
"""

import os
import json
import copy
import logging
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

DEFAULTS_FILE = Path(__file__).parent / "defaults.json"

_config_cache: Optional[Dict[str, Any]] = None


def get_config_directory() -> Path:
    """Get the config directory path."""
    config_dir = os.environ.get('DEVTOOLKIT_CONFIG_DIR')
    if config_dir:
        return Path(config_dir)

    # Default to ~/.config/dev-toolkit
    return Path.home() / '.config' / 'dev-toolkit'


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level must be an object", path)
        return {}
    return data


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config() -> Dict[str, Any]:
    """Load defaults merged with the user's config.json (cached)."""
    global _config_cache
    if _config_cache is not None:
        return _config_cache

    config = _read_json(DEFAULTS_FILE) if DEFAULTS_FILE.exists() else {}
    user_file = get_config_directory() / "config.json"
    if user_file.exists():
        config = _merge(config, _read_json(user_file))
        logger.debug("Loaded user config from %s", user_file)

    _config_cache = config
    return config


def reload_config() -> Dict[str, Any]:
    """Drop the cached config and read it again."""
    global _config_cache
    _config_cache = None
    return load_config()


def get_section(name: str) -> Dict[str, Any]:
    """Return one top-level config section, empty if missing."""
    section = load_config().get(name, {})
    return section if isinstance(section, dict) else {}


def is_tool_enabled(tool_id: str) -> bool:
    """Check if a tool is enabled in config. Defaults to True if not specified."""
    tool_conf = get_section('tools').get(tool_id, {})
    return tool_conf.get('enabled', True)
