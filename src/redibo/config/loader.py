from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("redibo.config.yaml")

BASE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "api": {
        "base_url": "http://localhost:4000",
        "timeout_seconds": 20,
    },
    "listing": {
        "comments_page_size": 4,
        "max_page_links": 5,
    },
    "credentials": {
        "path": "~/.redibo/credentials.yaml",
    },
}


def _merge_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay user sections on the built-in defaults, one level deep."""
    merged = deepcopy(BASE_DEFAULTS)
    for section, values in config.items():
        if section in merged:
            if values is None:
                continue
            if not isinstance(values, dict):
                raise ValueError(f"Config section '{section}' must be a dictionary")
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def _validate(config: Dict[str, Any]) -> None:
    listing = config["listing"]
    for key in ("comments_page_size", "max_page_links"):
        value = listing.get(key)
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValueError(f"listing.{key} must be a positive integer, got {value!r}")

    api = config["api"]
    if not api.get("base_url"):
        raise ValueError("api.base_url must be set")
    timeout = api.get("timeout_seconds")
    if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0:
        raise ValueError(f"api.timeout_seconds must be a positive number, got {timeout!r}")


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load redibo configuration from YAML, merged over built-in defaults.

    Args:
        path: Optional config path. Defaults to ./redibo.config.yaml, which
            may be absent (defaults are used then).

    Returns:
        Configuration dict with ``api``, ``listing`` and ``credentials`` sections

    Raises:
        FileNotFoundError: If an explicitly requested file doesn't exist
        ValueError: If the file is not a mapping or a value is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        config: Dict[str, Any] = {}
    else:
        with cfg_path.open("r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")

    merged = _merge_defaults(config)
    _validate(merged)
    return merged


def get_credentials_path(config: Dict[str, Any]) -> Path:
    return Path(config["credentials"]["path"]).expanduser()
