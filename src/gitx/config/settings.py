"""Layered config loading.

Priority chain: bundled defaults < ~/.config/git-x/config.yaml < .git-x/config.yaml
Dicts merge recursively; lists and scalars from the higher layer replace.
"""

import importlib.resources
from pathlib import Path
from typing import Any, Optional

import yaml

from gitx.exceptions import ValidationError

_config: Optional[dict] = None
_loaded_sources: list[str] = []

GLOBAL_CONFIG = Path.home() / ".config" / "git-x" / "config.yaml"
PROJECT_CONFIG = Path(".git-x") / "config.yaml"


def deep_merge(base: dict, override: dict) -> dict:
    """Return a new dict with override layered on top of base."""
    merged = dict(base)
    for key, val in override.items():
        current = merged.get(key)
        merged[key] = (
            deep_merge(current, val) if isinstance(current, dict) and isinstance(val, dict) else val
        )
    return merged


def load_yaml(path: Path) -> Optional[dict]:
    """Load a YAML mapping. Missing, empty or non-mapping files yield None."""
    if not path.exists():
        return None
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in {path}: {e}", rule="config") from e
    return data if isinstance(data, dict) else None


def _load_defaults() -> dict:
    """Load the bundled default config."""
    try:
        content = (importlib.resources.files("gitx") / "defaults" / "config.yaml").read_text()
    except (FileNotFoundError, TypeError):
        dev_path = Path(__file__).parent.parent / "defaults" / "config.yaml"
        if not dev_path.exists():
            raise FileNotFoundError("Could not find defaults/config.yaml") from None
        content = dev_path.read_text()
    return yaml.safe_load(content) or {}


def load_config() -> dict:
    """Load config with layered overrides: defaults < global < project."""
    global _loaded_sources
    _loaded_sources = ["defaults"]
    result = _load_defaults()

    for path in (GLOBAL_CONFIG, PROJECT_CONFIG):
        overrides = load_yaml(path)
        if overrides:
            result = deep_merge(result, overrides)
            _loaded_sources.append(str(path))

    return result


def get_config() -> dict:
    """Get cached config (loads on first access)."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> dict:
    """Force reload config."""
    global _config
    _config = load_config()
    return _config


def get_config_loaded_sources() -> list[str]:
    """Config sources that were loaded, lowest priority first."""
    return _loaded_sources


def _section(config: dict, name: str) -> dict:
    value = config.get(name) or {}
    if not isinstance(value, dict):
        raise ValidationError(f"Config section '{name}' must be a mapping", rule="config")
    return value


def _non_negative_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"Config key '{key}' must be a non-negative integer", rule="config")
    return value


def protected_branches(config: Optional[dict] = None) -> list[str]:
    cfg = get_config() if config is None else config
    names = cfg.get("protected_branches") or []
    if not isinstance(names, list):
        raise ValidationError("Config key 'protected_branches' must be a list", rule="config")
    return [str(n) for n in names]


def backup_prefix(config: Optional[dict] = None) -> str:
    cfg = get_config() if config is None else config
    return str(_section(cfg, "backup").get("prefix") or "backup")


def backup_retention_days(config: Optional[dict] = None) -> int:
    cfg = get_config() if config is None else config
    return _non_negative_int(_section(cfg, "backup").get("retention_days", 30), "backup.retention_days")


def checkpoint_message(config: Optional[dict] = None) -> str:
    cfg = get_config() if config is None else config
    return str(_section(cfg, "checkpoint").get("message") or "git-x safety checkpoint")


def recent_limit(config: Optional[dict] = None) -> int:
    cfg = get_config() if config is None else config
    return _non_negative_int(_section(cfg, "recent").get("limit", 10), "recent.limit")
