"""Layered YAML configuration."""

from gitx.config.settings import (
    backup_prefix,
    backup_retention_days,
    checkpoint_message,
    get_config,
    get_config_loaded_sources,
    load_config,
    protected_branches,
    recent_limit,
    reload_config,
)

__all__ = [
    "load_config",
    "get_config",
    "reload_config",
    "get_config_loaded_sources",
    "protected_branches",
    "backup_prefix",
    "backup_retention_days",
    "checkpoint_message",
    "recent_limit",
]
