"""Environment-driven build and deploy configuration for the contracts project."""

from .composer import ResolvedConfig
from .resolver import get_resolved_config, reset_resolved_config_cache, resolve_config

__all__ = [
    "ResolvedConfig",
    "get_resolved_config",
    "reset_resolved_config_cache",
    "resolve_config",
]
