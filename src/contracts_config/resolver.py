"""Utilities for resolving the build configuration once per process."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from .compilers import resolve_compiler_set
from .composer import ResolvedConfig, compose, load_base_fragment, resolve_misc_options
from .environment import EnvironmentSnapshot, capture_environment
from .explorer import build_explorer_fragment, unroutable_networks
from .logging import build_log_extra, get_logger, log_duration
from .networks import build_networks
from .settings import get_settings

LOGGER = get_logger(__name__)


def resolve_base_path() -> Path:
    return get_settings().config.resolve_base_path()


def resolve_config(
    env: EnvironmentSnapshot | None = None,
    *,
    base_path: Path | None = None,
) -> ResolvedConfig:
    """Resolve the full configuration from a base fragment and an environment snapshot.

    Args:
        env: Environment snapshot; captured from the process when omitted.
        base_path: Path to the base fragment; taken from settings when omitted.

    Returns:
        The immutable resolved configuration.

    Raises:
        MissingBaseFragmentError: If the base fragment does not exist.
        BaseFragmentError: If the base fragment cannot be parsed.
    """

    snapshot = env if env is not None else capture_environment()

    path = base_path or resolve_base_path()

    with log_duration(
        LOGGER,
        "Resolved contracts configuration.",
        extra=build_log_extra(config_path=str(path)),
    ):
        base = load_base_fragment(path)

        compiler_set = resolve_compiler_set(snapshot)
        networks = build_networks(snapshot)
        explorer = build_explorer_fragment(snapshot)

        resolved = compose(
            base,
            compiler_set,
            networks,
            explorer,
            misc=resolve_misc_options(snapshot),
        )

    for network in sorted(unroutable_networks(explorer)):
        LOGGER.warning(
            "Verification network has no chain entry; verification requests will not be routed.",
            extra=build_log_extra(network=network),
        )

    LOGGER.debug(
        "Configuration summary.",
        extra=build_log_extra(
            additional={
                "compilers": ",".join(compiler_set.versions),
                "networks": len(networks),
                "custom_chains": len(explorer.custom_chains),
                "gas_reporter_enabled": resolved.gas_reporter_enabled,
            }
        ),
    )

    return resolved


@lru_cache(maxsize=1)
def get_resolved_config() -> ResolvedConfig:
    """Return the process-wide resolved configuration, building it on first use."""

    return resolve_config()


def reset_resolved_config_cache() -> None:
    """Clear the cached configuration so the next access resolves again."""

    get_resolved_config.cache_clear()


__all__ = [
    "get_resolved_config",
    "reset_resolved_config_cache",
    "resolve_base_path",
    "resolve_config",
]
