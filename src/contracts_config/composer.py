"""Merging the static base fragment with environment-derived fragments."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .compilers import CompilerSet
from .environment import EnvironmentSnapshot
from .exceptions import BaseFragmentError, MissingBaseFragmentError
from .explorer import ExplorerChainEntry, ExplorerFragment
from .networks import NetworkEndpoint

GAS_REPORTER_DISABLE_VAR = "DISABLE_GAS_REPORTER"

# Top-level keys owned by dynamic fragments; they replace base values wholesale.
SOLIDITY_KEY = "solidity"
NETWORKS_KEY = "networks"
ETHERSCAN_KEY = "etherscan"
GAS_REPORTER_KEY = "gas_reporter"

STRUCTURAL_KEYS = frozenset({SOLIDITY_KEY, NETWORKS_KEY, ETHERSCAN_KEY})


@dataclass(frozen=True, slots=True)
class ResolvedConfig:
    """Fully resolved build and deploy configuration.

    Built once per process from one environment snapshot and never mutated.
    """

    compiler_set: CompilerSet

    networks: Mapping[str, NetworkEndpoint]

    explorer_api_keys: Mapping[str, str]

    explorer_custom_chains: tuple[ExplorerChainEntry, ...]

    misc_options: Mapping[str, Any]

    @property
    def gas_reporter_enabled(self) -> bool:
        gas_reporter = self.misc_options.get(GAS_REPORTER_KEY, {})

        return bool(gas_reporter.get("enabled", True))

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {key: _thaw(value) for key, value in self.misc_options.items()}

        payload[SOLIDITY_KEY] = self.compiler_set.as_dict()
        payload[NETWORKS_KEY] = {name: endpoint.as_dict() for name, endpoint in self.networks.items()}
        payload[ETHERSCAN_KEY] = ExplorerFragment(
            api_keys=self.explorer_api_keys,
            custom_chains=self.explorer_custom_chains,
        ).as_dict()

        return payload


def load_base_fragment(path: Path) -> Mapping[str, Any]:
    """Read the static base fragment from a TOML file.

    Raises:
        MissingBaseFragmentError: If the file does not exist.
        BaseFragmentError: If the file cannot be read or is not valid UTF-8 TOML.
    """

    if not path.is_file():
        raise MissingBaseFragmentError(
            f"Base configuration fragment not found at {path}.",
            config_file=str(path),
        )

    try:
        data = _read_toml(path)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise BaseFragmentError(
            f"Base configuration fragment at {path} is not valid TOML: {exc}",
            config_file=str(path),
        ) from exc
    except OSError as exc:
        raise BaseFragmentError(
            f"Base configuration fragment at {path} could not be read: {exc}",
            config_file=str(path),
        ) from exc

    return _freeze(data)


def resolve_misc_options(env: EnvironmentSnapshot) -> Mapping[str, Any]:
    """Return options derived from flags that do not affect structure.

    Any non-empty value of the gas reporter flag disables the reporter.
    """

    return _freeze(
        {
            GAS_REPORTER_KEY: {"enabled": not env.is_set(GAS_REPORTER_DISABLE_VAR)},
        }
    )


def compose(
    base: Mapping[str, Any],
    compiler_set: CompilerSet,
    networks: Mapping[str, NetworkEndpoint],
    explorer: ExplorerFragment,
    *,
    misc: Mapping[str, Any] | None = None,
) -> ResolvedConfig:
    """Shallow-merge the dynamic fragments over the base fragment.

    Dynamic fragments are complete for the keys they own, so a shared
    top-level key takes the dynamic value as-is with no deep merge.
    """

    merged: dict[str, Any] = dict(base)
    merged.update(misc or {})

    merged[SOLIDITY_KEY] = compiler_set
    merged[NETWORKS_KEY] = MappingProxyType(dict(networks))
    merged[ETHERSCAN_KEY] = explorer

    misc_options = {
        key: value
        for key, value in merged.items()
        if key not in STRUCTURAL_KEYS
    }

    return ResolvedConfig(
        compiler_set=merged[SOLIDITY_KEY],
        networks=merged[NETWORKS_KEY],
        explorer_api_keys=explorer.api_keys,
        explorer_custom_chains=explorer.custom_chains,
        misc_options=_freeze(misc_options),
    )


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as file:
        return tomllib.load(file)


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})

    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)

    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}

    if isinstance(value, tuple):
        return [_thaw(item) for item in value]

    return value


__all__ = [
    "GAS_REPORTER_DISABLE_VAR",
    "ResolvedConfig",
    "compose",
    "load_base_fragment",
    "resolve_misc_options",
]
