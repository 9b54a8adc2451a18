"""Block explorer verification keys and custom chain descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .environment import EnvironmentSnapshot
from .logging import build_log_extra, get_logger

LOGGER = get_logger(__name__)

ETHERSCAN_KEY_VAR = "ETHERSCAN_API_KEY"
FOGISCAN_KEY_VAR = "FOGISCAN_API_KEY"
NOVA_FOGISCAN_KEY_VAR = "NOVA_FOGISCAN_API_KEY"

# Verification network name -> key variable. Siblings in a family share one key;
# nova is served by its own explorer instance and has a distinct key.
EXPLORER_KEY_FAMILIES: Mapping[str, str] = MappingProxyType(
    {
        "mainnet": ETHERSCAN_KEY_VAR,
        "goerli": ETHERSCAN_KEY_VAR,
        "rinkeby": ETHERSCAN_KEY_VAR,
        "FOGOne": FOGISCAN_KEY_VAR,
        "FOGTestnet": FOGISCAN_KEY_VAR,
        "nova": NOVA_FOGISCAN_KEY_VAR,
        "fogGoerliRollup": FOGISCAN_KEY_VAR,
    }
)

# Chains the verification tool resolves on its own, by network name.
BUILTIN_EXPLORER_CHAINS: Mapping[str, int] = MappingProxyType(
    {
        "mainnet": 1,
        "rinkeby": 4,
        "goerli": 5,
        "FOGOne": 42161,
        "FOGTestnet": 421611,
    }
)


@dataclass(frozen=True, slots=True)
class ExplorerChainEntry:
    network: str

    chain_id: int

    api_url: str

    browser_url: str

    def as_dict(self) -> dict[str, object]:
        return {
            "network": self.network,
            "chain_id": self.chain_id,
            "urls": {"api_url": self.api_url, "browser_url": self.browser_url},
        }


CUSTOM_EXPLORER_CHAINS: tuple[ExplorerChainEntry, ...] = (
    ExplorerChainEntry(
        network="nova",
        chain_id=42170,
        api_url="https://api-nova.fogiscan.io/api",
        browser_url="https://nova.fogiscan.io/",
    ),
    ExplorerChainEntry(
        network="fogGoerliRollup",
        chain_id=421613,
        api_url="https://api-goerli.fogiscan.io/api",
        browser_url="https://goerli.fogiscan.io/",
    ),
)


@dataclass(frozen=True, slots=True)
class ExplorerFragment:
    api_keys: Mapping[str, str]

    custom_chains: tuple[ExplorerChainEntry, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_keys", MappingProxyType(dict(self.api_keys)))
        object.__setattr__(self, "custom_chains", tuple(self.custom_chains))

    def as_dict(self) -> dict[str, object]:
        return {
            "api_key": dict(self.api_keys),
            "custom_chains": [entry.as_dict() for entry in self.custom_chains],
        }


def build_explorer_fragment(env: EnvironmentSnapshot) -> ExplorerFragment:
    """Route each verification network to its family's API key.

    Missing keys resolve to an empty string. Custom chain entries are emitted
    for every keyed network the verification tool does not know natively.
    """

    api_keys: dict[str, str] = {}
    missing_vars: set[str] = set()

    for network, var_name in EXPLORER_KEY_FAMILIES.items():
        key = env.value(var_name)

        if key is None:
            missing_vars.add(var_name)
            key = ""

        api_keys[network] = key

    for var_name in sorted(missing_vars):
        LOGGER.debug(
            "Explorer API key is not set; verification on its networks will be rejected.",
            extra=build_log_extra(variable=var_name),
        )

    custom_chains = tuple(
        entry for entry in CUSTOM_EXPLORER_CHAINS if entry.network in api_keys
    )

    return ExplorerFragment(api_keys=api_keys, custom_chains=custom_chains)


def unroutable_networks(fragment: ExplorerFragment) -> set[str]:
    """Return keyed networks with neither a built-in nor a custom chain entry."""

    custom = {entry.network for entry in fragment.custom_chains}

    return {
        network
        for network in fragment.api_keys
        if network not in BUILTIN_EXPLORER_CHAINS and network not in custom
    }


__all__ = [
    "BUILTIN_EXPLORER_CHAINS",
    "CUSTOM_EXPLORER_CHAINS",
    "ETHERSCAN_KEY_VAR",
    "EXPLORER_KEY_FAMILIES",
    "ExplorerChainEntry",
    "ExplorerFragment",
    "FOGISCAN_KEY_VAR",
    "NOVA_FOGISCAN_KEY_VAR",
    "build_explorer_fragment",
    "unroutable_networks",
]
