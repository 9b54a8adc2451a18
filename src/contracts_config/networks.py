"""Named network endpoints and their signing credentials."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .credentials import resolve_credentials
from .environment import EnvironmentSnapshot
from .logging import build_log_extra, get_logger

LOGGER = get_logger(__name__)

PROVIDER_KEY_VAR = "INFURA_KEY"
FORK_FLAG_VAR = "SHOULD_FORK"
FORK_FLAG_ENABLED_VALUE = "1"

PRODUCTION_SECRET_VAR = "MAINNET_PRIVKEY"
DEVELOPMENT_SECRET_VAR = "DEVNET_PRIVKEY"

LOCAL_NETWORK = "hardhat"
LOCAL_CHAIN_ID = 1338
LOCAL_BLOCK_GAS_LIMIT = 200_000_000
LOCAL_ACCOUNTS_BALANCE = "1000000000000000000000000000"
FORK_SOURCE_NETWORK = "mainnet"


class CredentialTier(str, Enum):
    PRODUCTION = "production"
    DEVELOPMENT = "development"
    NONE = "none"


# Every network in a tier signs with the same secret.
TIER_SECRET_VARS: Mapping[CredentialTier, str] = MappingProxyType(
    {
        CredentialTier.PRODUCTION: PRODUCTION_SECRET_VAR,
        CredentialTier.DEVELOPMENT: DEVELOPMENT_SECRET_VAR,
    }
)


class BehaviorFlag(str, Enum):
    STRICT_TX_FAILURES = "strictTxFailures"
    UNLIMITED_CONTRACT_SIZE = "unlimitedContractSize"
    FORK_ENABLED = "forkEnabled"


@dataclass(frozen=True, slots=True)
class NetworkDefinition:
    """Static description of a network before the environment is applied.

    ``rpc_url`` may contain a ``{provider_key}`` placeholder.
    """

    name: str

    rpc_url: str

    tier: CredentialTier

    chain_id: int | None = None

    @property
    def uses_provider_key(self) -> bool:
        return "{provider_key}" in self.rpc_url

    def render_url(self, provider_key: str) -> str:
        if not self.uses_provider_key:
            return self.rpc_url

        return self.rpc_url.format(provider_key=provider_key)


KNOWN_NETWORKS: tuple[NetworkDefinition, ...] = (
    NetworkDefinition(LOCAL_NETWORK, "http://127.0.0.1:8545", CredentialTier.NONE, chain_id=LOCAL_CHAIN_ID),
    NetworkDefinition("mainnet", "https://mainnet.infura.io/v3/{provider_key}", CredentialTier.PRODUCTION),
    NetworkDefinition("goerli", "https://goerli.infura.io/v3/{provider_key}", CredentialTier.DEVELOPMENT),
    NetworkDefinition("rinkeby", "https://rinkeby.infura.io/v3/{provider_key}", CredentialTier.DEVELOPMENT),
    NetworkDefinition("fogRinkeby", "https://rinkeby.fogr.io/rpc", CredentialTier.DEVELOPMENT),
    NetworkDefinition("fogGoerliRollup", "https://goerli-rollup.fogr.io/rpc", CredentialTier.DEVELOPMENT),
    NetworkDefinition("fog1", "https://fog1.fogr.io/rpc", CredentialTier.PRODUCTION),
    NetworkDefinition("nova", "https://nova.fogr.io/rpc", CredentialTier.PRODUCTION),
    NetworkDefinition("geth", "http://localhost:8545", CredentialTier.NONE),
)

KNOWN_NETWORKS_BY_NAME: Mapping[str, NetworkDefinition] = MappingProxyType(
    {definition.name: definition for definition in KNOWN_NETWORKS}
)


@dataclass(frozen=True, slots=True)
class ForkConfig:
    url: str

    enabled: bool


@dataclass(frozen=True, slots=True)
class NetworkEndpoint:
    name: str

    rpc_url: str

    chain_id: int | None

    credentials: tuple[str, ...]

    behavior_flags: frozenset[BehaviorFlag]

    tier: CredentialTier = CredentialTier.NONE

    fork: ForkConfig | None = None

    block_gas_limit: int | None = None

    accounts_balance: str | None = None

    @property
    def fork_enabled(self) -> bool:
        return BehaviorFlag.FORK_ENABLED in self.behavior_flags

    def as_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "url": self.rpc_url,
            "accounts": list(self.credentials),
        }

        if self.chain_id is not None:
            payload["chain_id"] = self.chain_id

        if self.behavior_flags:
            payload["behavior_flags"] = sorted(flag.value for flag in self.behavior_flags)

        if self.fork is not None:
            payload["forking"] = {"url": self.fork.url, "enabled": self.fork.enabled}

        if self.block_gas_limit is not None:
            payload["block_gas_limit"] = self.block_gas_limit

        if self.accounts_balance is not None:
            payload["accounts_balance"] = self.accounts_balance

        return payload


def fork_enabled(env: EnvironmentSnapshot) -> bool:
    """Return True only when the fork flag is exactly ``"1"``.

    Other truthy spellings such as ``"true"`` or ``"yes"`` leave forking off.
    """

    return env.get(FORK_FLAG_VAR) == FORK_FLAG_ENABLED_VALUE


def credentials_for_tier(tier: CredentialTier, env: EnvironmentSnapshot) -> tuple[str, ...]:
    var_name = TIER_SECRET_VARS.get(tier)

    if var_name is None:
        return ()

    return resolve_credentials(var_name, env)


def build_networks(env: EnvironmentSnapshot) -> Mapping[str, NetworkEndpoint]:
    """Build every known network endpoint from the environment snapshot."""

    provider_key = env.value(PROVIDER_KEY_VAR)

    if provider_key is None:
        LOGGER.warning(
            "Provider key is not set; provider-backed RPC URLs will not authenticate.",
            extra=build_log_extra(variable=PROVIDER_KEY_VAR),
        )
        provider_key = ""

    tier_credentials = {
        tier: credentials_for_tier(tier, env) for tier in CredentialTier
    }

    for tier, var_name in TIER_SECRET_VARS.items():
        if not tier_credentials[tier]:
            LOGGER.debug(
                "No %s credentials configured.",
                tier.value,
                extra=build_log_extra(variable=var_name),
            )

    networks: dict[str, NetworkEndpoint] = {}

    for definition in KNOWN_NETWORKS:
        if definition.name == LOCAL_NETWORK:
            networks[definition.name] = _build_local_network(definition, env, provider_key)
            continue

        networks[definition.name] = NetworkEndpoint(
            name=definition.name,
            rpc_url=definition.render_url(provider_key),
            chain_id=definition.chain_id,
            credentials=tier_credentials[definition.tier],
            behavior_flags=frozenset(),
            tier=definition.tier,
        )

    return MappingProxyType(networks)


def _build_local_network(
    definition: NetworkDefinition,
    env: EnvironmentSnapshot,
    provider_key: str,
) -> NetworkEndpoint:
    fork_url = KNOWN_NETWORKS_BY_NAME[FORK_SOURCE_NETWORK].render_url(provider_key)

    forking = fork_enabled(env)

    flags = {BehaviorFlag.STRICT_TX_FAILURES, BehaviorFlag.UNLIMITED_CONTRACT_SIZE}

    if forking:
        flags.add(BehaviorFlag.FORK_ENABLED)
        LOGGER.info(
            "Local network will fork %s.",
            FORK_SOURCE_NETWORK,
            extra=build_log_extra(network=definition.name, chain_id=definition.chain_id, variable=FORK_FLAG_VAR),
        )

    return NetworkEndpoint(
        name=definition.name,
        rpc_url=definition.rpc_url,
        chain_id=definition.chain_id,
        credentials=(),
        behavior_flags=frozenset(flags),
        tier=definition.tier,
        fork=ForkConfig(url=fork_url, enabled=forking),
        block_gas_limit=LOCAL_BLOCK_GAS_LIMIT,
        accounts_balance=LOCAL_ACCOUNTS_BALANCE,
    )


__all__ = [
    "BehaviorFlag",
    "CredentialTier",
    "DEVELOPMENT_SECRET_VAR",
    "FORK_FLAG_VAR",
    "ForkConfig",
    "KNOWN_NETWORKS",
    "KNOWN_NETWORKS_BY_NAME",
    "LOCAL_NETWORK",
    "NetworkDefinition",
    "NetworkEndpoint",
    "PRODUCTION_SECRET_VAR",
    "PROVIDER_KEY_VAR",
    "build_networks",
    "credentials_for_tier",
    "fork_enabled",
]
