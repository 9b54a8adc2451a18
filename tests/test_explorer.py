import pytest

from contracts_config.environment import EnvironmentSnapshot
from contracts_config.explorer import (
    BUILTIN_EXPLORER_CHAINS,
    EXPLORER_KEY_FAMILIES,
    ExplorerChainEntry,
    ExplorerFragment,
    build_explorer_fragment,
    unroutable_networks,
)

ETHERSCAN_NETWORKS = {"mainnet", "goerli", "rinkeby"}
FOGISCAN_NETWORKS = {"FOGOne", "FOGTestnet", "fogGoerliRollup"}


def test_keys_are_routed_by_family() -> None:
    fragment = build_explorer_fragment(
        EnvironmentSnapshot(
            {
                "ETHERSCAN_API_KEY": "eth-key",
                "FOGISCAN_API_KEY": "fog-key",
                "NOVA_FOGISCAN_API_KEY": "nova-key",
            }
        )
    )

    for network in ETHERSCAN_NETWORKS:
        assert fragment.api_keys[network] == "eth-key"

    for network in FOGISCAN_NETWORKS:
        assert fragment.api_keys[network] == "fog-key"

    assert fragment.api_keys["nova"] == "nova-key"


def test_nova_does_not_share_the_fogiscan_key() -> None:
    fragment = build_explorer_fragment(EnvironmentSnapshot({"FOGISCAN_API_KEY": "fog-key"}))

    assert fragment.api_keys["nova"] == ""
    assert fragment.api_keys["FOGOne"] == "fog-key"


def test_missing_keys_degrade_to_empty(empty_env: EnvironmentSnapshot) -> None:
    fragment = build_explorer_fragment(empty_env)

    assert set(fragment.api_keys) == set(EXPLORER_KEY_FAMILIES)
    assert all(key == "" for key in fragment.api_keys.values())


def test_family_grouping_uses_three_variables() -> None:
    assert set(EXPLORER_KEY_FAMILIES.values()) == {
        "ETHERSCAN_API_KEY",
        "FOGISCAN_API_KEY",
        "NOVA_FOGISCAN_API_KEY",
    }


def test_custom_chains_cover_unknown_networks(empty_env: EnvironmentSnapshot) -> None:
    fragment = build_explorer_fragment(empty_env)

    assert [entry.network for entry in fragment.custom_chains] == ["nova", "fogGoerliRollup"]

    nova = fragment.custom_chains[0]

    assert nova == ExplorerChainEntry(
        network="nova",
        chain_id=42170,
        api_url="https://api-nova.fogiscan.io/api",
        browser_url="https://nova.fogiscan.io/",
    )


@pytest.mark.parametrize(
    "variables",
    [
        {},
        {"ETHERSCAN_API_KEY": "eth-key"},
        {"FOGISCAN_API_KEY": "fog-key", "NOVA_FOGISCAN_API_KEY": "nova-key"},
    ],
)
def test_every_keyed_network_is_routable(variables: dict[str, str]) -> None:
    fragment = build_explorer_fragment(EnvironmentSnapshot(variables))

    unknown = {network for network in fragment.api_keys if network not in BUILTIN_EXPLORER_CHAINS}
    custom = {entry.network for entry in fragment.custom_chains}

    assert unknown <= custom
    assert unroutable_networks(fragment) == set()


def test_unroutable_networks_detects_missing_entry() -> None:
    fragment = ExplorerFragment(api_keys={"mainnet": "k", "nova": "k"}, custom_chains=())

    assert unroutable_networks(fragment) == {"nova"}


def test_custom_chain_ids_do_not_shadow_builtin_chains() -> None:
    fragment = build_explorer_fragment(EnvironmentSnapshot({}))

    builtin_ids = set(BUILTIN_EXPLORER_CHAINS.values())

    assert all(entry.chain_id not in builtin_ids for entry in fragment.custom_chains)
    assert all(entry.network not in BUILTIN_EXPLORER_CHAINS for entry in fragment.custom_chains)
