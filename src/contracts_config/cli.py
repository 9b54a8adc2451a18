"""Command-line helpers for contracts-config tooling."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from .composer import ETHERSCAN_KEY, NETWORKS_KEY, ResolvedConfig
from .environment import capture_environment
from .exceptions import ConfigError, MissingBaseFragmentError
from .logging import configure_logging
from .networks import KNOWN_NETWORKS_BY_NAME, LOCAL_NETWORK
from .resolver import resolve_base_path, resolve_config
from .settings import get_settings

MASK = "<masked>"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve and validate the contracts build configuration.",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to the base fragment (defaults to CONTRACTS_CONFIG_BASE_PATH or ./contracts-config.toml).",
    )
    parser.add_argument(
        "--print-resolved",
        action="store_true",
        help="Output the resolved configuration (with secrets masked by default).",
    )
    parser.add_argument(
        "--show-secrets",
        action="store_true",
        help="Include private keys, API keys, and provider-keyed RPC URLs when printing.",
    )
    return parser


def _resolve(config_path: Path | None) -> ResolvedConfig:
    return resolve_config(capture_environment(), base_path=config_path)


def validate_config(config_path: str | None = None) -> None:
    """Resolve the configuration once, raising on a missing or invalid base fragment."""

    path = Path(config_path).expanduser().resolve() if config_path else None
    _resolve(path)


def _mask_secrets(payload: dict[str, Any]) -> dict[str, Any]:
    for name, network in payload.get(NETWORKS_KEY, {}).items():
        network["accounts"] = [MASK for _ in network.get("accounts", [])]

        definition = KNOWN_NETWORKS_BY_NAME.get(name)

        if definition is not None and definition.uses_provider_key:
            network["url"] = MASK

        if name == LOCAL_NETWORK and "forking" in network:
            network["forking"]["url"] = MASK

    api_keys = payload.get(ETHERSCAN_KEY, {}).get("api_key", {})

    for network, key in api_keys.items():
        if key:
            api_keys[network] = MASK

    return payload


def _render_resolved_config(
    resolved: ResolvedConfig,
    *,
    config_path: Path,
    show_secrets: bool,
) -> str:
    payload = resolved.as_dict()

    if not show_secrets:
        payload = _mask_secrets(payload)

    return json.dumps(
        {"config_path": str(config_path), "config": payload},
        indent=2,
        sort_keys=True,
        default=str,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point used by the ``contracts-config`` script."""

    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(get_settings())

    config_path = Path(args.config_path).expanduser().resolve() if args.config_path else None

    try:
        resolved = _resolve(config_path)
    except MissingBaseFragmentError as exc:
        parser.error(f"Config file not found: {exc}")
    except ConfigError as exc:
        parser.error(str(exc))

    if args.print_resolved:
        print(
            _render_resolved_config(
                resolved,
                config_path=config_path or resolve_base_path(),
                show_secrets=args.show_secrets,
            )
        )
        return 0

    print("Configuration OK")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
