"""Solidity compiler toolchain resolution."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .environment import EnvironmentSnapshot
from .exceptions import ValidationError
from .logging import build_log_extra, get_logger

LOGGER = get_logger(__name__)

PINNED_COMPILER_VERSION = "0.8.9"
OPTIMIZER_ENABLED = True
OPTIMIZER_RUNS = 100

EXTRA_COMPILER_VERSION_VAR = "INTERFACE_TESTER_SOLC_VERSION"
INTERFACE_TESTER_SOURCE = "src/test-helpers/InterfaceCompatibilityTester.sol"


@dataclass(frozen=True, slots=True)
class CompilerSpec:
    version: str

    optimizer_enabled: bool = OPTIMIZER_ENABLED

    optimizer_runs: int = OPTIMIZER_RUNS

    def as_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "settings": {
                "optimizer": {
                    "enabled": self.optimizer_enabled,
                    "runs": self.optimizer_runs,
                },
            },
        }


@dataclass(frozen=True, slots=True)
class CompilerSet:
    """Ordered compiler list plus per-source-file overrides.

    Every override must use a version that is also in ``compilers``.
    """

    compilers: tuple[CompilerSpec, ...]

    overrides: Mapping[str, CompilerSpec]

    def __post_init__(self) -> None:
        if not self.compilers:
            raise ValidationError(
                "CompilerSet requires at least one compiler.",
                config_section="solidity",
                config_key="compilers",
            )

        known_versions = {spec.version for spec in self.compilers}

        for source, spec in self.overrides.items():
            if spec.version not in known_versions:
                raise ValidationError(
                    f"Override for {source} uses compiler {spec.version!r} which is not in the compiler list.",
                    config_section="solidity.overrides",
                    config_key=source,
                    value=spec.version,
                    expected_type=f"one of {sorted(known_versions)}",
                )

        object.__setattr__(self, "compilers", tuple(self.compilers))
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides)))

    @property
    def versions(self) -> tuple[str, ...]:
        return tuple(spec.version for spec in self.compilers)

    def as_dict(self) -> dict[str, object]:
        return {
            "compilers": [spec.as_dict() for spec in self.compilers],
            "overrides": {source: spec.as_dict() for source, spec in self.overrides.items()},
        }


def resolve_compiler_set(env: EnvironmentSnapshot) -> CompilerSet:
    """Build the compiler list, adding the interface tester compiler when requested.

    The extra version string is passed through untouched; the compiler
    toolchain reports malformed versions when it runs.
    """

    pinned = CompilerSpec(version=PINNED_COMPILER_VERSION)

    extra_version = env.value(EXTRA_COMPILER_VERSION_VAR)

    if extra_version is None:
        return CompilerSet(compilers=(pinned,), overrides={})

    extra = CompilerSpec(version=extra_version)

    LOGGER.info(
        "Adding interface tester compiler %s.",
        extra_version,
        extra=build_log_extra(
            variable=EXTRA_COMPILER_VERSION_VAR,
            additional={"source": INTERFACE_TESTER_SOURCE},
        ),
    )

    return CompilerSet(
        compilers=(pinned, extra),
        overrides={INTERFACE_TESTER_SOURCE: extra},
    )


__all__ = [
    "CompilerSet",
    "CompilerSpec",
    "EXTRA_COMPILER_VERSION_VAR",
    "INTERFACE_TESTER_SOURCE",
    "OPTIMIZER_RUNS",
    "PINNED_COMPILER_VERSION",
    "resolve_compiler_set",
]
