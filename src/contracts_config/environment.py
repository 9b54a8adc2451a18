"""Read-only snapshot of the process environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

from dotenv import load_dotenv

DEFAULT_ENV_PATH = Path.cwd().joinpath(".env").resolve()


@dataclass(frozen=True, eq=False)
class EnvironmentSnapshot(Mapping[str, str]):
    """Immutable copy of environment variables taken once at startup.

    Resolvers read every optional fact through this object so that
    resolution is a pure function of the snapshot.
    """

    variables: Mapping[str, str] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    def __getitem__(self, name: str) -> str:
        return self.variables[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.variables)

    def value(self, name: str) -> str | None:
        """Return the variable's value, or None when it is absent or empty."""

        raw = self.variables.get(name)

        if raw is None or raw == "":
            return None

        return raw

    def is_set(self, name: str) -> bool:
        return self.value(name) is not None


def capture_environment(
    environ: Mapping[str, str] | None = None,
    *,
    env_file: Path | None = None,
) -> EnvironmentSnapshot:
    """Take a snapshot of the environment.

    When ``environ`` is omitted, a ``.env`` file is loaded first (existing
    variables win) and ``os.environ`` is copied.
    """

    if environ is None:
        load_dotenv(env_file or DEFAULT_ENV_PATH, override=False)
        environ = os.environ

    return EnvironmentSnapshot(dict(environ))


__all__ = ["DEFAULT_ENV_PATH", "EnvironmentSnapshot", "capture_environment"]
