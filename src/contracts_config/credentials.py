"""Signing credential lookup."""

from __future__ import annotations

from .environment import EnvironmentSnapshot


def resolve_credentials(var_name: str, env: EnvironmentSnapshot) -> tuple[str, ...]:
    """Return ``(secret,)`` when ``var_name`` holds a value, otherwise ``()``.

    A missing secret is normal for read-only and fork-only networks, so this
    never raises.
    """

    secret = env.value(var_name)

    if secret is None:
        return ()

    return (secret,)


__all__ = ["resolve_credentials"]
