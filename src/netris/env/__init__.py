"""Gymnasium environment for Netris."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="Netris-v0",
    entry_point="netris.env.netris_env:NetrisEnv",
)

__all__ = ["Netris-v0"]
