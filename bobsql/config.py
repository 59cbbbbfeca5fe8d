"""Process-wide settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Config:
    """Settings read by the table parser."""

    action_alias: str = "."


_state: Dict[str, Optional[Config]] = {"current": Config()}


def configure(config: Optional[Config]) -> None:
    """Replace the active settings."""
    _state["current"] = config


def use_config() -> Config:
    """Return the active settings."""
    current = _state["current"]
    if current is None:
        raise RuntimeError("undefined: config")
    return current