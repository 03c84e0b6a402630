"""Normalization helpers shared by configuration services."""

from __future__ import annotations

from .constants import VERBOSITY_PRESETS

_VERBOSITY_ALIASES = {
    "warning": "quiet",
    "warn": "quiet",
    "info": "standard",
    "debug": "verbose",
}


def normalize_verbosity_label(value: str | None) -> str | None:
    if value is None:
        return None
    lowered = value.strip().lower()
    if not lowered:
        return None
    lowered = _VERBOSITY_ALIASES.get(lowered, lowered)
    return lowered if lowered in VERBOSITY_PRESETS else None
