"""Translate CLIConfig to and from TOML-ready dictionaries."""

from __future__ import annotations

from typing import Any

from .models import CLIConfig
from .utils import normalize_verbosity_label


def config_from_dict(payload: dict[str, Any]) -> CLIConfig:
    logging_section = payload.get("logging", {})
    verbosity = logging_section.get("verbosity") if isinstance(logging_section, dict) else None
    return CLIConfig(verbosity=normalize_verbosity_label(verbosity if isinstance(verbosity, str) else None))


def config_to_dict(config: CLIConfig) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    if config.verbosity:
        payload["logging"] = {"verbosity": config.verbosity}
    return payload
