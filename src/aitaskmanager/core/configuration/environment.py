"""Environment adapters for applying configuration at runtime."""

from __future__ import annotations

import os
from collections.abc import MutableMapping

from .constants import DEBUG_ENV_VAR, DEFAULT_VERBOSITY, TRUTHY_ENV_VALUES, VERBOSITY_ENV_VAR, VERBOSITY_PRESETS
from .models import CLIConfig
from .utils import normalize_verbosity_label


class EnvironmentManager:
    """Thin wrapper around environment access to aid testing and reuse."""

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def getenv(self, key: str) -> str | None:
        return self._environ.get(key)

    def resolve_verbosity_source(self, config: CLIConfig) -> tuple[str, str]:
        """Return the effective verbosity label and where it came from."""
        label = normalize_verbosity_label(self.getenv(VERBOSITY_ENV_VAR))
        if label is not None:
            return label, VERBOSITY_ENV_VAR
        if self.is_truthy(DEBUG_ENV_VAR):
            return "verbose", DEBUG_ENV_VAR
        label = normalize_verbosity_label(config.verbosity)
        if label is not None:
            return label, "config"
        return DEFAULT_VERBOSITY, "default"

    def resolve_verbosity(self, config: CLIConfig) -> str:
        return self.resolve_verbosity_source(config)[0]

    def resolve_log_level(self, config: CLIConfig) -> int:
        return VERBOSITY_PRESETS[self.resolve_verbosity(config)]

    def is_truthy(self, key: str) -> bool:
        value = self.getenv(key)
        return value is not None and value.strip().lower() in TRUTHY_ENV_VALUES
