"""Verbosity preference service used by `config verbosity`."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import VERBOSITY_PRESETS
from ..environment import EnvironmentManager
from ..models import CLIConfig
from ..utils import normalize_verbosity_label


@dataclass(frozen=True, slots=True)
class VerbosityReport:
    configured: str | None
    effective: str
    source: str

    @property
    def level(self) -> int:
        return VERBOSITY_PRESETS[self.effective]


def describe_logging_verbosity(config: CLIConfig, environment: EnvironmentManager) -> VerbosityReport:
    """Report the persisted verbosity next to the one actually in force."""
    effective, source = environment.resolve_verbosity_source(config)
    return VerbosityReport(
        configured=normalize_verbosity_label(config.verbosity),
        effective=effective,
        source=source,
    )


def set_logging_verbosity(config: CLIConfig, verbosity: str) -> str:
    """Store a preset or alias on config and return the canonical preset name."""
    label = normalize_verbosity_label(verbosity)
    if label is None:
        raise ValueError(f"Unknown verbosity {verbosity!r}. Choose from: {', '.join(VERBOSITY_PRESETS)}")
    config.verbosity = label
    return label


def clear_logging_verbosity(config: CLIConfig) -> bool:
    """Drop the persisted verbosity; returns whether anything was set."""
    had_value = config.verbosity is not None
    config.verbosity = None
    return had_value
