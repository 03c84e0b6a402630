"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CLIConfig:
    verbosity: str | None = None
