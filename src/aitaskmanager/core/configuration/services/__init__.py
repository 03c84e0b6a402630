"""Domain-specific helpers for configuration management."""

from . import logging

__all__ = [
    "logging",
]
