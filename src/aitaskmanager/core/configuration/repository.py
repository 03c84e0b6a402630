"""Persistence adapters for CLI configuration."""

from __future__ import annotations

import os
import tempfile
import tomllib
from pathlib import Path
from typing import Protocol

import tomli_w

from .constants import CONFIG_FILE
from .models import CLIConfig
from .serde import config_from_dict, config_to_dict


class ConfigFileError(RuntimeError):
    """Raised when the persisted preferences file exists but cannot be used."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read preferences from {path.as_posix()}: {reason}")
        self.path = path
        self.reason = reason


class ConfigRepository(Protocol):
    """Abstraction for loading and persisting CLI configuration."""

    def load(self) -> CLIConfig:
        ...

    def save(self, config: CLIConfig) -> None:
        ...


class TomlConfigRepository(ConfigRepository):
    """
    Stores preferences in a TOML file under the user config directory.

    A missing file means defaults. A file that is unreadable or not valid TOML
    raises ConfigFileError so callers can decide whether to fall back.
    Writes replace the file atomically so a crash never leaves half a document.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path if path is not None else CONFIG_FILE

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> CLIConfig:
        try:
            with self._path.open("rb") as fh:
                payload = tomllib.load(fh)
        except FileNotFoundError:
            return CLIConfig()
        except tomllib.TOMLDecodeError as error:
            raise ConfigFileError(self._path, f"invalid TOML ({error})") from error
        except OSError as error:
            raise ConfigFileError(self._path, error.strerror or str(error)) from error
        return config_from_dict(payload)

    def save(self, config: CLIConfig) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = tomli_w.dumps(config_to_dict(config)).encode("utf-8")
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
