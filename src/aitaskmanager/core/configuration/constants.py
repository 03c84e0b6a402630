"""Constants used throughout the configuration subsystem."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

CONFIG_DIR = Path(os.getenv("TASK_MANAGER_CONFIG_DIR", user_config_dir("ai-task-manager")))
CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULT_VERBOSITY = "quiet"
VERBOSITY_ENV_VAR = "TASK_MANAGER_LOG_LEVEL"
DEBUG_ENV_VAR = "DEBUG"
VERBOSITY_PRESETS = {
    "quiet": logging.WARNING,
    "standard": logging.INFO,
    "verbose": logging.DEBUG,
}

TRUTHY_ENV_VALUES = {"1", "true", "yes", "on"}
