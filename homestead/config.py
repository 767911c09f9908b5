"""
Configuration - Optional key/value settings file.

The file holds whitespace-separated `key value` pairs, e.g.:

    difficulty hard
    auto_save false

A missing or unreadable file means defaults. The file location defaults
to config.txt and can be overridden with HOMESTEAD_CONFIG.
"""

from __future__ import annotations
from pathlib import Path
import logging
import os

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .engine_core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HOMESTEAD_CONFIG"
DEFAULT_CONFIG_FILE = "config.txt"


class GameConfig(BaseModel):
    """Parsed configuration. Unknown keys are kept as extras."""

    model_config = ConfigDict(extra="allow")

    difficulty: str = "normal"
    auto_save: bool = True
    save_file: str | None = None
    turn_delay: float = Field(1.0, ge=0.0, description="Pause between phases, in seconds")


def parse_config(text: str) -> dict[str, str]:
    """Split config text into key/value pairs; a trailing lone key is ignored."""
    tokens = text.split()
    return {tokens[i]: tokens[i + 1] for i in range(0, len(tokens) - 1, 2)}


def default_config_path() -> Path:
    return Path(os.getenv(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE))


def load_config(path: str | Path | None = None) -> GameConfig:
    """
    Load configuration from path (or the default location).

    Raises ConfigError if a recognized key holds an invalid value.
    """
    path = Path(path) if path is not None else default_config_path()
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("No configuration at %s, using defaults", path)
        return GameConfig()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read configuration at %s, using defaults: %s", path, e)
        return GameConfig()

    try:
        config = GameConfig(**parse_config(text))
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Difficulty set to: %s", config.difficulty)
    return config
