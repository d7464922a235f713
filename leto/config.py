"""
Configuration for the Leto reader.

This module provides the ReadingConfig value object forwarded to the playback
and configuration managers, and the application settings loaded from
config.json and the environment.
"""

import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict

from leto.errors import MalformedInputError

logger = logging.getLogger(__name__)


@dataclass
class ReadingConfig:
    """Playback parameters. Treated as an opaque value by the orchestrator."""

    words_per_minute: int = 300
    words_per_flash: int = 1
    pause_on_punctuation: bool = True

    @classmethod
    def get_default(cls) -> "ReadingConfig":
        return cls()

    @classmethod
    def from_json(cls, payload: str) -> "ReadingConfig":
        """Builds a config from a JSON object, ignoring unknown keys."""
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, TypeError, RecursionError) as e:
            raise MalformedInputError(f"Invalid configuration: {e}") from e
        if not isinstance(data, dict):
            raise MalformedInputError("Configuration must be a JSON object")

        values = {}
        for f in dataclasses.fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            # bool is an int subclass, so it is checked separately
            if isinstance(value, bool) != (f.type is bool) or not isinstance(
                value, f.type
            ):
                raise MalformedInputError(
                    f"Configuration field {f.name} must be {f.type.__name__}"
                )
            if f.type is int and value < 1:
                raise MalformedInputError(
                    f"Configuration field {f.name} must be positive"
                )
            values[f.name] = value
        return cls(**values)

    def to_json(self) -> str:
        return json.dumps(dataclasses.asdict(self))

    def copy(self) -> "ReadingConfig":
        return dataclasses.replace(self)


def load_settings(config_filename: str = "config.json") -> Dict[str, Any]:
    """Loads application settings from a JSON file next to this module."""
    base_dir = os.path.dirname(os.path.abspath(__file__))
    config_path = os.path.join(base_dir, config_filename)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.warning("Config file not found at %s. Using defaults.", config_path)
        return {}


SETTINGS: Dict[str, Any] = load_settings()

# Env vars take precedence over config.json
FETCH_TIMEOUT: float = float(
    os.environ.get("LETO_FETCH_TIMEOUT", SETTINGS.get("fetch_timeout", 10))
)
USER_AGENT: str = os.environ.get(
    "LETO_USER_AGENT", SETTINGS.get("user_agent", "LetoReader/1.0")
)
