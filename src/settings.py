"""Configuration for the watch history analyzer."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "YTH_"


@dataclass
class Settings:
    """Limits and context windows used by parsing and aggregation."""
    top_channels: int = 10
    top_recurring: int = 15
    title_length: int = 45  # recurring titles longer than this get "..."
    titled_window: int = 300  # chars scanned for the date line of a titled entry
    url_window: int = 100  # chars scanned for the date line of a URL-only entry
    recent_limit: int = 10
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Settings":
        """Load settings from a YAML mapping, either top level or under `history:`."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise ValueError(f"Settings file {path} must contain a mapping")
        data = raw.get("history", raw)
        return cls(**cls._coerce(data))

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from YTH_* environment variables, defaults otherwise."""
        values = {}
        for f in fields(cls):
            raw = os.environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            values[f.name] = raw
        return cls(**cls._coerce(values))

    @classmethod
    def _coerce(cls, data: dict) -> dict:
        # Quoted YAML numbers and env vars arrive as strings; unknown keys pass through
        types = {f.name: f.type for f in fields(cls)}
        values = {}
        for name, value in data.items():
            if types.get(name) in (int, "int"):
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    logger.warning("Setting %s=%r is not an integer, using default", name, value)
                    continue
            elif types.get(name) in (str, "str"):
                value = str(value)
            values[name] = value
        return values

    def validate(self) -> "Settings":
        defaults = Settings()
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type in (int, "int") and not isinstance(value, int):
                logger.warning("Invalid %s=%r in settings, using %r", f.name, value, getattr(defaults, f.name))
                setattr(self, f.name, getattr(defaults, f.name))
            elif isinstance(value, int) and value <= 0:
                logger.warning("Invalid %s=%r in settings, using %r", f.name, value, getattr(defaults, f.name))
                setattr(self, f.name, getattr(defaults, f.name))
        return self


def load_settings(config_path: str | None = None) -> Settings:
    """Load settings from file or environment.

    Tries in order:
    1. Provided config_path
    2. Default paths: settings.yaml, settings.yml
    3. Environment variables (fallback)
    """
    settings: Settings | None = None

    if config_path:
        path = Path(config_path)
        if path.exists():
            settings = Settings.from_yaml(path)
        else:
            raise FileNotFoundError(f"Settings file not found: {config_path}")
    else:
        for default_path in ["settings.yaml", "settings.yml"]:
            path = Path(default_path)
            if path.exists():
                settings = Settings.from_yaml(path)
                break

    if settings is None:
        settings = Settings.from_env()

    return settings.validate()
