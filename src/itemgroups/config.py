"""Configuration management for itemgroups."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ITEMGROUPS_HOME = Path(os.environ.get("ITEMGROUPS_HOME", Path.home() / "itemgroups"))
CONFIG_FILE = ITEMGROUPS_HOME / "config" / "itemgroups.conf"

DEFAULT_BASE_URL = "https://hiring.fetch.com"

_TRUE_VALUES = {"true", "yes", "1", "on"}
_FALSE_VALUES = {"false", "no", "0", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class Config:
    """itemgroups configuration."""

    api_base_url: str = DEFAULT_BASE_URL
    connect_timeout: float = 30.0
    read_timeout: float = 30.0
    # Keep the last good records on screen when a re-fetch fails
    retain_on_failure: bool = True
    log_level: str = "WARNING"

    @property
    def timeouts(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _parse_timeout(value: str) -> float:
    seconds = float(value)
    if seconds <= 0:
        raise ValueError(f"timeout must be positive: {value!r}")
    return seconds


def parse_config(text: str) -> Config:
    """Parse KEY = value lines into a Config. Bad lines fall back to defaults."""
    config = Config()

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        try:
            match key:
                case "api_base_url":
                    config.api_base_url = value.rstrip("/") or DEFAULT_BASE_URL
                case "connect_timeout":
                    config.connect_timeout = _parse_timeout(value)
                case "read_timeout":
                    config.read_timeout = _parse_timeout(value)
                case "retain_on_failure":
                    config.retain_on_failure = _parse_bool(value)
                case "log_level":
                    level = value.upper()
                    if level not in _LOG_LEVELS:
                        raise ValueError(f"unknown log level: {value!r}")
                    config.log_level = level
                case _:
                    logger.warning(f"Ignoring unknown config key: {key}")
        except ValueError as e:
            logger.warning(f"Invalid value for {key.upper()}: {e}")

    return config


def load_config(path: Path | None = None) -> Config:
    """Load configuration from itemgroups.conf file."""
    path = path or CONFIG_FILE

    if not path.exists():
        return Config()

    return parse_config(path.read_text())
