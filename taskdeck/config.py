"""Configuration helpers for the Taskdeck client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_TIMEOUT_SECONDS = 30.0

CONFIG_DIR = ".taskdeck"


def sanitize_base_url(url: str) -> str:
    """Ensure the base URL never ends with a trailing slash."""

    return url.rstrip("/")


def get_config_dir() -> Path:
    """Directory holding local state (profile, credential fallback file)."""
    override = os.environ.get("TASKDECK_HOME")
    if override:
        return Path(override)
    return Path.home() / CONFIG_DIR


@dataclass(frozen=True)
class ClientConfig:
    """Transport settings handed to the client at construction."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", sanitize_base_url(self.base_url))

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a config from TASKDECK_BASE_URL / TASKDECK_TIMEOUT, falling back to defaults."""
        base_url = os.environ.get("TASKDECK_BASE_URL") or DEFAULT_BASE_URL
        raw_timeout = os.environ.get("TASKDECK_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            raise ValueError(f"TASKDECK_TIMEOUT must be a number, got {raw_timeout!r}") from None
        return cls(base_url=base_url, timeout=timeout)
