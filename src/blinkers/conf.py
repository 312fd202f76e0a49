"""Settings and config persistence for blinkers.

Config is stored at ~/.config/blinkers/config.json (XDG-compliant).

Usage:
    from blinkers.conf import settings

    settings.timeout_ms     # control transfer timeout
    settings.fade_ms        # default fade used by the CLI

    # Low-level config access
    from blinkers.conf import load_config, save_config
"""
from __future__ import annotations

import json
import logging
import os

from .constants import DEFAULT_TIMEOUT_MS

log = logging.getLogger(__name__)

# =========================================================================
# Config file location (XDG-compliant)
# =========================================================================

_XDG_CONFIG = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
CONFIG_DIR = os.path.join(_XDG_CONFIG, 'blinkers')
CONFIG_PATH = os.path.join(CONFIG_DIR, 'config.json')

DEFAULT_FADE_MS = 0


# =========================================================================
# Low-level config persistence
# =========================================================================

def load_config() -> dict:
    """Load user config from disk. Returns empty dict on missing/corrupt file."""
    try:
        with open(CONFIG_PATH, 'r') as f:
            config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return {}
    return config if isinstance(config, dict) else {}


def save_config(config: dict):
    """Save user config to disk."""
    os.makedirs(CONFIG_DIR, exist_ok=True)
    with open(CONFIG_PATH, 'w') as f:
        json.dump(config, f, indent=2)


def _read_int(key: str, default: int, minimum: int) -> int:
    value = load_config().get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        log.warning("Ignoring invalid %s in %s: %r", key, CONFIG_PATH, value)
        return default
    return value


# =========================================================================
# Transfer timeout
# =========================================================================

def get_saved_timeout() -> int:
    """Control transfer timeout in ms, defaulting to 1000."""
    return _read_int('timeout_ms', DEFAULT_TIMEOUT_MS, 1)


def save_timeout(timeout_ms: int):
    if timeout_ms < 1:
        raise ValueError(f"timeout_ms must be >= 1, got {timeout_ms}")
    config = load_config()
    config['timeout_ms'] = timeout_ms
    save_config(config)


# =========================================================================
# Default fade
# =========================================================================

def get_saved_fade() -> int:
    """Default fade duration in ms for CLI color commands. 0 = immediate."""
    return _read_int('fade_ms', DEFAULT_FADE_MS, 0)


def save_fade(fade_ms: int):
    if fade_ms < 0:
        raise ValueError(f"fade_ms must be >= 0, got {fade_ms}")
    config = load_config()
    config['fade_ms'] = fade_ms
    save_config(config)


# =========================================================================
# Settings singleton
# =========================================================================

class Settings:
    """Application-wide settings, read once from config.

    ``set_*()`` updates the in-memory value and persists it.
    """

    def __init__(self) -> None:
        self.timeout_ms: int = get_saved_timeout()
        self.fade_ms: int = get_saved_fade()

    def set_timeout(self, timeout_ms: int) -> None:
        save_timeout(timeout_ms)
        log.info("Settings: timeout %d ms → %d ms", self.timeout_ms, timeout_ms)
        self.timeout_ms = timeout_ms

    def set_fade(self, fade_ms: int) -> None:
        save_fade(fade_ms)
        self.fade_ms = fade_ms


# Module-level singleton — import and use directly
settings = Settings()
