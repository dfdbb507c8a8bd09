"""
Centralized path defaults for braavos.

Paths are relative to the current working directory; every default can be overridden via
the `BRAAVOS_CONFIG` environment variable or the CLI `--config` option.
"""

from pathlib import Path

DEFAULT_CONF_DIR = Path("conf")
DEFAULT_SETTINGS_PATH = DEFAULT_CONF_DIR / "Settings.toml"

__all__ = [
    "DEFAULT_CONF_DIR",
    "DEFAULT_SETTINGS_PATH",
]
