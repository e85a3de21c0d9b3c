"""
Settings for the Nixdorf disk image utility.

Layout constants differ between the tool variants that wrote the images,
so they can be overridden in a JSON settings file.
"""

import json
import os
from pathlib import Path
from typing import Any

from .constants import BACK_SCAN_ATTEMPTS, DIRECTORY_BASE_SECTORS
from .logging_config import get_logger

log = get_logger('settings')

# Default settings (JSON object keys are strings)
DEFAULT_SETTINGS = {
    'directory_base_sectors': {str(k): v for k, v in DIRECTORY_BASE_SECTORS.items()},
    'back_scan_attempts': BACK_SCAN_ATTEMPTS,
    'include_system_entries': False,
}


def get_config_path() -> Path:
    """Get the path to the default settings file."""
    # Use AppData on Windows, ~/.config on Linux/Mac
    if os.name == 'nt':
        app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
        config_dir = Path(app_data) / 'nixdisk'
    else:
        config_dir = Path.home() / '.config' / 'nixdisk'
    return config_dir / 'settings.json'


class Settings:
    """Layout and extraction settings, merged over the defaults."""

    def __init__(self, values: dict[str, Any] | None = None):
        self._values: dict[str, Any] = json.loads(json.dumps(DEFAULT_SETTINGS))
        if values:
            self.update(values)

    @classmethod
    def load(cls, path: str | Path | None = None) -> 'Settings':
        """Load settings from a JSON file; missing or corrupt files give defaults."""
        settings = cls()
        config_path = Path(path) if path else get_config_path()
        try:
            if config_path.exists():
                with open(config_path, 'r', encoding='utf-8') as f:
                    settings.update(json.load(f))
        except (json.JSONDecodeError, OSError) as e:
            log.warning(f"Ignoring settings file {config_path}: {e}")
        return settings

    def update(self, values: dict[str, Any]) -> None:
        """Merge known keys; unknown keys are ignored."""
        if not isinstance(values, dict):
            log.warning(f"Settings must be a JSON object, got {type(values).__name__}")
            return
        for key, value in values.items():
            if key not in DEFAULT_SETTINGS:
                log.debug(f"Unknown setting '{key}' ignored")
                continue
            if key == 'directory_base_sectors':
                self._update_base_sectors(value)
            elif key == 'back_scan_attempts':
                if _is_int(value) and value >= 0:
                    self._values[key] = value
                else:
                    log.warning(f"Invalid back_scan_attempts {value!r}, keeping default")
            elif isinstance(value, bool):
                self._values[key] = value
            else:
                log.warning(f"Invalid {key} {value!r}, keeping default")

    def _update_base_sectors(self, value: Any) -> None:
        if not isinstance(value, dict):
            log.warning(f"Invalid directory_base_sectors {value!r}, keeping defaults")
            return
        for record_length, base in value.items():
            if _is_int(base) and base >= 0:
                self._values['directory_base_sectors'][str(record_length)] = base
            else:
                log.warning(f"Invalid directory base sector {base!r} "
                            f"for record length {record_length}, keeping default")

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def directory_base_sector(self, record_length: int) -> int | None:
        """Directory base sector for a physical record length, None if unknown."""
        return self._values['directory_base_sectors'].get(str(record_length))

    @property
    def back_scan_attempts(self) -> int:
        return int(self._values['back_scan_attempts'])

    @property
    def include_system_entries(self) -> bool:
        return bool(self._values['include_system_entries'])


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
