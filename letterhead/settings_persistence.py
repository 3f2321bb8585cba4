"""Settings persistence for per-document letterhead preferences.

Layout geometry, output targets and the letterhead file are remembered per
document. Settings are stored as JSON in the OS-appropriate config
directory and survive application restarts.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .layout import LayoutParams

logger = logging.getLogger(__name__)

# Allowed ranges for integer settings
SETTING_RANGES = {
    'chars_per_line': (20, 200),
    'max_lines_per_page': (1, 200),
}
STRING_SETTINGS = ('printer_name', 'pdf_filename', 'company_file')
BOOLEAN_SETTINGS = ('duplex_printing',)


class SettingsPersistence:
    """Manages persistent storage of per-document settings.

    Settings live in one JSON file in the user's config directory, keyed by
    the absolute path of the document.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or Path(platformdirs.user_config_dir("letterhead", "talentronaut"))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _load_all_settings(self) -> Dict[str, Dict[str, Any]]:
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            data = {}

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}

        self._settings_cache = data
        return self._settings_cache

    def _save_all_settings(self, settings: Dict[str, Dict[str, Any]]) -> bool:
        """Write all settings atomically (temp file + rename)."""
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
            self._settings_cache = settings
            return True

        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def load_settings(self, document_path: Optional[str]) -> Dict[str, Any]:
        """Load settings for a document.

        Args:
            document_path: Path to the document. If None, returns empty dict.

        Returns:
            Copy of the stored settings; invalid entries are dropped.
        """
        if document_path is None:
            return {}

        abs_path = os.path.abspath(document_path)
        doc_settings = self._load_all_settings().get(abs_path, {})
        if not isinstance(doc_settings, dict):
            logger.warning(f"Settings for {abs_path} are not a dict, ignoring")
            return {}

        valid = {}
        for key, value in doc_settings.items():
            if self.validate_setting(key, value):
                valid[key] = value
            else:
                logger.warning(f"Ignoring invalid setting {key}={value!r} for {abs_path}")
        return valid

    def save_settings(self, document_path: Optional[str], settings: Dict[str, Any]) -> bool:
        """Merge ``settings`` into the stored settings for a document.

        Returns:
            True if save was successful, False otherwise.
        """
        if document_path is None:
            return False

        abs_path = os.path.abspath(document_path)
        all_settings = dict(self._load_all_settings())
        merged = dict(all_settings.get(abs_path) or {})
        merged.update(settings)
        all_settings[abs_path] = merged
        return self._save_all_settings(all_settings)

    def validate_setting(self, key: str, value: Any) -> bool:
        """Validate a setting value.

        Unknown settings are accepted for forward compatibility.
        """
        if value is None:
            return True

        if key in STRING_SETTINGS:
            return isinstance(value, str)

        if key in BOOLEAN_SETTINGS:
            return isinstance(value, bool)

        if key in SETTING_RANGES:
            # bool is an int subclass; reject it explicitly
            if not isinstance(value, int) or isinstance(value, bool):
                return False
            low, high = SETTING_RANGES[key]
            return low <= value <= high

        return True

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


def layout_params_from_settings(settings: Dict[str, Any]) -> LayoutParams:
    """Build layout parameters from stored settings, keeping defaults for gaps.

    Raises:
        ValueError: If a value is out of range for the layout engine.
    """
    values = {key: settings[key] for key in SETTING_RANGES if settings.get(key) is not None}
    return LayoutParams(**values)


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
