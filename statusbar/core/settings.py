"""
SettingsStore — Shared extension settings document

The host keeps one settings document with a section per extension.
The binding registry reads and writes only its own section.

Storage: .statusbar/settings.json
    {"status_bar_manager_script": {"bindings": [...]}, "<other extension>": {...}}

Writes are atomic (temp file + os.replace): a crash mid-save leaves
the previously saved document intact.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict


class SettingsError(Exception):
    """The settings document could not be read or written."""


class SettingsStore:
    """
    Durable-save handle for the shared settings document.

    Read contract: load_section() returns a private copy (never None).
    A document that is not valid JSON reads as empty.
    Write contract: save_section() replaces one section and persists the
    whole document before returning. It never overwrites a document it
    could not parse, since other extensions' sections live there too.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self, strict: bool = False) -> Dict[str, Any]:
        """
        Load the full document.

        Args:
            strict: Raise instead of returning {} for an unparsable document

        Raises:
            SettingsError: If the file cannot be read or decoded, or (strict)
                is not a JSON object
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                text = f.read()
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            raise SettingsError(f"Cannot read settings from {self.path}: {e}") from e

        if not text.strip():
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            if strict:
                raise SettingsError(f"Settings document {self.path} is not valid JSON; refusing to overwrite it: {e}") from e
            return {}

        if not isinstance(data, dict):
            if strict:
                raise SettingsError(f"Settings document {self.path} is not a JSON object; refusing to overwrite it")
            return {}
        return data

    def load_section(self, key: str) -> Dict[str, Any]:
        """Get a copy of one extension's section (empty dict if absent)."""
        section = self._load().get(key)
        if not isinstance(section, dict):
            return {}
        return copy.deepcopy(section)

    def save_section(self, key: str, section: Dict[str, Any]):
        """
        Replace one section and persist the document.

        Raises:
            SettingsError: If the existing document cannot be parsed, or the
                document cannot be written
        """
        data = self._load(strict=True)
        data[key] = section

        temp_path = self.path.with_suffix('.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')
            os.replace(temp_path, self.path)
        except OSError as e:
            raise SettingsError(f"Cannot save settings to {self.path}: {e}") from e
