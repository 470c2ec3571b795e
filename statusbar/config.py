"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables
  2. Project config (.statusbar/config.yaml)
  3. User config (~/.statusbar/config.yaml)
  4. Defaults

Relative host paths are resolved against the project's .statusbar/ directory.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .core.naming import REGEX_PREFIX
from .presentation.symbols import get_symbols
from .services.worldbooks import UNNAMED_ENTRY


DATA_DIR = ".statusbar"

# Environment overrides: variable -> (section, setting)
ENV_OVERRIDES = {
    "STATUSBAR_REGEX_PREFIX": ("naming", "prefix"),
    "STATUSBAR_WORLDBOOK_DIR": ("host", "worldbook_dir"),
    "STATUSBAR_REGEX_FILE": ("host", "regex_file"),
    "STATUSBAR_SETTINGS_FILE": ("host", "settings_file"),
}


@dataclass
class NamingConfig:
    """Managed namespace settings."""
    prefix: str = REGEX_PREFIX
    unnamed_entry: str = UNNAMED_ENTRY  # Placeholder for entries without a name

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if not self.prefix:
            return "Regex prefix cannot be empty"
        if "{uid}" not in self.unnamed_entry:
            return "Unnamed entry template must contain {uid}"
        return None


@dataclass
class HostConfig:
    """Where the host's collections live."""
    worldbook_dir: str = "worldbooks"
    regex_file: str = "regexes.json"
    settings_file: str = "settings.json"

    def validate(self) -> Optional[str]:
        for name in ("worldbook_dir", "regex_file", "settings_file"):
            if not getattr(self, name):
                return f"host.{name} cannot be empty"
        return None


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"
    format: str = "auto"   # "auto" | "table" | "list" | "json"

    def validate(self) -> Optional[str]:
        valid_symbols = ("unicode", "ascii", "auto")
        if self.symbols not in valid_symbols:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(valid_symbols)}"

        valid_formats = ("auto", "table", "list", "json")
        if self.format not in valid_formats:
            return f"Unknown format '{self.format}'. Valid: {', '.join(valid_formats)}"
        return None


@dataclass
class Config:
    """Application configuration."""
    naming: NamingConfig = field(default_factory=NamingConfig)
    host: HostConfig = field(default_factory=HostConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def validate(self) -> Optional[str]:
        """First validation error across sections, or None."""
        for section in (self.naming, self.host, self.display):
            error = section.validate()
            if error:
                return error
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "naming": {
                "prefix": self.naming.prefix,
                "unnamed_entry": self.naming.unnamed_entry
            },
            "host": {
                "worldbook_dir": self.host.worldbook_dir,
                "regex_file": self.host.regex_file,
                "settings_file": self.host.settings_file
            },
            "display": {
                "symbols": self.display.symbols,
                "format": self.display.format
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        naming_data = data.get("naming", {}) or {}
        host_data = data.get("host", {}) or {}
        display_data = data.get("display", {}) or {}

        return cls(
            naming=NamingConfig(
                prefix=naming_data.get("prefix", REGEX_PREFIX),
                unnamed_entry=naming_data.get("unnamed_entry", UNNAMED_ENTRY)
            ),
            host=HostConfig(
                worldbook_dir=str(host_data.get("worldbook_dir", "worldbooks")),
                regex_file=str(host_data.get("regex_file", "regexes.json")),
                settings_file=str(host_data.get("settings_file", "settings.json"))
            ),
            display=DisplayConfig(
                symbols=display_data.get("symbols", "auto"),
                format=display_data.get("format", "auto")
            )
        )


# Settable keys: "section.setting" -> validation owner
SETTABLE_KEYS = (
    "naming.prefix", "naming.unnamed_entry",
    "host.worldbook_dir", "host.regex_file", "host.settings_file",
    "display.symbols", "display.format",
)


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment (STATUSBAR_*)
      2. Project config (.statusbar/config.yaml)
      3. User config (~/.statusbar/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / DATA_DIR
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def data_dir(self) -> Path:
        return self.project_dir / DATA_DIR

    @property
    def project_config_path(self) -> Path:
        return self.data_dir / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config, Layer 2: Project config (higher priority)
        for path in (self.user_config_path, self.project_config_path):
            if path.exists():
                try:
                    with open(path, encoding='utf-8') as f:
                        config_data = self._merge(config_data, yaml.safe_load(f) or {})
                except (yaml.YAMLError, OSError, AttributeError):
                    pass  # Ignore malformed config file

        # Layer 3: Environment overrides
        for env_key, (section, setting) in ENV_OVERRIDES.items():
            if os.environ.get(env_key):
                config_data.setdefault(section, {})[setting] = os.environ[env_key]

        self._config = Config.from_dict(config_data)
        return self._config

    def resolve_path(self, value: str) -> Path:
        """Resolve a host path setting (relative to .statusbar/)."""
        path = Path(value).expanduser()
        return path if path.is_absolute() else self.data_dir / path

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self.project_config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.project_config_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, allow_unicode=True)
        self._config = config

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self.USER_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(self.user_config_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, allow_unicode=True)
        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "naming.prefix")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        if key not in SETTABLE_KEYS:
            return f"Unknown setting: {key}. Valid: {', '.join(SETTABLE_KEYS)}"

        config = Config.from_dict(self.load().to_dict())
        section, setting = key.split(".")
        target = getattr(config, section)
        setattr(target, setting, value)

        error = target.validate()
        if error:
            return error

        if scope == "project":
            self.save_project(config)
        else:
            self.save_user(config)
        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value."""
        if key not in SETTABLE_KEYS:
            return None
        section, setting = key.split(".")
        return getattr(getattr(self.load(), section), setting)

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()
        symbols = get_symbols(config.display.symbols)
        regex_path = self.resolve_path(config.host.regex_file)

        regex_status = f"{symbols.check_pass} Found" if regex_path.exists() else f"{symbols.check_warn} Not created yet"
        lines = [
            "Configuration:",
            "",
            "Naming:",
            f"  Prefix: \"{config.naming.prefix}\"",
            f"  Unnamed entry: {config.naming.unnamed_entry}",
            "",
            "Host:",
            f"  Worldbooks: {self.resolve_path(config.host.worldbook_dir)}",
            f"  Regex rules: {regex_path} ({regex_status})",
            f"  Settings: {self.resolve_path(config.host.settings_file)}",
            "",
            "Display:",
            f"  Symbols: {config.display.symbols}",
            f"  Format: {config.display.format}",
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ]
        return "\n".join(lines)


def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
