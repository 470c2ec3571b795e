"""
Shared pytest fixtures for the status bar test suite.

Every test runs with ASCII symbols, no STATUSBAR_* overrides and a user
config directory inside tmp_path, so nothing on the developer machine
leaks in.

Usage in tests:
    def test_something(sb_factory):
        sb_factory.add_worldbook("Lore", [{"uid": 1, "name": "HP"}])
        ...

    def test_with_data(sb_env):
        binding = sb_env.registry.list()[0]
        ...
"""

import pytest

from statusbar.config import ConfigManager
from tests.factories import StatusBarTestFactory


ENV_VARS = (
    "STATUSBAR_REGEX_PREFIX",
    "STATUSBAR_WORLDBOOK_DIR",
    "STATUSBAR_REGEX_FILE",
    "STATUSBAR_SETTINGS_FILE",
    "STATUSBAR_DEBUG",
    "STATUSBAR_UNICODE",
    "STATUSBAR_PROJECT_PATH",
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Isolate env vars, symbols and user config for every test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("STATUSBAR_ASCII_ONLY", "1")

    user_dir = tmp_path / "home" / ".statusbar"
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_DIR", user_dir)
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", user_dir / "config.yaml")


@pytest.fixture
def sb_factory(tmp_path):
    """Empty StatusBarTestFactory."""
    return StatusBarTestFactory(tmp_path)


@pytest.fixture
def sb_env(tmp_path):
    """
    StatusBarTestFactory with sample data.

    - Worldbook "Lore": uid 1 "HP" (enabled), uid 2 "MP" (disabled), uid 3 unnamed
    - Managed rules r-hp (enabled), r-mp (disabled); unmanaged rule r-other
    - Bindings: Lore:1 <-> r-hp, Lore:2 <-> r-mp
    """
    factory = StatusBarTestFactory(tmp_path)
    factory.add_worldbook("Lore", [
        {"uid": 1, "name": "HP", "enabled": True},
        {"uid": 2, "name": "MP", "enabled": False},
        {"uid": 3, "name": "", "enabled": True},
    ])
    factory.add_rule("r-hp", "HP bar", enabled=True, replace_string="```html\n<div class=\"hp\">HP</div>\n```")
    factory.add_rule("r-mp", "MP bar", enabled=False)
    factory.add_rule("r-other", "Someone else's rule", managed=False)
    factory.bind("Lore", 1, "r-hp")
    factory.bind("Lore", 2, "r-mp")
    return factory
