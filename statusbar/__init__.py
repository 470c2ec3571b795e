"""
Status Bar Manager — Keep worldbook entries and regex rules in step

A status bar is two host resources working together: a worldbook entry
that feeds the prompt and a regex rule that renders the reply. This
tool binds them so they are switched on and off as one.

Usage:
    statusbar import status_bar.json
    statusbar list --regexes
    statusbar bind --entry "My World:3" --regex "HP bar"
    statusbar list
    statusbar toggle KM-XP
    statusbar preview KM-XP --output preview.html
"""

__version__ = "0.1.0"

# Core layer
from .core.naming import REGEX_PREFIX, ensure_managed_name, is_managed
from .core.settings import SettingsStore, SettingsError
from .core.bindings import Binding, BindingRegistry, EntrySelection, parse_entry_selection
from .core.live_state import LiveState, LiveStateReconciler
from .core.toggle import SyncError, ToggleResult, BindingToggler, set_binding_enabled
from .core.importer import RegexImporter, RegexImportError, ImportResult
from .core.resolver import BindingResolver, ResolveStatus, ResolveResult

# Services layer
from .services.worldbooks import WorldbookEntry, WorldbookStore, JsonWorldbookStore, WorldbookError
from .services.regexes import RegexRule, RuleStore, JsonRuleStore, RuleStoreError

# Presentation layer
from .presentation.symbols import get_symbols, SymbolSet, UNICODE, ASCII
from .presentation.codec import IDCodec

# Config (stays at root)
from .config import Config, ConfigManager, get_config

__all__ = [
    '__version__',
    # Core
    'REGEX_PREFIX', 'ensure_managed_name', 'is_managed',
    'SettingsStore', 'SettingsError',
    'Binding', 'BindingRegistry', 'EntrySelection', 'parse_entry_selection',
    'LiveState', 'LiveStateReconciler',
    'SyncError', 'ToggleResult', 'BindingToggler', 'set_binding_enabled',
    'RegexImporter', 'RegexImportError', 'ImportResult',
    'BindingResolver', 'ResolveStatus', 'ResolveResult',
    # Services
    'WorldbookEntry', 'WorldbookStore', 'JsonWorldbookStore', 'WorldbookError',
    'RegexRule', 'RuleStore', 'JsonRuleStore', 'RuleStoreError',
    # Presentation
    'get_symbols', 'SymbolSet', 'UNICODE', 'ASCII', 'IDCodec',
    # Config
    'Config', 'ConfigManager', 'get_config',
]
