"""
Core — Binding logic for the status bar manager

- Naming: managed namespace for regex rule names
- Settings: shared extension settings document
- Bindings: registry of entry <-> rule bindings
- Live state: current enabled status of both sides
- Toggle: switch both sides together
- Importer: import regex exports into the managed namespace
- Resolver: find a binding from user input
"""

from .naming import REGEX_PREFIX, ensure_managed_name, is_managed
from .settings import SettingsStore, SettingsError
from .bindings import (
    Binding, BindingRegistry, EntrySelection, SETTINGS_KEY,
    parse_entry_selection, normalize_selections,
)
from .live_state import LiveState, LiveStateReconciler
from .toggle import SyncError, ToggleResult, BindingToggler, set_binding_enabled
from .importer import (
    RegexImporter, RegexImportError, ImportResult,
    parse_imported_rule_list, rule_display_name, infer_rule_names,
)
from .resolver import BindingResolver, ResolveStatus, ResolveResult

__all__ = [
    # Naming
    "REGEX_PREFIX", "ensure_managed_name", "is_managed",
    # Settings
    "SettingsStore", "SettingsError",
    # Bindings
    "Binding", "BindingRegistry", "EntrySelection", "SETTINGS_KEY",
    "parse_entry_selection", "normalize_selections",
    # Live state
    "LiveState", "LiveStateReconciler",
    # Toggle
    "SyncError", "ToggleResult", "BindingToggler", "set_binding_enabled",
    # Importer
    "RegexImporter", "RegexImportError", "ImportResult",
    "parse_imported_rule_list", "rule_display_name", "infer_rule_names",
    # Resolver
    "BindingResolver", "ResolveStatus", "ResolveResult",
]
