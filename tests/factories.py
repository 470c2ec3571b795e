"""
Test Data Factory — Real file-backed host stores for status bar tests

Builds an isolated .statusbar/ directory with real JSON worldbook,
regex and settings stores. Helpers add and remove host data so tests
can describe a scenario in a few lines.

Usage:
    def test_something(sb_factory):
        sb_factory.add_worldbook("Lore", [{"uid": 1, "name": "HP"}])
        sb_factory.add_rule("r1", "HP bar")
        binding = sb_factory.bind("Lore", 1, "r1")
        cli = sb_factory.create_cli()
"""

from itertools import count
from pathlib import Path
from typing import Iterable, Optional
from unittest.mock import Mock

from statusbar.cli import StatusBarCLI
from statusbar.config import Config
from statusbar.core.bindings import Binding, BindingRegistry, EntrySelection
from statusbar.core.importer import RegexImporter
from statusbar.core.live_state import LiveStateReconciler
from statusbar.core.naming import ensure_managed_name
from statusbar.core.settings import SettingsStore
from statusbar.core.toggle import BindingToggler
from statusbar.presentation.codec import IDCodec
from statusbar.presentation.symbols import get_symbols
from statusbar.services.regexes import JsonRuleStore, RegexRule
from statusbar.services.worldbooks import JsonWorldbookStore, WorldbookEntry


class StatusBarTestFactory:
    """
    Factory for isolated status bar environments.

    Paths match the default host layout, so a StatusBarCLI created on
    the same project directory sees the same data.
    """

    def __init__(self, tmp_path: Path):
        self.tmp_path = tmp_path
        self.data_dir = tmp_path / ".statusbar"
        self.data_dir.mkdir(parents=True, exist_ok=True)

        # Real stores (temp files, not mocks)
        self.worldbooks = JsonWorldbookStore(self.data_dir / "worldbooks")
        self.rules = JsonRuleStore(self.data_dir / "regexes.json")
        self.settings = SettingsStore(self.data_dir / "settings.json")

        self.config = Config()
        self.codec = IDCodec()
        self.symbols = get_symbols()

        self._ids = count(1)
        self.registry = self.create_registry()

    # =========================================================================
    # Host data
    # =========================================================================

    def next_id(self) -> str:
        """Deterministic binding ids: binding-0001, binding-0002, ..."""
        return f"binding-{next(self._ids):04d}"

    def add_worldbook(self, name: str, entries: Iterable = ()) -> list:
        """
        Create a worldbook.

        Args:
            entries: WorldbookEntry objects or dicts ({"uid": 1, "name": ...})
        """
        items = [e if isinstance(e, WorldbookEntry) else WorldbookEntry.from_dict(e) for e in entries]
        self.worldbooks.write_entries(name, items)
        return items

    def add_rule(
        self,
        rule_id: str,
        name: str,
        enabled: bool = True,
        managed: bool = True,
        replace_string: str = ""
    ) -> RegexRule:
        """Append a regex rule (prefixed into the managed namespace unless managed=False)."""
        rule = RegexRule(
            id=rule_id,
            script_name=ensure_managed_name(name) if managed else name,
            enabled=enabled,
            find_regex="<status/>",
            replace_string=replace_string
        )
        self.rules.update_rules(lambda current: current + [rule])
        return rule

    def remove_entry(self, worldbook_name: str, uid: int):
        self.worldbooks.update_entries(
            worldbook_name, lambda entries: [e for e in entries if e.uid != uid]
        )

    def remove_worldbook(self, worldbook_name: str):
        self.worldbooks.path_for(worldbook_name).unlink()

    def remove_rule(self, rule_id: str):
        self.rules.update_rules(lambda current: [r for r in current if r.id != rule_id])

    def rename_rule(self, rule_id: str, script_name: str):
        def rename(current):
            for rule in current:
                if rule.id == rule_id:
                    rule.script_name = script_name
            return current
        self.rules.update_rules(rename)

    def entry_enabled(self, worldbook_name: str, uid: int) -> Optional[bool]:
        for entry in self.worldbooks.read_entries(worldbook_name):
            if entry.uid == uid:
                return entry.enabled
        return None

    # =========================================================================
    # Services
    # =========================================================================

    def create_registry(self, id_factory=None) -> BindingRegistry:
        return BindingRegistry(
            settings=self.settings,
            worldbooks=self.worldbooks,
            rules=self.rules,
            id_factory=id_factory or self.next_id
        )

    def create_reconciler(self) -> LiveStateReconciler:
        return LiveStateReconciler(self.worldbooks, self.rules)

    def create_toggler(self) -> BindingToggler:
        return BindingToggler(self.worldbooks, self.rules, self.create_reconciler())

    def create_importer(self) -> RegexImporter:
        return RegexImporter(self.rules)

    def bind(self, worldbook_name: str, uid: int, rule_id: str) -> Optional[Binding]:
        """Create one binding through the registry; returns it (None if skipped)."""
        created = self.registry.create([EntrySelection(worldbook_name, uid)], [rule_id])
        if not created:
            return None
        return self.registry.list()[-1]

    # =========================================================================
    # CLI
    # =========================================================================

    def create_cli(self) -> StatusBarCLI:
        """Real CLI on the factory's project directory."""
        return StatusBarCLI(self.tmp_path)

    def create_cli_mock(self) -> Mock:
        """
        Mock CLI with real stores and services.

        resolve_binding() is a Mock; set its return_value per test.
        """
        cli = Mock()
        cli.project_dir = self.tmp_path
        cli.config = self.config
        cli.symbols = self.symbols
        cli.codec = self.codec
        cli.worldbooks = self.worldbooks
        cli.rules = self.rules
        cli.registry = self.registry
        cli.reconciler = self.create_reconciler()
        cli.toggler = self.create_toggler()
        cli.importer = self.create_importer()

        # Real format_id method
        cli.format_id = lambda full_id: f"[{self.codec.encode(full_id)}]"
        cli.resolve_binding = Mock(return_value=None)
        return cli

    def create_command(self, command_class, cli=None):
        """Create a command instance bound to a CLI (mock by default)."""
        if cli is None:
            cli = self.create_cli_mock()

        cmd = command_class.__new__(command_class)
        cmd._cli = cli
        return cmd
