"""
CLI -- Command interface for the status bar manager

Wires the host stores, the binding registry and the services together,
then hands off to self-registered command modules.

Host layout (relative paths resolve under .statusbar/):
    worldbooks/<name>.json   worldbook entries
    regexes.json             regex rules
    settings.json            shared extension settings (bindings live here)
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .config import ConfigManager
from .core.bindings import Binding, BindingRegistry
from .core.importer import RegexImporter
from .core.live_state import LiveStateReconciler
from .core.resolver import BindingResolver, ResolveStatus
from .core.settings import SettingsStore, SettingsError
from .core.toggle import BindingToggler
from .output.base import _is_debug_mode
from .presentation.codec import IDCodec
from .presentation.symbols import get_symbols, safe_print
from .services.regexes import JsonRuleStore, RuleStoreError
from .services.worldbooks import JsonWorldbookStore, WorldbookError
from .commands.bind_cmd import BindCommand
from .commands.list_cmd import ListCommand
from .commands.toggle_cmd import ToggleCommand
from .commands.rename_cmd import RenameCommand
from .commands.delete_cmd import DeleteCommand
from .commands.import_cmd import ImportCommand
from .commands.preview_cmd import PreviewCommand
from .commands.config_cmd import ConfigCommand
from . import __version__

logger = logging.getLogger(__name__)


class StatusBarCLI:
    """Command-line interface for the status bar manager."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)
        self.config_manager = ConfigManager(self.project_dir)
        self.config = self.config_manager.load()
        self.data_dir = self.config_manager.data_dir

        # Initialize symbols based on config
        self.symbols = get_symbols(self.config.display.symbols)

        # Host stores
        host = self.config.host
        self.worldbooks = JsonWorldbookStore(self.config_manager.resolve_path(host.worldbook_dir))
        self.rules = JsonRuleStore(self.config_manager.resolve_path(host.regex_file))
        self.settings = SettingsStore(self.config_manager.resolve_path(host.settings_file))

        naming = self.config.naming
        self.registry = BindingRegistry(
            settings=self.settings,
            worldbooks=self.worldbooks,
            rules=self.rules,
            prefix=naming.prefix,
            unnamed_entry=naming.unnamed_entry
        )
        self.reconciler = LiveStateReconciler(self.worldbooks, self.rules)
        self.toggler = BindingToggler(self.worldbooks, self.rules, self.reconciler, prefix=naming.prefix)
        self.importer = RegexImporter(self.rules, prefix=naming.prefix)

        # Short codes for binding ids
        self.codec = IDCodec()
        self.resolver = BindingResolver(self.registry, self.codec)

        # Initialize command handlers
        self._bind_cmd = BindCommand(self)
        self._list_cmd = ListCommand(self)
        self._toggle_cmd = ToggleCommand(self)
        self._rename_cmd = RenameCommand(self)
        self._delete_cmd = DeleteCommand(self)
        self._import_cmd = ImportCommand(self)
        self._preview_cmd = PreviewCommand(self)
        self._config_cmd = ConfigCommand(self)

    def format_id(self, full_id: str) -> str:
        """
        Format a binding id for display.

        Returns:
            "[AA-BB]" normally, "[AA-BB|3f2a9c1e]" in debug mode
        """
        if not full_id:
            return "[]"

        code = self.codec.encode(full_id)
        if _is_debug_mode():
            return f"[{code}|{full_id[:8]}]"
        return f"[{code}]"

    def resolve_binding(self, query: str) -> Optional[Binding]:
        """
        Resolve user input to a binding, explaining misses.

        Returns:
            Binding, or None when nothing (or more than one) matched
        """
        result = self.resolver.resolve(query)
        symbols = self.symbols

        if result.status == ResolveStatus.FOUND:
            return result.binding

        if result.status == ResolveStatus.AMBIGUOUS:
            print(f"\nMultiple bindings match \"{query}\":\n")
            for binding in result.candidates:
                safe_print(f"  {self.format_id(binding.id)} {binding.label}")
            print(f"\n{symbols.arrow} Use the short code to pick one.")
            return None

        print(f"\n{symbols.check_warn} No binding matches \"{query}\".")
        if result.candidates:
            print("\nDid you mean:")
            for binding in result.candidates:
                safe_print(f"  {self.format_id(binding.id)} {binding.label}")
        print(f"\n{symbols.arrow} See all bindings: statusbar list")
        return None


def main():
    """
    Main entry point for the statusbar CLI.

    Parser definitions and dispatch logic live in the command modules.
    """
    parser = argparse.ArgumentParser(
        description="statusbar -- Bind worldbook entries to regex rules",
        epilog="One switch for both halves of a status bar."
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("STATUSBAR_PROJECT_PATH", "."),
        help='Project directory (default: STATUSBAR_PROJECT_PATH or current)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show diagnostic logging'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'statusbar {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Register all commands from command modules (self-registration pattern)
    from .commands import register_all, dispatch
    register_all(subparsers)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    if not args.command:
        parser.print_help()
        return

    try:
        cli = StatusBarCLI(Path(args.project))
        dispatch(args.command, cli, args)
    except KeyError as e:
        print(f"Error: {e}")
        parser.print_help()
    except SettingsError as e:
        logger.debug("Settings failure", exc_info=True)
        print(f"Error: bindings unavailable. {e}", file=sys.stderr)
        sys.exit(1)
    except (RuleStoreError, WorldbookError) as e:
        logger.debug("Host store failure", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
