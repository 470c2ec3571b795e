"""
RenameCommand — Change a binding's display label
"""

from ..commands.base import BaseCommand
from ..presentation.symbols import safe_print


class RenameCommand(BaseCommand):
    """Relabel a binding. Entry and rule are not touched."""

    def rename(self, query: str, label: str):
        binding = self._cli.resolve_binding(query)
        if binding is None:
            return None

        if not (label or "").strip():
            print(f"{self.symbols.check_warn} Label cannot be empty.")
            return None

        updated = self.registry.rename(binding.id, label)
        if updated is None:
            print(f"{self.symbols.check_warn} Binding no longer exists.")
            return None

        safe_print(f"{self.symbols.check_pass} Renamed {self._cli.format_id(updated.id)} "
                   f"{binding.label} {self.symbols.arrow} {updated.label}")
        return updated


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'rename'


def register_parser(subparsers):
    """Register rename command parser."""
    p = subparsers.add_parser('rename', help='Change the label of a binding')
    p.add_argument('binding', help='Binding id, short code (AA-BB), id prefix or label')
    p.add_argument('label', help='New label')
    return p


def handle(cli, args):
    """Handle rename command dispatch."""
    cli._rename_cmd.rename(args.binding, args.label)
