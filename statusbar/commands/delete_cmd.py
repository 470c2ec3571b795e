"""
DeleteCommand — Remove a binding

Only the binding record goes away. The worldbook entry and the regex
rule stay in the host, in whatever state they are in.
"""

from ..commands.base import BaseCommand
from ..presentation.symbols import safe_print
from ..presentation.template import OutputTemplate


class DeleteCommand(BaseCommand):
    """Delete a binding by reference."""

    def delete(self, query: str) -> bool:
        binding = self._cli.resolve_binding(query)
        if binding is None:
            return False

        symbols = self.symbols
        removed = self.registry.delete(binding.id)

        template = OutputTemplate(symbols=symbols)
        template.header("STATUSBAR DELETE", "Binding Removed" if removed else "Nothing Removed")
        if removed:
            template.section("REMOVED", f"{symbols.check_pass} {self._cli.format_id(binding.id)} {binding.label}")
        else:
            template.section("RESULT", f"{symbols.check_warn} Binding no longer exists.")
        template.footer(f"{self.registry.count()} binding(s) left")
        safe_print(template.render(command="delete"))
        return removed


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'delete'


def register_parser(subparsers):
    """Register delete command parser."""
    p = subparsers.add_parser('delete', help='Delete a binding (entry and rule are kept)')
    p.add_argument('binding', help='Binding id, short code (AA-BB), id prefix or label')
    return p


def handle(cli, args):
    """Handle delete command dispatch."""
    cli._delete_cmd.delete(args.binding)
