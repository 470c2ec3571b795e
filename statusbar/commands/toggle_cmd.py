"""
ToggleCommand — Switch a binding's entry and rule together

toggle:  off when both sides are on, otherwise on
enable:  force both sides on
disable: force both sides off

One missing side is reported but not an error. Both sides missing
means the binding is orphaned and should be deleted.
"""

from typing import Optional

from ..commands.base import BaseCommand
from ..core.toggle import SyncError, ToggleResult
from ..presentation.symbols import safe_print
from ..presentation.template import OutputTemplate


class ToggleCommand(BaseCommand):
    """Toggle or force the enabled state of a binding."""

    def toggle(self, query: str, enabled: Optional[bool] = None) -> Optional[ToggleResult]:
        """
        Toggle a binding (or force it with enabled=True/False).

        Args:
            query: Binding id, short code, id prefix or label
            enabled: None to flip, True/False to force

        Returns:
            ToggleResult, or None when nothing was toggled
        """
        binding = self._cli.resolve_binding(query)
        if binding is None:
            return None

        symbols = self.symbols
        template = OutputTemplate(symbols=symbols)

        try:
            if enabled is None:
                target, result = self.toggler.toggle(binding)
            else:
                target, result = enabled, self.toggler.set_enabled(binding, enabled)
        except SyncError as e:
            template.header("STATUSBAR TOGGLE", "Binding Orphaned")
            reference = f"{self._cli.format_id(binding.id)} {binding.label}"
            template.section("BINDING", reference)
            template.section("ERROR", f"{symbols.check_fail} {e}")
            safe_print(template.render(command="toggle", context={"orphaned": True}))
            return None

        state = "enabled" if target else "disabled"
        template.header("STATUSBAR TOGGLE", state.capitalize())

        lines = [f"{symbols.check_pass} {self._cli.format_id(binding.id)} {binding.label}: {state}"]
        if not result.worldbook_matched:
            lines.append(
                f"{symbols.check_warn} Worldbook entry {binding.worldbook_name}:{binding.worldbook_entry_uid} "
                f"not found; only the regex was updated"
            )
        if not result.regex_matched:
            lines.append(
                f"{symbols.check_warn} Regex rule {binding.regex_id} not found; "
                f"only the worldbook entry was updated"
            )
        template.section("RESULT", "\n".join(lines))
        safe_print(template.render(command="toggle", context={"partial": result.is_partial}))
        return result


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAMES = ['toggle', 'enable', 'disable']


def register_parser(subparsers):
    """Register toggle, enable and disable command parsers."""
    parsers = []
    for name, help_text in (
        ('toggle', 'Flip a binding (off if both sides are on, otherwise on)'),
        ('enable', 'Turn both sides of a binding on'),
        ('disable', 'Turn both sides of a binding off'),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument('binding', help='Binding id, short code (AA-BB), id prefix or label')
        parsers.append(p)
    return parsers


def handle(cli, args):
    """Handle toggle, enable or disable command dispatch."""
    if args.command == 'enable':
        cli._toggle_cmd.toggle(args.binding, enabled=True)
    elif args.command == 'disable':
        cli._toggle_cmd.toggle(args.binding, enabled=False)
    else:
        cli._toggle_cmd.toggle(args.binding)
