"""
BindCommand — Bind worldbook entries to managed regex rules

Every selected entry is bound to every selected rule. Pairs that are
already bound, missing entries and unmanaged rules are skipped.

Entries are picked as WORLDBOOK:UID. Rules are picked by id or by
managed script name (with or without the prefix).
"""

from typing import List

from ..commands.base import BaseCommand
from ..core.bindings import parse_entry_selection, normalize_selections
from ..core.naming import ensure_managed_name
from ..presentation.symbols import safe_print
from ..presentation.template import OutputTemplate


class BindCommand(BaseCommand):
    """Create bindings from the cross product of entry and rule picks."""

    def resolve_regex_ids(self, values: List[str]) -> List[str]:
        """
        Map user picks to rule ids.

        A pick that matches a managed rule id is kept. Otherwise every
        managed rule whose name matches the pick is used. Unknown picks
        pass through and are skipped by the registry.
        """
        managed = self.registry.managed_rules()
        ids = []
        for value in values:
            value = (value or "").strip()
            if not value:
                continue
            matched = [rule.id for rule in managed if rule.id == value]
            if not matched:
                wanted = ensure_managed_name(value, self.prefix)
                matched = [rule.id for rule in managed if rule.script_name == wanted]
            ids.extend(matched or [value])
        return ids

    def bind(self, entries: List[str], regexes: List[str]) -> int:
        """
        Create bindings.

        Args:
            entries: "WORLDBOOK:UID" picks
            regexes: Rule ids or managed rule names

        Returns:
            Number of bindings created
        """
        symbols = self.symbols
        selections = [parse_entry_selection(value) for value in entries or []]
        entry_picks, regex_ids = normalize_selections(selections, self.resolve_regex_ids(regexes or []))

        template = OutputTemplate(symbols=symbols)
        template.header("STATUSBAR BIND", "Create Bindings")

        if not entry_picks or not regex_ids:
            template.section(
                "NOTHING SELECTED",
                f"{symbols.check_warn} Select at least one worldbook entry (WORLDBOOK:UID) "
                f"and one managed regex."
            )
            safe_print(template.render(command="bind", context={"nothing_created": True}))
            return 0

        created = self.registry.create(entry_picks, regex_ids)

        if created:
            template.section("RESULT", f"{symbols.check_pass} Created {created} binding(s)")
        else:
            template.section(
                "RESULT",
                f"{symbols.check_warn} No new bindings. Pairs may already be bound, "
                f"entries may be missing, or rules may be outside the managed namespace."
            )
        template.footer(f"{self.registry.count()} binding(s) total")
        safe_print(template.render(command="bind", context={"nothing_created": created == 0}))
        return created


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'bind'


def register_parser(subparsers):
    """Register bind command parser."""
    p = subparsers.add_parser('bind', help='Bind worldbook entries to managed regex rules')
    p.add_argument('--entry', '-e', action='append', default=[], metavar='WORLDBOOK:UID',
                   help='Worldbook entry to bind (repeatable)')
    p.add_argument('--regex', '-r', action='append', default=[], metavar='ID_OR_NAME',
                   help='Managed regex rule id or name (repeatable)')
    return p


def handle(cli, args):
    """Handle bind command dispatch."""
    cli._bind_cmd.bind(args.entry, args.regex)
