"""
ListCommand — Bindings with live state, and the host collections

Default listing shows every binding with the current enabled state of
both sides, read fresh from the host stores:
    ●  enabled    ○  disabled    ⊘  not found

Other views help pick what to bind:
- --regexes: managed regex rules (--all for every rule)
- --worldbooks: worldbook names with entry counts
- --entries NAME: entries of one worldbook
"""

from dataclasses import replace
from typing import Optional

from ..commands.base import BaseCommand
from ..core.naming import is_managed
from ..output import OutputSpec, render
from ..presentation.symbols import safe_print, symbol_for_state
from ..presentation.template import OutputTemplate
from ..services.worldbooks import WorldbookError


class ListCommand(BaseCommand):
    """Read-only views over bindings and host collections."""

    def _format(self, output_format: Optional[str]) -> str:
        return output_format or self.config.display.format

    def _emit(self, spec: OutputSpec, output_format: str, full: bool, title: str, subtitle: str,
              summary: str, context: dict = None, legend: dict = None):
        """JSON goes out bare (for piping); other formats are wrapped in the template."""
        body = render(replace(spec, title=None), format=output_format, symbols=self.symbols, full=full, codec=self.codec)
        if output_format == "json":
            safe_print(body)
            return

        template = OutputTemplate(symbols=self.symbols)
        template.header(title, subtitle)
        if legend:
            template.legend(legend)
        template.section(spec.title or "", body)
        template.footer(summary)
        safe_print(template.render(command="list", context=context or {}))

    def binding_rows(self) -> list:
        """One row per binding, with live state of both sides."""
        symbols = self.symbols
        rows = []
        for binding, live in self.reconciler.snapshot(self.registry.list()):
            wb_mark = symbol_for_state(symbols, live.worldbook_enabled)
            rx_mark = symbol_for_state(symbols, live.regex_enabled)
            entry = f"{binding.worldbook_name}:{binding.worldbook_entry_uid} {binding.worldbook_entry_name}"
            rows.append({
                "id": binding.id,
                "code": self.codec.encode(binding.id),
                "label": binding.label,
                "worldbook_name": binding.worldbook_name,
                "worldbook_entry_uid": binding.worldbook_entry_uid,
                "regex_id": binding.regex_id,
                "regex_script_name": binding.regex_script_name,
                "worldbook_enabled": live.worldbook_enabled,
                "regex_enabled": live.regex_enabled,
                "orphaned": live.is_orphaned,
                "_entry": entry,
                "_wb": wb_mark,
                "_rx": rx_mark,
                "_line": f"{self._cli.format_id(binding.id)} {wb_mark}{rx_mark} {binding.label}",
            })
        return rows

    def list_bindings(self, output_format: Optional[str] = None, full: bool = False):
        """Show all bindings with live state."""
        symbols = self.symbols
        rows = self.binding_rows()
        orphans = sum(1 for row in rows if row["orphaned"])

        spec = OutputSpec(
            data=rows,
            shape="table",
            title="BINDINGS",
            columns=["Code", "Label", "Entry", "WB", "Regex", "RX"],
            column_keys=["code", "label", "_entry", "_wb", "regex_script_name", "_rx"],
            empty_message="No bindings yet."
        )
        self._emit(
            spec, self._format(output_format), full,
            "STATUSBAR LIST", "Bindings",
            summary=f"{len(rows)} binding(s) | {orphans} orphaned",
            context={"has_orphans": orphans > 0, "empty": not rows},
            legend={symbols.enabled: "enabled", symbols.disabled: "disabled", symbols.missing: "not found"}
        )

    def list_regexes(self, output_format: Optional[str] = None, full: bool = False, show_all: bool = False):
        """Show managed regex rules (every rule with show_all)."""
        rules = self.rules.list_rules()
        if not show_all:
            rules = [rule for rule in rules if is_managed(rule.script_name, self.prefix)]

        rows = [{
            "id": rule.id,
            "name": rule.script_name,
            "enabled": rule.enabled,
            "_state": symbol_for_state(self.symbols, rule.enabled),
            "_line": f"{symbol_for_state(self.symbols, rule.enabled)} {rule.script_name}  ({rule.id})",
        } for rule in rules]

        spec = OutputSpec(
            data=rows,
            shape="table",
            title="REGEX RULES" if show_all else "MANAGED REGEX RULES",
            columns=["Id", "Name", "On"],
            column_keys=["id", "name", "_state"],
            empty_message="No managed regex rules. Import some with: statusbar import <file>"
        )
        self._emit(
            spec, self._format(output_format), full,
            "STATUSBAR LIST", "Regex Rules",
            summary=f"{len(rows)} rule(s)"
        )

    def list_worldbooks(self, output_format: Optional[str] = None, full: bool = False):
        """Show worldbook names with entry counts."""
        rows = []
        for name in self.worldbooks.list_names():
            try:
                count = len(self.worldbooks.read_entries(name))
            except WorldbookError:
                count = None
            rows.append({
                "name": name,
                "entries": count,
                "_count": "unreadable" if count is None else str(count),
            })

        spec = OutputSpec(
            data=rows,
            shape="table",
            title="WORLDBOOKS",
            columns=["Name", "Entries"],
            column_keys=["name", "_count"],
            empty_message="No worldbooks found."
        )
        self._emit(
            spec, self._format(output_format), full,
            "STATUSBAR LIST", "Worldbooks",
            summary=f"{len(rows)} worldbook(s)"
        )

    def list_entries(self, worldbook_name: str, output_format: Optional[str] = None, full: bool = False):
        """Show the entries of one worldbook."""
        try:
            entries = self.worldbooks.read_entries(worldbook_name)
        except WorldbookError as e:
            print(f"{self.symbols.check_fail} {e}")
            return

        unnamed = self.config.naming.unnamed_entry
        rows = [{
            "uid": entry.uid,
            "name": entry.display_name(unnamed),
            "enabled": entry.enabled,
            "_pick": f"{worldbook_name}:{entry.uid}",
            "_state": symbol_for_state(self.symbols, entry.enabled),
            "_line": f"{symbol_for_state(self.symbols, entry.enabled)} "
                     f"{worldbook_name}:{entry.uid}  {entry.display_name(unnamed)}",
        } for entry in entries]

        spec = OutputSpec(
            data=rows,
            shape="table",
            title=f"ENTRIES ({worldbook_name})",
            columns=["Pick", "Name", "On"],
            column_keys=["_pick", "name", "_state"],
            empty_message="This worldbook has no entries."
        )
        self._emit(
            spec, self._format(output_format), full,
            "STATUSBAR LIST", f"Worldbook {worldbook_name}",
            summary=f"{len(rows)} entr{'y' if len(rows) == 1 else 'ies'}"
        )


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'list'


def register_parser(subparsers):
    """Register list command parser."""
    p = subparsers.add_parser('list', help='List bindings with live state, or host collections')
    view = p.add_mutually_exclusive_group()
    view.add_argument('--regexes', action='store_true', help='List managed regex rules')
    view.add_argument('--worldbooks', action='store_true', help='List worldbooks')
    view.add_argument('--entries', metavar='WORLDBOOK', help='List entries of a worldbook')
    p.add_argument('--all', action='store_true', help='With --regexes: include unmanaged rules')
    p.add_argument('--format', '-f', choices=['auto', 'table', 'list', 'json'],
                   help='Output format (default: display.format)')
    p.add_argument('--full', action='store_true', help='Do not truncate content')
    return p


def handle(cli, args):
    """Handle list command dispatch."""
    output_format = getattr(args, 'format', None)
    full = getattr(args, 'full', False)

    if args.regexes:
        cli._list_cmd.list_regexes(output_format, full, show_all=args.all)
    elif args.worldbooks:
        cli._list_cmd.list_worldbooks(output_format, full)
    elif args.entries:
        cli._list_cmd.list_entries(args.entries, output_format, full)
    else:
        cli._list_cmd.list_bindings(output_format, full)
