"""
PreviewCommand — Show the markup a bound regex renders

Prints the rule's replace_string without its code fence, or writes it
to a file (open it in a browser to see the status bar).
"""

from pathlib import Path
from typing import Optional

from ..commands.base import BaseCommand
from ..presentation.preview import build_preview
from ..presentation.symbols import safe_print, sanitize_control_chars


class PreviewCommand(BaseCommand):
    """Preview a binding's regex output."""

    def preview(self, query: str, output: Optional[str] = None) -> Optional[str]:
        binding = self._cli.resolve_binding(query)
        if binding is None:
            return None

        symbols = self.symbols
        rule = self.rules.get(binding.regex_id)
        if rule is None:
            print(f"{symbols.check_fail} Regex rule {binding.regex_id} no longer exists.")
            return None

        html = build_preview(rule)

        if output:
            try:
                Path(output).write_text(html, encoding='utf-8')
            except OSError as e:
                print(f"{symbols.check_fail} Cannot write {output}: {e}")
                return None
            print(f"{symbols.check_pass} Preview written to {output}")
            return html

        # Imported markup is untrusted
        safe_print(sanitize_control_chars(html))
        return html


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'preview'


def register_parser(subparsers):
    """Register preview command parser."""
    p = subparsers.add_parser('preview', help="Show the markup a binding's regex produces")
    p.add_argument('binding', help='Binding id, short code (AA-BB), id prefix or label')
    p.add_argument('--output', '-o', metavar='FILE', help='Write the preview to a file')
    return p


def handle(cli, args):
    """Handle preview command dispatch."""
    cli._preview_cmd.preview(args.binding, output=args.output)
