"""
ImportCommand — Import a regex export file into the managed namespace

The host ingests the file; new rules are then renamed into the managed
namespace so they can be bound. Rules that existed before the import
are left alone.
"""

from pathlib import Path
from typing import Optional

from ..commands.base import BaseCommand
from ..core.importer import RegexImportError, ImportResult
from ..presentation.symbols import safe_print
from ..presentation.template import OutputTemplate


class ImportCommand(BaseCommand):
    """Import regex export files."""

    def import_file(self, file_path: str) -> Optional[ImportResult]:
        symbols = self.symbols
        path = Path(file_path)
        template = OutputTemplate(symbols=symbols)

        try:
            content = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            template.header("STATUSBAR IMPORT", "Cannot Read File")
            template.section("ERROR", f"{symbols.check_fail} {path}: {e}")
            safe_print(template.render(command="import", context={"failed": True}))
            return None

        try:
            result = self.importer.import_rules(path.name, content)
        except RegexImportError as e:
            template.header("STATUSBAR IMPORT", "Import Failed")
            template.section("ERROR", f"{symbols.check_fail} {e}")
            safe_print(template.render(command="import", context={"failed": True}))
            return None

        template.header("STATUSBAR IMPORT", path.name)
        template.section(
            "RESULT",
            f"{symbols.check_pass} Imported {result.imported_count} rule(s)\n"
            f"{symbols.bullet} {result.managed_count} managed rule(s) in total"
        )
        safe_print(template.render(command="import"))
        return result


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'import'


def register_parser(subparsers):
    """Register import command parser."""
    p = subparsers.add_parser('import', help='Import a regex export file as managed rules')
    p.add_argument('file', help='Path to the exported regex JSON file')
    return p


def handle(cli, args):
    """Handle import command dispatch."""
    cli._import_cmd.import_file(args.file)
