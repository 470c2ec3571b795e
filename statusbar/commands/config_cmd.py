"""
ConfigCommand — Configuration display and updates
"""

from ..commands.base import BaseCommand
from ..presentation.symbols import safe_print
from ..presentation.template import OutputTemplate


class ConfigCommand(BaseCommand):
    """Show or set configuration values."""

    def show_config(self):
        """Show current configuration."""
        template = OutputTemplate(symbols=self.symbols)
        template.header("STATUSBAR CONFIG", "Current Configuration")
        template.section("SETTINGS", self._cli.config_manager.display())
        safe_print(template.render(command="config"))

    def set_config(self, key: str, value: str, scope: str = "project"):
        """Set a configuration value."""
        symbols = self.symbols
        manager = self._cli.config_manager
        error = manager.set(key, value, scope)

        template = OutputTemplate(symbols=symbols)
        if error:
            template.header("STATUSBAR CONFIG", "Error")
            template.section("ERROR", error)
        else:
            template.header("STATUSBAR CONFIG", "Configuration Updated")
            template.section("SETTING", f"Set {key} = {value}")
            saved_to = manager.project_config_path if scope == "project" else manager.user_config_path
            template.section("SAVED TO", str(saved_to))
            template.footer(f"{symbols.check_pass} Configuration saved")
        safe_print(template.render(command="config"))
        return error


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'config'


def register_parser(subparsers):
    """Register config command parser."""
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', metavar='KEY=VALUE',
                   help='Set config value (e.g., naming.prefix="[状态栏] ")')
    p.add_argument('--user', action='store_true',
                   help='Apply to user config instead of project')
    return p


def handle(cli, args):
    """Handle config command dispatch."""
    if args.set:
        if '=' not in args.set:
            print("Error: Use format KEY=VALUE (e.g., display.symbols=ascii)")
            return
        key, value = args.set.split('=', 1)
        scope = "user" if args.user else "project"
        cli._config_cmd.set_config(key, value, scope)
    else:
        cli._config_cmd.show_config()
