"""
BaseCommand — Shared foundation for all CLI commands

Commands receive the CLI instance and reach its resources through
properties instead of building their own.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..cli import StatusBarCLI


class BaseCommand:
    """Base class for CLI commands with access to shared resources."""

    def __init__(self, cli: 'StatusBarCLI'):
        """
        Initialize command with CLI instance.

        Args:
            cli: The StatusBarCLI instance holding all resources
        """
        self._cli = cli

    # -------------------------------------------------------------------------
    # Core resources
    # -------------------------------------------------------------------------

    @property
    def project_dir(self):
        """Project root directory."""
        return self._cli.project_dir

    @property
    def config(self):
        """Application configuration."""
        return self._cli.config

    @property
    def symbols(self):
        """Symbol set for display (Unicode/ASCII)."""
        return self._cli.symbols

    @property
    def prefix(self):
        """Managed regex name prefix."""
        return self._cli.config.naming.prefix

    # -------------------------------------------------------------------------
    # Host stores
    # -------------------------------------------------------------------------

    @property
    def worldbooks(self):
        """Host worldbook store."""
        return self._cli.worldbooks

    @property
    def rules(self):
        """Host regex rule store."""
        return self._cli.rules

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def registry(self):
        """Binding registry."""
        return self._cli.registry

    @property
    def reconciler(self):
        """Live-state reconciler."""
        return self._cli.reconciler

    @property
    def toggler(self):
        """Dual-resource toggle."""
        return self._cli.toggler

    @property
    def importer(self):
        """Regex importer."""
        return self._cli.importer

    @property
    def codec(self):
        """Short code codec for binding ids."""
        return self._cli.codec

    @property
    def resolver(self):
        """Binding resolver for user-typed references."""
        return self._cli.resolver
