"""
Binding Toggle — Switch both sides of a binding together

The two host stores have no shared transaction, so the toggle is
best-effort: each side is updated on its own and reported on its own.
One side missing is a normal outcome. Both sides missing means the
binding is orphaned and raises SyncError.

Every write re-matches by identity (entry uid, rule id), never by
position, so re-running a toggle gives the same end state.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from .naming import REGEX_PREFIX, ensure_managed_name
from .live_state import LiveStateReconciler
from ..services.worldbooks import WorldbookStore, WorldbookError
from ..services.regexes import RuleStore, RuleStoreError

logger = logging.getLogger(__name__)


class SyncError(Exception):
    """Neither the worldbook entry nor the regex rule of a binding was found."""

    def __init__(self, binding, message: str = None):
        self.binding = binding
        super().__init__(message or f"No worldbook entry or regex rule found for binding {binding.id}")


@dataclass(frozen=True)
class ToggleResult:
    """Which sides of a binding were actually updated."""
    worldbook_matched: bool
    regex_matched: bool

    @property
    def any_matched(self) -> bool:
        return self.worldbook_matched or self.regex_matched

    @property
    def is_partial(self) -> bool:
        return self.any_matched and not (self.worldbook_matched and self.regex_matched)


def set_binding_enabled(
    binding,
    enabled: bool,
    worldbooks: WorldbookStore,
    rules: RuleStore,
    prefix: str = REGEX_PREFIX
) -> ToggleResult:
    """
    Set enabled on the binding's entry and rule.

    The rule's script name is pushed back into the managed namespace on
    every call, even when enabled does not change.

    Raises:
        SyncError: If neither side matched
    """
    worldbook_matched = False
    regex_matched = False

    def toggle_entries(entries):
        nonlocal worldbook_matched
        updated = []
        for entry in entries:
            if entry.uid == binding.worldbook_entry_uid:
                worldbook_matched = True
                entry.enabled = enabled
            updated.append(entry)
        return updated

    def toggle_rules(current):
        nonlocal regex_matched
        updated = []
        for rule in current:
            if rule.id == binding.regex_id:
                regex_matched = True
                rule.enabled = enabled
                rule.script_name = ensure_managed_name(rule.script_name, prefix)
            updated.append(rule)
        return updated

    try:
        worldbooks.update_entries(binding.worldbook_name, toggle_entries)
    except WorldbookError as e:
        logger.warning("Worldbook side of %s not updated: %s", binding.id, e)
        worldbook_matched = False

    try:
        rules.update_rules(toggle_rules)
    except RuleStoreError as e:
        logger.warning("Regex side of %s not updated: %s", binding.id, e)
        regex_matched = False

    if not worldbook_matched and not regex_matched:
        raise SyncError(binding)

    return ToggleResult(worldbook_matched=worldbook_matched, regex_matched=regex_matched)


class BindingToggler:
    """Toggle bindings against their live state."""

    def __init__(
        self,
        worldbooks: WorldbookStore,
        rules: RuleStore,
        reconciler: LiveStateReconciler,
        prefix: str = REGEX_PREFIX
    ):
        self.worldbooks = worldbooks
        self.rules = rules
        self.reconciler = reconciler
        self.prefix = prefix

    def set_enabled(self, binding, enabled: bool) -> ToggleResult:
        """Force both sides on or off."""
        return set_binding_enabled(binding, enabled, self.worldbooks, self.rules, self.prefix)

    def toggle(self, binding) -> Tuple[bool, ToggleResult]:
        """
        Flip a binding.

        Target is "off" only when both sides are currently on; any
        unresolvable or disabled side means "on". Both sides are always
        attempted.

        Returns:
            (target enabled value, ToggleResult)
        """
        live = self.reconciler.get_live_state(binding)
        target = not live.both_enabled
        return target, self.set_enabled(binding, target)
