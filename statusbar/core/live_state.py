"""
Live State — What the host stores say about a binding right now

Each side of a binding is reported independently:
    True   enabled
    False  disabled
    None   unresolvable (worldbook unreadable, entry or rule gone)

None is not "disabled". Nothing is cached; every call asks the stores.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..services.worldbooks import WorldbookStore, WorldbookEntry
from ..services.regexes import RuleStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiveState:
    """Current enabled status of both sides of a binding."""
    worldbook_enabled: Optional[bool]
    regex_enabled: Optional[bool]

    @property
    def both_enabled(self) -> bool:
        """True only when both sides resolve and are enabled."""
        return self.worldbook_enabled is True and self.regex_enabled is True

    @property
    def is_orphaned(self) -> bool:
        """Neither side can be resolved."""
        return self.worldbook_enabled is None and self.regex_enabled is None

    def to_dict(self) -> dict:
        return {
            "worldbook_enabled": self.worldbook_enabled,
            "regex_enabled": self.regex_enabled,
        }


class LiveStateReconciler:
    """Reads live enabled state for bindings without ever raising."""

    def __init__(self, worldbooks: WorldbookStore, rules: RuleStore):
        self.worldbooks = worldbooks
        self.rules = rules

    def get_live_state(self, binding) -> LiveState:
        """Query both stores for one binding."""
        entries = self._read_entries(binding.worldbook_name)
        rules = self._read_rules()
        return self._resolve(binding, entries, rules)

    def snapshot(self, bindings) -> List[Tuple[object, LiveState]]:
        """
        Live state for many bindings.

        Each worldbook and the rule collection are read once per call.
        """
        cache: Dict[str, Optional[List[WorldbookEntry]]] = {}
        rules = self._read_rules()
        result = []
        for binding in bindings:
            if binding.worldbook_name not in cache:
                cache[binding.worldbook_name] = self._read_entries(binding.worldbook_name)
            result.append((binding, self._resolve(binding, cache[binding.worldbook_name], rules)))
        return result

    def _resolve(self, binding, entries, rules) -> LiveState:
        worldbook_enabled = None
        if entries is not None:
            entry = next((e for e in entries if e.uid == binding.worldbook_entry_uid), None)
            if entry is not None:
                worldbook_enabled = entry.enabled

        regex_enabled = None
        if rules is not None:
            rule = next((r for r in rules if r.id == binding.regex_id), None)
            if rule is not None:
                regex_enabled = rule.enabled

        return LiveState(worldbook_enabled=worldbook_enabled, regex_enabled=regex_enabled)

    def _read_entries(self, worldbook_name: str) -> Optional[List[WorldbookEntry]]:
        try:
            return self.worldbooks.read_entries(worldbook_name)
        except Exception as e:
            logger.debug("Worldbook %s unreadable: %s", worldbook_name, e)
            return None

    def _read_rules(self):
        try:
            return self.rules.list_rules()
        except Exception as e:
            logger.debug("Rule collection unreadable: %s", e)
            return None
