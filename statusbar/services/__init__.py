"""
Services — Host collections the manager works against

- Worldbooks: named collections of toggleable entries
- Regexes: the regex rule collection and its native import
"""

from .worldbooks import (
    WorldbookEntry, WorldbookStore, JsonWorldbookStore, WorldbookError, UNNAMED_ENTRY,
)
from .regexes import (
    RegexRule, RuleStore, JsonRuleStore, RuleStoreError, normalize_native_rule,
)

__all__ = [
    # Worldbooks
    "WorldbookEntry", "WorldbookStore", "JsonWorldbookStore", "WorldbookError", "UNNAMED_ENTRY",
    # Regexes
    "RegexRule", "RuleStore", "JsonRuleStore", "RuleStoreError", "normalize_native_rule",
]
