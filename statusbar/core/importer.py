"""
Regex Importer — Bring exported regex files under management

The host does the actual import. This module wraps it:
1. Remember which rule ids exist before the import
2. Guess display names from the export file (best effort)
3. Hand the raw file to the host's native import
4. Tag only the rules that appeared, leaving older rules alone

Name guessing never blocks an import: if no names can be inferred, new
rules keep their own names and just gain the managed prefix.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List

import orjson

from .naming import REGEX_PREFIX, ensure_managed_name, is_managed
from ..services.regexes import RuleStore, RuleStoreError

logger = logging.getLogger(__name__)

# Checked in order; the first key that is present wins
NAME_KEYS = ("script_name", "scriptName", "name", "title")


class RegexImportError(Exception):
    """The host rejected the regex export file."""


@dataclass
class ImportResult:
    """Outcome of a successful import."""
    managed_count: int
    new_rule_ids: List[str] = field(default_factory=list)

    @property
    def imported_count(self) -> int:
        return len(self.new_rule_ids)


def parse_imported_rule_list(payload: Any) -> List[Any]:
    """
    Extract rule descriptors from an export payload.

    Accepted shapes, in order: a list; {"regex_scripts": [...]};
    {"data": {"regex_scripts": [...]}}; a single object.
    Anything else gives an empty list.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        if isinstance(payload.get("regex_scripts"), list):
            return payload["regex_scripts"]
        data = payload.get("data")
        if isinstance(data, dict) and isinstance(data.get("regex_scripts"), list):
            return data["regex_scripts"]
        return [payload]
    return []


def rule_display_name(item: Any) -> str:
    """Best-effort display name of a rule descriptor ("" if none)."""
    if not isinstance(item, dict):
        return ""
    for key in NAME_KEYS:
        value = item.get(key)
        if value is not None:
            return str(value).strip()
    return ""


def infer_rule_names(content: str) -> List[str]:
    """Ordered non-empty display names found in an export file."""
    try:
        payload = orjson.loads(content)
    except orjson.JSONDecodeError:
        return []
    names = (rule_display_name(item) for item in parse_imported_rule_list(payload))
    return [name for name in names if name]


class RegexImporter:
    """Import regex export files and tag new rules as managed."""

    def __init__(self, rules: RuleStore, prefix: str = REGEX_PREFIX):
        self.rules = rules
        self.prefix = prefix

    def import_rules(self, filename: str, content: str) -> ImportResult:
        """
        Import a raw regex export.

        Args:
            filename: Original file name (passed to the host import)
            content: Raw file content

        Returns:
            ImportResult; managed_count is the size of the managed subset
            after import, not only the newly imported rules

        Raises:
            RegexImportError: If the host could not ingest the file
        """
        try:
            before_ids = {rule.id for rule in self.rules.list_rules()}
        except RuleStoreError as e:
            raise RegexImportError(str(e)) from e

        inferred_names = infer_rule_names(content)

        try:
            imported = self.rules.ingest_raw_export(filename, content)
        except RuleStoreError as e:
            raise RegexImportError(str(e)) from e
        if not imported:
            raise RegexImportError(f"Not a regex export file: {filename}")

        new_rule_ids = []

        def tag_new_rules(current):
            name_index = 0
            for rule in current:
                if rule.id in before_ids:
                    continue
                if name_index < len(inferred_names):
                    name = inferred_names[name_index]
                else:
                    name = rule.script_name
                name_index += 1
                rule.script_name = ensure_managed_name(name, self.prefix)
                new_rule_ids.append(rule.id)
            return current

        try:
            after = self.rules.update_rules(tag_new_rules)
        except RuleStoreError as e:
            raise RegexImportError(str(e)) from e

        logger.debug("Imported %d rule(s) from %s", len(new_rule_ids), filename)
        managed_count = sum(1 for rule in after if is_managed(rule.script_name, self.prefix))
        return ImportResult(managed_count=managed_count, new_rule_ids=new_rule_ids)
