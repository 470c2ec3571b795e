"""
Regex Store — Host collection of toggleable regex rules

Rules are owned by the host. The manager creates them only through
the host's native import, and afterwards only touches two fields:
enabled and script_name.

Storage (file-backed implementation):
    <regex_file>  ->  {"regex_scripts": [{"id": ..., "script_name": ..., ...}]}

Rules the manager cannot parse and the file's other keys survive updates.
"""

import os
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import orjson

from .records import merge_records, split_records


RuleTransform = Callable[[List['RegexRule']], List['RegexRule']]

# Native export field -> stored field
NATIVE_FIELDS = {
    "scriptName": "script_name",
    "findRegex": "find_regex",
    "replaceString": "replace_string",
    "trimStrings": "trim_strings",
    "placement": "placement",
    "markdownOnly": "markdown_only",
    "promptOnly": "prompt_only",
    "runOnEdit": "run_on_edit",
    "minDepth": "min_depth",
    "maxDepth": "max_depth",
}

CORE_FIELDS = ("id", "script_name", "enabled", "find_regex", "replace_string")


class RuleStoreError(Exception):
    """The rule collection could not be read or written."""


@dataclass
class RegexRule:
    """A single regex rewrite rule."""
    id: str
    script_name: str = ""
    enabled: bool = True
    find_regex: str = ""
    replace_string: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update({
            "id": self.id,
            "script_name": self.script_name,
            "enabled": self.enabled,
            "find_regex": self.find_regex,
            "replace_string": self.replace_string,
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RegexRule':
        extra = {k: v for k, v in data.items() if k not in CORE_FIELDS}
        return cls(
            id=str(data["id"]),
            script_name=str(data.get("script_name") or ""),
            enabled=bool(data.get("enabled", True)),
            find_regex=str(data.get("find_regex") or ""),
            replace_string=str(data.get("replace_string") or ""),
            extra=extra
        )


class RuleStore(ABC):
    """Read/update-by-replacement access to the regex rule collection."""

    @abstractmethod
    def list_rules(self) -> List[RegexRule]:
        """All rules in store order."""
        pass

    @abstractmethod
    def update_rules(self, transform: RuleTransform) -> List[RegexRule]:
        """Replace the collection with transform(current rules)."""
        pass

    @abstractmethod
    def ingest_raw_export(self, filename: str, content: str) -> bool:
        """
        Host-native bulk import of an exported rule file.

        Returns:
            False if the content is not a recognizable rule export
        """
        pass

    def get(self, rule_id: str) -> Optional[RegexRule]:
        """Find rule by id."""
        for rule in self.list_rules():
            if rule.id == rule_id:
                return rule
        return None


def normalize_native_rule(item: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a native (camelCase) export record to stored field names."""
    data = {}
    for key, value in item.items():
        if key == "disabled":
            data["enabled"] = not bool(value)
        else:
            data[NATIVE_FIELDS.get(key, key)] = value
    data.setdefault("enabled", True)
    return data


class JsonRuleStore(RuleStore):
    """
    Single JSON file holding the whole rule collection.

    Updates rewrite only the rules that parsed; anything else in the
    file is written back as it was.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load_document(self) -> Any:
        """Raw decoded rule file (None when the file does not exist yet)."""
        if not self.path.exists():
            return None

        try:
            return orjson.loads(self.path.read_bytes())
        except OSError as e:
            raise RuleStoreError(f"Cannot read rules: {e}") from e
        except orjson.JSONDecodeError as e:
            raise RuleStoreError(f"Malformed rule file {self.path}: {e}") from e

    def _raw_rules(self, document: Any) -> List[Any]:
        if document is None:
            return []
        raw_rules = document.get("regex_scripts", []) if isinstance(document, dict) else document
        if not isinstance(raw_rules, list):
            raise RuleStoreError(f"Malformed rule file {self.path}: 'regex_scripts' is not a list")
        return raw_rules

    def list_rules(self) -> List[RegexRule]:
        rules, _ = split_records(self._raw_rules(self._load_document()), RegexRule.from_dict)
        return rules

    def update_rules(self, transform: RuleTransform) -> List[RegexRule]:
        document = self._load_document()
        raw_rules = self._raw_rules(document)
        rules, slots = split_records(raw_rules, RegexRule.from_dict)

        rules = transform(rules)
        merged = merge_records(raw_rules, slots, [rule.to_dict() for rule in rules])

        if isinstance(document, list):
            document = merged
        else:
            document = {**(document or {}), "regex_scripts": merged}
        self._write(document)
        return rules

    def ingest_raw_export(self, filename: str, content: str) -> bool:
        try:
            payload = orjson.loads(content)
        except orjson.JSONDecodeError:
            return False

        if isinstance(payload, list):
            records = payload
        elif isinstance(payload, dict) and isinstance(payload.get("regex_scripts"), list):
            records = payload["regex_scripts"]
        elif isinstance(payload, dict) and isinstance(payload.get("data"), dict) \
                and isinstance(payload["data"].get("regex_scripts"), list):
            records = payload["data"]["regex_scripts"]
        elif isinstance(payload, dict):
            records = [payload]
        else:
            return False

        if not records:
            return False
        for record in records:
            if not isinstance(record, dict):
                return False
            if "findRegex" not in record and "find_regex" not in record:
                return False

        def append_imported(current):
            taken = {rule.id for rule in current}
            imported = []
            for record in records:
                data = normalize_native_rule(record)
                rule_id = data.get("id")
                if not isinstance(rule_id, str) or not rule_id or rule_id in taken:
                    rule_id = str(uuid.uuid4())
                data["id"] = rule_id
                taken.add(rule_id)
                imported.append(RegexRule.from_dict(data))
            return current + imported

        self.update_rules(append_imported)
        return True

    def _write(self, document: Any):
        payload = orjson.dumps(document, option=orjson.OPT_INDENT_2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path = self.path.with_suffix('.tmp')
            temp_path.write_bytes(payload)
            os.replace(temp_path, self.path)
        except OSError as e:
            raise RuleStoreError(f"Cannot write rules: {e}") from e
