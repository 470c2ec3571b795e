"""
Worldbook Store — Host collection of toggleable knowledge entries

Worldbooks are owned by the host, not by the manager.
The manager only reads entries and flips their enabled flag.

Storage (file-backed implementation):
    <worldbook_dir>/<name>.json  ->  {"entries": [{"uid": 0, "name": ..., "enabled": true, ...}]}

Fields the manager does not use, entries it cannot parse and the
file's other keys are carried through untouched on update.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List

import orjson

from .records import merge_records, split_records


UNNAMED_ENTRY = "未命名条目-{uid}"

EntryTransform = Callable[[List['WorldbookEntry']], List['WorldbookEntry']]


class WorldbookError(Exception):
    """A worldbook could not be read or written."""


@dataclass
class WorldbookEntry:
    """A single knowledge entry inside a worldbook."""
    uid: int
    name: str = ""
    enabled: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    def display_name(self, template: str = UNNAMED_ENTRY) -> str:
        """Entry name, or a placeholder built from the uid."""
        return self.name or template.format(uid=self.uid)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update({"uid": self.uid, "name": self.name, "enabled": self.enabled})
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WorldbookEntry':
        extra = {k: v for k, v in data.items() if k not in ("uid", "name", "enabled")}
        return cls(
            uid=int(data["uid"]),
            name=str(data.get("name") or ""),
            enabled=bool(data.get("enabled", True)),
            extra=extra
        )


class WorldbookStore(ABC):
    """Read/update-by-replacement access to named worldbooks."""

    @abstractmethod
    def list_names(self) -> List[str]:
        """Names of all available worldbooks."""
        pass

    @abstractmethod
    def read_entries(self, name: str) -> List[WorldbookEntry]:
        """
        Read all entries of a worldbook.

        Raises:
            WorldbookError: If the worldbook is missing or unreadable
        """
        pass

    @abstractmethod
    def update_entries(self, name: str, transform: EntryTransform) -> List[WorldbookEntry]:
        """
        Replace a worldbook's entries with transform(current entries).

        Returns:
            The entries as written

        Raises:
            WorldbookError: If the worldbook is missing or cannot be written
        """
        pass


class JsonWorldbookStore(WorldbookStore):
    """
    Directory of JSON worldbook files.

    One file per worldbook; the file stem is the worldbook name.
    """

    SUFFIX = ".json"

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, name: str) -> Path:
        """Resolve file path for a worldbook name."""
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            raise WorldbookError(f"Invalid worldbook name: {name!r}")
        return self.directory / f"{name}{self.SUFFIX}"

    def list_names(self) -> List[str]:
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob(f"*{self.SUFFIX}") if p.is_file())

    def _load_document(self, name: str) -> Any:
        """Raw decoded worldbook file."""
        path = self.path_for(name)
        if not path.exists():
            raise WorldbookError(f"Worldbook not found: {name}")

        try:
            return orjson.loads(path.read_bytes())
        except OSError as e:
            raise WorldbookError(f"Cannot read worldbook {name}: {e}") from e
        except orjson.JSONDecodeError as e:
            raise WorldbookError(f"Malformed worldbook {name}: {e}") from e

    def _raw_entries(self, name: str, document: Any) -> List[Any]:
        raw_entries = document.get("entries", []) if isinstance(document, dict) else document
        if not isinstance(raw_entries, list):
            raise WorldbookError(f"Malformed worldbook {name}: 'entries' is not a list")
        return raw_entries

    def read_entries(self, name: str) -> List[WorldbookEntry]:
        document = self._load_document(name)
        entries, _ = split_records(self._raw_entries(name, document), WorldbookEntry.from_dict)
        return entries

    def update_entries(self, name: str, transform: EntryTransform) -> List[WorldbookEntry]:
        """
        Apply transform to the parsed entries.

        Entries that could not be parsed and the document's other keys
        are written back unchanged.
        """
        document = self._load_document(name)
        raw_entries = self._raw_entries(name, document)
        entries, slots = split_records(raw_entries, WorldbookEntry.from_dict)

        entries = transform(entries)
        merged = merge_records(raw_entries, slots, [entry.to_dict() for entry in entries])

        if isinstance(document, dict):
            document = {**document, "entries": merged}
        else:
            document = merged
        self._write(name, document)
        return entries

    def write_entries(self, name: str, entries: List[WorldbookEntry]):
        """Create or overwrite a worldbook (host-side setup, not used by the core)."""
        self.directory.mkdir(parents=True, exist_ok=True)
        self._write(name, {"entries": [entry.to_dict() for entry in entries]})

    def _write(self, name: str, document: Any):
        path = self.path_for(name)
        payload = orjson.dumps(document, option=orjson.OPT_INDENT_2)

        # Write atomically
        temp_path = path.with_suffix('.tmp')
        try:
            temp_path.write_bytes(payload)
            os.replace(temp_path, path)
        except OSError as e:
            raise WorldbookError(f"Cannot write worldbook {name}: {e}") from e
