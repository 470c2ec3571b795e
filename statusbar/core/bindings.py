"""
BindingRegistry — Worldbook entry ↔ regex rule bindings

A binding pairs one worldbook entry with one managed regex rule so
the two can be switched on and off together.

The registry is the single writer of binding records. Entries and
rules are only referenced (name/uid/id), never owned:
- Entry and rule names are snapshots taken at creation time
- A reference that later disappears is reported, not cascaded

Storage: section "status_bar_manager_script" of the settings document,
shaped {"bindings": [...]}.
"""

import logging
import uuid
from dataclasses import dataclass, asdict
from typing import Callable, Iterable, List, Optional, Tuple

from .naming import REGEX_PREFIX, is_managed
from .settings import SettingsStore
from ..services.worldbooks import WorldbookStore, WorldbookError, UNNAMED_ENTRY
from ..services.regexes import RuleStore


SETTINGS_KEY = "status_bar_manager_script"

logger = logging.getLogger(__name__)


@dataclass
class Binding:
    """A persisted link between one worldbook entry and one regex rule."""
    id: str
    label: str
    worldbook_name: str
    worldbook_entry_uid: int
    worldbook_entry_name: str
    regex_id: str
    regex_script_name: str

    @property
    def key(self) -> Tuple[str, int, str]:
        """Identity of the referenced pair (unique across the registry)."""
        return (self.worldbook_name, self.worldbook_entry_uid, self.regex_id)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'Binding':
        return cls(
            id=str(data['id']),
            label=str(data.get('label', '')),
            worldbook_name=str(data['worldbook_name']),
            worldbook_entry_uid=int(data['worldbook_entry_uid']),
            worldbook_entry_name=str(data.get('worldbook_entry_name', '')),
            regex_id=str(data['regex_id']),
            regex_script_name=str(data.get('regex_script_name', ''))
        )


@dataclass(frozen=True)
class EntrySelection:
    """A (worldbook, entry uid) pick; uid is None when nothing was chosen."""
    worldbook_name: str
    entry_uid: Optional[int]

    @property
    def is_complete(self) -> bool:
        return bool(self.worldbook_name) and self.entry_uid is not None


def parse_entry_selection(value: str) -> EntrySelection:
    """
    Parse "worldbook:uid" into an EntrySelection.

    The last colon separates the uid, so worldbook names may contain colons.
    A missing or non-integer uid gives an incomplete selection.
    """
    name, sep, uid_text = value.rpartition(":")
    if not sep:
        return EntrySelection(value.strip(), None)
    try:
        uid = int(uid_text.strip())
    except ValueError:
        uid = None
    return EntrySelection(name.strip(), uid)


def normalize_selections(
    worldbook_selections: Iterable[EntrySelection],
    regex_selections: Iterable[str]
) -> Tuple[List[EntrySelection], List[str]]:
    """Drop incomplete entry picks and empty rule ids."""
    entries = [s for s in worldbook_selections if s.is_complete]
    regex_ids = [r for r in regex_selections if r]
    return entries, regex_ids


class BindingRegistry:
    """
    Authoritative list of bindings.

    Every mutation builds a new list, saves it, and only then replaces
    the in-memory copy. A failed save leaves the registry as it was.

    Key methods:
    - create: bind every selected entry to every selected rule
    - rename/delete: edit by binding id (unknown ids are no-ops)
    - list/get: read access
    """

    def __init__(
        self,
        settings: SettingsStore,
        worldbooks: WorldbookStore,
        rules: RuleStore,
        prefix: str = REGEX_PREFIX,
        unnamed_entry: str = UNNAMED_ENTRY,
        id_factory: Optional[Callable[[], str]] = None
    ):
        """
        Initialize registry.

        Args:
            settings: Settings document handle (durable save)
            worldbooks: Host worldbook store (entry lookup)
            rules: Host regex store (managed rule lookup)
            prefix: Managed namespace prefix
            unnamed_entry: Placeholder template for entries without a name
            id_factory: Binding id generator (default: uuid4)
        """
        self.settings = settings
        self.worldbooks = worldbooks
        self.rules = rules
        self.prefix = prefix
        self.unnamed_entry = unnamed_entry
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))
        self._bindings: List[Binding] = self._load()

    def _load(self) -> List[Binding]:
        """Load bindings from the settings section."""
        raw = self.settings.load_section(SETTINGS_KEY).get("bindings")
        if not isinstance(raw, list):
            return []

        bindings = []
        for item in raw:
            try:
                bindings.append(Binding.from_dict(item))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping malformed binding record: %r", item)
        return bindings

    def _commit(self, bindings: List[Binding]):
        """Persist, then adopt, a new binding list."""
        self.settings.save_section(SETTINGS_KEY, {
            "bindings": [binding.to_dict() for binding in bindings]
        })
        self._bindings = bindings

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    def list(self) -> List[Binding]:
        """All bindings in creation order."""
        return list(self._bindings)

    def get(self, binding_id: str) -> Optional[Binding]:
        for binding in self._bindings:
            if binding.id == binding_id:
                return binding
        return None

    def count(self) -> int:
        return len(self._bindings)

    def managed_rules(self):
        """Rules in the managed namespace (the only ones that can be bound)."""
        return [rule for rule in self.rules.list_rules() if is_managed(rule.script_name, self.prefix)]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(
        self,
        worldbook_selections: Iterable[EntrySelection],
        regex_selections: Iterable[str]
    ) -> int:
        """
        Create bindings for the cross product of selections.

        Skips (silently) unresolvable entries, rules outside the managed
        subset, and pairs that are already bound.

        Returns:
            Number of bindings created (0 is not an error)
        """
        entry_picks, regex_ids = normalize_selections(worldbook_selections, regex_selections)
        if not entry_picks or not regex_ids:
            return 0

        managed = {rule.id: rule for rule in self.managed_rules()}
        bindings = list(self._bindings)
        existing = {binding.key for binding in bindings}
        created = 0

        for pick in entry_picks:
            try:
                entries = self.worldbooks.read_entries(pick.worldbook_name)
            except WorldbookError as e:
                logger.debug("Skipping %s:%s: %s", pick.worldbook_name, pick.entry_uid, e)
                continue

            entry = next((item for item in entries if item.uid == pick.entry_uid), None)
            if entry is None:
                continue

            for regex_id in regex_ids:
                rule = managed.get(regex_id)
                if rule is None:
                    continue

                key = (pick.worldbook_name, entry.uid, rule.id)
                if key in existing:
                    continue

                bindings.append(Binding(
                    id=self._new_id(),
                    label=f"{pick.worldbook_name} / {entry.name or entry.uid}",
                    worldbook_name=pick.worldbook_name,
                    worldbook_entry_uid=entry.uid,
                    worldbook_entry_name=entry.display_name(self.unnamed_entry),
                    regex_id=rule.id,
                    regex_script_name=rule.script_name
                ))
                existing.add(key)
                created += 1

        if created:
            self._commit(bindings)
        return created

    def rename(self, binding_id: str, label: str) -> Optional[Binding]:
        """
        Change a binding's display label.

        Returns:
            Updated binding, or None if the id is unknown or the label is blank
        """
        label = (label or "").strip()
        if not label:
            return None

        bindings = []
        renamed = None
        for binding in self._bindings:
            if binding.id == binding_id:
                renamed = Binding(**{**binding.to_dict(), "label": label})
                bindings.append(renamed)
            else:
                bindings.append(binding)

        if renamed is None:
            return None

        self._commit(bindings)
        return renamed

    def delete(self, binding_id: str) -> bool:
        """
        Remove a binding by id.

        Returns:
            True if removed, False if the id was unknown (no-op)
        """
        bindings = [b for b in self._bindings if b.id != binding_id]
        if len(bindings) == len(self._bindings):
            return False

        self._commit(bindings)
        return True
