"""
Binding Resolver — Find a binding from what the user typed

Users may reference a binding by:
- Full id (exact match)
- Short code (AA-BB, see presentation.codec)
- Id prefix (4+ characters)
- Label (exact, then substring; case-insensitive)

Misses come back with the closest labels as suggestions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from rapidfuzz import fuzz, process

from ..presentation.codec import IDCodec


class ResolveStatus(Enum):
    """Resolution outcome."""
    FOUND = "found"
    AMBIGUOUS = "ambiguous"
    NOT_FOUND = "not_found"


@dataclass
class ResolveResult:
    """Result of binding resolution."""
    status: ResolveStatus
    binding: Optional[object] = None
    candidates: List[object] = field(default_factory=list)
    query: str = ""


class BindingResolver:
    """Resolve user input to a single binding."""

    SUGGESTION_LIMIT = 3
    SUGGESTION_CUTOFF = 50

    def __init__(self, registry, codec: Optional[IDCodec] = None):
        self.registry = registry
        self.codec = codec or IDCodec()

    def resolve(self, query: str, min_prefix_length: int = 4) -> ResolveResult:
        query = (query or "").strip()
        bindings = self.registry.list()
        if not query:
            return ResolveResult(ResolveStatus.NOT_FOUND, query=query)

        # Strategy 1: Exact id
        for binding in bindings:
            if binding.id == query:
                return ResolveResult(ResolveStatus.FOUND, binding=binding, query=query)

        # Strategy 2: Short code
        if self.codec.is_short_code(query):
            matches = [b for b in bindings if self.codec.encode(b.id) == query.upper()]
            result = self._from_matches(matches, query)
            if result:
                return result

        # Strategy 3: Id prefix
        if len(query) >= min_prefix_length:
            matches = [b for b in bindings if b.id.lower().startswith(query.lower())]
            result = self._from_matches(matches, query)
            if result:
                return result

        # Strategy 4: Label
        folded = query.casefold()
        matches = [b for b in bindings if b.label.casefold() == folded]
        if not matches:
            matches = [b for b in bindings if folded in b.label.casefold()]
        result = self._from_matches(matches, query)
        if result:
            return result

        return ResolveResult(
            ResolveStatus.NOT_FOUND,
            candidates=self.suggest(query, bindings),
            query=query
        )

    def suggest(self, query: str, bindings) -> list:
        """Closest bindings by label similarity."""
        if not bindings:
            return []
        choices = {i: b.label for i, b in enumerate(bindings)}
        ranked = process.extract(
            query,
            choices,
            scorer=fuzz.token_set_ratio,
            limit=self.SUGGESTION_LIMIT,
            score_cutoff=self.SUGGESTION_CUTOFF
        )
        return [bindings[key] for _label, _score, key in ranked]

    def _from_matches(self, matches, query: str) -> Optional[ResolveResult]:
        if len(matches) == 1:
            return ResolveResult(ResolveStatus.FOUND, binding=matches[0], query=query)
        if len(matches) > 1:
            return ResolveResult(ResolveStatus.AMBIGUOUS, candidates=matches, query=query)
        return None
