"""
IDCodec — Deterministic hash-based aliases for binding ids

Binding ids are UUIDs (36 chars). Typing them is painful, so every id
gets a 5-char code in AA-BB format:

    codec = IDCodec()
    code = codec.encode("3f2a9c1e-...")     # "KM-XP" (always the same)
    full_id = codec.decode("KM-XP", ids)    # "3f2a9c1e-..."

Key properties:
- DETERMINISTIC: same id, same code (no storage)
- READABLE: AA-BB is distinct from any id prefix

Code space: 26^4 = 456,976 combinations.
"""

import re
from typing import List, Optional

import xxhash


# Pattern for valid codes: AA-BB (two uppercase letters, dash, two uppercase letters)
CODE_PATTERN = re.compile(r'^[A-Z]{2}-[A-Z]{2}$')


class IDCodec:
    """
    Deterministic hash-based ID aliasing.

    Uses xxhash for fast, deterministic code generation.
    """

    def encode(self, full_id: str) -> str:
        """Generate the AA-BB code for an id."""
        if not full_id:
            return full_id
        return self._hash_to_code(full_id)

    def decode(self, code: str, candidate_ids: Optional[List[str]] = None) -> str:
        """
        Resolve code to full id by scanning candidates.

        Returns the input unchanged when it is not a code or nothing matches.
        """
        if not code or not self.is_short_code(code) or not candidate_ids:
            return code

        code_upper = code.upper()
        for candidate in candidate_ids:
            if self.encode(candidate) == code_upper:
                return candidate
        return code

    def is_short_code(self, value: str) -> bool:
        """Check if value matches AA-BB code format."""
        if not value:
            return False
        return bool(CODE_PATTERN.match(value.upper()))

    def format_with_code(self, full_id: str, display_text: str) -> str:
        """Format as "[AA-BB] display_text"."""
        return f"[{self.encode(full_id)}] {display_text}"

    def _hash_to_code(self, full_id: str) -> str:
        # Map hash to code space (26^4)
        n = xxhash.xxh32(full_id.encode()).intdigest() % (26 ** 4)

        c0 = n % 26
        c1 = (n // 26) % 26
        c2 = (n // 676) % 26
        c3 = (n // 17576) % 26

        return f"{chr(65 + c3)}{chr(65 + c2)}-{chr(65 + c1)}{chr(65 + c0)}"
