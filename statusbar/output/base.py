"""
BaseRenderer — Shared plumbing for the table, list and JSON views

Every view gets the same symbol set, terminal width and binding id
display. Ids show as short codes:
    [AA-BB]            codec present
    [AA-BB|3f2a9c1e]   codec present, STATUSBAR_DEBUG=1
    [3f2a9c1e]         no codec
"""

import os
import shutil
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
    from ..presentation.symbols import SymbolSet
    from ..presentation.codec import IDCodec
    from . import OutputSpec


def _is_debug_mode() -> bool:
    return os.environ.get('STATUSBAR_DEBUG', '').lower() in ('1', 'true', 'yes')


class BaseRenderer(ABC):
    """A view over an OutputSpec."""

    def __init__(
        self,
        symbols: "SymbolSet" = None,
        width: int = None,
        full: bool = False,
        codec: "IDCodec" = None,
        debug: bool = None
    ):
        from ..presentation.symbols import get_symbols

        self.symbols = symbols or get_symbols()
        self.width = width or shutil.get_terminal_size().columns
        self.full = full  # never shorten text
        self.codec = codec
        self.debug = _is_debug_mode() if debug is None else debug

    @abstractmethod
    def render(self, spec: "OutputSpec") -> str:
        pass

    def items(self, spec: "OutputSpec") -> List[Any]:
        """Rows of a spec: a bare list, or the "rows"/"items" of a dict."""
        if isinstance(spec.data, list):
            return spec.data
        if isinstance(spec.data, dict):
            return spec.data.get("rows") or spec.data.get("items") or []
        return []

    def format_id(self, full_id: str) -> str:
        if not full_id:
            return "[]"
        if self.codec is None:
            return f"[{full_id[:8]}]"

        code = self.codec.encode(full_id)
        return f"[{code}|{full_id[:8]}]" if self.debug else f"[{code}]"

    def clip(self, text: str, length: int) -> str:
        """Cut text to length, ending in the symbol set's ellipsis."""
        if self.full or len(text) <= length:
            return text
        ellipsis = self.symbols.ellipsis
        if length <= len(ellipsis):
            return text[:length]
        return text[:length - len(ellipsis)] + ellipsis

    @staticmethod
    def cell(value: Any) -> str:
        """Display text for a row value (None is blank)."""
        return "" if value is None else str(value)
