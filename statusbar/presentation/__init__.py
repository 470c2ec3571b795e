"""
Presentation — Display helpers (symbols, short codes, previews, output templates)
"""

from .symbols import (
    SymbolSet, UNICODE, ASCII, get_symbols, safe_print, sanitize_control_chars,
    truncate, symbol_for_state,
)
from .codec import IDCodec, CODE_PATTERN
from .preview import strip_code_fence, build_preview, EMPTY_PREVIEW
from .succession import get_hint
from .template import OutputTemplate

__all__ = [
    'SymbolSet', 'UNICODE', 'ASCII', 'get_symbols', 'safe_print', 'sanitize_control_chars',
    'truncate', 'symbol_for_state',
    'IDCodec', 'CODE_PATTERN',
    'strip_code_fence', 'build_preview', 'EMPTY_PREVIEW',
    'get_hint', 'OutputTemplate',
]
