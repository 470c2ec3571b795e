"""
Symbols — Visual vocabulary for binding states

Progressive enhancement: Unicode when supported, ASCII fallback.
Configurable via display.symbols setting.

Also provides safe output utilities:
- safe_print(): Encoding-safe printing for untrusted content
- sanitize_control_chars(): Strips terminal control characters
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Safe Output Utilities
# =============================================================================
# Imported regex files and worldbook names are untrusted text.
# sanitize_control_chars() strips dangerous characters,
# safe_print() handles display encoding.

# Common Unicode to ASCII replacements for display
UNICODE_TO_ASCII = {
    '→': '->',
    '←': '<-',
    '…': '...',
    '–': '-',
    '—': '--',
    '“': '"',
    '”': '"',
    '‘': "'",
    '’': "'",
    '•': '*',
    '·': '.',
    '×': 'x',
}


def sanitize_control_chars(text: str) -> str:
    """
    Remove control characters that could manipulate the terminal.

    Preserves: newlines (\\n), tabs (\\t), carriage returns (\\r)
    """
    if not text:
        return text
    return ''.join(ch for ch in text if ord(ch) >= 32 or ord(ch) in (9, 10, 13))


def safe_print(text: str, end: str = '\n', file=None) -> None:
    """
    Print with graceful encoding fallback.

    Handles UnicodeEncodeError by replacing unencodable characters
    with ASCII equivalents or '?' as last resort.
    """
    if file is None:
        file = sys.stdout

    try:
        print(text, end=end, file=file)
    except UnicodeEncodeError:
        safe_text = text
        for unicode_char, ascii_equiv in UNICODE_TO_ASCII.items():
            safe_text = safe_text.replace(unicode_char, ascii_equiv)

        try:
            print(safe_text, end=end, file=file)
        except UnicodeEncodeError:
            # Last resort: replace all unencodable chars with ?
            encoding = getattr(file, 'encoding', 'utf-8') or 'utf-8'
            encoded = safe_text.encode(encoding, errors='replace')
            print(encoded.decode(encoding), end=end, file=file)


# =============================================================================
# Display Truncation
# =============================================================================

LABEL_LENGTH = 60


def truncate(text: str, length: int = LABEL_LENGTH, full: bool = False) -> str:
    """Truncate text with '...', unless full is set."""
    if not text:
        return ""
    if full or len(text) <= length:
        return text
    if length <= 3:
        return text[:length]
    return text[:length - 3] + "..."


@dataclass(frozen=True)
class SymbolSet:
    """Complete set of symbols for binding states and layout."""
    # Side states
    enabled: str
    disabled: str
    missing: str

    # Status markers
    check_pass: str
    check_warn: str
    check_fail: str
    arrow: str
    bullet: str

    # Table borders
    box_h: str       # horizontal ─ or -
    box_v: str       # vertical │ or |
    box_tl: str      # top-left ┌ or +
    box_tr: str      # top-right ┐ or +
    box_bl: str      # bottom-left └ or +
    box_br: str      # bottom-right ┘ or +
    box_cross: str   # cross ┼ or +
    box_t_down: str  # T down ┬ or +
    box_t_up: str    # T up ┴ or +
    box_t_right: str # T right ├ or +
    box_t_left: str  # T left ┤ or +

    # Text truncation
    ellipsis: str    # … or ...


UNICODE = SymbolSet(
    # States
    enabled='●',
    disabled='○',
    missing='⊘',
    # Status
    check_pass='✓',
    check_warn='⚠',
    check_fail='❌',
    arrow='→',
    bullet='•',
    # Table borders
    box_h='─',
    box_v='│',
    box_tl='┌',
    box_tr='┐',
    box_bl='└',
    box_br='┘',
    box_cross='┼',
    box_t_down='┬',
    box_t_up='┴',
    box_t_right='├',
    box_t_left='┤',
    # Truncation
    ellipsis='…',
)

ASCII = SymbolSet(
    # States
    enabled='[on]',
    disabled='[off]',
    missing='[--]',
    # Status
    check_pass='[OK]',
    check_warn='[!]',
    check_fail='[ERR]',
    arrow='->',
    bullet='*',
    # Table borders
    box_h='-',
    box_v='|',
    box_tl='+',
    box_tr='+',
    box_bl='+',
    box_br='+',
    box_cross='+',
    box_t_down='+',
    box_t_up='+',
    box_t_right='+',
    box_t_left='+',
    # Truncation
    ellipsis='...',
)


def supports_unicode() -> bool:
    """
    Check if environment likely supports Unicode output.

    Conservative: defaults to ASCII if uncertain.
    """
    # Explicit environment override
    if os.environ.get('STATUSBAR_ASCII_ONLY', '').lower() in ('1', 'true', 'yes'):
        return False
    if os.environ.get('STATUSBAR_UNICODE', '').lower() in ('1', 'true', 'yes'):
        return True

    stdout_encoding = getattr(sys.stdout, 'encoding', None)
    if stdout_encoding:
        encoding_lower = stdout_encoding.lower().replace('-', '').replace('_', '')
        if encoding_lower.startswith('cp') or encoding_lower in ('ascii', 'latin1', 'iso88591'):
            return False
        if 'utf' in encoding_lower:
            return True

    lang = os.environ.get('LANG', '').lower()
    lc_all = os.environ.get('LC_ALL', '').lower()
    if 'utf-8' in lang or 'utf8' in lang or 'utf-8' in lc_all or 'utf8' in lc_all:
        return True

    # Windows Terminal (supports Unicode)
    if os.environ.get('WT_SESSION'):
        return True

    return False


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """
    Get symbol set based on preference or auto-detection.

    Args:
        preference: "unicode", "ascii", or "auto" (None = auto)
    """
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII


def symbol_for_state(symbols: SymbolSet, state: Optional[bool]) -> str:
    """Marker for one side of a binding: enabled, disabled, or missing (None)."""
    if state is None:
        return symbols.missing
    return symbols.enabled if state else symbols.disabled
