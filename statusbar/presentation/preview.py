"""
Preview — Show what a bound regex renders

The rule's replace_string usually holds an HTML snippet, often wrapped
in a Markdown code fence. The preview strips the fence and returns the
markup as-is; rendering it is left to whoever displays it.
"""

import re

FENCE_PATTERN = re.compile(r'^```[a-zA-Z0-9_-]*\n([\s\S]*?)\n```$')

EMPTY_PREVIEW = "This regex has an empty replace_string; nothing to preview."


def strip_code_fence(text: str) -> str:
    """Remove one surrounding ```lang ... ``` fence, if present."""
    trimmed = text.strip()
    matched = FENCE_PATTERN.match(trimmed)
    if matched:
        return matched.group(1).strip()
    return trimmed


def build_preview(rule) -> str:
    """Preview markup for a rule (EMPTY_PREVIEW when there is none)."""
    html = strip_code_fence(str(rule.replace_string or ""))
    return html or EMPTY_PREVIEW
