"""
Naming — Managed namespace for status bar regex rules

Rules owned by this tool carry a fixed script-name prefix.
The prefix is how the manager tells its rules apart from everything
else in the host's regex collection.
"""

REGEX_PREFIX = "[状态栏] "


def ensure_managed_name(name: str, prefix: str = REGEX_PREFIX) -> str:
    """
    Return name inside the managed namespace.

    Idempotent: applying it twice gives the same result as once.
    """
    if name.startswith(prefix):
        return name
    return f"{prefix}{name}"


def is_managed(name: str, prefix: str = REGEX_PREFIX) -> bool:
    """Check if a script name belongs to the managed subset."""
    return bool(name) and name.startswith(prefix)
