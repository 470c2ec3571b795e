"""
Command Succession — Data-driven next-step guidance

Main loop: import -> bind -> list -> toggle
Cleanup:   list (orphans) -> delete

Each command knows its successors + conditions for context-aware hints.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class NextStep:
    """Single next-step hint with optional condition."""
    command: Optional[str]    # e.g., "bind" (None = terminal)
    label: str                # e.g., "statusbar bind ..."
    condition: str = None     # When to show (None = always)
    why: str = None           # Brief rationale


@dataclass
class Succession:
    """Succession rules for a command."""
    default: NextStep
    alternatives: List[NextStep] = field(default_factory=list)


RULES: Dict[str, Succession] = {
    "import": Succession(
        default=NextStep("list", "statusbar list --regexes",
                        why="See managed rules and their ids"),
        alternatives=[
            NextStep("import", "statusbar import <file>", condition="failed",
                    why="Only regex export files can be imported"),
        ]
    ),

    "bind": Succession(
        default=NextStep("list", "statusbar list",
                        why="Check live state of the new bindings"),
        alternatives=[
            NextStep("list", "statusbar list --worldbooks", condition="nothing_created",
                    why="Pick existing entries and managed rules"),
        ]
    ),

    "list": Succession(
        default=NextStep("toggle", "statusbar toggle <id>",
                        why="Switch entry and rule together"),
        alternatives=[
            NextStep("delete", "statusbar delete <id>", condition="has_orphans",
                    why="Both sides of a binding are gone"),
            NextStep("bind", "statusbar bind --entry WB:UID --regex ID", condition="empty",
                    why="No bindings yet"),
        ]
    ),

    "toggle": Succession(
        default=NextStep(None, "Done", why="Entry and rule updated together"),
        alternatives=[
            NextStep("delete", "statusbar delete <id>", condition="orphaned",
                    why="Nothing left to toggle"),
            NextStep("list", "statusbar list", condition="partial",
                    why="One side is missing"),
        ]
    ),

    "delete": Succession(
        default=NextStep("list", "statusbar list", why="Review remaining bindings"),
    ),

    "rename": Succession(
        default=NextStep("list", "statusbar list", why="See updated labels"),
    ),

    "preview": Succession(
        default=NextStep("toggle", "statusbar toggle <id>",
                        why="Turn the status bar on or off"),
    ),
}


def get_hint(command: str, context: dict = None) -> Optional[str]:
    """
    Get contextual next-step hint for command.

    Args:
        command: Command that just ran (e.g., "bind", "toggle")
        context: Result state flags (e.g., {"partial": True})

    Returns:
        Formatted hint string or None
    """
    context = context or {}
    rules = RULES.get(command)

    if not rules:
        return None

    # Check alternatives first (condition-specific)
    for alt in rules.alternatives:
        if alt.condition and context.get(alt.condition):
            return _format_hint(alt)

    if rules.default.condition and not context.get(rules.default.condition):
        return None

    return _format_hint(rules.default)


def _format_hint(step: NextStep) -> str:
    """Format NextStep as display hint."""
    if not step.command:
        # Terminal state
        return f"-> {step.label}" + (f"  ({step.why})" if step.why else "")

    hint = f"-> Next: {step.label}"
    if step.why:
        hint += f"  ({step.why})"
    return hint
