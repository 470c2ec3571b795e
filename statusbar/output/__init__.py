"""
Output Module — View layer for the CLI

Commands build an OutputSpec; renderers handle display.

Usage:
    from statusbar.output import OutputSpec, render

    spec = OutputSpec(data=rows, shape="table", columns=["Label", "State"])
    print(render(spec, format="auto", symbols=symbols))
"""

import builtins
import shutil
from dataclasses import dataclass
from typing import Any, List, Optional, TYPE_CHECKING

from .base import BaseRenderer
from .table import TableRenderer
from .list import ListRenderer
from .json import JsonRenderer

if TYPE_CHECKING:
    from ..presentation.symbols import SymbolSet
    from ..presentation.codec import IDCodec


@dataclass
class OutputSpec:
    """
    Data envelope that commands return for rendering.

    Attributes:
        data: The rows/items to show
        shape: Rendering hint - "table" | "list" | "json" | "auto"
        title: Optional section title
        columns: For tables - column headers in order
        column_keys: For tables - dict keys corresponding to columns
        empty_message: Message when data is empty
    """
    data: Any
    shape: str = "auto"
    title: Optional[str] = None
    columns: Optional[List[str]] = None
    column_keys: Optional[List[str]] = None
    empty_message: str = "No data to display."


RENDERERS = {
    "table": TableRenderer,
    "list": ListRenderer,
    "json": JsonRenderer,
}

# Valid format values for config/CLI
VALID_FORMATS = ("auto", "table", "list", "json")


def auto_detect_shape(data: Any) -> str:
    """Tables for lists of dicts, lists for everything else."""
    rows = data.get("rows") or data.get("items") if isinstance(data, dict) else data
    # `list` here is the .list submodule (bound on import), so use the builtin
    if isinstance(rows, builtins.list) and rows and all(isinstance(x, dict) for x in rows):
        return "table"
    return "list"


def get_renderer(format: str, symbols: "SymbolSet", width: int = None, full: bool = False,
                 codec: "IDCodec" = None) -> BaseRenderer:
    """
    Get renderer instance for a format.

    Raises:
        ValueError: If format is invalid
    """
    if format not in RENDERERS:
        valid = ", ".join(RENDERERS.keys())
        raise ValueError(f"Unknown format '{format}'. Valid: {valid}")
    return RENDERERS[format](symbols=symbols, width=width, full=full, codec=codec)


def render(
    spec: OutputSpec,
    format: str = "auto",
    symbols: "SymbolSet" = None,
    width: int = None,
    full: bool = False,
    codec: "IDCodec" = None
) -> str:
    """
    Render OutputSpec to a string.

    Args:
        spec: OutputSpec from command
        format: "auto" | "table" | "list" | "json"
        symbols: SymbolSet (auto-detect if None)
        width: Terminal width (auto-detect if None)
        full: If True, don't truncate content
        codec: IDCodec for short id codes
    """
    from ..presentation.symbols import get_symbols

    if symbols is None:
        symbols = get_symbols()
    if width is None:
        width = shutil.get_terminal_size().columns

    if format == "auto":
        effective_format = spec.shape if spec.shape and spec.shape != "auto" else auto_detect_shape(spec.data)
    else:
        effective_format = format

    renderer = get_renderer(effective_format, symbols, width, full, codec)
    return renderer.render(spec)


__all__ = [
    'OutputSpec', 'render', 'get_renderer', 'auto_detect_shape',
    'RENDERERS', 'VALID_FORMATS',
    'BaseRenderer', 'TableRenderer', 'ListRenderer', 'JsonRenderer',
]
