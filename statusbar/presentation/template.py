"""
OutputTemplate — Consistent CLI output structure

Builder for command output with header, sections, and footer.

Usage:
    template = OutputTemplate(symbols=symbols)
    template.header("STATUSBAR LIST", "Bindings")
    template.legend({"●": "enabled", "○": "disabled"})
    template.section("BINDINGS", table)
    template.footer("3 bindings | 1 orphaned")
    print(template.render(command="list", context={"has_orphans": True}))
"""

import shutil
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .symbols import SymbolSet, get_symbols
from .succession import get_hint


HEADER_CHAR = "="
SECTION_CHAR = "-"
DEFAULT_WIDTH = 80


@dataclass
class TemplateSection:
    """A titled section of output."""
    title: str
    content: str


@dataclass
class TemplateLegend:
    """Legend mapping symbols to meanings."""
    items: Dict[str, str] = field(default_factory=dict)

    def render(self) -> str:
        if not self.items:
            return ""
        parts = [f"{symbol} {meaning}" for symbol, meaning in self.items.items()]
        return "Legend: " + "  ".join(parts)


class OutputTemplate:
    """
    Builder for structured CLI output.

    - HEADER: Command identity, legend, scope
    - SECTIONS: Titled content blocks
    - FOOTER: Summary, next-step hint
    """

    def __init__(self, symbols: Optional[SymbolSet] = None, width: Optional[int] = None):
        self.symbols = symbols or get_symbols()
        self.width = width or shutil.get_terminal_size().columns or DEFAULT_WIDTH

        self._title: Optional[str] = None
        self._subtitle: Optional[str] = None
        self._legend: Optional[TemplateLegend] = None
        self._scope: Optional[str] = None
        self._sections: List[TemplateSection] = []
        self._summary: Optional[str] = None

    def header(self, title: str, subtitle: Optional[str] = None) -> "OutputTemplate":
        self._title = title
        self._subtitle = subtitle
        return self

    def legend(self, items: Dict[str, str]) -> "OutputTemplate":
        self._legend = TemplateLegend(items=items)
        return self

    def scope(self, text: str) -> "OutputTemplate":
        """Set scope line (count/context info in header)."""
        self._scope = text
        return self

    def section(self, title: str, content: str) -> "OutputTemplate":
        self._sections.append(TemplateSection(title=title, content=content))
        return self

    def footer(self, summary: Optional[str] = None) -> "OutputTemplate":
        self._summary = summary
        return self

    def render(self, command: Optional[str] = None, context: Optional[Dict[str, Any]] = None) -> str:
        """
        Render template to formatted string.

        Args:
            command: Command name for the next-step hint (optional)
            context: Flags for hint conditions (optional)
        """
        lines: List[str] = []

        if self._title:
            lines.extend(self._render_header())

        for section in self._sections:
            lines.extend(self._render_section(section))

        lines.extend(self._render_footer(command, context))
        return "\n".join(lines)

    def _render_header(self) -> List[str]:
        border = HEADER_CHAR * self.width
        title_line = f"{self._title} - {self._subtitle}" if self._subtitle else self._title
        lines = [border, title_line, border]

        if self._legend:
            legend_text = self._legend.render()
            if legend_text:
                lines.append(legend_text)
        if self._scope:
            lines.append(self._scope)

        lines.append("")
        return lines

    def _render_section(self, section: TemplateSection) -> List[str]:
        lines: List[str] = []
        if section.title:
            lines.append(section.title)
            lines.append(SECTION_CHAR * len(section.title))
        if section.content:
            lines.append(section.content)
        lines.append("")
        return lines

    def _render_footer(self, command: Optional[str], context: Optional[Dict[str, Any]]) -> List[str]:
        lines = [SECTION_CHAR * self.width]

        if self._summary:
            lines.append(f"Summary: {self._summary}")

        if command:
            hint = get_hint(command, context)
            if hint:
                lines.append(hint)

        lines.append(HEADER_CHAR * self.width)
        return lines
