"""
TableRenderer — Bordered table of binding rows

Headers come from spec.columns (or the first row's public keys).
Columns shrink proportionally when the table is wider than the
terminal, unless full output is requested.
"""

from typing import TYPE_CHECKING, List

from .base import BaseRenderer

if TYPE_CHECKING:
    from . import OutputSpec

# Narrowest a column is squeezed to
MIN_COLUMN = 4


class TableRenderer(BaseRenderer):

    def render(self, spec: "OutputSpec") -> str:
        rows = [row for row in self.items(spec) if isinstance(row, dict)]
        if not rows:
            return spec.empty_message

        headers = spec.columns or [
            key.replace("_", " ").title() for key in rows[0] if not key.startswith("_")
        ]
        keys = spec.column_keys or [header.lower().replace(" ", "_") for header in headers]
        cells = [[self.cell(row.get(key)) for key in keys] for row in rows]

        widths = [len(header) for header in headers]
        for line in cells:
            widths = [max(width, len(text)) for width, text in zip(widths, line)]
        widths = self._fit(widths)

        s = self.symbols
        lines = [f"\n{spec.title}\n"] if spec.title else []
        lines.append(self._border(widths, s.box_tl, s.box_t_down, s.box_tr))
        lines.append(self._row([header[:w].center(w) for header, w in zip(headers, widths)]))
        lines.append(self._border(widths, s.box_t_right, s.box_cross, s.box_t_left))
        for line in cells:
            lines.append(self._row([self.clip(text, w).ljust(w) for text, w in zip(line, widths)]))
        lines.append(self._border(widths, s.box_bl, s.box_t_up, s.box_br))
        return "\n".join(lines)

    def _fit(self, widths: List[int]) -> List[int]:
        if self.full:
            return widths
        # Room left after one border per column plus the closing border and a margin
        available = self.width - len(widths) - 3
        total = sum(widths)
        if total <= available or available <= 0:
            return widths
        return [max(MIN_COLUMN, int(width * available / total)) for width in widths]

    def _border(self, widths: List[int], left: str, joint: str, right: str) -> str:
        return left + joint.join(self.symbols.box_h * width for width in widths) + right

    def _row(self, padded: List[str]) -> str:
        bar = self.symbols.box_v
        return bar + bar.join(padded) + bar
