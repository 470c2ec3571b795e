"""
ListRenderer — One bullet per row

Rows carry their own display text in "_line"; otherwise the row's
label (or text/name) is shown after its formatted id.
"""

from typing import TYPE_CHECKING

from .base import BaseRenderer

if TYPE_CHECKING:
    from . import OutputSpec


class ListRenderer(BaseRenderer):

    def _text(self, item) -> str:
        if not isinstance(item, dict):
            return str(item)
        if item.get("_line"):
            return item["_line"]

        text = item.get("text") or item.get("label") or item.get("name") or str(item)
        if item.get("id"):
            return f"{self.format_id(item['id'])} {text}"
        return text

    def render(self, spec: "OutputSpec") -> str:
        items = self.items(spec)
        if not items:
            return spec.empty_message

        lines = [f"\n{spec.title}\n"] if spec.title else []
        for item in items:
            lines.append(f"  {self.symbols.bullet} {self.clip(self._text(item), self.width - 4)}")
        return "\n".join(lines)
