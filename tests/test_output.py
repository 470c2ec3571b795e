"""
Tests for the output layer — OutputSpec, renderers and template
"""

import json

import pytest

from statusbar.output import OutputSpec, auto_detect_shape, get_renderer, render
from statusbar.presentation.codec import IDCodec
from statusbar.presentation.symbols import ASCII, UNICODE
from statusbar.presentation.template import OutputTemplate
from statusbar.presentation.succession import get_hint


ROWS = [
    {"id": "binding-0001", "label": "Lore / HP", "state": "on", "_line": "HP line"},
    {"id": "binding-0002", "label": "Lore / MP", "state": "off", "_line": "MP line"},
]


class TestAutoDetect:

    def test_list_of_dicts_is_table(self):
        assert auto_detect_shape(ROWS) == "table"

    def test_rows_wrapper_is_table(self):
        assert auto_detect_shape({"rows": ROWS}) == "table"

    def test_other_data_is_list(self):
        assert auto_detect_shape(["a", "b"]) == "list"
        assert auto_detect_shape([]) == "list"


class TestRender:

    def test_table(self):
        spec = OutputSpec(data=ROWS, columns=["Label", "State"])
        output = render(spec, format="table", symbols=ASCII, width=100)

        assert "Label" in output
        assert "Lore / HP" in output
        assert output.splitlines()[0].startswith("+")

    def test_table_unicode_borders(self):
        output = render(OutputSpec(data=ROWS, columns=["Label"]), format="table", symbols=UNICODE, width=100)
        assert "┌" in output

    def test_table_truncates_to_width(self):
        rows = [{"label": "x" * 200}]
        output = render(OutputSpec(data=rows, columns=["Label"]), format="table", symbols=ASCII, width=40)
        assert all(len(line) <= 40 for line in output.splitlines())

    def test_table_full_does_not_truncate(self):
        rows = [{"label": "x" * 200}]
        output = render(OutputSpec(data=rows, columns=["Label"]), format="table", symbols=ASCII,
                        width=40, full=True)
        assert "x" * 200 in output

    def test_table_missing_value_is_blank(self):
        rows = [{"label": "Lore / HP", "regex": None}]
        output = render(OutputSpec(data=rows, columns=["Label", "Regex"]), format="table",
                        symbols=ASCII, width=100)
        assert "None" not in output
        assert "|Lore / HP|     |" in output

    def test_table_reads_rows_wrapper(self):
        output = render(OutputSpec(data={"rows": ROWS}, columns=["Label"]), format="table",
                        symbols=ASCII, width=100)
        assert "Lore / MP" in output

    def test_list_uses_display_line(self):
        output = render(OutputSpec(data=ROWS), format="list", symbols=ASCII, width=100)
        assert "* HP line" in output
        assert "* MP line" in output

    def test_list_formats_ids_with_codec(self):
        codec = IDCodec()
        rows = [{"id": "binding-0001", "label": "Lore / HP"}]
        output = render(OutputSpec(data=rows), format="list", symbols=ASCII, width=100, codec=codec)
        assert f"[{codec.encode('binding-0001')}] Lore / HP" in output

    def test_json_drops_display_keys(self):
        output = render(OutputSpec(data=ROWS), format="json", symbols=ASCII)
        data = json.loads(output)
        assert data[0] == {"id": "binding-0001", "label": "Lore / HP", "state": "on"}

    def test_json_keeps_null(self):
        output = render(OutputSpec(data=[{"worldbook_enabled": None}]), format="json", symbols=ASCII)
        assert json.loads(output) == [{"worldbook_enabled": None}]

    def test_auto_uses_shape(self):
        output = render(OutputSpec(data=ROWS, shape="list"), format="auto", symbols=ASCII, width=100)
        assert "* HP line" in output

    def test_empty_message(self):
        spec = OutputSpec(data=[], empty_message="Nothing here.")
        assert render(spec, format="table", symbols=ASCII) == "Nothing here."
        assert render(spec, format="list", symbols=ASCII) == "Nothing here."

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            get_renderer("yaml", ASCII)


class TestDebugIds:

    def test_debug_shows_hex(self, monkeypatch):
        monkeypatch.setenv("STATUSBAR_DEBUG", "1")
        renderer = get_renderer("list", ASCII, codec=IDCodec())
        assert renderer.format_id("binding-0001").endswith("|binding-]")

    def test_no_codec_shows_hex(self):
        assert get_renderer("list", ASCII).format_id("binding-0001") == "[binding-]"


class TestClip:

    def test_clip_uses_symbol_ellipsis(self):
        assert get_renderer("list", ASCII, width=80).clip("abcdefghij", 8) == "abcde..."
        assert get_renderer("list", UNICODE, width=80).clip("abcdefghij", 8) == "abcdefg…"

    def test_clip_respects_full(self):
        renderer = get_renderer("list", ASCII, width=80, full=True)
        assert renderer.clip("abcdefghij", 4) == "abcdefghij"

    def test_clip_shorter_than_ellipsis(self):
        assert get_renderer("list", ASCII, width=80).clip("abcdefghij", 2) == "ab"


class TestTemplate:

    def test_render_structure(self):
        template = OutputTemplate(symbols=ASCII, width=30)
        template.header("STATUSBAR LIST", "Bindings")
        template.legend({"[on]": "enabled"})
        template.section("BINDINGS", "row")
        template.footer("1 binding(s)")

        lines = template.render().splitlines()

        assert lines[0] == "=" * 30
        assert lines[1] == "STATUSBAR LIST - Bindings"
        assert "Legend: [on] enabled" in lines
        assert "BINDINGS" in lines
        assert "Summary: 1 binding(s)" in lines
        assert lines[-1] == "=" * 30

    def test_hint_from_context(self):
        template = OutputTemplate(symbols=ASCII, width=30)
        output = template.render(command="list", context={"has_orphans": True})
        assert "statusbar delete" in output

    def test_hints(self):
        assert "statusbar toggle" in get_hint("list")
        assert "statusbar bind" in get_hint("list", {"empty": True})
        assert get_hint("unknown-command") is None
        assert get_hint("toggle").startswith("-> Done")
