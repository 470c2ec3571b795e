"""
Tests for the command layer — What users see and what changes on disk

Commands run against a real StatusBarCLI on the factory's project
directory; output is checked through capsys.
"""

import argparse
import json
from unittest.mock import patch

import orjson
import pytest

from statusbar.commands import dispatch, get_registered_commands, register_all
from statusbar.commands import config_cmd, toggle_cmd
from statusbar.commands.toggle_cmd import ToggleCommand


@pytest.fixture
def cli(sb_env):
    return sb_env.create_cli()


class TestRegistration:

    def test_all_commands_registered(self):
        parser = argparse.ArgumentParser()
        register_all(parser.add_subparsers(dest="command"))

        names = get_registered_commands()
        for name in ("bind", "list", "toggle", "enable", "disable", "rename",
                     "delete", "import", "preview", "config"):
            assert name in names

    def test_dispatch_unknown(self, cli):
        parser = argparse.ArgumentParser()
        register_all(parser.add_subparsers(dest="command"))
        with pytest.raises(KeyError):
            dispatch("explode", cli, argparse.Namespace())

    def test_parse_bind_arguments(self):
        parser = argparse.ArgumentParser()
        register_all(parser.add_subparsers(dest="command"))
        args = parser.parse_args(["bind", "-e", "Lore:1", "-e", "Lore:2", "-r", "r-hp"])
        assert args.entry == ["Lore:1", "Lore:2"]
        assert args.regex == ["r-hp"]


class TestBindCommand:

    def test_bind_by_rule_id(self, sb_env, cli, capsys):
        created = cli._bind_cmd.bind(["Lore:3"], ["r-hp"])

        assert created == 1
        assert "Created 1 binding(s)" in capsys.readouterr().out
        assert sb_env.registry.count() == 3

    def test_bind_by_rule_name(self, cli, capsys):
        assert cli._bind_cmd.bind(["Lore:3"], ["MP bar"]) == 1
        binding = cli.registry.list()[-1]
        assert binding.regex_id == "r-mp"
        assert binding.worldbook_entry_name == "未命名条目-3"

    def test_existing_pair_not_duplicated(self, cli, capsys):
        assert cli._bind_cmd.bind(["Lore:1"], ["r-hp"]) == 0
        assert "No new bindings" in capsys.readouterr().out
        assert cli.registry.count() == 2

    def test_unmanaged_rule_skipped(self, cli, capsys):
        assert cli._bind_cmd.bind(["Lore:3"], ["r-other"]) == 0

    def test_output_goes_through_safe_print(self, cli):
        with patch("statusbar.commands.bind_cmd.safe_print") as printer:
            cli._bind_cmd.bind(["Lore:3"], ["r-hp"])
        assert "Created 1 binding(s)" in printer.call_args[0][0]

    def test_nothing_selected(self, cli, capsys):
        assert cli._bind_cmd.bind(["not-a-pick"], ["r-hp"]) == 0
        output = capsys.readouterr().out
        assert "NOTHING SELECTED" in output
        assert "statusbar list --worldbooks" in output


class TestListCommand:

    def test_bindings_json(self, cli, capsys):
        cli._list_cmd.list_bindings("json")
        rows = json.loads(capsys.readouterr().out)

        assert [row["label"] for row in rows] == ["Lore / HP", "Lore / MP"]
        assert rows[0]["worldbook_enabled"] is True
        assert rows[1]["regex_enabled"] is False
        assert not any(key.startswith("_") for row in rows for key in row)

    def test_bindings_table(self, cli, capsys):
        cli._list_cmd.list_bindings("table")
        output = capsys.readouterr().out

        assert "STATUSBAR LIST - Bindings" in output
        assert "Lore / HP" in output
        assert "2 binding(s) | 0 orphaned" in output

    def test_missing_sides_shown(self, sb_env, cli, capsys):
        sb_env.remove_rule("r-hp")
        cli._list_cmd.list_bindings("json")
        rows = json.loads(capsys.readouterr().out)

        assert rows[0]["worldbook_enabled"] is True
        assert rows[0]["regex_enabled"] is None
        assert rows[0]["orphaned"] is False

    def test_orphans_suggest_delete(self, sb_env, cli, capsys):
        sb_env.remove_rule("r-hp")
        sb_env.remove_entry("Lore", 1)
        cli._list_cmd.list_bindings("list")
        output = capsys.readouterr().out

        assert "2 binding(s) | 1 orphaned" in output
        assert "statusbar delete" in output

    def test_empty(self, sb_factory, capsys):
        sb_factory.create_cli()._list_cmd.list_bindings()
        output = capsys.readouterr().out
        assert "No bindings yet." in output
        assert "statusbar bind" in output

    def test_managed_regexes(self, cli, capsys):
        cli._list_cmd.list_regexes("json")
        ids = [row["id"] for row in json.loads(capsys.readouterr().out)]
        assert ids == ["r-hp", "r-mp"]

    def test_all_regexes(self, cli, capsys):
        cli._list_cmd.list_regexes("json", show_all=True)
        assert len(json.loads(capsys.readouterr().out)) == 3

    def test_worldbooks(self, cli, capsys):
        cli._list_cmd.list_worldbooks("json")
        assert json.loads(capsys.readouterr().out) == [{"name": "Lore", "entries": 3}]

    def test_entries(self, cli, capsys):
        cli._list_cmd.list_entries("Lore", "json")
        rows = json.loads(capsys.readouterr().out)
        assert [row["name"] for row in rows] == ["HP", "MP", "未命名条目-3"]

    def test_entries_unknown_worldbook(self, cli, capsys):
        cli._list_cmd.list_entries("Nope")
        assert "[ERR]" in capsys.readouterr().out


class TestToggleCommand:

    def test_toggle_all_on_turns_off(self, sb_env, cli, capsys):
        result = cli._toggle_cmd.toggle("HP")

        assert result.worldbook_matched and result.regex_matched
        assert sb_env.entry_enabled("Lore", 1) is False
        assert sb_env.rules.get("r-hp").enabled is False
        assert "Lore / HP: disabled" in capsys.readouterr().out

    def test_toggle_off_turns_on(self, sb_env, cli, capsys):
        cli._toggle_cmd.toggle("MP")

        assert sb_env.entry_enabled("Lore", 2) is True
        assert sb_env.rules.get("r-mp").enabled is True
        assert "Lore / MP: enabled" in capsys.readouterr().out

    def test_enable_and_disable_handlers(self, sb_env, cli, capsys):
        toggle_cmd.handle(cli, argparse.Namespace(command="enable", binding="MP"))
        assert sb_env.rules.get("r-mp").enabled is True

        toggle_cmd.handle(cli, argparse.Namespace(command="disable", binding="MP"))
        assert sb_env.rules.get("r-mp").enabled is False
        assert sb_env.entry_enabled("Lore", 2) is False

    def test_missing_rule_is_partial(self, sb_env, cli, capsys):
        sb_env.remove_rule("r-hp")

        result = cli._toggle_cmd.toggle("HP")

        assert result.is_partial
        assert sb_env.entry_enabled("Lore", 1) is True
        output = capsys.readouterr().out
        assert "only the worldbook entry was updated" in output

    def test_missing_worldbook_is_partial(self, sb_env, cli, capsys):
        sb_env.remove_worldbook("Lore")

        result = cli._toggle_cmd.toggle("HP")

        assert result.regex_matched and not result.worldbook_matched
        assert "only the regex was updated" in capsys.readouterr().out

    def test_orphaned(self, sb_env, cli, capsys):
        sb_env.remove_rule("r-hp")
        sb_env.remove_entry("Lore", 1)

        assert cli._toggle_cmd.toggle("HP") is None

        output = capsys.readouterr().out
        assert "Binding Orphaned" in output
        assert "[ERR]" in output

    def test_renamed_rule_pulled_back_into_namespace(self, sb_env, cli, capsys):
        sb_env.rename_rule("r-hp", "HP bar")
        cli._toggle_cmd.toggle("HP")
        assert sb_env.rules.get("r-hp").script_name == "[状态栏] HP bar"

    def test_unresolved_binding_does_nothing(self, sb_env):
        cmd = sb_env.create_command(ToggleCommand)
        assert cmd.toggle("anything") is None
        assert sb_env.entry_enabled("Lore", 1) is True

    def test_resolved_by_mock(self, sb_env, capsys):
        cli = sb_env.create_cli_mock()
        cli.resolve_binding.return_value = sb_env.registry.list()[1]
        cmd = sb_env.create_command(ToggleCommand, cli)

        cmd.toggle("whatever", enabled=True)

        assert sb_env.rules.get("r-mp").enabled is True


class TestResolveBinding:

    def test_not_found(self, cli, capsys):
        assert cli.resolve_binding("zzzzzz") is None
        assert 'No binding matches "zzzzzz"' in capsys.readouterr().out

    def test_ambiguous(self, cli, capsys):
        assert cli.resolve_binding("Lore") is None
        output = capsys.readouterr().out
        assert 'Multiple bindings match "Lore"' in output
        assert "Lore / HP" in output and "Lore / MP" in output

    def test_short_code(self, cli):
        code = cli.codec.encode("binding-0002")
        assert cli.resolve_binding(code).label == "Lore / MP"


class TestRenameAndDelete:

    def test_rename(self, sb_env, cli, capsys):
        updated = cli._rename_cmd.rename("HP", "Health")

        assert updated.label == "Health"
        assert sb_env.create_registry().get("binding-0001").label == "Health"
        assert "Renamed" in capsys.readouterr().out

    def test_rename_blank(self, cli, capsys):
        assert cli._rename_cmd.rename("HP", "   ") is None
        assert "Label cannot be empty." in capsys.readouterr().out
        assert cli.registry.get("binding-0001").label == "Lore / HP"

    def test_delete_keeps_host_data(self, sb_env, cli, capsys):
        assert cli._delete_cmd.delete("HP") is True

        assert "Binding Removed" in capsys.readouterr().out
        assert [b.id for b in sb_env.create_registry().list()] == ["binding-0002"]
        assert sb_env.rules.get("r-hp") is not None
        assert sb_env.entry_enabled("Lore", 1) is True

    def test_delete_unresolved(self, cli):
        assert cli._delete_cmd.delete("nothing-like-this") is False
        assert cli.registry.count() == 2


class TestImportCommand:

    def test_import_native_export(self, sb_env, cli, tmp_path, capsys):
        path = tmp_path / "shield.json"
        path.write_bytes(orjson.dumps({"scriptName": "Shield", "findRegex": "<shield/>"}))

        result = cli._import_cmd.import_file(str(path))

        assert result.imported_count == 1
        assert result.managed_count == 3
        names = [rule.script_name for rule in sb_env.rules.list_rules()]
        assert "[状态栏] Shield" in names
        output = capsys.readouterr().out
        assert "Imported 1 rule(s)" in output
        assert "3 managed rule(s) in total" in output

    def test_import_rejected_file(self, sb_env, cli, tmp_path, capsys):
        path = tmp_path / "notes.json"
        path.write_text('{"hello": "world"}', encoding="utf-8")

        assert cli._import_cmd.import_file(str(path)) is None
        assert "Import Failed" in capsys.readouterr().out
        assert len(sb_env.rules.list_rules()) == 3

    def test_import_missing_file(self, cli, tmp_path, capsys):
        assert cli._import_cmd.import_file(str(tmp_path / "missing.json")) is None
        assert "Cannot Read File" in capsys.readouterr().out


class TestPreviewCommand:

    def test_preview_stdout(self, cli, capsys):
        html = cli._preview_cmd.preview("HP")

        assert html == '<div class="hp">HP</div>'
        assert '<div class="hp">HP</div>' in capsys.readouterr().out

    def test_preview_to_file(self, cli, tmp_path, capsys):
        target = tmp_path / "hp.html"

        cli._preview_cmd.preview("HP", output=str(target))

        assert target.read_text(encoding="utf-8") == '<div class="hp">HP</div>'
        assert "Preview written to" in capsys.readouterr().out

    def test_preview_missing_rule(self, sb_env, cli, capsys):
        sb_env.remove_rule("r-hp")
        assert cli._preview_cmd.preview("HP") is None
        assert "Regex rule r-hp no longer exists." in capsys.readouterr().out


class TestConfigCommand:

    def test_show(self, cli, capsys):
        cli._config_cmd.show_config()
        output = capsys.readouterr().out
        assert "Configuration:" in output
        assert "regexes.json" in output

    def test_set(self, cli, capsys):
        assert cli._config_cmd.set_config("display.format", "json") is None
        assert cli.config_manager.project_config_path.exists()
        assert "Configuration Updated" in capsys.readouterr().out

    def test_set_invalid(self, cli, capsys):
        assert cli._config_cmd.set_config("display.format", "yaml") is not None
        assert "Error" in capsys.readouterr().out

    def test_handle_requires_key_value(self, cli, capsys):
        config_cmd.handle(cli, argparse.Namespace(set="display.format", user=False))
        assert "Use format KEY=VALUE" in capsys.readouterr().out

    def test_handle_user_scope(self, cli, capsys):
        config_cmd.handle(cli, argparse.Namespace(set="display.symbols=ascii", user=True))
        assert cli.config_manager.user_config_path.exists()
