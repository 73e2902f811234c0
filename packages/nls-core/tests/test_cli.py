"""Tests for the nls command line."""
import json

import pytest
from click.testing import CliRunner

from nls_core import __version__
from nls_core.cli.main import cli
from nls_core.services.config_service import clear_config_cache


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("NLS_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("NLS_CONFIG_PATH", raising=False)
    clear_config_cache()
    return CliRunner()


@pytest.fixture
def store_args(tmp_path):
    return ["--backend", "file", "--path", str(tmp_path / "store")]


def invoke(runner, store_args, *args):
    return runner.invoke(cli, [*store_args, *args])


class TestCall:
    def test_add_and_show(self, runner, store_args):
        result = invoke(runner, store_args, "call", "--named-key", "codes", "--method", "add",
                        "-k", "ID1;VALUE", "-k", "ID2;VALUE")
        assert result.exit_code == 0, result.output
        assert "appended 2" in result.output

        result = invoke(runner, store_args, "show", "codes")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["ID1;VALUE", "ID2;VALUE"]

    def test_update(self, runner, store_args):
        invoke(runner, store_args, "call", "--named-key", "codes", "-m", "add", "-k", "ID1;VALUE")
        invoke(runner, store_args, "call", "--named-key", "codes", "-m", "add", "-k", "ID1;VALUE2")
        result = invoke(runner, store_args, "show", "codes", "--json-out")
        assert json.loads(result.output) == ["ID1;VALUE2"]

    def test_delall_without_keys(self, runner, store_args):
        invoke(runner, store_args, "call", "--named-key", "codes", "-m", "add", "-k", "ID1;VALUE")
        result = invoke(runner, store_args, "call", "--named-key", "codes", "-m", "delall")
        assert result.exit_code == 0
        assert "cleared" in result.output
        assert "(empty)" in result.output

    def test_missing_method(self, runner, store_args):
        result = invoke(runner, store_args, "call", "--named-key", "codes", "-k", "ID1;VALUE")
        assert result.exit_code == 1
        assert "Missing argument: method" in result.output

    def test_missing_named_key(self, runner, store_args):
        result = invoke(runner, store_args, "call", "-m", "add")
        assert result.exit_code == 1
        assert "Missing argument: named-key" in result.output

    def test_json_out(self, runner, store_args):
        result = invoke(runner, store_args, "call", "--named-key", "codes", "-m", "add",
                        "-k", "ID1;VALUE", "--json-out")
        data = json.loads(result.output)
        assert data["records"] == ["ID1;VALUE"]
        assert data["appended"] == 1

    def test_args_file(self, runner, store_args, tmp_path):
        args_file = tmp_path / "args.yaml"
        args_file.write_text(
            "named-key: codes\n"
            "method: add\n"
            "keys:\n"
            "  - ID1;VALUE\n"
            "  - ID2;VALUE\n"
        )
        result = invoke(runner, store_args, "call", "--args-file", str(args_file))
        assert result.exit_code == 0, result.output

        result = invoke(runner, store_args, "show", "codes")
        assert result.output.splitlines() == ["ID1;VALUE", "ID2;VALUE"]

    def test_args_file_missing_keys(self, runner, store_args, tmp_path):
        args_file = tmp_path / "args.json"
        args_file.write_text(json.dumps({"named-key": "codes", "method": "add"}))
        result = invoke(runner, store_args, "call", "--args-file", str(args_file))
        assert result.exit_code == 1
        assert "Missing argument: keys" in result.output

    def test_sqlite_backend(self, runner, tmp_path):
        db_args = ["--backend", "sqlite", "--path", str(tmp_path / "lists.db")]
        invoke(runner, db_args, "call", "--named-key", "codes", "-m", "add", "-k", "ID1;VALUE")
        result = invoke(runner, db_args, "show", "codes")
        assert result.output.splitlines() == ["ID1;VALUE"]


class TestShowAndNames:
    def test_show_unknown(self, runner, store_args):
        result = invoke(runner, store_args, "show", "nope")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_names(self, runner, store_args):
        result = invoke(runner, store_args, "names")
        assert "No named lists." in result.output

        invoke(runner, store_args, "call", "--named-key", "b", "-m", "add")
        invoke(runner, store_args, "call", "--named-key", "a", "-m", "add")
        result = invoke(runner, store_args, "names")
        assert result.output.splitlines() == ["a", "b"]

    def test_config_file_selects_backend(self, runner, tmp_path):
        cfg = tmp_path / "config.yaml"
        cfg.write_text(f"storage:\n  backend: file\n  path: {tmp_path / 'cfgstore'}\n")
        runner.invoke(cli, ["--config", str(cfg), "call", "--named-key", "c", "-m", "add", "-k", "X"])
        assert (tmp_path / "cfgstore" / "names.json").exists()


class TestVersion:
    def test_version(self, runner):
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output
