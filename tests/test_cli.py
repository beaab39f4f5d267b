"""Tests for FormForge CLI commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from formforge.cli.main import cli

LOGIN_YAML = """\
form: login
fields:
  - name: username
    rules: required
    errorHelp: username is required
  - name: password
    rules: minLength:6
    errorHelp:
      minLength: password too short
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def login_path(tmp_path) -> Path:
    path = tmp_path / "login.yaml"
    path.write_text(LOGIN_YAML)
    return path


class TestValidateCommand:
    def test_valid_definition(self, runner, login_path):
        result = runner.invoke(cli, ["validate", str(login_path)])
        assert result.exit_code == 0
        assert "Form 'login' (2 fields)" in result.output
        assert "Form definition is valid" in result.output

    def test_schema_error(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("form: bad\nfields:\n  - name: a\n    kind: dropdown\n")
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 1
        assert "schema error(s) found" in result.output

    def test_unknown_rule(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("form: bad\nfields:\n  - name: a\n    rules: noSuchRule\n")
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 1
        assert "noSuchRule" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["validate", str(tmp_path / "nope.yaml")])
        assert result.exit_code != 0


class TestCheckCommand:
    def test_invalid_values(self, runner, login_path, tmp_path):
        values = tmp_path / "values.yaml"
        values.write_text("username: ''\npassword: abc\n")
        result = runner.invoke(cli, ["check", str(login_path), "--values", str(values)])
        assert result.exit_code == 1
        assert "INVALID" in result.output
        assert "username: username is required" in result.output
        assert "password: password too short" in result.output

    def test_valid_values_json(self, runner, login_path, tmp_path):
        values = tmp_path / "values.json"
        values.write_text(json.dumps({"username": "alice", "password": "secret!"}))
        result = runner.invoke(cli, ["check", str(login_path), "--values", str(values)])
        assert result.exit_code == 0
        assert "VALID" in result.output

    def test_no_values(self, runner, login_path):
        result = runner.invoke(cli, ["check", str(login_path)])
        assert result.exit_code == 1
        assert "username" in result.output

    def test_malformed_field_entries_reported(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("form: bad\nfields:\n  - username\n")
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "fields[0]" in result.output
        assert "Invalid form definition" in result.output

    def test_yaml_parse_error_reported(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("form: [unclosed\n")
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "YAML parse error" in result.output

    def test_malformed_rule_param_reported(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("form: bad\nfields:\n  - name: age\n    rules: isInt:abc\n")
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "isInt" in result.output

    def test_values_must_be_mapping(self, runner, login_path, tmp_path):
        values = tmp_path / "values.yaml"
        values.write_text("- a\n- b\n")
        result = runner.invoke(cli, ["check", str(login_path), "--values", str(values)])
        assert result.exit_code != 0
        assert "mapping" in result.output


class TestRulesCommand:
    def test_lists_both_registries(self, runner):
        result = runner.invoke(cli, ["rules"])
        assert result.exit_code == 0
        assert "standard:" in result.output
        assert "file:" in result.output
        assert "isEmail" in result.output
        assert "isEachFileType" in result.output

    def test_single_registry(self, runner):
        result = runner.invoke(cli, ["rules", "--kind", "file"])
        assert result.exit_code == 0
        assert "standard:" not in result.output
        assert "isSingle" in result.output


class TestCLIEntryPoint:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "FormForge" in result.output

    def test_commands_listed(self, runner):
        result = runner.invoke(cli, ["--help"])
        for command in ["check", "validate", "rules"]:
            assert command in result.output
