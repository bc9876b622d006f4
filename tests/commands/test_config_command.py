"""Unit tests for the 'config' command group and 'version'."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from dailytodo_cli import __version__
from dailytodo_cli.commands.config_command import _parse_value, app
from dailytodo_cli.commands.version_command import app as version_app

runner = CliRunner()


@pytest.fixture
def config(tmp_config):
    with patch(
        "dailytodo_cli.commands.config_command.get_config_service",
        return_value=tmp_config,
    ):
        yield tmp_config


class TestParseValue:
    @pytest.mark.parametrize(
        ("raw", "parsed"),
        [("true", True), ("False", False), ("null", None), ("30", 30), ("json", "json")],
    )
    def test_parse(self, raw, parsed):
        assert _parse_value(raw) == parsed


class TestConfigCommands:
    def test_show_json(self, config):
        result = runner.invoke(app, ["show", "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["scheduler"]["interval_seconds"] == 60

    def test_show_pretty_mentions_files(self, config):
        result = runner.invoke(app, ["show"])
        assert "Config file:" in result.output
        assert "Vault:" in result.output

    def test_get(self, config):
        result = runner.invoke(app, ["get", "scheduler.interval_seconds"])
        assert result.output.strip() == "60"

    def test_get_unknown_key(self, config):
        result = runner.invoke(app, ["get", "nope"])
        assert result.exit_code == 2
        assert "not found" in result.output

    def test_set(self, config):
        result = runner.invoke(app, ["set", "scheduler.interval_seconds", "30"])
        assert result.exit_code == 0, result.output
        assert config.get("scheduler.interval_seconds") == 30

    def test_set_invalid_value(self, config):
        result = runner.invoke(app, ["set", "output.format", "xml"])
        assert result.exit_code == 2
        assert config.get("output.format") == "pretty"

    def test_set_unknown_key(self, config):
        result = runner.invoke(app, ["set", "nope", "1"])
        assert result.exit_code == 2

    def test_reset_key(self, config):
        config.set("log_level", "ERROR")
        result = runner.invoke(app, ["reset", "log_level", "--yes"])
        assert result.exit_code == 0, result.output
        assert config.get("log_level") == "INFO"

    def test_reset_cancelled(self, config):
        config.set("log_level", "ERROR")
        result = runner.invoke(app, ["reset"], input="n\n")
        assert "Cancelled" in result.output
        assert config.get("log_level") == "ERROR"


def test_version():
    result = runner.invoke(version_app, [])
    assert result.exit_code == 0
    assert f"DailyTodo CLI version {__version__}" in result.output
