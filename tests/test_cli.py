"""Tests for the Schoolgate CLI."""

import json

from click.testing import CliRunner

from schoolgate.cli import cli


class TestStatus:
    def test_default_status(self, monkeypatch):
        monkeypatch.delenv("ALLOW_DESTRUCTIVE", raising=False)
        monkeypatch.delenv("REQUIRE_CONFIRMATION", raising=False)
        result = CliRunner().invoke(cli, ["status"])
        assert result.exit_code == 0
        assert "Destructive operations: DISABLED" in result.output
        assert "44 of 61 operations advertised" in result.output

    def test_invalid_setting(self, monkeypatch):
        monkeypatch.setenv("SCHOOLGATE_REMOTE_TIMEOUT", "later")
        result = CliRunner().invoke(cli, ["status"])
        assert result.exit_code != 0
        assert "SCHOOLGATE_REMOTE_TIMEOUT" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestTools:
    def test_json_listing(self, monkeypatch):
        monkeypatch.setenv("ALLOW_DESTRUCTIVE", "true")
        result = CliRunner().invoke(cli, ["tools", "--json"])
        assert result.exit_code == 0
        tools = json.loads(result.output)
        assert len(tools) == 61

    def test_tier_filter(self, monkeypatch):
        monkeypatch.setenv("ALLOW_DESTRUCTIVE", "true")
        result = CliRunner().invoke(cli, ["tools", "--json", "--tier", "critical"])
        tools = json.loads(result.output)
        assert {t["operation"] for t in tools} == {
            "delUser", "delClass", "clearGroup", "unregisterStudent",
            "startSkoreSync", "deactivateTwoFactorAuthentication",
        }
        assert all(t["requires_confirmation"] for t in tools)

    def test_text_listing_hides_disabled(self, monkeypatch):
        monkeypatch.delenv("ALLOW_DESTRUCTIVE", raising=False)
        result = CliRunner().invoke(cli, ["tools"])
        assert result.exit_code == 0
        assert "smartschool-getUserDetails" in result.output
        assert "smartschool-delUser" not in result.output


class TestServe:
    def test_requires_client(self):
        result = CliRunner().invoke(cli, ["serve"])
        assert result.exit_code != 0

    def test_bad_client_path(self):
        result = CliRunner().invoke(cli, ["serve", "--client", "nocolon"])
        assert result.exit_code != 0
        assert "module:attribute" in result.output
