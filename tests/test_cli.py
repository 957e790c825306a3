"""
Tests for the meters CLI
"""

import os

import pytest
from click.testing import CliRunner

from meters import __version__
from meters.cli import cli


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_list(meter_source):
    result = CliRunner().invoke(cli, ["list", "--source", str(meter_source)])

    assert result.exit_code == 0, result.output
    assert "Found 2 meter(s):" in result.output
    assert "ID: m1" in result.output
    assert "Name: Garden tap" in result.output


def test_list_empty_without_source(monkeypatch):
    from meters.config import settings

    monkeypatch.setattr(settings, "meter_source_path", None)

    result = CliRunner().invoke(cli, ["list"])

    assert result.exit_code == 0
    assert "No meters found." in result.output


def test_list_missing_source(tmp_path):
    result = CliRunner().invoke(cli, ["list", "--source", str(tmp_path / "nope.yaml")])

    assert result.exit_code == 1
    assert "Error loading meters" in result.output


def test_show(meter_source):
    result = CliRunner().invoke(cli, ["show", "m1", "--source", str(meter_source)])

    assert result.exit_code == 0, result.output
    assert "ID: m1" in result.output
    assert "Unit: m3" in result.output


def test_show_missing(meter_source):
    result = CliRunner().invoke(cli, ["show", "zz", "--source", str(meter_source)])

    assert result.exit_code == 1
    assert "Meter 'zz' not found" in result.output


class TestServe:
    """Tests for the serve command with uvicorn stubbed out."""

    @pytest.fixture(autouse=True)
    def restore_settings(self, monkeypatch):
        from meters.config import settings

        monkeypatch.setattr(settings, "meter_source_path", None)
        monkeypatch.setattr(settings, "debug", settings.debug)
        monkeypatch.setattr(settings, "log_level", settings.log_level)

    @pytest.fixture
    def served(self, monkeypatch):
        calls = []

        def fake_run(app, **kwargs):
            calls.append((app, kwargs))

        monkeypatch.setattr("meters.cli.uvicorn.run", fake_run)
        return calls

    def test_serves_meters_from_source(self, served, meter_source):
        result = CliRunner().invoke(
            cli, ["serve", "--source", str(meter_source), "--port", "9123"]
        )

        assert result.exit_code == 0, result.output
        (app, kwargs), = served
        assert [m.id for m in app.state.dispatcher.get_all()] == ["m1", "m2"]
        assert kwargs["port"] == 9123

    def test_debug_log_level_enables_debug(self, served):
        from meters.config import settings

        result = CliRunner().invoke(cli, ["serve", "--log-level", "debug"])

        assert result.exit_code == 0, result.output
        assert settings.debug is True
        assert settings.log_level == "debug"
        (app, _), = served
        assert app.debug is True

    def test_reload_passes_import_string(self, served, meter_source):
        result = CliRunner().invoke(cli, ["serve", "--reload", "--source", str(meter_source)])

        assert result.exit_code == 0, result.output
        (app, kwargs), = served
        assert app == "meters.api.app:app"
        assert kwargs["reload"] is True
        assert os.environ["METERS_METER_SOURCE_PATH"] == str(meter_source)

    def test_startup_failure_exits_nonzero(self, monkeypatch):
        def failing_run(app, **kwargs):
            raise RuntimeError("address already in use")

        monkeypatch.setattr("meters.cli.uvicorn.run", failing_run)

        result = CliRunner().invoke(cli, ["serve"])

        assert result.exit_code == 1
        assert "address already in use" in result.output

    def test_missing_source_exits_nonzero(self, served, tmp_path):
        result = CliRunner().invoke(cli, ["serve", "--source", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "Server startup failed" in result.output
        assert served == []
