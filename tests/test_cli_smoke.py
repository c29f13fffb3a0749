"""Smoke tests for CLI commands.

These tests drive the click entry point with CliRunner. Bluetooth is never
touched: commands run with --dry-run or with the transport patched.
"""

import importlib
import json
import logging
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from batlights.cli import cli
from batlights.exceptions import PeripheralNotFoundError
from batlights.transport import DiscoveredDevice
from conftest import FakeConnection

RED_FRAME = bytes([0x7B, 0xFF, 0x07, 0xFF, 0x00, 0x00, 0x00, 0xFF, 0xBF])
ADDRESS = "BE:27:62:00:3E:91"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_paths(temp_dir, monkeypatch):
    """Keep config and log files out of the real home directory."""
    monkeypatch.setattr("batlights.cli.main.CONFIG_DIR", temp_dir)
    monkeypatch.setattr("batlights.cli.main.DEFAULT_CONFIG_PATH", temp_dir / "config.json")
    return temp_dir


@pytest.fixture
def patched_transport():
    """BleTransport replaced by a mock whose connect() returns a FakeConnection."""
    connection = FakeConnection()
    with patch("batlights.cli.runtime.BleTransport") as transport_cls:
        transport_cls.return_value.connect.return_value = connection
        yield transport_cls, connection


class TestCLIHelp:
    """Test that CLI help commands work."""

    def test_main_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "LEDDMX-00" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    @pytest.mark.parametrize("command", ["power", "color", "pattern", "mic", "tui", "scan", "config"])
    def test_command_help(self, runner, command):
        result = runner.invoke(cli, [command, "--help"])
        assert result.exit_code == 0
        assert "Usage" in result.output


class TestDryRun:
    """Frames are printed instead of sent."""

    def test_color(self, runner):
        result = runner.invoke(cli, ["--dry-run", "color", "255", "0", "0"])
        assert result.exit_code == 0
        assert "7B FF 07 FF 00 00 00 FF BF" in result.output
        assert "Setting colors to #FF0000" in result.output

    def test_power_off(self, runner):
        result = runner.invoke(cli, ["--dry-run", "power", "off"])
        assert result.exit_code == 0
        assert "7B FF 04 02 FF FF FF FF BF" in result.output
        assert "Power set to: Off" in result.output

    def test_pattern_is_clamped(self, runner):
        result = runner.invoke(cli, ["--dry-run", "pattern", "255"])
        assert result.exit_code == 0
        assert "7B FF 03 D2 FF FF FF FF BF" in result.output
        assert "clamped to 210" in result.output

    def test_mic(self, runner):
        result = runner.invoke(cli, ["--dry-run", "mic", "255"])
        assert result.exit_code == 0
        assert "7B FF 0B FF 00 FF FF BF 00" in result.output


class TestArgumentValidation:
    """Out-of-range arguments are rejected before connecting."""

    @pytest.mark.parametrize(
        "args",
        [
            ["color", "256", "0", "0"],
            ["color", "0", "-1", "0"],
            ["pattern", "300"],
            ["mic", "abc"],
            ["power", "maybe"],
        ],
    )
    def test_usage_error(self, runner, patched_transport, args):
        transport_cls, connection = patched_transport
        result = runner.invoke(cli, ["--address", ADDRESS, *args])

        assert result.exit_code == 2
        transport_cls.assert_not_called()
        assert connection.frames == []


class TestSend:
    """One-shot commands over a patched transport."""

    def test_color_sends_one_frame_and_disconnects(self, runner, patched_transport):
        transport_cls, connection = patched_transport

        result = runner.invoke(cli, ["--address", ADDRESS, "color", "255", "0", "0"])

        assert result.exit_code == 0
        assert connection.frames == [RED_FRAME]
        assert connection.disconnect_count == 1
        assert transport_cls.call_args.kwargs["address"] == ADDRESS

    def test_address_from_config(self, runner, patched_transport, isolated_paths):
        transport_cls, connection = patched_transport
        (isolated_paths / "config.json").write_text(json.dumps({"device_address": ADDRESS}))

        result = runner.invoke(cli, ["power", "on"])

        assert result.exit_code == 0
        assert transport_cls.call_args.kwargs["address"] == ADDRESS
        assert len(connection.frames) == 1

    def test_connection_failure_exits_with_error(self, runner, patched_transport, caplog):
        transport_cls, connection = patched_transport
        transport_cls.return_value.connect.side_effect = PeripheralNotFoundError(ADDRESS)

        with caplog.at_level(logging.ERROR):
            result = runner.invoke(cli, ["--address", ADDRESS, "power", "on"])

        # The transport logs its own failure
        assert not [r for r in caplog.records if r.name == "batlights.cli.runtime"]

        assert result.exit_code == 1
        assert "ERROR" in result.output
        assert ADDRESS in result.output
        assert connection.frames == []

    def test_missing_address_exits_with_error(self, runner, patched_transport):
        transport_cls, _ = patched_transport

        result = runner.invoke(cli, ["power", "on"])

        assert result.exit_code == 1
        assert "No device address" in result.output
        transport_cls.assert_not_called()

    def test_write_failure_warns_but_succeeds(self, runner):
        connection = FakeConnection(fail_on=[RED_FRAME])
        with patch("batlights.cli.runtime.BleTransport") as transport_cls:
            transport_cls.return_value.connect.return_value = connection
            result = runner.invoke(cli, ["--address", ADDRESS, "color", "255", "0", "0"])

        assert result.exit_code == 0
        assert "Warning" in result.output
        assert connection.disconnect_count == 1

    def test_invalid_config_file_exits(self, runner, isolated_paths):
        (isolated_paths / "config.json").write_text("{not json")

        result = runner.invoke(cli, ["--dry-run", "power", "on"])

        assert result.exit_code == 1
        assert "ERROR" in result.output


class TestScan:
    """Test the scan command."""

    def test_lists_devices(self, runner, monkeypatch):
        scan_module = importlib.import_module("batlights.cli.commands.scan")
        fake_scan = Mock(return_value=[DiscoveredDevice(ADDRESS, "LEDDMX-00", -51)])
        monkeypatch.setattr(scan_module, "scan_devices", fake_scan)

        result = runner.invoke(cli, ["--address", ADDRESS, "scan", "--timeout", "1"])

        assert result.exit_code == 0
        assert "*[0] BE:27:62:00:3E:91  LEDDMX-00  -51 dBm" in result.output
        fake_scan.assert_called_once_with(1.0)

    def test_works_with_invalid_config(self, runner, monkeypatch, isolated_paths):
        (isolated_paths / "config.json").write_text(json.dumps({"queue_capacity": 0}))
        scan_module = importlib.import_module("batlights.cli.commands.scan")
        monkeypatch.setattr(
            scan_module, "scan_devices", Mock(return_value=[DiscoveredDevice(ADDRESS, None, None)])
        )

        result = runner.invoke(cli, ["scan"])

        assert result.exit_code == 0
        assert f"[0] {ADDRESS}  (unknown)  n/a" in result.output

    def test_no_devices(self, runner, monkeypatch):
        scan_module = importlib.import_module("batlights.cli.commands.scan")
        monkeypatch.setattr(scan_module, "scan_devices", Mock(return_value=[]))

        result = runner.invoke(cli, ["scan"])

        assert result.exit_code == 0
        assert "No devices found" in result.output


class TestConfigCommands:
    """Test config show/set/path."""

    def test_set_then_show(self, runner, isolated_paths):
        result = runner.invoke(cli, ["config", "set", "--address", "be:27:62:00:3e:91"])
        assert result.exit_code == 0

        saved = json.loads((isolated_paths / "config.json").read_text())
        assert saved["device_address"] == ADDRESS

        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 0
        assert f"device_address: {ADDRESS}" in result.output

    def test_show_unset_address(self, runner):
        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 0
        assert "device_address: (not set)" in result.output

    def test_set_invalid_value(self, runner, isolated_paths):
        result = runner.invoke(cli, ["config", "set", "--queue-capacity", "0"])

        assert result.exit_code == 1
        assert "queue_capacity" in result.output
        assert not (isolated_paths / "config.json").exists()

    def test_set_nothing(self, runner):
        result = runner.invoke(cli, ["config", "set"])
        assert result.exit_code == 2

    def test_set_repairs_invalid_value(self, runner, isolated_paths):
        path = isolated_paths / "config.json"
        path.write_text(json.dumps({"device_address": ADDRESS, "queue_capacity": 0}))

        result = runner.invoke(cli, ["--config", str(path), "config", "set", "--queue-capacity", "50"])

        assert result.exit_code == 0
        saved = json.loads(path.read_text())
        assert saved["queue_capacity"] == 50
        assert saved["device_address"] == ADDRESS

    def test_set_replaces_unparsable_file(self, runner, isolated_paths):
        path = isolated_paths / "config.json"
        path.write_text("{not json")

        result = runner.invoke(cli, ["config", "set", "--address", ADDRESS])

        assert result.exit_code == 0
        assert "Starting from defaults" in result.output
        assert json.loads(path.read_text())["device_address"] == ADDRESS
        assert (isolated_paths / "config.json.bak").read_text() == "{not json"

    def test_path_works_with_invalid_file(self, runner, isolated_paths):
        path = isolated_paths / "config.json"
        path.write_text(json.dumps({"queue_capacity": 0}))

        result = runner.invoke(cli, ["config", "path"])

        assert result.exit_code == 0
        assert str(path) in result.output

    def test_show_reports_invalid_file(self, runner, isolated_paths):
        (isolated_paths / "config.json").write_text(json.dumps({"queue_capacity": 0}))

        result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 1
        assert "queue_capacity" in result.output

    def test_custom_config_path(self, runner, temp_dir):
        path = temp_dir / "other.json"
        result = runner.invoke(cli, ["--config", str(path), "config", "path"])

        assert result.exit_code == 0
        assert str(path) in result.output


@pytest.mark.integration
class TestTuiCommand:
    """The tui command owns the pipeline lifecycle."""

    def test_pipeline_closed_after_app_exits(self, runner, patched_transport):
        _, connection = patched_transport

        with patch("batlights.tui.LightControllerApp") as app_cls:
            app_cls.return_value.run.side_effect = lambda: app_cls.call_args.args[0].submit(RED_FRAME)
            result = runner.invoke(cli, ["--address", ADDRESS, "tui"])

        assert result.exit_code == 0
        assert connection.frames == [RED_FRAME]
        assert connection.disconnect_count == 1
        assert app_cls.call_args.kwargs["sync_on_start"] is False
