"""Integration tests for CLI commands."""

import json
from pathlib import Path

from typer.testing import CliRunner

from complink_cli import __version__
from complink_cli.cli import app


runner = CliRunner()


class TestVersion:
    """Tests for '--version'."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestRootsCommand:
    """Tests for 'complink roots'."""

    def test_lists_frames_and_components(self, sample_file_path: Path):
        result = runner.invoke(app, ["roots", str(sample_file_path)])

        assert result.exit_code == 0
        assert "Checkout" in result.stdout
        assert "Card" in result.stdout
        assert "Background" not in result.stdout

    def test_nonexistent_file(self):
        result = runner.invoke(app, ["roots", "/nonexistent/file.json"])

        assert result.exit_code != 0

    def test_invalid_file(self, temp_dir: Path):
        path = temp_dir / "bad.json"
        path.write_text("[]", encoding="utf-8")

        result = runner.invoke(app, ["roots", str(path)])

        assert result.exit_code != 0


class TestScanCommand:
    """Tests for 'complink scan'."""

    def test_scan_json(self, sample_file_path: Path):
        result = runner.invoke(app, ["scan", str(sample_file_path), "1:1", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["frameName"] == "Checkout"
        assert payload["totalComponents"] == 5
        assert payload["totalIssues"] == 4
        assert [i["name"] for i in payload["issues"]] == ["Btn", "Icon", "Badge", "Divider"]

    def test_scan_table(self, sample_file_path: Path):
        result = runner.invoke(app, ["scan", str(sample_file_path), "1:1"])

        assert result.exit_code == 0
        assert "Checkout" in result.stdout
        assert "Icon" in result.stdout
        assert "Divider" in result.stdout

    def test_scan_clean_component(self, sample_file_path: Path):
        result = runner.invoke(app, ["scan", str(sample_file_path), "1:11"])

        assert result.exit_code == 0
        assert "All component instances are linked" in result.stdout

    def test_scan_writes_output(self, sample_file_path: Path, temp_dir: Path):
        output = temp_dir / "report.json"

        result = runner.invoke(app, ["scan", str(sample_file_path), "1:1", "-o", str(output)])

        assert result.exit_code == 0
        saved = json.loads(output.read_text(encoding="utf-8"))
        assert saved["issues"][1]["parentId"] == "1:2"

    def test_scan_non_container(self, sample_file_path: Path):
        result = runner.invoke(app, ["scan", str(sample_file_path), "1:10"])

        assert result.exit_code == 1
        assert "Frame, Component or Component Set" in result.output

    def test_scan_unknown_node(self, sample_file_path: Path):
        result = runner.invoke(app, ["scan", str(sample_file_path), "404:1"])

        assert result.exit_code != 0

    def test_scan_unknown_editor(self, sample_file_path: Path):
        result = runner.invoke(app, ["scan", str(sample_file_path), "1:1", "--editor", "paint"])

        assert result.exit_code != 0


class TestShowCommand:
    """Tests for 'complink show'."""

    def test_show_existing(self, sample_file_path: Path):
        result = runner.invoke(app, ["show", str(sample_file_path), "1:2", "--editor", "figjam"])

        assert result.exit_code == 0
        assert "Btn" in result.stdout
        assert "INSTANCE" in result.stdout

    def test_show_missing(self, sample_file_path: Path):
        result = runner.invoke(app, ["show", str(sample_file_path), "404:1"])

        assert result.exit_code == 1
        assert "Could not find the component" in result.output


class TestConfigCommands:
    """Tests for 'complink config'."""

    def test_set_then_show(self, temp_config_file: Path):
        result = runner.invoke(app, ["config", "set", "--timeout", "2.5", "--concurrency", "3"])

        assert result.exit_code == 0
        assert "lookup_concurrency=3" in result.stdout
        assert temp_config_file.exists()

        shown = runner.invoke(app, ["config", "show"])
        assert shown.exit_code == 0
        assert "2.5" in shown.stdout

    def test_set_nothing(self, temp_config_file: Path):
        result = runner.invoke(app, ["config", "set"])

        assert result.exit_code != 0
        assert not temp_config_file.exists()
