"""
Integration tests for CLI commands.

Tests the basic functionality of CLI commands and error handling.
"""

import hashlib
import json

from typer.testing import CliRunner

from kushn.cli import app

runner = CliRunner()


def _sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


class TestCLIHelp:
    """Test CLI help and usage information."""

    def test_main_help(self):
        """Main help should display available commands."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "scan" in result.stdout
        assert "hash" in result.stdout
        assert "check-ignore" in result.stdout

    def test_scan_help(self):
        """Scan command help should display options."""
        result = runner.invoke(app, ["scan", "--help"])

        assert result.exit_code == 0
        assert "--name" in result.stdout
        assert "--workers" in result.stdout


class TestScanCommand:
    """Test the scan command end to end."""

    def test_writes_default_manifest(self, tmp_path):
        (tmp_path / "a.txt").write_bytes(b"hello")
        (tmp_path / "folder").mkdir()
        (tmp_path / "folder" / "b.txt").write_bytes(b"world")

        result = runner.invoke(app, ["scan", "--root", str(tmp_path)])

        assert result.exit_code == 0, result.stdout
        data = json.loads((tmp_path / "kushn_result.json").read_text(encoding="utf-8"))
        assert data[:2] == [
            {"path": "a.txt", "hash": _sha256(b"hello")},
            {"path": "folder/b.txt", "hash": _sha256(b"world")},
        ]
        assert data[2]["path"] == "kushn_result.json"
        assert "File hashes generated and saved to kushn_result.json." in result.stdout

    def test_custom_name_without_self_hash(self, tmp_path):
        (tmp_path / "a.txt").write_bytes(b"hello")

        result = runner.invoke(
            app, ["scan", "--root", str(tmp_path), "-n", "hashes.json", "--no-self-hash"]
        )

        assert result.exit_code == 0, result.stdout
        data = json.loads((tmp_path / "hashes.json").read_text(encoding="utf-8"))
        assert data == [{"path": "a.txt", "hash": _sha256(b"hello")}]

    def test_respects_ignore_file(self, tmp_path):
        (tmp_path / "run.log").write_bytes(b"log")
        (tmp_path / "run.txt").write_bytes(b"txt")
        (tmp_path / ".kushnignore").write_text("*.log\n.kushnignore\n", encoding="utf-8")

        result = runner.invoke(app, ["scan", "--root", str(tmp_path), "--no-self-hash"])

        assert result.exit_code == 0, result.stdout
        data = json.loads((tmp_path / "kushn_result.json").read_text(encoding="utf-8"))
        assert [entry["path"] for entry in data] == ["run.txt"]

    def test_workers_option(self, tmp_path):
        for i in range(5):
            (tmp_path / f"f{i}.txt").write_bytes(str(i).encode())

        result = runner.invoke(
            app, ["scan", "--root", str(tmp_path), "-w", "3", "--no-self-hash"]
        )

        assert result.exit_code == 0, result.stdout
        data = json.loads((tmp_path / "kushn_result.json").read_text(encoding="utf-8"))
        assert len(data) == 5


class TestHashCommand:
    """Test the single-file hash command."""

    def test_prints_digest(self, tmp_path):
        (tmp_path / "a.txt").write_bytes(b"hello")

        result = runner.invoke(app, ["hash", "a.txt", "--root", str(tmp_path)])

        assert result.exit_code == 0
        assert _sha256(b"hello") in result.stdout

    def test_reports_ignored_file(self, tmp_path):
        (tmp_path / "a.log").write_bytes(b"hello")
        (tmp_path / ".kushnignore").write_text("*.log\n", encoding="utf-8")

        result = runner.invoke(app, ["hash", "a.log", "--root", str(tmp_path)])

        assert result.exit_code == 0
        assert "Ignored" in result.stdout

    def test_missing_file_fails(self, tmp_path):
        result = runner.invoke(app, ["hash", "missing.txt", "--root", str(tmp_path)])

        assert result.exit_code == 1


class TestCheckIgnoreCommand:
    """Test the check-ignore command."""

    def test_reports_status(self, tmp_path):
        (tmp_path / ".kushnignore").write_text("folder\n", encoding="utf-8")

        result = runner.invoke(
            app, ["check-ignore", "folder/x", "keep", "--root", str(tmp_path)]
        )

        assert result.exit_code == 0
        assert "ignored" in result.stdout
        assert "included" in result.stdout


class TestCLIErrorHandling:
    """Test CLI error handling for invalid inputs."""

    def test_scan_missing_root(self, tmp_path):
        result = runner.invoke(app, ["scan", "--root", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "exist" in result.stdout

    def test_scan_root_is_file(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_bytes(b"x")

        result = runner.invoke(app, ["scan", "--root", str(path)])

        assert result.exit_code == 1

    def test_bad_config_file(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text("", encoding="utf-8")

        result = runner.invoke(app, ["scan", "--root", str(tmp_path), "-c", str(config)])

        assert result.exit_code == 1

    def test_invalid_env_override(self, tmp_path):
        result = runner.invoke(
            app,
            ["scan", "--root", str(tmp_path)],
            env={"KUSHN_SCAN_MAX_WORKERS": "abc"},
        )

        assert result.exit_code == 1
        assert "Error" in result.stdout
        assert not (tmp_path / "kushn_result.json").exists()

    def test_hash_missing_argument(self):
        result = runner.invoke(app, ["hash"])

        assert result.exit_code != 0

    def test_invalid_command(self):
        result = runner.invoke(app, ["invalid_command"])

        assert result.exit_code != 0
