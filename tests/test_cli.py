"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pathux.cli import cli
from pathux.main import main


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Config pinning the home and current directories."""
    path = tmp_path / "pathux.json"
    path.write_text(json.dumps({
        "environment": {"cwd": "/home/peter/SRC", "home_dir": "/home/peter"},
    }))
    return path


def run(config_file: Path, *args: str):
    runner = CliRunner()
    return runner.invoke(cli, ["--config", str(config_file), *args])


class TestConversions:
    """Tests for the path conversion commands."""

    def test_absolute(self, config_file: Path) -> None:
        result = run(config_file, "absolute", "~/SRC", "./GITHUB", "/etc")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["/home/peter/SRC", "/home/peter/SRC/GITHUB", "/etc"]

    def test_relative(self, config_file: Path) -> None:
        result = run(config_file, "relative", "/home/peter/SRC/GITHUB")
        assert result.exit_code == 0
        assert result.output.strip() == "GITHUB"

    def test_relative_mismatch(self, config_file: Path) -> None:
        result = run(config_file, "relative", "/etc")
        assert result.exit_code == 1
        assert "is not under" in result.output

    def test_home_relative(self, config_file: Path) -> None:
        result = run(config_file, "home-relative", "/home/peter/SRC")
        assert result.exit_code == 0
        assert result.output.strip() == "~/SRC"

    def test_requires_path(self, config_file: Path) -> None:
        result = run(config_file, "absolute")
        assert result.exit_code != 0


class TestStructuralCommands:
    """Tests for join, parent and file-name."""

    def test_join(self, config_file: Path) -> None:
        result = run(config_file, "join", "/home/", "peter", "SRC")
        assert result.output.strip() == "/home/peter/SRC"

    def test_join_absolute_child(self, config_file: Path) -> None:
        result = run(config_file, "join", "peter", "/etc")
        assert result.output.strip() == "/etc"

    def test_parent(self, config_file: Path) -> None:
        result = run(config_file, "parent", "/home/peter")
        assert result.output.strip() == "/home"

    def test_parent_of_root_fails(self, config_file: Path) -> None:
        result = run(config_file, "parent", "/")
        assert result.exit_code == 1
        assert "has no parent" in result.output

    def test_file_name(self, config_file: Path) -> None:
        result = run(config_file, "file-name", "/home/peter")
        assert result.output.strip() == "peter"

    def test_file_name_missing(self, config_file: Path) -> None:
        result = run(config_file, "file-name", "/")
        assert result.exit_code == 1


class TestComponentsCommand:
    """Tests for the components table."""

    def test_shows_kinds(self, config_file: Path) -> None:
        result = run(config_file, "components", "~/SRC/..")
        assert result.exit_code == 0
        assert "home_dir" in result.output
        assert "normal" in result.output
        assert "parent_dir" in result.output
        assert "SRC" in result.output


class TestLsCommand:
    """Tests for the ls command."""

    def test_lists_entries(self, tmp_path: Path, config_file: Path) -> None:
        target = tmp_path / "listing"
        target.mkdir()
        (target / "a.txt").write_text("abc")
        (target / "sub").mkdir()
        (target / ".hidden").write_text("")
        result = run(config_file, "ls", str(target))
        assert result.exit_code == 0
        assert "a.txt" in result.output
        assert "sub/" in result.output
        assert ".hidden" not in result.output

    def test_all_flag_shows_hidden(self, tmp_path: Path, config_file: Path) -> None:
        target = tmp_path / "listing"
        target.mkdir()
        (target / ".hidden").write_text("")
        result = run(config_file, "ls", "--all", str(target))
        assert ".hidden" in result.output

    def test_missing_directory(self, tmp_path: Path, config_file: Path) -> None:
        result = run(config_file, "ls", str(tmp_path / "missing"))
        assert result.exit_code == 1
        assert "Cannot list" in result.output


class TestGroupOptions:
    """Tests for the global options."""

    def test_help_output(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("components", "absolute", "relative", "home-relative", "join", "ls"):
            assert name in result.output
        assert "--log-level" in result.output

    def test_version_output(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_invalid_log_level(self, config_file: Path) -> None:
        result = run(config_file, "--log-level=INVALID", "absolute", "/")
        assert result.exit_code != 0

    def test_bad_config_file(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{oops")
        result = CliRunner().invoke(cli, ["--config", str(bad), "absolute", "/"])
        assert result.exit_code == 1
        assert "Cannot load config" in result.output

    def test_missing_config_file(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "none.json"), "absolute", "/"])
        assert result.exit_code == 1


class TestMain:
    """Tests for the main() entry point."""

    def test_success_returns_zero(self, config_file: Path, capsys) -> None:
        assert main(["--config", str(config_file), "absolute", "~/x"]) == 0
        assert capsys.readouterr().out.strip() == "/home/peter/x"

    def test_failure_returns_one(self, config_file: Path, capsys) -> None:
        assert main(["--config", str(config_file), "relative", "/etc"]) == 1
        assert "is not under" in capsys.readouterr().err

    def test_version_returns_zero(self) -> None:
        assert main(["--version"]) == 0
