#!/usr/bin/env python3
"""
Integration tests for the bannerdb CLI.

Drives every command against a temporary SQLite database.
"""
import re
import pytest
from click.testing import CliRunner

from bannerdb.database.cli import cli


class TestDatabaseCLI:
    """Test CLI commands with a temporary database."""

    @pytest.fixture
    def runner(self):
        """Create Click test runner."""
        return CliRunner()

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("BANNERDB_CONFIG", "BANNERDB_ENV", "BANNERDB_LOG_DIR"):
            monkeypatch.delenv(name, raising=False)

    @pytest.fixture
    def test_dirs(self, tmp_path):
        """Temporary database and log locations."""
        return {
            "db_path": tmp_path / "test.db",
            "log_dir": tmp_path / "logs",
            "config": tmp_path / "config.yaml",
        }

    def invoke_cli(self, runner, test_dirs, args, **kwargs):
        """Helper to invoke CLI with test configuration."""
        base_args = [
            "--db-url", f"sqlite:///{test_dirs['db_path']}",
            "--log-dir", str(test_dirs["log_dir"]),
        ]
        return runner.invoke(cli, base_args + args, obj={}, **kwargs)

    def create(self, runner, test_dirs, content, feature_id, *tag_ids):
        args = ["create", "--content", content, "--feature-id", str(feature_id)]
        for tag_id in tag_ids:
            args += ["--tag-id", str(tag_id)]
        result = self.invoke_cli(runner, test_dirs, args)
        assert result.exit_code == 0, result.output
        return int(re.search(r"Banner (\d+) saved", result.output).group(1))

    @pytest.fixture
    def initialized(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["init"])
        assert result.exit_code == 0, result.output
        return test_dirs

    def test_cli_help(self, runner):
        """Test that CLI help lists the commands."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("init", "content", "list", "create", "update", "delete"):
            assert command in result.output

    def test_init_command(self, runner, test_dirs):
        """Test 'init' creates the database file."""
        result = self.invoke_cli(runner, test_dirs, ["init"])
        assert result.exit_code == 0
        assert "Database initialized" in result.output
        assert test_dirs["db_path"].exists()
        assert (test_dirs["log_dir"] / "database.log").exists()

    def test_no_log_files_without_log_dir(self, runner, test_dirs, tmp_path, monkeypatch):
        """File logging stays off unless a log directory is configured."""
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(
            cli, ["--db-url", f"sqlite:///{test_dirs['db_path']}", "init"], obj={}
        )
        assert result.exit_code == 0, result.output
        assert not (tmp_path / "logs").exists()
        assert not list(tmp_path.rglob("*.log"))

    def test_create_and_content(self, runner, initialized):
        """Test a created banner is resolvable by feature and tag."""
        self.create(runner, initialized, "hello", 1, 10, 20)

        result = self.invoke_cli(runner, initialized, ["content", "1", "20"])
        assert result.exit_code == 0
        assert "hello" in result.output

    def test_create_same_content_reuses_id(self, runner, initialized):
        first = self.create(runner, initialized, "same", 1, 10)
        second = self.create(runner, initialized, "same", 1, 10)
        assert first == second

    def test_list_with_filters(self, runner, initialized):
        a = self.create(runner, initialized, "banner A", 1, 10, 20)
        b = self.create(runner, initialized, "banner B", 2, 10)

        result = self.invoke_cli(runner, initialized, ["list", "--tag-id", "10"])
        assert result.exit_code == 0
        assert f"#{a} [active] feature=1 tags=10,20: banner A" in result.output
        assert f"#{b} [active] feature=2 tags=10: banner B" in result.output

        result = self.invoke_cli(
            runner, initialized, ["list", "--limit", "1", "--offset", "1"]
        )
        assert result.exit_code == 0
        assert "banner B" in result.output
        assert "banner A" not in result.output

    def test_update(self, runner, initialized):
        banner_id = self.create(runner, initialized, "old", 1, 10)

        result = self.invoke_cli(
            runner,
            initialized,
            ["update", str(banner_id), "--content", "new", "--feature-id", "2",
             "--tag-id", "30", "--inactive"],
        )
        assert result.exit_code == 0, result.output
        assert f"Banner {banner_id} updated" in result.output

        result = self.invoke_cli(runner, initialized, ["list", "--feature-id", "2"])
        assert f"#{banner_id} [inactive] feature=2 tags=30: new" in result.output

    def test_delete(self, runner, initialized):
        banner_id = self.create(runner, initialized, "bye", 1, 10)

        result = self.invoke_cli(runner, initialized, ["delete", str(banner_id)])
        assert result.exit_code == 0
        assert f"Banner {banner_id} deleted" in result.output

        result = self.invoke_cli(runner, initialized, ["content", "1", "10"])
        assert result.exit_code == 2

    def test_not_found_exit_code(self, runner, initialized):
        """Test not-found conditions exit with code 2."""
        result = self.invoke_cli(runner, initialized, ["delete", "999"])
        assert result.exit_code == 2
        assert "BannerNotFoundError" in result.output

    def test_validation_error_exit_code(self, runner, initialized):
        """Test invalid input exits with code 1."""
        result = self.invoke_cli(runner, initialized, ["list", "--limit", "-1"])
        assert result.exit_code == 1
        assert "ValidationError" in result.output

    def test_missing_required_option(self, runner, initialized):
        result = self.invoke_cli(runner, initialized, ["create", "--content", "x"])
        assert result.exit_code != 0
        assert "--feature-id" in result.output

    def test_expired_timeout(self, runner, initialized):
        """Test a deadline that cannot be met fails the command."""
        result = self.invoke_cli(
            runner, initialized, ["--timeout", "0.000001", "list"]
        )
        assert result.exit_code == 1
        assert "OperationCancelledError" in result.output

    def test_config_file(self, runner, test_dirs):
        """Test settings are read from --config."""
        test_dirs["config"].write_text(
            "env: prod\n"
            f"log_dir: {test_dirs['log_dir']}\n"
            "database:\n"
            f"  database_url: sqlite:///{test_dirs['db_path']}\n",
            encoding="utf-8",
        )
        result = runner.invoke(
            cli, ["--config", str(test_dirs["config"]), "init"], obj={}
        )
        assert result.exit_code == 0, result.output
        assert test_dirs["db_path"].exists()

    def test_invalid_config_file(self, runner, test_dirs):
        test_dirs["config"].write_text("env: staging\n", encoding="utf-8")
        result = runner.invoke(
            cli, ["--config", str(test_dirs["config"]), "init"], obj={}
        )
        assert result.exit_code == 1
        assert "ConfigError" in result.output
