"""Unit tests for configuration loading and command line overrides"""
import pytest
from pydantic import ValidationError

from beads_dashboard.core.config import (
    CONFIG_ENV_VAR,
    DashboardConfig,
    load_config,
    load_config_from,
)
from beads_dashboard.main import build_parser


class TestDashboardConfig:

    def test_defaults(self):
        config = DashboardConfig()

        assert config.host == "127.0.0.1"
        assert config.port == 3000
        assert config.beads_dir_name == ".beads"
        assert config.issues_file_name == "issues.jsonl"
        assert config.watch_enabled is True
        assert config.debounce_seconds == pytest.approx(0.1)

    def test_invalid_port_rejected(self):
        with pytest.raises(ValidationError):
            DashboardConfig(port=70000)


class TestLoadConfig:

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "dash.yaml"
        path.write_text("port: 4000\nwatch_enabled: false\ndebounce_ms: 250\n")

        config = load_config_from(str(path))

        assert config.port == 4000
        assert config.watch_enabled is False
        assert config.debounce_seconds == pytest.approx(0.25)

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config_from(str(path)) == DashboardConfig()

    def test_explicit_missing_path_is_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_env_var_used(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("port: 5000\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert load_config().port == 5000

    def test_cwd_config_yaml_used(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("host: 0.0.0.0\n")
        monkeypatch.chdir(tmp_path)

        assert load_config().host == "0.0.0.0"

    def test_broken_fallback_file_falls_back_to_defaults(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("port: not-a-port\n")
        monkeypatch.chdir(tmp_path)

        assert load_config() == DashboardConfig()

    def test_defaults_without_any_file(self):
        assert load_config() == DashboardConfig()


class TestOverrideWithArgs:

    def test_cli_wins_over_file(self):
        args = build_parser().parse_args(["/work/proj", "--port", "8080", "--no-watch", "--log-level", "DEBUG"])

        config = DashboardConfig(port=4000, host="0.0.0.0").override_with_args(args)

        assert config.project_root == "/work/proj"
        assert config.port == 8080
        assert config.host == "0.0.0.0"
        assert config.log_level == "DEBUG"
        assert config.watch_enabled is False

    def test_no_args_keeps_file_values(self):
        args = build_parser().parse_args([])

        config = DashboardConfig(port=4000, watch_enabled=True).override_with_args(args)

        assert config.port == 4000
        assert config.watch_enabled is True
        assert config.project_root == "."
