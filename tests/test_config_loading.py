"""Config loading: JSON / YAML parsing, schema validation, env defaults."""

from __future__ import annotations

from pathlib import Path

import pytest

from exit_guard.core.config import ConfigError, ServerConfig, read_config
from exit_guard.model import ExitPolicy


class TestReadConfig:
    def test_json_file(self, config_dir: Path) -> None:
        config = read_config(config_dir / "server.json")

        assert config.name == "demo-server"
        assert config.port == 8081
        assert config.debug is True
        assert config.exit_policy is ExitPolicy.INTERCEPT
        assert config.cors_origins == ("http://localhost:3000",)
        assert config.log_level == "DEBUG"

    def test_yaml_file(self, config_dir: Path) -> None:
        config = read_config(config_dir / "server.yaml")

        assert config.name == "yaml-server"
        assert config.port == 9090
        assert config.exit_policy is ExitPolicy.FORWARD

    def test_empty_yaml_gives_defaults(self, tmp_path: Path) -> None:
        cfg = tmp_path / "empty.yml"
        cfg.write_text("", encoding="utf-8")

        assert read_config(cfg) == ServerConfig.from_settings()

    def test_environment_fills_missing_keys(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "9001")
        monkeypatch.setenv("EXIT_GUARD_POLICY", "intercept")
        cfg = tmp_path / "partial.json"
        cfg.write_text('{"name": "partial"}', encoding="utf-8")

        config = read_config(cfg)

        assert config.name == "partial"
        assert config.port == 9001
        assert config.exit_policy is ExitPolicy.INTERCEPT

    def test_file_beats_environment(self, config_dir: Path, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "9001")

        assert read_config(config_dir / "server.json").port == 8081


class TestConfigErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="cannot read config file"):
            read_config(tmp_path / "nope.json")

    def test_broken_json(self, config_dir: Path) -> None:
        with pytest.raises(ConfigError, match="invalid JSON"):
            read_config(config_dir / "broken.json")

    def test_broken_yaml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "broken.yaml"
        cfg.write_text("port: [8000\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="invalid YAML"):
            read_config(cfg)

    def test_schema_violation_names_field(self, config_dir: Path) -> None:
        with pytest.raises(ConfigError, match="port") as exc_info:
            read_config(config_dir / "bad_port.json")

        assert exc_info.value.path.name == "bad_port.json"

    def test_unknown_key_rejected(self, config_dir: Path) -> None:
        with pytest.raises(ConfigError, match="listen_backlog"):
            read_config(config_dir / "unknown_key.yaml")

    def test_unknown_policy_rejected(self, tmp_path: Path) -> None:
        cfg = tmp_path / "policy.json"
        cfg.write_text('{"exit_policy": "ignore"}', encoding="utf-8")

        with pytest.raises(ConfigError, match="exit_policy"):
            read_config(cfg)

    def test_non_object_rejected(self, tmp_path: Path) -> None:
        cfg = tmp_path / "list.json"
        cfg.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigError, match=r"\(root\)"):
            read_config(cfg)

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        cfg = tmp_path / "server.toml"
        cfg.write_text("port = 8000\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="unsupported config format"):
            read_config(cfg)


def test_to_dict_is_json_friendly(config_dir: Path) -> None:
    d = read_config(config_dir / "server.json").to_dict()

    assert d["exit_policy"] == "intercept"
    assert d["cors_origins"] == ["http://localhost:3000"]
