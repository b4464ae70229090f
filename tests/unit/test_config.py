"""Tests for configuration management."""

import pytest

from lobsterboard.server.config import (
    Config,
    ConfigError,
    LoggingConfig,
    OpenClawConfig,
    ServerConfig,
)


class TestConfig:
    def test_default_config(self):
        config = Config()
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8080
        assert config.server.web_dir is None
        assert config.openclaw.executable == "openclaw"
        assert config.logging.level == "INFO"
        assert config.logging.log_file == "server.log"
        assert config.log_search_paths[-1] == "/var/log/openclaw/gateway.log"

    def test_from_dict(self):
        data = {
            "server": {
                "host": "0.0.0.0",
                "port": 9000,
                "web_dir": "/srv/board",
            },
            "openclaw": {
                "executable": "/opt/openclaw/bin/openclaw",
            },
            "logging": {
                "level": "debug",
                "log_file": None,
            },
            "logs": {
                "search_paths": ["/tmp/gateway.log"],
            },
        }
        config = Config.from_dict(data)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 9000
        assert config.server.web_dir == "/srv/board"
        assert config.openclaw.executable == "/opt/openclaw/bin/openclaw"
        assert config.logging.level == "DEBUG"
        assert config.logging.log_file is None
        assert config.log_search_paths == ["/tmp/gateway.log"]

    def test_from_dict_empty_sections(self):
        config = Config.from_dict({"server": None, "logs": {}})
        assert config.server.port == 8080
        assert len(config.log_search_paths) == 3

    def test_from_yaml(self, tmp_path):
        yaml_content = """
server:
  port: 8888
openclaw:
  executable: claw
"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml_content)

        config = Config.from_yaml(config_file)

        assert config.server.port == 8888
        assert config.server.host == "127.0.0.1"
        assert config.openclaw.executable == "claw"

    def test_from_yaml_missing_file(self, tmp_path):
        config = Config.from_yaml(tmp_path / "absent.yaml")
        assert config.server.port == 8080

    def test_from_yaml_invalid(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("server: [unclosed\n")
        with pytest.raises(ConfigError):
            Config.from_yaml(config_file)

    def test_from_yaml_not_a_mapping(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            Config.from_yaml(config_file)

    def test_from_yaml_bad_port(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("server:\n  port: eighty\n")
        with pytest.raises(ConfigError):
            Config.from_yaml(config_file)

    def test_load_from_env_var(self, tmp_path, monkeypatch):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("server:\n  port: 7070\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("LOBSTERBOARD_CONFIG", str(config_file))

        assert Config.load().server.port == 7070

    def test_load_explicit_path_wins(self, tmp_path, monkeypatch):
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("server:\n  port: 6060\n")
        from_env = tmp_path / "env.yaml"
        from_env.write_text("server:\n  port: 7070\n")
        monkeypatch.setenv("LOBSTERBOARD_CONFIG", str(from_env))

        assert Config.load(str(explicit)).server.port == 6060

    def test_load_defaults_when_nothing_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.delenv("LOBSTERBOARD_CONFIG", raising=False)

        assert Config.load().server.port == 8080

    def test_apply_env(self):
        config = Config().apply_env({"PORT": "9090", "HOST": "0.0.0.0"})
        assert config.server.port == 9090
        assert config.server.host == "0.0.0.0"

    def test_apply_env_ignores_unset(self):
        config = Config().apply_env({})
        assert config.server.port == 8080
        assert config.server.host == "127.0.0.1"

    def test_apply_env_bad_port(self):
        with pytest.raises(ConfigError):
            Config().apply_env({"PORT": "http"})

    def test_to_dict(self):
        config = Config(openclaw=OpenClawConfig(executable="claw"), logging=LoggingConfig(level="DEBUG"))
        data = config.to_dict()

        assert data["openclaw"]["executable"] == "claw"
        assert data["logging"]["level"] == "DEBUG"
        assert data["server"]["port"] == 8080
        assert len(data["logs"]["search_paths"]) == 3


class TestServerConfig:
    @pytest.mark.parametrize("host", ["127.0.0.1", "localhost", "::1"])
    def test_loopback_not_exposed(self, host):
        assert ServerConfig(host=host).is_network_exposed is False

    @pytest.mark.parametrize("host", ["0.0.0.0", "192.168.1.20", "::"])
    def test_other_hosts_exposed(self, host):
        assert ServerConfig(host=host).is_network_exposed is True
