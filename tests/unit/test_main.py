"""Tests for the server entry point helpers."""

from lobsterboard.server.config import Config, ServerConfig
from lobsterboard.server.main import build_banner, load_config, main, parse_args


class TestBuildBanner:
    def test_lists_endpoints(self):
        banner = build_banner(Config())
        assert "http://127.0.0.1:8080" in banner
        for path in ("/api/status", "/api/cron", "/api/activity", "/api/logs", "/api/sessions"):
            assert path in banner

    def test_localhost_is_secure(self):
        assert "Bound to localhost (secure)" in build_banner(Config())

    def test_network_exposure_flagged(self):
        banner = build_banner(Config(server=ServerConfig(host="0.0.0.0")))
        assert "Exposed to network" in banner


class TestLoadConfig:
    def test_env_overrides_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("server:\n  port: 7000\n  host: 127.0.0.1\n")
        monkeypatch.setenv("PORT", "7100")
        monkeypatch.delenv("HOST", raising=False)

        config = load_config(parse_args(["--config", str(config_file)]))
        assert config.server.port == 7100
        assert config.server.host == "127.0.0.1"

    def test_flags_override_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("PORT", "7100")
        monkeypatch.setenv("HOST", "0.0.0.0")

        args = parse_args([
            "--port", "7200",
            "--host", "localhost",
            "--web-dir", str(tmp_path),
            "--log-file", str(tmp_path / "x.log"),
            "--log-level", "DEBUG",
        ])
        config = load_config(args)

        assert config.server.port == 7200
        assert config.server.host == "localhost"
        assert config.server.web_dir == str(tmp_path)
        assert config.logging.log_file == str(tmp_path / "x.log")
        assert config.logging.level == "DEBUG"

    def test_bad_config_exits_with_error(self, tmp_path, monkeypatch, capsys):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("server: [unclosed\n")
        monkeypatch.delenv("PORT", raising=False)

        assert main(["--config", str(config_file)]) == 2
        assert "[config]" in capsys.readouterr().out
