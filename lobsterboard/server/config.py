"""Configuration management for the LobsterBoard API server.

Supports YAML-based configuration with environment overrides for the
bind address (PORT, HOST).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from ..collectors.gateway_logs import default_log_paths
from ..collectors.openclaw import DEFAULT_EXECUTABLE

LOOPBACK_HOSTS = ("127.0.0.1", "localhost", "::1")


class ConfigError(Exception):
    """Raised when a config file or environment override is invalid."""


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080
    web_dir: Optional[str] = None  # Static asset root; None = bundled web/

    @property
    def is_network_exposed(self) -> bool:
        return self.host not in LOOPBACK_HOSTS


@dataclass
class OpenClawConfig:
    """External CLI configuration."""

    executable: str = DEFAULT_EXECUTABLE


@dataclass
class LoggingConfig:
    """Event log configuration."""

    level: str = "INFO"
    log_file: Optional[str] = "server.log"  # None = console only


@dataclass
class Config:
    """Main configuration container."""

    server: ServerConfig = field(default_factory=ServerConfig)
    openclaw: OpenClawConfig = field(default_factory=OpenClawConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Gateway log locations searched by /api/logs, in order
    log_search_paths: List[str] = field(default_factory=lambda: [str(p) for p in default_log_paths()])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary."""
        server_data = data.get("server", {}) or {}
        server = ServerConfig(
            host=server_data.get("host", "127.0.0.1"),
            port=int(server_data.get("port", 8080)),
            web_dir=server_data.get("web_dir"),
        )

        openclaw_data = data.get("openclaw", {}) or {}
        openclaw = OpenClawConfig(
            executable=openclaw_data.get("executable", DEFAULT_EXECUTABLE),
        )

        logging_data = data.get("logging", {}) or {}
        logging_config = LoggingConfig(
            level=str(logging_data.get("level", "INFO")).upper(),
            log_file=logging_data.get("log_file", "server.log"),
        )

        logs_data = data.get("logs", {}) or {}
        search_paths = logs_data.get("search_paths")

        config = cls(server=server, openclaw=openclaw, logging=logging_config)
        if search_paths:
            config.log_search_paths = [str(p) for p in search_paths]
        return config

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load config from YAML file."""
        if not path.exists():
            return cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Unable to read config {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")
        try:
            return cls.from_dict(data)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid config {path}: {exc}") from exc

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """Load config from path or defaults.

        Checks in order:
        1. Provided path
        2. LOBSTERBOARD_CONFIG env var
        3. ./configs/config.yaml
        4. ./config.yaml
        5. ~/.lobsterboard/config.yaml
        6. Default config
        """
        paths_to_try = []

        if config_path:
            paths_to_try.append(Path(config_path))

        if env_path := os.environ.get("LOBSTERBOARD_CONFIG"):
            paths_to_try.append(Path(env_path))

        paths_to_try.extend([
            Path("./configs/config.yaml"),
            Path("./config.yaml"),
            Path.home() / ".lobsterboard" / "config.yaml",
        ])

        for path in paths_to_try:
            if path.exists():
                return cls.from_yaml(path)

        return cls()

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Overlay PORT and HOST from the environment."""
        environ = os.environ if environ is None else environ
        if port := environ.get("PORT"):
            try:
                self.server.port = int(port)
            except ValueError as exc:
                raise ConfigError(f"PORT must be an integer, got {port!r}") from exc
        if host := environ.get("HOST"):
            self.server.host = host
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "server": {
                "host": self.server.host,
                "port": self.server.port,
                "web_dir": self.server.web_dir,
            },
            "openclaw": {
                "executable": self.openclaw.executable,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
            "logs": {
                "search_paths": list(self.log_search_paths),
            },
        }
