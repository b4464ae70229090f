#!/usr/bin/env python3
"""
LobsterBoard API Server - Main entry point.

Serves the dashboard's static assets and the OpenClaw JSON API.
"""

from __future__ import annotations

import argparse
import logging
import signal
import threading
from http.server import ThreadingHTTPServer
from pathlib import Path

from .cache import DashboardState
from .config import Config, ConfigError
from .routes import ApiRouter, DashboardRequestHandler
from ..collectors.openclaw import OpenClawCLI
from ..log import configure_logging, log_event

logger = logging.getLogger(__name__)

# Default paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
WEB_DIR = PROJECT_ROOT / "web"

API_ENDPOINTS = (
    ("/api/status", "Auth mode & version"),
    ("/api/cron", "Cron jobs list"),
    ("/api/activity", "Activity feed"),
    ("/api/logs", "System logs"),
    ("/api/sessions", "Session count"),
)


def build_banner(config: Config) -> str:
    """Startup banner listing endpoints and the bind exposure."""
    host, port = config.server.host, config.server.port
    lines = [
        "",
        "LobsterBoard OpenClaw API Server",
        "",
        f"   Dashboard: http://{host}:{port}",
        "",
        "   API Endpoints:",
    ]
    lines.extend(f"   * {path:<14} - {desc}" for path, desc in API_ENDPOINTS)
    lines.append("")
    if config.server.is_network_exposed:
        lines.append("   WARNING: Exposed to network")
    else:
        lines.append("   Bound to localhost (secure)")
    lines.extend(["", "   Press Ctrl+C to stop", ""])
    return "\n".join(lines)


def install_signal_handlers(server: ThreadingHTTPServer) -> None:
    """Shut the server down cleanly on SIGTERM/SIGINT."""

    def handle(signum, frame):
        log_event(logger, logging.INFO, f"Received {signal.Signals(signum).name}, shutting down...")
        # shutdown() blocks until serve_forever exits, so it cannot run on
        # the thread that is serving.
        threading.Thread(target=server.shutdown, name="shutdown", daemon=True).start()

    signal.signal(signal.SIGTERM, handle)
    signal.signal(signal.SIGINT, handle)


def load_config(args) -> Config:
    """Config file, then PORT/HOST environment, then command-line flags."""
    config = Config.load(args.config).apply_env()
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port
    if args.web_dir:
        config.server.web_dir = args.web_dir
    if args.log_file:
        config.logging.log_file = args.log_file
    if args.log_level:
        config.logging.level = args.log_level
    return config


def run_server(config: Config) -> int:
    """Run the API server until interrupted. Returns a process exit code."""
    log_file = Path(config.logging.log_file) if config.logging.log_file else None
    configure_logging(config.logging.level, log_file)

    cli = OpenClawCLI(executable=config.openclaw.executable)
    if not cli.is_available():
        log_event(
            logger,
            logging.WARNING,
            "OpenClaw CLI not found; /api/status will fail until it is installed",
            executable=cli.executable,
        )

    state = DashboardState.from_cli(cli, [Path(p) for p in config.log_search_paths])
    web_dir = Path(config.server.web_dir) if config.server.web_dir else WEB_DIR
    DashboardRequestHandler.router = ApiRouter(state, web_dir)

    try:
        server = ThreadingHTTPServer((config.server.host, config.server.port), DashboardRequestHandler)
    except OSError as exc:
        log_event(logger, logging.ERROR, "Server error", error=str(exc))
        return 1
    install_signal_handlers(server)

    log_event(logger, logging.INFO, "Server started", host=config.server.host, port=config.server.port)
    print(build_banner(config), flush=True)

    try:
        server.serve_forever()
    finally:
        server.server_close()
        log_event(logger, logging.INFO, "Server closed")
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="LobsterBoard OpenClaw API Server",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Server options
    parser.add_argument("--host", default=None, help="Bind address (overrides HOST)")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (overrides PORT)")
    parser.add_argument("--config", type=str, help="Path to config YAML file")
    parser.add_argument("--web-dir", type=str, default=None, help="Static asset directory")

    # Logging options
    parser.add_argument("--log-file", type=str, default=None, help="Append-only event log file")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default=None,
        help="Log level",
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Entry point for the lobsterboard command."""
    args = parse_args(argv)
    try:
        config = load_config(args)
    except ConfigError as exc:
        print(f"[config] {exc}", flush=True)
        return 2
    return run_server(config)


if __name__ == "__main__":
    raise SystemExit(main())
