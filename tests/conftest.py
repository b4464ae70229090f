"""Pytest configuration and shared fixtures."""

import json
import pytest


class FakeCLI:
    """Stands in for OpenClawCLI: canned output per argument string.

    A missing key (or a None value) behaves like a failed invocation.
    """

    executable = "openclaw"

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def run(self, args):
        self.calls.append(args)
        return self.responses.get(args)

    def count(self, args):
        return self.calls.count(args)


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def sample_status_output():
    """Sample output from `openclaw status` on an oauth install."""
    return '''
OpenClaw status

Overview
┌─────────────────┬──────────────────────────────────────────┐
│ Item            │ Value                                    │
├─────────────────┼──────────────────────────────────────────┤
│ OS              │ linux 6.8 (x64) · node 22.12.0           │
│ Update          │ available · npm update 2026.2.1          │
│ Gateway         │ local · ws://127.0.0.1:18789 · running   │
│ Agents          │ 1 · default main                         │
└─────────────────┴──────────────────────────────────────────┘

Sessions 3 active · model claude-opus-4 (oauth)
'''


@pytest.fixture
def sample_api_key_status_output():
    """Sample `openclaw status` output for an API key install with the gateway down."""
    return '''
OpenClaw status

│ Gateway         │ local · ws://127.0.0.1:18789 · stopped   │
│ Auth            │ anthropic: sk-ant-api03-****              │

No sessions yet
'''


@pytest.fixture
def sample_cron_json():
    """Sample output from `openclaw cron list --json`."""
    return json.dumps({
        "jobs": [
            {
                "id": "8dfbcfa0",
                "name": "Morning briefing",
                "enabled": True,
                "schedule": {"kind": "cron", "expr": "50 9 * * *"},
                "state": {"nextRunAtMs": 1768000000000},
            },
            {"id": 1, "name": "backup"},
        ]
    })


@pytest.fixture
def fake_cli(sample_status_output, sample_cron_json):
    return FakeCLI({
        "status": sample_status_output,
        "--version": "2026.1.30\n",
        "cron list --json": sample_cron_json,
    })


@pytest.fixture
def web_dir(tmp_path):
    """A small static web root."""
    root = tmp_path / "web"
    root.mkdir()
    (root / "index.html").write_text("<h1>LobsterBoard</h1>", encoding="utf-8")
    (root / "css").mkdir()
    (root / "css" / "board.css").write_text("body { margin: 0; }", encoding="utf-8")
    return root


@pytest.fixture
def make_cli():
    """Factory for FakeCLI instances with custom responses."""
    return FakeCLI
