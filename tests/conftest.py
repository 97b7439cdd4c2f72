"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from tlsmon.config import ENV_VARS, Config

SAMPLE_OUTPUT = (
    "Host\tCN\tStatus\tDaysLeft\tExpire\n"
    "a.example.com\ta.example.com\tValid\t5\t2024-01-01\n"
    "b.example.com\tb.example.com\tValid\t90\t2024-06-01\n"
)

WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"


@pytest.fixture
def sample_output() -> str:
    return SAMPLE_OUTPUT


@pytest.fixture
def hosts_file(tmp_path: Path) -> Path:
    """A hosts file as consumed by sslcheck."""
    path = tmp_path / "tlshosts_to_check"
    path.write_text("a.example.com:443\nb.example.com:443\n")
    return path


@pytest.fixture
def config(clean_env: pytest.MonkeyPatch, hosts_file: Path) -> Config:
    return Config(
        SLACK_INCOMING_WEBHOOK_URL=WEBHOOK_URL,
        ALERT_THRESHOLD=20,
        SSLCHECK_HOSTS_FILE=str(hosts_file),
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every tlsmon variable from the environment."""
    for var in [*ENV_VARS.values(), "TLSMON_CONFIG"]:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def env(clean_env: pytest.MonkeyPatch, hosts_file: Path) -> pytest.MonkeyPatch:
    """A minimal valid environment."""
    clean_env.setenv("SLACK_INCOMING_WEBHOOK_URL", WEBHOOK_URL)
    clean_env.setenv("ALERT_THRESHOLD", "20")
    clean_env.setenv("SSLCHECK_HOSTS_FILE", str(hosts_file))
    return clean_env
