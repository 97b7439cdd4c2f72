"""Tests for Slack webhook notifications."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from tlsmon.alerting.slack import build_attachment, build_payload, send_slack_alert_sync
from tlsmon.models import CertRecord

from .conftest import WEBHOOK_URL


@pytest.fixture
def record() -> CertRecord:
    return CertRecord(
        host="a.example.com",
        common_name="a.example.com",
        valid=True,
        days_left=5,
        expire_date="2024-01-01",
    )


def make_response(status_code: int) -> httpx.Response:
    return httpx.Response(status_code, text="ok", request=httpx.Request("POST", WEBHOOK_URL))


# ── Payload ──────────────────────────────────────────────────────────────────


class TestBuildPayload:
    def test_attachment(self, record: CertRecord) -> None:
        assert build_attachment(record) == {
            "title": "TLS/SSL cert expiration alert.",
            "color": "danger",
            "fields": [
                {"title": "TLS Host", "value": "a.example.com", "short": True},
                {"title": "Days left", "value": "5", "short": True},
            ],
        }

    def test_message(self, record: CertRecord) -> None:
        payload = build_payload([record], checked=2, mention="<!group>")
        assert payload["text"] == (
            "<!group> *Following TLS/SSL host(s) is/are in ALERT state (2 hosts checked):*"
        )
        assert len(payload["attachments"]) == 1

    def test_no_alerts_no_payload(self) -> None:
        assert build_payload([], checked=5, mention="<!group>") is None

    def test_empty_mention(self, record: CertRecord) -> None:
        payload = build_payload([record], checked=1, mention="")
        assert payload["text"].startswith("*Following")


# ── Sending ──────────────────────────────────────────────────────────────────


class TestSend:
    @patch("tlsmon.alerting.slack.httpx.Client")
    def test_success(self, mock_client_cls: MagicMock, config) -> None:
        client = mock_client_cls.return_value.__enter__.return_value
        client.post.return_value = make_response(200)

        payload = {"text": "hi", "attachments": []}
        assert send_slack_alert_sync(payload, config) is True
        client.post.assert_called_once_with(WEBHOOK_URL, json=payload, timeout=30.0)

    @patch("tlsmon.alerting.slack.httpx.Client")
    def test_rejected(self, mock_client_cls: MagicMock, config) -> None:
        client = mock_client_cls.return_value.__enter__.return_value
        client.post.return_value = make_response(404)
        assert send_slack_alert_sync({"text": "hi"}, config) is False

    @patch("tlsmon.alerting.slack.httpx.Client")
    def test_transport_error(self, mock_client_cls: MagicMock, config) -> None:
        client = mock_client_cls.return_value.__enter__.return_value
        client.post.side_effect = httpx.ConnectError("connection refused")
        assert send_slack_alert_sync({"text": "hi"}, config) is False
        assert client.post.call_count == 1

    def test_unusable_url(self, config) -> None:
        config.webhook_url = "https://hooks.slack.com:notaport/x"
        assert send_slack_alert_sync({"text": "hi"}, config) is False
