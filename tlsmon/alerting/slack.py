"""Slack incoming webhook alerting."""

import logging
from typing import Any

import httpx

from ..config import Config
from ..models import CertRecord

logger = logging.getLogger(__name__)

ATTACHMENT_TITLE = "TLS/SSL cert expiration alert."
ATTACHMENT_COLOR = "danger"


def build_attachment(record: CertRecord) -> dict[str, Any]:
    """Build the Slack attachment describing one host in alert state."""
    return {
        "title": ATTACHMENT_TITLE,
        "color": ATTACHMENT_COLOR,
        "fields": [
            {
                "title": "TLS Host",
                "value": record.host,
                "short": True,
            },
            {
                "title": "Days left",
                "value": str(record.days_left),
                "short": True,
            },
        ],
    }


def build_payload(
    alerts: list[CertRecord],
    checked: int,
    mention: str,
) -> dict[str, Any] | None:
    """Build the webhook payload for a run.

    Args:
        alerts: Records in alert state.
        checked: Total number of hosts checked in the run.
        mention: Mention token leading the message text.

    Returns:
        Slack payload, or None when there is nothing to report.
    """
    if not alerts:
        return None

    text = f"*Following TLS/SSL host(s) is/are in ALERT state ({checked} hosts checked):*"
    if mention:
        text = f"{mention} {text}"

    return {
        "text": text,
        "attachments": [build_attachment(record) for record in alerts],
    }


def send_slack_alert_sync(
    payload: dict[str, Any],
    config: Config,
    timeout: float = 30.0,
) -> bool:
    """Post a payload to the configured Slack incoming webhook.

    Args:
        payload: Message built by ``build_payload``.
        config: Configuration holding the webhook URL.
        timeout: Request timeout in seconds.

    Returns:
        True if the message was accepted, False otherwise.
    """
    try:
        with httpx.Client() as client:
            response = client.post(
                str(config.webhook_url),
                json=payload,
                timeout=timeout,
            )
            response.raise_for_status()
            return True

    except httpx.HTTPStatusError as e:
        logger.error(
            "Slack webhook rejected message: %d %s",
            e.response.status_code,
            e.response.text[:200],
        )
        return False
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error("Error sending message to Slack incoming webhook: %s", e)
        return False
