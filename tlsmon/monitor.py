"""A single check-and-notify run."""

import json
import logging

from .alerting.heartbeat import send_heartbeat
from .alerting.slack import build_payload, send_slack_alert_sync
from .alerts import select_alerts
from .checker import run_checker
from .config import Config
from .errors import CheckerError
from .models import RunResult
from .parser import parse_output

logger = logging.getLogger(__name__)


def run_once(config: Config, dry_run: bool = False) -> RunResult:
    """Check all hosts, notify Slack about expiring certificates and send a heartbeat.

    A checker failure is logged and treated as empty output. Parse errors
    propagate and abort the run before anything is sent.

    Args:
        config: Process configuration.
        dry_run: Log the Slack payload instead of posting it and skip the heartbeat.

    Returns:
        Outcome of the run.

    Raises:
        ParseError: If the checker output is malformed.
    """
    result = RunResult()

    output = ""
    try:
        output = run_checker(config)
    except CheckerError as e:
        logger.error("Error while checking TLS hosts: %s", e)
        result.checker_error = str(e)

    result.records = parse_output(output)
    result.alerts = select_alerts(result.records, config.alert_threshold)

    logger.info(
        "TLS hosts in ALERT state (days left <= %d): %d of %d",
        config.alert_threshold,
        len(result.alerts),
        result.checked,
    )
    for record in result.alerts:
        logger.info(
            "Host '%s' is in ALERT state - only %d days left before TLS cert expires",
            record.host,
            record.days_left,
        )

    payload = build_payload(result.alerts, result.checked, config.mention)
    if payload is None:
        logger.info("No hosts in alert state, nothing to send")
    elif dry_run:
        logger.info("Dry run, not sending Slack message:\n%s", json.dumps(payload, indent=2))
    elif send_slack_alert_sync(payload, config):
        logger.info("Successfully sent message to Slack incoming webhook")
        result.notified = True
    else:
        result.notification_failed = True

    if not dry_run:
        result.heartbeat_sent = send_heartbeat(config)

    return result
