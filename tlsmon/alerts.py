"""Alert selection for parsed certificate records."""

from .models import CertRecord


def select_alerts(records: list[CertRecord], threshold: int) -> list[CertRecord]:
    """Select the records in alert state.

    A record is in alert state when its certificate expires in ``threshold``
    days or fewer. Every run evaluates from scratch.

    Args:
        records: Parsed records.
        threshold: Alert threshold in days.

    Returns:
        Records in alert state, in input order.
    """
    return [record for record in records if record.in_alert_state(threshold)]
