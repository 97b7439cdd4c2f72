"""Tests for alert selection."""

from __future__ import annotations

import pytest

from tlsmon.alerts import select_alerts
from tlsmon.models import CertRecord


def make_record(host: str, days_left: int) -> CertRecord:
    return CertRecord(
        host=host,
        common_name=host,
        valid=True,
        days_left=days_left,
        expire_date="2024-01-01",
    )


class TestAlertState:
    @pytest.mark.parametrize("threshold", [-5, 0, 1, 20, 365])
    def test_boundary(self, threshold: int) -> None:
        assert make_record("h", threshold).in_alert_state(threshold) is True
        assert make_record("h", threshold + 1).in_alert_state(threshold) is False

    def test_expired_always_alerts(self) -> None:
        assert make_record("h", -10).in_alert_state(0) is True


class TestSelectAlerts:
    def test_keeps_order(self) -> None:
        records = [make_record("a", 3), make_record("b", 50), make_record("c", 20)]
        assert [r.host for r in select_alerts(records, 20)] == ["a", "c"]

    def test_none_selected(self) -> None:
        assert select_alerts([make_record("a", 21), make_record("b", 90)], 20) == []

    def test_empty(self) -> None:
        assert select_alerts([], 20) == []
