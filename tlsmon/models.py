"""Pydantic models for tlsmon check results."""

from pydantic import BaseModel, Field, computed_field


class CertRecord(BaseModel):
    """One row of checker output."""
    host: str = Field(description="Checked endpoint")
    common_name: str = Field(description="Certificate subject name (CN)")
    valid: bool = Field(description="Whether the checker reported the certificate as valid")
    days_left: int = Field(description="Days until expiry, negative once expired")
    expire_date: str = Field(description="Expiry timestamp as printed by the checker")

    def in_alert_state(self, threshold: int) -> bool:
        """Check if the certificate expires within ``threshold`` days."""
        return self.days_left <= threshold


class RunResult(BaseModel):
    """Outcome of a single monitoring run."""
    records: list[CertRecord] = Field(default_factory=list)
    alerts: list[CertRecord] = Field(default_factory=list)
    checker_error: str | None = Field(default=None, description="Checker failure, if any")
    notified: bool = Field(default=False, description="Slack message sent successfully")
    notification_failed: bool = Field(default=False, description="Slack send attempted and failed")
    heartbeat_sent: bool = Field(default=False, description="StatsD counter incremented")

    @computed_field
    @property
    def checked(self) -> int:
        """Number of hosts reported by the checker."""
        return len(self.records)

    @property
    def exit_code(self) -> int:
        """Process exit status for this run."""
        return 1 if self.notification_failed else 0
