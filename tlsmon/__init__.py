"""tlsmon - TLS certificate expiry monitor with Slack alerting."""

__version__ = "0.1.0"
