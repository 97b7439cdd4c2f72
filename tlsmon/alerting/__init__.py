"""Outbound notification sinks."""
