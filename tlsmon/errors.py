"""Exceptions raised by tlsmon."""


class TlsmonError(Exception):
    """Base class for all tlsmon errors."""


class ConfigError(TlsmonError):
    """Required configuration is missing or invalid."""


class CheckerError(TlsmonError):
    """The external certificate checker failed or timed out."""


class ParseError(TlsmonError):
    """Checker output could not be turned into records."""

    def __init__(self, message: str, line_no: int, line: str) -> None:
        super().__init__(message)
        self.line_no = line_no
        self.line = line


class MissingFieldsError(ParseError):
    """An output line has fewer fields than a record needs."""


class InvalidDaysLeftError(ParseError):
    """The days-left field is not an integer."""
