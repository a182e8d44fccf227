"""Exception taxonomy for tapedeck.

Only setup-time mistakes get their own exception type. Failures raised
while a request travels through a handler chain are never wrapped, so
callers see exactly what the failing step raised.
"""

from __future__ import annotations


class TapedeckError(Exception):
    """Base class for errors raised by tapedeck itself."""


class ConfigurationError(TapedeckError):
    """Raised when the mapper or a handler chain is wired incorrectly.

    Attributes:
        message: Human-readable description of the problem.
        offending_type: The class that triggered the error, if any.
    """

    def __init__(self, message: str, offending_type: type | None = None) -> None:
        self.message = message
        self.offending_type = offending_type
        super().__init__(message)
