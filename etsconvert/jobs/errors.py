"""
Conversion error types.

Conversion problems in the source settings are NOT raised; they are
recorded in the MessageLog. These exceptions cover misuse of the
converter itself.
"""


class ConversionError(Exception):
    """Base exception for converter failures."""
    pass


class InvalidSettingsError(ConversionError):
    """Raised when conversion settings are inconsistent with the request."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid setting '{field}': {reason}")
