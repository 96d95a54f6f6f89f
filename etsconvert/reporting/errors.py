"""
Message output errors.

Recording a message never fails; only rendering the message log to a
file can.
"""


class ReportingError(Exception):
    """Base exception for conversion message output failures."""

    pass


class ReportWriteError(ReportingError):
    """The message log could not be written to --messages-file."""

    pass
