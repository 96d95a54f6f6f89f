"""
Conversion diagnostics.

Every translator appends INFO/WARN/ERROR messages to a shared MessageLog,
tagged with the data path of the source object. Observational only.
"""

from etsconvert.reporting.errors import ReportingError, ReportWriteError
from etsconvert.reporting.models import Message, MessageLevel, MessageLog, format_path
from etsconvert.reporting.writers import (
    format_messages_json,
    format_messages_text,
    write_messages,
)

__all__ = [
    "ReportingError",
    "ReportWriteError",
    "Message",
    "MessageLevel",
    "MessageLog",
    "format_path",
    "format_messages_json",
    "format_messages_text",
    "write_messages",
]
