"""
Message writers: render conversion messages as JSON or text.

JSON is the machine-readable form printed to stderr by the CLI (one
object per message, in emission order). Text is a human summary with one
line per message followed by per-level counts.
"""

import json
from pathlib import Path
from typing import Iterable, List

from etsconvert.reporting.errors import ReportWriteError
from etsconvert.reporting.models import Message, MessageLevel


def format_messages_json(messages: Iterable[Message], indent: int = 2) -> str:
    """Serialize messages to a JSON array, preserving order."""
    return json.dumps([m.to_dict() for m in messages], indent=indent)


def format_messages_text(messages: Iterable[Message]) -> str:
    """
    Format messages for a terminal.

    Example line:
        WARN   job.outputs[0].presetId.audio.bitRate: MediaConvert does not ...
    """
    messages = list(messages)
    lines: List[str] = []

    for m in messages:
        location = m.location or "-"
        lines.append(f"{m.level.value:<6} {location}: {m.message}")

    counts = ", ".join(
        f"{sum(1 for m in messages if m.level == level)} {level.value}"
        for level in MessageLevel
    )
    lines.append(f"{len(messages)} message(s): {counts}")

    return "\n".join(lines) + "\n"


def write_messages(messages: Iterable[Message], path: Path, fmt: str = "json") -> Path:
    """
    Write messages to a file.

    Args:
        messages: Messages to write
        path: Destination file (parent directory must exist)
        fmt: "json" or "text"

    Returns the written path.
    Raises ReportWriteError if the format is unknown or the write fails.
    """
    if fmt == "json":
        content = format_messages_json(messages) + "\n"
    elif fmt == "text":
        content = format_messages_text(messages)
    else:
        raise ReportWriteError(f"Unknown message format: {fmt}")

    if not path.parent.exists():
        raise ReportWriteError(f"Output directory does not exist: {path.parent}")

    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path
    except OSError as e:
        raise ReportWriteError(f"Failed to write messages: {e}") from e
