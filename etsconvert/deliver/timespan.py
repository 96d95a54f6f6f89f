"""
Elastic Transcoder time values.

Elastic Transcoder accepts times as seconds ("SSSSS.sss") or clock time
("HH:mm:SS.sss"), optionally signed for caption offsets. MediaConvert
input clipping uses SMPTE timecode ("HH:MM:SS:FF"), which has frames but
no fractional seconds.
"""

import re
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from etsconvert.source.tracking import path_of

if TYPE_CHECKING:
    from etsconvert.reporting.models import MessageLog

ETS_TIME_DOC_URL = (
    "https://docs.aws.amazon.com/elastictranscoder/latest/developerguide/"
    "job-settings.html#job-settings-input-details-part-2"
)

ETS_TIME_RE = re.compile(
    r"(^\d{1,5}(\.\d{0,3})?$)|"
    r"(^([0-1]?[0-9]:|2[0-3]:)?([0-5]?[0-9]:)?[0-5]?[0-9](\.\d{0,3})?$)"
)


def is_valid_time(value: str) -> bool:
    return bool(ETS_TIME_RE.match(value))


def _strip_sign(value: str) -> Tuple[str, int]:
    if value.startswith(("+", "-")):
        return value[1:], -1 if value.startswith("-") else 1
    return value, 1


def to_seconds(value: Any) -> Optional[int]:
    """Whole seconds of a time value; the fractional part is dropped."""
    if not isinstance(value, str):
        return None

    tc, sign = _strip_sign(value)
    if "." in tc:
        tc = tc[: tc.index(".")]

    parts = tc.split(":")
    if len(parts) > 3 or not all(p.isdigit() for p in parts):
        return None

    hours, minutes, seconds = [0] * (3 - len(parts)) + [int(p) for p in parts]
    return (hours * 3600 + minutes * 60 + seconds) * sign


def to_millis(value: Any) -> Optional[int]:
    """Milliseconds of a time value, including the fractional part."""
    seconds = to_seconds(value)
    if seconds is None:
        return None

    unsigned, sign = _strip_sign(value)
    fraction = unsigned[unsigned.index(".") + 1:] if "." in unsigned else ""
    millis = int(fraction.ljust(3, "0")[:3]) if fraction.isdigit() or fraction == "" else 0

    return seconds * 1000 + millis * sign


def to_timecode(seconds: int) -> str:
    """Seconds to SMPTE timecode with a zero frame count."""
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}:00"


def parse_time_offset(value: Any) -> Optional[Tuple[int, str]]:
    """
    Caption time offset as a MediaConvert (timeDelta, timeDeltaUnits) pair.

    Sub-second precision switches the unit to milliseconds. Returns None
    when the offset cannot be parsed.
    """
    if not isinstance(value, str):
        return None

    unsigned, _ = _strip_sign(value.strip())
    if not is_valid_time(unsigned):
        return None

    value = value.strip()
    if "." in value:
        return to_millis(value), "MILLISECONDS"
    return to_seconds(value), "SECONDS"


def input_clippings(time_span: Any, log: "MessageLog") -> Optional[List[Dict[str, Any]]]:
    """
    Convert an Elastic Transcoder TimeSpan to MediaConvert input clippings.

    Ill-formatted times drop the clipping with a WARN; fractional seconds
    are truncated with a WARN.
    """
    if not time_span or (not time_span.get("startTime") and not time_span.get("duration")):
        return None

    start = (time_span.get("startTime") or "").strip()
    duration = (time_span.get("duration") or "").strip()

    for field_name, value, label in (("startTime", start, "StartTime"), ("duration", duration, "Duration")):
        if value and not is_valid_time(value):
            log.warn(
                path_of(time_span, field_name),
                f"{label} is ill-formatted. For more info see {ETS_TIME_DOC_URL}",
            )
            return None

    for field_name, value in (("startTime", start), ("duration", duration)):
        if "." in value:
            log.warn(
                path_of(time_span, field_name),
                "MediaConvert supports SMPTE timecode that contains frame number, but not "
                "fractional seconds, which has been omitted.",
            )

    start_seconds = to_seconds(start) if start else 0
    duration_seconds = to_seconds(duration) if duration else None

    return [{
        "startTimecode": to_timecode(start_seconds) if start else None,
        "endTimecode": (
            to_timecode(start_seconds + duration_seconds) if duration_seconds is not None else None
        ),
    }]
