"""
Lenient parsing of Elastic Transcoder setting values.

Elastic Transcoder returns almost every numeric setting as a string
("128", "29.97", "auto"). These helpers read the leading number the way
the API documents it and return None for anything else, so translators
can emit an absent value without branching.
"""

import math
import re
from typing import Any, Optional

_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"^\s*([+-]?(\d+(\.\d*)?|\.\d+))")


def parse_int(value: Any) -> Optional[int]:
    """
    Parse the leading integer of a value.

    parse_int("128")  -> 128
    parse_int("10.0") -> 10
    parse_int("auto") -> None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if not math.isfinite(value) else int(value)
    if not isinstance(value, str):
        return None

    match = _INT_RE.match(value)
    return int(match.group(1)) if match else None


def parse_float(value: Any) -> Optional[float]:
    """Parse the leading decimal number of a value, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    match = _FLOAT_RE.match(value)
    return float(match.group(1)) if match else None


def is_auto(value: Any) -> bool:
    return value == "auto"


def trim_extension(filename: str) -> str:
    """Remove the file extension: "out/a.mp4" -> "out/a"."""
    i = filename.rfind(".")
    return filename[:i] if i >= 0 else filename
