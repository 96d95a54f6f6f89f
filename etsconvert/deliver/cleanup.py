"""
Empty-value removal for MediaConvert documents.

Translators emit None freely for settings that do not apply; this pass
drops them so call sites never need conditional assembly. Removed values:
None, empty string, and NaN. Empty dicts/lists are kept, matching what
MediaConvert accepts.
"""

import math
from collections.abc import Mapping
from typing import Any


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and value == "":
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def remove_empty(obj: Any) -> Any:
    """Return a copy of `obj` without empty values, recursively."""
    if isinstance(obj, Mapping):
        return {key: remove_empty(value) for key, value in obj.items() if not is_empty(value)}
    if isinstance(obj, (list, tuple)):
        return [remove_empty(value) for value in obj]
    return obj
