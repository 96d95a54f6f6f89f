"""
JSON key casing.

The Elastic Transcoder API returns PascalCase keys; the converter works in
camelCase internally; MediaConvert accepts PascalCase (CLI, SDKs) or
camelCase (console JSON). Only the first character of each key changes.

User metadata is user data, not schema: its keys are copied verbatim.
"""

from collections.abc import Mapping
from typing import Any, Callable, FrozenSet

VERBATIM_KEYS: FrozenSet[str] = frozenset({"userMetadata", "UserMetadata"})


def _lower_first(key: str) -> str:
    return key[:1].lower() + key[1:]


def _upper_first(key: str) -> str:
    return key[:1].upper() + key[1:]


def _convert(obj: Any, transform: Callable[[str], str]) -> Any:
    if isinstance(obj, Mapping):
        res = {}
        for key, value in obj.items():
            new_key = transform(key) if isinstance(key, str) else key
            res[new_key] = value if key in VERBATIM_KEYS else _convert(value, transform)
        return res
    if isinstance(obj, (list, tuple)):
        return [_convert(value, transform) for value in obj]
    return obj


def to_camel(obj: Any) -> Any:
    """Return a copy of `obj` with camelCase keys."""
    return _convert(obj, _lower_first)


def to_pascal(obj: Any) -> Any:
    """Return a copy of `obj` with PascalCase keys."""
    return _convert(obj, _upper_first)
