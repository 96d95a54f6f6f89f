"""
Conversion diagnostics: immutable messages and the append-only log.

Every lossy, approximated or impossible conversion decision is recorded
as a Message tagged with the data path of the Elastic Transcoder object
that caused it. The log is filled during one conversion run and read once
by the caller at the end.

Levels:
- INFO:  behaviour changed, nothing lost
- WARN:  a setting was approximated, defaulted or dropped
- ERROR: a required MediaConvert value could not be produced
"""

from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

PathKey = Union[str, int]


class MessageLevel(str, Enum):
    """Severity of a conversion message."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


def format_path(path: Sequence[PathKey]) -> str:
    """
    Render a data path for humans.

    ["job", "outputs", 2, "presetId"] -> "job.outputs[2].presetId"
    """
    res = ""
    for key in path:
        if isinstance(key, int):
            res += f"[{key}]"
        elif res:
            res += f".{key}"
        else:
            res = str(key)
    return res


class Message(BaseModel):
    """A single conversion message."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: MessageLevel
    path: Tuple[PathKey, ...] = Field(default_factory=tuple)
    message: str

    @property
    def location(self) -> str:
        return format_path(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "path": list(self.path),
            "message": self.message,
        }


class MessageLog:
    """
    Ordered, append-only collection of conversion messages.

    Message order equals emission order. Since translation is single
    threaded and walks the source document in a fixed order, two runs on
    identical input produce identical logs.
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def record(self, level: MessageLevel, path: Sequence[PathKey], text: str) -> Message:
        message = Message(level=level, path=tuple(path or ()), message=text)
        self._messages.append(message)
        return message

    def info(self, path: Sequence[PathKey], text: str) -> Message:
        return self.record(MessageLevel.INFO, path, text)

    def warn(self, path: Sequence[PathKey], text: str) -> Message:
        return self.record(MessageLevel.WARN, path, text)

    def error(self, path: Sequence[PathKey], text: str) -> Message:
        return self.record(MessageLevel.ERROR, path, text)

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    @property
    def has_errors(self) -> bool:
        return any(m.level == MessageLevel.ERROR for m in self._messages)

    def count(self, level: MessageLevel) -> int:
        return sum(1 for m in self._messages if m.level == level)

    def to_list(self) -> List[Dict[str, Any]]:
        return [m.to_dict() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self):
        return iter(list(self._messages))
