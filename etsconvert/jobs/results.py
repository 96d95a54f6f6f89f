"""
Conversion result models.

A conversion always produces a document, even when messages contain
ERROR entries. Callers decide whether ERROR entries are blocking.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from etsconvert.reporting.models import Message, MessageLevel
from etsconvert.source.casing import to_pascal


class ConversionResult(BaseModel):
    """
    Result of one job or preset conversion.

    The document is built in camelCase. `rendered()` applies the requested
    output casing.
    """

    model_config = ConfigDict(extra="forbid")

    document: Any
    """MediaConvert job, job template, or list of presets."""

    messages: List[Message] = Field(default_factory=list)
    """INFO/WARN/ERROR messages in emission order."""

    camel_case: bool = False
    """Default output casing of `rendered()`, from ConversionSettings.camel_case_output."""

    @property
    def has_errors(self) -> bool:
        return any(m.level == MessageLevel.ERROR for m in self.messages)

    def count(self, level: MessageLevel) -> int:
        return sum(1 for m in self.messages if m.level == level)

    def rendered(self, camel_case: Optional[bool] = None) -> Any:
        """
        The document with camelCase or PascalCase keys.

        camel_case=None uses the casing the conversion was configured with.
        The document is already camelCase. Selector names such as
        "Audio Selector 1" are map keys too and must keep their case.
        """
        if camel_case is None:
            camel_case = self.camel_case
        return self.document if camel_case else to_pascal(self.document)

    def summary(self) -> str:
        return (
            f"{self.count(MessageLevel.ERROR)} error(s), "
            f"{self.count(MessageLevel.WARN)} warning(s), "
            f"{self.count(MessageLevel.INFO)} info message(s)"
        )

    def messages_as_dicts(self) -> List[Dict[str, Any]]:
        return [m.to_dict() for m in self.messages]
