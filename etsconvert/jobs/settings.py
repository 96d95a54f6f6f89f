"""
ConversionSettings: options that shape one conversion run.

Settings are immutable for the duration of a run. They are passed to
translators through the ConversionContext, never read from globals.

Template mode:
- template_name set  -> the result is a MediaConvert job template
  (name/description/category emitted, no role, no input file URIs,
  no user metadata)
- template_name None -> the result is a MediaConvert job
"""

from typing import Optional, FrozenSet

from pydantic import BaseModel, ConfigDict, field_validator

# Elastic Transcoder playlist formats accepted for standalone preset conversion.
PLAYLIST_FORMATS: FrozenSet[str] = frozenset({"HLSv3", "HLSv4", "Smooth", "MPEG-DASH"})


class ConversionSettings(BaseModel):
    """
    Options for a single conversion run.

    Attributes:
        insert_defaults: Insert static fallbacks for required settings the
            source leaves to "auto" (WARN), instead of leaving them absent (ERROR).
        camel_case_output: Emit camelCase keys instead of PascalCase.
        template_name: Produce a job template with this name.
        template_description: Template description (templates only).
        template_category: Template category (templates only).
        role_arn: IAM role for MediaConvert jobs (jobs only).
        playlist_format: Playlist format for standalone preset conversion.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    insert_defaults: bool = False
    camel_case_output: bool = False
    template_name: Optional[str] = None
    template_description: Optional[str] = None
    template_category: Optional[str] = None
    role_arn: Optional[str] = None
    playlist_format: Optional[str] = None

    @field_validator("template_name", "role_arn")
    @classmethod
    def blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Blank strings behave like an unset option."""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def is_template(self) -> bool:
        return bool(self.template_name)


DEFAULT_CONVERSION_SETTINGS = ConversionSettings()
