"""
Conversion orchestration.

Walks a whole Elastic Transcoder job or preset, invokes the translators in
a fixed order and assembles the MediaConvert document.

Not included:
- Fetching jobs, pipelines or presets (see etsconvert.source)
- Output key casing (applied by ConversionResult.rendered)
"""

from .errors import ConversionError, InvalidSettingsError
from .settings import ConversionSettings, DEFAULT_CONVERSION_SETTINGS, PLAYLIST_FORMATS
from .context import ConversionContext
from .results import ConversionResult
from .job import convert_job, build_job_document
from .preset import convert_preset, preset_name

__all__ = [
    # Errors
    "ConversionError",
    "InvalidSettingsError",
    # Settings
    "ConversionSettings",
    "DEFAULT_CONVERSION_SETTINGS",
    "PLAYLIST_FORMATS",
    # Context
    "ConversionContext",
    # Results
    "ConversionResult",
    # Conversion
    "convert_job",
    "build_job_document",
    "convert_preset",
    "preset_name",
]
