"""
Preset conversion: Elastic Transcoder preset -> MediaConvert output presets.

An Elastic Transcoder preset carries both output settings and thumbnail
settings. MediaConvert captures frames in a separate output, so a preset
with thumbnails becomes two presets: "<name>" and "<name> - thumbnails".
"""

import logging
import re
from typing import Any, Dict, List

from etsconvert.deliver.cleanup import remove_empty
from etsconvert.deliver.containers import container_settings
from etsconvert.deliver.output_groups import output_audio_descriptions, output_video_description
from etsconvert.deliver.thumbnails import frame_capture_output
from etsconvert.jobs.context import ConversionContext
from etsconvert.jobs.errors import InvalidSettingsError
from etsconvert.jobs.results import ConversionResult
from etsconvert.jobs.settings import PLAYLIST_FORMATS, ConversionSettings, DEFAULT_CONVERSION_SETTINGS
from etsconvert.source.tracking import TrackedDict

logger = logging.getLogger(__name__)

PRESET_NAME_PREFIX = "ETS "
MAX_PRESET_NAME_LENGTH = 65

# Characters MediaConvert does not accept in preset names
INVALID_NAME_CHARS_RE = re.compile(r'[$&,:;?<>`\\"#%{}/|^~]')


def preset_name(name: str) -> str:
    """
    MediaConvert preset name for an Elastic Transcoder preset name.

    preset_name("System preset: Generic 1080p") -> "ETS System preset Generic 1080p"
    """
    return (PRESET_NAME_PREFIX + INVALID_NAME_CHARS_RE.sub("", name or ""))[:MAX_PRESET_NAME_LENGTH]


def build_preset_documents(preset: Any, ctx: ConversionContext) -> List[Dict[str, Any]]:
    """The output preset, followed by the thumbnails preset when there is one."""
    name = preset_name(preset.get("name"))
    description = preset.get("description")

    documents = [{
        "name": name,
        "description": description,
        "settings": {
            "containerSettings": container_settings(preset, ctx.log, ctx.settings.playlist_format),
            "audioDescriptions": output_audio_descriptions(preset, ctx),
            "videoDescription": output_video_description(preset, ctx),
        },
    }]

    thumbnails = frame_capture_output(preset.get("thumbnails"), ctx.log)
    if thumbnails:
        documents.append({
            "name": f"{name} - thumbnails",
            "description": description,
            "settings": thumbnails,
        })

    return remove_empty(documents)


def convert_preset(
    preset: TrackedDict,
    settings: ConversionSettings = DEFAULT_CONVERSION_SETTINGS,
) -> ConversionResult:
    """
    Convert a standalone Elastic Transcoder preset.

    Raises:
        InvalidSettingsError: playlist_format is not an Elastic Transcoder
            playlist format
    """
    if settings.playlist_format is not None and settings.playlist_format not in PLAYLIST_FORMATS:
        raise InvalidSettingsError(
            "playlist_format",
            f"'{settings.playlist_format}' is not one of {', '.join(sorted(PLAYLIST_FORMATS))}",
        )

    ctx = ConversionContext(settings=settings, presets={preset.get("id"): preset})
    logger.info(f"Converting preset {preset.get('id')} (playlist={settings.playlist_format})")

    documents = build_preset_documents(preset, ctx)

    return ConversionResult(
        document=documents,
        messages=ctx.log.messages,
        camel_case=settings.camel_case_output,
    )
