"""
Settings translators: Elastic Transcoder settings -> MediaConvert settings.

Every translator is a function of its source record and the conversion
context. Translators return complete fragments and record conversion
problems in the context's MessageLog; they never raise for bad settings
and never perform I/O.
"""

from .audio import AudioCodec, audio_description
from .captions import input_caption_selectors, sidecar_caption_outputs
from .cleanup import remove_empty
from .codecs import RateControlMode, VideoCodec
from .containers import container_settings
from .destinations import build_destination, make_destination
from .geometry import Par, Resolution, dar_to_par, gcd, get_par, get_resolution
from .hrd import max_hrd_buffer_size
from .output_groups import OutputGroupBuilder
from .video import codec_settings, video_description

__all__ = [
    # Audio
    "AudioCodec",
    "audio_description",
    # Video
    "RateControlMode",
    "VideoCodec",
    "codec_settings",
    "video_description",
    "max_hrd_buffer_size",
    # Geometry
    "Par",
    "Resolution",
    "dar_to_par",
    "gcd",
    "get_par",
    "get_resolution",
    # Captions
    "input_caption_selectors",
    "sidecar_caption_outputs",
    # Output groups
    "OutputGroupBuilder",
    "container_settings",
    "build_destination",
    "make_destination",
    # Cleanup
    "remove_empty",
]
