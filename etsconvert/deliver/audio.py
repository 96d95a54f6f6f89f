"""
Audio translation: Elastic Transcoder AudioParameters to a MediaConvert
AudioDescription.

Each decision is independent:
- codec: fixed lookup (unknown codecs pass through with no settings block)
- sample rate / channels: "auto" resolved by the insert-defaults policy
- AAC: channels become a coding mode, other codecs keep a channel count
- bitrate: only AAC, MP2 and MP3 have a MediaConvert bitrate setting
- packing mode: OneChannelPerTrack variants have no equivalent

Insert-defaults policy for "auto":
    insert_defaults=True  -> static fallback value + WARN
    insert_defaults=False -> absent value + ERROR
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

from etsconvert.deliver.cleanup import remove_empty
from etsconvert.source.tracking import path_of
from etsconvert.source.values import is_auto, parse_int

if TYPE_CHECKING:
    from etsconvert.jobs.context import ConversionContext

logger = logging.getLogger(__name__)

AUDIO_SOURCE_NAME = "Audio Selector 1"

PACKING_MODE_DOC_URLS = (
    "https://docs.aws.amazon.com/mediaconvert/latest/ug/more-about-audio-tracks-selectors.html "
    "https://docs.aws.amazon.com/mediaconvert/latest/ug/audio-descriptions.html"
)


class AudioCodec(str, Enum):
    """MediaConvert audio codecs reachable from Elastic Transcoder."""

    AAC = "AAC"
    FLAC = "FLAC"
    MP2 = "MP2"
    MP3 = "MP3"
    WAV = "WAV"
    VORBIS = "VORBIS"

    @property
    def settings_key(self) -> str:
        """Codec-specific settings key, e.g. "aacSettings"."""
        return f"{self.value.lower()}Settings"

    @property
    def supports_bitrate(self) -> bool:
        return self in (AudioCodec.AAC, AudioCodec.MP2, AudioCodec.MP3)


# Elastic Transcoder codec -> MediaConvert codec
AUDIO_CODEC_MAP: Dict[str, AudioCodec] = {
    "AAC": AudioCodec.AAC,
    "flac": AudioCodec.FLAC,
    "mp2": AudioCodec.MP2,
    "mp3": AudioCodec.MP3,
    "pcm": AudioCodec.WAV,
    "vorbis": AudioCodec.VORBIS,
}

AAC_CODING_MODE_MAP: Dict[str, str] = {
    "1": "CODING_MODE_1_0",
    "2": "CODING_MODE_2_0",
}

AAC_PROFILE_MAP: Dict[str, str] = {
    "AAC-LC": "LC",
    "HE-AAC": "HEV1",
    "HE-AACv2": "HEV2",
}

# Static fallback sample rates (Hz), the MediaConvert console defaults.
DEFAULT_SAMPLE_RATES: Dict[str, int] = {
    "AAC": 48000,
    "flac": 48000,
    "mp2": 48000,
    "mp3": 48000,
    "pcm": 44100,
    "vorbis": 48000,
}

DEFAULT_CHANNELS = 2
DEFAULT_AAC_CODING_MODE = "CODING_MODE_2_0"

UNSUPPORTED_PACKING_MODES = frozenset({"OneChannelPerTrack", "OneChannelPerTrackWithMosTo8Tracks"})


def _resolve_auto(
    audio: Any,
    field_name: str,
    label: str,
    fallback: Any,
    ctx: "ConversionContext",
) -> Any:
    codec = audio.get("codec")

    if ctx.settings.insert_defaults:
        ctx.log.warn(
            path_of(audio, field_name),
            f"The audio {label} for {codec} is set to 'auto'. "
            f"The converter has applied a static default value of {fallback}.",
        )
        return fallback

    ctx.log.error(
        path_of(audio, field_name),
        f"The audio {label} for {codec} is set to 'auto'. "
        f"Audio {label} is required, but no default value has been applied.",
    )
    return None


def convert_sample_rate(audio: Any, ctx: "ConversionContext") -> Optional[int]:
    if is_auto(audio.get("sampleRate")):
        fallback = DEFAULT_SAMPLE_RATES.get(audio.get("codec"), 48000)
        return _resolve_auto(audio, "sampleRate", "sample rate", fallback, ctx)
    return parse_int(audio.get("sampleRate"))


def convert_channels(audio: Any, ctx: "ConversionContext") -> Optional[int]:
    """Channel count for non-AAC codecs (AAC uses a coding mode)."""
    if audio.get("codec") == "AAC":
        return None
    if is_auto(audio.get("channels")):
        return _resolve_auto(audio, "channels", "channels", DEFAULT_CHANNELS, ctx)
    return parse_int(audio.get("channels"))


def convert_coding_mode(audio: Any, ctx: "ConversionContext") -> Optional[str]:
    """AAC coding mode derived from the channel count."""
    if audio.get("codec") != "AAC":
        return None
    if is_auto(audio.get("channels")):
        return _resolve_auto(audio, "channels", "channels", DEFAULT_AAC_CODING_MODE, ctx)
    return AAC_CODING_MODE_MAP.get(str(audio.get("channels")))


def audio_description(audio: Any, ctx: "ConversionContext") -> Dict[str, Any]:
    """
    Convert Elastic Transcoder AudioParameters to a MediaConvert
    AudioDescription.
    """
    codec = audio.get("codec")
    target = AUDIO_CODEC_MAP.get(codec)
    codec_options = audio.get("codecOptions") or {}
    packing_mode = audio.get("audioPackingMode")

    logger.debug(f"Converting audio parameters at {path_of(audio)} (codec={codec})")

    if packing_mode in UNSUPPORTED_PACKING_MODES:
        ctx.log.warn(
            path_of(audio, "audioPackingMode"),
            f"The converter has not retained {packing_mode} audio packing mode. "
            f"For MediaConvert audio mixing features, see {PACKING_MODE_DOC_URLS}",
        )

    if audio.get("bitRate") and not (target and target.supports_bitrate):
        ctx.log.warn(
            path_of(audio, "bitRate"),
            f"MediaConvert does not support {codec} bitrate. This setting is ignored.",
        )

    bitrate = None
    if target and target.supports_bitrate:
        kbps = parse_int(audio.get("bitRate"))
        bitrate = kbps * 1000 if kbps is not None else None

    codec_settings: Dict[str, Any] = {"codec": target.value if target else codec}

    # Computed for every codec so "auto" diagnostics are emitted even when
    # there is no settings block to put the value in.
    settings = {
        "sampleRate": convert_sample_rate(audio, ctx),
        "bitrate": bitrate,
        "channels": convert_channels(audio, ctx),
        "codingMode": convert_coding_mode(audio, ctx),
        "codecProfile": AAC_PROFILE_MAP.get(codec_options.get("profile")),
        "bitDepth": parse_int(codec_options.get("bitDepth")),
    }

    if target is not None:
        codec_settings[target.settings_key] = settings

    return remove_empty({
        "codecSettings": codec_settings,
        "audioSourceName": AUDIO_SOURCE_NAME,
    })
