"""
Output group assembly.

Each unit of work becomes exactly one kind of MediaConvert output group:

- Playlist group: one per Elastic Transcoder playlist (HLSv3/HLSv4 ->
  Apple HLS, Smooth -> MS Smooth, MPEG-DASH -> DASH ISO). Every output
  listed in the playlist becomes an output of the group.
- File group: one per output that no playlist references. Elastic
  Transcoder outputs can each carry their own settings that are group
  level in MediaConvert, so outputs are never merged into one group.
- Thumbnail group: one per output whose preset has thumbnails and that
  has a thumbnail pattern.

Group order is fixed: playlists, then unreferenced outputs, then
thumbnails, each in source order.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from etsconvert.deliver.audio import audio_description
from etsconvert.deliver.captions import sidecar_caption_outputs
from etsconvert.deliver.containers import PLAYLIST_CONTAINER_MAP, container_settings
from etsconvert.deliver.destinations import make_destination
from etsconvert.deliver.encryption import playlist_encryption
from etsconvert.deliver.thumbnails import frame_capture_output, thumbnail_name_modifier
from etsconvert.deliver.video import video_description
from etsconvert.source.tracking import path_of
from etsconvert.source.values import parse_float, trim_extension

if TYPE_CHECKING:
    from etsconvert.jobs.context import ConversionContext

logger = logging.getLogger(__name__)

DEFAULT_FRAGMENT_LENGTH = 2

# Output features that are output group or job features in MediaConvert,
# or have no equivalent at all.
UNSUPPORTED_OUTPUT_FEATURES = {
    "encryption": "MediaConvert does not encrypt individual outputs. Use S3 server-side "
                  "encryption on the output group destination instead. This setting is ignored.",
    "watermarks": "The converter does not convert watermarks. Use MediaConvert image "
                  "inserter to add watermarks. This setting is ignored.",
    "albumArt": "MediaConvert does not support album art. This setting is ignored.",
    "composition": "The converter does not convert output composition (clips). This setting "
                   "is ignored.",
}


def has_audio(preset: Any) -> bool:
    audio = preset.get("audio") if preset else None
    return bool(audio) and audio.get("channels") != "0"


def output_audio_descriptions(preset: Any, ctx: "ConversionContext") -> Optional[List[Dict[str, Any]]]:
    return [audio_description(preset.get("audio"), ctx)] if has_audio(preset) else None


def output_video_description(preset: Any, ctx: "ConversionContext") -> Optional[Dict[str, Any]]:
    return video_description(preset.get("video"), ctx) if preset.get("video") else None


class OutputGroupBuilder:
    """
    Builds the MediaConvert output groups of one Elastic Transcoder job.

    Args:
        ctx: Conversion context (job, pipeline, presets, log)
        caption_selectors: Caption selectors already built for the first
            job input, used to join sidecar caption outputs
    """

    def __init__(self, ctx: "ConversionContext", caption_selectors: Optional[Dict[str, Any]] = None):
        self.ctx = ctx
        self.job = ctx.job
        self.caption_selectors = caption_selectors

        inputs = self.job.get("inputs") or []
        first_input_captions = (inputs[0].get("inputCaptions") or {}) if inputs else {}
        self.caption_sources = first_input_captions.get("captionSources") or []

    @property
    def outputs(self) -> List[Any]:
        return list(self.job.get("outputs") or [])

    @property
    def playlists(self) -> List[Any]:
        return list(self.job.get("playlists") or [])

    # ------------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------------

    def _warn_unsupported_features(self, output: Any) -> None:
        for field_name, message in UNSUPPORTED_OUTPUT_FEATURES.items():
            if output.get(field_name):
                self.ctx.log.warn(path_of(output, field_name), message)

    def job_output(self, output: Any, playlist_format: Optional[str] = None) -> Dict[str, Any]:
        """Convert an Elastic Transcoder job output to a MediaConvert output."""
        logger.debug(f"Converting output {output.get('key')} (playlist={playlist_format})")

        preset = self.ctx.preset_for(output)
        self._warn_unsupported_features(output)

        is_hls = isinstance(playlist_format, str) and playlist_format.startswith("HLS")

        return {
            "nameModifier": f"-{output.get('key')}" if is_hls else None,
            "containerSettings": container_settings(preset, self.ctx.log, playlist_format),
            "audioDescriptions": output_audio_descriptions(preset, self.ctx),
            "videoDescription": output_video_description(preset, self.ctx),
        }

    def sidecar_outputs(self, output: Any, playlist_format: Optional[str] = None) -> List[Dict[str, Any]]:
        return sidecar_caption_outputs(
            output,
            self.caption_sources,
            self.caption_selectors,
            self.ctx,
            playlist_format,
        )

    # ------------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------------

    def file_group(self, output: Any) -> Dict[str, Any]:
        """A file output group for a standalone output."""
        return {
            "name": "File Group",
            "outputGroupSettings": {
                "type": "FILE_GROUP_SETTINGS",
                "fileGroupSettings": {
                    "destination": make_destination(self.ctx, trim_extension(output.get("key") or "")),
                },
            },
            "outputs": [self.job_output(output)] + self.sidecar_outputs(output),
        }

    def segment_length(self, playlist: Any, members: List[Any]) -> Optional[int]:
        """
        Segment duration of the first member output that declares one.

        Members are in job output order, so the choice is deterministic.
        """
        for output in members:
            seconds = parse_float(output.get("segmentDuration"))
            if seconds:
                self.ctx.log.info(
                    path_of(playlist),
                    "The converter uses the segment duration of the first output in the playlist "
                    "that has the setting.",
                )
                if seconds != int(seconds):
                    self.ctx.log.warn(
                        path_of(output, "segmentDuration"),
                        f"MediaConvert requires a whole number of seconds for the segment length. "
                        f"The segment duration of {seconds} seconds is truncated to {int(seconds)}.",
                    )
                return int(seconds)
        return None

    def playlist_group(self, playlist: Any) -> Optional[Dict[str, Any]]:
        """An adaptive bitrate output group for an Elastic Transcoder playlist."""
        playlist_format = playlist.get("format")
        logger.debug(f"Converting playlist {playlist.get('name')} ({playlist_format})")

        if playlist_format not in PLAYLIST_CONTAINER_MAP:
            self.ctx.log.error(
                path_of(playlist, "format"),
                f"Playlist format '{playlist_format}' is invalid. This playlist is not converted.",
            )
            return None

        keys = list(playlist.get("outputKeys") or [])
        members = [o for o in self.outputs if o.get("key") in keys]

        encryption = playlist_encryption(playlist, self.ctx.log)
        outputs = [self.job_output(o, playlist_format) for o in members]
        if members:
            outputs += self.sidecar_outputs(members[0], playlist_format)

        segment_length = self.segment_length(playlist, members)
        destination = make_destination(self.ctx, playlist.get("name"))

        if playlist_format in ("HLSv3", "HLSv4"):
            return {
                "name": "Apple HLS",
                "outputGroupSettings": {
                    "type": "HLS_GROUP_SETTINGS",
                    "hlsGroupSettings": {
                        "destination": destination,
                        "encryption": encryption,
                        "minSegmentLength": 0,
                        "segmentLength": segment_length,
                    },
                },
                "outputs": outputs,
            }

        if playlist_format == "Smooth":
            return {
                "name": "MS Smooth",
                "outputGroupSettings": {
                    "type": "MS_SMOOTH_GROUP_SETTINGS",
                    "msSmoothGroupSettings": {
                        "destination": destination,
                        "fragmentLength": segment_length or DEFAULT_FRAGMENT_LENGTH,
                        "encryption": encryption,
                    },
                },
                "outputs": outputs,
            }

        return {
            "name": "DASH ISO",
            "outputGroupSettings": {
                "type": "DASH_ISO_GROUP_SETTINGS",
                "dashIsoGroupSettings": {
                    "destination": destination,
                    "encryption": encryption,
                    "fragmentLength": DEFAULT_FRAGMENT_LENGTH,
                    "segmentLength": segment_length,
                },
            },
            "outputs": outputs,
        }

    def thumbnail_group(self, output: Any) -> Optional[Dict[str, Any]]:
        """A file output group capturing thumbnails for an output, if it has any."""
        preset = self.ctx.preset_for(output)
        thumbnails = preset.get("thumbnails") if preset else None
        pattern = output.get("thumbnailPattern")

        if not thumbnails or not isinstance(pattern, str) or not pattern:
            return None

        self.ctx.log.info(
            path_of(output, "thumbnailPattern"),
            "Thumbnail file name pattern might have changed.",
        )

        return {
            "name": "Thumbnails",
            "outputGroupSettings": {
                "type": "FILE_GROUP_SETTINGS",
                "fileGroupSettings": {
                    "destination": make_destination(
                        self.ctx, trim_extension(output.get("key") or ""), thumbnails=True
                    ),
                },
            },
            "outputs": [{
                "nameModifier": thumbnail_name_modifier(pattern, thumbnails),
                **frame_capture_output(thumbnails, self.ctx.log),
            }],
        }

    def build(self) -> List[Dict[str, Any]]:
        """All output groups, in playlist, standalone, thumbnail order."""
        groups = [g for g in (self.playlist_group(p) for p in self.playlists) if g]

        used_keys = {key for p in self.playlists for key in (p.get("outputKeys") or [])}
        groups += [self.file_group(o) for o in self.outputs if o.get("key") not in used_keys]

        groups += [g for g in (self.thumbnail_group(o) for o in self.outputs) if g]

        return groups
