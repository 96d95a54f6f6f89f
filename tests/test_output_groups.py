"""
Tests for output group assembly.

Group order is playlists, then outputs no playlist references, then
thumbnails, each in source order.
"""

import pytest

from etsconvert.deliver.output_groups import OutputGroupBuilder
from etsconvert.reporting.models import MessageLevel


def build(make_ctx, job, presets, **settings):
    ctx = make_ctx(job=job, presets=presets, **settings)
    return OutputGroupBuilder(ctx).build(), ctx


@pytest.fixture
def mixed_job(h264_preset, hls_preset):
    return {
        "id": "job-1",
        "outputKeyPrefix": "/media/",
        "inputs": [{"key": "in.mov"}],
        "outputs": [
            {"key": "hls-1", "presetId": hls_preset["id"], "segmentDuration": "10"},
            {"key": "a.mp4", "presetId": h264_preset["id"], "thumbnailPattern": "a-{count}"},
            {"key": "hls-2", "presetId": hls_preset["id"], "segmentDuration": "6"},
            {"key": "b.mp4", "presetId": h264_preset["id"], "thumbnailPattern": "b-{resolution}-{count}"},
        ],
        "playlists": [
            {"name": "main", "format": "HLSv4", "outputKeys": ["hls-2", "hls-1"]},
        ],
    }


class TestGroupOrder:
    """Playlists ++ unreferenced outputs ++ thumbnails."""

    def test_order(self, make_ctx, mixed_job, h264_preset, hls_preset):
        groups, _ = build(make_ctx, mixed_job, [h264_preset, hls_preset])

        assert [g["name"] for g in groups] == [
            "Apple HLS", "File Group", "File Group", "Thumbnails", "Thumbnails",
        ]

    def test_file_groups_in_source_order(self, make_ctx, mixed_job, h264_preset, hls_preset):
        groups, _ = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        destinations = [g["outputGroupSettings"]["fileGroupSettings"]["destination"] for g in groups[1:3]]
        assert destinations == ["s3://output-bucket/media/a", "s3://output-bucket/media/b"]

    def test_thumbnail_groups_in_source_order(self, make_ctx, mixed_job, h264_preset, hls_preset):
        groups, _ = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        destinations = [g["outputGroupSettings"]["fileGroupSettings"]["destination"] for g in groups[3:]]
        assert destinations == ["s3://output-bucket/media/a", "s3://output-bucket/media/b"]

    def test_messages_follow_group_order(self, make_ctx, mixed_job, h264_preset, hls_preset):
        """Playlist INFO comes before thumbnail INFO."""
        _, ctx = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        infos = [m for m in ctx.log if m.level == MessageLevel.INFO]

        assert infos[0].path == ("job", "playlists", 0)
        assert infos[-1].path == ("job", "outputs", 3, "thumbnailPattern")

    def test_deterministic(self, make_ctx, mixed_job, h264_preset, hls_preset):
        first, ctx1 = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        second, ctx2 = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        assert first == second
        assert ctx1.log.messages == ctx2.log.messages


class TestPlaylistGroups:

    def test_hls_group(self, make_ctx, mixed_job, h264_preset, hls_preset):
        groups, ctx = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        hls = groups[0]
        settings = hls["outputGroupSettings"]

        assert settings["type"] == "HLS_GROUP_SETTINGS"
        assert settings["hlsGroupSettings"]["destination"] == "s3://output-bucket/media/main"
        assert settings["hlsGroupSettings"]["minSegmentLength"] == 0
        assert [o["nameModifier"] for o in hls["outputs"]] == ["-hls-1", "-hls-2"]
        assert hls["outputs"][0]["containerSettings"] == {"container": "M3U8"}

    def test_segment_length_from_first_output_in_job_order(self, make_ctx, mixed_job, h264_preset, hls_preset):
        """hls-1 comes first in the job, even though the playlist lists hls-2 first."""
        groups, _ = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        assert groups[0]["outputGroupSettings"]["hlsGroupSettings"]["segmentLength"] == 10

    def test_segment_length_skips_outputs_without_duration(self, make_ctx, mixed_job, h264_preset, hls_preset):
        del mixed_job["outputs"][0]["segmentDuration"]
        groups, _ = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        assert groups[0]["outputGroupSettings"]["hlsGroupSettings"]["segmentLength"] == 6

    def test_fractional_segment_length_truncated(self, make_ctx, mixed_job, h264_preset, hls_preset):
        """A fractional duration is cut to whole seconds with a WARN."""
        mixed_job["outputs"][0]["segmentDuration"] = "2.5"
        groups, ctx = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        warnings = [m for m in ctx.log if m.path == ("job", "outputs", 0, "segmentDuration")]

        assert groups[0]["outputGroupSettings"]["hlsGroupSettings"]["segmentLength"] == 2
        assert [m.level for m in warnings] == [MessageLevel.WARN]

    def test_whole_segment_length_not_warned(self, make_ctx, mixed_job, h264_preset, hls_preset):
        _, ctx = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        assert not [m for m in ctx.log if m.path[-1:] == ("segmentDuration",)]

    def test_smooth_group(self, make_ctx, mixed_job, h264_preset, hls_preset):
        mixed_job["playlists"][0]["format"] = "Smooth"
        for output in mixed_job["outputs"]:
            output.pop("segmentDuration", None)
        groups, _ = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        smooth = groups[0]

        assert smooth["name"] == "MS Smooth"
        assert smooth["outputGroupSettings"]["msSmoothGroupSettings"]["fragmentLength"] == 2
        assert "nameModifier" not in smooth["outputs"][0] or smooth["outputs"][0]["nameModifier"] is None
        assert smooth["outputs"][0]["containerSettings"] == {"container": "ISMV"}

    def test_dash_group(self, make_ctx, mixed_job, h264_preset, hls_preset):
        mixed_job["playlists"][0]["format"] = "MPEG-DASH"
        groups, _ = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        dash = groups[0]["outputGroupSettings"]

        assert dash["type"] == "DASH_ISO_GROUP_SETTINGS"
        assert dash["dashIsoGroupSettings"]["fragmentLength"] == 2
        assert dash["dashIsoGroupSettings"]["segmentLength"] == 10

    def test_unknown_format_skipped(self, make_ctx, mixed_job, h264_preset, hls_preset):
        mixed_job["playlists"][0]["format"] = "RTMP"
        groups, ctx = build(make_ctx, mixed_job, [h264_preset, hls_preset])

        assert "Apple HLS" not in [g["name"] for g in groups]
        assert ctx.log.messages[0].level == MessageLevel.ERROR
        assert ctx.log.messages[0].path == ("job", "playlists", 0, "format")

    def test_hls_content_protection(self, make_ctx, mixed_job, h264_preset, hls_preset):
        mixed_job["playlists"][0]["hlsContentProtection"] = {
            "method": "aes-128",
            "key": "k",
            "keyStoragePolicy": "NoStore",
            "licenseAcquisitionUrl": "https://keys.example.com",
        }
        groups, _ = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        encryption = groups[0]["outputGroupSettings"]["hlsGroupSettings"]["encryption"]
        assert encryption["type"] == "STATIC_KEY"
        assert encryption["staticKeyProvider"]["url"] == "https://keys.example.com"


class TestFileGroups:

    def test_job_output(self, make_ctx, h264_preset):
        job = {"outputs": [{"key": "out/video.mp4", "presetId": h264_preset["id"]}], "inputs": []}
        groups, _ = build(make_ctx, job, [h264_preset])
        group = groups[0]
        output = group["outputs"][0]

        assert group["outputGroupSettings"]["fileGroupSettings"]["destination"] == "s3://output-bucket/out/video"
        assert output["nameModifier"] is None
        assert output["containerSettings"] == {"container": "MP4"}
        assert output["audioDescriptions"][0]["codecSettings"]["codec"] == "AAC"
        assert output["videoDescription"]["width"] == 1280

    def test_no_audio_when_channels_zero(self, make_ctx, video_only_preset):
        job = {"outputs": [{"key": "v.mp4", "presetId": video_only_preset["id"]}], "inputs": []}
        groups, _ = build(make_ctx, job, [video_only_preset])
        assert groups[0]["outputs"][0]["audioDescriptions"] is None

    @pytest.mark.parametrize("feature", ["encryption", "watermarks", "albumArt", "composition"])
    def test_unsupported_output_features(self, make_ctx, video_only_preset, feature):
        job = {
            "outputs": [{"key": "v.mp4", "presetId": video_only_preset["id"], feature: [{"x": "1"}]}],
            "inputs": [],
        }
        _, ctx = build(make_ctx, job, [video_only_preset])
        assert ctx.log.messages[0].path == ("job", "outputs", 0, feature)
        assert ctx.log.messages[0].level == MessageLevel.WARN

    def test_sidecar_captions(self, make_ctx, video_only_preset):
        job = {
            "inputs": [{
                "key": "in.mov",
                "inputCaptions": {
                    "mergePolicy": "Override",
                    "captionSources": [{"key": "en.srt", "language": "en"}],
                },
            }],
            "outputs": [{
                "key": "v.mp4",
                "presetId": video_only_preset["id"],
                "captions": {"captionFormats": [{"format": "webvtt"}]},
            }],
        }
        ctx = make_ctx(job=job, presets=[video_only_preset])
        selectors = {"Captions Selector 1": {"sourceSettings": {
            "sourceType": "SRT",
            "fileSourceSettings": {"sourceFile": "s3://input-bucket/en.srt"},
        }}}
        groups = OutputGroupBuilder(ctx, selectors).build()

        outputs = groups[0]["outputs"]
        assert len(outputs) == 2
        assert outputs[1]["nameModifier"] == "-ENG"


class TestThumbnailGroups:

    def test_thumbnail_group(self, make_ctx, mixed_job, h264_preset, hls_preset):
        groups, ctx = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        first, second = groups[3], groups[4]

        assert first["outputs"][0]["containerSettings"] == {"container": "RAW"}
        assert first["outputs"][0]["videoDescription"]["codecSettings"]["codec"] == "FRAME_CAPTURE"
        assert first["outputs"][0]["videoDescription"]["codecSettings"]["frameCaptureSettings"] == {
            "framerateNumerator": 1,
            "framerateDenominator": 60,
        }
        assert first["outputs"][0]["nameModifier"] is None
        assert second["outputs"][0]["nameModifier"] == "-192x108"

    def test_png_warns(self, make_ctx, mixed_job, h264_preset, hls_preset):
        _, ctx = build(make_ctx, mixed_job, [h264_preset, hls_preset])
        png = [m for m in ctx.log if m.path[-1:] == ("format",) and m.path[0] == "preset"]
        assert len(png) == 2

    def test_thumbnail_bucket(self, make_ctx, mixed_job, h264_preset, hls_preset, pipeline):
        pipeline["thumbnailConfig"] = {"bucket": "thumbs"}
        ctx = make_ctx(job=mixed_job, presets=[h264_preset, hls_preset], pipeline=pipeline)
        groups = OutputGroupBuilder(ctx).build()
        assert groups[-1]["outputGroupSettings"]["fileGroupSettings"]["destination"] == "s3://thumbs/media/b"

    def test_no_pattern_no_group(self, make_ctx, h264_preset):
        job = {"inputs": [], "outputs": [{"key": "a.mp4", "presetId": h264_preset["id"]}]}
        groups, _ = build(make_ctx, job, [h264_preset])
        assert [g["name"] for g in groups] == ["File Group"]
