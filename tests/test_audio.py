"""
Tests for audio translation and the insert-defaults policy.
"""

import copy

import pytest

from etsconvert.deliver.audio import AudioCodec, audio_description
from etsconvert.reporting.models import MessageLevel
from etsconvert.source.tracking import attach_paths


AAC_AUDIO = {
    "codec": "AAC",
    "channels": "2",
    "sampleRate": "44100",
    "bitRate": "128",
    "codecOptions": {"profile": "AAC-LC"},
}


class TestAudioDescription:
    """Fully specified audio parameters."""

    def test_aac(self, ctx):
        """AAC converts losslessly with no messages."""
        assert audio_description(AAC_AUDIO, ctx) == {
            "codecSettings": {
                "codec": "AAC",
                "aacSettings": {
                    "sampleRate": 44100,
                    "bitrate": 128000,
                    "codingMode": "CODING_MODE_2_0",
                    "codecProfile": "LC",
                },
            },
            "audioSourceName": "Audio Selector 1",
        }
        assert len(ctx.log) == 0

    def test_idempotent_on_concrete_input(self, ctx):
        """Running twice on concrete input yields identical output and no messages."""
        first = audio_description(AAC_AUDIO, ctx)
        second = audio_description(AAC_AUDIO, ctx)
        assert first == second
        assert len(ctx.log) == 0

    def test_mono_aac(self, ctx):
        audio = dict(AAC_AUDIO, channels="1")
        settings = audio_description(audio, ctx)["codecSettings"]["aacSettings"]
        assert settings["codingMode"] == "CODING_MODE_1_0"
        assert "channels" not in settings

    def test_he_aac_profiles(self, ctx):
        for source, target in (("HE-AAC", "HEV1"), ("HE-AACv2", "HEV2")):
            audio = dict(AAC_AUDIO, codecOptions={"profile": source})
            assert audio_description(audio, ctx)["codecSettings"]["aacSettings"]["codecProfile"] == target

    def test_mp3_keeps_channel_count(self, ctx):
        """Codecs other than AAC emit a raw channel count."""
        audio = {"codec": "mp3", "channels": "2", "sampleRate": "48000", "bitRate": "192"}
        assert audio_description(audio, ctx)["codecSettings"] == {
            "codec": "MP3",
            "mp3Settings": {"sampleRate": 48000, "bitrate": 192000, "channels": 2},
        }

    def test_flac_bit_depth(self, ctx):
        audio = {"codec": "flac", "channels": "2", "sampleRate": "96000", "codecOptions": {"bitDepth": "24"}}
        assert audio_description(audio, ctx)["codecSettings"]["flacSettings"] == {
            "sampleRate": 96000,
            "channels": 2,
            "bitDepth": 24,
        }

    def test_pcm_is_wav(self, ctx):
        audio = {"codec": "pcm", "channels": "2", "sampleRate": "48000"}
        assert audio_description(audio, ctx)["codecSettings"]["codec"] == "WAV"

    def test_unknown_codec_passes_through(self, ctx):
        """Unknown codecs get no codec-specific settings block."""
        audio = {"codec": "opus", "channels": "2", "sampleRate": "48000"}
        assert audio_description(audio, ctx)["codecSettings"] == {"codec": "opus"}


class TestAudioBitrate:
    """Bitrate exists only for AAC, MP2 and MP3."""

    def test_supports_bitrate(self):
        assert AudioCodec.AAC.supports_bitrate
        assert AudioCodec.MP2.supports_bitrate
        assert not AudioCodec.WAV.supports_bitrate
        assert not AudioCodec.VORBIS.supports_bitrate

    def test_bitrate_ignored_for_other_codecs(self, ctx):
        """A bitrate on a codec without one is dropped with a WARN."""
        audio = attach_paths(
            {"codec": "vorbis", "channels": "2", "sampleRate": "48000", "bitRate": "160"},
            ["preset", "ogg", "audio"],
        )
        settings = audio_description(audio, ctx)["codecSettings"]["vorbisSettings"]

        assert "bitrate" not in settings
        assert [m.level for m in ctx.log] == [MessageLevel.WARN]
        assert ctx.log.messages[0].path == ("preset", "ogg", "audio", "bitRate")


class TestInsertDefaults:
    """"auto" values follow the insert-defaults toggle."""

    @pytest.mark.parametrize("codec,settings_key,expected", [
        ("AAC", "aacSettings", 48000),
        ("mp3", "mp3Settings", 48000),
        ("pcm", "wavSettings", 44100),
    ])
    def test_auto_sample_rate_inserted(self, make_ctx, codec, settings_key, expected):
        """insert_defaults=True gives a static value and a WARN."""
        ctx = make_ctx(insert_defaults=True)
        audio = {"codec": codec, "channels": "2", "sampleRate": "auto"}
        settings = audio_description(audio, ctx)["codecSettings"][settings_key]

        assert settings["sampleRate"] == expected
        assert [m.level for m in ctx.log] == [MessageLevel.WARN]

    def test_auto_sample_rate_not_inserted(self, ctx):
        """insert_defaults=False leaves the value out with an ERROR."""
        audio = dict(AAC_AUDIO, sampleRate="auto")
        settings = audio_description(audio, ctx)["codecSettings"]["aacSettings"]

        assert "sampleRate" not in settings
        assert [m.level for m in ctx.log] == [MessageLevel.ERROR]

    def test_auto_channels_aac(self, make_ctx):
        """AAC auto channels become the stereo coding mode."""
        ctx = make_ctx(insert_defaults=True)
        audio = dict(AAC_AUDIO, channels="auto")
        settings = audio_description(audio, ctx)["codecSettings"]["aacSettings"]

        assert settings["codingMode"] == "CODING_MODE_2_0"
        assert ctx.log.count(MessageLevel.WARN) == 1

    def test_auto_channels_mp2(self, make_ctx):
        ctx = make_ctx(insert_defaults=True)
        audio = {"codec": "mp2", "channels": "auto", "sampleRate": "48000"}
        assert audio_description(audio, ctx)["codecSettings"]["mp2Settings"]["channels"] == 2

    def test_toggle_is_exclusive(self, make_ctx):
        """Each auto field yields either value+WARN or absence+ERROR."""
        audio = {"codec": "mp3", "channels": "auto", "sampleRate": "auto", "bitRate": "128"}

        on = make_ctx(insert_defaults=True)
        off = make_ctx(insert_defaults=False)
        with_defaults = audio_description(copy.deepcopy(audio), on)["codecSettings"]["mp3Settings"]
        without = audio_description(copy.deepcopy(audio), off)["codecSettings"]["mp3Settings"]

        assert with_defaults == {"sampleRate": 48000, "channels": 2, "bitrate": 128000}
        assert without == {"bitrate": 128000}
        assert [m.level for m in on.log] == [MessageLevel.WARN, MessageLevel.WARN]
        assert [m.level for m in off.log] == [MessageLevel.ERROR, MessageLevel.ERROR]


class TestPackingMode:
    """Audio packing modes without an equivalent."""

    @pytest.mark.parametrize("mode", ["OneChannelPerTrack", "OneChannelPerTrackWithMosTo8Tracks"])
    def test_warns_but_converts(self, ctx, mode):
        audio = dict(AAC_AUDIO, audioPackingMode=mode)
        res = audio_description(audio, ctx)
        assert res["codecSettings"]["codec"] == "AAC"
        assert ctx.log.count(MessageLevel.WARN) == 1

    def test_single_track_is_silent(self, ctx):
        audio = dict(AAC_AUDIO, audioPackingMode="SingleTrack")
        audio_description(audio, ctx)
        assert len(ctx.log) == 0
