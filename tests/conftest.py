"""
Shared fixtures for converter tests.

Source documents are written in camelCase, the form the loader produces.
All fixtures are plain data: no AWS access, no files unless a test asks
for tmp_path.
"""

import copy

import pytest

from etsconvert.jobs.context import ConversionContext
from etsconvert.jobs.settings import ConversionSettings
from etsconvert.source.loader import LoadedJob, prepare_job, prepare_pipeline, prepare_preset, resolve_presets


PIPELINE = {
    "id": "1111111111111-abcdef",
    "name": "test-pipeline",
    "inputBucket": "input-bucket",
    "outputBucket": "output-bucket",
}

H264_PRESET = {
    "id": "1351620000001-000010",
    "name": "System preset: Generic 720p",
    "description": "Generic 720p",
    "container": "mp4",
    "audio": {
        "codec": "AAC",
        "sampleRate": "44100",
        "bitRate": "160",
        "channels": "2",
        "codecOptions": {"profile": "AAC-LC"},
    },
    "video": {
        "codec": "H.264",
        "codecOptions": {
            "profile": "main",
            "level": "3.1",
            "maxReferenceFrames": "3",
            "maxBitRate": "2200",
            "bufferSize": "22000",
        },
        "keyframesMaxDist": "90",
        "fixedGOP": "false",
        "bitRate": "2200",
        "frameRate": "auto",
        "maxWidth": "1280",
        "maxHeight": "720",
        "sizingPolicy": "ShrinkToFit",
        "paddingPolicy": "NoPad",
        "displayAspectRatio": "auto",
    },
    "thumbnails": {
        "format": "png",
        "interval": "60",
        "maxWidth": "192",
        "maxHeight": "108",
        "sizingPolicy": "ShrinkToFit",
        "paddingPolicy": "NoPad",
    },
}

HLS_PRESET = {
    "id": "1351620000001-200010",
    "name": "System preset: HLS 2M",
    "container": "ts",
    "audio": {
        "codec": "AAC",
        "sampleRate": "44100",
        "bitRate": "128",
        "channels": "2",
        "codecOptions": {"profile": "AAC-LC"},
    },
    "video": {
        "codec": "H.264",
        "codecOptions": {"profile": "main", "level": "3.1", "maxBitRate": "1872", "bufferSize": "16848"},
        "bitRate": "1872",
        "frameRate": "auto",
        "maxWidth": "1024",
        "maxHeight": "768",
        "sizingPolicy": "Fit",
        "paddingPolicy": "NoPad",
    },
}

VIDEO_ONLY_PRESET = {
    "id": "1351620000001-300000",
    "name": "Video only",
    "container": "mp4",
    "audio": {"codec": "AAC", "channels": "0"},
    "video": {"codec": "H.264", "bitRate": "1000", "codecOptions": {"profile": "high"}},
}


@pytest.fixture
def pipeline():
    return copy.deepcopy(PIPELINE)


@pytest.fixture
def h264_preset():
    return copy.deepcopy(H264_PRESET)


@pytest.fixture
def hls_preset():
    return copy.deepcopy(HLS_PRESET)


@pytest.fixture
def video_only_preset():
    return copy.deepcopy(VIDEO_ONLY_PRESET)


@pytest.fixture
def make_ctx():
    """
    Factory for ConversionContext.

    make_ctx(job=None, presets=(), pipeline=None, **settings)
    """
    def _make(job=None, presets=(), pipeline=None, **settings):
        tracked = [prepare_preset(copy.deepcopy(p)) for p in presets]
        return ConversionContext(
            settings=ConversionSettings(**settings),
            pipeline=prepare_pipeline(copy.deepcopy(pipeline or PIPELINE)),
            presets={p.get("id"): p for p in tracked},
            job=prepare_job(copy.deepcopy(job)) if job is not None else None,
        )
    return _make


@pytest.fixture
def make_loaded_job():
    """Factory for LoadedJob from plain job, presets and pipeline data."""
    def _make(job, presets, pipeline=None):
        tracked_job = prepare_job(copy.deepcopy(job))
        tracked_presets = [prepare_preset(copy.deepcopy(p)) for p in presets]
        return LoadedJob(
            job=tracked_job,
            pipeline=prepare_pipeline(copy.deepcopy(pipeline or PIPELINE)),
            presets=resolve_presets(tracked_job, tracked_presets),
        )
    return _make


@pytest.fixture
def ctx(make_ctx):
    """Context without a job, insert-defaults off."""
    return make_ctx()
