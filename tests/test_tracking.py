"""
Tests for path-tracked source documents.

Paths exist only to tag messages; decoration must never change the data
or the original object.
"""

import copy

import pytest

from etsconvert.source.tracking import TrackedDict, TrackedList, attach_paths, path_of, unwrap


JOB = {
    "id": "job-1",
    "inputs": [{"key": "in.mp4", "timeSpan": {"startTime": "1"}}],
    "outputs": [
        {"key": "a.mp4", "presetId": "p1"},
        {"key": "b.mp4", "presetId": "p2", "captions": {"captionFormats": [{"format": "srt"}]}},
    ],
}


class TestAttachPaths:
    """Decoration of nested objects and arrays."""

    def test_root_carries_root_path(self):
        """The root object gets the given root path."""
        job = attach_paths(JOB, ["job"])
        assert isinstance(job, TrackedDict)
        assert job.path == ("job",)

    def test_nested_objects_carry_full_path(self):
        """Objects inside arrays are addressed by index."""
        job = attach_paths(JOB, ["job"])
        assert job["outputs"][1].path == ("job", "outputs", 1)
        assert job["outputs"][1]["captions"]["captionFormats"][0].path == (
            "job", "outputs", 1, "captions", "captionFormats", 0,
        )

    def test_arrays_are_tracked(self):
        """Arrays become TrackedList and compare equal to plain lists."""
        job = attach_paths(JOB, ["job"])
        assert isinstance(job["outputs"], TrackedList)
        assert job["outputs"].path == ("job", "outputs")
        assert attach_paths(["a", "b"]) == ["a", "b"]

    def test_scalars_unchanged(self):
        """Scalars are returned as they are."""
        assert attach_paths("x", ["job"]) == "x"
        assert attach_paths(5) == 5
        assert attach_paths(None) is None

    def test_original_not_modified(self):
        """Decorating never mutates the input."""
        original = copy.deepcopy(JOB)
        attach_paths(JOB, ["job"])
        assert JOB == original

    def test_read_only(self):
        """Tracked objects do not support item assignment."""
        job = attach_paths(JOB, ["job"])
        with pytest.raises(TypeError):
            job["id"] = "other"

    def test_unwrap_returns_plain_data(self):
        """unwrap gives back dicts and lists equal to the input."""
        plain = unwrap(attach_paths(JOB, ["job"]))
        assert plain == JOB
        assert type(plain) is dict
        assert type(plain["outputs"]) is list


class TestPathOf:
    """Paths for messages about fields."""

    def test_extends_node_path(self):
        """Field keys are appended to the node path."""
        job = attach_paths(JOB, ["job"])
        assert path_of(job["outputs"][0], "presetId") == ("job", "outputs", 0, "presetId")

    def test_plain_dict_starts_empty(self):
        """Undecorated input yields just the keys."""
        assert path_of({"a": 1}, "a") == ("a",)
        assert path_of(None) == ()
