"""
Path-tracked source documents.

An Elastic Transcoder job, pipeline or preset is decorated once at load
time so every nested object knows the data path leading to it from the
document root. Translators use the path only to tag conversion messages,
never for business logic:

    job = attach_paths(raw_job, ["job"])
    job["outputs"][2].path   # ("job", "outputs", 2)

The decoration is a read-only wrapper around a fresh copy of the data;
the original object is never modified.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Iterator, Tuple, Union

PathKey = Union[str, int]
Path = Tuple[PathKey, ...]


class TrackedDict(Mapping):
    """Read-only mapping that carries its data path."""

    __slots__ = ("_data", "_path")

    def __init__(self, data: dict, path: Path):
        self._data = data
        self._path = tuple(path)

    @property
    def path(self) -> Path:
        return self._path

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"TrackedDict({self._data!r}, path={self._path!r})"

    def unwrap(self) -> dict:
        return {k: unwrap(v) for k, v in self._data.items()}


class TrackedList(Sequence):
    """Read-only sequence that carries its data path."""

    __slots__ = ("_items", "_path")

    def __init__(self, items: list, path: Path):
        self._items = items
        self._path = tuple(path)

    @property
    def path(self) -> Path:
        return self._path

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, (list, tuple, TrackedList)):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"TrackedList({self._items!r}, path={self._path!r})"

    def unwrap(self) -> list:
        return [unwrap(v) for v in self._items]


def attach_paths(node: Any, path: Union[Path, list] = ()) -> Any:
    """
    Recursively decorate a document with data paths.

    Objects become TrackedDict, arrays become TrackedList whose elements
    are decorated by index, scalars are returned unchanged.

    Args:
        node: Plain JSON-like data (dicts, lists, scalars)
        path: Path of `node` from the document root

    Returns:
        A decorated copy of `node`.
    """
    path = tuple(path)

    if isinstance(node, Mapping):
        return TrackedDict(
            {key: attach_paths(value, path + (key,)) for key, value in node.items()},
            path,
        )

    if isinstance(node, (list, tuple, TrackedList)):
        return TrackedList(
            [attach_paths(value, path + (i,)) for i, value in enumerate(node)],
            path,
        )

    return node


def unwrap(node: Any) -> Any:
    """Return plain data for a decorated node."""
    if isinstance(node, (TrackedDict, TrackedList)):
        return node.unwrap()
    return node


def path_of(node: Any, *keys: PathKey) -> Path:
    """
    Path of `node` extended by `keys`.

    Tolerates undecorated input (plain dicts in tests or ad-hoc calls),
    in which case the path starts empty.
    """
    base = node.path if isinstance(node, (TrackedDict, TrackedList)) else ()
    return tuple(base) + keys
