"""Base backend interface and in-memory reference implementation."""

import io
from dataclasses import dataclass
from typing import BinaryIO

from paths import decode_name, split_path, NORMAL


@dataclass
class DirEntry:
    """A single entry produced by Backend.list.

    `error` is set when the backend could not fully read the entry; the
    entry is then still reported so callers can decide to skip it.
    """
    name: str
    is_dir: bool = False
    error: "BackendError | None" = None


class BackendError(Exception):
    """Base error for backend operations."""
    pass


class NotFoundError(BackendError):
    """Resource does not exist."""
    pass


class PermissionDeniedError(BackendError):
    """Resource exists but may not be read."""
    pass


class Backend:
    """Abstract read-only filesystem interface.

    Paths are '/'-separated strings. Names that are not valid UTF-8 are
    carried as surrogate escapes, the way os.fsdecode represents them.
    The root '/' is always a directory; the empty path denotes it too.
    """

    def open(self, path: str) -> BinaryIO:
        """Open the file at exactly `path` for reading. Raises NotFoundError if not a file."""
        raise NotImplementedError

    def list(self, path: str) -> list[DirEntry]:
        """Return the entries of a directory. Raises NotFoundError if not a directory."""
        raise NotImplementedError


def _parts(path) -> list[str]:
    """Split a backend path into its names, ignoring the root marker."""
    return [c.name for c in split_path(path) if c.kind == NORMAL]


class MemoryBackend(Backend):
    """In-memory backend backed by a nested dict.

    Structure: nested dicts are directories, bytes/str values are files.
    String values are encoded to UTF-8 bytes on read. A BackendError
    instance stands for an entry that exists but fails when used.
    Entries are listed in insertion order.

    Example:
        MemoryBackend({
            "readme.txt": "Hello, world!",
            "Docs": {
                "Guide.TXT": "A guide",
            },
            "locked": PermissionDeniedError("no access"),
        })
    """

    def __init__(self, tree: dict):
        self._tree = _decode_keys(tree)

    def _resolve(self, path: str):
        """Walk the tree to find the node at path. Returns the node or raises NotFoundError."""
        node = self._tree
        for part in _parts(path):
            if isinstance(node, BackendError):
                raise node
            if not isinstance(node, dict) or part not in node:
                raise NotFoundError(f"Not found: {path}")
            node = node[part]
        if isinstance(node, BackendError):
            raise node
        return node

    def open(self, path: str) -> BinaryIO:
        node = self._resolve(path)
        if isinstance(node, dict):
            raise NotFoundError(f"Not a file: {path}")
        if isinstance(node, str):
            node = node.encode("utf-8")
        return io.BytesIO(node)

    def list(self, path: str) -> list[DirEntry]:
        node = self._resolve(path)
        if not isinstance(node, dict):
            raise NotFoundError(f"Not a directory: {path}")
        return [DirEntry(name, is_dir=isinstance(child, dict)) for name, child in node.items()]


def _decode_keys(node):
    if not isinstance(node, dict):
        return node
    return {decode_name(k): _decode_keys(v) for k, v in node.items()}
