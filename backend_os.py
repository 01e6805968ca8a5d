"""Directory backend — expose a directory on disk as a read-only filesystem."""

import os
from typing import BinaryIO

from backend import Backend, DirEntry, BackendError, NotFoundError, PermissionDeniedError
from paths import split_path, NORMAL, PARENT


def _translate(e: Exception, path: str) -> BackendError:
    # ValueError: names the OS cannot represent, such as embedded NUL
    if isinstance(e, (FileNotFoundError, NotADirectoryError, IsADirectoryError, ValueError)):
        return NotFoundError(f"Not found: {path}")
    if isinstance(e, PermissionError):
        return PermissionDeniedError(f"Permission denied: {path}")
    return BackendError(f"Error reading {path}: {e}")


class OsBackend(Backend):
    """Expose a directory tree of the local filesystem.

    Backend paths are relative to `root`; '/' is the root directory itself.
    Case sensitivity is whatever the host filesystem provides.
    """

    def __init__(self, root: str):
        if not os.path.isdir(root):
            raise BackendError(f"Not a directory: {root}")
        self._root = os.path.abspath(root)

    def _real(self, path: str) -> str:
        parts = []
        for component in split_path(path):
            if component.kind == PARENT:
                raise NotFoundError(f"Path escapes root: {path}")
            if component.kind == NORMAL:
                parts.append(component.name)
        return os.path.join(self._root, *parts)

    def open(self, path: str) -> BinaryIO:
        real = self._real(path)
        if os.path.isdir(real):
            raise NotFoundError(f"Not a file: {path}")
        try:
            return open(real, "rb")
        except (OSError, ValueError) as e:
            raise _translate(e, path) from e

    def list(self, path: str) -> list[DirEntry]:
        try:
            with os.scandir(self._real(path)) as it:
                return [_entry(e) for e in it]
        except (OSError, ValueError) as e:
            raise _translate(e, path) from e


def _entry(e: os.DirEntry) -> DirEntry:
    name = os.fsdecode(e.name)
    try:
        return DirEntry(name, is_dir=e.is_dir())
    except OSError as err:
        return DirEntry(name, error=_translate(err, name))
