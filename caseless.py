"""Caseless backend: case-insensitive lookups over any backend.

A caseless backend wraps an inner backend and treats paths as
case-insensitive, regardless of the case sensitivity of the inner one.

A caseless path that matches the real path of a file always opens that
file. Otherwise it opens the first real path of the inner backend that
matches it.

Names that are not valid UTF-8 cannot be folded safely. To limit the effect
of that, paths are compared one component at a time: text components are
compared with ASCII case folding, the others byte for byte.
"""

import logging
from typing import BinaryIO

from backend import Backend, BackendError, DirEntry, NotFoundError
from paths import ROOT, NORMAL, Component, ascii_lower, is_text, join_path, normalize_path

logger = logging.getLogger(__name__)


class CaselessBackend(Backend):
    """Case-insensitive view of an inner backend."""

    def __init__(self, inner: Backend, normalizer=normalize_path):
        self._inner = inner
        self._normalizer = normalizer

    @property
    def inner(self) -> Backend:
        """The wrapped backend."""
        if self._inner is None:
            raise ValueError("inner backend has been detached")
        return self._inner

    def detach(self) -> Backend:
        """Hand the inner backend back to the caller. The caseless backend is unusable afterwards."""
        inner = self.inner
        self._inner = None
        return inner

    def find(self, path: str | bytes) -> list[str]:
        """Return the real paths matching the caseless path, in listing order."""
        paths = [""]
        for component in self._normalizer(path):
            paths = _find_next(self.inner, component, paths)
            if not paths:
                break
        logger.debug("%d candidate(s) for %r", len(paths), path)
        return paths

    def open(self, path: str) -> BinaryIO:
        """Open a file by its real path, or else by the first matching caseless path."""
        try:
            return self.inner.open(path)
        except BackendError:
            logger.debug("no exact match for %r, trying caseless lookup", path)
        paths = self.find(path)
        if not paths:
            raise NotFoundError(f"Not found: {path}")
        # first match only, even if it fails to open
        return self.inner.open(paths[0])

    def list(self, path: str) -> list[DirEntry]:
        return self.inner.list(path)


def _entries(backend: Backend, path: str) -> list[DirEntry]:
    """List a directory, treating failures as an empty directory."""
    try:
        entries = backend.list(path)
    except BackendError:
        return []
    return [e for e in entries if e.error is None]


def _find_next(backend: Backend, component: Component, paths: list[str]) -> list[str]:
    """Extend each candidate path with the entries matching `component`."""
    if component.kind == ROOT:
        # nothing can go before the root
        return ["/"]
    if component.kind != NORMAL:
        raise AssertionError(f"unexpected path component {component!r}")

    target = component.name
    found = []
    if is_text(target):
        folded = ascii_lower(target)
        for path in paths:
            for entry in _entries(backend, path):
                if is_text(entry.name) and ascii_lower(entry.name) == folded:
                    found.append(join_path(path, entry.name))
    else:
        for path in paths:
            for entry in _entries(backend, path):
                if entry.name == target:
                    found.append(join_path(path, entry.name))
    return found
