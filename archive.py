"""Directory index shared by the archive backends."""

from backend import DirEntry, NotFoundError
from paths import split_path, NORMAL


def _key(path: str) -> tuple[str, ...]:
    return tuple(c.name for c in split_path(path) if c.kind == NORMAL)


class ArchiveIndex:
    """Tree of archive members, keyed by path.

    Archives don't always have explicit directory entries, so parent
    directories are inferred from member names. Children are listed in the
    order they first appear in the archive. When a name is used both as a
    file and as a directory, the directory wins and the file is dropped.
    """

    def __init__(self):
        self._files: dict[tuple[str, ...], object] = {}
        self._dirs: dict[tuple[str, ...], dict[str, bool]] = {(): {}}

    def _mark_dir(self, key: tuple[str, ...]):
        self._dirs[key[:-1]][key[-1]] = True
        self._files.pop(key, None)
        self._dirs.setdefault(key, {})

    def _add_parents(self, key: tuple[str, ...]):
        for i in range(1, len(key)):
            self._mark_dir(key[:i])

    def add_dir(self, name: str):
        key = _key(name)
        if not key:
            return
        self._add_parents(key)
        self._mark_dir(key)

    def add_file(self, name: str, member):
        key = _key(name)
        if not key or key in self._dirs:
            return
        self._add_parents(key)
        self._dirs[key[:-1]].setdefault(key[-1], False)
        self._files[key] = member

    def member(self, path: str):
        """Return the archive member stored at path. Raises NotFoundError otherwise."""
        key = _key(path)
        if key in self._dirs:
            raise NotFoundError(f"Not a file: {path}")
        if key not in self._files:
            raise NotFoundError(f"Not found: {path}")
        return self._files[key]

    def list(self, path: str) -> list[DirEntry]:
        children = self._dirs.get(_key(path))
        if children is None:
            raise NotFoundError(f"Not a directory: {path}")
        return [DirEntry(name, is_dir=is_dir) for name, is_dir in children.items()]
