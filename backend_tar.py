"""TAR archive backend — mount .tar, .tar.gz, .tar.bz2, .tar.xz files."""

import tarfile
from typing import BinaryIO

from backend import Backend, DirEntry, BackendError
from archive import ArchiveIndex


class TarBackend(Backend):
    """Expose the contents of a TAR archive as a read-only filesystem."""

    def __init__(self, path: str):
        try:
            self._tf = tarfile.open(path, "r:*")
        except (tarfile.TarError, FileNotFoundError, OSError) as e:
            raise BackendError(f"Cannot open TAR file: {e}") from e

        self._index = ArchiveIndex()
        for member in self._tf.getmembers():
            if member.isdir():
                self._index.add_dir(member.name)
            else:
                self._index.add_file(member.name, member)

    def open(self, path: str) -> BinaryIO:
        member = self._index.member(path)
        try:
            f = self._tf.extractfile(member)
        except Exception as e:
            raise BackendError(f"Error reading from TAR: {e}") from e
        if f is None:
            raise BackendError(f"Cannot read {path} (may be a link or special file)")
        return f

    def list(self, path: str) -> list[DirEntry]:
        return self._index.list(path)
