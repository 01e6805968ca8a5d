"""ZIP archive backend — mount a .zip file as a read-only filesystem."""

import zipfile
from typing import BinaryIO

from backend import Backend, DirEntry, BackendError
from archive import ArchiveIndex


class ZipBackend(Backend):
    """Expose the contents of a ZIP archive as a read-only filesystem."""

    def __init__(self, path: str):
        try:
            self._zf = zipfile.ZipFile(path, "r")
        except (zipfile.BadZipFile, FileNotFoundError, OSError) as e:
            raise BackendError(f"Cannot open ZIP file: {e}") from e

        # ZIP files don't always have explicit directory entries, so the
        # index infers directories from file paths.
        self._index = ArchiveIndex()
        for zi in self._zf.infolist():
            if zi.is_dir():
                self._index.add_dir(zi.filename)
            else:
                self._index.add_file(zi.filename, zi)

    def open(self, path: str) -> BinaryIO:
        zi = self._index.member(path)
        try:
            return self._zf.open(zi)
        except Exception as e:
            raise BackendError(f"Error reading from ZIP: {e}") from e

    def list(self, path: str) -> list[DirEntry]:
        return self._index.list(path)
