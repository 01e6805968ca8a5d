"""Tests for the command line entry point."""

import io
import logging
import os
import shutil
import tempfile
import unittest
import zipfile
from contextlib import redirect_stderr

from caselessfs import detect_source, main


class TestDetectSource(unittest.TestCase):
    def test_extensions(self):
        self.assertEqual(detect_source("a.ZIP"), "zip")
        self.assertEqual(detect_source("a.tar.gz"), "tar")
        self.assertEqual(detect_source("a.tgz"), "tar")

    def test_directory(self):
        self.assertEqual(detect_source(tempfile.gettempdir()), "dir")

    def test_unknown(self):
        with self.assertRaises(ValueError):
            detect_source("data.bin")


class TestMain(unittest.TestCase):
    def setUp(self):
        self._dir = tempfile.mkdtemp()
        self.archive = os.path.join(self._dir, "docs.zip")
        with zipfile.ZipFile(self.archive, "w") as zf:
            zf.writestr("Docs/Readme.TXT", b"Read me")
            zf.writestr("Docs/Sub/x", b"x")

    def tearDown(self):
        shutil.rmtree(self._dir)

    def _run(self, *argv) -> tuple[int, str, str]:
        out = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
        err = io.StringIO()
        with redirect_stderr(err):
            status = main(list(argv), out=out)
        out.flush()
        return status, out.buffer.getvalue().decode("utf-8"), err.getvalue()

    def test_find(self):
        status, out, _ = self._run("find", self.archive, "/docs/readme.txt")
        self.assertEqual(status, 0)
        self.assertEqual(out, "/Docs/Readme.TXT\n")

    def test_find_missing(self):
        status, out, _ = self._run("find", self.archive, "/nope")
        self.assertEqual(status, 1)
        self.assertEqual(out, "")

    def test_cat(self):
        status, out, _ = self._run("cat", self.archive, "/DOCS/README.TXT")
        self.assertEqual(status, 0)
        self.assertEqual(out, "Read me")

    def test_cat_missing(self):
        status, _, err = self._run("cat", self.archive, "/nope")
        self.assertEqual(status, 1)
        self.assertIn("Not found", err)

    def test_ls(self):
        status, out, _ = self._run("ls", self.archive, "/docs")
        self.assertEqual(status, 0)
        self.assertEqual(out, "Readme.TXT\nSub/\n")

    def test_ls_real_path_wins(self):
        archive = os.path.join(self._dir, "both.zip")
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("a/lower", b"")
            zf.writestr("A/upper", b"")
        self.assertEqual(self._run("ls", archive, "/A")[:2], (0, "upper\n"))
        self.assertEqual(self._run("ls", archive, "/a")[:2], (0, "lower\n"))

    def test_ls_missing(self):
        status, _, err = self._run("ls", self.archive, "/nope")
        self.assertEqual(status, 1)
        self.assertIn("not found", err)

    def test_forced_type(self):
        renamed = os.path.join(self._dir, "docs.bin")
        shutil.copy(self.archive, renamed)
        status, _, err = self._run("find", renamed, "/docs")
        self.assertEqual(status, 1)
        self.assertIn("Cannot detect", err)
        status, out, _ = self._run("-t", "zip", "find", renamed, "/docs")
        self.assertEqual(status, 0)
        self.assertEqual(out, "/Docs\n")

    def test_verbose_logs_lookups(self):
        root = logging.getLogger()
        self.addCleanup(setattr, root, "handlers", root.handlers[:])
        self.addCleanup(root.setLevel, root.level)
        with self.assertLogs("caseless", "DEBUG") as cm:
            status, out, _ = self._run("-v", "cat", self.archive, "/docs/readme.txt")
        self.assertEqual((status, out), (0, "Read me"))
        self.assertTrue(any("no exact match" in line for line in cm.output))
        self.assertTrue(any("1 candidate(s)" in line for line in cm.output))

    def test_directory_source(self):
        with open(os.path.join(self._dir, "Notes.md"), "wb") as f:
            f.write(b"notes")
        status, out, _ = self._run("cat", self._dir, "/notes.MD")
        self.assertEqual(status, 0)
        self.assertEqual(out, "notes")

    def test_missing_source(self):
        status, _, err = self._run("find", os.path.join(self._dir, "absent.zip"), "/x")
        self.assertEqual(status, 1)
        self.assertIn("not found", err)

    def test_no_command(self):
        with redirect_stderr(io.StringIO()):
            self.assertEqual(main([], out=io.StringIO()), 1)


if __name__ == "__main__":
    unittest.main()
