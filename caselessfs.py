"""CLI entry point for caselessfs — case-insensitive lookups in directories and archives."""

import argparse
import logging
import os
import shutil
import sys

from backend import Backend, BackendError
from caseless import CaselessBackend

# Maps source type -> (module, class)
SOURCES = {
    "dir": ("backend_os", "OsBackend"),
    "zip": ("backend_zip", "ZipBackend"),
    "tar": ("backend_tar", "TarBackend"),
}

# Extension -> source type for auto-detection
EXT_MAP = {
    ".zip": "zip",
    ".tar": "tar", ".tar.gz": "tar", ".tgz": "tar",
    ".tar.bz2": "tar", ".tar.xz": "tar",
}


def detect_source(path: str) -> str:
    """Detect source type: a directory, or an archive by its file extension."""
    if os.path.isdir(path):
        return "dir"
    lower = path.lower()
    for ext in sorted(EXT_MAP, key=len, reverse=True):
        if lower.endswith(ext):
            return EXT_MAP[ext]
    raise ValueError(
        f"Cannot detect source type for '{path}'. "
        f"Supported extensions: {', '.join(sorted(EXT_MAP))}"
    )


def load_backend(path: str, kind: str | None = None) -> Backend:
    """Load the backend for a source and wrap it for caseless lookups."""
    mod_name, cls_name = SOURCES[kind or detect_source(path)]
    module = __import__(mod_name)
    return CaselessBackend(getattr(module, cls_name)(path))


def cmd_find(fs: CaselessBackend, path: str, out) -> int:
    paths = fs.find(path)
    for p in paths:
        print(p, file=out)
    return 0 if paths else 1


def cmd_cat(fs: CaselessBackend, path: str, out) -> int:
    with fs.open(path) as f:
        shutil.copyfileobj(f, out.buffer)
    return 0


def cmd_ls(fs: CaselessBackend, path: str, out) -> int:
    # the real path wins, as in CaselessBackend.open
    try:
        entries = fs.list(path)
    except BackendError:
        paths = fs.find(path)
        if not paths:
            print(f"Error: {path} not found", file=sys.stderr)
            return 1
        entries = fs.list(paths[0])
    for entry in entries:
        if entry.error is None:
            print(entry.name + ("/" if entry.is_dir else ""), file=out)
    return 0


COMMANDS = {
    "find": (cmd_find, "Print every real path matching PATH"),
    "cat": (cmd_cat, "Write the file at PATH to stdout"),
    "ls": (cmd_ls, "List the first directory matching PATH"),
}


def main(argv=None, out=None) -> int:
    parser = argparse.ArgumentParser(
        description="caselessfs — case-insensitive lookups in directories and archives"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log lookups to stderr")
    parser.add_argument("-t", "--type", dest="kind", choices=sorted(SOURCES),
                        help="Force source type instead of detecting it")

    sub = parser.add_subparsers(dest="command")
    for name, (_, help_text) in COMMANDS.items():
        p = sub.add_parser(name, help=help_text)
        p.add_argument("source", help="Directory or archive to read")
        p.add_argument("path", help="Path to look up, in any case")

    args = parser.parse_args(argv)
    out = out or sys.stdout

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if not os.path.exists(args.source):
        print(f"Error: {args.source} not found", file=sys.stderr)
        return 1

    try:
        fs = load_backend(args.source, args.kind)
        return COMMANDS[args.command][0](fs, args.path, out)
    except (BackendError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
