"""Path components, normalization and ASCII-only case folding.

Paths are '/'-separated strings. Raw names that are not valid UTF-8 are
decoded with the surrogateescape error handler, so every byte survives the
trip and can be compared exactly.
"""

import posixpath
from dataclasses import dataclass

ROOT = "root"
CURRENT = "current"
PARENT = "parent"
NORMAL = "normal"

_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


@dataclass(frozen=True)
class Component:
    """One path component. `name` is only meaningful for NORMAL components."""
    kind: str
    name: str = ""


def decode_name(name: str | bytes) -> str:
    """Decode a raw name or path, keeping undecodable bytes as surrogates."""
    if isinstance(name, bytes):
        return name.decode("utf-8", "surrogateescape")
    return name


def is_text(name: str) -> bool:
    """True if the name holds valid UTF-8 text (no surrogate-escaped bytes)."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def ascii_lower(name: str) -> str:
    """Lowercase A-Z only. Any other character, ASCII or not, is left alone."""
    return name.translate(_ASCII_LOWER)


def split_path(path: str | bytes) -> list[Component]:
    """Split a path into raw components without resolving anything."""
    path = decode_name(path)
    components = []
    if path.startswith("/"):
        components.append(Component(ROOT))
    for part in path.split("/"):
        if not part:
            continue
        if part == ".":
            components.append(Component(CURRENT))
        elif part == "..":
            components.append(Component(PARENT))
        else:
            components.append(Component(NORMAL, part))
    return components


def normalize_path(path: str | bytes) -> list[Component]:
    """Canonicalize a path into an optional root followed by named segments.

    '.' is dropped and '..' removes the preceding segment. A '..' with
    nothing left to remove is dropped, so the result never climbs above
    its starting point.
    """
    result = []
    for component in split_path(path):
        if component.kind == CURRENT:
            continue
        if component.kind == PARENT:
            if result and result[-1].kind == NORMAL:
                result.pop()
            continue
        result.append(component)
    return result


def join_path(base: str, name: str) -> str:
    """Append an entry name to a path. The empty path stays relative."""
    return posixpath.join(base, name)
