"""Path and URL algebra for display resources.

Paths are handled as plain strings rather than ``pathlib`` objects:
they may contain spaces that URLs won't take, or start with ``https://``
which a filesystem path can't represent. Nothing in here touches the
filesystem or the network.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

URL_PREFIXES = ("http://", "https://")
FILE_SCHEME = "file:"

# A doubled backslash is an escaped one and is kept; a lone one is a separator
_BACKSLASH = re.compile(r"\\\\|\\")
_UP = "/../"


def is_url(path: str) -> bool:
    """Check if path starts with a remote scheme."""
    return path.startswith(URL_PREFIXES)


def is_absolute(path: str) -> bool:
    """Check if path is rooted at ``/`` or is a URL."""
    return path.startswith("/") or is_url(path)


def normalize(path: str) -> str:
    """Use forward slashes only and collapse ``segment/../`` up-references.

    Each ``/../`` removes the one segment before it. Collapsing stops at
    the first ``/../`` whose segment has no ``/`` in front of it, so
    ``"../a"`` and ``"a/../b"`` come back unchanged.

    Examples:
        >>> normalize("/a/b/../c")
        '/a/c'
        >>> normalize("../a")
        '../a'
    """
    path = _BACKSLASH.sub(lambda m: m.group(0) if len(m.group(0)) == 2 else "/", path)
    up = path.find(_UP)
    while up >= 0:
        prev = path.rfind("/", 0, up)
        if prev < 0:
            break
        path = path[:prev] + path[up + 3 :]
        up = path.find(_UP)
    return path


def get_directory(path: str | None) -> str | None:
    """Return everything before the last ``/``, or ``"."`` if there is none.

    For a URL this is the URL up to its last element.
    """
    if path is None:
        return None
    path = normalize(path)
    sep = path.rfind("/")
    if sep >= 0:
        return path[:sep]
    return "."


def split_path(path: str) -> list[str]:
    """Split a path into segments, ignoring a leading ``/``.

    Trailing empty segments are dropped, so ``"a/b/"`` splits like
    ``"a/b"``. An empty path yields a single empty segment.
    """
    if path.startswith("/"):
        path = path[1:]
    if not path:
        return [""]
    segments = path.split("/")
    while segments and segments[-1] == "":
        segments.pop()
    return segments


def get_relative_path(parent: str | None, path: str) -> str:
    """Express path relative to the directory of parent.

    Args:
        parent: Parent file, for example ``"/one/of/my/directories/parent.bob"``
        path: Path to make relative, for example
            ``"/one/of/my/alternate_dirs/example.bob"``

    Returns:
        Relative path, e.g. ``"../alternate_dirs/example.bob"``. A path
        that is already relative comes back normalized but otherwise
        unchanged, as does any path when there is no parent.
    """
    path = normalize(path)
    if not is_absolute(path) or parent is None:
        return path

    parent_segments = split_path(get_directory(parent) or ".")
    path_segments = split_path(path)

    common = 0
    for ours, theirs in zip(parent_segments, path_segments, strict=False):
        if ours != theirs:
            break
        common += 1

    up = "/".join([".."] * (len(parent_segments) - common))
    down = "/".join(path_segments[common:])
    if up and down:
        return f"{up}/{down}"
    return up or down


def combine_display_paths(parent: str | None, path: str) -> str:
    """Resolve path against the directory of parent.

    Args:
        parent: Path or URL of a 'parent' file, may be None
        path: Resource path; if relative, it is taken relative to parent

    Returns:
        Combined path. An absolute path wins over the parent.
    """
    if not parent:
        return path

    path = normalize(path)
    if is_absolute(path):
        return path

    parent = normalize(parent)
    return normalize(f"{get_directory(parent)}/{path}")


def has_scheme(name: str) -> bool:
    """Check if name carries a URL scheme such as ``https://`` or ``ftp://``.

    A drive letter like ``C:\\disp`` is not a scheme: the ``://`` must follow.
    """
    scheme = urlsplit(name).scheme
    return bool(scheme) and name[: len(scheme) + 3].lower() == f"{scheme}://"


def strip_file_scheme(name: str) -> str:
    """Remove a literal leading ``file:`` prefix."""
    if name.startswith(FILE_SCHEME):
        return name[len(FILE_SCHEME) :]
    return name


def replace_extension(name: str, old: str, new: str) -> str | None:
    """Swap the ``.old`` extension of name for ``.new``.

    Returns:
        The renamed path, or None if name does not end in ``.old``
    """
    suffix = f".{old}"
    if not name.endswith(suffix):
        return None
    return f"{name[: -len(old)]}{new}"
