"""Path normalization and splitting.

Every path the engine touches is reduced to a canonical absolute form
before it is used:

- ``/`` is the root and the only path that ends with a separator.
- Repeated separators collapse (``//a///b`` → ``/a/b``).
- ``.`` segments vanish, ``..`` pops the previous segment.
- ``..`` at the root is absorbed (``/../../a`` → ``/a``), so a path can
  never escape above ``/``.

Relative paths are first joined onto a caller-supplied current
directory.  All functions here are pure; ``normalize`` is idempotent.
"""

ROOT_PATH = "/"
SEPARATOR = "/"

_CURRENT = "."
_PARENT = ".."


def segments(path: str) -> list[str]:
    """Return the non-empty segments of *path* (no folding)."""
    return [part for part in path.split(SEPARATOR) if part]


def normalize(path: str, current_directory: str = ROOT_PATH) -> str:
    """Return the canonical absolute form of *path*.

    Args:
        path: Absolute or relative path.  An empty path means the
            current directory.
        current_directory: Base for relative paths.

    Returns:
        An absolute path with no empty, ``.`` or ``..`` segments.

    """
    full = path if path.startswith(SEPARATOR) else f"{current_directory}{SEPARATOR}{path}"

    stack: list[str] = []
    for part in segments(full):
        if part == _CURRENT:
            continue
        if part == _PARENT:
            if stack:
                stack.pop()
            continue
        stack.append(part)
    return ROOT_PATH + SEPARATOR.join(stack)


def split_path(path: str) -> tuple[str, str]:
    """Split a normalized path into (parent_path, child_name).

    Examples::

        "/foo/bar/baz.txt" → ("/foo/bar", "baz.txt")
        "/hello.txt"       → ("/", "hello.txt")
        "/"                → ("", "")

    """
    if path == ROOT_PATH:
        return ("", "")
    path = path.rstrip(SEPARATOR)
    last_slash = path.rfind(SEPARATOR)
    if last_slash == 0:
        return (ROOT_PATH, path[1:])
    return (path[:last_slash], path[last_slash + 1 :])


def join(parent: str, name: str) -> str:
    """Join a child *name* onto a normalized *parent* path."""
    if not name:
        return parent
    return f"{parent.rstrip(SEPARATOR)}{SEPARATOR}{name}"


def is_within(path: str, prefix: str) -> bool:
    """Return True if *path* equals *prefix* or lies underneath it.

    ``/a/bc`` is *not* within ``/a/b``; the match must stop at a
    separator.
    """
    if prefix == ROOT_PATH:
        return path.startswith(SEPARATOR)
    return path == prefix or path.startswith(prefix + SEPARATOR)


def relative_to(path: str, prefix: str) -> str:
    """Strip *prefix* from *path*, returning a path rooted at ``/``.

    The caller must ensure ``is_within(path, prefix)``.
    """
    if prefix == ROOT_PATH:
        return path
    stripped = path[len(prefix) :]
    return stripped or ROOT_PATH
