"""Disk usage: summary statistics over the unified tree.

Walks the router's unified view (so mounted namespaces count too) and
tallies what a ``df``/``du`` style report needs:

- number of files and directories (the root directory included),
- total content size in characters,
- a histogram of file extensions (``unknown`` when a name has no dot),
- number of active mounts (``/`` included).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from py_vfs.fs.namespace import TreeNode
    from py_vfs.router import OverlayRouter

_NO_EXTENSION = "unknown"


def file_extension(name: str) -> str:
    """Return the lower-cased extension of *name*, or ``unknown``."""
    parts = name.split(".")
    if len(parts) > 1:
        return parts[-1].lower()
    return _NO_EXTENSION


@dataclass(frozen=True)
class UsageReport:
    """Aggregated statistics for one unified tree."""

    total_files: int = 0
    total_directories: int = 0
    total_size: int = 0
    file_types: dict[str, int] = field(default_factory=lambda: {})  # noqa: PIE807
    mount_count: int = 0

    def format(self) -> str:
        """Render the report as shell output."""
        lines = [
            f"Files:        {self.total_files}",
            f"Directories:  {self.total_directories}",
            f"Total size:   {self.total_size} bytes",
            f"Mount points: {self.mount_count}",
        ]
        if self.file_types:
            lines.append("File types:")
            lines.extend(
                f"  {ext:<10} {n}"
                for ext, n in sorted(self.file_types.items(), key=lambda item: (-item[1], item[0]))
            )
        return "\n".join(lines)


def summarize(tree: TreeNode, *, mount_count: int = 0) -> UsageReport:
    """Tally files, directories, sizes and extensions below *tree*."""
    files = 0
    directories = 0
    size = 0
    types: Counter[str] = Counter()

    pending = [tree]
    while pending:
        node = pending.pop()
        if node.is_directory:
            directories += 1
            pending.extend(node.children)
            continue
        files += 1
        size += node.size
        types[file_extension(node.name)] += 1

    return UsageReport(
        total_files=files,
        total_directories=directories,
        total_size=size,
        file_types=dict(types),
        mount_count=mount_count,
    )


def collect_usage(router: OverlayRouter) -> UsageReport:
    """Build a usage report for everything reachable through *router*."""
    return summarize(router.unified_tree(), mount_count=len(router.mounts))
