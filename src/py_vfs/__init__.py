"""py-vfs — an in-memory overlay file system.

Independent namespaces are mounted into one directory tree and every
path is routed to the most specifically mounted namespace::

    from py_vfs import OverlayRouter

    router = OverlayRouter()
    router.mount("tmpfs", "/tmp")
    router.write("/tmp/notes.txt", "hello")
"""

from py_vfs.fs import FileType, FsError, Namespace, NodeInfo, Outcome, TreeNode, VfsError
from py_vfs.router import MountEntry, OverlayRouter

__all__ = [
    "FileType",
    "FsError",
    "MountEntry",
    "Namespace",
    "NodeInfo",
    "Outcome",
    "OverlayRouter",
    "TreeNode",
    "VfsError",
]
