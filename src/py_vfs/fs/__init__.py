"""Namespace engine — nodes, path normalization, and operation outcomes.

Re-exports public symbols so callers can write::

    from py_vfs.fs import Namespace, Outcome
"""

from py_vfs.fs.namespace import FileType, Namespace, NodeInfo, TreeNode
from py_vfs.fs.paths import ROOT_PATH, normalize, split_path
from py_vfs.fs.result import FsError, Outcome, VfsError

__all__ = [
    "ROOT_PATH",
    "FileType",
    "FsError",
    "Namespace",
    "NodeInfo",
    "Outcome",
    "TreeNode",
    "VfsError",
    "normalize",
    "split_path",
]
