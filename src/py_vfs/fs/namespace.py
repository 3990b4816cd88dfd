"""In-memory namespace: one rooted tree of files and directories.

Models a single mounted file system:

- **Inode**: internal record for a file or directory.  Inodes live in
  an arena (``dict[int, _Inode]``) keyed by inode number.  Each inode
  stores its own name and its parent's inode number; the parent link
  is only used for lookups, the arena owns every inode.

- **Directory**: an inode whose ``children`` maps child names to inode
  numbers.  Names are unique within a directory.

- **File**: an inode whose ``content`` holds an opaque text blob that
  is always read and written as a whole.

- **Path resolution**: ``/foo/bar/baz.txt`` is normalized, then walked
  component by component from the root inode.

Paths are never stored.  A node's path is recomputed from its parent
chain each time a snapshot is taken, so it cannot drift out of sync
with the tree.

Every mutating operation returns an ``Outcome`` and either applies
completely or not at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from itertools import count
from typing import Any

from py_vfs.fs.paths import ROOT_PATH, join, normalize, segments, split_path
from py_vfs.fs.result import FsError, Outcome

ROOT_INODE = 0


class FileType(StrEnum):
    """The kind of object a node represents."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class NodeInfo:
    """Read-only snapshot of a node's metadata (returned by find and list)."""

    inode_number: int
    name: str
    file_type: FileType
    path: str
    created_at: datetime
    size: int = 0

    @property
    def is_directory(self) -> bool:
        """Return True for directories."""
        return self.file_type is FileType.DIRECTORY


@dataclass(frozen=True)
class TreeNode:
    """Read-only copy of a subtree, built fresh for display.

    ``fs_type`` is only set on nodes that are the root of a mounted
    namespace in a unified view.
    """

    name: str
    file_type: FileType
    path: str
    created_at: datetime
    content: str = ""
    children: tuple[TreeNode, ...] = ()
    fs_type: str | None = None

    @property
    def is_directory(self) -> bool:
        """Return True for directories."""
        return self.file_type is FileType.DIRECTORY

    @property
    def size(self) -> int:
        """Return the content length (always zero for directories)."""
        return len(self.content)

    def child(self, name: str) -> TreeNode | None:
        """Return the direct child called *name*, if any."""
        for node in self.children:
            if node.name == name:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the subtree to plain JSON-friendly data."""
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.file_type.value,
            "path": self.path,
            "created_at": self.created_at.isoformat(),
        }
        if self.fs_type is not None:
            data["fs_type"] = self.fs_type
        if self.is_directory:
            data["children"] = [node.to_dict() for node in self.children]
        else:
            data["size"] = self.size
        return data


@dataclass
class _Inode:
    """Internal node record.

    For files, ``content`` holds the text.
    For directories, ``children`` maps names to inode numbers.
    """

    inode_number: int
    file_type: FileType
    name: str
    parent: int | None
    content: str = ""
    children: dict[str, int] = field(default_factory=lambda: {})  # noqa: PIE807
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_directory(self) -> bool:
        """Return True for directories."""
        return self.file_type is FileType.DIRECTORY


class Namespace:
    """An in-memory tree of files and directories rooted at ``/``.

    Every operation takes a path plus the caller's current directory,
    so relative paths such as ``../notes.txt`` work as expected.
    """

    def __init__(self, display_name: str = "default", kind_tag: str = "ext4") -> None:
        """Create a namespace with an empty root directory.

        Args:
            display_name: Human-readable name of this namespace.
            kind_tag: Free-form file-system type label (e.g. ``tmpfs``).

        """
        self.display_name = display_name
        self.kind_tag = kind_tag
        self._inode_counter = count(start=ROOT_INODE)
        root = _Inode(
            inode_number=next(self._inode_counter),
            file_type=FileType.DIRECTORY,
            name="",
            parent=None,
        )
        self._inodes: dict[int, _Inode] = {root.inode_number: root}

    def __repr__(self) -> str:
        """Show the name and type tag."""
        return f"Namespace({self.display_name!r}, kind_tag={self.kind_tag!r})"

    def __len__(self) -> int:
        """Return the number of live nodes, root included."""
        return len(self._inodes)

    @property
    def root(self) -> NodeInfo:
        """Return a snapshot of the root directory."""
        return self._info(self._inodes[ROOT_INODE])

    @staticmethod
    def normalize(path: str, current_directory: str = ROOT_PATH) -> str:
        """Return the canonical absolute form of *path*."""
        return normalize(path, current_directory)

    # -- internal helpers ------------------------------------------------

    def _resolve(self, path: str) -> _Inode | None:
        """Walk a normalized path from the root and return its inode."""
        current = self._inodes[ROOT_INODE]
        for part in segments(path):
            if not current.is_directory:
                return None
            child_ino = current.children.get(part)
            if child_ino is None:
                return None
            current = self._inodes[child_ino]
        return current

    def _path_of(self, inode: _Inode) -> str:
        """Rebuild an inode's absolute path from its parent chain."""
        names: list[str] = []
        current = inode
        while current.parent is not None:
            names.append(current.name)
            current = self._inodes[current.parent]
        return ROOT_PATH + "/".join(reversed(names))

    def _info(self, inode: _Inode) -> NodeInfo:
        return NodeInfo(
            inode_number=inode.inode_number,
            name=inode.name,
            file_type=inode.file_type,
            path=self._path_of(inode),
            created_at=inode.created_at,
            size=len(inode.content),
        )

    def _parent_for_create(self, path: str) -> tuple[_Inode, str] | FsError:
        """Locate the directory a new node at *path* would live in.

        Returns the parent inode and the new name, or the reason the
        node cannot be created there.
        """
        if path == ROOT_PATH:
            return FsError.ROOT_VIOLATION
        parent_path, name = split_path(path)
        parent = self._resolve(parent_path)
        if parent is None:
            return FsError.NOT_FOUND
        if not parent.is_directory:
            return FsError.WRONG_TYPE
        if name in parent.children:
            return FsError.ALREADY_EXISTS
        return parent, name

    def _link(self, parent: _Inode, name: str, file_type: FileType, content: str = "") -> _Inode:
        """Allocate an inode and link it into *parent* under *name*."""
        inode = _Inode(
            inode_number=next(self._inode_counter),
            file_type=file_type,
            name=name,
            parent=parent.inode_number,
            content=content,
        )
        self._inodes[inode.inode_number] = inode
        parent.children[name] = inode.inode_number
        return inode

    def _discard(self, inode: _Inode) -> None:
        """Release *inode* and everything beneath it from the arena."""
        pending = [inode.inode_number]
        while pending:
            current = self._inodes.pop(pending.pop())
            pending.extend(current.children.values())

    def _snapshot(self, inode: _Inode, path: str) -> TreeNode:
        children = tuple(
            self._snapshot(self._inodes[ino], join(path, name))
            for name, ino in sorted(inode.children.items())
        )
        return TreeNode(
            name=inode.name,
            file_type=inode.file_type,
            path=path,
            created_at=inode.created_at,
            content=inode.content,
            children=children,
        )

    # -- public operations -----------------------------------------------

    def find(self, path: str, current_directory: str = ROOT_PATH) -> NodeInfo | None:
        """Return a snapshot of the node at *path*, or None if it does not resolve.

        Resolution fails when a segment is missing or when an
        intermediate segment is a file.
        """
        inode = self._resolve(normalize(path, current_directory))
        return self._info(inode) if inode is not None else None

    def exists(self, path: str, current_directory: str = ROOT_PATH) -> bool:
        """Check whether a path resolves in this namespace."""
        return self._resolve(normalize(path, current_directory)) is not None

    def make_directory(self, path: str, current_directory: str = ROOT_PATH) -> Outcome[None]:
        """Create an empty directory.

        Fails for the root, when the parent is missing or is a file,
        and when the name is already taken by a file or directory.
        """
        target = normalize(path, current_directory)
        located = self._parent_for_create(target)
        if isinstance(located, FsError):
            return Outcome.failure(located, path=target)
        parent, name = located
        self._link(parent, name, FileType.DIRECTORY)
        return Outcome.success(path=target)

    def make_directory_recursive(
        self, path: str, current_directory: str = ROOT_PATH
    ) -> Outcome[None]:
        """Create a directory and any missing ancestors, like ``mkdir -p``.

        Existing directories along the way are reused, so calling this
        on a path that already exists succeeds without changes.  If any
        prefix is a file nothing is created.
        """
        target = normalize(path, current_directory)
        if target == ROOT_PATH:
            return Outcome.failure(FsError.ROOT_VIOLATION, path=target)

        parts = segments(target)
        current = self._inodes[ROOT_INODE]
        depth = 0
        while depth < len(parts):
            child_ino = current.children.get(parts[depth])
            if child_ino is None:
                break
            current = self._inodes[child_ino]
            if not current.is_directory:
                return Outcome.failure(FsError.WRONG_TYPE, path=target)
            depth += 1

        for name in parts[depth:]:
            current = self._link(current, name, FileType.DIRECTORY)
        return Outcome.success(path=target)

    def create_file(
        self, path: str, content: str = "", current_directory: str = ROOT_PATH
    ) -> Outcome[None]:
        """Create a file holding *content* (empty by default).

        Same rules as ``make_directory``: the parent must be an existing
        directory and the name must be free.
        """
        target = normalize(path, current_directory)
        located = self._parent_for_create(target)
        if isinstance(located, FsError):
            return Outcome.failure(located, path=target)
        parent, name = located
        self._link(parent, name, FileType.FILE, content)
        return Outcome.success(path=target)

    def write(self, path: str, content: str, current_directory: str = ROOT_PATH) -> Outcome[None]:
        """Replace a file's content, creating the file if it is missing.

        Writing never fails just because the file does not exist yet;
        it still fails if the target is a directory or the parent
        directory is missing.
        """
        target = normalize(path, current_directory)
        inode = self._resolve(target)
        if inode is None:
            return self.create_file(target, content)
        if inode.is_directory:
            return Outcome.failure(FsError.WRONG_TYPE, path=target)
        inode.content = content
        return Outcome.success(path=target)

    def read(self, path: str, current_directory: str = ROOT_PATH) -> Outcome[str]:
        """Return the whole content of a file."""
        target = normalize(path, current_directory)
        inode = self._resolve(target)
        if inode is None:
            return Outcome.failure(FsError.NOT_FOUND, path=target)
        if inode.is_directory:
            return Outcome.failure(FsError.WRONG_TYPE, path=target)
        return Outcome.success(inode.content, path=target)

    def list_dir(
        self, path: str = ".", current_directory: str = ROOT_PATH
    ) -> Outcome[list[NodeInfo]]:
        """Return snapshots of a directory's direct children.

        The order is unspecified; sorting is left to the presentation
        layer.
        """
        target = normalize(path, current_directory)
        inode = self._resolve(target)
        if inode is None:
            return Outcome.failure(FsError.NOT_FOUND, path=target)
        if not inode.is_directory:
            return Outcome.failure(FsError.WRONG_TYPE, path=target)
        entries = [self._info(self._inodes[ino]) for ino in inode.children.values()]
        return Outcome.success(entries, path=target)

    def remove(self, path: str, current_directory: str = ROOT_PATH) -> Outcome[None]:
        """Remove a file or a directory.

        Removing a directory discards its whole subtree; there is no
        "directory not empty" check.
        """
        target = normalize(path, current_directory)
        if target == ROOT_PATH:
            return Outcome.failure(FsError.ROOT_VIOLATION, path=target)

        parent_path, name = split_path(target)
        parent = self._resolve(parent_path)
        if parent is None:
            return Outcome.failure(FsError.NOT_FOUND, path=target)
        if not parent.is_directory:
            return Outcome.failure(FsError.WRONG_TYPE, path=target)
        child_ino = parent.children.pop(name, None)
        if child_ino is None:
            return Outcome.failure(FsError.NOT_FOUND, path=target)
        self._discard(self._inodes[child_ino])
        return Outcome.success(path=target)

    def snapshot(
        self, path: str = ROOT_PATH, current_directory: str = ROOT_PATH
    ) -> TreeNode | None:
        """Return a read-only copy of the subtree at *path*.

        Children are ordered by name so two snapshots of an unchanged
        tree compare equal.
        """
        target = normalize(path, current_directory)
        inode = self._resolve(target)
        if inode is None:
            return None
        return self._snapshot(inode, target)
