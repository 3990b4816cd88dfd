"""Overlay router: many namespaces, one directory tree.

An operating system stitches several file systems into a single tree:
the root file system lives at ``/``, a ``tmpfs`` might be mounted at
``/tmp``, a USB stick at ``/media/usb``.  The router does the same for
in-memory namespaces:

- **Mount table**: a list of ``MountEntry`` records pairing an absolute
  mount path with the namespace that owns everything beneath it.  The
  root namespace is always mounted at ``/``.

- **Longest-prefix routing**: a path is handled by the mount with the
  most specific (longest) mount path covering it.  With mounts at
  ``/a`` and ``/a/b``, ``/a/b/c.txt`` belongs to ``/a/b``.

- **Path rewriting**: the mount path is stripped before forwarding, so
  ``/a/b/c.txt`` becomes ``/c.txt`` inside the ``/a/b`` namespace.

- **Unified tree**: a read-only projection of the whole hierarchy in
  which every mount point shows the mounted namespace instead of the
  placeholder directory underneath it.

The router also keeps the session's current directory.  Mount
resolution is recomputed on every call, never cached, so mounting and
unmounting take effect immediately.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, TypeVar

from py_vfs.fs.namespace import Namespace, NodeInfo, TreeNode
from py_vfs.fs.paths import ROOT_PATH, is_within, join, normalize, relative_to, split_path
from py_vfs.fs.result import FsError, Outcome
from py_vfs.logging import Logger

T = TypeVar("T")

if TYPE_CHECKING:
    from collections.abc import Callable

_SOURCE = "router"


@dataclass(frozen=True)
class MountEntry:
    """A namespace attached at an absolute mount path."""

    mount_path: str
    namespace: Namespace

    @property
    def fs_type(self) -> str:
        """Return the mounted namespace's type tag."""
        return self.namespace.kind_tag


class OverlayRouter:
    """Route path operations to the namespace mounted most specifically.

    Usage::

        router = OverlayRouter()
        router.mount("tmpfs", "/tmp")
        router.write("/tmp/scratch.txt", "hello")   # lands in the tmpfs
        router.read("/tmp/scratch.txt").value        # "hello"

    """

    def __init__(
        self,
        *,
        root_fs_type: str = "ext4",
        root_name: str = "root",
        logger: Logger | None = None,
    ) -> None:
        """Create a router with a fresh root namespace mounted at ``/``.

        Args:
            root_fs_type: Type tag of the root namespace.
            root_name: Display name of the root namespace.
            logger: Where to record events (a new logger by default).

        """
        self._root = Namespace(display_name=root_name, kind_tag=root_fs_type)
        self._mounts: list[MountEntry] = [MountEntry(mount_path=ROOT_PATH, namespace=self._root)]
        self._current_directory = ROOT_PATH
        self._logger = logger if logger is not None else Logger()
        self._logger.info(
            f"Root namespace '{root_name}' ({root_fs_type}) mounted at /", source=_SOURCE
        )

    # -- accessors -------------------------------------------------------

    @property
    def root_namespace(self) -> Namespace:
        """Return the namespace mounted at ``/``."""
        return self._root

    @property
    def mounts(self) -> list[MountEntry]:
        """Return the mount table in mount order."""
        return list(self._mounts)

    @property
    def current_directory(self) -> str:
        """Return the session's current directory."""
        return self._current_directory

    @property
    def logger(self) -> Logger:
        """Return the router's event log."""
        return self._logger

    def mount_table(self) -> list[tuple[str, str]]:
        """Return ``(mount_point, fs_type)`` pairs in mount order."""
        return [(entry.mount_path, entry.fs_type) for entry in self._mounts]

    def mount_at(self, path: str) -> MountEntry | None:
        """Return the entry mounted exactly at *path*, if any."""
        target = self.normalize_in_context(path)
        return self._entry_at(target)

    # -- routing ---------------------------------------------------------

    def normalize_in_context(self, path: str) -> str:
        """Normalize *path* against the current directory."""
        return normalize(path, self._current_directory)

    def resolve_owner(self, absolute_path: str) -> tuple[Namespace, str]:
        """Return the namespace responsible for *absolute_path* and the path inside it.

        The mount with the longest path covering *absolute_path* wins.
        If nothing matches, the root namespace handles the path as is.
        """
        best: MountEntry | None = None
        for entry in self._mounts:
            if not is_within(absolute_path, entry.mount_path):
                continue
            if best is None or len(entry.mount_path) > len(best.mount_path):
                best = entry
        if best is None:
            return self._root, absolute_path
        return best.namespace, relative_to(absolute_path, best.mount_path)

    def _entry_at(self, absolute_path: str) -> MountEntry | None:
        for entry in self._mounts:
            if entry.mount_path == absolute_path:
                return entry
        return None

    def _forward(
        self,
        operation: str,
        path: str,
        call: Callable[[Namespace, str], Outcome[T]],
    ) -> Outcome[T]:
        """Resolve *path* and run *call* against the owning namespace.

        The outcome is returned unchanged except that its path is
        reported in the caller's (unified) terms.
        """
        target = self.normalize_in_context(path)
        namespace, relative = self.resolve_owner(target)
        outcome = call(namespace, relative)
        if not outcome.ok:
            self._logger.debug(f"{operation} {target}: {outcome.error}", source=_SOURCE)
        return replace(outcome, path=target)

    # -- namespace operations --------------------------------------------

    def find(self, path: str) -> NodeInfo | None:
        """Return a snapshot of the node at *path* in its owning namespace."""
        namespace, relative = self.resolve_owner(self.normalize_in_context(path))
        return namespace.find(relative)

    def make_directory(self, path: str) -> Outcome[None]:
        """Create a directory (see ``Namespace.make_directory``)."""
        return self._forward("mkdir", path, lambda ns, rel: ns.make_directory(rel))

    def make_directory_recursive(self, path: str) -> Outcome[None]:
        """Create a directory and its ancestors (see ``Namespace.make_directory_recursive``)."""
        return self._forward("mkdir -p", path, lambda ns, rel: ns.make_directory_recursive(rel))

    def create_file(self, path: str, content: str = "") -> Outcome[None]:
        """Create a file (see ``Namespace.create_file``)."""
        return self._forward("create_file", path, lambda ns, rel: ns.create_file(rel, content))

    def write(self, path: str, content: str) -> Outcome[None]:
        """Write a file, creating it if needed (see ``Namespace.write``)."""
        return self._forward("write", path, lambda ns, rel: ns.write(rel, content))

    def read(self, path: str) -> Outcome[str]:
        """Read a file (see ``Namespace.read``)."""
        return self._forward("read", path, lambda ns, rel: ns.read(rel))

    def list_dir(self, path: str = ".") -> Outcome[list[NodeInfo]]:
        """List a directory (see ``Namespace.list_dir``)."""
        return self._forward("ls", path, lambda ns, rel: ns.list_dir(rel))

    def remove(self, path: str) -> Outcome[None]:
        """Remove a node and its subtree (see ``Namespace.remove``)."""
        return self._forward("rm", path, lambda ns, rel: ns.remove(rel))

    # -- mount management ------------------------------------------------

    def mount(self, kind_tag: str, mount_path: str) -> Outcome[None]:
        """Mount a fresh, empty namespace tagged *kind_tag* at *mount_path*.

        The mount point is created as a directory (with any missing
        ancestors) in the namespace that currently owns it.  Mounting
        on a file, on ``/``, or on an existing mount path fails.
        """
        target = self.normalize_in_context(mount_path)
        outcome = self._prepare_mount_point(target)
        if not outcome.ok:
            self._logger.warning(
                f"mount {kind_tag} at {target} rejected: {outcome.error}", source=_SOURCE
            )
            return outcome

        namespace = Namespace(display_name=f"mount_{len(self._mounts)}", kind_tag=kind_tag)
        self._mounts.append(MountEntry(mount_path=target, namespace=namespace))
        self._logger.info(f"Mounted {kind_tag} at {target}", source=_SOURCE)
        return Outcome.success(path=target)

    def _prepare_mount_point(self, target: str) -> Outcome[None]:
        if target == ROOT_PATH:
            return Outcome.failure(FsError.ROOT_VIOLATION, path=target)
        if self._entry_at(target) is not None:
            return Outcome.failure(FsError.ALREADY_MOUNTED, path=target)

        parent, relative = self.resolve_owner(target)
        node = parent.find(relative)
        if node is None:
            return replace(parent.make_directory_recursive(relative), path=target)
        if not node.is_directory:
            return Outcome.failure(FsError.WRONG_TYPE, path=target)
        return Outcome.success(path=target)

    def unmount(self, mount_path: str) -> Outcome[None]:
        """Detach the namespace mounted exactly at *mount_path*.

        The namespace and everything in it are discarded.  The root
        mount cannot be removed.
        """
        target = self.normalize_in_context(mount_path)
        if target == ROOT_PATH:
            self._logger.warning("unmount / rejected: root cannot be unmounted", source=_SOURCE)
            return Outcome.failure(FsError.ROOT_VIOLATION, path=target)

        entry = self._entry_at(target)
        if entry is None:
            self._logger.warning(
                f"unmount {target} rejected: {FsError.NOT_MOUNTED}", source=_SOURCE
            )
            return Outcome.failure(FsError.NOT_MOUNTED, path=target)

        self._mounts.remove(entry)
        self._logger.info(f"Unmounted {entry.fs_type} from {target}", source=_SOURCE)
        return Outcome.success(path=target)

    # -- session ---------------------------------------------------------

    def set_current_directory(self, path: str) -> Outcome[None]:
        """Change the current directory after checking it is a directory.

        The normalized path is stored as is; which namespace owns it
        is worked out again on every later operation.
        """
        target = self.normalize_in_context(path)
        namespace, relative = self.resolve_owner(target)
        node = namespace.find(relative)
        if node is None:
            return Outcome.failure(FsError.NOT_FOUND, path=target)
        if not node.is_directory:
            return Outcome.failure(FsError.WRONG_TYPE, path=target)
        self._current_directory = target
        return Outcome.success(path=target)

    # -- unified view ----------------------------------------------------

    def unified_tree(self) -> TreeNode:
        """Return the whole hierarchy with mounted namespaces spliced in.

        The result is rebuilt on every call from read-only snapshots,
        so neither the namespaces nor the mount table are touched.
        """
        root = self._root.snapshot()
        if root is None:  # pragma: no cover - the root always resolves
            msg = "root namespace lost its root directory"
            raise RuntimeError(msg)
        return self._project(root, ROOT_PATH, self._root.kind_tag)

    def _project(self, node: TreeNode, absolute: str, fs_type: str | None) -> TreeNode:
        """Rebase *node* onto *absolute*, replacing mount points as it descends."""
        if not node.is_directory:
            return replace(node, path=absolute)

        children: dict[str, TreeNode] = {}
        for child in node.children:
            child_path = join(absolute, child.name)
            entry = self._entry_at(child_path)
            if entry is not None:
                children[child.name] = self._project_mount(entry)
            else:
                children[child.name] = self._project(child, child_path, None)

        # Mounts whose placeholder directory is gone still hang off their parent.
        for entry in self._mounts:
            parent_path, name = split_path(entry.mount_path)
            if parent_path == absolute and name not in children:
                children[name] = self._project_mount(entry)

        return replace(
            node,
            path=absolute,
            children=tuple(children[name] for name in sorted(children)),
            fs_type=fs_type,
        )

    def _project_mount(self, entry: MountEntry) -> TreeNode:
        root = entry.namespace.snapshot()
        if root is None:  # pragma: no cover - the root always resolves
            msg = f"namespace mounted at {entry.mount_path} lost its root directory"
            raise RuntimeError(msg)
        _, name = split_path(entry.mount_path)
        return self._project(replace(root, name=name), entry.mount_path, entry.fs_type)
