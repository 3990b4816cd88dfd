"""Tests for the namespace engine.

A namespace is one rooted tree of files and directories.  Operations
take a path plus the caller's current directory and return an
``Outcome``: a value on success, a classified ``FsError`` otherwise.
Nothing is raised for missing paths, duplicates or wrong node types.
"""

from py_vfs.fs.namespace import FileType, Namespace
from py_vfs.fs.result import FsError

ROOT_PATH = "/"


class TestNamespaceCreation:
    """Verify the initial state of a fresh namespace."""

    def test_root_exists_and_is_directory(self) -> None:
        """A new namespace has a root directory."""
        ns = Namespace()
        root = ns.find(ROOT_PATH)
        assert root is not None
        assert root.file_type is FileType.DIRECTORY

    def test_root_has_empty_name_and_slash_path(self) -> None:
        """The root's name is empty and its path is exactly ``/``."""
        ns = Namespace()
        assert ns.root.name == ""
        assert ns.root.path == ROOT_PATH

    def test_root_is_empty(self) -> None:
        """A fresh root directory has no entries."""
        ns = Namespace()
        assert ns.list_dir(ROOT_PATH).value == []

    def test_metadata(self) -> None:
        """Display name and type tag are kept as given."""
        ns = Namespace(display_name="scratch", kind_tag="tmpfs")
        assert ns.display_name == "scratch"
        assert ns.kind_tag == "tmpfs"

    def test_normalize_is_exposed(self) -> None:
        """The namespace offers the shared path normalization."""
        assert Namespace.normalize("../b", "/a") == "/b"


class TestFind:
    """Verify path lookup."""

    def test_find_missing_returns_none(self) -> None:
        """A missing path is "not found", not an error."""
        ns = Namespace()
        assert ns.find("/nope") is None

    def test_cannot_descend_into_file(self) -> None:
        """A file in the middle of a path stops resolution."""
        ns = Namespace()
        ns.create_file("/f.txt")
        assert ns.find("/f.txt/child") is None

    def test_find_relative_to_current_directory(self) -> None:
        """Relative lookups start at the current directory."""
        ns = Namespace()
        ns.make_directory("/docs")
        ns.create_file("/docs/readme.txt")
        node = ns.find("readme.txt", "/docs")
        assert node is not None
        assert node.path == "/docs/readme.txt"

    def test_node_path_matches_parent_and_name(self) -> None:
        """A node's path is its parent's path joined with its name."""
        ns = Namespace()
        ns.make_directory_recursive("/a/b")
        ns.create_file("/a/b/c.txt")
        node = ns.find("/a//b/./c.txt")
        assert node is not None
        assert node.name == "c.txt"
        assert node.path == "/a/b/c.txt"


class TestMakeDirectory:
    """Verify creating directories."""

    def test_create_directory(self) -> None:
        """A created directory exists and is a directory."""
        ns = Namespace()
        assert ns.make_directory("/docs").ok
        node = ns.find("/docs")
        assert node is not None
        assert node.is_directory

    def test_duplicate_directory_fails(self) -> None:
        """The second mkdir of the same path reports ALREADY_EXISTS."""
        ns = Namespace()
        assert ns.make_directory("/d")
        outcome = ns.make_directory("/d")
        assert not outcome
        assert outcome.error is FsError.ALREADY_EXISTS

    def test_directory_over_file_fails(self) -> None:
        """A name taken by a file cannot become a directory."""
        ns = Namespace()
        ns.create_file("/x")
        outcome = ns.make_directory("/x")
        assert outcome.error is FsError.ALREADY_EXISTS

    def test_missing_parent_fails(self) -> None:
        """The parent directory must exist."""
        ns = Namespace()
        outcome = ns.make_directory("/a/b")
        assert outcome.error is FsError.NOT_FOUND
        assert ns.find("/a") is None

    def test_parent_is_file_fails(self) -> None:
        """Directories cannot be created inside files."""
        ns = Namespace()
        ns.create_file("/f")
        outcome = ns.make_directory("/f/sub")
        assert outcome.error is FsError.WRONG_TYPE

    def test_root_cannot_be_created(self) -> None:
        """mkdir / is a root violation."""
        ns = Namespace()
        outcome = ns.make_directory("/")
        assert outcome.error is FsError.ROOT_VIOLATION

    def test_relative_mkdir(self) -> None:
        """Relative paths are created under the current directory."""
        ns = Namespace()
        ns.make_directory("/home")
        assert ns.make_directory("alice", "/home").ok
        assert ns.find("/home/alice") is not None

    def test_outcome_reports_normalized_path(self) -> None:
        """The outcome names the normalized target."""
        ns = Namespace()
        outcome = ns.make_directory("docs//", "/")
        assert outcome.path == "/docs"


class TestMakeDirectoryRecursive:
    """Verify ``mkdir -p`` semantics."""

    def test_creates_all_levels(self) -> None:
        """Every missing prefix is created."""
        ns = Namespace()
        assert ns.make_directory_recursive("/a/b/c").ok
        for path in ("/a", "/a/b", "/a/b/c"):
            node = ns.find(path)
            assert node is not None
            assert node.is_directory

    def test_existing_path_is_noop_success(self) -> None:
        """Running it twice succeeds and changes nothing."""
        ns = Namespace()
        ns.make_directory_recursive("/a/b")
        before = len(ns)
        assert ns.make_directory_recursive("/a/b").ok
        assert len(ns) == before

    def test_reuses_existing_prefix(self) -> None:
        """Existing directories along the way are kept."""
        ns = Namespace()
        ns.make_directory("/a")
        ns.create_file("/a/keep.txt", "x")
        assert ns.make_directory_recursive("/a/b").ok
        assert ns.read("/a/keep.txt").value == "x"

    def test_file_prefix_fails_without_changes(self) -> None:
        """A file in the way fails the whole operation."""
        ns = Namespace()
        ns.create_file("/a")
        before = len(ns)
        outcome = ns.make_directory_recursive("/a/b/c")
        assert outcome.error is FsError.WRONG_TYPE
        assert len(ns) == before

    def test_root_fails(self) -> None:
        """The root cannot be (re)created."""
        ns = Namespace()
        assert ns.make_directory_recursive("/").error is FsError.ROOT_VIOLATION


class TestCreateFile:
    """Verify creating files."""

    def test_create_file_with_content(self) -> None:
        """create_file then read returns the initial content."""
        ns = Namespace()
        ns.make_directory("/a")
        assert ns.create_file("/a/b.txt", "x").ok
        assert ns.read("/a/b.txt").value == "x"

    def test_default_content_is_empty(self) -> None:
        """A new file is empty unless content is given."""
        ns = Namespace()
        ns.create_file("/empty.txt")
        assert ns.read("/empty.txt").value == ""

    def test_duplicate_file_fails(self) -> None:
        """A taken name is rejected."""
        ns = Namespace()
        ns.create_file("/f")
        assert ns.create_file("/f").error is FsError.ALREADY_EXISTS

    def test_missing_parent_fails(self) -> None:
        """The parent directory must exist."""
        ns = Namespace()
        assert ns.create_file("/nope/f.txt").error is FsError.NOT_FOUND

    def test_root_fails(self) -> None:
        """A file cannot replace the root."""
        ns = Namespace()
        assert ns.create_file("/").error is FsError.ROOT_VIOLATION

    def test_file_records_creation_time(self) -> None:
        """Every node carries a creation timestamp."""
        ns = Namespace()
        ns.create_file("/f")
        node = ns.find("/f")
        assert node is not None
        assert node.created_at.tzinfo is not None


class TestWrite:
    """Verify whole-file writes."""

    def test_write_replaces_content(self) -> None:
        """Writing replaces the entire content (no append)."""
        ns = Namespace()
        ns.create_file("/f", "first")
        assert ns.write("/f", "second").ok
        assert ns.read("/f").value == "second"

    def test_write_auto_creates_missing_file(self) -> None:
        """Writing to a missing file creates it."""
        ns = Namespace()
        assert ns.write("/new.txt", "v").ok
        assert ns.read("/new.txt").value == "v"

    def test_write_to_directory_fails(self) -> None:
        """Directories have no content."""
        ns = Namespace()
        ns.make_directory("/d")
        assert ns.write("/d", "x").error is FsError.WRONG_TYPE

    def test_write_with_missing_parent_fails(self) -> None:
        """Auto-create still needs an existing parent directory."""
        ns = Namespace()
        assert ns.write("/missing/f.txt", "x").error is FsError.NOT_FOUND

    def test_write_updates_size(self) -> None:
        """The snapshot size follows the content length."""
        ns = Namespace()
        ns.write("/f", "hello")
        node = ns.find("/f")
        assert node is not None
        assert node.size == len("hello")


class TestRead:
    """Verify reading files."""

    def test_read_missing_fails(self) -> None:
        """A missing file is NOT_FOUND."""
        ns = Namespace()
        outcome = ns.read("/nope")
        assert outcome.error is FsError.NOT_FOUND
        assert outcome.value is None

    def test_read_directory_fails(self) -> None:
        """A directory cannot be read as a file."""
        ns = Namespace()
        ns.make_directory("/d")
        assert ns.read("/d").error is FsError.WRONG_TYPE


class TestListDir:
    """Verify directory listings."""

    def test_lists_direct_children_only(self) -> None:
        """Grandchildren are not included."""
        ns = Namespace()
        ns.make_directory_recursive("/a/b")
        ns.create_file("/a/f.txt")
        names = {e.name for e in ns.list_dir("/a").value or []}
        assert names == {"b", "f.txt"}

    def test_entries_carry_type(self) -> None:
        """Listings distinguish files from directories."""
        ns = Namespace()
        ns.make_directory("/d")
        ns.create_file("/f")
        kinds = {e.name: e.file_type for e in ns.list_dir("/").value or []}
        assert kinds == {"d": FileType.DIRECTORY, "f": FileType.FILE}

    def test_list_file_fails(self) -> None:
        """Files cannot be listed."""
        ns = Namespace()
        ns.create_file("/x")
        assert ns.list_dir("/x").error is FsError.WRONG_TYPE

    def test_list_missing_fails(self) -> None:
        """Missing directories are NOT_FOUND."""
        ns = Namespace()
        assert ns.list_dir("/missing").error is FsError.NOT_FOUND

    def test_default_lists_current_directory(self) -> None:
        """With no path, the current directory is listed."""
        ns = Namespace()
        ns.make_directory("/d")
        ns.create_file("/d/inner")
        names = [e.name for e in ns.list_dir(current_directory="/d").value or []]
        assert names == ["inner"]


class TestRemove:
    """Verify removal."""

    def test_remove_file(self) -> None:
        """A removed file no longer resolves."""
        ns = Namespace()
        ns.create_file("/f")
        assert ns.remove("/f").ok
        assert ns.find("/f") is None

    def test_remove_directory_discards_subtree(self) -> None:
        """Removing a directory makes every descendant unresolvable."""
        ns = Namespace()
        ns.make_directory_recursive("/d/sub/deeper")
        ns.create_file("/d/a.txt", "a")
        ns.create_file("/d/sub/b.txt", "b")
        assert ns.remove("/d").ok
        for path in ("/d", "/d/a.txt", "/d/sub", "/d/sub/b.txt", "/d/sub/deeper"):
            assert ns.find(path) is None

    def test_removed_subtree_is_released(self) -> None:
        """Only the root remains after removing everything."""
        ns = Namespace()
        ns.make_directory_recursive("/d/sub")
        ns.create_file("/d/sub/f")
        ns.remove("/d")
        assert len(ns) == 1

    def test_remove_root_fails(self) -> None:
        """The root cannot be removed."""
        ns = Namespace()
        assert ns.remove("/").error is FsError.ROOT_VIOLATION

    def test_remove_missing_fails(self) -> None:
        """Removing a missing name is NOT_FOUND."""
        ns = Namespace()
        assert ns.remove("/ghost").error is FsError.NOT_FOUND

    def test_remove_with_missing_parent_fails(self) -> None:
        """The parent must resolve."""
        ns = Namespace()
        assert ns.remove("/no/such/thing").error is FsError.NOT_FOUND

    def test_remove_under_file_fails(self) -> None:
        """A file's "children" cannot be removed."""
        ns = Namespace()
        ns.create_file("/f")
        assert ns.remove("/f/x").error is FsError.WRONG_TYPE

    def test_name_can_be_reused_after_remove(self) -> None:
        """A removed name is free again, with fresh content."""
        ns = Namespace()
        ns.make_directory("/d")
        ns.create_file("/d/old")
        ns.remove("/d")
        ns.make_directory("/d")
        assert ns.list_dir("/d").value == []


class TestSnapshot:
    """Verify read-only subtree snapshots."""

    def test_snapshot_mirrors_tree(self) -> None:
        """The snapshot contains every node with its content."""
        ns = Namespace()
        ns.make_directory("/d")
        ns.create_file("/d/f.txt", "hi")
        tree = ns.snapshot()
        assert tree is not None
        d = tree.child("d")
        assert d is not None
        f = d.child("f.txt")
        assert f is not None
        assert f.content == "hi"
        assert f.path == "/d/f.txt"

    def test_snapshots_are_equal_without_changes(self) -> None:
        """Two snapshots of an unchanged tree compare equal."""
        ns = Namespace()
        ns.make_directory_recursive("/a/b")
        ns.create_file("/a/z.txt")
        ns.create_file("/a/c.txt")
        assert ns.snapshot() == ns.snapshot()

    def test_snapshot_missing_returns_none(self) -> None:
        """Snapshotting a missing path gives None."""
        ns = Namespace()
        assert ns.snapshot("/missing") is None
