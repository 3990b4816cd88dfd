"""The shell: command interpreter for the virtual file system.

The shell reads a command line, tokenizes it, dispatches to the
matching handler, and returns a string result.  Every handler talks to
the ``OverlayRouter`` only through its public operations and turns the
returned ``Outcome`` into text.

Design choices:
    - **Returns strings, not prints.**  This keeps the shell fully
      testable and lets the REPL and the web UI decide how to display
      output.
    - **Command dispatch via a dict.**  Adding a command means writing
      a method and adding one dict entry.
    - **Failures are output, not exceptions.**  A missing file or a
      duplicate directory becomes an ``Error: ...`` line.
"""

from collections.abc import Callable
from typing import Any, TypeAlias

from py_vfs.fs.namespace import NodeInfo, TreeNode
from py_vfs.fs.result import Outcome
from py_vfs.router import OverlayRouter
from py_vfs.tokenizer import tokenize
from py_vfs.usage import collect_usage

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]

_RECURSIVE_FLAG = "-p"


def _failure(action: str, outcome: Outcome[Any]) -> str:
    """Format a failed outcome as ``Error: <action> <path>: <reason>``."""
    return f"Error: {action} {outcome.path}: {outcome.error}"


def _display_order(node: NodeInfo | TreeNode) -> tuple[bool, str]:
    """Sort key: directories first, then by name."""
    return (not node.is_directory, node.name)


def render_tree(tree: TreeNode) -> str:
    """Draw a unified tree with box-drawing connectors.

    Directories are suffixed with ``/`` and mount points show their
    file-system type in brackets.
    """

    def _label(node: TreeNode) -> str:
        name = node.name or "/"
        if node.is_directory and node.name:
            name += "/"
        if node.fs_type is not None:
            name += f" [{node.fs_type}]"
        return name

    lines = [_label(tree)]

    def _walk(node: TreeNode, prefix: str) -> None:
        kids = sorted(node.children, key=_display_order)
        for i, child in enumerate(kids):
            is_last = i == len(kids) - 1
            connector = "└── " if is_last else "├── "
            lines.append(f"{prefix}{connector}{_label(child)}")
            if child.is_directory:
                extension = "    " if is_last else "│   "
                _walk(child, prefix + extension)

    _walk(tree, "")
    return "\n".join(lines)


class Shell:
    """Command interpreter bound to one router.

    The router is passed in, never created here, so the REPL, the web
    UI and the tests can all share or inspect the same instance.
    """

    EXIT_SENTINEL = "__EXIT__"

    def __init__(self, *, router: OverlayRouter) -> None:
        """Create a shell that operates on *router*."""
        self._router = router

        # Command dispatch table: maps command names to handler methods.
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "mkdir": self._cmd_mkdir,
            "create_file": self._cmd_create_file,
            "write_file": self._cmd_write_file,
            "read_file": self._cmd_read_file,
            "ls": self._cmd_ls,
            "cd": self._cmd_cd,
            "pwd": self._cmd_pwd,
            "mount": self._cmd_mount,
            "unmount": self._cmd_unmount,
            "mounts": self._cmd_mounts,
            "rm": self._cmd_rm,
            "cp": self._cmd_cp,
            "tree": self._cmd_tree,
            "usage": self._cmd_usage,
            "log": self._cmd_log,
            "exit": self._cmd_exit,
        }

    @property
    def router(self) -> OverlayRouter:
        """Return the router this shell operates on."""
        return self._router

    @property
    def command_names(self) -> list[str]:
        """Return the sorted list of command names."""
        return sorted(self._commands)

    def execute(self, command: str) -> str:
        """Tokenize and execute a single command line.

        Args:
            command: The raw command string (e.g. ``write_file "a b.txt" hi``).

        Returns:
            The command output, an error message, or ``""``.

        """
        parts = tokenize(command.strip())
        if not parts:
            return ""

        name = parts[0].lower()
        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"
        return handler(parts[1:])

    # -- Command handlers ------------------------------------------------

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        return "Available commands: " + ", ".join(self.command_names)

    def _cmd_mkdir(self, args: list[str]) -> str:
        """Create a directory; ``-p`` creates missing parents too."""
        paths = [arg for arg in args if arg != _RECURSIVE_FLAG]
        if not paths:
            return "Usage: mkdir <path> [-p]"
        path = paths[0]
        if _RECURSIVE_FLAG in args:
            outcome = self._router.make_directory_recursive(path)
        else:
            outcome = self._router.make_directory(path)
        if not outcome.ok:
            return _failure("cannot create directory", outcome)
        return f"Directory created: {outcome.path}"

    def _cmd_create_file(self, args: list[str]) -> str:
        """Create an empty file."""
        if not args:
            return "Usage: create_file <path>"
        outcome = self._router.create_file(args[0])
        if not outcome.ok:
            return _failure("cannot create file", outcome)
        return f"File created: {outcome.path}"

    def _cmd_write_file(self, args: list[str]) -> str:
        """Write content to a file, creating it if needed."""
        if len(args) < 2:  # noqa: PLR2004
            return "Usage: write_file <path> <content...>"
        outcome = self._router.write(args[0], " ".join(args[1:]))
        if not outcome.ok:
            return _failure("cannot write", outcome)
        return f"Content written to: {outcome.path}"

    def _cmd_read_file(self, args: list[str]) -> str:
        """Print a file's content."""
        if not args:
            return "Usage: read_file <path>"
        outcome = self._router.read(args[0])
        if not outcome.ok:
            return _failure("cannot read", outcome)
        return outcome.value or ""

    def _cmd_ls(self, args: list[str]) -> str:
        """List directory contents, directories first."""
        outcome = self._router.list_dir(args[0] if args else ".")
        if not outcome.ok or outcome.value is None:
            return _failure("cannot list", outcome)
        entries = sorted(outcome.value, key=_display_order)
        return "\n".join(f"{e.name}/" if e.is_directory else e.name for e in entries)

    def _cmd_cd(self, args: list[str]) -> str:
        """Change the current directory (default ``/``)."""
        outcome = self._router.set_current_directory(args[0] if args else "/")
        if not outcome.ok:
            return _failure("cannot change directory to", outcome)
        return ""

    def _cmd_pwd(self, _args: list[str]) -> str:
        """Print the current directory."""
        return self._router.current_directory

    def _cmd_mount(self, args: list[str]) -> str:
        """Mount a new, empty namespace."""
        if len(args) < 2:  # noqa: PLR2004
            return "Usage: mount <fs_type> <mount_point>"
        fs_type, mount_point = args[0], args[1]
        outcome = self._router.mount(fs_type, mount_point)
        if not outcome.ok:
            return _failure("cannot mount at", outcome)
        return f"Mounted {fs_type} filesystem at {outcome.path}"

    def _cmd_unmount(self, args: list[str]) -> str:
        """Unmount a namespace and discard its content."""
        if not args:
            return "Usage: unmount <mount_point>"
        outcome = self._router.unmount(args[0])
        if not outcome.ok:
            return _failure("cannot unmount", outcome)
        return f"Unmounted filesystem from {outcome.path}"

    def _cmd_mounts(self, _args: list[str]) -> str:
        """Show the mount table."""
        table = self._router.mount_table()
        width = max(len("MOUNT POINT"), *(len(path) for path, _ in table))
        lines = [f"{'MOUNT POINT':<{width}}  TYPE"]
        lines.extend(f"{path:<{width}}  {fs_type}" for path, fs_type in table)
        return "\n".join(lines)

    def _cmd_rm(self, args: list[str]) -> str:
        """Remove a file or a directory with everything inside it."""
        if not args:
            return "Usage: rm <path>"
        outcome = self._router.remove(args[0])
        if not outcome.ok:
            return _failure("cannot remove", outcome)
        return f"Removed {outcome.path}"

    def _cmd_cp(self, args: list[str]) -> str:
        """Copy a file's content to another path."""
        if len(args) < 2:  # noqa: PLR2004
            return "Usage: cp <source> <dest>"
        source = self._router.read(args[0])
        if not source.ok:
            return _failure("cannot read source", source)
        dest = self._router.write(args[1], source.value or "")
        if not dest.ok:
            return _failure("cannot copy to", dest)
        return f"File copied from {source.path} to {dest.path}"

    def _cmd_tree(self, _args: list[str]) -> str:
        """Draw the unified tree across all mounts."""
        return render_tree(self._router.unified_tree())

    def _cmd_usage(self, _args: list[str]) -> str:
        """Show disk usage statistics."""
        return collect_usage(self._router).format()

    def _cmd_log(self, _args: list[str]) -> str:
        """Show the router's event log."""
        return "\n".join(str(entry) for entry in self._router.logger.entries)

    def _cmd_exit(self, _args: list[str]) -> str:
        """Signal the REPL to exit."""
        return self.EXIT_SENTINEL
