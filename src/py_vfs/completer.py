"""Context-aware tab completer for the shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which looks at the input line
and returns a list of candidate strings.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from py_vfs.router import OverlayRouter
    from py_vfs.shell import Shell

# Commands whose arguments are file-system paths.
_PATH_COMMANDS: frozenset[str] = frozenset(
    ["ls", "cd", "mkdir", "create_file", "write_file", "read_file", "rm", "cp", "unmount"]
)

# `mount <fs_type> <path>`: only the second argument is a path.
_MOUNT_PATH_POSITION = 2

# File-system type suggestions for `mount`.
_FS_TYPES: tuple[str, ...] = ("ext4", "tmpfs", "vfat", "xfs", "btrfs")


class Completer:
    """Context-aware tab completer for the shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance.

        Args:
            shell: The shell whose commands and router are used to
                   generate completion candidates.

        """
        self._shell = shell
        self._router: OverlayRouter = shell.router

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback: return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()

        # No words yet, or still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return [cmd for cmd in self._shell.command_names if cmd.startswith(text)]

        cmd = words[0].lower()
        position = len(words) if line.endswith(" ") else len(words) - 1

        if cmd == "mount":
            if position < _MOUNT_PATH_POSITION:
                return sorted(t for t in _FS_TYPES if t.startswith(text))
            return self._complete_paths(text)

        if cmd in _PATH_COMMANDS:
            return self._complete_paths(text)
        return []

    def _complete_paths(self, text: str) -> list[str]:
        """Complete paths relative to the current directory.

        Split the partial path into a directory and a name prefix, list
        the directory through the router, and filter by prefix.
        Directories get a trailing ``/`` suffix.
        """
        last_slash = text.rfind("/")
        directory = text[: last_slash + 1]
        prefix = text[last_slash + 1 :]

        outcome = self._router.list_dir(directory or ".")
        if not outcome.ok or outcome.value is None:
            return []

        candidates = [
            f"{directory}{entry.name}{'/' if entry.is_directory else ''}"
            for entry in outcome.value
            if entry.name.startswith(prefix)
        ]
        return sorted(candidates)
