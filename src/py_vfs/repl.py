"""Interactive REPL (Read-Eval-Print Loop) for the virtual file system.

The REPL is the terminal front end.  It builds a router from the
configuration, creates a shell, and enters the classic loop:

    1. **Read**: display a prompt and read user input.
    2. **Eval**: pass the command to ``shell.execute()``.
    3. **Print**: display the result.
    4. **Loop**: repeat until the shell returns the exit sentinel.

The helper functions (``build_prompt``, ``format_banner``) are pure
and testable.  ``run()`` is the I/O entrypoint and ``main()`` the
console script.
"""

import argparse
import readline
import sys
from pathlib import Path

from py_vfs.completer import Completer
from py_vfs.config import ConfigError, VfsConfig, build_router, load_config
from py_vfs.router import OverlayRouter
from py_vfs.shell import Shell

_BANNER_WIDTH = 38


def format_banner(log_lines: list[str]) -> str:
    """Format the start-up log into a displayable banner string.

    Args:
        log_lines: Messages recorded while the router was built.

    Returns:
        A formatted string suitable for printing to the console.

    """
    border = "=" * _BANNER_WIDTH
    header = (
        f"\n  {border}\n            py-vfs v0.1.0\n    An in-memory overlay file system\n"
        f"  {border}\n\n"
    )
    body = "\n".join(f"  {msg}" for msg in log_lines)
    footer = "\nReady. Type 'help' for commands, 'exit' to quit.\n"
    return header + body + footer


def build_prompt(router: OverlayRouter) -> str:
    """Build the shell prompt string showing the current directory.

    Returns:
        A prompt string like ``vfs:/tmp $ ``.

    """
    return f"vfs:{router.current_directory} $ "


def run(config: VfsConfig | None = None) -> None:
    """Build the router and run the interactive REPL.

    Handles Ctrl+D (end of input) and Ctrl+C as a graceful exit.
    """
    router = build_router(config)
    shell = Shell(router=router)

    # Wire up tab completion via readline.
    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner([str(entry) for entry in router.logger.entries]))  # noqa: T201

    try:
        while True:
            try:
                command = input(build_prompt(router))
            except EOFError:
                # Ctrl+D
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result == Shell.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C
        print("\nInterrupted.")  # noqa: T201

    finally:
        print("Goodbye.")  # noqa: T201


def main(argv: list[str] | None = None) -> int:
    """Console entry point (``py-vfs``).

    Returns:
        The process exit status.

    """
    parser = argparse.ArgumentParser(
        prog="py-vfs", description="In-memory overlay file system shell"
    )
    parser.add_argument("--config", type=Path, help="JSON file with the root type and mounts")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config is not None else None
        run(config)
    except ConfigError as e:
        print(f"py-vfs: {e}", file=sys.stderr)  # noqa: T201
        return 1
    return 0
