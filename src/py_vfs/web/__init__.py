"""Browser-based web UI for py-vfs.

This package provides a Flask application that exposes the shell and
the unified tree through a web browser.  It is an **optional** extra —
install with::

    pip install py-vfs[web]

The ``create_app`` factory in ``app.py`` builds a router, creates a
shell, and serves:

- ``GET /`` — HTML terminal page with a file explorer.
- ``POST /api/execute`` — execute a shell command and return JSON.
- ``GET /api/tree`` — the unified tree as JSON.
- ``GET /api/usage`` — disk usage statistics.
- ``GET /api/mounts`` — the mount table.
"""
