# topmark:header:start
#
#   project      : LeafPress
#   file         : __main__.py
#   file_relpath : src/leafpress/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running LeafPress via ``python -m leafpress``.

It delegates directly to :func:`leafpress.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how LeafPress is launched.

Examples:
    Build the site from the current project::

        python -m leafpress build
"""

from __future__ import annotations

from leafpress.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
