# topmark:header:start
#
#   project      : LeafPress
#   file         : keys.py
#   file_relpath : src/leafpress/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for LeafPress configuration.

This module defines the authoritative string constants used when reading and
validating LeafPress configuration from TOML sources (``leafpress.toml`` and
``[tool.leafpress]`` in ``pyproject.toml``).

Design notes:
    - Keys defined here represent *external configuration API*.
    - Renaming or removing keys is a breaking change.
    - CLI argument keys are kept separate (see `Cli`).
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by LeafPress configuration."""

    # [build]
    SECTION_BUILD: Final[str] = "build"

    KEY_CONTENT_DIR: Final[str] = "content_dir"
    KEY_OUTPUT_DIR: Final[str] = "output_dir"
    KEY_JOBS: Final[str] = "jobs"

    # [dates]
    SECTION_DATES: Final[str] = "dates"

    KEY_PRIORITY: Final[str] = "priority"
    KEY_CONTENT_REPOSITORY: Final[str] = "content_repository"

    # [timeline]
    SECTION_TIMELINE: Final[str] = "timeline"

    KEY_LIMIT: Final[str] = "limit"
    KEY_DISALLOWED_SLUGS: Final[str] = "disallowed_slugs"
    KEY_DISALLOWED_TAGS: Final[str] = "disallowed_tags"

    # [transclude]
    SECTION_TRANSCLUDE: Final[str] = "transclude"

    KEY_COMMON_DIRECTORIES: Final[str] = "common_directories"

    # [site]
    SECTION_SITE: Final[str] = "site"

    KEY_TITLE: Final[str] = "title"
    KEY_FOOTER_LINKS: Final[str] = "footer_links"


class Cli:
    """Argument keys accepted by `MutableConfig.apply_cli_args`."""

    VERBOSITY: Final[str] = "verbosity_level"
    WORKING_DIR: Final[str] = "working_dir"
    CONTENT_DIR: Final[str] = "content_dir"
    OUTPUT_DIR: Final[str] = "output_dir"
    JOBS: Final[str] = "jobs"
    PRIORITY: Final[str] = "priority"
    LIMIT: Final[str] = "limit"
