# topmark:header:start
#
#   project      : LeafPress
#   file         : types.py
#   file_relpath : src/leafpress/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lightweight config types and aliases.

This module hosts stable, import-friendly definitions that other config modules
can depend on without risk of circular imports.

Exports:
    - `ArgsLike`: structural mapping type for CLI/API argument dicts.
    - `DateSource`: the date sources the date resolver can consult.
    - `ConfigError`: raised for configuration values LeafPress cannot run with.
"""

from __future__ import annotations

# For runtime type checks, prefer collections.abc
from collections.abc import Mapping
from enum import Enum
from typing import Any

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]


class ConfigError(ValueError):
    """A configuration value is invalid in a way that cannot be defaulted away."""


class DateSource(str, Enum):
    """Sources the date resolver may consult, in a caller-declared order.

    Values are the user-facing names accepted by ``[dates] priority``.
    """

    FRONTMATTER = "frontmatter"
    GIT = "git"
    FILESYSTEM = "filesystem"

    @classmethod
    def parse(cls, value: str) -> DateSource:
        """Return the member for a user-facing name (case-insensitive).

        Args:
            value (str): Name such as ``"git"`` or ``"Frontmatter"``.

        Returns:
            DateSource: The matching member.

        Raises:
            ConfigError: If ``value`` names no known source.
        """
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            choices: str = ", ".join(m.value for m in cls)
            raise ConfigError(f"Unknown date source {value!r} (expected one of: {choices})") from exc
