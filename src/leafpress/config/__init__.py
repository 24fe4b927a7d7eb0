# topmark:header:start
#
#   project      : LeafPress
#   file         : __init__.py
#   file_relpath : src/leafpress/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for LeafPress.

Supports default configuration generation, CLI overrides, and layered resolution
from ``leafpress.toml`` or ``[tool.leafpress]`` in ``pyproject.toml``. See
`leafpress.config.model` for the merge policy.
"""

from __future__ import annotations

from leafpress.config.model import Config, MutableConfig, config_from_mapping
from leafpress.config.types import ArgsLike, ConfigError, DateSource

__all__ = [
    "ArgsLike",
    "Config",
    "ConfigError",
    "DateSource",
    "MutableConfig",
    "config_from_mapping",
]
