# topmark:header:start
#
#   project      : LeafPress
#   file         : constants.py
#   file_relpath : src/leafpress/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LeafPress Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

LEAFPRESS_VERSION: str = get_version("leafpress")

# Config files looked up in the working directory, in order:
LEAFPRESS_TOML_NAME: Final[str] = "leafpress.toml"
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_SECTION: Final[str] = "leafpress"

# Environment variable overriding the internal log level:
LOG_LEVEL_ENV_VAR: Final[str] = "LEAFPRESS_LOG_LEVEL"

MARKDOWN_SUFFIX: Final[str] = ".md"
HTML_EXTENSION: Final[str] = ".html"

# Two same-slug timeline events closer than this are merged (seconds):
COMPACTION_WINDOW_SECONDS: Final[int] = 12 * 60 * 60
DEFAULT_TIMELINE_LIMIT: Final[int] = 100

# Compact date format accepted before general parsing ("2024-01-31 18:30"):
COMPACT_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M"

VALUE_NOT_SET: str = "<not set>"
