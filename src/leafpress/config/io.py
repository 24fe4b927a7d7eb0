# topmark:header:start
#
#   project      : LeafPress
#   file         : io.py
#   file_relpath : src/leafpress/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for LeafPress configuration.

This module centralizes **pure** helpers for reading and validating TOML used by
LeafPress's configuration layer. Keeping these utilities separate keeps the
model classes small and avoids import cycles.

TOML parsing:
    LeafPress uses `tomlkit` for parsing. `load_toml_dict()` parses on-disk TOML
    and returns plain dicts.

Getters:
    The *checked* getters validate the expected shape and record **warnings** in a
    `DiagnosticLog` (and also log a warning). They are used when parsing config
    files so that user mistakes are surfaced without crashing or changing
    defaulting behavior.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from leafpress.config.keys import Toml
from leafpress.config.logging import get_logger
from leafpress.constants import DEFAULT_TIMELINE_LIMIT

if TYPE_CHECKING:
    from pathlib import Path

    from leafpress.config.logging import LeafpressLogger
    from leafpress.core.diagnostics import DiagnosticLog

TomlTable = dict[str, Any]

logger: LeafpressLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return LeafPress's **runtime defaults** as a Python dict.

    This function performs **no I/O**. Sections/keys align with
    `leafpress.config.keys.Toml`.

    Returns:
        A TOML-table-compatible dict containing the runtime defaults.
    """
    return {
        Toml.SECTION_BUILD: {
            Toml.KEY_CONTENT_DIR: "content",
            Toml.KEY_OUTPUT_DIR: "public",
            Toml.KEY_JOBS: 1,
        },
        Toml.SECTION_DATES: {
            Toml.KEY_PRIORITY: ["frontmatter", "git", "filesystem"],
            Toml.KEY_CONTENT_REPOSITORY: "content",
        },
        Toml.SECTION_TIMELINE: {
            Toml.KEY_LIMIT: DEFAULT_TIMELINE_LIMIT,
            Toml.KEY_DISALLOWED_SLUGS: [],
            Toml.KEY_DISALLOWED_TAGS: [],
        },
        Toml.SECTION_TRANSCLUDE: {
            Toml.KEY_COMMON_DIRECTORIES: [],
        },
        Toml.SECTION_SITE: {
            Toml.KEY_TITLE: "LeafPress",
            Toml.KEY_FOOTER_LINKS: {},
        },
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (``leafpress.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table stored under ``key``, or an empty dict.

    Args:
        table (TomlTable): Table to query.
        key (str): Section name.

    Returns:
        TomlTable: The sub-table (never ``None``).
    """
    value: Any | None = table.get(key)
    if isinstance(value, dict):
        return cast("TomlTable", value)
    if value is not None:
        logger.debug("Section %r is not a table: %r", key, value)
    return {}


def get_string_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> str | None:
    """Return an optional string value, warning when present but not `str`."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value

    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected string in %s, got %s: %r", loc, type(value).__name__, value)
    diagnostics.add_warning(f"Expected string in {loc}, got {type(value).__name__}: {value!r}")
    return None


def get_int_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> int | None:
    """Return an optional int value, warning when present but not `int`.

    Notes:
        - Missing key / None -> None
        - `bool` is rejected (since `bool` is a subclass of `int`).
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"

    # Note: bool is a subclass of int; exclude it.
    if isinstance(value, bool):
        logger.warning("Expected int in %s, got bool: %r", loc, value)
        diagnostics.add_warning(f"Expected int in {loc}, got bool: {value!r}")
        return None

    if isinstance(value, int):
        return value

    logger.warning("Expected int in %s, got %s: %r", loc, type(value).__name__, value)
    diagnostics.add_warning(f"Expected int in {loc}, got {type(value).__name__}: {value!r}")
    return None


def get_string_list_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> list[str] | None:
    """Extract a list of strings, recording a warning when the type is incorrect.

    Behavior:
        - If the key is missing, returns None.
        - If the value is not a list, warns and returns None.
        - Non-string items are dropped, each with a warning and a diagnostic.

    Args:
        table (TomlTable): TOML table to query.
        key (str): Key to extract.
        where (str): TOML location prefix (e.g. "[timeline]").
        diagnostics (DiagnosticLog): DiagnosticLog to record warnings.

    Returns:
        list[str] | None: Filtered list containing only string entries, or None.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"

    if not isinstance(value, list):
        logger.warning("Expected list in %s, got %s: %r", loc, type(value).__name__, value)
        diagnostics.add_warning(f"Expected list in {loc}, got {type(value).__name__}: {value!r}")
        return None

    result: list[str] = []
    for item in cast("list[Any]", value):
        if isinstance(item, str):
            result.append(item)
        else:
            logger.warning("Ignoring non-string entry in %s: %r", loc, item)
            diagnostics.add_warning(f"Ignoring non-string entry in {loc}: {item!r}")
    return result


def get_string_map_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> dict[str, str] | None:
    """Extract a ``{str: str}`` table, dropping non-string values with a warning."""
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"

    if not isinstance(value, dict):
        logger.warning("Expected table in %s, got %s: %r", loc, type(value).__name__, value)
        diagnostics.add_warning(f"Expected table in {loc}, got {type(value).__name__}: {value!r}")
        return None

    result: dict[str, str] = {}
    for k, v in cast("dict[str, Any]", value).items():
        if isinstance(v, str):
            result[k] = v
        else:
            logger.warning("Ignoring non-string value in %s.%s: %r", loc, k, v)
            diagnostics.add_warning(f"Ignoring non-string value in {loc}.{k}: {v!r}")
    return result
