# topmark:header:start
#
#   project      : LeafPress
#   file         : model.py
#   file_relpath : src/leafpress/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable, runtime snapshot held by the `PipelineContext`.
    - `MutableConfig`: a mutable builder used during discovery/merge; it
      can be frozen into `Config` and thawed back for edits.

Immutability:
    - `Config` stores tuples/frozensets and is ``frozen=True`` to prevent
      accidental mutation during a run. Use `Config.thaw` → edit →
      `MutableConfig.freeze` for safe updates.

Layering (lowest to highest precedence):
    1. Runtime defaults (`load_defaults_dict`).
    2. ``pyproject.toml`` ``[tool.leafpress]`` in the working directory.
    3. ``leafpress.toml`` in the working directory.
    4. Explicit ``--config`` files, in order.
    5. CLI arguments (`MutableConfig.apply_cli_args`).

Path semantics:
    - ``content_dir`` and ``output_dir`` are interpreted relative to the working
      directory unless absolute.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from leafpress.config.io import (
    get_int_value_or_none_checked,
    get_string_list_value_or_none_checked,
    get_string_map_or_none_checked,
    get_string_value_or_none_checked,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from leafpress.config.keys import Cli, Toml
from leafpress.config.logging import get_logger
from leafpress.config.types import ConfigError, DateSource
from leafpress.constants import LEAFPRESS_TOML_NAME, PYPROJECT_TOML_NAME, PYPROJECT_TOOL_SECTION
from leafpress.core.diagnostics import Diagnostic, DiagnosticLog

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from leafpress.config.io import TomlTable
    from leafpress.config.logging import LeafpressLogger
    from leafpress.config.types import ArgsLike

logger: LeafpressLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for LeafPress.

    Attributes:
        timestamp (str): ISO-formatted timestamp when the configuration was built.
        verbosity_level (int | None): Program-output verbosity (a logging level), or
            None to inherit.
        config_files (tuple[Path | str, ...]): Config sources that contributed.
        working_dir (Path): Directory the run is anchored to (git lookups, relative paths).
        content_dir (Path): Directory holding the Markdown sources.
        output_dir (Path): Directory receiving rendered artifacts.
        jobs (int): Number of documents transformed concurrently.
        date_priority (tuple[DateSource, ...]): Ordered date sources.
        content_repository (str): Sub-tree of the working directory resolved against
            its own git repository.
        timeline_limit (int): Maximum number of events per timeline page.
        disallowed_slugs (frozenset[str]): Slugs excluded from timelines.
        disallowed_tags (frozenset[str]): Tags whose documents are excluded from timelines.
        common_directories (tuple[str, ...]): Search path for transclusion lookups by name.
        site_title (str): Site title shown in page heads and the page title component.
        footer_links (tuple[tuple[str, str], ...]): ``(label, url)`` pairs for the footer.
        diagnostics (tuple[Diagnostic, ...]): Warnings collected while loading config.
    """

    timestamp: str
    verbosity_level: int | None
    config_files: tuple[Path | str, ...]
    working_dir: Path
    content_dir: Path
    output_dir: Path
    jobs: int
    date_priority: tuple[DateSource, ...]
    content_repository: str
    timeline_limit: int
    disallowed_slugs: frozenset[str]
    disallowed_tags: frozenset[str]
    common_directories: tuple[str, ...]
    site_title: str
    footer_links: tuple[tuple[str, str], ...]
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def content_path(self) -> Path:
        """Absolute path of the content directory."""
        return _anchor(self.working_dir, self.content_dir)

    @property
    def output_path(self) -> Path:
        """Absolute path of the output directory."""
        return _anchor(self.working_dir, self.output_dir)

    @property
    def content_repository_path(self) -> Path:
        """Absolute path of the sub-tree that has its own git repository."""
        return _anchor(self.working_dir, Path(self.content_repository))

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config.

        Returns:
            MutableConfig: A mutable configuration object with the same field values.
        """
        return MutableConfig(
            timestamp=self.timestamp,
            verbosity_level=self.verbosity_level,
            config_files=list(self.config_files),
            working_dir=self.working_dir,
            content_dir=self.content_dir,
            output_dir=self.output_dir,
            jobs=self.jobs,
            date_priority=[s.value for s in self.date_priority],
            content_repository=self.content_repository,
            timeline_limit=self.timeline_limit,
            disallowed_slugs=sorted(self.disallowed_slugs),
            disallowed_tags=sorted(self.disallowed_tags),
            common_directories=list(self.common_directories),
            site_title=self.site_title,
            footer_links=dict(self.footer_links),
            diagnostics=DiagnosticLog(items=list(self.diagnostics)),
        )


def _anchor(base: Path, path: Path) -> Path:
    return path if path.is_absolute() else (base / path)


# ------------------ Mutable builder ------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Fields left as ``None`` are "unset" and are inherited from lower layers in
    `merge_with`. `freeze` validates and fills the remaining gaps.
    """

    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    verbosity_level: int | None = None
    config_files: list[Path | str] = field(default_factory=lambda: [])
    working_dir: Path | None = None
    content_dir: Path | None = None
    output_dir: Path | None = None
    jobs: int | None = None
    date_priority: list[str] | None = None
    content_repository: str | None = None
    timeline_limit: int | None = None
    disallowed_slugs: list[str] | None = None
    disallowed_tags: list[str] | None = None
    common_directories: list[str] | None = None
    site_title: str | None = None
    footer_links: dict[str, str] | None = None
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ------------------------------- Freezing -------------------------------
    def freeze(self) -> Config:
        """Validate this draft and return an immutable `Config`.

        Returns:
            Config: The frozen runtime configuration.

        Raises:
            ConfigError: If the date priority names an unknown source, or the
                timeline limit or job count is not a positive integer.
        """
        defaults: MutableConfig = MutableConfig.from_defaults() if self._has_gaps() else self
        merged: MutableConfig = defaults.merge_with(self) if defaults is not self else self

        priority: tuple[DateSource, ...] = tuple(
            DateSource.parse(name) for name in (merged.date_priority or [])
        )
        limit: int = merged.timeline_limit if merged.timeline_limit is not None else 0
        if limit <= 0:
            raise ConfigError(f"Timeline limit must be a positive integer (got {limit})")
        jobs: int = merged.jobs if merged.jobs is not None else 0
        if jobs <= 0:
            raise ConfigError(f"Job count must be a positive integer (got {jobs})")

        return Config(
            timestamp=merged.timestamp,
            verbosity_level=merged.verbosity_level,
            config_files=tuple(merged.config_files),
            working_dir=merged.working_dir or Path.cwd(),
            content_dir=merged.content_dir or Path("content"),
            output_dir=merged.output_dir or Path("public"),
            jobs=jobs,
            date_priority=priority,
            content_repository=merged.content_repository or "content",
            timeline_limit=limit,
            disallowed_slugs=frozenset(merged.disallowed_slugs or ()),
            disallowed_tags=frozenset(merged.disallowed_tags or ()),
            common_directories=tuple(merged.common_directories or ()),
            site_title=merged.site_title or "",
            footer_links=tuple((merged.footer_links or {}).items()),
            diagnostics=tuple(merged.diagnostics),
        )

    def _has_gaps(self) -> bool:
        return any(
            v is None
            for v in (
                self.content_dir,
                self.output_dir,
                self.jobs,
                self.date_priority,
                self.content_repository,
                self.timeline_limit,
                self.site_title,
            )
        )

    # ------------------------------- Loading -------------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft populated with LeafPress's runtime defaults.

        Returns:
            MutableConfig: A `MutableConfig` instance populated with default values.
        """
        return cls.from_toml_dict(load_defaults_dict(), config_file=None)

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``leafpress.toml`` and ``pyproject.toml`` files, extracting the
        ``[tool.leafpress]`` section from the latter.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The draft if successful; None if a ``pyproject.toml``
                carries no ``[tool.leafpress]`` section.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)

        toml_data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            tool_section: TomlTable = get_table_value(
                get_table_value(toml_data, "tool"), PYPROJECT_TOOL_SECTION
            )
            if not tool_section:
                logger.debug("[tool.%s] section missing in %s", PYPROJECT_TOOL_SECTION, path)
                return None
            toml_data = tool_section

        draft: MutableConfig = cls.from_toml_dict(toml_data, config_file=path)
        draft.config_files = [path]
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        *,
        config_file: Path | None,
    ) -> MutableConfig:
        """Build a draft from a parsed TOML mapping.

        Unknown keys are ignored. Values of the wrong shape are dropped with a
        warning diagnostic so lower layers (usually the defaults) stay in effect.

        Args:
            data (TomlTable): Parsed TOML (top-level table).
            config_file (Path | None): Source file, used for path anchoring and
                diagnostics. ``None`` for in-memory defaults.

        Returns:
            MutableConfig: The parsed draft.
        """
        draft = cls()
        diags: DiagnosticLog = draft.diagnostics

        build: TomlTable = get_table_value(data, Toml.SECTION_BUILD)
        where = f"[{Toml.SECTION_BUILD}]"
        content_dir = get_string_value_or_none_checked(
            build, Toml.KEY_CONTENT_DIR, where=where, diagnostics=diags
        )
        output_dir = get_string_value_or_none_checked(
            build, Toml.KEY_OUTPUT_DIR, where=where, diagnostics=diags
        )
        base_dir: Path | None = config_file.parent if config_file is not None else None
        draft.content_dir = _config_path(content_dir, base_dir)
        draft.output_dir = _config_path(output_dir, base_dir)
        draft.jobs = get_int_value_or_none_checked(
            build, Toml.KEY_JOBS, where=where, diagnostics=diags
        )

        dates: TomlTable = get_table_value(data, Toml.SECTION_DATES)
        where = f"[{Toml.SECTION_DATES}]"
        draft.date_priority = get_string_list_value_or_none_checked(
            dates, Toml.KEY_PRIORITY, where=where, diagnostics=diags
        )
        draft.content_repository = get_string_value_or_none_checked(
            dates, Toml.KEY_CONTENT_REPOSITORY, where=where, diagnostics=diags
        )

        timeline: TomlTable = get_table_value(data, Toml.SECTION_TIMELINE)
        where = f"[{Toml.SECTION_TIMELINE}]"
        draft.timeline_limit = get_int_value_or_none_checked(
            timeline, Toml.KEY_LIMIT, where=where, diagnostics=diags
        )
        draft.disallowed_slugs = get_string_list_value_or_none_checked(
            timeline, Toml.KEY_DISALLOWED_SLUGS, where=where, diagnostics=diags
        )
        draft.disallowed_tags = get_string_list_value_or_none_checked(
            timeline, Toml.KEY_DISALLOWED_TAGS, where=where, diagnostics=diags
        )

        transclude: TomlTable = get_table_value(data, Toml.SECTION_TRANSCLUDE)
        draft.common_directories = get_string_list_value_or_none_checked(
            transclude,
            Toml.KEY_COMMON_DIRECTORIES,
            where=f"[{Toml.SECTION_TRANSCLUDE}]",
            diagnostics=diags,
        )

        site: TomlTable = get_table_value(data, Toml.SECTION_SITE)
        where = f"[{Toml.SECTION_SITE}]"
        draft.site_title = get_string_value_or_none_checked(
            site, Toml.KEY_TITLE, where=where, diagnostics=diags
        )
        draft.footer_links = get_string_map_or_none_checked(
            site, Toml.KEY_FOOTER_LINKS, where=where, diagnostics=diags
        )

        return draft

    @classmethod
    def discover_config_files(cls, working_dir: Path) -> list[Path]:
        """Return the config files present in ``working_dir``, lowest precedence first."""
        candidates: list[Path] = [
            working_dir / PYPROJECT_TOML_NAME,
            working_dir / LEAFPRESS_TOML_NAME,
        ]
        return [p for p in candidates if p.is_file()]

    @classmethod
    def load_merged(
        cls,
        *,
        working_dir: Path,
        extra_config_files: Iterable[Path] | None = None,
        use_discovery: bool = True,
    ) -> MutableConfig:
        """Return defaults merged with discovered and explicit config files.

        Args:
            working_dir (Path): Directory searched for ``pyproject.toml`` / ``leafpress.toml``.
            extra_config_files (Iterable[Path] | None): Explicit files, applied last.
            use_discovery (bool): If False, skip files found in ``working_dir``.

        Returns:
            MutableConfig: The merged draft (not yet frozen).

        Raises:
            FileNotFoundError: If an explicit config file does not exist.
        """
        draft: MutableConfig = cls.from_defaults()
        draft.working_dir = working_dir

        discovered: list[Path] = cls.discover_config_files(working_dir) if use_discovery else []
        for path in discovered:
            mc = cls.from_toml_file(path)
            if mc is not None:
                draft = draft.merge_with(mc)

        for extra in extra_config_files or ():  # explicit files override discovered ones
            if not extra.is_file():
                raise FileNotFoundError(f"Config file not found: {extra}")
            mc = cls.from_toml_file(extra)
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        This is a last-wins merge; ``None`` in ``other`` means "inherit".

        Args:
            other (MutableConfig): The config whose values override those of this draft.

        Returns:
            MutableConfig: A new mutable configuration representing the merged result.
        """

        def pick(mine: Any, theirs: Any) -> Any:
            return theirs if theirs is not None else mine

        diagnostics = DiagnosticLog(items=list(self.diagnostics))
        diagnostics.extend(other.diagnostics)

        return MutableConfig(
            timestamp=self.timestamp,
            verbosity_level=pick(self.verbosity_level, other.verbosity_level),
            config_files=self.config_files + other.config_files,
            working_dir=pick(self.working_dir, other.working_dir),
            content_dir=pick(self.content_dir, other.content_dir),
            output_dir=pick(self.output_dir, other.output_dir),
            jobs=pick(self.jobs, other.jobs),
            date_priority=pick(self.date_priority, other.date_priority),
            content_repository=pick(self.content_repository, other.content_repository),
            timeline_limit=pick(self.timeline_limit, other.timeline_limit),
            disallowed_slugs=pick(self.disallowed_slugs, other.disallowed_slugs),
            disallowed_tags=pick(self.disallowed_tags, other.disallowed_tags),
            common_directories=pick(self.common_directories, other.common_directories),
            site_title=pick(self.site_title, other.site_title),
            footer_links=pick(self.footer_links, other.footer_links),
            diagnostics=diagnostics,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply overrides from a parsed arguments mapping (CLI or API) in place.

        Only keys that are present and not ``None`` override the draft. CLI paths are
        interpreted relative to the invocation working directory.

        Args:
            args (ArgsLike): Parsed arguments mapping, keys from `leafpress.config.keys.Cli`.

        Returns:
            MutableConfig: ``self``, for chaining.
        """
        verbosity: int | None = args.get(Cli.VERBOSITY)
        if verbosity is not None:
            self.verbosity_level = verbosity
        working_dir: str | Path | None = args.get(Cli.WORKING_DIR)
        if working_dir is not None:
            self.working_dir = Path(working_dir)
        content_dir: str | Path | None = args.get(Cli.CONTENT_DIR)
        if content_dir is not None:
            self.content_dir = Path(content_dir).resolve()
        output_dir: str | Path | None = args.get(Cli.OUTPUT_DIR)
        if output_dir is not None:
            self.output_dir = Path(output_dir).resolve()
        jobs: int | None = args.get(Cli.JOBS)
        if jobs is not None:
            self.jobs = jobs
        priority: Iterable[str] | None = args.get(Cli.PRIORITY)
        if priority:
            self.date_priority = list(priority)
        limit: int | None = args.get(Cli.LIMIT)
        if limit is not None:
            self.timeline_limit = limit
        return self


def _config_path(raw: str | None, base_dir: Path | None) -> Path | None:
    if raw is None:
        return None
    path = Path(raw)
    if base_dir is not None and not path.is_absolute():
        return base_dir / path
    return path


def config_from_mapping(values: Mapping[str, Any], *, working_dir: Path) -> Config:
    """Build a frozen `Config` from defaults plus a TOML-shaped mapping.

    Convenience for API callers and tests that do not read config files.

    Args:
        values (Mapping[str, Any]): TOML-shaped overrides (``{"timeline": {"limit": 5}}``).
        working_dir (Path): Working directory for the run.

    Returns:
        Config: The frozen configuration.
    """
    draft: MutableConfig = MutableConfig.from_defaults()
    draft.working_dir = working_dir
    draft = draft.merge_with(MutableConfig.from_toml_dict(dict(values), config_file=None))
    return draft.freeze()
