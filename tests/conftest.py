# topmark:header:start
#
#   project      : LeafPress
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the LeafPress test suite.

This file sets up global fixtures, typed wrappers around pytest decorators and
small factories for documents, configurations and pipeline contexts.

Notes:
    Tests should respect the immutable/mutable configuration split: build
    configs with `leafpress.config.config_from_mapping` (or a `MutableConfig`
    that is then frozen). Do **not** mutate a frozen `Config`; call
    `Config.thaw()`, edit, then `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from leafpress.config import config_from_mapping, logging
from leafpress.content.document import Document
from leafpress.content.markdown import parse_markdown
from leafpress.pipeline.context import PipelineContext

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from leafpress.config import Config
    from leafpress.content.document import CorpusEntry

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_leafpress_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure LeafPress's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("LEAFPRESS_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for the whole test session.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test in an isolated project directory with an empty ``content/`` folder.

    Returns:
        Path: The project directory (also the process working directory).
    """
    cwd: Path = tmp_path / "proj"
    (cwd / "content").mkdir(parents=True)
    monkeypatch.chdir(cwd)
    return cwd


def make_config(working_dir: Path, **sections: Mapping[str, Any]) -> Config:
    """Return a frozen `Config` built from defaults plus TOML-shaped sections.

    Example:
        ``make_config(tmp_path, timeline={"limit": 5})``
    """
    return config_from_mapping(dict(sections), working_dir=working_dir)


def make_document(
    slug: str,
    body: str = "",
    *,
    frontmatter: dict[str, Any] | None = None,
    file_path: Path | None = None,
) -> Document:
    """Return an untransformed `Document` for ``slug``."""
    return Document(
        slug=slug,
        file_path=file_path if file_path is not None else Path("content") / f"{slug}.md",
        tree=parse_markdown(body),
        raw_text=body,
        frontmatter=dict(frontmatter or {}),
    )


def make_context(config: Config, documents: Iterable[Document] = ()) -> PipelineContext:
    """Return a `PipelineContext` whose corpus holds ``documents`` in order."""
    entries: list[CorpusEntry] = [(d.file_path.as_posix(), {"data": d}) for d in documents]
    return PipelineContext.create(config, entries)


def write_note(root: Path, relative: str, text: str) -> Path:
    """Write ``text`` to ``root / relative`` (parents created) and return the path."""
    path: Path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
