# topmark:header:start
#
#   project      : LeafPress
#   file         : test_git.py
#   file_relpath : tests/vcs/test_git.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for git-backed commit dates and repository handles.

These tests create throw-away repositories and are skipped when the ``git``
executable is not available.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import threading
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import pytest

from leafpress.config.types import DateSource
from leafpress.pipeline.transformers.dates import resolve_dates
from leafpress.vcs.git import GitError, GitRepository, RepositoryHandles
from tests.conftest import make_config, make_context, make_document, write_note

if TYPE_CHECKING:
    from pathlib import Path

pytestmark: pytest.MarkDecorator = pytest.mark.skipif(
    shutil.which("git") is None, reason="git executable not available"
)

FIRST = 1_700_000_000
SECOND = 1_700_500_000


def _git(root: Path, *args: str, when: int | None = None) -> None:
    env: dict[str, str] = dict(os.environ)
    if when is not None:
        env["GIT_AUTHOR_DATE"] = f"@{when} +0000"
        env["GIT_COMMITTER_DATE"] = f"@{when} +0000"
    identity: list[str] = ["-c", "user.name=Test", "-c", "user.email=test@example.org"]
    subprocess.run(
        ["git", "-C", str(root), *identity, *args],
        check=True,
        capture_output=True,
        env=env,
    )


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """A repository with ``content/a.md`` committed twice and ``content/new.md`` untracked."""
    root: Path = tmp_path / "site"
    root.mkdir()
    _git(root, "init", "-q")
    write_note(root, "content/a.md", "---\ntitle: A\n---\nfirst\n")
    _git(root, "add", ".")
    _git(root, "commit", "-q", "-m", "first", when=FIRST)
    write_note(root, "content/a.md", "---\ntitle: A\n---\nsecond\n")
    _git(root, "commit", "-q", "-am", "second", when=SECOND)
    write_note(root, "content/new.md", "untracked\n")
    return root


def test_commit_range(repo: Path) -> None:
    git_repo = GitRepository.open(repo)

    commits = git_repo.commit_range(repo / "content" / "a.md")

    assert commits is not None
    assert commits.first == datetime.fromtimestamp(FIRST, tz=timezone.utc)
    assert commits.last == datetime.fromtimestamp(SECOND, tz=timezone.utc)


def test_untracked_file_has_no_history(repo: Path) -> None:
    assert GitRepository.open(repo).commit_range(repo / "content" / "new.md") is None


def test_open_outside_repository_fails(tmp_path: Path) -> None:
    plain: Path = tmp_path / "plain"
    plain.mkdir()
    if subprocess.run(
        ["git", "-C", str(plain), "rev-parse"], capture_output=True, check=False
    ).returncode == 0:
        pytest.skip("temporary directory is inside a git work tree")
    with pytest.raises(GitError):
        GitRepository.open(plain)


def test_handles_open_each_root_once(repo: Path) -> None:
    handles = RepositoryHandles()
    results: list[GitRepository | None] = []

    def _get() -> None:
        results.append(handles.get(repo))

    threads = [threading.Thread(target=_get) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(handles) == 1
    assert results[0] is not None
    assert all(r is results[0] for r in results)


def test_git_dates_resolve_from_history(repo: Path) -> None:
    """Git supplies created/modified; the untracked note falls through to the filesystem."""
    config = make_config(repo, dates={"priority": ["git", "filesystem"]})
    tracked = make_document("a", file_path=repo / "content" / "a.md")
    untracked = make_document("new", file_path=repo / "content" / "new.md")
    ctx = make_context(config, [tracked, untracked])

    dates = resolve_dates(tracked, [DateSource.GIT, DateSource.FILESYSTEM], ctx)
    resolve_dates(untracked, [DateSource.GIT, DateSource.FILESYSTEM], ctx)

    assert dates.created == datetime.fromtimestamp(FIRST, tz=timezone.utc)
    assert dates.modified == datetime.fromtimestamp(SECOND, tz=timezone.utc)
    assert tracked.metadata.date_sources["created"] == "git"
    assert untracked.metadata.date_sources["created"] == "filesystem"


def test_filesystem_outranks_git_when_listed_first(repo: Path) -> None:
    """With ``[frontmatter, filesystem, git]`` and no front matter dates, the filesystem wins."""
    path: Path = repo / "content" / "a.md"
    mtime = 1_650_000_000
    os.utime(path, (mtime, mtime))
    config = make_config(repo, dates={"priority": ["frontmatter", "filesystem", "git"]})
    doc = make_document("a", file_path=path)
    ctx = make_context(config, [doc])

    dates = resolve_dates(
        doc, [DateSource.FRONTMATTER, DateSource.FILESYSTEM, DateSource.GIT], ctx
    )

    assert dates.modified == datetime.fromtimestamp(mtime, tz=timezone.utc)
    assert doc.metadata.date_sources["created"] == "filesystem"
    assert doc.metadata.date_sources["modified"] == "filesystem"


INNER_FIRST = 1_710_000_000
INNER_SECOND = 1_710_300_000


@pytest.fixture
def nested(tmp_path: Path) -> Path:
    """An outer repository holding ``notes/outer.md`` and a separate repository in ``content/``."""
    root: Path = tmp_path / "site"
    root.mkdir()
    _git(root, "init", "-q")
    write_note(root, "notes/outer.md", "outer\n")
    _git(root, "add", "notes/outer.md")
    _git(root, "commit", "-q", "-m", "outer", when=FIRST)

    content: Path = root / "content"
    content.mkdir()
    _git(content, "init", "-q")
    write_note(content, "inner.md", "first\n")
    _git(content, "add", "inner.md")
    _git(content, "commit", "-q", "-m", "first", when=INNER_FIRST)
    write_note(content, "inner.md", "second\n")
    _git(content, "commit", "-q", "-am", "second", when=INNER_SECOND)
    return root


def test_content_tree_uses_its_own_repository(nested: Path) -> None:
    config = make_config(nested, dates={"priority": ["git"], "content_repository": "content"})
    inner = make_document("inner", file_path=nested / "content" / "inner.md")
    outer = make_document("outer", file_path=nested / "notes" / "outer.md")
    ctx = make_context(config, [inner, outer])

    inner_dates = resolve_dates(inner, [DateSource.GIT], ctx)
    outer_dates = resolve_dates(outer, [DateSource.GIT], ctx)

    assert inner_dates.created == datetime.fromtimestamp(INNER_FIRST, tz=timezone.utc)
    assert inner_dates.modified == datetime.fromtimestamp(INNER_SECOND, tz=timezone.utc)
    assert outer_dates.created == datetime.fromtimestamp(FIRST, tz=timezone.utc)
    assert outer_dates.modified == datetime.fromtimestamp(FIRST, tz=timezone.utc)
    assert inner.metadata.date_sources["created"] == "git"
    assert outer.metadata.date_sources["created"] == "git"
    assert len(ctx.repositories) == 2
