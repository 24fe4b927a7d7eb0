# topmark:header:start
#
#   project      : LeafPress
#   file         : git.py
#   file_relpath : src/leafpress/vcs/git.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read-only git access through the ``git`` command line.

`GitRepository` answers one question: when was a file first and last
committed. `RepositoryHandles` opens at most one repository per root per run,
lazily and under a lock, so concurrent transform workers share the handles.
"""

from __future__ import annotations

import subprocess
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Final

from leafpress.config.logging import get_logger

if TYPE_CHECKING:
    from leafpress.config.logging import LeafpressLogger

logger: LeafpressLogger = get_logger(__name__)

GIT_TIMEOUT_SECONDS: Final[float] = 30.0


class GitError(RuntimeError):
    """A git repository could not be opened or queried."""


def _run_git(root: Path, *args: str) -> str:
    try:
        result = subprocess.run(
            ["git", "-C", str(root), *args],
            capture_output=True,
            text=True,
            check=True,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except FileNotFoundError as exc:
        raise GitError("git executable not found") from exc
    except subprocess.TimeoutExpired as exc:
        raise GitError(f"git {' '.join(args)} timed out in {root}") from exc
    except subprocess.CalledProcessError as exc:
        raise GitError(f"git {' '.join(args)} failed in {root}: {exc.stderr.strip()}") from exc
    return result.stdout


@dataclass(frozen=True)
class CommitRange:
    """First and last commit times of a file (aware, UTC)."""

    first: datetime
    last: datetime


class GitRepository:
    """A git work tree, opened at ``root``."""

    def __init__(self, root: Path, toplevel: Path) -> None:
        self.root: Path = root
        self.toplevel: Path = toplevel

    @classmethod
    def open(cls, root: Path) -> GitRepository:
        """Open the repository whose work tree contains ``root``.

        Raises:
            GitError: If ``root`` is not inside a git work tree or git is unavailable.
        """
        toplevel: str = _run_git(root, "rev-parse", "--show-toplevel").strip()
        logger.debug("Opened git repository %s (root %s)", toplevel, root)
        return cls(root=root, toplevel=Path(toplevel))

    def commit_range(self, path: Path) -> CommitRange | None:
        """Return the first and last commit times touching ``path``.

        Renames are followed. Returns None when the file has no history
        (untracked, or outside the repository).

        Raises:
            GitError: If the ``git log`` invocation fails.
        """
        target: Path = path if path.is_absolute() else (Path.cwd() / path)
        output: str = _run_git(
            self.root, "log", "--follow", "--format=%at", "--", str(target.resolve())
        )
        stamps: list[int] = [int(line) for line in output.split() if line.strip().isdigit()]
        if not stamps:
            return None
        return CommitRange(
            first=datetime.fromtimestamp(min(stamps), tz=timezone.utc),
            last=datetime.fromtimestamp(max(stamps), tz=timezone.utc),
        )

    def __repr__(self) -> str:
        return f"GitRepository(root={str(self.root)!r})"


@dataclass
class RepositoryHandles:
    """Lazily opened repositories keyed by root directory.

    Each root is opened at most once per run. A root that fails to open is
    remembered (and logged once) so later lookups fall through quickly.
    """

    _repos: dict[Path, GitRepository | None] = field(default_factory=lambda: {})
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def get(self, root: Path) -> GitRepository | None:
        """Return the repository for ``root``, opening it on first use.

        Returns:
            GitRepository | None: The handle, or None if ``root`` cannot be opened.
        """
        key: Path = root.resolve()
        # Entries are written once and never replaced, so readers skip the lock.
        if key in self._repos:
            return self._repos[key]
        with self._lock:
            if key in self._repos:
                return self._repos[key]
            try:
                repo: GitRepository | None = GitRepository.open(key)
            except GitError as e:
                logger.warning("Cannot open git repository at %s: %s", key, e)
                repo = None
            self._repos[key] = repo
            return repo

    def __len__(self) -> int:
        return len(self._repos)
