# topmark:header:start
#
#   project      : LeafPress
#   file         : test_build_command.py
#   file_relpath : tests/cli/test_build_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for the `build` and `timeline` commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from leafpress.core.exit_codes import ExitCode
from tests.cli.conftest import assert_FILE_NOT_FOUND, assert_SUCCESS, run_cli_in
from tests.conftest import mark_cli, write_note

if TYPE_CHECKING:
    from pathlib import Path

NOTE = """---
title: First Note
created: 2024-01-01 10:00
modified: 2024-02-01 10:00
---
Hello.
"""

CONFIG = """[dates]
priority = ["frontmatter", "filesystem"]

[site]
title = "Test Garden"
"""


@pytest.fixture
def project(isolation: Path) -> Path:
    write_note(isolation, "leafpress.toml", CONFIG)
    write_note(isolation, "content/notes/first.md", NOTE)
    write_note(isolation, "content/second.md", "No front matter.\n")
    return isolation


@mark_cli
def test_build_writes_site(project: Path) -> None:
    result = run_cli_in(project, ["--no-color", "build"])

    assert_SUCCESS(result)
    public: Path = project / "public"
    for rel in ("notes/first.html", "second.html", "timeline/index.html", "recent/index.html"):
        assert (public / rel).is_file(), rel
    assert "Built 4 page(s) from 2 document(s)" in result.output
    page: str = (public / "notes/first.html").read_text(encoding="utf-8")
    assert "<title>First Note | Test Garden</title>" in page


@mark_cli
def test_build_dry_run_and_output_dir(project: Path) -> None:
    dry = run_cli_in(project, ["--no-color", "build", "--dry-run"])
    assert_SUCCESS(dry)
    assert "Rendered 4 page(s)" in dry.output
    assert not (project / "public").exists()

    result = run_cli_in(project, ["--no-color", "-q", "build", "-o", "site", "-j", "2"])
    assert_SUCCESS(result)
    assert (project / "site" / "timeline" / "index.html").is_file()
    assert "Built" not in result.output


@mark_cli
def test_build_reports_invalid_dates(project: Path) -> None:
    """Invalid dates are recoverable: reported as diagnostics, exit code stays 0."""
    write_note(project, "content/bad.md", "---\ncreated: someday\n---\nText\n")

    result = run_cli_in(project, ["--no-color", "build"])

    assert_SUCCESS(result)
    assert "[warning] Invalid created date 'someday'" in result.output


@mark_cli
def test_build_missing_content_dir(project: Path) -> None:
    result = run_cli_in(project, ["--no-color", "build", "--content-dir", "nowhere"])
    assert_FILE_NOT_FOUND(result)


@mark_cli
def test_build_invalid_config(project: Path) -> None:
    write_note(project, "leafpress.toml", '[dates]\npriority = ["calendar"]\n')
    result = run_cli_in(project, ["--no-color", "build"])
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output


@mark_cli
def test_build_missing_config_file(project: Path) -> None:
    result = run_cli_in(project, ["--no-color", "build", "--config", "missing.toml"])
    assert_FILE_NOT_FOUND(result)


@mark_cli
def test_timeline_command_lists_events(project: Path) -> None:
    result = run_cli_in(project, ["--no-color", "timeline"])

    assert_SUCCESS(result)
    lines = [line for line in result.output.splitlines() if "First Note" in line]
    assert len(lines) == 2
    assert "Last modified" in lines[0]
    assert lines[0].startswith("2024-02-01 10:00")
    assert "(notes/first)" in lines[0]


@mark_cli
def test_timeline_recent_and_limit(project: Path) -> None:
    result = run_cli_in(project, ["--no-color", "timeline", "--recent", "--limit", "1"])

    assert_SUCCESS(result)
    assert "Last modified" not in result.output
    assert len([line for line in result.output.splitlines() if "Created" in line]) == 1


@mark_cli
def test_timeline_empty(isolation: Path) -> None:
    result = run_cli_in(isolation, ["--no-color", "timeline"])
    assert_SUCCESS(result)
    assert "No events found" in result.output
