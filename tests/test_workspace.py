"""Tests for scratch workspace lifecycle."""

from __future__ import annotations

from pathlib import Path

import pytest

import workspace
from errors import WorkspaceError


def test_reset_creates_absent_directory(tmp_path: Path) -> None:
    """reset on a missing path creates it, parents included."""
    target = tmp_path / 'scratch' / 'repos'

    workspace.reset(str(target))

    assert target.is_dir()


def test_reset_removes_existing_directory(tmp_path: Path) -> None:
    """reset on an existing workspace removes it with its contents."""
    target = tmp_path / 'repos'
    (target / 'leftover' / '.git').mkdir(parents=True)
    (target / 'leftover' / 'README.md').write_text('stale clone')

    workspace.reset(str(target))

    assert not target.exists()


def test_reset_is_idempotent(tmp_path: Path) -> None:
    """Calling reset repeatedly never errors."""
    target = tmp_path / 'repos'

    workspace.reset(str(target))
    workspace.reset(str(target))
    workspace.reset(str(target))

    assert target.is_dir()


def test_reset_rejects_regular_file(tmp_path: Path) -> None:
    """A file at the workspace path is a fatal workspace error."""
    target = tmp_path / 'repos'
    target.write_text('not a directory')

    with pytest.raises(WorkspaceError):
        workspace.reset(str(target))


def test_teardown_removes_and_tolerates_absence(tmp_path: Path) -> None:
    """teardown removes the workspace and accepts an already absent one."""
    target = tmp_path / 'repos'
    (target / 'sample-repo').mkdir(parents=True)

    workspace.teardown(str(target))
    workspace.teardown(str(target))

    assert not target.exists()
