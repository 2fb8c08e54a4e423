"""Tests running the clone and branch commands against real local repositories."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from config import Config
from repo_cloner import RepoCloner
from repo_pusher import RepoPusher

pytestmark = pytest.mark.skipif(shutil.which('git') is None, reason='git not installed')


def _git(*args: str, cwd: Path) -> None:
    subprocess.run(['git', *args], cwd=cwd, check=True, capture_output=True, text=True)


def _make_source_repo(path: Path) -> None:
    path.mkdir()
    _git('init', cwd=path)
    _git('symbolic-ref', 'HEAD', 'refs/heads/trunk', cwd=path)
    (path / 'README.md').write_text('seed content\n')
    _git('add', 'README.md', cwd=path)
    _git(
        '-c', 'user.name=Repo Seeder',
        '-c', 'user.email=seeder@example.com',
        'commit', '-m', 'initial commit',
        cwd=path,
    )


def _make_config(tmp_path: Path, source_url: str) -> Config:
    return Config(
        api_url='https://api.github.com',
        web_endpoint='github.com',
        token='token-value',
        org='example-org',
        repo_urls=(source_url,),
        workspace_dir=str(tmp_path / 'repos'),
    )


def test_clone_and_read_branch_of_local_repository(tmp_path: Path) -> None:
    """A file:// clone lands under its name with the source branch checked out."""
    source = tmp_path / 'src'
    _make_source_repo(source)
    cfg = _make_config(tmp_path, source.as_uri())

    dir_name = RepoCloner(cfg).clone(source.as_uri())

    assert dir_name == 'src'
    clone_dir = tmp_path / 'repos' / 'src'
    assert (clone_dir / 'README.md').read_text() == 'seed content\n'
    assert RepoPusher(cfg).current_branch(str(clone_dir)) == 'trunk'
