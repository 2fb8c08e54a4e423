#!/usr/bin/env python3
"""Configuration dataclass for repo-seeder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_REPO_COUNT = 10
DEFAULT_WORKSPACE_DIR = "/tmp/repo-seeder/repos"
DEFAULT_PUSH_USERNAME = "ghe-admin"
DEFAULT_DESCRIPTION = "This is a migration test repo."


@dataclass(frozen=True)
class Config:
    """Validated run configuration, built once and shared read-only."""
    api_url: str
    web_endpoint: str
    token: str = field(repr=False)
    org: str
    repo_urls: Tuple[str, ...]
    repo_count: int = DEFAULT_REPO_COUNT
    workspace_dir: str = DEFAULT_WORKSPACE_DIR
    max_workers: Optional[int] = None
    git_timeout_s: Optional[float] = None
    push_username: str = DEFAULT_PUSH_USERNAME
    description: str = DEFAULT_DESCRIPTION
