#!/usr/bin/env python3
"""Round-robin pairing of created repositories with local clones."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Sequence

from errors import PairingError


@dataclass(frozen=True)
class RepoPair:
    """One push unit: a clone directory and the created repo it goes to."""
    created_repo: str
    cloned_repo: str

    def __str__(self) -> str:
        return f"{self.cloned_repo} -> {self.created_repo}"


def pair_repos(created: Sequence[str], cloned: Sequence[str]) -> List[RepoPair]:
    """Pair ``created[i]`` with ``cloned[i % len(cloned)]``.

    There is exactly one pair per created repository; clones are reused
    cyclically when there are fewer clones than created repos.
    """
    if not cloned:
        raise PairingError(
            f"cannot pair {len(created)} created repositories: no clones succeeded"
        )
    return [
        RepoPair(created_repo=repo, cloned_repo=cloned[i % len(cloned)])
        for i, repo in enumerate(created)
    ]


def list_clone_dirs(path: str) -> List[str]:
    """Immediate subdirectories of the workspace, sorted; files are ignored."""
    if not os.path.isdir(path):
        return []
    with os.scandir(path) as entries:
        return sorted(
            entry.name for entry in entries if entry.is_dir(follow_symlinks=False)
        )
