#!/usr/bin/env python3
"""Utility functions for repo-seeder."""

import os
import random
import subprocess
from typing import List, Optional
from urllib.parse import urlparse

_FIRST_WORDS = (
    "amber", "ancient", "autumn", "bitter", "bold", "brave", "brisk", "calm",
    "clever", "cold", "crimson", "dawn", "dusty", "eager", "early", "fancy",
    "fierce", "frosty", "gentle", "golden", "grand", "hidden", "hollow",
    "humble", "icy", "jolly", "late", "lively", "lucky", "misty", "noble",
    "odd", "pale", "patient", "polished", "proud", "quiet", "rapid", "restless",
    "rough", "rustic", "shy", "silent", "silver", "sleepy", "smooth", "solid",
    "spring", "steady", "still", "summer", "swift", "tidy", "vast", "wandering",
    "warm", "wild", "winter", "wise", "young",
)

_SECOND_WORDS = (
    "anchor", "apple", "arrow", "badger", "basin", "beacon", "birch", "boulder",
    "breeze", "brook", "canyon", "cedar", "cloud", "comet", "coral", "crane",
    "creek", "dune", "ember", "falcon", "fern", "field", "flame", "forest",
    "fox", "glacier", "grove", "harbor", "hawk", "heron", "hill", "island",
    "lake", "lantern", "leaf", "meadow", "moon", "moss", "mountain", "oak",
    "otter", "pebble", "pine", "planet", "pond", "quartz", "raven", "reef",
    "ridge", "river", "shadow", "sparrow", "star", "stone", "storm", "sun",
    "thunder", "valley", "willow", "wolf",
)


def generate_repo_name(rng: Optional[random.Random] = None) -> str:
    """Return a human readable two-word name such as ``misty-harbor``.

    Collisions are possible; the host rejects duplicates.
    """
    rng = rng or random.SystemRandom()
    return f"{rng.choice(_FIRST_WORDS)}-{rng.choice(_SECOND_WORDS)}"


def repo_dir_name_from_url(url: str) -> str:
    """Local directory name for a clone: the last path segment of the URL.

    ``https://host/org/foo`` and ``https://host/org/foo.git`` both map to
    ``foo``. Returns an empty string when the URL has no path segment.
    """
    path = urlparse(url).path if "://" in url else url.split(":", 1)[-1]
    segment = path.rstrip("/").rsplit("/", 1)[-1]
    if segment.endswith(".git"):
        segment = segment[: -len(".git")]
    return segment


def run_git(
    args: List[str], cwd: Optional[str] = None, timeout: Optional[float] = None
) -> subprocess.CompletedProcess:
    """Run a git command non-interactively, raising CalledProcessError on failure."""
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
        timeout=timeout,
        env=env,
    )
