#!/usr/bin/env python3
"""Clones source repositories into the scratch workspace."""

from __future__ import annotations

import os
import subprocess
from typing import Optional

from config import Config
from errors import CloneError, FailureKind
from logging_utils import Logger
from security import SecurityValidator
from utils import repo_dir_name_from_url, run_git


class RepoCloner:
    def __init__(self, cfg: Config) -> None:
        self.cfg = cfg

    def clone(self, source_url: str, workspace: Optional[str] = None) -> str:
        """Clone ``source_url`` with full history into ``workspace/<name>``.

        Returns the directory name, derived from the last URL path segment.
        A failed clone may leave a partial directory behind; only the
        workspace teardown removes it.
        """
        workspace = workspace or self.cfg.workspace_dir
        dir_name = repo_dir_name_from_url(source_url)
        if not dir_name:
            raise CloneError(
                f"cannot derive a directory name from '{source_url}'",
                FailureKind.LOCAL,
                source_url,
            )

        destination = os.path.join(workspace, dir_name)
        Logger.info(f"cloning {source_url}...")
        try:
            os.makedirs(workspace, exist_ok=True)
            run_git(["clone", source_url, destination], timeout=self.cfg.git_timeout_s)
        except subprocess.TimeoutExpired:
            raise CloneError(
                f"git clone timed out for {source_url}", FailureKind.TIMEOUT, source_url
            )
        except subprocess.CalledProcessError as e:
            safe_stderr = SecurityValidator.sanitize_for_logging(e.stderr or "")
            kind = FailureKind.CRASH if e.returncode < 0 else FailureKind.TRANSPORT
            raise CloneError(
                f"git clone failed for {source_url}: {safe_stderr.strip()}",
                kind,
                source_url,
            )
        except OSError as e:
            raise CloneError(
                f"cannot clone {source_url}: {e}", FailureKind.LOCAL, source_url
            )

        Logger.success(f"cloned {source_url}")
        return dir_name
