#!/usr/bin/env python3
"""Lifecycle of the scratch directory that holds clones for one run.

Concurrent runs against the same path are unsupported; nothing here locks.
"""

from __future__ import annotations

import os
import shutil

from errors import WorkspaceError
from logging_utils import Logger


def reset(path: str) -> None:
    """Create ``path`` when absent, remove it recursively when present.

    A removed workspace is not recreated: the cloner creates it again on its
    first clone. Any sequence of calls succeeds.
    """
    if not os.path.exists(path):
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise WorkspaceError(f"failed to create workspace '{path}': {e}")
        Logger.debug(f"created workspace: {path}")
        return

    _remove(path)
    Logger.debug(f"cleared workspace: {path}")


def teardown(path: str) -> None:
    """Remove the workspace at the end of a run; absence is success."""
    if not os.path.exists(path):
        return
    _remove(path)
    Logger.info(f"removed workspace: {path}")


def _remove(path: str) -> None:
    if not os.path.isdir(path) or os.path.islink(path):
        raise WorkspaceError(f"workspace '{path}' is not a directory")
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        raise WorkspaceError(f"failed to remove workspace '{path}': {e}")

