#!/usr/bin/env python3
"""Pushes a local clone's checked-out branch into a created repository."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import Optional

from config import Config
from errors import FailureKind, PushError
from logging_utils import Logger
from pairing import RepoPair
from security import SecurityValidator
from utils import run_git

NON_FAST_FORWARD_MARKERS = ("[rejected]", "non-fast-forward", "fetch first")
AUTH_MARKERS = (
    "authentication failed",
    "could not read username",
    "permission denied",
    "403",
    "401",
)


@dataclass(frozen=True)
class PushOutcome:
    """Result of one isolated push: ``remote_id`` on success, else ``error``."""
    pair: RepoPair
    remote_id: Optional[str] = None
    error: Optional[PushError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RepoPusher:
    def __init__(self, cfg: Config) -> None:
        self.cfg = cfg

    def clone_path(self, pair: RepoPair) -> str:
        return os.path.join(self.cfg.workspace_dir, pair.cloned_repo)

    def web_base_url(self) -> str:
        """``https://host`` for a bare host, the configured URL otherwise."""
        endpoint = self.cfg.web_endpoint.rstrip("/")
        if "://" in endpoint:
            return endpoint
        return f"https://{endpoint}"

    def remote_url(self, created_repo: str) -> str:
        """Push URL with the service account and token embedded as credentials."""
        scheme, rest = self.web_base_url().split("://", 1)
        credentials = f"{self.cfg.push_username}:{self.cfg.token}"
        return f"{scheme}://{credentials}@{rest}/{self.cfg.org}/{created_repo}.git"

    def current_branch(self, clone_dir: str) -> str:
        """Branch HEAD points at in the clone, normally the source's default."""
        try:
            result = run_git(
                ["rev-parse", "--abbrev-ref", "HEAD"],
                cwd=clone_dir,
                timeout=self.cfg.git_timeout_s,
            )
        except subprocess.CalledProcessError as e:
            raise PushError(
                f"cannot read current branch of {clone_dir}: {(e.stderr or '').strip()}",
                FailureKind.LOCAL,
            )
        except subprocess.TimeoutExpired:
            raise PushError(f"reading branch of {clone_dir} timed out", FailureKind.TIMEOUT)
        except OSError as e:
            raise PushError(f"cannot open clone {clone_dir}: {e}", FailureKind.LOCAL)
        branch = result.stdout.strip()
        if not branch or branch == "HEAD":
            raise PushError(f"{clone_dir} has a detached HEAD", FailureKind.LOCAL)
        return branch

    def push(self, pair: RepoPair) -> str:
        """Push the clone's current branch; returns ``org/created_repo``."""
        clone_dir = self.clone_path(pair)
        branch = self.current_branch(clone_dir)
        remote = self.remote_url(pair.created_repo)
        display = f"{self.web_base_url()}/{self.cfg.org}/{pair.created_repo}"

        Logger.info(f"pushing {pair.cloned_repo}:{branch} to {display}..")
        Logger.security_event(
            "GIT_PUSH_CREDENTIAL",
            f"using {self.cfg.push_username} credentials for {display}",
        )
        try:
            run_git(["push", remote, branch], cwd=clone_dir, timeout=self.cfg.git_timeout_s)
        except subprocess.TimeoutExpired:
            raise PushError(f"git push timed out for {pair}", FailureKind.TIMEOUT, pair)
        except subprocess.CalledProcessError as e:
            safe_stderr = SecurityValidator.sanitize_for_logging(e.stderr or "")
            raise PushError(
                f"git push failed for {pair}: {safe_stderr.strip()}",
                classify_push_failure(e.returncode, safe_stderr),
                pair,
            )

        Logger.success(f"pushed {pair.cloned_repo} to {display}")
        return f"{self.cfg.org}/{pair.created_repo}"

    def run_isolated(self, pair: RepoPair) -> PushOutcome:
        """Run one push and turn any failure into an outcome for its pair.

        Callers run this on a dedicated worker thread; git itself runs in a
        child process, so a crash in the transport only ends that child.
        """
        try:
            return PushOutcome(pair=pair, remote_id=self.push(pair))
        except PushError as e:
            if e.pair is None:
                e.pair = pair
            return PushOutcome(pair=pair, error=e)
        except Exception as e:
            safe_error = SecurityValidator.sanitize_for_logging(str(e))
            return PushOutcome(
                pair=pair,
                error=PushError(
                    f"push crashed for {pair}: {type(e).__name__}: {safe_error}",
                    FailureKind.CRASH,
                    pair,
                ),
            )


def classify_push_failure(returncode: int, stderr: str) -> FailureKind:
    """Map a failed git push to a failure kind."""
    if returncode < 0:
        return FailureKind.CRASH
    lowered = stderr.lower()
    if any(marker in lowered for marker in NON_FAST_FORWARD_MARKERS):
        return FailureKind.NON_FAST_FORWARD
    if any(marker in lowered for marker in AUTH_MARKERS):
        return FailureKind.AUTH
    return FailureKind.TRANSPORT
