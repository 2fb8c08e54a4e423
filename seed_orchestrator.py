#!/usr/bin/env python3
"""Main orchestrator: create repos and clone sources, pair them, push."""

from __future__ import annotations

import json
import sys
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import List, Optional, Tuple

import workspace
from config import Config
from errors import (EXIT_EXECUTION_ERROR, EXIT_GITHUB_ERROR, EXIT_SUCCESS,
                    CloneError, CreationError, SeederError)
from logging_utils import Logger
from pairing import RepoPair, list_clone_dirs, pair_repos
from repo_cloner import RepoCloner
from repo_creator import RepoCreator
from repo_pusher import PushOutcome, RepoPusher


class SeedOrchestrator:
    """Runs one seeding pass.

    Phase 1 creates ``repo_count`` repositories and clones every source URL,
    all concurrently. Phase 2 pushes each (clone, created repo) pair on its
    own worker. Failed creates, clones and pushes are reported and dropped;
    the run only fails when a whole phase fails or the workspace or pairing
    cannot be set up.
    """

    def __init__(
        self,
        cfg: Config,
        creator: Optional[RepoCreator] = None,
        cloner: Optional[RepoCloner] = None,
        pusher: Optional[RepoPusher] = None,
    ) -> None:
        self.cfg = cfg
        self.creator = creator or RepoCreator(cfg)
        self.cloner = cloner or RepoCloner(cfg)
        self.pusher = pusher or RepoPusher(cfg)
        self.failures: List[str] = []

    def run(self) -> int:
        try:
            outcomes = self.seed()
        except SeederError as e:
            Logger.error(f"{type(e).__name__}: {e}")
            return e.exit_code
        except Exception as e:
            Logger.error(f"unexpected error: {e}")
            return EXIT_EXECUTION_ERROR

        pushed = [outcome.remote_id for outcome in outcomes if outcome.ok]
        for failure in self.failures:
            Logger.error(f"failed: {failure}")
        sys.stdout.write(json.dumps(pushed) + "\n")
        sys.stdout.flush()

        if outcomes and not pushed:
            Logger.error(f"all {len(outcomes)} pushes failed")
            return EXIT_GITHUB_ERROR
        Logger.info(
            f"done: {len(pushed)}/{len(outcomes)} pushed, "
            f"{len(self.failures)} operations failed"
        )
        return EXIT_SUCCESS

    def seed(self) -> List[PushOutcome]:
        """Run both phases; the workspace is torn down however they end."""
        self.failures = []
        self.creator.connect()

        workspace.reset(self.cfg.workspace_dir)
        try:
            created, cloned = self._create_and_clone()
            if not created:
                raise CreationError(
                    f"none of the {self.cfg.repo_count} repositories could be created"
                )
            pairs = pair_repos(created, cloned)
            for pair in pairs:
                Logger.debug(f"pair: {pair}")
            return self._push_all(pairs)
        finally:
            workspace.teardown(self.cfg.workspace_dir)

    def _pool_size(self, units: int) -> int:
        return self.cfg.max_workers or max(1, units)

    def _create_and_clone(self) -> Tuple[List[str], List[str]]:
        """First barrier: every create and clone finishes before this returns."""
        count = self.cfg.repo_count
        urls = list(self.cfg.repo_urls)
        Logger.info(f"creating {count} repos and cloning {len(urls)} sources")

        with ThreadPoolExecutor(
            max_workers=self._pool_size(count), thread_name_prefix="create"
        ) as create_pool, ThreadPoolExecutor(
            max_workers=self._pool_size(len(urls)), thread_name_prefix="clone"
        ) as clone_pool:
            create_futures = [
                create_pool.submit(self.creator.create, self.cfg.org)
                for _ in range(count)
            ]
            clone_futures = [
                clone_pool.submit(self.cloner.clone, url, self.cfg.workspace_dir)
                for url in urls
            ]
            wait(create_futures + clone_futures)

        created = self._collect_created(create_futures)
        cloned = self._collect_cloned(urls, clone_futures)
        Logger.info(
            f"created {len(created)}/{count} repos, cloned {len(cloned)}/{len(urls)}"
        )
        self._audit_workspace(cloned)
        return created, cloned

    def _collect_created(self, futures: List[Future]) -> List[str]:
        created: List[str] = []
        for idx, future in enumerate(futures, start=1):
            try:
                created.append(future.result())
            except CreationError as e:
                self.failures.append(f"create #{idx} ({e.kind.value}): {e}")
            except Exception as e:
                self.failures.append(f"create #{idx} (crash): {type(e).__name__}: {e}")
        return created

    def _collect_cloned(self, urls: List[str], futures: List[Future]) -> List[str]:
        cloned: List[str] = []
        for url, future in zip(urls, futures):
            try:
                dir_name = future.result()
            except CloneError as e:
                self.failures.append(f"clone {url} ({e.kind.value}): {e}")
                continue
            except Exception as e:
                self.failures.append(f"clone {url} (crash): {type(e).__name__}: {e}")
                continue
            if dir_name in cloned:
                Logger.warn(f"{url} maps to already cloned directory '{dir_name}'")
                continue
            cloned.append(dir_name)
        return cloned

    def _audit_workspace(self, cloned: List[str]) -> None:
        on_disk = list_clone_dirs(self.cfg.workspace_dir)
        leftovers = sorted(set(on_disk) - set(cloned))
        if leftovers:
            Logger.warn(f"ignoring partial clone directories: {', '.join(leftovers)}")

    def _push_all(self, pairs: List[RepoPair]) -> List[PushOutcome]:
        """Second barrier: one isolated push per pair, results in pair order."""
        Logger.info(f"pushing {len(pairs)} pairs")
        with ThreadPoolExecutor(
            max_workers=self._pool_size(len(pairs)), thread_name_prefix="push"
        ) as pool:
            futures = [pool.submit(self.pusher.run_isolated, pair) for pair in pairs]
            wait(futures)

        outcomes = [future.result() for future in futures]
        for outcome in outcomes:
            if not outcome.ok:
                self.failures.append(
                    f"push {outcome.pair} ({outcome.error.kind.value}): {outcome.error}"
                )
        return outcomes
