#!/usr/bin/env python3
"""GitHub API wrapper that creates test repositories in an organization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import github
import requests

if TYPE_CHECKING:
    from github.Organization import Organization

from config import DEFAULT_API_URL, Config
from errors import EXIT_AUTH_ERROR, ConfigError, CreationError, FailureKind
from logging_utils import Logger
from utils import generate_repo_name


class RepoCreator:
    """Creates randomly named repositories, one API call per ``create``."""

    def __init__(self, cfg: Config) -> None:
        self.cfg = cfg
        self.api: Optional[github.Github] = None
        self.org: Optional["Organization"] = None

    def connect(self) -> None:
        """Authenticate and verify the organization is reachable."""
        Logger.info(f"init github API: {self.cfg.api_url}")
        self._preflight_org_access()
        auth = github.Auth.Token(self.cfg.token)
        try:
            if self.cfg.api_url != DEFAULT_API_URL:
                self.api = github.Github(base_url=self.cfg.api_url, auth=auth)
            else:
                self.api = github.Github(auth=auth)
            self.org = self.api.get_organization(self.cfg.org)
        except github.BadCredentialsException:
            raise ConfigError(
                "authentication failed (github): invalid token",
                exit_code=EXIT_AUTH_ERROR,
            )
        except github.GithubException as e:
            raise ConfigError(f"cannot access organization '{self.cfg.org}': {e}")
        Logger.debug(f"github org: {self.org.login}")

    def _get_api_headers(self) -> dict:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.cfg.token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _preflight_org_access(self) -> None:
        """Check the org exists and is visible to the token before any work."""
        org_url = f"{self.cfg.api_url}/orgs/{self.cfg.org}"
        try:
            response = requests.get(org_url, headers=self._get_api_headers(), timeout=30)
        except requests.RequestException as e:
            raise ConfigError(f"failed to contact github api: {e}")

        if response.status_code == 401:
            raise ConfigError(
                "unauthorized (401): token invalid or not authorized for GitHub API",
                exit_code=EXIT_AUTH_ERROR,
            )
        if response.status_code == 403:
            raise ConfigError(
                "forbidden (403): token lacks permission to access organization "
                f"'{self.cfg.org}'",
                exit_code=EXIT_AUTH_ERROR,
            )
        if response.status_code == 404:
            raise ConfigError(
                f"not found (404): organization '{self.cfg.org}' does not exist "
                "or is not visible to this token"
            )
        if response.status_code != 200:
            Logger.warn(
                f"unexpected response checking org visibility: {response.status_code}"
            )

    def create(self, org: Optional[str] = None) -> str:
        """Create one repository and return the name the host assigned."""
        org = org or self.cfg.org
        if self.org is None:
            raise CreationError("github API not initialized", FailureKind.HOST)

        name = generate_repo_name()
        Logger.info(f"creating repo: {org}/{name}")
        try:
            target = self.org
            # Org slugs are case-insensitive
            if org.lower() != self.org.login.lower():
                target = self.api.get_organization(org)
            repo = target.create_repo(name=name, description=self.cfg.description)
        except github.BadCredentialsException as e:
            raise CreationError(
                f"failed to create repo '{org}/{name}': bad credentials ({e.status})",
                FailureKind.AUTH,
                name,
            )
        except github.GithubException as e:
            raise CreationError(
                f"failed to create repo '{org}/{name}': {e.status} {e.data}",
                _kind_for_status(e.status),
                name,
            )
        except requests.RequestException as e:
            raise CreationError(
                f"failed to create repo '{org}/{name}': {e}",
                FailureKind.TRANSPORT,
                name,
            )

        Logger.success(f"created repo: {org}/{repo.name}")
        return repo.name


def _kind_for_status(status: Optional[int]) -> FailureKind:
    if status in (401, 403):
        return FailureKind.AUTH
    if status == 422:
        return FailureKind.CONFLICT
    return FailureKind.HOST
