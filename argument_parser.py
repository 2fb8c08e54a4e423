#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from config import (DEFAULT_PUSH_USERNAME, DEFAULT_REPO_COUNT,
                    DEFAULT_WORKSPACE_DIR, Config)
from errors import EXIT_AUTH_ERROR, ConfigError
from logging_utils import Logger
from security import SecurityValidator

MAX_REPO_COUNT = 1000
MAX_GIT_TIMEOUT_S = 86400


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description=(
            "Create repositories in a GitHub organization and push cloned "
            "source repositories into them"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Every option can also be set in the environment or a .env file.

Examples:
  %(prog)s -e https://api.github.com -w github.com -o my-org \\
           -r https://github.com/octocat/Hello-World
  %(prog)s -e https://ghes.example.com/api/v3 -w ghes.example.com \\
           -o load-test -n 50 --max-workers 8 \\
           -r https://github.com/torvalds/linux,https://github.com/microsoft/vscode
        """,
    )
    return parser


def _add_host_arguments(parser: argparse.ArgumentParser) -> None:
    """Add GitHub host and credential arguments to parser."""
    parser.add_argument(
        "-e",
        "--endpoint",
        dest="api_url",
        default=os.getenv("GITHUB_ENDPOINT"),
        help="Base URL of the GitHub API (or set GITHUB_ENDPOINT)",
    )
    parser.add_argument(
        "-w",
        "--web-endpoint",
        dest="web_endpoint",
        default=os.getenv("GITHUB_WEB_ENDPOINT"),
        help="Host or base URL used for push remotes (or set GITHUB_WEB_ENDPOINT)",
    )
    parser.add_argument(
        "-t",
        "--auth-token",
        dest="token",
        default=os.getenv("GITHUB_AUTH_TOKEN"),
        help="Personal access token for API calls and git push "
        "(or set GITHUB_AUTH_TOKEN)",
    )
    parser.add_argument(
        "-o",
        "--org",
        dest="org",
        default=os.getenv("GITHUB_ORG"),
        help="Organization to create repositories in (or set GITHUB_ORG)",
    )
    parser.add_argument(
        "--push-username",
        dest="push_username",
        default=os.getenv("REPO_SEEDER_PUSH_USERNAME", DEFAULT_PUSH_USERNAME),
        help=f"Account name embedded in push URLs (default: {DEFAULT_PUSH_USERNAME})",
    )


def _add_behavior_arguments(parser: argparse.ArgumentParser) -> None:
    """Add workload and concurrency arguments to parser."""
    parser.add_argument(
        "-r",
        "--repo-urls",
        dest="repo_urls",
        default=os.getenv("GITHUB_REPO_URLS"),
        help="Comma separated list of repository URLs to clone "
        "(or set GITHUB_REPO_URLS)",
    )
    parser.add_argument(
        "-n",
        "--repo-count",
        dest="repo_count",
        default=os.getenv("GITHUB_REPO_COUNT", str(DEFAULT_REPO_COUNT)),
        help=f"Number of repositories to create (default: {DEFAULT_REPO_COUNT})",
    )
    parser.add_argument(
        "--workspace-dir",
        dest="workspace_dir",
        default=os.getenv("REPO_SEEDER_WORKSPACE", DEFAULT_WORKSPACE_DIR),
        help=f"Scratch directory for clones (default: {DEFAULT_WORKSPACE_DIR})",
    )
    parser.add_argument(
        "--max-workers",
        dest="max_workers",
        default=os.getenv("REPO_SEEDER_MAX_WORKERS"),
        help="Maximum concurrent operations per phase (default: one per operation)",
    )
    parser.add_argument(
        "--git-timeout",
        dest="git_timeout_s",
        default=os.getenv("REPO_SEEDER_GIT_TIMEOUT"),
        help="Seconds before a git clone or push is abandoned (default: none)",
    )


def _parse_int(value: str, option: str, low: int, high: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{option} must be an integer, got '{value}'")
    if number < low or number > high:
        raise ConfigError(f"{option} must be between {low} and {high}")
    return number


def _split_repo_urls(raw: str) -> List[str]:
    urls = [url.strip() for url in raw.split(",")]
    return [url for url in urls if url]


def build_config(args: argparse.Namespace) -> Config:
    """Validate parsed arguments and build the run configuration."""
    missing = [
        flag
        for flag, value in (
            ("--endpoint (GITHUB_ENDPOINT)", args.api_url),
            ("--web-endpoint (GITHUB_WEB_ENDPOINT)", args.web_endpoint),
            ("--org (GITHUB_ORG)", args.org),
            ("--repo-urls (GITHUB_REPO_URLS)", args.repo_urls),
        )
        if not value
    ]
    if missing:
        raise ConfigError(f"missing required options: {', '.join(missing)}")
    if not args.token:
        raise ConfigError(
            "github credential not provided (use --auth-token or GITHUB_AUTH_TOKEN)",
            exit_code=EXIT_AUTH_ERROR,
        )

    repo_urls = _split_repo_urls(args.repo_urls)
    if not repo_urls:
        raise ConfigError("--repo-urls contains no repository URLs")

    try:
        api_url = SecurityValidator.validate_url(args.api_url, ["https", "http"])
        web_endpoint = SecurityValidator.validate_web_endpoint(args.web_endpoint)
        org = SecurityValidator.validate_org(args.org)
        push_username = SecurityValidator.validate_username(args.push_username)
        workspace_dir = SecurityValidator.validate_file_path(args.workspace_dir)
        repo_urls = [
            SecurityValidator.validate_url(url, ["https", "http", "ssh", "git", "file"])
            if "://" in url
            else url
            for url in repo_urls
        ]
    except ValueError as e:
        raise ConfigError(str(e))

    repo_count = _parse_int(args.repo_count, "--repo-count", 1, MAX_REPO_COUNT)

    max_workers = None
    if args.max_workers:
        max_workers = _parse_int(args.max_workers, "--max-workers", 1, MAX_REPO_COUNT)

    git_timeout_s = None
    if args.git_timeout_s:
        try:
            git_timeout_s = float(args.git_timeout_s)
        except ValueError:
            raise ConfigError(f"--git-timeout must be a number, got '{args.git_timeout_s}'")
        if git_timeout_s <= 0 or git_timeout_s > MAX_GIT_TIMEOUT_S:
            raise ConfigError(
                f"--git-timeout must be between 0 and {MAX_GIT_TIMEOUT_S} seconds"
            )

    return Config(
        api_url=api_url,
        web_endpoint=web_endpoint,
        token=args.token,
        org=org,
        repo_urls=tuple(repo_urls),
        repo_count=repo_count,
        workspace_dir=workspace_dir,
        max_workers=max_workers,
        git_timeout_s=git_timeout_s,
        push_username=push_username,
    )


def parse_arguments(argv: Optional[Sequence[str]] = None) -> Config:
    """Load .env, parse flags over the environment and return configuration.

    Exits with the error's exit code when the configuration is unusable.
    """
    load_dotenv()

    parser = _create_argument_parser()
    _add_host_arguments(parser)
    _add_behavior_arguments(parser)
    args = parser.parse_args(argv)

    try:
        cfg = build_config(args)
    except ConfigError as e:
        Logger.security_event(
            "CONFIG_VALIDATION_FAILED", f"configuration validation failed: {e}"
        )
        Logger.error(f"configuration error: {e}")
        sys.exit(e.exit_code)

    Logger.security_event(
        "CONFIG_VALIDATION", "successfully validated all configuration inputs"
    )
    return cfg
