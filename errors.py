#!/usr/bin/env python3
"""Exception taxonomy and exit codes for repo-seeder."""

from __future__ import annotations

from enum import Enum
from typing import Optional

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1
EXIT_MISSING_ARGUMENTS = 2
EXIT_GITHUB_ERROR = 31
EXIT_AUTH_ERROR = 40
EXIT_WORKSPACE_ERROR = 50
EXIT_PAIRING_ERROR = 51


class FailureKind(Enum):
    """Classification of a failed create, clone or push."""
    AUTH = "auth"
    CONFLICT = "conflict"
    HOST = "host"
    TRANSPORT = "transport"
    NON_FAST_FORWARD = "non-fast-forward"
    LOCAL = "local"
    CRASH = "crash"
    TIMEOUT = "timeout"


class SeederError(Exception):
    """Base class for every error raised by repo-seeder."""

    exit_code = EXIT_EXECUTION_ERROR

    def __init__(self, message: str, exit_code: Optional[int] = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(SeederError):
    """Missing or invalid configuration, raised before any work starts."""

    exit_code = EXIT_MISSING_ARGUMENTS


class WorkspaceError(SeederError):
    """The scratch workspace could not be created or removed."""

    exit_code = EXIT_WORKSPACE_ERROR


class PairingError(SeederError):
    """Created repositories could not be paired with clones."""

    exit_code = EXIT_PAIRING_ERROR


class OperationError(SeederError):
    """A single create, clone or push failed."""

    exit_code = EXIT_GITHUB_ERROR

    def __init__(
        self,
        message: str,
        kind: FailureKind = FailureKind.HOST,
        exit_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, exit_code)
        self.kind = kind


class CreationError(OperationError):
    def __init__(
        self, message: str, kind: FailureKind = FailureKind.HOST, name: str = ""
    ) -> None:
        super().__init__(message, kind)
        self.name = name


class CloneError(OperationError):
    def __init__(
        self, message: str, kind: FailureKind = FailureKind.TRANSPORT, url: str = ""
    ) -> None:
        super().__init__(message, kind)
        self.url = url


class PushError(OperationError):
    def __init__(
        self,
        message: str,
        kind: FailureKind = FailureKind.TRANSPORT,
        pair: Optional[object] = None,
    ) -> None:
        super().__init__(message, kind)
        self.pair = pair
