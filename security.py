#!/usr/bin/env python3
"""Input validation and log redaction for repo-seeder."""

import os
import re
from typing import List, Optional
from urllib.parse import urlparse


class SecurityValidator:
    """Validation helpers for configuration values and log sanitization."""

    MAX_URL_LENGTH = 2048
    MAX_ORG_LENGTH = 100
    MAX_USERNAME_LENGTH = 100
    MAX_PATH_LENGTH = 500

    SAFE_ORG_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
    SAFE_HOST_PATTERN = re.compile(r"^[A-Za-z0-9.-]+(:[0-9]+)?$")

    @classmethod
    def validate_url(cls, url: str, allowed_schemes: Optional[List[str]] = None) -> str:
        """Validate an absolute URL and return it without a trailing slash."""
        if not url or not isinstance(url, str):
            raise ValueError("URL must be a non-empty string")

        url = url.strip()
        if len(url) > cls.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        if "\x00" in url or any(ord(c) < 32 for c in url):
            raise ValueError("URL contains null bytes or control characters")

        parsed = urlparse(url)
        if not parsed.scheme or not (parsed.netloc or parsed.scheme == "file"):
            raise ValueError(f"URL '{url}' is not absolute")

        schemes = allowed_schemes or ["https", "http"]
        if parsed.scheme.lower() not in schemes:
            raise ValueError(
                f"URL scheme '{parsed.scheme}' not in allowed schemes: {schemes}"
            )

        return url.rstrip("/")

    @classmethod
    def validate_web_endpoint(cls, endpoint: str) -> str:
        """Accept either a bare host (``github.example.com``) or an http(s) URL."""
        if not endpoint or not isinstance(endpoint, str):
            raise ValueError("web endpoint must be a non-empty string")

        endpoint = endpoint.strip()
        if "://" in endpoint:
            return cls.validate_url(endpoint, ["https", "http"])

        host = endpoint.rstrip("/")
        if not cls.SAFE_HOST_PATTERN.match(host):
            raise ValueError(f"web endpoint '{endpoint}' is not a valid host")
        return host

    @classmethod
    def validate_org(cls, org: str) -> str:
        """Validate an organization slug."""
        if not org or not isinstance(org, str):
            raise ValueError("organization must be a non-empty string")

        if len(org) > cls.MAX_ORG_LENGTH:
            raise ValueError(
                f"organization exceeds maximum length of {cls.MAX_ORG_LENGTH}"
            )

        if not cls.SAFE_ORG_PATTERN.match(org):
            raise ValueError("organization contains invalid characters")

        return org

    @classmethod
    def validate_username(cls, username: str) -> str:
        if not username or not isinstance(username, str):
            raise ValueError("username must be a non-empty string")

        if len(username) > cls.MAX_USERNAME_LENGTH:
            raise ValueError(
                f"username exceeds maximum length of {cls.MAX_USERNAME_LENGTH}"
            )

        # Embedded in push URLs, so URL delimiters are rejected too
        if not cls.SAFE_ORG_PATTERN.match(username):
            raise ValueError("username contains invalid characters")

        return username

    @classmethod
    def validate_file_path(cls, path: str) -> str:
        """Validate the scratch workspace path."""
        if not path or not isinstance(path, str):
            raise ValueError("file path must be a non-empty string")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise ValueError(
                f"file path exceeds maximum length of {cls.MAX_PATH_LENGTH}"
            )

        if "\x00" in path:
            raise ValueError("file path contains null bytes")

        if ".." in path.split(os.sep):
            raise ValueError("file path contains path traversal sequences")

        normalized = os.path.normpath(path)
        if normalized == os.sep:
            raise ValueError("refusing to use the filesystem root as workspace")

        return normalized

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        patterns = [
            (r"(https?)://[^/@\s]+@", r"\1://[REDACTED]@"),  # URLs with credentials
            (r"token[=:]\s*[^\s]+", "token=[REDACTED]"),
            (r"password[=:]\s*[^\s]+", "password=[REDACTED]"),
            (r"gh[pousr]_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),
            (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),
        ]

        sanitized = str(message)
        for pattern, replacement in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
