#!/usr/bin/env python3
"""Logging utilities for repo-seeder."""

import os
import sys
import threading
import time

import colorama

from security import SecurityValidator

# Initialize colorama for cross-platform colored output
colorama.init(autoreset=True)


class Logger:
    """Colored console output, safe to call from worker threads.

    Every message is redacted before it is written, so remote URLs carrying
    the push credential can be logged as-is.
    """

    PROCESS_NAME = "repo-seeder"

    _lock = threading.Lock()

    @classmethod
    def debug(cls, *messages: str) -> None:
        cls._write(sys.stdout, colorama.Fore.LIGHTBLACK_EX, *messages)

    @classmethod
    def info(cls, *messages: str) -> None:
        cls._write(sys.stdout, colorama.Fore.CYAN, *messages)

    @classmethod
    def success(cls, *messages: str) -> None:
        cls._write(sys.stdout, colorama.Fore.GREEN, *messages)

    @classmethod
    def warn(cls, *messages: str) -> None:
        cls._write(sys.stdout, colorama.Fore.YELLOW, *messages)

    @classmethod
    def error(cls, *messages: str) -> None:
        cls._write(sys.stderr, colorama.Fore.RED, *messages)

    @classmethod
    def security_event(cls, event_type: str, details: str) -> None:
        """Log security-relevant events (credential use, validation) to stderr."""
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
        cls._write(
            sys.stderr,
            colorama.Fore.MAGENTA,
            f"[SECURITY:{event_type}] {timestamp}: {details}",
        )

    @classmethod
    def _write(cls, stream, color: str, *messages: str) -> None:
        sanitized = [SecurityValidator.sanitize_for_logging(str(m)) for m in messages]
        line = cls._format_line(color, *sanitized)
        # One write per line keeps concurrent workers from interleaving
        with cls._lock:
            stream.write(line + "\n")
            stream.flush()

    @classmethod
    def _get_header(cls) -> str:
        thread = threading.current_thread().name
        return f"[{cls.PROCESS_NAME}:{os.getpid()}:{thread}]"

    @classmethod
    def _format_line(cls, color: str, *messages: str) -> str:
        header = cls._get_header()
        message = " ".join(messages)
        return f"{color}{header}{colorama.Style.RESET_ALL} {message}"
