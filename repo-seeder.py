#!/usr/bin/env python3
"""
Repo Seeder - bulk-create repositories in a GitHub organization and push
cloned source repositories into them.

Creates N randomly named repositories through the GitHub API while cloning
the given source repositories, then pushes each clone's checked-out branch
into the created repositories round-robin. Meant for load-testing repository
creation and git push on GitHub Enterprise Server ahead of a migration.

Copyright (c) 2025 The repo-seeder authors
Licensed under the MIT License. See LICENSE file for details.

License: MIT
"""

from __future__ import annotations

import sys
from typing import NoReturn

from argument_parser import parse_arguments
from errors import EXIT_EXECUTION_ERROR
from seed_orchestrator import SeedOrchestrator


def main() -> NoReturn:
    if __name__ != "__main__":
        sys.exit(EXIT_EXECUTION_ERROR)

    cfg = parse_arguments()
    orchestrator = SeedOrchestrator(cfg)
    sys.exit(orchestrator.run())


if __name__ == "__main__":
    main()
