# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Project root discovery.

The project root is the directory whose ``.acmoj/`` holds the hook file and
against which script paths are resolved.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from acmoj_presubmit.constants import ACMOJ_DIR_NAME, ENV_PROJECT_ROOT

logger = logging.getLogger(__name__)


def get_git_root(cwd: Path | None = None) -> Path | None:
    """Get the root directory of the git repository containing cwd.

    Returns:
        Path to git root, or None if not in a git repo.
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            timeout=5,
            cwd=cwd,
        )
        if result.returncode == 0:
            return Path(result.stdout.strip())
        return None
    except (subprocess.TimeoutExpired, FileNotFoundError, NotADirectoryError):
        return None


def find_acmoj_dir_root(start: Path) -> Path | None:
    """Return the nearest ancestor of start (inclusive) containing .acmoj/."""
    current = start if start.is_dir() else start.parent
    for candidate in (current, *current.parents):
        if (candidate / ACMOJ_DIR_NAME).is_dir():
            return candidate
    return None


def find_project_root(start: Path, override: str | Path | None = None) -> Path | None:
    """Find the project root for a source file or directory.

    Resolution order:
    1. Explicit override parameter
    2. ACMOJ_PROJECT_ROOT environment variable
    3. Nearest ancestor containing .acmoj/
    4. Git repo root

    Args:
        start: Source file (or directory) the hooks run for.
        override: Explicit project root.

    Returns:
        Project root, or None if it cannot be determined.
    """
    if override:
        return Path(override)

    env_root = os.environ.get(ENV_PROJECT_ROOT)
    if env_root:
        return Path(env_root)

    start = start.absolute()
    root = find_acmoj_dir_root(start)
    if root is not None:
        logger.debug("Project root from %s/: %s", ACMOJ_DIR_NAME, root)
        return root

    root = get_git_root(start if start.is_dir() else start.parent)
    if root is not None:
        logger.debug("Project root from git: %s", root)
    return root
