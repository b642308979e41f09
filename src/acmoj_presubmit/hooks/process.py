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

"""Process runner abstraction for command and script hooks.

Hooks run through the user's shell as ``<shell> -c <command line>`` so
pipes and redirections in the configured line behave as typed. The runner
is injectable; the pipeline only depends on ProcessRunner.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from acmoj_presubmit.constants import (
    DEFAULT_POSIX_SHELL,
    DEFAULT_WINDOWS_SHELL,
    ENV_SHELL,
)

logger = logging.getLogger(__name__)


class ProcessRunnerError(Exception):
    """Base class for process execution failures."""

    pass


class SpawnError(ProcessRunnerError):
    """The process could not be started (shell or script not found)."""

    def __init__(self, command: str, cause: object):
        self.command = command
        self.cause = cause
        super().__init__(f'Failed to start "{command}": {cause}')


class ProcessError(ProcessRunnerError):
    """The process ran and exited with a non-zero code."""

    def __init__(self, command: str, exit_code: int, stdout: str, stderr: str):
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f'Command "{command}" exited with code {exit_code}.\n'
            f"Stderr: {stderr}\nStdout: {stdout}"
        )


@dataclass(frozen=True)
class ProcessOutput:
    """Captured output of a successful process."""

    stdout: str
    stderr: str
    return_code: int = 0


def resolve_shell(environ: Mapping[str, str] | None = None) -> str:
    """Return $SHELL, or the platform default shell."""
    env = os.environ if environ is None else environ
    shell = env.get(ENV_SHELL)
    if shell:
        return shell
    return DEFAULT_WINDOWS_SHELL if sys.platform == "win32" else DEFAULT_POSIX_SHELL


class ProcessRunner(ABC):
    """Runs one command line to completion."""

    @abstractmethod
    def run(
        self,
        command_line: str,
        cwd: Path | str | None,
        env: Mapping[str, str],
        stdin: str | None = None,
    ) -> ProcessOutput:
        """Run a command line and return its captured output.

        Args:
            command_line: Full command line passed to the shell
            cwd: Working directory
            env: Complete environment for the process
            stdin: Text written to stdin; stdin is closed immediately if None

        Raises:
            SpawnError: If the process could not be started
            ProcessError: If the process exited non-zero
        """
        pass

    def command_for_path(self, path: str) -> str:
        """Return a command line that runs the executable at path."""
        return shlex.quote(path)


class ShellProcessRunner(ProcessRunner):
    """Runs command lines through the user's shell."""

    def __init__(self, shell: str | None = None):
        """Initialize the runner.

        Args:
            shell: Shell executable. Defaults to $SHELL or the platform default.
        """
        self.shell = shell or resolve_shell()

    @property
    def is_powershell(self) -> bool:
        name = self.shell.replace("\\", "/").rsplit("/", 1)[-1].lower()
        return name.startswith(("powershell", "pwsh"))

    def command_for_path(self, path: str) -> str:
        if self.is_powershell:
            # Call operator on a single-quoted literal.
            return "& '" + path.replace("'", "''") + "'"
        return shlex.quote(path)

    def run(
        self,
        command_line: str,
        cwd: Path | str | None,
        env: Mapping[str, str],
        stdin: str | None = None,
    ) -> ProcessOutput:
        logger.info("Running: %s", command_line)
        logger.debug("Shell: %s, cwd: %s, stdin: %s", self.shell, cwd,
                     "none" if stdin is None else f"{len(stdin)} chars")

        stdin_kwargs: dict = (
            {"input": stdin} if stdin is not None else {"stdin": subprocess.DEVNULL}
        )
        try:
            result = subprocess.run(
                [self.shell, "-c", command_line],
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=cwd,
                env=dict(env),
                **stdin_kwargs,
            )
        except OSError as e:
            logger.warning("Failed to start %s: %s", self.shell, e)
            raise SpawnError(command_line, e) from e

        if result.returncode != 0:
            logger.debug("Exit code %d from: %s", result.returncode, command_line)
            raise ProcessError(
                command_line, result.returncode, result.stdout, result.stderr
            )

        return ProcessOutput(stdout=result.stdout, stderr=result.stderr)
