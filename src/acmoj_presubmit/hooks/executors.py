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

"""Step executors for the hook pipeline.

Each step type has an executor that knows how to run it and return
its result. Executors raise on failure; the pipeline turns any raised
error into an aborted run.
"""

from __future__ import annotations

import logging
import os
import re
import time
from abc import ABC, abstractmethod
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import cast

from acmoj_presubmit.config import (
    ActionStep,
    CommandStep,
    HookStep,
    OutputMode,
    ScriptStep,
)
from acmoj_presubmit.constants import (
    COMMAND_EXCLUDED_VARIABLES,
    STEP_TYPE_ACTION,
    STEP_TYPE_COMMAND,
    STEP_TYPE_SCRIPT,
)
from acmoj_presubmit.document import DocumentProvider
from acmoj_presubmit.hooks.actions import ActionError, ActionInvoker
from acmoj_presubmit.hooks.context import ExecutionContext
from acmoj_presubmit.hooks.process import ProcessRunner, SpawnError
from acmoj_presubmit.hooks.substitution import substitute_variables
from acmoj_presubmit.notify import ProgressReporter
from acmoj_presubmit.step_results import (
    ActionStepResult,
    HookStepResult,
    ProcessStepResult,
)

logger = logging.getLogger(__name__)

# Whitespace-separated tokens; quoted runs stay in one token.
COMMAND_TOKEN_PATTERN = re.compile(r"""(?:[^\s"']+|"[^"]*"|'[^']*')+""")


class StepExecutionError(Exception):
    """Raised when a step is malformed and cannot be executed."""

    pass


def split_command_line(command_line: str) -> list[str]:
    """Split a command line into tokens, keeping quoted runs intact."""
    return COMMAND_TOKEN_PATTERN.findall(command_line)


@dataclass
class ExecutorContext:
    """Context provided to step executors.

    Contains everything needed to execute one step.
    """

    run: ExecutionContext
    step: HookStep
    display_name: str
    document: DocumentProvider
    document_identity: Hashable
    runner: ProcessRunner
    actions: ActionInvoker
    stdin: str | None = None
    progress: ProgressReporter = field(default_factory=ProgressReporter)


class StepExecutor(ABC):
    """Base class for step executors."""

    @abstractmethod
    def execute(self, ctx: ExecutorContext) -> HookStepResult:
        """Execute the step and return its result.

        Args:
            ctx: Execution context with the step and run state

        Returns:
            Appropriate HookStepResult subclass
        """
        pass


class ActionStepExecutor(StepExecutor):
    """Executor for editor action steps."""

    def execute(self, ctx: ExecutorContext) -> ActionStepResult:
        step = cast(ActionStep, ctx.step)

        action_name = substitute_variables(step.name, ctx.run.variables())
        ctx.progress.report(f"Executing editor action: {action_name}")
        ctx.actions.invoke(action_name, ctx.document)

        # Only re-read if the pipeline's document is still the active one.
        refreshed = False
        if ctx.document.identity() == ctx.document_identity:
            try:
                content = ctx.document.get_text()
            except (OSError, UnicodeDecodeError) as e:
                raise ActionError(
                    f"Could not re-read {ctx.document.get_path()} after action '{action_name}': {e}"
                ) from e
            ctx.run.refresh_file_content(content)
            refreshed = True
        else:
            logger.warning(
                "Active document changed during action '%s'; keeping previous content of %s",
                action_name,
                ctx.run.file.path,
            )

        return ActionStepResult(
            success=True,
            step_type=STEP_TYPE_ACTION,
            display_name=ctx.display_name,
            action=action_name,
            content_refreshed=refreshed,
        )


class _ProcessStepExecutor(StepExecutor):
    """Shared process handling for command and script steps."""

    step_type: str = ""

    @abstractmethod
    def build_command_line(self, ctx: ExecutorContext, variables: dict[str, str]) -> str:
        pass

    def execute(self, ctx: ExecutorContext) -> ProcessStepResult:
        start_time = time.time()
        step = ctx.step
        output_mode = getattr(step, "output", OutputMode.IGNORE)

        variables = ctx.run.variables()
        command_line = self.build_command_line(ctx, variables)
        ctx.progress.report(f"Executing: {command_line}")

        env = {**os.environ, **variables}
        cwd = ctx.run.file.directory
        logger.debug("Executing %s hook: %s", self.step_type, command_line)
        logger.debug("Working directory: %s", cwd)

        output = ctx.runner.run(command_line, cwd=cwd, env=env, stdin=ctx.stdin)

        return ProcessStepResult(
            success=True,
            step_type=self.step_type,
            display_name=ctx.display_name,
            command=command_line,
            output_mode=output_mode.value,
            stdout=output.stdout,
            stderr=output.stderr,
            duration_seconds=time.time() - start_time,
        )


class CommandStepExecutor(_ProcessStepExecutor):
    """Executor for shell command steps."""

    step_type = STEP_TYPE_COMMAND

    def build_command_line(self, ctx: ExecutorContext, variables: dict[str, str]) -> str:
        step = cast(CommandStep, ctx.step)

        substituted = substitute_variables(step.content, variables, COMMAND_EXCLUDED_VARIABLES)
        parts = split_command_line(substituted)
        if not parts:
            raise StepExecutionError(
                f'Command hook content is empty or invalid: "{step.content}"'
            )
        return " ".join(parts)


class ScriptStepExecutor(_ProcessStepExecutor):
    """Executor for script steps.

    The path is resolved against the project root after substitution, so
    a placeholder holding an absolute directory is honored. The runner
    quotes the resolved path for its shell.
    """

    step_type = STEP_TYPE_SCRIPT

    def build_command_line(self, ctx: ExecutorContext, variables: dict[str, str]) -> str:
        step = cast(ScriptStep, ctx.step)

        substituted = substitute_variables(step.path, variables, COMMAND_EXCLUDED_VARIABLES)
        if not substituted.strip():
            raise StepExecutionError(f'Script hook path is empty: "{step.path}"')
        script_path = os.path.normpath(os.path.join(ctx.run.project_root, substituted))

        if not os.path.isfile(script_path):
            raise SpawnError(script_path, "script not found")
        if not os.access(script_path, os.X_OK):
            raise SpawnError(script_path, "script is not executable")

        return ctx.runner.command_for_path(script_path)


def get_executor(step: HookStep) -> StepExecutor:
    """Get the appropriate executor for a step.

    Raises:
        ValueError: If step type is unknown
    """
    executors: dict[str, type[StepExecutor]] = {
        STEP_TYPE_ACTION: ActionStepExecutor,
        STEP_TYPE_COMMAND: CommandStepExecutor,
        STEP_TYPE_SCRIPT: ScriptStepExecutor,
    }

    executor_class = executors.get(step.type)
    if executor_class is None:
        raise ValueError(
            f"Unknown step type: {step.type}. "
            f"Valid types: {', '.join(executors.keys())}"
        )

    return executor_class()
