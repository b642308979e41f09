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

"""Pre-submit pipeline controller.

Loads the hook list, then advances through it one step at a time:

    PENDING -> RUNNING (step 0 .. N-1) -> COMPLETED
                        \\-> ABORTED on the first failing step

A failing step raises HookFailedError; configuration problems are
returned in PreSubmitResult.error instead.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from pathlib import Path

from acmoj_presubmit.config import (
    ConfigLoadError,
    ConfigValidationError,
    HookStep,
    display_name,
    load_hook_list,
)
from acmoj_presubmit.constants import PRE_SUBMIT_RELATIVE_PATH
from acmoj_presubmit.document import DocumentProvider
from acmoj_presubmit.home import find_project_root
from acmoj_presubmit.hooks.actions import ActionInvoker, ActionRegistry
from acmoj_presubmit.hooks.context import ExecutionContext, FileInfo
from acmoj_presubmit.hooks.executors import ExecutorContext, get_executor
from acmoj_presubmit.hooks.process import ProcessRunner, ShellProcessRunner
from acmoj_presubmit.hooks.router import assemble_content, route_output
from acmoj_presubmit.notify import LoggingNotifier, Notifier, SafeNotifier
from acmoj_presubmit.step_results import (
    ActionStepResult,
    HookStepResult,
    PreSubmitResult,
    ProcessStepResult,
)

logger = logging.getLogger(__name__)


class HookFailedError(Exception):
    """A hook step failed and the run was aborted.

    The submission must not go ahead. The original error is available as
    ``cause`` (and ``__cause__``).
    """

    def __init__(self, display_name: str, step_index: int, cause: BaseException):
        self.display_name = display_name
        self.step_index = step_index
        self.cause = cause
        super().__init__(f"Hook {display_name} failed: {cause}")


class RunState(Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class PipelineRun:
    """One pass over a hook list.

    The run owns its ExecutionContext. advance() executes exactly one step;
    the first failure moves the run to ABORTED and raises HookFailedError.
    """

    def __init__(
        self,
        hooks: list[HookStep],
        context: ExecutionContext,
        document: DocumentProvider,
        runner: ProcessRunner,
        actions: ActionInvoker,
        notifier: Notifier,
    ):
        self.hooks = list(hooks)
        self.context = context
        self.document = document
        self.runner = runner
        self.actions = actions
        self.notifier = notifier
        self.index = 0
        self.state = RunState.PENDING if self.hooks else RunState.COMPLETED
        self.results: list[HookStepResult] = []
        self._document_identity = document.identity()

    @property
    def done(self) -> bool:
        return self.state in (RunState.COMPLETED, RunState.ABORTED)

    def advance(self) -> HookStepResult | None:
        """Run the step at the current index.

        Returns:
            The step's result, or None if the run is already finished

        Raises:
            HookFailedError: If the step failed (the run is now ABORTED)
        """
        if self.done:
            return None

        self.state = RunState.RUNNING
        step = self.hooks[self.index]
        name = display_name(step, self.index)

        try:
            result = self._run_step(step, name)
        except Exception as e:
            raise self._abort(name, e) from e

        self.results.append(result)
        self.index += 1
        if self.index == len(self.hooks):
            self.state = RunState.COMPLETED
        return result

    def run_to_completion(self) -> list[HookStepResult]:
        while not self.done:
            self.advance()
        return self.results

    def _run_step(self, step: HookStep, name: str) -> HookStepResult:
        # Piped input is only ever offered to the step right after the pipe.
        stdin = self.context.take_pending_stdin()

        with self.notifier.progress(f"Pre-submit: {name}") as progress:
            executor = get_executor(step)
            result = executor.execute(
                ExecutorContext(
                    run=self.context,
                    step=step,
                    display_name=name,
                    document=self.document,
                    document_identity=self._document_identity,
                    runner=self.runner,
                    actions=self.actions,
                    stdin=stdin,
                    progress=progress,
                )
            )

        if isinstance(result, ProcessStepResult):
            if result.stderr:
                logger.warning("Pre-submit %s '%s' stderr:\n%s", step.type, name, result.stderr)
            self.notifier.append_log(f"[OK] {step.type} '{name}' executed.")
            route_output(result, self.context, self.notifier)
        elif isinstance(result, ActionStepResult):
            if result.content_refreshed:
                self.notifier.append_log(
                    f"[OK] Action '{result.action}' executed. File content for next hook updated."
                )
            else:
                self.notifier.append_log(
                    f"[OK] Action '{result.action}' executed. Active document changed; file content kept."
                )

        logger.info("Hook %d/%d '%s' completed", self.index + 1, len(self.hooks), name)
        return result

    def _abort(self, name: str, error: Exception) -> HookFailedError:
        self.state = RunState.ABORTED
        logger.error("Error executing pre-submit hook %s: %s", name, error)
        self.notifier.append_log(f"[ERROR] Hook {name} failed: {error}")
        self.notifier.show_log()
        return HookFailedError(name, self.index, error)


class PreSubmitPipeline:
    """Runs the configured pre-submit hooks for a document.

    Example:
        pipeline = PreSubmitPipeline()
        result = pipeline.run(FileDocument("sol.cpp"), project_root=Path("."))
        if result.error:
            ...  # do not submit
        submit(result.content)
    """

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        actions: ActionInvoker | None = None,
        notifier: Notifier | None = None,
    ):
        self.runner = runner or ShellProcessRunner()
        self.actions = actions or ActionRegistry()
        self.notifier = SafeNotifier(notifier or LoggingNotifier())

    def load(self, project_root: Path) -> list[HookStep]:
        return load_hook_list(project_root)

    def run(
        self,
        document: DocumentProvider,
        initial_content: str | None = None,
        project_root: Path | None = None,
    ) -> PreSubmitResult:
        """Run all hooks and return the content to submit.

        Args:
            document: Document being submitted
            initial_content: Content to start from (defaults to the document text)
            project_root: Directory containing .acmoj/ (None: no hooks run)

        Returns:
            PreSubmitResult; ``error`` is set if the hook file is invalid

        Raises:
            HookFailedError: If any hook step fails
        """
        if initial_content is None:
            initial_content = document.get_text()

        if project_root is None:
            logger.debug("No project root for %s; skipping hooks", document.get_path())
            return PreSubmitResult(content=initial_content)

        try:
            hooks = self.load(project_root)
        except (ConfigLoadError, ConfigValidationError) as e:
            logger.error("Error processing %s: %s", PRE_SUBMIT_RELATIVE_PATH, e)
            return PreSubmitResult(
                content=initial_content,
                error=f"Error in {PRE_SUBMIT_RELATIVE_PATH}: {e}",
            )

        if not hooks:
            return PreSubmitResult(content=initial_content)

        path = document.get_path()
        self.notifier.clear_log()
        self.notifier.append_log(
            f"[{datetime.now().strftime('%H:%M:%S')}] Running pre-submit hooks for {path}"
        )
        logger.info("Running %d pre-submit hook(s) for %s", len(hooks), path)

        context = ExecutionContext(
            file=FileInfo.from_path(path),
            project_root=Path(project_root),
            current_content=initial_content,
        )
        run = PipelineRun(hooks, context, document, self.runner, self.actions, self.notifier)
        results = run.run_to_completion()

        content = assemble_content(context, self.notifier)
        self.notifier.append_log("All pre-submit hooks completed.")
        return PreSubmitResult(
            content=content,
            output_used=context.output_used,
            steps=tuple(results),
        )


def run_pre_submit_hooks(
    document: DocumentProvider,
    initial_content: str | None = None,
    project_root: Path | None = None,
    runner: ProcessRunner | None = None,
    actions: ActionInvoker | None = None,
    notifier: Notifier | None = None,
) -> PreSubmitResult:
    """Run the pre-submit hooks for a document.

    The project root is discovered from the document path when not given.
    """
    if project_root is None:
        project_root = find_project_root(document.get_path())
    pipeline = PreSubmitPipeline(runner=runner, actions=actions, notifier=notifier)
    return pipeline.run(document, initial_content, project_root)
