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

"""Output routing and final content assembly."""

from __future__ import annotations

import logging

from acmoj_presubmit.config import OutputMode
from acmoj_presubmit.hooks.context import ExecutionContext
from acmoj_presubmit.notify import Notifier
from acmoj_presubmit.step_results import ProcessStepResult

logger = logging.getLogger(__name__)


def route_output(
    result: ProcessStepResult,
    context: ExecutionContext,
    notifier: Notifier,
) -> None:
    """Apply a finished process step's output mode to the run context."""
    name = result.display_name
    mode = OutputMode(result.output_mode)

    if mode is OutputMode.SHOW:
        if result.stdout.strip():
            notifier.info(f'Output from "{name}":\n{result.stdout.strip()}')
        if result.stderr.strip():
            notifier.warning(f'Error output from "{name}":\n{result.stderr.strip()}')
    elif mode is OutputMode.PIPE:
        context.set_pending_stdin(result.stdout)
        notifier.append_log(
            f"[PIPE] Output of '{name}' will be piped as stdin to the next hook."
        )
    elif mode is OutputMode.SUBMIT:
        context.append_submit_output(result.stdout)
        notifier.append_log(
            f"[SUBMIT] Output of '{name}' appended to submission string."
        )


def assemble_content(context: ExecutionContext, notifier: Notifier | None = None) -> str:
    """Derive the content to submit once all steps have run.

    Submit-mode outputs, concatenated in step order, replace the document
    when any step used them; otherwise the last observed document text is
    submitted.
    """
    if context.output_used:
        content = "".join(context.submit_outputs)
        line = "Final submission content is combined from 'submit' hooks."
    else:
        content = context.current_content
        line = "Final submission content is the current file content (after actions, if any)."

    logger.debug(line)
    if notifier is not None:
        notifier.append_log(line)
    return content
