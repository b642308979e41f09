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


"""Pre-submit hook pipeline.

Runs the steps declared in ``.acmoj/pre-submit.json`` before a document is
submitted. Steps run strictly in order and the first failure aborts the run.

Step Types:
- action: Run a named editor action, then re-read the document
- command: Run a shell command line in the document's directory
- script: Run a script resolved against the project root

Output Modes (command/script):
- ignore: Discard stdout/stderr (default)
- show: Notify the user with stdout/stderr
- pipe: Feed stdout to the next step's stdin
- submit: Append stdout to the content that is submitted
"""

from acmoj_presubmit.hooks.actions import (
    ActionError,
    ActionInvoker,
    ActionRegistry,
)
from acmoj_presubmit.hooks.context import (
    ExecutionContext,
    FileInfo,
)
from acmoj_presubmit.hooks.executors import (
    ActionStepExecutor,
    CommandStepExecutor,
    ExecutorContext,
    ScriptStepExecutor,
    StepExecutionError,
    StepExecutor,
    get_executor,
)
from acmoj_presubmit.hooks.pipeline import (
    HookFailedError,
    PipelineRun,
    PreSubmitPipeline,
    RunState,
    run_pre_submit_hooks,
)
from acmoj_presubmit.hooks.process import (
    ProcessError,
    ProcessOutput,
    ProcessRunner,
    ProcessRunnerError,
    ShellProcessRunner,
    SpawnError,
)
from acmoj_presubmit.hooks.router import (
    assemble_content,
    route_output,
)
from acmoj_presubmit.hooks.substitution import substitute_variables

__all__ = [
    # Actions
    "ActionError",
    "ActionInvoker",
    "ActionRegistry",
    # Context
    "ExecutionContext",
    "FileInfo",
    # Executors
    "ActionStepExecutor",
    "CommandStepExecutor",
    "ExecutorContext",
    "ScriptStepExecutor",
    "StepExecutionError",
    "StepExecutor",
    "get_executor",
    # Pipeline
    "HookFailedError",
    "PipelineRun",
    "PreSubmitPipeline",
    "RunState",
    "run_pre_submit_hooks",
    # Processes
    "ProcessError",
    "ProcessOutput",
    "ProcessRunner",
    "ProcessRunnerError",
    "ShellProcessRunner",
    "SpawnError",
    # Output routing
    "assemble_content",
    "route_output",
    # Substitution
    "substitute_variables",
]
