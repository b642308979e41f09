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

"""Constants for the .acmoj/ project directory and hook variables.

Hook configuration lives at ``<project root>/.acmoj/pre-submit.json``.
Every spawned hook process sees the ACMOJ_FILE_* variables in its
environment, and the same names can be used as ``${NAME}`` placeholders.
"""

from typing import Final

# Directory and file names
ACMOJ_DIR_NAME: Final = ".acmoj"
PRE_SUBMIT_FILE_NAME: Final = "pre-submit.json"
PRE_SUBMIT_RELATIVE_PATH: Final = f"{ACMOJ_DIR_NAME}/{PRE_SUBMIT_FILE_NAME}"

# Hook variables (environment + ${NAME} placeholders)
VAR_FILE_PATH: Final = "ACMOJ_FILE_PATH"
VAR_FILE_NAME: Final = "ACMOJ_FILE_NAME"
VAR_FILE_NAME_NO_SUFFIX: Final = "ACMOJ_FILE_NAME_NO_SUFFIX"
VAR_FILE_DIR: Final = "ACMOJ_FILE_DIR"
VAR_FILE_CONTENT: Final = "ACMOJ_FILE_CONTENT"

HOOK_VARIABLES: Final[tuple[str, ...]] = (
    VAR_FILE_PATH,
    VAR_FILE_NAME,
    VAR_FILE_NAME_NO_SUFFIX,
    VAR_FILE_DIR,
    VAR_FILE_CONTENT,
)

# Never substituted into command lines or script paths; env only.
COMMAND_EXCLUDED_VARIABLES: Final[tuple[str, ...]] = (VAR_FILE_CONTENT,)

# Step types and output modes
STEP_TYPE_ACTION: Final = "action"
STEP_TYPE_COMMAND: Final = "command"
STEP_TYPE_SCRIPT: Final = "script"
VALID_STEP_TYPES: Final[tuple[str, ...]] = (
    STEP_TYPE_ACTION,
    STEP_TYPE_COMMAND,
    STEP_TYPE_SCRIPT,
)

# Environment variable names
ENV_PROJECT_ROOT: Final = "ACMOJ_PROJECT_ROOT"
ENV_LOG_LEVEL: Final = "ACMOJ_LOG_LEVEL"
ENV_OUTPUT_FORMAT: Final = "ACMOJ_OUTPUT_FORMAT"
ENV_SHELL: Final = "SHELL"

# Shell fallbacks when $SHELL is unset
DEFAULT_POSIX_SHELL: Final = "/bin/sh"
DEFAULT_WINDOWS_SHELL: Final = "powershell.exe"
