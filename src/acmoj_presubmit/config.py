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

"""Pre-submit hook configuration.

Hooks are declared as a JSON array in ``.acmoj/pre-submit.json``. Each
element is one of three step shapes, distinguished by its ``type``:

- ``{"type": "action", "name": ..., "description"?: ...}``
- ``{"type": "command", "content": ..., "output"?: ..., "description"?: ...}``
- ``{"type": "script", "path": ..., "output"?: ..., "description"?: ...}``

A missing file means "no hooks". Anything else that is not a valid hook
list raises ConfigLoadError or ConfigValidationError.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

from acmoj_presubmit.constants import (
    ACMOJ_DIR_NAME,
    PRE_SUBMIT_FILE_NAME,
    PRE_SUBMIT_RELATIVE_PATH,
    STEP_TYPE_ACTION,
    STEP_TYPE_COMMAND,
    STEP_TYPE_SCRIPT,
    VALID_STEP_TYPES,
)

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Raised when the hook list does not have the expected shape."""

    pass


class ConfigLoadError(Exception):
    """Raised when the hook configuration file cannot be read or parsed."""

    pass


class OutputMode(Enum):
    """What happens to a command/script step's captured output."""

    IGNORE = "ignore"
    SHOW = "show"
    PIPE = "pipe"
    SUBMIT = "submit"


VALID_OUTPUT_MODES = tuple(mode.value for mode in OutputMode)


def _check_unknown_fields(
    data: dict[str, Any], known: set[str], index: int | None
) -> None:
    # Keys starting with "_" are comments (see generate_config_template).
    unknown = {k for k in data if k not in known and not k.startswith("_")}
    if unknown:
        raise ConfigValidationError(
            f"{_where(index)}unknown fields: {', '.join(sorted(unknown))}"
        )


def _where(index: int | None) -> str:
    return f"hook #{index + 1}: " if index is not None else ""


def _require_str(data: dict[str, Any], key: str, index: int | None) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ConfigValidationError(
            f"{_where(index)}'{key}' is required and must be a string"
        )
    return value


def _optional_str(data: dict[str, Any], key: str, index: int | None) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigValidationError(f"{_where(index)}'{key}' must be a string")
    return value


def _parse_output_mode(data: dict[str, Any], index: int | None) -> OutputMode:
    value = data.get("output")
    if value is None:
        return OutputMode.IGNORE
    try:
        return OutputMode(value)
    except ValueError:
        raise ConfigValidationError(
            f"{_where(index)}invalid output '{value}'. "
            f"Valid values: {', '.join(VALID_OUTPUT_MODES)}"
        )


@dataclass(frozen=True)
class ActionStep:
    """Invoke a named editor action."""

    name: str
    description: str | None = None

    type = STEP_TYPE_ACTION

    def default_label(self) -> str:
        return self.name

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        result = {"type": self.type, "name": self.name, "description": self.description}
        if exclude_none:
            return {k: v for k, v in result.items() if v is not None}
        return result

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], strict: bool = False, index: int | None = None
    ) -> ActionStep:
        if strict:
            _check_unknown_fields(data, {"type", "name", "description"}, index)
        return cls(
            name=_require_str(data, "name", index),
            description=_optional_str(data, "description", index),
        )


@dataclass(frozen=True)
class CommandStep:
    """Run a shell command line."""

    content: str
    output: OutputMode = OutputMode.IGNORE
    description: str | None = None

    type = STEP_TYPE_COMMAND

    def default_label(self) -> str:
        return self.content.split(" ")[0]

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        result = {
            "type": self.type,
            "content": self.content,
            "output": self.output.value,
            "description": self.description,
        }
        if exclude_none:
            return {k: v for k, v in result.items() if v is not None}
        return result

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], strict: bool = False, index: int | None = None
    ) -> CommandStep:
        if strict:
            _check_unknown_fields(data, {"type", "content", "output", "description"}, index)
        return cls(
            content=_require_str(data, "content", index),
            output=_parse_output_mode(data, index),
            description=_optional_str(data, "description", index),
        )


@dataclass(frozen=True)
class ScriptStep:
    """Run a script, path relative to the project root."""

    path: str
    output: OutputMode = OutputMode.IGNORE
    description: str | None = None

    type = STEP_TYPE_SCRIPT

    def default_label(self) -> str:
        return os.path.basename(self.path)

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        result = {
            "type": self.type,
            "path": self.path,
            "output": self.output.value,
            "description": self.description,
        }
        if exclude_none:
            return {k: v for k, v in result.items() if v is not None}
        return result

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], strict: bool = False, index: int | None = None
    ) -> ScriptStep:
        if strict:
            _check_unknown_fields(data, {"type", "path", "output", "description"}, index)
        return cls(
            path=_require_str(data, "path", index),
            output=_parse_output_mode(data, index),
            description=_optional_str(data, "description", index),
        )


HookStep = Union[ActionStep, CommandStep, ScriptStep]

_STEP_CLASSES: dict[str, type] = {
    STEP_TYPE_ACTION: ActionStep,
    STEP_TYPE_COMMAND: CommandStep,
    STEP_TYPE_SCRIPT: ScriptStep,
}


def display_name(step: HookStep, index: int) -> str:
    """Human-readable name for a step: description, derived label, or position."""
    return step.description or step.default_label() or f"hook #{index + 1}"


def parse_hook_step(
    data: Any, strict: bool = False, index: int | None = None
) -> HookStep:
    """Create a HookStep from one decoded JSON element.

    Raises:
        ConfigValidationError: If the element is not a valid hook.
    """
    if not isinstance(data, dict):
        raise ConfigValidationError(f"{_where(index)}each hook must be a JSON object")

    step_type = data.get("type")
    step_class = _STEP_CLASSES.get(step_type) if isinstance(step_type, str) else None
    if step_class is None:
        raise ConfigValidationError(
            f"{_where(index)}invalid type '{step_type}'. "
            f"Valid types: {', '.join(VALID_STEP_TYPES)}"
        )
    return step_class.from_dict(data, strict=strict, index=index)


def parse_hook_list(data: Any, strict: bool = False) -> list[HookStep]:
    """Create the ordered hook list from decoded JSON.

    Raises:
        ConfigValidationError: If data is not an array of valid hooks.
    """
    if not isinstance(data, list):
        raise ConfigValidationError(f"{PRE_SUBMIT_RELATIVE_PATH} should be an array.")
    return [parse_hook_step(item, strict=strict, index=i) for i, item in enumerate(data)]


def get_pre_submit_path(project_root: Path) -> Path:
    """Get path to the pre-submit hook file for a project."""
    return project_root / ACMOJ_DIR_NAME / PRE_SUBMIT_FILE_NAME


def load_hook_list(project_root: Path, strict: bool = False) -> list[HookStep]:
    """Load the hook list for a project.

    Args:
        project_root: Directory containing .acmoj/
        strict: If True, fail on unknown fields in hook objects

    Returns:
        Ordered hook list (empty when the file does not exist)

    Raises:
        ConfigLoadError: If the file cannot be read or is not valid JSON
        ConfigValidationError: If the JSON is not a valid hook list
    """
    path = get_pre_submit_path(project_root)
    if not path.exists():
        logger.debug("No hook file at %s", path)
        return []

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigLoadError(f"Permission denied reading {path}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadError(f"Error reading {path}: {e}")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON in {path}: {e}")

    hooks = parse_hook_list(data, strict=strict)
    logger.debug("Loaded %d hook(s) from %s", len(hooks), path)
    return hooks


def generate_config_template() -> list[dict[str, Any]]:
    """Generate an example hook list.

    Returns:
        List suitable for JSON serialization
    """
    return [
        {
            "type": "action",
            "name": "editor.action.trimTrailingWhitespace",
            "description": "Trim trailing whitespace",
            "_comment": "Editor action run against the file; content is re-read afterwards",
        },
        {
            "type": "command",
            "content": "g++ -std=c++17 -fsyntax-only ${ACMOJ_FILE_NAME}",
            "output": "show",
            "description": "Syntax check",
            "_comment": f"Shell command run in the file's directory. Output: {', '.join(VALID_OUTPUT_MODES)}",
        },
        {
            "type": "script",
            "path": ".acmoj/bundle.sh",
            "output": "submit",
            "description": "Bundle headers",
            "_comment": "Script relative to the project root; stdout becomes the submitted code",
        },
    ]


def generate_config_template_string() -> str:
    """Generate the example hook list as a formatted JSON string."""
    return json.dumps(generate_config_template(), indent=2) + "\n"
