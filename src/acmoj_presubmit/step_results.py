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

"""Result schemas for hook steps and pipeline runs.

Each step type has a specific schema for its JSON output. The run result
is what the CLI prints with ``--format json``.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any
import json


@dataclass
class HookStepResultBase:
    """Base class for hook step results."""

    success: bool
    step_type: str = ""
    display_name: str = ""
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    error: str | None = None

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(asdict(self), default=str)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class ActionStepResult(HookStepResultBase):
    """Result from an action hook step.

    content_refreshed is False when the active document changed during
    the action and the previous content was kept.
    """

    action: str = ""
    content_refreshed: bool = False


@dataclass
class ProcessStepResult(HookStepResultBase):
    """Result from a command or script hook step."""

    command: str = ""
    output_mode: str = "ignore"
    stdout: str = ""
    stderr: str = ""
    duration_seconds: float = 0.0


# Type alias for hook step results
HookStepResult = ActionStepResult | ProcessStepResult


@dataclass(frozen=True)
class PreSubmitResult:
    """Outcome of a pre-submit run.

    error is set only for configuration problems; callers must not submit
    when it is set. Step failures are raised, never stored here.
    """

    content: str
    output_used: bool = False
    error: str | None = None
    steps: tuple[HookStepResult, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "output_used": self.output_used,
            "error": self.error,
            "steps": [step.to_dict() for step in self.steps],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)
