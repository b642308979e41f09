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

"""Per-run execution context shared by the pipeline steps."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from acmoj_presubmit.constants import (
    VAR_FILE_CONTENT,
    VAR_FILE_DIR,
    VAR_FILE_NAME,
    VAR_FILE_NAME_NO_SUFFIX,
    VAR_FILE_PATH,
)


def file_name_without_suffix(file_name: str) -> str:
    """Strip everything from the last '.' on; names without '.' are kept."""
    if "." in file_name:
        return file_name[: file_name.rindex(".")]
    return file_name


@dataclass(frozen=True)
class FileInfo:
    """Fixed facts about the file the hooks run for."""

    path: str
    name: str
    name_no_suffix: str
    directory: str

    @classmethod
    def from_path(cls, path: Path | str) -> FileInfo:
        path = os.path.abspath(path)
        name = os.path.basename(path)
        return cls(
            path=path,
            name=name,
            name_no_suffix=file_name_without_suffix(name),
            directory=os.path.dirname(path),
        )


@dataclass
class ExecutionContext:
    """Mutable state for one pipeline run.

    Owned by the pipeline controller. Steps and the output router change it
    only through the methods below.
    """

    file: FileInfo
    project_root: Path
    current_content: str
    _pending_stdin: str | None = field(default=None, repr=False)
    _submit_accumulator: list[str] = field(default_factory=list, repr=False)
    _output_used: bool = field(default=False, repr=False)

    @property
    def pending_stdin(self) -> str | None:
        return self._pending_stdin

    @property
    def submit_outputs(self) -> tuple[str, ...]:
        return tuple(self._submit_accumulator)

    @property
    def output_used(self) -> bool:
        return self._output_used

    def variables(self) -> dict[str, str]:
        """Hook variables for the current step."""
        return {
            VAR_FILE_PATH: self.file.path,
            VAR_FILE_NAME: self.file.name,
            VAR_FILE_NAME_NO_SUFFIX: self.file.name_no_suffix,
            VAR_FILE_DIR: self.file.directory,
            VAR_FILE_CONTENT: self.current_content,
        }

    def refresh_file_content(self, content: str) -> None:
        self.current_content = content

    def set_pending_stdin(self, stdin: str) -> None:
        self._pending_stdin = stdin

    def take_pending_stdin(self) -> str | None:
        """Return the pending stdin and clear it."""
        stdin, self._pending_stdin = self._pending_stdin, None
        return stdin

    def clear_pending_stdin(self) -> None:
        self._pending_stdin = None

    def append_submit_output(self, output: str) -> None:
        self._submit_accumulator.append(output)
        self._output_used = True
