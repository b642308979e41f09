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

"""Editor actions for ``action`` hooks.

An action is a named callable that receives the document. Built-in actions
edit file documents in place. Any other name of the form
``package.module:function`` is imported and called with the document.
"""

from __future__ import annotations

import importlib
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable

from acmoj_presubmit.document import DocumentProvider, FileDocument

logger = logging.getLogger(__name__)

Action = Callable[[DocumentProvider], None]

# Dotted import path: package.module:function
ACTION_PATH_PATTERN = re.compile(r"^[A-Za-z_][\w.]*:[A-Za-z_]\w*$")


class ActionError(Exception):
    """Raised when an editor action is unknown or fails."""

    pass


class ActionInvoker(ABC):
    """Runs named editor actions."""

    @abstractmethod
    def invoke(self, action_id: str, document: DocumentProvider) -> None:
        """Run an action against the document.

        Raises:
            ActionError: If the action is unknown or raises.
        """
        pass


def _require_file_document(document: DocumentProvider, action_id: str) -> FileDocument:
    if not isinstance(document, FileDocument):
        raise ActionError(f"Action '{action_id}' requires a file document")
    return document


def trim_trailing_whitespace(document: DocumentProvider) -> None:
    doc = _require_file_document(document, "editor.action.trimTrailingWhitespace")
    text = doc.get_text()
    trimmed = "\n".join(line.rstrip() for line in text.split("\n"))
    if trimmed != text:
        doc.set_text(trimmed)


def insert_final_newline(document: DocumentProvider) -> None:
    doc = _require_file_document(document, "acmoj.insertFinalNewline")
    text = doc.get_text()
    if text and not text.endswith("\n"):
        doc.set_text(text + "\n")


def save_document(document: DocumentProvider) -> None:
    # File documents are always saved.
    pass


BUILTIN_ACTIONS: dict[str, Action] = {
    "editor.action.trimTrailingWhitespace": trim_trailing_whitespace,
    "acmoj.insertFinalNewline": insert_final_newline,
    "workbench.action.files.save": save_document,
}


class ActionRegistry(ActionInvoker):
    """Action invoker backed by a name -> callable registry."""

    def __init__(self, actions: dict[str, Action] | None = None, include_builtins: bool = True):
        self._actions: dict[str, Action] = dict(BUILTIN_ACTIONS) if include_builtins else {}
        if actions:
            self._actions.update(actions)

    def register(self, name: str, action: Action) -> None:
        """Register (or replace) an action."""
        self._actions[name] = action

    def names(self) -> list[str]:
        return sorted(self._actions)

    def resolve(self, action_id: str) -> Action:
        """Look up an action by name or import path.

        Raises:
            ActionError: If the action cannot be found.
        """
        action = self._actions.get(action_id)
        if action is not None:
            return action

        if ACTION_PATH_PATTERN.match(action_id):
            return self._load_action(action_id)

        raise ActionError(f"Unknown action '{action_id}'")

    def invoke(self, action_id: str, document: DocumentProvider) -> None:
        action = self.resolve(action_id)
        logger.debug("Invoking action %s on %s", action_id, document.get_path())
        try:
            action(document)
        except ActionError:
            raise
        except Exception as e:
            raise ActionError(f"Action '{action_id}' failed: {e}") from e

    def _load_action(self, action_path: str) -> Action:
        """Load a callable from a ``module:function`` path.

        Raises:
            ActionError: If the module or attribute cannot be loaded
        """
        module_path, func_name = action_path.split(":", 1)
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            raise ActionError(f"Unknown action '{action_path}': {e}") from e

        func = getattr(module, func_name, None)
        if not callable(func):
            raise ActionError(
                f"Unknown action '{action_path}': {func_name} is not a callable in {module_path}"
            )
        return func
