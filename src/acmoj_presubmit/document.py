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

"""Document provider: the source file the hooks run for."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable
from pathlib import Path


class DocumentProvider(ABC):
    """Source document about to be submitted.

    identity() returns an opaque token for the document currently active.
    If it differs before and after an editor action, the action moved the
    user to a different document. Saving the same document, even by
    replacing the file, must not change it.
    """

    @abstractmethod
    def get_path(self) -> Path:
        """Absolute path of the document."""
        pass

    @abstractmethod
    def get_text(self) -> str:
        """Current document text."""
        pass

    @abstractmethod
    def identity(self) -> Hashable:
        """Opaque identity token of the active resource."""
        pass


class FileDocument(DocumentProvider):
    """A document backed by a file on disk."""

    def __init__(self, path: Path | str, encoding: str = "utf-8"):
        self.path = Path(path).absolute()
        self.encoding = encoding

    def get_path(self) -> Path:
        return self.path

    def get_text(self) -> str:
        return self.path.read_text(encoding=self.encoding)

    def set_text(self, text: str) -> None:
        """Rewrite the file."""
        self.path.write_text(text, encoding=self.encoding)

    def identity(self) -> Hashable:
        # Keyed by location, like an editor URI.
        return self.path.resolve()

    def __repr__(self) -> str:
        return f"FileDocument({str(self.path)!r})"
