# Copyright 2025 Roger Cibrian
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

"""Backing stores for configuration text.

A Configuration reads and writes its whole YAML text through a store. Two
implementations are provided:

- FileStore: a UTF-8 file on disk
- MemoryStore: an in-memory string, handy for tests and for configs built
  from text received some other way

Any object with ``read() -> str`` and ``write(text) -> None`` methods can be
used instead.

Error Handling:
    Stores do not catch I/O errors. FileNotFoundError, PermissionError and
    other OSError subclasses propagate to the caller unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class TextStore(Protocol):
    """Protocol for a whole-text source/sink."""

    def read(self) -> str:
        """Return the entire stored text."""
        ...

    def write(self, text: str) -> None:
        """Replace the entire stored text."""
        ...


class FileStore:
    """Store backed by a UTF-8 text file.

    Attributes:
        path: Location of the file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> str:
        """Read the file.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read.
        """
        with open(self.path, encoding="utf-8") as f:
            return f.read()

    def write(self, text: str) -> None:
        """Overwrite the file, creating parent directories if needed.

        Raises:
            OSError: If the file cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)

    def __str__(self) -> str:
        return str(self.path)

    def __repr__(self) -> str:
        return f"FileStore({str(self.path)!r})"


class MemoryStore:
    """Store holding its text in memory.

    Attributes:
        text: The current contents.
    """

    def __init__(self, text: str = "") -> None:
        self.text = text

    def read(self) -> str:
        return self.text

    def write(self, text: str) -> None:
        self.text = text

    def __str__(self) -> str:
        return "<memory>"

    def __repr__(self) -> str:
        return f"MemoryStore(len={len(self.text)})"
