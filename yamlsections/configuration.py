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

"""Configuration: a root section bound to a backing store.

Configuration is the entry point for file-backed use. It is a Section with
no parent plus a store that ``load()`` reads the whole YAML text from and
``save()`` writes the whole text to.

Key Features:

- Whole-document load and save (no partial or streaming I/O)
- Comment header preserved across load/save
- Optional defaults tree consulted for missing paths, never written out
- I/O errors propagate unchanged; parse errors raise
  InvalidConfigurationError

Example:
    File-backed configuration:
        ```python
        from yamlsections import Configuration

        config = Configuration("config.yml")
        config.load()
        config.set("server.port", 8081)
        config.save()
        ```

    Shipping defaults without writing them to the user's file:
        ```python
        config = Configuration("config.yml", defaults={"server": {"port": 8080}})
        config.load()
        config.get_int("server.port")  # 8080 unless the file sets it
        ```

Note:
    Save is all-or-nothing from this library's point of view. Callers that
    need atomic replacement should save to a temporary file and rename it.
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path
from typing import Any

from yamlsections.logging import get_global_logger
from yamlsections.options import Options
from yamlsections.section import Section
from yamlsections.serialization import deserialize, serialize
from yamlsections.store import FileStore, MemoryStore, TextStore


class Configuration(Section):
    """Root section bound to a backing text store.

    Attributes:
        store: Where ``load()`` reads from and ``save()`` writes to.

    Example:
        Basic usage:
            ```python
            config = Configuration(Path("settings.yml"))
            config.load()
            name = config.get_string("app.name", "unnamed")
            config["app.runs"] = config.get_int("app.runs") + 1
            config.save()
            ```
    """

    def __init__(
        self,
        source: str | os.PathLike[str] | TextStore | None = None,
        *,
        options: Options | None = None,
        defaults: Section | Mapping[Any, Any] | None = None,
    ) -> None:
        """Initialize an empty configuration.

        Nothing is read until ``load()`` is called.

        Args:
            source: File path (str or PathLike) or any TextStore. None uses
                an empty MemoryStore.
            options: Options for the tree. A fresh Options() if omitted.
            defaults: Optional defaults tree, as a Section or nested mapping.
        """
        super().__init__(options=options)
        if source is None:
            self.store: TextStore = MemoryStore()
        elif isinstance(source, (str, os.PathLike)):
            self.store = FileStore(Path(source))
        else:
            self.store = source
        if defaults is not None:
            self.defaults = defaults

    @classmethod
    def from_string(cls, text: str, **kwargs: Any) -> Configuration:
        """Create a configuration loaded from YAML text held in memory.

        Raises:
            InvalidConfigurationError: If the text is not a YAML mapping.
        """
        config = cls(MemoryStore(text), **kwargs)
        config.load()
        return config

    def load(self) -> None:
        """Read the store and replace the tree with its contents.

        Raises:
            FileNotFoundError: If a file store's file does not exist.
            OSError: If the store cannot be read.
            InvalidConfigurationError: If the text is not a YAML mapping.
        """
        logger = get_global_logger()
        logger.verbose("LOAD", f"Reading configuration: {self.store}")
        text = self.store.read()
        deserialize(self, text)
        logger.verbose("LOAD", f"Loaded {len(self)} top-level key(s)")

    def reload(self) -> None:
        """Discard in-memory changes and load the store again."""
        self.load()

    def save(self) -> None:
        """Serialize the tree and overwrite the store with it.

        Raises:
            OSError: If the store cannot be written.
        """
        logger = get_global_logger()
        text = serialize(self)
        logger.verbose("SAVE", f"Writing configuration: {self.store}")
        logger.debug("SAVE", f"{len(text)} character(s), {len(self)} top-level key(s)")
        self.store.write(text)
