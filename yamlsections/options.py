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

"""Per-tree options controlling path parsing and YAML formatting.

Every Section carries an Options object, but only the root's options are
consulted for path separation and defaults merging. Serialization reads
the options of the section being serialized, which in practice is the
root Configuration.

Setters validate immediately and raise ValueError; values are never
clamped.
"""

from __future__ import annotations

DEFAULT_PATH_SEPARATOR = "."
DEFAULT_INDENT = 2
MIN_INDENT = 2
MAX_INDENT = 9


class Options:
    """Parsing and formatting options for a section tree.

    Attributes:
        path_separator: Single character separating path segments.
            Default is ".".
        copy_defaults: When True, key/value enumeration merges the defaults
            tree first and reads of defaulted paths copy the default into
            the tree. It then becomes impossible to tell set values from
            defaulted ones. Default is False.
        header: Comment header written above the YAML body, one comment
            line per text line. None means "synthesize from defaults".
        copy_header: Whether the header is written when serializing.
            Default is True.
        indent: Spaces per indentation level, between 2 and 9 inclusive.
            Default is 2.

    Example:
        ```python
        options = Options(path_separator="/", indent=4)
        options.indent = 12  # ValueError
        ```
    """

    def __init__(
        self,
        *,
        path_separator: str = DEFAULT_PATH_SEPARATOR,
        copy_defaults: bool = False,
        header: str | None = None,
        copy_header: bool = True,
        indent: int = DEFAULT_INDENT,
    ) -> None:
        self.path_separator = path_separator
        self.copy_defaults = copy_defaults
        self.header = header
        self.copy_header = copy_header
        self.indent = indent

    @property
    def path_separator(self) -> str:
        return self._path_separator

    @path_separator.setter
    def path_separator(self, value: str) -> None:
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError(
                f"Path separator must be a single character, got {value!r}"
            )
        self._path_separator = value

    @property
    def indent(self) -> int:
        return self._indent

    @indent.setter
    def indent(self, value: int) -> None:
        if (
            isinstance(value, bool)
            or not isinstance(value, int)
            or not MIN_INDENT <= value <= MAX_INDENT
        ):
            raise ValueError(
                f"Indent must be between {MIN_INDENT} and {MAX_INDENT}, got {value!r}"
            )
        self._indent = value

    def copy(self) -> Options:
        """Return an independent copy of these options."""
        return Options(
            path_separator=self.path_separator,
            copy_defaults=self.copy_defaults,
            header=self.header,
            copy_header=self.copy_header,
            indent=self.indent,
        )

    def __repr__(self) -> str:
        return (
            f"Options(path_separator={self.path_separator!r}, "
            f"copy_defaults={self.copy_defaults!r}, header={self.header!r}, "
            f"copy_header={self.copy_header!r}, indent={self.indent!r})"
        )
