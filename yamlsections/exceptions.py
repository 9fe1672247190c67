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

"""Exception hierarchy for yamlsections.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- InvalidConfigurationError: YAML text could not be turned into a section
  tree (parse errors, non-mapping top level)
- SectionNotFoundError: A caller demanded a section that does not exist
- UnsupportedOperationError: An operation that only the root section
  supports was attempted on a child section

All exceptions inherit from YamlSectionsError, allowing users to catch all
library errors with a single except clause if needed.

Invalid arguments (empty paths, bad separators, out-of-range indent) are
reported with the builtin ValueError, and I/O failures propagate as the
OSError raised by the backing store.

Example:
    Catching specific error types:
        ```python
        from yamlsections import Configuration
        from yamlsections.exceptions import InvalidConfigurationError

        config = Configuration("config.yml")
        try:
            config.load()
        except InvalidConfigurationError as e:
            print(f"Broken config file: {e}")
        except FileNotFoundError:
            print("No config file yet")
        ```
"""

from __future__ import annotations

__all__ = [
    "YamlSectionsError",
    "InvalidConfigurationError",
    "SectionNotFoundError",
    "UnsupportedOperationError",
]


class YamlSectionsError(Exception):
    """Base exception for all yamlsections errors.

    All library-specific exceptions inherit from this class, allowing users
    to catch all of them with a single except clause if needed.
    """

    pass


class InvalidConfigurationError(YamlSectionsError):
    """Raised when YAML text cannot be loaded into a section tree.

    This exception is raised when:

    - The YAML parser rejects the text (syntax errors)
    - The top-level document is not a mapping (e.g. a list or a scalar)

    The underlying parser error, if any, is chained as ``__cause__``.

    Example:
        Catching configuration errors:
            ```python
            from yamlsections.exceptions import InvalidConfigurationError

            try:
                section.load_from_string("- just\\n- a list\\n")
            except InvalidConfigurationError as e:
                print(f"Config error: {e}")
            ```
    """

    pass


class SectionNotFoundError(YamlSectionsError, LookupError):
    """Raised when a section is required at a path but none exists.

    Plain lookups never raise; they return None or the caller's fallback.
    Only ``Section.require_section`` raises this error.

    Attributes:
        path: The path that did not resolve to a section.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"No section found at path: {path!r}")
        self.path = path


class UnsupportedOperationError(YamlSectionsError):
    """Raised for operations only the root section supports.

    Only the root of a tree may own a defaults tree. Assigning one to a
    child section raises this error.
    """

    pass
