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

"""Path splitting and joining for section trees.

A path is a string of segments joined by a single-character separator,
for example ``"server.http.port"``. There is no escaping: a key that
contains the separator cannot be addressed by path. The empty path means
"this section itself"; any other path with an empty segment (``"a..b"``,
``".a"``, ``"a."``) is invalid.

The separator is a lookup-time parameter supplied by the caller (normally
``section.root.options.path_separator``); nothing here stores it.
"""

from __future__ import annotations

from collections.abc import Iterable


def split_path(path: str, separator: str) -> list[str]:
    """Split a path into its segments.

    Args:
        path: Path to split. ``""`` yields no segments.
        separator: Single-character separator.

    Returns:
        The segments in order, root-most first.

    Raises:
        ValueError: If any segment is empty.

    Example:
        ```python
        split_path("a.b.c", ".")  # ["a", "b", "c"]
        split_path("", ".")       # []
        ```
    """
    if path == "":
        return []
    segments = path.split(separator)
    if "" in segments:
        raise ValueError(f"Path {path!r} contains an empty segment")
    return segments


def split_first(path: str, separator: str) -> tuple[str, str | None]:
    """Split off the first segment of a path.

    Returns:
        A ``(head, rest)`` tuple; ``rest`` is None when the path has a
        single segment.
    """
    head, sep, rest = path.partition(separator)
    return head, (rest if sep else None)


def join_path(segments: Iterable[str], separator: str) -> str:
    """Join non-empty segments with the separator."""
    return separator.join(s for s in segments if s)
