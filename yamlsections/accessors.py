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

"""Typed accessors layered over the generic ``Section.get``.

Every accessor is a best-effort cast of whatever is stored at a path.
Nothing here raises: a value that cannot be converted unambiguously is
replaced by the accessor's default.

Conversion rules:
    - bool is never treated as a number (``True`` is not ``1``)
    - int and float widen into each other (float -> int truncates)
    - numeric strings are parsed (``"42"`` -> 42)
    - ``"true"``/``"false"`` in any case are parsed as booleans
    - strings are produced from scalars only, never from lists or sections

When no explicit default is passed, the single-value accessors use the
overlay default for the path (converted with the same rules) and then the
type's zero value.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

_UNSET: Any = object()


def to_string(value: Any) -> str | None:
    if value is None or isinstance(value, (list, tuple, Mapping)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float, date)):
        return str(value)
    return None


def to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def to_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def to_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return None


class TypedAccessorsMixin:
    """Typed getters mixed into Section.

    Relies on the host class providing ``get(path, fallback)`` and
    ``default_value(path)``.
    """

    get: Callable[..., Any]
    default_value: Callable[[str], Any]

    def _resolve_default(
        self,
        path: str,
        default: Any,
        convert: Callable[[Any], Any],
        zero: Any,
    ) -> Any:
        if default is not _UNSET:
            return default
        converted = convert(self.default_value(path))
        return zero if converted is None else converted

    def get_string(self, path: str, default: Any = _UNSET) -> str | None:
        """String at ``path``; default None."""
        default = self._resolve_default(path, default, to_string, None)
        value = to_string(self.get(path, None))
        return default if value is None else value

    def get_int(self, path: str, default: Any = _UNSET) -> int:
        """Integer at ``path``; default 0."""
        default = self._resolve_default(path, default, to_int, 0)
        value = to_int(self.get(path, None))
        return default if value is None else value

    def get_float(self, path: str, default: Any = _UNSET) -> float:
        """Float at ``path``; default 0.0."""
        default = self._resolve_default(path, default, to_float, 0.0)
        value = to_float(self.get(path, None))
        return default if value is None else value

    def get_bool(self, path: str, default: Any = _UNSET) -> bool:
        """Boolean at ``path``; default False."""
        default = self._resolve_default(path, default, to_bool, False)
        value = to_bool(self.get(path, None))
        return default if value is None else value

    def get_list(self, path: str, default: Any = _UNSET) -> list[Any] | None:
        """List at ``path``; default is the overlay list or None."""
        if default is _UNSET:
            overlay = self.default_value(path)
            default = overlay if isinstance(overlay, list) else None
        value = self.get(path, None)
        return value if isinstance(value, list) else default

    # List accessors never return None; a missing list is empty.

    def get_string_list(self, path: str) -> list[str]:
        result = []
        for item in self.get_list(path) or []:
            converted = to_string(item)
            if converted is not None:
                result.append(converted)
        return result

    def get_int_list(self, path: str) -> list[int]:
        """Integers in the list at ``path``.

        Unparseable strings become 0 and booleans are skipped.
        """
        result = []
        for item in self.get_list(path) or []:
            if isinstance(item, str):
                result.append(to_int(item) or 0)
            elif isinstance(item, (int, float)) and not isinstance(item, bool):
                converted = to_int(item)
                if converted is not None:
                    result.append(converted)
        return result

    def get_float_list(self, path: str) -> list[float]:
        result = []
        for item in self.get_list(path) or []:
            if isinstance(item, str):
                result.append(to_float(item) or 0.0)
            elif isinstance(item, (int, float)) and not isinstance(item, bool):
                result.append(float(item))
        return result

    def get_bool_list(self, path: str) -> list[bool]:
        result = []
        for item in self.get_list(path) or []:
            if isinstance(item, bool):
                result.append(item)
            elif isinstance(item, str):
                result.append(item.strip().lower() == "true")
        return result

    def get_map_list(self, path: str) -> list[Mapping[Any, Any]]:
        return [item for item in self.get_list(path) or [] if isinstance(item, Mapping)]

    def is_string(self, path: str) -> bool:
        return isinstance(self.get(path, None), str)

    def is_int(self, path: str) -> bool:
        value = self.get(path, None)
        return isinstance(value, int) and not isinstance(value, bool)

    def is_float(self, path: str) -> bool:
        return isinstance(self.get(path, None), float)

    def is_bool(self, path: str) -> bool:
        return isinstance(self.get(path, None), bool)

    def is_list(self, path: str) -> bool:
        return isinstance(self.get(path, None), list)
