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

"""Hierarchical section tree with a read-only defaults overlay.

A Section is a node holding an insertion-ordered mapping from local key to
value, where a value is a scalar (str, int, float, bool, date), a list, or
a child Section. Nodes are addressed by delimited paths such as
``"server.http.port"``; the separator comes from the root's options.

Ownership flows top-down: a parent owns its children through its entries
mapping and each child keeps a plain reference back to its parent. When an
entry holding a child section is removed or overwritten, the child is
orphaned. Its ``parent``, ``root`` and ``full_path`` still describe the old
position and are unsupported from then on.

Defaults Overlay:
    Only the root owns a defaults tree. A lookup that misses the primary
    tree is answered from the defaults tree at the same absolute path. The
    primary tree is never modified by such reads unless
    ``options.copy_defaults`` is enabled.

Example:
    Basic usage:
        ```python
        from yamlsections import Section

        root = Section()
        root.set("server.http.port", 8080)
        root.create_section("server.tls")["enabled"] = True

        root.get("server.http.port")                     # 8080
        root.get_section("server").get("tls.enabled")    # True
        root.keys(deep=True)
        # ["server", "server.http", "server.http.port",
        #  "server.tls", "server.tls.enabled"]
        ```

    Defaults:
        ```python
        root.add_default("server.http.timeout", 30)
        root.get("server.http.timeout")          # 30 (from defaults)
        root.is_path_set("server.http.timeout")  # False
        ```
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import copy
from typing import Any

from yamlsections.accessors import TypedAccessorsMixin
from yamlsections.exceptions import SectionNotFoundError, UnsupportedOperationError
from yamlsections.options import Options
from yamlsections.paths import join_path, split_first, split_path

_MISSING: Any = object()


class Section(TypedAccessorsMixin):
    """A node of the section tree.

    Attributes:
        options: Parsing/formatting options. Only the root's options decide
            the path separator and defaults merging.

    Note:
        Sections compare by identity. Use ``to_dict()`` or
        ``values(deep=True)`` to compare contents.
    """

    def __init__(
        self,
        parent: Section | None = None,
        name: str = "",
        *,
        options: Options | None = None,
    ) -> None:
        self._parent = parent
        self._name = name
        self._entries: dict[str, Any] = {}
        self._defaults: Section | None = None
        self.options = options if options is not None else Options()

    # -------------------------------
    # Tree structure
    # -------------------------------

    @property
    def name(self) -> str:
        """Local key of this section under its parent ("" for a root)."""
        return self._name

    @property
    def parent(self) -> Section | None:
        return self._parent

    @property
    def root(self) -> Section:
        """The section reached by following parents; a root is its own root."""
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    @property
    def full_path(self) -> str:
        """Absolute path of this section from its root ("" for a root).

        Recomputed on every access from the current parent chain.
        """
        return self.create_path()

    @property
    def _separator(self) -> str:
        return self.root.options.path_separator

    def create_path(
        self, key: str | None = None, relative_to: Section | None = None
    ) -> str:
        """Build the path of ``key`` inside this section.

        Walks parent links from this section up to ``relative_to`` (the
        root when omitted, which is excluded from the path) and appends
        ``key`` if given.

        Args:
            key: Optional key inside this section to append.
            relative_to: Ancestor the path should be relative to.

        Returns:
            The joined path, using the root's current separator.
        """
        stop = self.root if relative_to is None else relative_to
        names: list[str] = []
        node: Section | None = self
        while node is not None and node is not stop:
            names.append(node._name)
            node = node._parent
        names.reverse()
        if key:
            names.append(key)
        return join_path(names, self._separator)

    def _new_child(self, key: str) -> Section:
        # Overwrites (and orphans) whatever the key held before.
        child = Section(self, key)
        self._entries[key] = child
        return child

    def _fill(self, mapping: Mapping[Any, Any], copy_sections: bool = False) -> None:
        """Store a nested mapping; nested mappings become child sections.

        Section values are copied when ``copy_sections`` is True and
        rejected with TypeError otherwise.
        """
        for raw_key, value in mapping.items():
            key = str(raw_key)
            if isinstance(value, Section) and copy_sections:
                self._new_child(key)._copy_from(value)
            elif isinstance(value, Mapping):
                self._new_child(key)._fill(value, copy_sections)
            elif value is None:
                self._entries.pop(key, None)
            else:
                _check_value(value)
                self._entries[key] = value

    def _copy_from(self, other: Section) -> None:
        for key, value in other._entries.items():
            if isinstance(value, Section):
                self._new_child(key)._copy_from(value)
            else:
                self._entries[key] = copy.deepcopy(value)

    def _replace_entries(self, mapping: Mapping[Any, Any]) -> None:
        self._entries.clear()
        self._fill(mapping)

    def _walk_to(self, segments: list[str], create: bool) -> Section | None:
        """Descend through ``segments``, creating missing sections if asked.

        Existing leaf values along the way are overwritten only when
        ``create`` is True.
        """
        current = self
        for segment in segments:
            child = current._entries.get(segment)
            if not isinstance(child, Section):
                if not create:
                    return None
                child = current._new_child(segment)
            current = child
        return current

    # -------------------------------
    # Lookups
    # -------------------------------

    def _lookup(self, path: str, separator: str) -> Any:
        """Raw own-tree lookup splitting on the first separator only."""
        if path == "":
            return self
        head, rest = split_first(path, separator)
        if rest is None:
            return self._entries.get(head)
        child = self._entries.get(head)
        if not rest or not isinstance(child, Section):
            return None
        return child._lookup(rest, separator)

    def _lookup_strict(self, path: str, fallback: Any) -> Any:
        if path == "":
            return self
        segments = path.split(self._separator)
        current = self._walk_to(segments[:-1], create=False)
        if current is None:
            return fallback
        value = current._entries.get(segments[-1])
        return fallback if value is None else value

    def get(self, path: str, fallback: Any = _MISSING) -> Any:
        """Get the value stored at ``path``.

        Without ``fallback``, a miss in this tree is answered from the
        root's defaults tree (copying the default into this tree when
        ``copy_defaults`` is on), and None is returned if neither has it.

        With ``fallback``, only this tree is consulted and ``fallback`` is
        returned on a miss, whatever the defaults say.

        The empty path returns this section itself.

        Args:
            path: Path of the value, relative to this section.
            fallback: Value returned when the path is absent.

        Returns:
            A scalar, a list, a child Section, the fallback or None.
        """
        if fallback is not _MISSING:
            return self._lookup_strict(path, fallback)

        value = self._lookup(path, self._separator)
        if value is not None:
            return value

        default = self.default_value(path)
        if default is None or not self.root.options.copy_defaults:
            return default
        return self._copy_default(path, default)

    def _copy_default(self, path: str, default: Any) -> Any:
        """Copy a resolved default into this tree and return the copy.

        The default is returned uncopied when a leaf value sits on one of
        the intermediate segments, since copying would overwrite it.
        """
        segments = split_path(path, self._separator)
        parent: Section = self
        for segment in segments[:-1]:
            child = parent._entries.get(segment)
            if child is None:
                parent = parent._new_child(segment)
            elif isinstance(child, Section):
                parent = child
            else:
                return default
        key = segments[-1]
        if isinstance(default, Section):
            section = parent._new_child(key)
            section._copy_from(default)
            return section
        parent._entries[key] = copy.deepcopy(default)
        return parent._entries[key]

    def set(self, path: str, value: Any) -> None:
        """Set ``path`` to ``value``, creating intermediate sections.

        Intermediate segments that already hold a section are reused;
        segments that are missing or hold a leaf value become new empty
        sections. Setting None removes the entry (and creates nothing).
        A mapping value is stored as a new section, like ``create_section``.

        Raises:
            ValueError: If the path is empty or has an empty segment.
            TypeError: If ``value`` is (or contains) a Section. Use
                ``create_section`` to get an owned child section.
        """
        segments = split_path(path, self._separator)
        if not segments:
            raise ValueError("Cannot set a value at an empty path")
        _check_value(value)
        if isinstance(value, Mapping):
            self._create(segments, value)
            return
        self._set_segments(segments, value)

    def _set_segments(self, segments: list[str], value: Any) -> None:
        parent = self._walk_to(segments[:-1], create=value is not None)
        if parent is None:
            return
        if value is None:
            parent._entries.pop(segments[-1], None)
        else:
            parent._entries[segments[-1]] = value

    def create_section(
        self, path: str, values: Mapping[Any, Any] | None = None
    ) -> Section:
        """Create an empty section at ``path``.

        Missing intermediate sections are created. Whatever was stored at
        the final segment is overwritten; a section stored there is
        orphaned.

        Args:
            path: Non-empty path of the new section.
            values: Optional mapping to populate the section with. Nested
                mappings become nested sections.

        Returns:
            The newly created section.

        Raises:
            ValueError: If the path is empty or has an empty segment.
            TypeError: If ``values`` contains a Section.
        """
        segments = split_path(path, self._separator)
        if not segments:
            raise ValueError("Cannot create a section at an empty path")
        if values is not None:
            _check_value(values)
        return self._create(segments, values)

    def _create(
        self, segments: list[str], values: Mapping[Any, Any] | None
    ) -> Section:
        parent = self._walk_to(segments[:-1], create=True)
        assert parent is not None
        section = parent._new_child(segments[-1])
        if values is not None:
            section._fill(values)
        return section

    def get_section(self, path: str) -> Section | None:
        """Get the section at ``path``.

        Falls back to the defaults tree when this tree has nothing at the
        path. Returns None if the path is absent or holds a leaf value.
        """
        value = self.get(path)
        return value if isinstance(value, Section) else None

    def require_section(self, path: str) -> Section:
        """Like ``get_section`` but raise when there is no section.

        Raises:
            SectionNotFoundError: If no section exists at ``path``.
        """
        section = self.get_section(path)
        if section is None:
            raise SectionNotFoundError(self.create_path(path))
        return section

    def is_section(self, path: str) -> bool:
        """Whether this tree (defaults ignored) holds a section at ``path``."""
        return isinstance(self._lookup(path, self._separator), Section)

    def contains(self, path: str, ignore_default: bool = False) -> bool:
        """Whether ``path`` resolves to a value.

        Args:
            path: Path to check.
            ignore_default: If True, only values set in this tree count.
                Otherwise a value in the defaults tree counts too.
        """
        if self._lookup_strict(path, None) is not None:
            return True
        if ignore_default:
            return False
        return self.default_value(path) is not None

    def is_path_set(self, path: str) -> bool:
        """Whether ``path`` has a value set in this tree.

        With ``copy_defaults`` enabled, defaults count as set.
        """
        if self.root.options.copy_defaults:
            return self.contains(path)
        return self._lookup_strict(path, None) is not None

    # -------------------------------
    # Defaults overlay
    # -------------------------------

    @property
    def defaults(self) -> Section | None:
        """The defaults tree matching this section.

        On the root this is the attached defaults tree. On any other
        section it is the defaults subtree at this section's ``full_path``,
        or None when the defaults have no section there.
        """
        root = self.root
        if root is self:
            return self._defaults
        if root._defaults is None:
            return None
        found = root._defaults._lookup(self.full_path, root.options.path_separator)
        return found if isinstance(found, Section) else None

    @defaults.setter
    def defaults(self, value: Section | Mapping[Any, Any] | None) -> None:
        if self.root is not self:
            raise UnsupportedOperationError(
                "Only the root section can own a defaults tree; "
                "use add_default() to add defaults from a child section"
            )
        if value is not None and not isinstance(value, Section):
            tree = Section(options=Options(path_separator=self.options.path_separator))
            tree._fill(value, copy_sections=True)
            value = tree
        self._defaults = value

    def add_default(self, path: str, value: Any) -> None:
        """Store a default value for ``path``.

        On a child section the path is rewritten relative to the root and
        the call is delegated there. The root creates its defaults tree on
        first use.
        """
        root = self.root
        if root is not self:
            root.add_default(self.create_path(path), value)
            return
        segments = split_path(path, self._separator)
        if not segments:
            raise ValueError("Cannot set a default at an empty path")
        _check_value(value)
        if self._defaults is None:
            self._defaults = Section(
                options=Options(path_separator=self.options.path_separator)
            )
        if isinstance(value, Mapping):
            self._defaults._create(segments, value)
        else:
            self._defaults._set_segments(segments, value)

    def default_value(self, path: str) -> Any:
        """Value of the defaults tree at this section's ``path``, or None."""
        root = self.root
        if root._defaults is None:
            return None
        absolute = self.create_path(path)
        return root._defaults._lookup(absolute, root.options.path_separator)

    # -------------------------------
    # Enumeration
    # -------------------------------

    def _iter_paths(
        self, separator: str, deep: bool, prefix: str = ""
    ) -> Iterator[tuple[str, Any]]:
        for key, value in self._entries.items():
            path = f"{prefix}{separator}{key}" if prefix else key
            yield path, value
            if deep and isinstance(value, Section):
                yield from value._iter_paths(separator, deep, path)

    def _merged_sources(self) -> list[Section]:
        sources: list[Section] = []
        if self.root.options.copy_defaults:
            defaults = self.defaults
            if defaults is not None:
                sources.append(defaults)
        sources.append(self)
        return sources

    def keys(self, deep: bool = False) -> list[str]:
        """Keys of this section, in insertion order.

        Args:
            deep: If True, include every descendant as a path relative to
                this section (sections and their contents alike). If False,
                only the direct keys.

        Returns:
            Unique keys; with ``copy_defaults`` the defaults' keys come
            first.
        """
        separator = self._separator
        seen: dict[str, None] = {}
        for source in self._merged_sources():
            for path, _ in source._iter_paths(separator, deep):
                seen[path] = None
        return list(seen)

    def values(self, deep: bool = False) -> dict[str, Any]:
        """Keys and values of this section, in insertion order.

        Args:
            deep: If True, child sections are expanded into the paths of
                their leaf values instead of appearing as Section values.

        Returns:
            An ordered dict. With ``copy_defaults`` defaults are merged
            first; a key keeps its first position and takes the value from
            this tree, so set values win over defaults.
        """
        separator = self._separator
        result: dict[str, Any] = {}
        for source in self._merged_sources():
            for path, value in source._iter_paths(separator, deep):
                if deep and isinstance(value, Section):
                    continue
                result[path] = value
        return result

    def items(self) -> list[tuple[str, Any]]:
        """Direct ``(key, value)`` pairs of this tree, defaults excluded."""
        return list(self._entries.items())

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dict copy of this tree, defaults excluded."""
        return {
            key: value.to_dict() if isinstance(value, Section) else copy.deepcopy(value)
            for key, value in self._entries.items()
        }

    # -------------------------------
    # Text round-trip
    # -------------------------------

    def save_to_string(self) -> str:
        """Serialize this section (header included) to YAML text."""
        from yamlsections.serialization import serialize

        return serialize(self)

    def load_from_string(self, text: str) -> None:
        """Replace this section's contents with the YAML ``text``.

        Raises:
            InvalidConfigurationError: If the text is not a YAML mapping.
        """
        from yamlsections.serialization import deserialize

        deserialize(self, text)

    # -------------------------------
    # Mapping-style access
    # -------------------------------

    def __getitem__(self, path: str) -> Any:
        value = self.get(path)
        if value is None:
            raise KeyError(path)
        return value

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __delitem__(self, path: str) -> None:
        # "" addresses the section itself, which cannot delete itself.
        if path == "" or not self.contains(path, ignore_default=True):
            raise KeyError(path)
        self.set(path, None)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.contains(path)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, full_path={self.full_path!r})"


def _check_value(value: Any) -> None:
    """Reject section nodes as plain values, including inside lists and maps."""
    if isinstance(value, Section):
        raise TypeError(
            "Sections cannot be stored as values; use create_section() instead"
        )
    if isinstance(value, Mapping):
        for item in value.values():
            _check_value(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_value(item)
