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

"""YAML text <-> section tree conversion with comment headers.

The YAML engine is used only through two stateless functions:

- parse_yaml: text -> ordered dict (``yaml.safe_load``)
- emit_yaml: data -> block-style text (a ``yaml.SafeDumper`` subclass that
  knows how to represent Section objects)

Formatting options (indent) are passed on every call; no module-level
dumper configuration is ever mutated.

Header Format
-------------
A header is a run of comment lines at the very top of the text, each
starting with ``"# "``. Scanning stops at the first line that is not a
header line. When a section has no explicit header, one is synthesized
from the direct scalar values of its defaults tree, as ``key: value``
lines.

Example:
    ```python
    from yamlsections import Section
    from yamlsections.serialization import deserialize, serialize

    section = Section()
    section.options.header = "Generated file\\nDo not edit"
    section.set("server.port", 8080)
    text = serialize(section)
    # "# Generated file\\n# Do not edit\\nserver:\\n  port: 8080\\n"

    copy = Section()
    deserialize(copy, text)
    copy.options.header  # "Generated file\\nDo not edit"
    ```
"""

from __future__ import annotations

from typing import Any

import yaml

from yamlsections.exceptions import InvalidConfigurationError
from yamlsections.logging import get_global_logger
from yamlsections.options import DEFAULT_INDENT
from yamlsections.section import Section

COMMENT_PREFIX = "# "
BLANK_CONFIG = "{}\n"

YAML_MAP_TAG = "tag:yaml.org,2002:map"


class _SectionDumper(yaml.SafeDumper):
    """SafeDumper that writes Section objects as block mappings."""

    def ignore_aliases(self, data: Any) -> bool:
        # Shared lists would otherwise be written as &id001 anchors.
        return True


def _represent_section(dumper: yaml.SafeDumper, section: Section) -> yaml.Node:
    return dumper.represent_mapping(YAML_MAP_TAG, section.items(), flow_style=False)


_SectionDumper.add_multi_representer(Section, _represent_section)
_SectionDumper.add_representer(tuple, yaml.SafeDumper.represent_list)


# -------------------------------
# YAML engine
# -------------------------------


def parse_yaml(text: str) -> dict[Any, Any]:
    """Parse YAML text into a nested ordered dict.

    Args:
        text: YAML document. An empty (or comment-only) document yields an
            empty dict.

    Returns:
        The top-level mapping.

    Raises:
        InvalidConfigurationError: If the text is not valid YAML or its
            top level is not a mapping. Parser errors are chained.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise InvalidConfigurationError(f"Error parsing YAML: {err}") from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigurationError(
            f"Top-level YAML must be a mapping (dict), got {type(data).__name__}"
        )
    return data


def emit_yaml(data: Any, *, indent: int = DEFAULT_INDENT) -> str:
    """Render data as block-style YAML.

    Key order is preserved. An empty mapping renders as "" rather than
    ``{}``.
    """
    text = yaml.dump(
        data,
        Dumper=_SectionDumper,
        indent=indent,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    return "" if text == BLANK_CONFIG else text


# -------------------------------
# Header handling
# -------------------------------


def _header_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_header(section: Section, defaults: Section | None = None) -> str:
    """Render the comment header for ``section``.

    Uses ``section.options.header`` when set; otherwise lists the direct
    non-section values of ``defaults`` as ``key: value`` lines.

    Returns:
        The header as ``"# "``-prefixed lines joined by newlines (no
        trailing newline), or "" when there is nothing to write.
    """
    header = section.options.header
    if header is None:
        lines = []
        if defaults is not None:
            for key, value in defaults.items():
                if not isinstance(value, Section):
                    lines.append(f"{key}: {_header_value(value)}")
        header = "\n".join(lines).strip()
    if not header:
        return ""
    return "\n".join(COMMENT_PREFIX + line for line in header.split("\n"))


def extract_header(text: str) -> str | None:
    """Collect the leading ``"# "`` comment lines of ``text``.

    Returns:
        The header lines with the prefix removed and whitespace trimmed,
        joined by newlines, or None if the text has no header.
    """
    lines: list[str] = []
    for line in text.splitlines():
        if not line.startswith(COMMENT_PREFIX):
            break
        lines.append(line[len(COMMENT_PREFIX) :].strip())
    header = "\n".join(lines)
    return header or None


# -------------------------------
# Public API
# -------------------------------


def serialize(section: Section) -> str:
    """Serialize a section tree (defaults excluded) to YAML text.

    The header is written first when ``options.copy_header`` is set. A tree
    with no entries and no header serializes to "".
    """
    options = section.options
    header = build_header(section, section.defaults) if options.copy_header else ""
    body = emit_yaml(section, indent=options.indent)
    if not header:
        return body
    return f"{header}\n{body}"


def deserialize(section: Section, text: str) -> None:
    """Replace the contents of ``section`` with the YAML ``text``.

    Nested mappings become child sections; every other value is stored as
    a leaf. Keys are stored verbatim (not split on the path separator) and
    non-string keys are converted with ``str()``. Entries whose value is
    null are dropped, as if removed with ``set(key, None)``.

    The leading comment header is stored on ``section.options.header``
    (None when the text has none).

    Raises:
        InvalidConfigurationError: If the text is not a YAML mapping. The
            section is left untouched in that case.
    """
    logger = get_global_logger()

    data = parse_yaml(text)
    header = extract_header(text)
    if header is None:
        logger.debug("HEADER", "No header found")
    else:
        logger.debug("HEADER", f"Found {len(header.splitlines())} header line(s)")

    section.options.header = header
    section._replace_entries(data)
    logger.debug("PARSE", f"Loaded {len(data)} top-level key(s)")
