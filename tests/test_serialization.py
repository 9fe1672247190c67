"""
Tests for yamlsections.serialization module.

Tests YAML conversion including:
- Block-style output and indentation
- Header rendering, synthesis and extraction
- Round-trips through text
- Invalid input handling
"""

from __future__ import annotations

import pytest
import yaml

from yamlsections import InvalidConfigurationError, Section
from yamlsections.serialization import (
    build_header,
    deserialize,
    emit_yaml,
    extract_header,
    parse_yaml,
    serialize,
)


class TestSerialize:
    """Tests for serialize."""

    def test_empty_tree_is_empty_string(self):
        """Test that an empty tree without header serializes to ""."""
        assert serialize(Section()) == ""

    def test_block_style(self):
        """Test that nested sections are written as block mappings."""
        root = Section()
        root.set("server.host", "localhost")
        root.set("server.port", 8080)
        root.set("tags", ["a", "b"])

        assert serialize(root) == (
            "server:\n"
            "  host: localhost\n"
            "  port: 8080\n"
            "tags:\n"
            "- a\n"
            "- b\n"
        )

    def test_insertion_order_preserved(self):
        """Test that keys are written in insertion order, not sorted."""
        root = Section()
        root.set("zeta", 1)
        root.set("alpha", 2)

        assert serialize(root) == "zeta: 1\nalpha: 2\n"

    def test_indent_option(self):
        """Test that the indent option controls nesting width."""
        root = Section()
        root.options.indent = 4
        root.set("a.b.c", 1)

        assert serialize(root) == "a:\n    b:\n        c: 1\n"

    def test_defaults_not_written(self):
        """Test that defaults never appear in the YAML body."""
        root = Section()
        root.defaults = {"server": {"port": 80}}
        root.options.copy_header = False
        root.set("name", "x")

        assert serialize(root) == "name: x\n"

    def test_empty_section_written_as_empty_mapping(self):
        """Test that an empty child section still round-trips."""
        root = Section()
        root.create_section("empty")

        text = serialize(root)
        restored = Section()
        deserialize(restored, text)

        assert restored.is_section("empty")

    def test_explicit_header(self):
        """Test that each header line becomes a comment line."""
        root = Section()
        root.options.header = "key1: value1\nkey2: value2"
        root.set("a", 1)

        text = serialize(root)

        assert text.splitlines()[:2] == ["# key1: value1", "# key2: value2"]
        assert text.endswith("a: 1\n")

    def test_header_only(self):
        """Test a tree with a header but no entries."""
        root = Section()
        root.options.header = "only a header"

        assert serialize(root) == "# only a header\n"

    def test_copy_header_disabled(self):
        """Test that copy_header=False suppresses the header."""
        root = Section()
        root.options.header = "hidden"
        root.options.copy_header = False
        root.set("a", 1)

        assert serialize(root) == "a: 1\n"

    def test_synthesized_header_from_defaults(self):
        """Test that defaults' scalar values become header lines."""
        root = Section()
        root.add_default("key1", "value1")
        root.add_default("key2", "value2")
        root.add_default("nested.key", "skipped")
        root.set("a", 1)

        lines = serialize(root).splitlines()

        assert lines[:2] == ["# key1: value1", "# key2: value2"]
        assert "# nested: " not in "\n".join(lines)


class TestBuildHeader:
    """Tests for build_header."""

    def test_header_generation(self):
        """Test synthesizing a header from a standalone defaults section."""
        defaults = Section(name="defaults")
        defaults["key1"] = "value1"
        defaults["key2"] = "value2"

        section = Section()
        section.options.header = None
        header = build_header(section, defaults)

        assert "# key1: value1" in header
        assert "# key2: value2" in header

    def test_no_header(self):
        """Test that no header and no defaults gives ""."""
        assert build_header(Section()) == ""

    def test_boolean_rendering(self):
        """Test that booleans render in YAML spelling."""
        defaults = Section()
        defaults["enabled"] = True

        assert build_header(Section(), defaults) == "# enabled: true"


class TestExtractHeader:
    """Tests for extract_header."""

    def test_extracts_leading_comments(self):
        """Test collecting consecutive leading comment lines."""
        text = "# first\n#  second  \nkey: value\n# not header\n"

        assert extract_header(text) == "first\nsecond"

    def test_stops_at_first_non_comment(self):
        """Test that scanning stops at the first non-header line."""
        text = "key: value\n# comment\n"

        assert extract_header(text) is None

    def test_comment_without_space_is_not_header(self):
        """Test that the prefix is "# " including the space."""
        assert extract_header("#tight\na: 1\n") is None

    def test_empty_text(self):
        """Test that empty text has no header."""
        assert extract_header("") is None


class TestDeserialize:
    """Tests for deserialize."""

    def test_nested_maps_become_sections(self):
        """Test that nested mappings become child sections."""
        root = Section()
        deserialize(root, "server:\n  tls:\n    enabled: true\nport: 1\n")

        assert root.is_section("server")
        assert root.is_section("server.tls")
        assert root.get("server.tls.enabled") is True
        assert root.get("server").parent is root

    def test_header_stored_on_options(self):
        """Test that the header is stored on the section's options."""
        root = Section()
        deserialize(root, "# key1: value1\n# key2: value2\na: 1\n")

        assert root.options.header == "key1: value1\nkey2: value2"

    def test_missing_header_unsets(self):
        """Test that loading text without a header clears the header."""
        root = Section()
        root.options.header = "old"
        deserialize(root, "a: 1\n")

        assert root.options.header is None

    def test_replaces_existing_entries(self):
        """Test that deserializing discards previous contents."""
        root = Section()
        root.set("old", 1)
        deserialize(root, "new: 2\n")

        assert root.keys() == ["new"]

    def test_empty_document(self):
        """Test that an empty document gives an empty tree."""
        root = Section()
        deserialize(root, "")

        assert len(root) == 0

    def test_keys_not_split(self):
        """Test that keys containing the separator are kept verbatim."""
        root = Section()
        deserialize(root, "a.b: 1\n")

        assert root.keys() == ["a.b"]
        assert root.get("a.b") is None

    def test_non_string_keys(self):
        """Test that non-string keys are converted to strings."""
        root = Section()
        deserialize(root, "1: one\ntrue: yes\n")

        assert root.get("1") == "one"
        assert root.keys() == ["1", "True"]

    def test_null_values_dropped(self):
        """Test that null entries are treated as removed."""
        root = Section()
        deserialize(root, "a: null\nb:\nc: 1\n")

        assert root.keys() == ["c"]

    def test_list_of_maps_kept_as_list(self):
        """Test that mappings inside lists stay plain values."""
        root = Section()
        deserialize(root, "servers:\n- host: a\n- host: b\n")

        assert root.get_map_list("servers") == [{"host": "a"}, {"host": "b"}]

    def test_non_mapping_rejected(self):
        """Test that a top-level list is an invalid configuration."""
        root = Section()
        root.set("keep", 1)

        with pytest.raises(InvalidConfigurationError, match="mapping"):
            deserialize(root, "- a\n- b\n")
        assert root.get("keep") == 1

    def test_malformed_yaml_rejected(self):
        """Test that parser errors are wrapped and chained."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            deserialize(Section(), "key: [unclosed\n")

        assert isinstance(exc_info.value.__cause__, yaml.YAMLError)


class TestRoundTrip:
    """Tests for serialize -> deserialize round-trips."""

    def test_round_trip_values(self, sample_config_data):
        """Test that deep values survive a round-trip."""
        original = Section()
        for key, value in sample_config_data.items():
            original.set(key, value)

        restored = Section()
        deserialize(restored, serialize(original))

        assert restored.values(deep=True) == original.values(deep=True)
        assert restored.keys(deep=True) == original.keys(deep=True)

    def test_round_trip_header(self):
        """Test that the header survives a round-trip."""
        original = Section()
        original.options.header = "key1: value1\nkey2: value2"
        original.set("a", 1)

        restored = Section()
        deserialize(restored, serialize(original))

        assert restored.options.header == "key1: value1\nkey2: value2"

    def test_string_that_looks_like_number(self):
        """Test that numeric-looking strings keep their type."""
        original = Section()
        original.set("version", "1.10")
        original.set("port", "8080")

        restored = Section()
        deserialize(restored, serialize(original))

        assert restored.get("version") == "1.10"
        assert restored.get("port") == "8080"


class TestYamlEngine:
    """Tests for the parse_yaml/emit_yaml pair."""

    def test_parse_keeps_order(self):
        """Test that parsed mappings keep document order."""
        assert list(parse_yaml("b: 1\na: 2\n")) == ["b", "a"]

    def test_emit_empty_mapping(self):
        """Test that an empty mapping emits nothing."""
        assert emit_yaml({}) == ""

    def test_emit_does_not_use_anchors(self):
        """Test that shared lists are written out in full."""
        shared = [1, 2]
        text = emit_yaml({"a": shared, "b": shared})

        assert "&" not in text
        assert "*" not in text

    def test_emit_tuple_as_list(self):
        """Test that tuples are written as YAML sequences."""
        assert emit_yaml({"t": (1, 2)}) == "t:\n- 1\n- 2\n"
