"""
Tests for yamlsections.options module.

Tests option validation including:
- Defaults
- Path separator validation
- Indent range validation
- Copying
"""

from __future__ import annotations

import pytest

from yamlsections.options import Options


class TestOptionDefaults:
    """Tests for default option values."""

    def test_defaults(self):
        """Test the out-of-the-box option values."""
        options = Options()

        assert options.path_separator == "."
        assert options.copy_defaults is False
        assert options.header is None
        assert options.copy_header is True
        assert options.indent == 2


class TestOptionValidation:
    """Tests for validated setters."""

    @pytest.mark.parametrize("separator", ["", "::", "ab"])
    def test_separator_must_be_single_character(self, separator):
        """Test that multi-character or empty separators are rejected."""
        options = Options()

        with pytest.raises(ValueError, match="single character"):
            options.path_separator = separator

        assert options.path_separator == "."

    def test_separator_accepts_single_character(self):
        """Test that any single character is accepted."""
        options = Options(path_separator="/")
        assert options.path_separator == "/"

    @pytest.mark.parametrize("indent", [2, 5, 9])
    def test_indent_in_range(self, indent):
        """Test that indents 2 to 9 are accepted."""
        assert Options(indent=indent).indent == indent

    @pytest.mark.parametrize("indent", [0, 1, 10, -2])
    def test_indent_out_of_range(self, indent):
        """Test that out-of-range indents raise instead of clamping."""
        with pytest.raises(ValueError, match="between 2 and 9"):
            Options(indent=indent)

    def test_indent_rejects_bool(self):
        """Test that booleans are not accepted as indent widths."""
        with pytest.raises(ValueError):
            Options().indent = True


class TestOptionCopy:
    """Tests for Options.copy."""

    def test_copy_is_independent(self):
        """Test that changing a copy leaves the original alone."""
        original = Options(path_separator="/", header="hello", indent=4)
        clone = original.copy()
        clone.header = "changed"
        clone.indent = 3

        assert original.header == "hello"
        assert original.indent == 4
        assert clone.path_separator == "/"
