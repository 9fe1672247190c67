"""
Tests for yamlsections.config.loader module.

Tests layered configuration loading including:
- Primary file loading
- Defaults from files, mappings and sections
- Multi-layer merging (later layers win)
- Missing file handling
"""

from __future__ import annotations

import pytest

from yamlsections import FileStore, InvalidConfigurationError, Options, Section
from yamlsections.config.loader import _deep_merge_dicts, load_configuration


class TestConfigLoading:
    """Tests for basic configuration loading."""

    def test_load_simple_config(self, create_yaml_file, sample_config_data):
        """Test loading a config without defaults."""
        path = create_yaml_file("config.yaml", sample_config_data)

        config = load_configuration(path)

        assert config.get("name") == "example"
        assert config.get_int("server.port") == 8080
        assert config.defaults is None

    def test_bound_to_file_store(self, create_yaml_file):
        """Test that the loaded configuration saves back to its file."""
        path = create_yaml_file("config.yaml", {"a": 1})

        config = load_configuration(path)

        assert isinstance(config.store, FileStore)
        assert config.store.path == path
        assert config.store.exists() is True

    def test_missing_config_file_raises(self, tmp_test_dir):
        """Test that a missing primary file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_configuration(tmp_test_dir / "nonexistent.yaml")

    def test_create_missing_file(self, tmp_test_dir):
        """Test that create=True starts empty and writes on save."""
        path = tmp_test_dir / "new.yaml"

        config = load_configuration(path, create=True)
        assert len(config) == 0

        config.set("created", True)
        config.save()
        assert path.read_text(encoding="utf-8") == "created: true\n"

    def test_options_passed_through(self, create_yaml_file):
        """Test that options apply to the loaded tree."""
        path = create_yaml_file("config.yaml", {"a": {"b": 1}})

        config = load_configuration(path, options=Options(path_separator="/"))

        assert config.get("a/b") == 1

    def test_invalid_yaml_raises(self, tmp_test_dir):
        """Test that malformed YAML raises InvalidConfigurationError."""
        path = tmp_test_dir / "config.yaml"
        path.write_text("a: b: c\n", encoding="utf-8")

        with pytest.raises(InvalidConfigurationError):
            load_configuration(path)


class TestDefaultsLayers:
    """Tests for defaults attached by the loader."""

    def test_defaults_file(self, create_yaml_file, sample_config_data, sample_defaults_data):
        """Test that a defaults file answers missing paths."""
        path = create_yaml_file("config.yaml", sample_config_data)
        defaults_path = create_yaml_file("defaults.yaml", sample_defaults_data)

        config = load_configuration(path, defaults=defaults_path)

        assert config.get_int("server.port") == 8080
        assert config.get_int("server.timeout") == 30
        assert config.get_int("retries") == 3
        assert config.is_path_set("retries") is False

    def test_defaults_mapping(self, create_yaml_file):
        """Test that an in-code mapping can serve as defaults."""
        path = create_yaml_file("config.yaml", {"a": 1})

        config = load_configuration(path, defaults={"b": 2, 3: "three"})

        assert config.get("b") == 2
        assert config.get("3") == "three"

    def test_defaults_section(self, create_yaml_file):
        """Test that a Section can serve as defaults."""
        path = create_yaml_file("config.yaml", {"a": 1})
        defaults = Section()
        defaults.set("x.y", "z")

        config = load_configuration(path, defaults=defaults)

        assert config.get("x.y") == "z"

    def test_missing_defaults_file_raises(self, create_yaml_file, tmp_test_dir):
        """Test that a missing defaults file raises FileNotFoundError."""
        path = create_yaml_file("config.yaml", {"a": 1})

        with pytest.raises(FileNotFoundError):
            load_configuration(path, defaults=tmp_test_dir / "missing.yaml")

    def test_defaults_not_saved(self, create_yaml_file):
        """Test that saving never writes defaults into the file."""
        path = create_yaml_file("config.yaml", {"a": 1})
        config = load_configuration(path, defaults={"b": {"c": 2}})

        config.save()

        assert path.read_text(encoding="utf-8") == "a: 1\n"


class TestLayerMerging:
    """Tests for merging several defaults layers."""

    def test_later_layer_wins(self, tmp_test_dir, create_yaml_file):
        """Test dict deep merge with last-wins scalars."""
        path = create_yaml_file("config.yaml", {"app": {"name": "mine"}})
        base = tmp_test_dir / "base.yaml"
        base.write_text(
            """
app:
  name: base
  log:
    level: info
    format: plain
  plugins: [one, two]
""",
            encoding="utf-8",
        )
        site = tmp_test_dir / "site.yaml"
        site.write_text(
            """
app:
  log:
    level: debug
  plugins: [three]
""",
            encoding="utf-8",
        )

        config = load_configuration(path, defaults=[base, site])

        assert config.get("app.name") == "mine"
        assert config.get("app.log.level") == "debug"
        assert config.get("app.log.format") == "plain"
        assert config.get("app.plugins") == ["three"]

    def test_mixed_layers(self, create_yaml_file):
        """Test merging a file layer with a mapping layer."""
        path = create_yaml_file("config.yaml", {})
        base = create_yaml_file("base.yaml", {"a": 1, "b": 1})

        config = load_configuration(path, defaults=[base, {"b": 2}])

        assert config.get("a") == 1
        assert config.get("b") == 2

    def test_deep_merge_does_not_mutate(self):
        """Test that merging returns a new dict."""
        base = {"a": {"b": 1}}
        overlay = {"a": {"c": 2}}

        merged = _deep_merge_dicts(base, overlay)

        assert merged == {"a": {"b": 1, "c": 2}}
        assert base == {"a": {"b": 1}}


class TestLoaderLogging:
    """Tests for loader output."""

    def test_empty_defaults_file_warns(self, create_yaml_file, tmp_test_dir, capsys):
        """Test that an empty defaults file produces a warning."""
        from yamlsections.logging import DefaultLogger, set_global_logger

        path = create_yaml_file("config.yaml", {"a": 1})
        empty = tmp_test_dir / "empty.yaml"
        empty.write_text("", encoding="utf-8")
        set_global_logger(DefaultLogger())

        load_configuration(path, defaults=empty)

        assert "Defaults file is empty" in capsys.readouterr().err
