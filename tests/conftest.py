"""
Pytest configuration and shared fixtures for yamlsections tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from yamlsections.logging import SilentLogger, set_global_logger


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture(autouse=True)
def silent_global_logger():
    """Make sure no test leaks a printing global logger into the next."""
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def sample_config_data() -> dict[str, Any]:
    """
    Provide sample configuration data.

    Returns a nested structure with scalars, lists and sections.
    """
    return {
        "name": "example",
        "server": {
            "host": "localhost",
            "port": 8080,
            "tls": {
                "enabled": True,
                "ciphers": ["TLS_AES_128_GCM_SHA256", "TLS_AES_256_GCM_SHA384"],
            },
        },
        "ratio": 0.75,
        "tags": ["alpha", "beta"],
    }


@pytest.fixture
def sample_defaults_data() -> dict[str, Any]:
    """Provide sample defaults shipped alongside a configuration."""
    return {
        "name": "default-name",
        "server": {
            "port": 80,
            "timeout": 30,
        },
        "retries": 3,
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("config.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f, sort_keys=False)
        return path

    return _create
