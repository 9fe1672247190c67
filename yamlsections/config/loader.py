"""
Layered configuration loading for yamlsections.

This module loads a primary YAML file into a Configuration and attaches a
defaults tree built from one or more layers. Defaults are consulted for
paths the primary file does not set, but are never written back to it.

Configuration Layers
--------------------
1. **Defaults layers** (in the order given)
   - YAML files, plain mappings, or existing Section trees
   - Later layers override earlier ones
   - Merged into a single defaults tree attached to the root

2. **Primary file**
   - The user's persisted configuration
   - Always wins over every defaults layer on lookup
   - The only thing ``save()`` writes

Merge Behavior
--------------
Defaults layers are deep-merged with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from the later layer override)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans)

Functions
---------
load_configuration : function
    Load a primary file and its defaults (main public API).

Private Helpers
---------------
_load_yaml_file : Load a YAML file with error handling
_deep_merge_dicts : Recursive dict merging
_layer_to_dict : Normalize one defaults layer to a plain dict

Error Handling
--------------
- FileNotFoundError: Primary file (unless create=True) or a defaults file
  doesn't exist
- InvalidConfigurationError: YAML parse errors or non-mapping documents,
  chained with "from err"

Examples
--------
Basic usage:

    >>> from pathlib import Path
    >>> from yamlsections.config import load_configuration
    >>> config = load_configuration(
    ...     Path("config.yml"),
    ...     defaults=[Path("defaults/base.yml"), {"server": {"port": 8080}}],
    ... )
    >>> config.get_int("server.port")
    8080

Start a new file:

    >>> config = load_configuration(Path("new.yml"), create=True)
    >>> config.set("created", True)
    >>> config.save()
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import os
from pathlib import Path
from typing import Any

from yamlsections.configuration import Configuration
from yamlsections.logging import get_global_logger
from yamlsections.options import Options
from yamlsections.section import Section
from yamlsections.serialization import parse_yaml
from yamlsections.store import FileStore

DefaultsLayer = str | os.PathLike | Mapping[Any, Any] | Section

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> dict[Any, Any]:
    """
    Load a YAML file and return its top-level mapping.

    Raises:
      FileNotFoundError          - when file does not exist
      InvalidConfigurationError  - for invalid YAML or a non-mapping document
    """
    store = FileStore(p)
    if not store.exists():
        raise FileNotFoundError(f"file not found: {p}")
    return parse_yaml(store.read())


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


def _normalize(mapping: Mapping[Any, Any]) -> dict[str, Any]:
    return {
        str(k): _normalize(v) if isinstance(v, Mapping) else v
        for k, v in mapping.items()
    }


def _layer_to_dict(layer: DefaultsLayer) -> dict[str, Any]:
    """Turn one defaults layer into a plain nested dict."""
    if isinstance(layer, Section):
        return layer.to_dict()
    if isinstance(layer, Mapping):
        return _normalize(layer)
    logger = get_global_logger()
    path = Path(layer)
    logger.verbose("DEFAULTS", f"Loading defaults: {path}")
    data = _load_yaml_file(path)
    if not data:
        logger.warning("DEFAULTS", f"Defaults file is empty: {path}")
    return _normalize(data)


# -------------------------------
# Public API
# -------------------------------


def load_configuration(
    path: str | os.PathLike[str],
    *,
    defaults: DefaultsLayer | Sequence[DefaultsLayer] | None = None,
    create: bool = False,
    options: Options | None = None,
) -> Configuration:
    """
    Load a configuration file together with its defaults layers.

    Steps
      1) Normalize every defaults layer to a dict (reading files as needed).
      2) Merge layers in order (dicts deep-merge, lists replace).
      3) Build the Configuration with the merged defaults attached.
      4) Load the primary file, or start empty if missing and create=True.

    Args:
      path: Primary YAML file.
      defaults: One layer or a list of layers. A layer is a YAML file path,
        a mapping, or a Section.
      create: Tolerate a missing primary file; it is written on first save.
      options: Options for the configuration tree.

    Returns
      The loaded Configuration, bound to ``path``.

    Raises
      FileNotFoundError if the primary file (without create) or a defaults
      file is missing, InvalidConfigurationError on malformed YAML.
    """
    logger = get_global_logger()
    path = Path(path)

    if defaults is None:
        layers: list[DefaultsLayer] = []
    elif isinstance(defaults, (str, os.PathLike, Mapping, Section)):
        layers = [defaults]
    else:
        layers = list(defaults)

    merged: dict[str, Any] = {}
    for layer in layers:
        merged = _deep_merge_dicts(merged, _layer_to_dict(layer))
    if layers:
        logger.verbose(
            "DEFAULTS",
            f"Merged {len(layers)} defaults layer(s) with {len(merged)} top-level key(s)",
        )

    store = FileStore(path)
    config = Configuration(store, options=options, defaults=merged if layers else None)

    if store.exists():
        config.load()
    elif create:
        logger.verbose("LOAD", f"No file at {path}; starting with an empty configuration")
    else:
        raise FileNotFoundError(f"file not found: {path}")

    return config
