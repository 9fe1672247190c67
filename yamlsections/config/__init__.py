"""Layered configuration loading for yamlsections.

This module loads a primary YAML file into a Configuration and builds its
defaults tree from any number of layers:

  - Defaults files (e.g. defaults/base.yaml, defaults/site.yaml)
  - In-code mappings shipped with an application
  - Existing Section trees

Layers are deep-merged in order where dicts are merged recursively and
lists/scalars are replaced (last wins). The primary file always wins over
the merged defaults and is the only thing written by ``save()``.

Public API:

- load_configuration: Load a configuration file with its defaults

Example:
    Basic usage:

        from pathlib import Path
        from yamlsections.config import load_configuration

        config = load_configuration(
            Path("config.yml"), defaults=Path("defaults.yml")
        )
        print(config.get_string("server.host"))

"""

from .loader import load_configuration

__all__ = ["load_configuration"]
