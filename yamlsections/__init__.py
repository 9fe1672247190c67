"""
yamlsections - path-addressable YAML configuration trees

An in-memory hierarchical key/value store that mirrors a YAML document. A
tree of named sections holds scalars, lists and nested sections, all
addressable by a delimited path string such as ``server.http.port``.

yamlsections provides:
  - Path-based get/set at any depth, with lazy section creation
  - A defaults overlay consulted for missing paths, never written out
  - Comment-header preserving load/save
  - Best-effort typed accessors (get_int, get_bool, get_string_list, ...)
  - Layered defaults loading from several YAML files
  - A small CLI for reading and editing files by path

Quick Start
-----------
Read a value from the command line:

    $ yamlsections get config.yml server.http.port

Use it from Python:

    from yamlsections import Configuration

    config = Configuration("config.yml")
    config.load()
    config.set("server.http.port", 8081)
    config.save()

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
section : module
    The Section tree and the defaults overlay.
accessors : module
    Typed accessors mixed into Section.
paths : module
    Path splitting and joining.
options : module
    Per-tree parsing and formatting options.
serialization : module
    YAML text conversion and comment headers.
store : module
    File and in-memory backing stores.
configuration : module
    Root section bound to a store.
config : package
    Layered loading with defaults files.

Public API
----------
    from yamlsections import Configuration, Section, Options
    from yamlsections.config import load_configuration
    from yamlsections.serialization import serialize, deserialize

Project Information
-------------------
License: Apache-2.0
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"
__description__ = "Path-addressable YAML configuration trees with defaults"

# Re-export commonly used names for convenience
from yamlsections.config import load_configuration
from yamlsections.configuration import Configuration
from yamlsections.exceptions import (
    InvalidConfigurationError,
    SectionNotFoundError,
    UnsupportedOperationError,
    YamlSectionsError,
)
from yamlsections.options import Options
from yamlsections.section import Section
from yamlsections.serialization import deserialize, serialize
from yamlsections.store import FileStore, MemoryStore

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "Configuration",
    "Section",
    "Options",
    "FileStore",
    "MemoryStore",
    "load_configuration",
    "serialize",
    "deserialize",
    "YamlSectionsError",
    "InvalidConfigurationError",
    "SectionNotFoundError",
    "UnsupportedOperationError",
]
