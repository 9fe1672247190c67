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

"""Command-line interface for yamlsections.

This module provides the ``yamlsections`` console script for reading and
editing YAML configuration files by path.

Commands:

    get: Print the value at a path
    set: Set the value at a path and save the file
    unset: Remove the value at a path and save the file
    keys: List keys under a path
    dump: Print the file as it would be saved

Example:
    Read a nested value:
        ```bash
        $ yamlsections get config.yml server.http.port
        8080
        ```

    Write a value (parsed as YAML, so numbers and lists keep their type):
        ```bash
        $ yamlsections set config.yml server.http.port 8081
        $ yamlsections set config.yml server.hosts "[a.example, b.example]"
        ```

    Fall back to a defaults file:
        ```bash
        $ yamlsections get config.yml server.timeout --defaults defaults.yml
        ```

    Use another separator:
        ```bash
        $ yamlsections get config.yml "logging/level" --separator /
        ```

Exit Codes:

- 0: Success
- 1: Error (missing file or path, invalid YAML, invalid arguments)

Note:
    Verbose mode shows library progress and full tracebacks on errors.
    Debug mode implies verbose mode and also reports header parsing.
"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys
import traceback

import yaml

from yamlsections.config import load_configuration
from yamlsections.configuration import Configuration
from yamlsections.exceptions import YamlSectionsError
from yamlsections.logging import SilentLogger, get_logger, set_global_logger
from yamlsections.options import Options
from yamlsections.section import Section
from yamlsections.serialization import emit_yaml


def _package_version() -> str:
    try:
        return version("yamlsections")
    except PackageNotFoundError:
        from yamlsections import __version__

        return __version__


def _open(args: argparse.Namespace, create: bool = False) -> Configuration:
    options = Options(path_separator=args.separator)
    return load_configuration(
        Path(args.file),
        defaults=args.defaults or None,
        create=create,
        options=options,
    )


def _format_value(value: object) -> str:
    if isinstance(value, (Section, list, dict)):
        return emit_yaml(value).rstrip("\n")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _run(args: argparse.Namespace) -> int:
    """Configure logging, dispatch to the command handler, report errors."""
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))
    try:
        return args.func(args)
    except (YamlSectionsError, OSError, ValueError) as err:
        print(f"Error: {err}")
        if args.verbose or args.debug:
            traceback.print_exc()
        return 1
    finally:
        set_global_logger(SilentLogger())


def cmd_get(args: argparse.Namespace) -> int:
    """Handler for 'yamlsections get' command.

    Prints the value at the path: scalars as plain text, lists and
    sections as YAML. Defaults are consulted when the file has no value.

    Returns:
        Exit code (0 if the path resolved, 1 otherwise).
    """
    config = _open(args)
    value = config.get(args.path)
    if value is None:
        print(f"Error: Path not found: {args.path}")
        return 1
    print(_format_value(value))
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    """Handler for 'yamlsections set' command.

    The value is parsed as a YAML scalar, list or mapping; a mapping
    creates a section. The file is created if it does not exist yet.
    """
    config = _open(args, create=True)
    try:
        value = yaml.safe_load(args.value)
    except yaml.YAMLError:
        value = args.value
    if value is None:
        print("Error: Refusing to set null; use 'unset' to remove a value")
        return 1
    config.set(args.path, value)
    config.save()
    print(f"Set {args.path} in {args.file}")
    return 0


def cmd_unset(args: argparse.Namespace) -> int:
    """Handler for 'yamlsections unset' command."""
    config = _open(args)
    if not config.is_path_set(args.path):
        print(f"Error: Path not set: {args.path}")
        return 1
    config.set(args.path, None)
    config.save()
    print(f"Removed {args.path} from {args.file}")
    return 0


def cmd_keys(args: argparse.Namespace) -> int:
    """Handler for 'yamlsections keys' command.

    Lists the keys of the section at the optional path (the whole file by
    default), one per line. ``--deep`` lists nested paths as well.
    """
    config = _open(args)
    config.options.copy_defaults = args.with_defaults
    section = config.get_section(args.path) if args.path else config
    if section is None:
        print(f"Error: No section at path: {args.path}")
        return 1
    for key in section.keys(deep=args.deep):
        print(key)
    return 0


def cmd_dump(args: argparse.Namespace) -> int:
    """Handler for 'yamlsections dump' command.

    Prints the file exactly as ``save()`` would write it.
    """
    config = _open(args)
    sys.stdout.write(config.save_to_string())
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "file",
        help="Path to the YAML configuration file",
    )
    parser.add_argument(
        "--defaults",
        action="append",
        default=[],
        metavar="FILE",
        help="Defaults YAML file; repeat to layer several (later wins)",
    )
    parser.add_argument(
        "--separator",
        default=".",
        help="Path separator character (default: .)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and full tracebacks on errors",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yamlsections",
        description="Read and edit YAML configuration files by dotted path",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"yamlsections {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'get' command
    parser_get = subparsers.add_parser(
        "get",
        help="Print the value at a path",
        description="Print the value at a path, falling back to defaults files.",
    )
    _add_common_arguments(parser_get)
    parser_get.add_argument("path", help="Path of the value (e.g. server.port)")
    parser_get.set_defaults(func=cmd_get)

    # 'set' command
    parser_set = subparsers.add_parser(
        "set",
        help="Set the value at a path and save",
        description="Set a value (parsed as YAML) and write the file back.",
    )
    _add_common_arguments(parser_set)
    parser_set.add_argument("path", help="Path of the value")
    parser_set.add_argument("value", help="New value, parsed as YAML")
    parser_set.set_defaults(func=cmd_set)

    # 'unset' command
    parser_unset = subparsers.add_parser(
        "unset",
        help="Remove the value at a path and save",
        description="Remove a value or section and write the file back.",
    )
    _add_common_arguments(parser_unset)
    parser_unset.add_argument("path", help="Path of the value to remove")
    parser_unset.set_defaults(func=cmd_unset)

    # 'keys' command
    parser_keys = subparsers.add_parser(
        "keys",
        help="List keys under a path",
        description="List the keys of a section (the whole file by default).",
    )
    _add_common_arguments(parser_keys)
    parser_keys.add_argument("path", nargs="?", default="", help="Section path")
    parser_keys.add_argument(
        "--deep",
        action="store_true",
        help="Include nested keys as full paths",
    )
    parser_keys.add_argument(
        "--with-defaults",
        action="store_true",
        help="Include keys that only exist in the defaults files",
    )
    parser_keys.set_defaults(func=cmd_keys)

    # 'dump' command
    parser_dump = subparsers.add_parser(
        "dump",
        help="Print the file as it would be saved",
        description="Load the file and print its serialized form, header included.",
    )
    _add_common_arguments(parser_dump)
    parser_dump.set_defaults(func=cmd_dump)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the yamlsections CLI.

    This function is registered as the 'yamlsections' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.exit(_run(args))


if __name__ == "__main__":
    main()
