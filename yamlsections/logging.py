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

"""Logging interface for yamlsections.

Library modules report what they do (files read and written, headers
found, defaults attached) through a small logger protocol instead of
printing directly. The default global logger is silent, so embedding
applications see nothing unless they opt in; the CLI installs a printing
logger when ``--verbose`` or ``--debug`` is given.

The logger supports three output levels:
- Warning: Always printed (to stderr)
- Verbose: Only printed when verbose mode is enabled
- Debug: Only printed when debug mode is enabled (implies verbose)

Example:
    Configure global logger:
        ```python
        from yamlsections.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=True))
        ```

    Use in library code:
        ```python
        from yamlsections.logging import get_global_logger

        logger = get_global_logger()
        logger.verbose("LOAD", "Reading config.yml")
        logger.debug("HEADER", "Found 2 header line(s)")
        ```
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class Logger(Protocol):
    """Protocol for logger implementations."""

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message.

        Args:
            prefix: Message prefix (e.g., "LOAD", "SAVE").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message.

        Args:
            prefix: Message prefix (e.g., "HEADER", "DEFAULTS").
            message: Log message.
        """
        ...

    def warning(self, prefix: str, message: str) -> None:
        """Print a warning regardless of verbosity.

        Args:
            prefix: Message prefix.
            message: Warning text.
        """
        ...


class DefaultLogger:
    """Logger that prints ``[PREFIX] message`` lines.

    Verbose and debug lines go to ``stream`` (stdout by default), warnings
    always go to stderr.
    """

    def __init__(
        self,
        verbose: bool = False,
        debug: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize logger with verbosity settings.

        Args:
            verbose: If True, print verbose messages.
            debug: If True, print debug messages (implies verbose).
            stream: Destination for verbose/debug output. Resolved at
                print time when None so pytest's capsys sees it.
        """
        self._verbose = verbose or debug
        self._debug = debug
        self._stream = stream

    def _out(self) -> TextIO:
        return sys.stdout if self._stream is None else self._stream

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            print(f"[{prefix}] {message}", file=self._out())

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            print(f"[{prefix}] {message}", file=self._out())

    def warning(self, prefix: str, message: str) -> None:
        print(f"[{prefix}] WARNING: {message}", file=sys.stderr)


class SilentLogger:
    """Logger that suppresses all output, warnings included."""

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass

    def warning(self, prefix: str, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Get a printing logger with the specified verbosity.

    Args:
        verbose: If True, logger will print verbose messages.
        debug: If True, logger will print debug messages (implies verbose).

    Returns:
        A DefaultLogger configured with the specified verbosity.
    """
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Return the logger library code writes to (silent by default)."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Set the global logger instance.

    Args:
        logger: Logger instance to use as the global logger.

    Note:
        This affects every library call made afterwards. Tests that install
        a logger should restore a SilentLogger when they are done.
    """
    global _global_logger
    _global_logger = logger
