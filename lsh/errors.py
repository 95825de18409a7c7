from __future__ import annotations


class ShellError(Exception):
    """Base class for interpreter errors."""


class TerminalError(ShellError):
    """Terminal attributes could not be queried or changed."""


class ConfigError(ShellError, ValueError):
    """A setting from the environment or command line is invalid."""
