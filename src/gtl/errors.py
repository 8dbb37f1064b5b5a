"""Exceptions for conditions that abort a gtl command.

Components raise these and let them propagate; `gtl.cli.main` is the single
place that turns them into a diagnostic and a non-zero exit status.
"""


class GtlError(Exception):
    """Base exception for gtl operations."""


class ConfigError(GtlError):
    """The remotes configuration file could not be created, read or parsed."""


class SpawnError(GtlError):
    """An external command could not be started."""


class InputError(GtlError):
    """Reading the commit message from standard input failed."""


class PublishError(GtlError):
    """The package publish command failed on every attempt."""
