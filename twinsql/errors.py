"""
Failure taxonomy used by twinsql.

Connection and execution failures are captured inside outcomes and never
raised to the runner. Only configuration problems and the optional runner
timeout are raised to callers.
"""


class TwinSQLError(Exception):
    """Base exception for twinsql."""

    pass


class ConnectionFailure(TwinSQLError):
    """
    The handle could not be used: the engine could not be created, no
    connection could be acquired, or the driver invalidated it mid-statement.
    """

    pass


class ExecutionFailure(TwinSQLError):
    """The backend rejected the statement or failed while running it."""

    pass


class ResultTooLarge(ExecutionFailure):
    """A read produced more rows than the executor is allowed to buffer."""

    pass


class ComparisonTimeout(TwinSQLError):
    """Both sides did not finish within the timeout given to the runner."""

    pass


class ConfigurationError(ValueError):
    """The configuration file is missing, empty, not YAML, or invalid."""

    pass
