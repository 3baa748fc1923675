"""
Commandant faults (exit codes and exceptions).

Scope
- ExitCode: stable process exit codes produced by the dispatcher.
- ConfigurationError: a command table that can never be parsed unambiguously.
  Raised eagerly while the table is built, never at call time.
- CommandAbort: carries an outcome out of a handler so helpers (ensure/attempt)
  can stop it early; the dispatcher maps the outcome as if it had been returned.

User-facing diagnostics are not raised: the dispatcher writes them to the error
stream and returns an exit code instead.
"""
from enum import IntEnum


class ExitCode(IntEnum):
    """
    process exit codes (stable identifiers).

    - SUCCESS: the handler completed.
    - ARGUMENT_ERROR: no command, unknown command, or arguments that do not fit
      the command's parameters (including a handler reporting so).
    - EXECUTION_ERROR: the handler failed while doing its work.
    """
    SUCCESS         = 0
    ARGUMENT_ERROR  = 1
    EXECUTION_ERROR = 2


class ConfigurationError(ValueError):
    """
    A command declares parameters that cannot be allocated unambiguously.
    """

    def __init__(self, message, /, *, command=None):
        super().__init__(message)
        self.command = command


class CommandAbort(Exception):
    """
    Stop a handler with the given outcome.

    The dispatcher catches it around the handler call only; raising it anywhere
    else is a plain exception.
    """

    def __init__(self, outcome, /):
        super().__init__(outcome)
        self.outcome = outcome


__all__ = (
    "ExitCode",
    "ConfigurationError",
    "CommandAbort",
)
