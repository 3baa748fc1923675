"""
Handler outcomes and the helpers that produce them.

A handler reports how it went by returning one of:
- Success()                 → exit code 0
- ArgumentError()           → command usage on the error stream, exit code 1
- ExecutionError(cause)     → "Inner error: <cause>" when a cause is given, exit code 2

Returning None counts as Success().

ensure() and attempt() cut a handler short: they write a message to the error
stream and raise CommandAbort(ExecutionError(...)), which the dispatcher maps
exactly like a returned outcome.

Quick example:
    >>> def remove(arguments, streams):
    ...     home = ensure(streams, os.environ.get("HOME"), "Error: HOME is not set")
    ...     attempt(streams, os.remove, arguments["FILE"][0], message="Error: unable to remove the file")
    ...     return Success()
"""
import functools
import logging
from typing import final

from .faults import ExitCode, CommandAbort

_LOGGER = logging.getLogger(__name__)


class Outcome:
    """
    Base class of handler outcomes; exit_code is the process exit code it maps to.
    """
    __slots__ = ()
    exit_code = ExitCode.SUCCESS

    def __repr__(self):
        return f"{type(self).__name__}()"


@final
class Success(Outcome):
    """The command completed successfully (singleton)."""
    __slots__ = ()
    exit_code = ExitCode.SUCCESS

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("type 'Success' is not an acceptable base type")


@final
class ArgumentError(Outcome):
    """The command was invoked incorrectly (singleton)."""
    __slots__ = ()
    exit_code = ExitCode.ARGUMENT_ERROR

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("type 'ArgumentError' is not an acceptable base type")


@final
class ExecutionError(Outcome):
    """
    An error occurred while executing the command.

    cause is optional; when given (usually an exception) it is shown to the user
    as a single line through str(cause).
    """
    __slots__ = ("cause",)
    __match_args__ = ("cause",)
    exit_code = ExitCode.EXECUTION_ERROR

    def __init__(self, cause=None, /):
        self.cause = cause

    def __init_subclass__(cls, **options):
        raise TypeError("type 'ExecutionError' is not an acceptable base type")

    def __eq__(self, other):
        if not isinstance(other, ExecutionError):
            return NotImplemented
        return self.cause is other.cause or self.cause == other.cause

    def __repr__(self):
        return f"ExecutionError({self.cause!r})" if self.cause is not None else "ExecutionError()"


def ensure(streams, value, message, /):
    """
    Return value unless it is None.

    When value is None, message is written to the error stream and the handler
    is aborted with ExecutionError() (no cause).
    """
    if value is not None:
        return value
    streams.write(message, error=True)
    raise CommandAbort(ExecutionError())


def attempt(streams, function, /, *args, message, **kwargs):
    """
    Return function(*args, **kwargs).

    When the call raises an Exception, message is written to the error stream and
    the handler is aborted with ExecutionError(error); the original exception is
    chained as the abort's __cause__.
    """
    try:
        return function(*args, **kwargs)
    except Exception as error:
        _LOGGER.debug("%s failed: %r", getattr(function, "__qualname__", function), error)
        streams.write(message, error=True)
        raise CommandAbort(ExecutionError(error)) from error


__all__ = (
    "Outcome",
    "Success",
    "ArgumentError",
    "ExecutionError",
    "ensure",
    "attempt",
)
