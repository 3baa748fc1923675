"""
Commandant command layer: one sub-command, its parameters and its handler.

What this module provides
- Command: immutable description of a sub-command (name, short description,
  positional parameters, handler) plus its usage/summary renderers.
- command(...): decorator factory building a Command around a handler.

Handlers
- Called as handler(arguments, streams) with the allocated Arguments and the
  Streams of the current run.
- Return an Outcome (Success/ArgumentError/ExecutionError) or None (success), or
  abort through ensure()/attempt() (see commandant.outcomes).

Construction-time checks
- At most one variable-width (optional or repeating) parameter per command;
  more would make the allocation ambiguous and raises ConfigurationError.
- Parameter names are unique within a command (they key the arguments).

Quick start
    from commandant import command, Parameter, Success

    @command("copy", "copies the sources into a directory",
             Parameter("SRC", repeating=True), Parameter("DIR"))
    def copy(arguments, streams):
        for source in arguments["SRC"]:
            streams.write(f"{source} -> {arguments['DIR'][0]}")
        return Success()
"""
import logging
import re

from .allocator import allocate
from .faults import ConfigurationError, CommandAbort
from .outcomes import Outcome, Success
from .parameters import Parameter
from .utils import rename, SpecType

_LOGGER = logging.getLogger(__name__)

SUMMARY_WIDTH = 22
"""Minimum width of the command-name column in the application usage."""


def _sanitize_params(cls, name, params, /):
    """
    Validate a command's parameter list and return it as a tuple.

    Raises
    - TypeError: when an entry is not a Parameter.
    - ConfigurationError: duplicated names, or more than one variable-width parameter.
    """
    params = tuple(params)
    for param in params:
        if not isinstance(param, Parameter):
            raise TypeError(f"{cls.__typename__} 'params' must contain parameters only")

    seen = set()
    for param in params:
        if param.name in seen:
            raise ConfigurationError(f"{cls.__typename__} {name!r} declares parameter {param.name!r} twice", command=name)
        seen.add(param.name)

    if len(variables := [param for param in params if param.variable]) > 1:
        raise ConfigurationError(
            f"{cls.__typename__} {name!r} declares more than one optional or repeating parameter "
            f"({', '.join(map(str, variables))})",
            command=name,
        )

    return params


class Command(metaclass=SpecType):
    """
    Immutable description of a sub-command.

    Fields (read-only)
    - name: the token selecting this command (case-sensitive).
    - descr: one-line description shown in the application usage.
    - params: tuple of Parameter in declaration order.
    - handler: callable(arguments, streams) -> Outcome | None.
    """
    __introspectable__ = (
        "name",
        "descr",
        "params",
        "handler",
    )

    __displayable__ = (
        "name",
        "descr",
        "params",
    )

    def __init__(self, name, descr, params, handler):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not name or re.search(r"\s", name):
            raise ValueError(f"{type(self).__typename__} 'name' must be a non-empty string without whitespaces")
        if not isinstance(descr, str):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string")
        elif not (descr := descr.strip()):
            raise ValueError(f"{type(self).__typename__} 'descr' cannot be empty")
        if not callable(handler):
            raise TypeError(f"{type(self).__typename__} 'handler' must be callable")

        self._name = name
        self._descr = descr
        self._params = _sanitize_params(type(self), name, params)
        self._handler = handler

    def parse(self, tokens, /):
        """
        Allocate tokens (everything after the command name) over this command's parameters.

        Returns Arguments, or None when the tokens do not fit.
        """
        return allocate(self._params, tokens)

    def usage(self, program, /):
        """Return the command usage line, e.g. "Usage: app cp SRC... DIR"."""
        return f"Usage: {program} {self}"

    def summary(self):
        """Return the command line shown in the application usage."""
        return f"{self._name:<{SUMMARY_WIDTH}}  {self._descr}"

    def __call__(self, arguments, streams, /):
        """
        Run the handler and return its outcome.

        - None is read as Success().
        - CommandAbort raised by the handler yields the outcome it carries.
        - Any other exception propagates unchanged.

        Raises
        - TypeError: when the handler returns something that is not an Outcome,
          or a bare Outcome() (only its subclasses carry a meaning).
        """
        try:
            outcome = self._handler(arguments, streams)
        except CommandAbort as abort:
            _LOGGER.debug("%s aborted with %r", self._name, abort.outcome)
            outcome = abort.outcome
        if outcome is None:
            outcome = Success()
        if type(outcome) is Outcome or not isinstance(outcome, Outcome):
            raise TypeError(f"{type(self).__typename__} {self._name!r} handler must return an outcome, not {type(outcome).__name__}")
        return outcome

    def __str__(self):
        return " ".join([self._name, *map(str, self._params)])


def command(name, descr, /, *params):
    """
    Return a decorator wrapping a handler into a Command.

    Parameters
    - name, descr: see Command.
    - *params: Parameter objects in declaration order.

    Example
        @command("status", "shows the working tree status", Parameter("PATH", required=False))
        def status(arguments, streams): ...
    """
    @rename("command")
    def wrapper(handler, /):
        if not callable(handler):
            raise TypeError("@command() must be applied to a callable")
        return Command(name, descr, params, handler)

    return wrapper


__all__ = (
    "SUMMARY_WIDTH",
    "Command",
    "command",
)
