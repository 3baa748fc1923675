"""
Commandant application layer: resolve a sub-command and run it.

What this module provides
- Application: the root table (program name + commands) and the dispatcher
  Application.run(streams, tokens) -> (exit code, matched command or None).
- invoke(application, prompt): process-level runner (collects argv, runs, exits).

Dispatch, in order
- fewer than two tokens          → application usage on the error stream, exit 1
- unknown command name           → "Error: Unrecognized command '<name>'", exit 1
- tokens not fitting the command → command usage on the error stream, exit 1
- otherwise the handler runs and its outcome is mapped:
  • Success          → exit 0
  • ArgumentError    → command usage, exit 1
  • ExecutionError   → "Inner error: <cause>" when there is a cause (line breaks
    in the cause are folded into spaces), exit 2

Each run is a single pass with no state kept between calls; the dispatcher
never writes to the output stream.

Quick start
    from commandant import Application, Parameter, command, invoke

    @command("greet", "greets everybody", Parameter("NAME", repeating=True))
    def greet(arguments, streams):
        streams.write("hello, " + ", ".join(arguments["NAME"]))

    APP = Application("app", [greet])

    if __name__ == "__main__":
        invoke(APP)
"""
import logging
import re
import shlex
import sys
from collections.abc import Iterable

from .commands import Command
from .faults import ExitCode
from .outcomes import ArgumentError, ExecutionError
from .streams import Streams
from .utils import Unset, SpecType

_LOGGER = logging.getLogger(__name__)


class Application(metaclass=SpecType):
    """
    Immutable description of a command-style program.

    Fields (read-only)
    - name: program name shown in every usage line (argv[0] is never used).
    - commands: tuple of Command, in registration order.

    Command names are expected to be unique; they are not rejected, the first
    registered command wins and a warning is logged.
    """
    __introspectable__ = (
        "name",
        "commands",
    )

    def __init__(self, name, commands=()):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not name or re.search(r"\s", name):
            raise ValueError(f"{type(self).__typename__} 'name' must be a non-empty string without whitespaces")

        self._name = name
        self._commands = tuple(commands)

        names = set()
        for command in self._commands:
            if not isinstance(command, Command):
                raise TypeError(f"{type(self).__typename__} 'commands' must contain commands only")
            if command.name in names:
                _LOGGER.warning("%s %r registers command %r twice, only the first one is reachable", type(self).__typename__, name, command.name)
            names.add(command.name)

    def usage(self):
        """
        Return the application usage as a list of lines (without newlines).
        """
        return [
            f"Usage: {self._name} COMMAND [ARGS]",
            "",
            "commands:",
            *(command.summary() for command in self._commands),
        ]

    def print_usage(self, streams, /):
        """Write the application usage to the error stream."""
        for line in self.usage():
            streams.write(line, error=True)

    def find(self, name, /):
        """
        Return the first command called name (exact, case-sensitive), or None.
        """
        for command in self._commands:
            if command.name == name:
                return command
        return None

    def run(self, streams, tokens, /):
        """
        Dispatch one invocation.

        Parameters
        - streams: Streams receiving diagnostics (error) and handler output.
        - tokens: full argv, program invocation name included at index 0.

        Returns
        - (exit_code, command): exit_code is an ExitCode, command is the matched
          Command or None when no command could be resolved.
        """
        tokens = list(tokens)

        if len(tokens) < 2:
            _LOGGER.debug("no command given")
            self.print_usage(streams)
            return ExitCode.ARGUMENT_ERROR, None

        if (command := self.find(name := tokens[1])) is None:
            _LOGGER.debug("unrecognized command %r", name)
            streams.write(f"Error: Unrecognized command '{name}'", error=True)
            return ExitCode.ARGUMENT_ERROR, None

        if (arguments := command.parse(tokens[2:])) is None:
            streams.write(command.usage(self._name), error=True)
            return ExitCode.ARGUMENT_ERROR, command

        _LOGGER.debug("running %s with %r", command.name, arguments)
        match outcome := command(arguments, streams):
            case ArgumentError():
                streams.write(command.usage(self._name), error=True)
            case ExecutionError(cause=cause) if cause is not None:
                streams.write(f"Inner error: {' '.join(str(cause).splitlines())}", error=True)

        _LOGGER.debug("%s finished with %r", command.name, outcome)
        return outcome.exit_code, command


def invoke(application, prompt=Unset, /, *, streams=Unset):
    """
    Run an application as the current process and exit with its exit code.

    Parameters
    - application: Application to dispatch.
    - prompt:
      • Unset: use sys.argv.
      • str: shell-like string, split with shlex.split (program name included).
      • Iterable[str]: pre-tokenized argv.
    - streams: Streams to use; defaults to Streams.std().

    Raises
    - SystemExit: always, carrying the computed exit code.
    - TypeError: when prompt is neither a string nor an iterable of strings.
    """
    if not isinstance(application, Application):
        raise TypeError("invoke() first argument must be an application")

    if prompt is Unset:
        tokens = list(sys.argv)
    elif isinstance(prompt, str):
        tokens = shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("invoke() argument must be a string or an iterable of strings")
    else:
        raise TypeError("invoke() argument must be a string or an iterable of strings")

    exit_code, _ = application.run(Streams.std() if streams is Unset else streams, tokens)
    sys.exit(int(exit_code))


__all__ = (
    "Application",
    "invoke",
)
