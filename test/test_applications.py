"""
Application behavioral tests (dispatch, exit codes, diagnostics, runner).

Scope
- Validate the four dispatch states: no command, unknown command, bad arguments,
  handler ran (with every outcome mapped to its exit code and message).
- Validate that the dispatcher never writes to the output stream.
- Validate invoke() tokenization and process exit.

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured with Streams.virtual().
"""

from __future__ import annotations

import io
import logging
import unittest
from unittest import TestCase, mock

from commandant import (
    Application,
    ArgumentError,
    Command,
    ExecutionError,
    ExitCode,
    Parameter,
    Streams,
    Success,
    attempt,
    command,
    ensure,
    invoke,
)


def _single(name, descr, handler):
    return Command(name, descr, [Parameter("param1")], handler)


APP = Application("app", [
    _single("cmd1", "desc1", lambda arguments, streams: Success()),
    _single("cmd2", "desc2", lambda arguments, streams: ArgumentError()),
    _single("cmd3", "desc3", lambda arguments, streams: ExecutionError()),
    _single("cmd4", "desc4", lambda arguments, streams: ExecutionError(OSError(":("))),
])

APP_USAGE = (
    "Usage: app COMMAND [ARGS]\n"
    "\n"
    "commands:\n"
    "cmd1                    desc1\n"
    "cmd2                    desc2\n"
    "cmd3                    desc3\n"
    "cmd4                    desc4\n"
)


class TestApplicationRun(TestCase):
    """Dispatch against a fixed four-command table."""

    def setUp(self) -> None:
        self.streams = Streams.virtual()

    def run_app(self, expected_code, expected_command, *tokens):
        exit_code, matched = APP.run(self.streams, tokens)
        self.assertEqual(exit_code, expected_code)
        if expected_command is None:
            self.assertIsNone(matched)
        else:
            self.assertEqual(matched.name, expected_command)
        self.assertEqual(self.streams.read_output(), "")
        return self.streams.read_error()

    def testNoTokensPrintsUsage(self):
        self.assertEqual(self.run_app(1, None), APP_USAGE)

    def testProgramOnlyPrintsUsage(self):
        self.assertEqual(self.run_app(1, None, "app"), APP_USAGE)

    def testUnknownCommand(self):
        self.assertEqual(self.run_app(1, None, "app", "badcmd"), "Error: Unrecognized command 'badcmd'\n")

    def testUnknownCommandIsEchoedUnchanged(self):
        self.assertEqual(self.run_app(1, None, "app", "a\tb\r"), "Error: Unrecognized command 'a\tb\r'\n")

    def testCommandNamesAreCaseSensitive(self):
        self.assertEqual(self.run_app(1, None, "app", "CMD1", "x"), "Error: Unrecognized command 'CMD1'\n")

    def testMissingArgumentsPrintCommandUsage(self):
        self.assertEqual(self.run_app(1, "cmd1", "app", "cmd1"), "Usage: app cmd1 param1\n")

    def testExtraArgumentsPrintCommandUsage(self):
        self.assertEqual(self.run_app(1, "cmd1", "app", "cmd1", "a", "b"), "Usage: app cmd1 param1\n")

    def testHandlerSuccess(self):
        self.assertEqual(self.run_app(0, "cmd1", "app", "cmd1", "arg1"), "")

    def testHandlerArgumentError(self):
        self.assertEqual(self.run_app(1, "cmd2", "app", "cmd2", "arg1"), "Usage: app cmd2 param1\n")

    def testHandlerExecutionError(self):
        self.assertEqual(self.run_app(2, "cmd3", "app", "cmd3", "arg1"), "")

    def testHandlerExecutionErrorWithCause(self):
        self.assertEqual(self.run_app(2, "cmd4", "app", "cmd4", "arg1"), "Inner error: :(\n")

    def testMultilineCauseIsFolded(self):
        app = Application("app", [_single("cmd", "desc", lambda arguments, streams: ExecutionError(ValueError("first\nsecond\r\nthird")))])
        exit_code, _ = app.run(self.streams, ["app", "cmd", "x"])
        self.assertEqual(exit_code, 2)
        self.assertEqual(self.streams.read_error(), "Inner error: first second third\n")

    def testProgramNameComesFromApplication(self):
        self.assertEqual(self.run_app(1, "cmd1", "/usr/bin/other", "cmd1"), "Usage: app cmd1 param1\n")

    def testExitCodesAreExitCodeMembers(self):
        exit_code, _ = APP.run(self.streams, ["app", "cmd3", "x"])
        self.assertIs(exit_code, ExitCode.EXECUTION_ERROR)

    def testRepeatedRunsAreIdentical(self):
        results = []
        for _ in range(3):
            streams = Streams.virtual()
            exit_code, matched = APP.run(streams, ["app", "cmd4", "x"])
            results.append((exit_code, matched, streams.read_output(), streams.read_error()))
        self.assertEqual(results[0], results[1])
        self.assertEqual(results[1], results[2])


class TestApplicationHandlers(TestCase):
    """Handlers that use the streams and the abort helpers."""

    def setUp(self) -> None:
        self.streams = Streams.virtual()

    def testHandlerReceivesAllocatedArguments(self):
        received = {}

        @command("cp", "copies files", Parameter("SRC", repeating=True), Parameter("DEST"))
        def copy(arguments, streams):
            received.update(arguments)
            streams.write("copied")

        exit_code, _ = Application("tool", [copy]).run(self.streams, ["tool", "cp", "a", "b", "c"])
        self.assertEqual(exit_code, 0)
        self.assertEqual(received, {"SRC": ("a", "b"), "DEST": ("c",)})
        self.assertEqual(self.streams.read_output(), "copied\n")

    def testEnsureAbort(self):
        @command("home", "shows home")
        def home(arguments, streams):
            ensure(streams, None, "Error: Unable to get home directory")
            return Success()

        exit_code, _ = Application("tool", [home]).run(self.streams, ["tool", "home"])
        self.assertEqual(exit_code, 2)
        self.assertEqual(self.streams.read_error(), "Error: Unable to get home directory\n")

    def testAttemptAbort(self):
        @command("num", "parses a number", Parameter("N"))
        def number(arguments, streams):
            attempt(streams, int, arguments["N"][0], message="Error: not a number")

        exit_code, _ = Application("tool", [number]).run(self.streams, ["tool", "num", "x"])
        self.assertEqual(exit_code, 2)
        self.assertEqual(
            self.streams.read_error(),
            "Error: not a number\nInner error: invalid literal for int() with base 10: 'x'\n",
        )

    def testOptionalParameterCommand(self):
        @command("show", "shows a thing", Parameter("THING", required=False))
        def show(arguments, streams):
            streams.write(arguments.first("THING", "<none>"))

        app = Application("tool", [show])
        self.assertEqual(app.run(self.streams, ["tool", "show"])[0], 0)
        self.assertEqual(app.run(self.streams, ["tool", "show", "x"])[0], 0)
        self.assertEqual(app.run(self.streams, ["tool", "show", "x", "y"])[0], 1)
        self.assertEqual(self.streams.read_output(), "<none>\nx\n")
        self.assertEqual(self.streams.read_error(), "Usage: tool show [THING]\n")


class TestApplicationConstruction(TestCase):

    def testFields(self):
        self.assertEqual(APP.name, "app")
        self.assertEqual([cmd.name for cmd in APP.commands], ["cmd1", "cmd2", "cmd3", "cmd4"])

    def testUsageLines(self):
        self.assertEqual("".join(line + "\n" for line in APP.usage()), APP_USAGE)

    def testEmptyApplicationUsage(self):
        streams = Streams.virtual()
        Application("app").print_usage(streams)
        self.assertEqual(streams.read_error(), "Usage: app COMMAND [ARGS]\n\ncommands:\n")

    def testRejectsNonCommands(self):
        with self.assertRaises(TypeError):
            Application("app", ["cmd1"])  # type: ignore[list-item]

    def testRejectsInvalidName(self):
        with self.assertRaises(TypeError):
            Application(None)  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            Application("")
        with self.assertRaises(ValueError):
            Application(" app")
        with self.assertRaises(ValueError):
            Application("my app")

    def testDuplicateNamesFirstWins(self):
        first = _single("dup", "first", lambda arguments, streams: Success())
        second = _single("dup", "second", lambda arguments, streams: ExecutionError())
        with self.assertLogs("commandant.applications", level=logging.WARNING):
            app = Application("app", [first, second])
        self.assertIs(app.find("dup"), first)
        self.assertEqual(app.run(Streams.virtual(), ["app", "dup", "x"]), (0, first))


class TestInvoke(TestCase):

    def setUp(self) -> None:
        self.streams = Streams.virtual()

    def testExitsWithExitCode(self):
        with self.assertRaises(SystemExit) as context:
            invoke(APP, ["app", "cmd1", "x"], streams=self.streams)
        self.assertEqual(context.exception.code, 0)

    def testSplitsStrings(self):
        with self.assertRaises(SystemExit) as context:
            invoke(APP, "app cmd4 'one token'", streams=self.streams)
        self.assertEqual(context.exception.code, 2)
        self.assertEqual(self.streams.read_error(), "Inner error: :(\n")

    def testReadsArgvByDefault(self):
        with mock.patch("sys.argv", ["app", "badcmd"]), self.assertRaises(SystemExit) as context:
            invoke(APP, streams=self.streams)
        self.assertEqual(context.exception.code, 1)
        self.assertEqual(self.streams.read_error(), "Error: Unrecognized command 'badcmd'\n")

    def testDefaultsToStandardStreams(self):
        with mock.patch("sys.stderr", new_callable=io.StringIO) as stderr, self.assertRaises(SystemExit):
            invoke(APP, ["app"])
        self.assertEqual(stderr.getvalue(), APP_USAGE)

    def testRejectsInvalidPrompts(self):
        with self.assertRaises(TypeError):
            invoke(APP, 42)  # type: ignore[call-overload]
        with self.assertRaises(TypeError):
            invoke(APP, ["app", 1])  # type: ignore[list-item]
        with self.assertRaises(TypeError):
            invoke("app")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
