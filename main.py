import os

from rich.pretty import pprint

from commandant import *


@command("cmd1", "foos the bars via extensible frameworks", Parameter("FOO"), Parameter("BAR", repeating=True))
def cmd1(arguments, streams):
    home = ensure(streams, os.environ.get("HOME"), "Error: Unable to get home directory")
    streams.write(f"{arguments.first('FOO')} -> {', '.join(arguments['BAR'])} (from {home})")
    return Success()


@command("cmd2", "executes command #2 on the thing", Parameter("THING", required=False))
def cmd2(arguments, streams):
    value = attempt(streams, os.environ.__getitem__, "ENV_VAR", message="Error: Unable to get 'ENV_VAR' environment variable")
    if arguments.first("THING") not in (None, value):
        return ArgumentError()
    return Success()


@command("cmd3", "runs command #3 on the files", Parameter("FILE", required=False, repeating=True))
def cmd3(arguments, streams):
    pprint(arguments, console=streams.output)
    return ExecutionError()


APP = Application("app", [cmd1, cmd2, cmd3])


if __name__ == '__main__':
    invoke(APP)
