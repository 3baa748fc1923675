"""
Output/error sinks handed to the dispatcher and to every handler.

Streams pairs two rich consoles: "output" for the handler's own results and
"error" for usage text and diagnostics. Lines are written verbatim to the
console's file, bypassing the renderer, so usage text and diagnostics stay
byte-exact (no markup, no highlighting, no wrapping, tabs and control
characters kept) while handlers remain free to print rich renderables on the
same consoles.

Quick example
    >>> streams = Streams.virtual()
    >>> streams.write("hello")
    >>> streams.write("oops", error=True)
    >>> streams.read_output(), streams.read_error()
    ('hello\\n', 'oops\\n')
"""
import io

from rich.console import Console

from .utils import *


class Streams:
    """
    Pair of writable text sinks (output and error).

    Construction
    - Streams(): stdout/stderr consoles (same as Streams.std()).
    - Streams(output, error): any rich Console objects.
    - Streams.virtual(): in-memory consoles, readable with read_output()/read_error().
    """

    output = mirror("output")
    error = mirror("error")

    def __init__(self, output=Unset, error=Unset):
        if not isinstance(output := coalesce(output, Console()), Console):
            raise TypeError("Streams 'output' must be a rich console")
        if not isinstance(error := coalesce(error, Console(stderr=True)), Console):
            raise TypeError("Streams 'error' must be a rich console")
        self._output = output
        self._error = error

    @classmethod
    def std(cls):
        """Streams bound to the process stdout and stderr."""
        return cls()

    @classmethod
    def virtual(cls):
        """Streams bound to in-memory buffers (used by tests and embedding code)."""
        return cls(Console(file=io.StringIO()), Console(file=io.StringIO()))

    def write(self, text="", /, *, error=False):
        """
        Write one line of text followed by a newline.

        The text goes to the error console when error is true, otherwise to the
        output console. Write failures propagate to the caller.
        """
        file = (self._error if error else self._output).file
        file.write(f"{text}\n")
        file.flush()

    def read_output(self):
        return self._read(self._output)

    def read_error(self):
        return self._read(self._error)

    @staticmethod
    def _read(console):
        if not isinstance(console.file, io.StringIO):
            raise TypeError("only virtual streams can be read back")
        return console.file.getvalue()

    def __repr__(self):
        return f"streams(output={self._output!r}, error={self._error!r})"


__all__ = (
    "Streams",
)
