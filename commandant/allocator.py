"""
Commandant token allocator.

allocate(parameters, tokens) distributes a flat list of tokens over a command's
parameters in a single left-to-right pass:

- every required parameter is owed one token; before serving a parameter the
  allocator checks that the tokens left can still cover what is owed
  (including the current parameter when it is required);
- the "slack" is whatever is left beyond what later required parameters are owed;
- with no slack, optional and repeating parameters receive nothing;
- with slack, a repeating parameter takes all of it, any other parameter takes one;
- tokens left over after the last parameter mean the input does not fit.

Tokens keep their input order inside each slot. A failed allocation is reported
by returning None; allocate() never raises for input that does not fit.

Quick example:
    >>> from commandant import Parameter, allocate
    >>> arguments = allocate(
    ...     [Parameter("SRC", repeating=True), Parameter("DEST")],
    ...     ["a", "b", "c"],
    ... )
    >>> arguments["SRC"], arguments["DEST"]
    (('a', 'b'), ('c',))
"""
import logging
from collections import deque
from collections.abc import Mapping
from types import MappingProxyType

_LOGGER = logging.getLogger(__name__)


class Arguments(Mapping):
    """
    Read-only mapping from parameter name to the tuple of tokens it received.

    Keys are ordered as the parameters were declared. Unsatisfied optional
    parameters map to an empty tuple.
    """
    __slots__ = ("_values",)

    def __init__(self, values=(), /):
        self._values = MappingProxyType({str(name): tuple(tokens) for name, tokens in dict(values).items()})

    def __getitem__(self, name, /):
        return self._values[name]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def first(self, name, default=None, /):
        """
        Return the first token of the named parameter, or default when it received none.
        """
        return next(iter(self._values[name]), default)

    def __repr__(self):
        return f"arguments({dict(self._values)!r})"


def allocate(parameters, tokens, /):
    """
    Distribute tokens over parameters.

    Parameters
    - parameters: Iterable[Parameter] in declaration order.
    - tokens: Iterable[str] (program and command names already removed).

    Returns
    - Arguments when the tokens fit the parameters, otherwise None.
    """
    parameters = tuple(parameters)
    tokens = deque(tokens)
    owed = sum(1 for parameter in parameters if parameter.required)
    remaining = len(tokens)
    values = {}

    for parameter in parameters:
        if remaining < owed:
            _LOGGER.debug("not enough tokens for %s: %d left, %d owed", parameter.name, remaining, owed)
            return None

        if parameter.required:
            owed -= 1

        if remaining == owed:
            count = 0
        elif parameter.repeating:
            count = remaining - owed
        else:
            count = 1

        values[parameter.name] = [tokens.popleft() for _ in range(count)]
        remaining -= count

    if remaining > 0:
        _LOGGER.debug("%d unexpected token(s) left: %r", remaining, list(tokens))
        return None

    return Arguments(values)


__all__ = (
    "Arguments",
    "allocate",
)
