"""
Commandant parameter specifications.

A Parameter is one named positional slot of a command. It absorbs:
- exactly one token            → required, non-repeating   (NAME)
- one or more tokens           → required, repeating       (NAME...)
- zero or one token            → optional, non-repeating   ([NAME])
- zero or more tokens          → optional, repeating       ([NAME]...)

The last three are "variable-width": a command may declare at most one of
them (checked by Command, see commandant.commands).

Quick example:
    >>> from commandant.parameters import Parameter
    >>> str(Parameter("FILE", required=False, repeating=True))
    '[FILE]...'
"""
import re

from rich.text import Text

from .utils import SpecType


class Parameter(metaclass=SpecType):
    """
    Immutable description of one positional parameter.

    Metadata (sanitized on construction)
    - name: non-empty string without whitespace; shown verbatim in usage text
      and used as the key of the allocated arguments.
    - required: the slot must receive at least one token (default True).
    - repeating: the slot may receive more than one token (default False).
    """
    __introspectable__ = (
        "name",
        "required",
        "repeating",
    )

    __slots__ = (
        "_name",
        "_required",
        "_repeating",
    )

    def __init__(self, name, /, *, required=True, repeating=False):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not name or re.search(r"\s", name):
            raise ValueError(f"{type(self).__typename__} 'name' must be a non-empty string without whitespaces")
        if not isinstance(required, bool):
            raise TypeError(f"{type(self).__typename__} 'required' must be a boolean")
        if not isinstance(repeating, bool):
            raise TypeError(f"{type(self).__typename__} 'repeating' must be a boolean")

        self._name = name
        self._required = required
        self._repeating = repeating

    @property
    def variable(self):
        """
        True when the parameter can absorb a number of tokens other than one.
        """
        return not self._required or self._repeating

    def __str__(self):
        match self._required, self._repeating:
            case False, False:
                return f"[{self._name}]"
            case False, True:
                return f"[{self._name}]..."
            case True, False:
                return self._name
            case True, True:
                return f"{self._name}..."

    def __rich__(self):
        """
        Rich protocol hook: required slots are bold, optional ones dim.
        """
        return Text(str(self), style="bold" if self._required else "dim")

    def __eq__(self, other):
        if not isinstance(other, Parameter):
            return NotImplemented
        return (self._name, self._required, self._repeating) == (other._name, other._required, other._repeating)

    def __hash__(self):
        return hash((self._name, self._required, self._repeating))


__all__ = (
    "Parameter",
)
