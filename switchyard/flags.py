r"""
Switchyard flag definitions.

Overview
- Flag: a recognized switch identified by a literal, case-sensitive prefix that
  follows one leading character on the command line (e.g. "i" matches "-ifile.txt"
  and "/ifile.txt"). The text after the prefix is the flag's captured value.

Metadata
- prefix: non-empty string, unique within a parser.
- required: bool, fixed at construction.
- value: captured text from the last parse ("" when absent or bare).
- present: whether the flag matched during the last parse.

Identity
- Two flags are equal when their prefixes are equal; required-ness is not part
  of the identity, so a parser never holds two flags for the same prefix.

Introspection & representation
- FlagType exposes the fields listed in __introspectable__ as read-only
  properties and provides stable __repr__/__rich_repr__ implementations.

Quick example:
    >>> from switchyard.flags import Flag
    >>> Flag("i")
    flag(prefix='i', required=True, value='', present=False)
    >>> Flag("v", required=False).required
    False
"""
import functools
import operator
import re

from .utils import *


class FlagType(type):
    """
    Metaclass that turns flag classes into introspectable, read-only records.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private "_{name}" attribute (see mirror()).
    - Provide __repr__/__rich_repr__ built from the same names.
    - Derive __typename__ from the class name ("Flag" → "flag") for messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        def __repr__(self):
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            )
        self.__repr__ = rename(__repr__, "__repr__")

        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = rename(__rich_repr__, "__rich_repr__")

        return self


class Flag(metaclass=FlagType):
    """
    Prefix-matched command line switch.

    The prefix and required-ness are fixed at construction. The captured value
    and presence are owned by the parser holding the flag: they are reset at the
    start of every parse and filled in when an argument matches. Parsers register
    their own copy of a Flag handed to them, so the original never changes.
    """

    __introspectable__ = (
        "prefix",
        "required",
        "value",
        "present",
    )

    def __init__(self, prefix, /, required=True):
        """
        Construct a Flag.

        Parameters
        - prefix: str
          Literal leading text of the switch once its leading character is
          removed. Case-sensitive; must not be empty.
        - required: bool
          Whether the parser reports failure when the flag is absent.

        Raises
        - TypeError: prefix is not a string.
        - ValueError: prefix is empty.
        """
        if not isinstance(prefix, str):
            raise TypeError(f"{type(self).__typename__} prefix must be a string")
        elif not prefix:
            raise ValueError(f"{type(self).__typename__} prefix cannot be empty")

        self._prefix = prefix
        self._required = bool(required)
        self._value = ""
        self._present = False

    def matches(self, text, /):
        """
        Return True when this flag's prefix is a literal prefix of `text`.
        """
        return text.startswith(self._prefix)

    def _reset(self):
        self._value = ""
        self._present = False

    def _capture(self, text, /):
        # text is the switch body with the leading character already stripped
        self._value = text[len(self._prefix):]
        self._present = True

    def __eq__(self, other):
        if not isinstance(other, Flag):
            return NotImplemented
        return self._prefix == other._prefix

    def __hash__(self):
        return hash(self._prefix)


__all__ = (
    "Flag",
)
