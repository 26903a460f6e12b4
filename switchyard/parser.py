"""
Switchyard parser: match raw arguments against prefix flags.

What this module provides
- ArgumentParser: owns a registry of Flag definitions and, after each call to
  process(), the outcome of that run:
  • per-flag presence and captured value,
  • positionals (arguments without a leading character), in input order,
  • extraneous switches (leading character present, no flag matched), stripped
    of their leading character, in input order,
  • missing required flags, in registration order.
- parse(flags, args): one-shot convenience returning a processed parser.

Matching rules
- An argument is a switch when its first character is one of the leading
  characters (default "-" and "/"). Exactly one leading character is removed.
- The first registered flag (registration order) whose prefix is a literal
  prefix of the remaining text wins; the rest of the text is its value.
  Registering "i" before "in" therefore makes "in" unreachable.
- Values are attached directly ("-ofile.out"); space separated values are not
  supported, the following argument is simply a positional.
- Empty arguments are positionals.

Outcomes are data
- process() returns a bool and never raises for missing required flags. Hosts
  that want the library to complain call check(), which goes through the fault
  layer (raise/warn, or rich rendering in shell mode).

Quick start
    from switchyard import ArgumentParser

    parser = ArgumentParser()
    parser.register("i")                  # required
    parser.register("o")                  # required
    parser.register("v", required=False)  # optional

    if not parser.process():              # sys.argv[1:]
        print(parser.message())
    else:
        print(parser.get("i"), parser.get("o"), parser.exists("v"))
"""
import shlex
import sys
from collections.abc import Iterable

from .faults import *
from .flags import Flag
from .utils import *

LEADING = "-/"
PREAMBLE = "Missing required command line switches: "
SEPARATOR = ", "


def _sanitize_leading(leading, /):
    """
    Normalize leading characters into an ordered tuple of unique one-character strings.

    Accepts a string ("-/") or any iterable of one-character strings.
    """
    if not isinstance(leading, Iterable):
        raise TypeError("leading characters must be a string or an iterable of strings")

    characters = []
    for character in leading:
        if not isinstance(character, str):
            raise TypeError("leading characters must be strings")
        if len(character) != 1:
            raise ValueError(f"leading character {character!r} must be exactly one character")
        if character not in characters:
            characters.append(character)

    if not characters:
        raise ValueError("at least one leading character is required")
    return tuple(characters)


def _tokenize(args, /):
    """
    Turn the process() argument into a concrete list of strings.

    - Unset: sys.argv[1:] (the program name is never part of the input).
    - str: shell-like string split with shlex.split.
    - Iterable[str]: used as-is; items are not trimmed.
    """
    if args is Unset:
        return list(sys.argv[1:])
    elif isinstance(args, str):
        return shlex.split(args)
    elif isinstance(args, Iterable):
        tokens = list(args)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("process() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("process() argument must be a string or an iterable of strings")


class ArgumentParser:
    """
    Prefix-flag command line parser.

    Lifecycle
    - Construct once with the leading characters and, optionally, initial flags.
    - Register every flag before processing.
    - process() may be called any number of times; each call fully replaces the
      positionals, extraneous switches and per-flag results of the previous one.
      Flags are never removed.

    Not thread-safe: share an instance across threads only behind a lock.
    """

    positionals = mirror("positionals")
    extraneous = mirror("extraneous")
    flags = mirror("flags")

    def __init__(self, flags=Unset, /, leading=Unset):
        """
        Parameters
        - flags: Iterable[Flag | str]
          Initial flags. Bare strings are registered as required prefixes.
        - leading: str | Iterable[str]
          Characters marking an argument as a switch. Defaults to "-/".

        Raises
        - DuplicateFlagError: the same prefix appears twice in `flags`.
        - TypeError / ValueError: malformed flags or leading characters.
        """
        self._leading = _sanitize_leading(coalesce(leading, LEADING))
        self._flags = {}
        self._positionals = []
        self._extraneous = []
        self._unmatched = []

        for flag in coalesce(flags, ()):
            self.register(flag)

    @property
    def leading(self):
        """
        The leading characters, as a frozenset.
        """
        return frozenset(self._leading)

    @property
    def missing(self):
        """
        Prefixes of required flags absent from the last parse, in registration order.
        """
        return tuple(flag.prefix for flag in self._flags.values() if flag.required and not flag.present)

    def register(self, prefix, /, required=Unset):
        """
        Add a flag to the registry and return it.

        Parameters
        - prefix: str | Flag
          The flag prefix, or a ready-made Flag (then `required` must be omitted).
          A Flag is registered as a fresh copy of its prefix and required-ness,
          so one flag set can seed several parsers without sharing results.
        - required: bool
          Whether the flag must be present. Defaults to True.

        Raises
        - DuplicateFlagError: the prefix is already registered.
        """
        if isinstance(prefix, Flag):
            if required is not Unset:
                raise TypeError("register() cannot take 'required' together with a flag instance")
            flag = Flag(prefix.prefix, prefix.required)
        else:
            flag = Flag(prefix, coalesce(required, True))

        if flag.prefix in self._flags:
            trigger(DuplicateFlagError(
                "flag prefix %r is already registered" % flag.prefix,
                title="duplicate flag",
                code=FaultCode.DUPLICATE_FLAG,
                hint="register each prefix once",
                prefix=flag.prefix,
                docs=getdoc(FaultCode.DUPLICATE_FLAG)
            ))

        self._flags[flag.prefix] = flag
        return flag

    def process(self, args=Unset, /):
        """
        Parse a run of arguments and report whether every required flag was seen.

        phases
        - reset: positionals, extraneous and every flag's value/presence.
        - scan: classify each argument as switch (matched or extraneous) or positional.
        - validate: True iff no required flag is missing.

        Parameters
        - args: Unset | str | Iterable[str]
          See _tokenize(); defaults to sys.argv[1:].

        Raises
        - TypeError: `args` is not a string or an iterable of strings.
        """
        tokens = _tokenize(args)

        self._positionals = []
        self._extraneous = []
        self._unmatched = []
        for flag in self._flags.values():
            flag._reset()

        for token in tokens:
            if token and token[0] in self._leading:
                body = token[1:]
                for flag in self._flags.values():
                    if flag.matches(body):
                        flag._capture(body)
                        break
                else:
                    self._extraneous.append(body)
                    self._unmatched.append(token)
            else:
                self._positionals.append(token)

        return not self.missing

    def exists(self, prefix, /):
        """
        True iff `prefix` is registered and was present in the last parse.
        """
        flag = self._flags.get(prefix)
        return flag is not None and flag.present

    def get(self, prefix, /):
        """
        The value captured for `prefix`, or "" when unregistered or absent.
        """
        flag = self._flags.get(prefix)
        return flag.value if flag is not None else ""

    def message(self, preamble=PREAMBLE, separator=SEPARATOR):
        """
        Human readable summary of missing required flags ("" when none are missing).
        """
        if not (missing := self.missing):
            return ""
        return preamble + separator.join(missing)

    def check(self, *, shell=False, fancy=False, colorful=True):
        """
        Surface the outcome of the last parse as faults.

        behavior
        - one ExtraneousSwitchWarning per extraneous switch, in input order.
        - a MissingSwitchesError when required flags are missing.
        - shell=False: warnings go through warnings.warn and the error is raised.
        - shell=True: everything is rendered on stderr with rich, and a missing
          switch error exits with status 1.

        Returns
        - self, when nothing fatal was found.
        """
        options = {"shell": shell, "fancy": fancy, "colorful": colorful}
        lead = self._leading[0]

        for argument, token in zip(self._extraneous, self._unmatched):
            if self._flags:
                hint = "known switches: %s" % ", ".join(lead + prefix for prefix in self._flags)
            else:
                hint = "no switches are registered"
            trigger(ExtraneousSwitchWarning(
                "unrecognized switch %r was ignored" % token,
                title="unrecognized switch",
                code=FaultCode.EXTRANEOUS_SWITCH,
                hint=hint,
                argument=argument,
                stacklevel=4,
                docs=getdoc(FaultCode.EXTRANEOUS_SWITCH)
            ), **options)

        if missing := self.missing:
            trigger(MissingSwitchesError(
                self.message(),
                title="missing required %s" % pluralize("switch", len(missing)),
                code=FaultCode.MISSING_SWITCHES,
                hint="add %s" % " ".join(lead + prefix + "<value>" for prefix in missing),
                missing=missing,
                docs=getdoc(FaultCode.MISSING_SWITCHES)
            ), **options)

        return self

    def __len__(self):
        return len(self._flags)

    def __contains__(self, prefix):
        return prefix in self._flags

    def __iter__(self):
        return iter(tuple(self._flags.values()))

    def __getitem__(self, prefix):
        return self._flags[prefix]

    def __repr__(self):
        return "argument-parser(flags=%r, leading=%r)" % (list(self._flags.values()), "".join(self._leading))

    def __rich_repr__(self):
        yield "flags", list(self._flags.values())
        yield "leading", "".join(self._leading)
        yield "positionals", self.positionals
        yield "extraneous", self.extraneous


def parse(flags, args=Unset, /, leading=Unset):
    """
    Build a parser for `flags`, process `args` and return the parser.

    Parameters
    - flags: Iterable[Flag | str]
    - args: Unset | str | Iterable[str] (defaults to sys.argv[1:])
    - leading: str | Iterable[str] (defaults to "-/")
    """
    parser = ArgumentParser(flags, leading=leading)
    parser.process(args)
    return parser


__all__ = (
    "ArgumentParser",
    "parse",
    "LEADING",
    "PREAMBLE",
    "SEPARATOR",
)
