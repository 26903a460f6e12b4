"""
Switchyard faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues.
- ParserException / ParserWarning: base types that carry message + options and
  know how to render themselves with rich.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Policy
- Configuration mistakes (registering a prefix twice) are programmer errors and
  are always raised, never rendered.
- Parse outcomes (missing required switches, extraneous switches) are plain data
  on the parser. They only become faults when the host asks for it through
  ArgumentParser.check().

Integration
- In non-shell mode, exceptions are raised and warnings go through warnings.warn.
- In shell mode, both are rendered on stderr via rich; exceptions then exit(1).
- The host may tune rendering from its __main__ module:
  __prog__ (program name), __styles__ (style overrides), __codes__ (code labels),
  __docs__ (code documentation).
"""
import os.path
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    grouping
    - registration (211xx): DUPLICATE_FLAG
    - validation (212xx): MISSING_SWITCHES
    - warnings (22xxx): EXTRANEOUS_SWITCH
    """
    # --- registration errors (211xx) ---
    DUPLICATE_FLAG              = 21101

    # --- validation errors (212xx) ---
    MISSING_SWITCHES            = 21201

    # --- warnings (22xxx) ---
    EXTRANEOUS_SWITCH           = 22201

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _progname():
    main = __import__("__main__")
    try:
        return main.__prog__
    except AttributeError:
        pass
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "switchyard"


def _render(fault, palette, title):
    """
    build the rich renderable shared by exceptions and warnings.

    palette maps style roles ("prog-name", "code", title, "message", "hint-arrow",
    "hint") to rich styles; host overrides from __main__.__styles__ win.
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
    colorful = fault.options.get("colorful", True)
    fancy = fault.options.get("fancy", False)

    def text(fragment, role=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), styles[role] if colorful else "")

    code = fault.options.get("code")
    header = Text.assemble(
        "[ ",
        text(_progname(), "prog-name"),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "?", "code"),
        " | ",
        text(str(fault.options.get("title", "")).title(), title),
        " ]"
    )
    message = text(_message(fault), "message")
    body = [message]
    if hint := fault.options.get("hint"):
        body.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fancy:
        return Panel(Group(*body), title=header, title_align="left")
    return Group(header, *body)


def _message(fault):
    return "" if fault.message is Unset else fault.message


class ParserException(Exception):
    """
    base class for parser errors that can raise or render themselves.

    options are free-form context (code, title, hint, shell, fancy, colorful,
    plus fault specific payload) kept in a read-only mapping.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return _message(self)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, "error-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateFlagError(ParserException, ValueError): ...
class MissingSwitchesError(ParserException): ...


class ParserWarning(ABC, Warning):
    """
    base class for parser warnings; same contract as ParserException but
    non-fatal: outside shell mode it goes through warnings.warn.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return _message(self)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "warning-title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, "warning-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ExtraneousSwitchWarning(ParserWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise exceptions
      are raised and warnings are emitted.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ keyed by
    FaultCode. when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ParserException",
    "DuplicateFlagError",
    "MissingSwitchesError",
    "ParserWarning",
    "ExtraneousSwitchWarning",
    "trigger",
    "getdoc",
)
