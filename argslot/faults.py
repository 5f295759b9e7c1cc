"""
Argslot faults (errors and control signals) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure the parser
  can surface. Callers branch on the code, never on the exception type.
- ParserError: the single exception type. It carries the code, a message and a
  payload (offending key, offending position) plus rendering options, and knows
  how to render itself with rich.
- trigger(): central entry point to surface a fault (respecting the exit option).
- getdoc(): optional description lookup for a code from the host application.

Kinds
- INVALID_KEY      a key fails the tag/name grammar at registration time.
- OUT_OF_BOUNDS    a referenced position or key does not exist in the parser.
- GENERIC          structural violations (dangling key, key after key,
                   re-parsing, unsatisfied required argument, not parsed yet).
- HELP_REQUESTED   control signal: render help and stop.

Integration
- Parser.parse() funnels parse-time faults through trigger(fault, exit=..., console=...).
- With exit=False the fault is raised; with exit=True it is rendered on the
  console and the process exits with status 1.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - registration (2110x): INVALID_KEY
    - lookup (2111x): OUT_OF_BOUNDS
    - structure (2112x): GENERIC
    - control signals (2210x): HELP_REQUESTED
    """
    # --- registration errors ---
    INVALID_KEY     = 21101

    # --- lookup errors ---
    OUT_OF_BOUNDS   = 21111

    # --- structural errors ---
    GENERIC         = 21121

    # --- control signals ---
    HELP_REQUESTED  = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParserError(Exception):
    """
    tagged parser failure.

    attributes
    - code: FaultCode, the kind of failure (match on it).
    - message: short lowercase description.
    - key: offending raw key or key name, None when not applicable.
    - position: offending positional index, None when not applicable.
    - options: read-only rendering/trigger options (title, hint, prog, exit, ...).
    """

    def __init__(self, code, message, /, **options):
        assert isinstance(code, FaultCode)
        assert isinstance(message, str)
        super().__init__(message)
        self.code = code
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def key(self):
        return self.options.get("key")

    @property
    def position(self):
        return self.options.get("position")

    @classmethod
    def invalid_key(cls, key, /):
        return cls(
            FaultCode.INVALID_KEY,
            "the following key %r is invalid" % key,
            key=key,
            title="invalid key",
            hint="keys look like -k or --name, cannot contain inner dashes and cannot be -h or --help",
            docs=getdoc(FaultCode.INVALID_KEY),
        )

    @classmethod
    def out_of_bounds(cls, where, /):
        if isinstance(where, int):
            return cls(
                FaultCode.OUT_OF_BOUNDS,
                "the following position %d is not in the parser" % where,
                position=where,
                title="unknown position",
                hint="remove the extra ordered arguments",
                docs=getdoc(FaultCode.OUT_OF_BOUNDS),
            )
        return cls(
            FaultCode.OUT_OF_BOUNDS,
            "the following key %r does not exist in the parser" % where,
            key=where,
            title="unknown key",
            hint="check the spelling of the key",
            docs=getdoc(FaultCode.OUT_OF_BOUNDS),
        )

    @classmethod
    def generic(cls, message, /, **payload):
        return cls(
            FaultCode.GENERIC,
            message,
            title="parsing error",
            hint="check the arguments and try again",
            docs=getdoc(FaultCode.GENERIC),
            **payload,
        )

    @classmethod
    def help_requested(cls):
        return cls(FaultCode.HELP_REQUESTED, "help requested", title="help")

    def __repr__(self):
        return "%s(%s, %r)" % (type(self).__name__, self.code.name, self.message)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "underline #00E5FF dim",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.options.get("title", self.code.name.replace("_", " ").lower()).title(), styler("error-title")),
            " ]"
        )
        renders = [text(self.message, styler("error-message"))]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        if docs := self.options.get("docs"):
            renders.append(text(docs, styler("docs")))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("exit", False):
            raise self from None
        console = self.options.get("console") or Console(stderr=True)
        # a help request has no banner of its own
        if self.code is not FaultCode.HELP_REQUESTED:
            console.print(self, soft_wrap=True)
        if (epilogue := self.options.get("epilogue")) is not None:
            console.print(epilogue, soft_wrap=True)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.code, self.message, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParserError).
    - options are merged into the fault via __replace__(**options) before triggering.
    - with exit=True the fault is rendered on options["console"] and the process
      exits with status 1; otherwise the fault is raised.

    typical options
    - exit, console, prog, colorful, fancy, epilogue (renderable printed after
      the banner in exit mode).
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

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ParserError",
    "trigger",
    "getdoc",
)
