r"""
Argslot argument specifications and value storage.

Overview
- ValueSlot: the mutable string storage behind one declared argument.
  • set(value): overwrite and mark initialized.
  • append(value, separator): join onto the previous value when initialized,
    otherwise behave like set().
  • clear(): the only way back to the uninitialized state.

- Argument: a declared argument, positional or keyed (the parser decides which
  by how it is registered).
  • help: str, short description used by the help renderer.
  • required: bool, parsing fails when no value (nor non-empty default) is present.
  • many: bool, successive tokens accumulate into one separator-joined string
    instead of replacing each other.
  • default: str, applied by the parser when no token was routed to the argument.
  • value: the ValueSlot holding the collected token(s).

Multi-value storage
- Accumulated tokens are joined with SEPARATOR (",") and split back by the
  conversion layer (see argslot.conversions).

Example
    >>> argument = Argument("tags", required=False, many=True)
    >>> argument.assign("x"); argument.assign("y")
    >>> argument.value.raw
    'x,y'
"""
from .utils import *

SEPARATOR = ","


class ValueSlot:
    """
    raw string value(s) collected for one argument.

    invariants
    - initialized starts False and only reverts to False through clear().
    - raw is "" while uninitialized.
    """
    __slots__ = ("_raw", "_initialized")

    def __init__(self):
        self._raw = ""
        self._initialized = False

    raw = property(lambda self: self._raw)
    initialized = property(lambda self: self._initialized)

    def set(self, value, /):
        if not isinstance(value, str):
            raise TypeError("slot value must be a string")
        self._raw = value
        self._initialized = True

    def append(self, value, /, separator=SEPARATOR):
        if not isinstance(value, str):
            raise TypeError("slot value must be a string")
        if not self._initialized:
            return self.set(value)
        self._raw += separator + value

    def clear(self):
        self._raw = ""
        self._initialized = False

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self._raw) if self._initialized else "%s()" % type(self).__name__

    def __rich_repr__(self):
        yield "raw", self._raw
        yield "initialized", self._initialized


def _sanitize_metadata(metadata, /):
    """
    Internal: validate argument metadata before it is frozen on the instance.

    Raises
    - TypeError: when 'help' or 'default' is not a string, or when 'required'
      or 'many' is not a bool.
    """
    for name in ("help", "default"):
        if not isinstance(metadata[name], str):
            raise TypeError(f"argument {name!r} must be a string")
    for name in ("required", "many"):
        if not isinstance(metadata[name], bool):
            raise TypeError(f"argument {name!r} must be a bool")


class Argument:
    """
    declared argument: help text, required/many flags, default and its ValueSlot.

    identity
    - positional arguments are identified by their registration index.
    - keyed arguments are identified by their canonical key name.

    lifecycle
    - created before parsing, written by the parser once per routed token and
      once more when the default is applied, read-only afterwards.
    """
    __introspectable__ = ("help", "required", "many", "default")

    help = mirror("help")
    required = mirror("required")
    many = mirror("many")
    default = mirror("default")

    def __init__(self, help="", /, required=True, many=False, default=""):
        _sanitize_metadata(metadata := {
            "help": help,
            "required": required,
            "many": many,
            "default": default,
        })
        self._help = metadata["help"].strip()
        self._required = metadata["required"]
        self._many = metadata["many"]
        self._default = metadata["default"]
        self._value = ValueSlot()

    @property
    def value(self):
        return self._value

    @property
    def satisfied(self):
        return self._value.initialized

    def assign(self, token, /):
        """
        route one token into the slot: append for multi-valued arguments,
        replace otherwise (the last token wins).
        """
        if self._many:
            self._value.append(token, SEPARATOR)
        else:
            self._value.set(token)

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join("%s=%r" % pair for pair in self.__rich_repr__()))

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


__all__ = (
    "SEPARATOR",
    "ValueSlot",
    "Argument",
)
