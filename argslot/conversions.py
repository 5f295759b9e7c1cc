r"""
Argslot conversion layer: typed views over raw slot strings.

Kinds
- STRING    passthrough.
- INTEGER   leading '-?[0-9]+' prefix, 0 when there is none.
- UNSIGNED  leading '[0-9]+' prefix, 0 when there is none (a leading '-' gives 0).
- FLOAT     leading decimal/exponent prefix or inf/infinity/nan, 0.0 otherwise.
- BOOLEAN   True only when the first character is 't' or 'T'.

Policy
- Parsing is locale independent (ASCII digits only) and best effort: malformed
  numeric text degrades to the zero value instead of raising. This mirrors
  permissive numeric-text parsing and is kept on purpose.
- The only conversion failure is a BOOLEAN view of an empty string, which is an
  out-of-bounds access (there is no first character to inspect).

Multi-value
- split(raw, separator) never returns an empty list: "" splits into [""].
- convert_many(raw, kind, separator) converts each piece in order.
"""
import re
from enum import Enum

from .arguments import SEPARATOR
from .faults import FaultCode, ParserError

_INTEGER = re.compile(r"-?[0-9]+", re.ASCII)
_UNSIGNED = re.compile(r"[0-9]+", re.ASCII)
_FLOAT = re.compile(
    r"-?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.ASCII | re.IGNORECASE,
)


class Kind(Enum):
    """closed set of conversion targets."""
    STRING = "string"
    INTEGER = "integer"
    UNSIGNED = "unsigned"
    FLOAT = "float"
    BOOLEAN = "boolean"

    @classmethod
    def of(cls, target, /):
        """
        resolve a Kind from either a Kind or one of the python types str, int, float, bool.
        """
        if isinstance(target, cls):
            return target
        try:
            return _ALIASES[target]
        except (KeyError, TypeError):
            raise TypeError("conversion target must be a Kind or one of str, int, float, bool") from None


_ALIASES = {
    str: Kind.STRING,
    int: Kind.INTEGER,
    float: Kind.FLOAT,
    bool: Kind.BOOLEAN,
}


def _prefix(pattern, raw):
    match = pattern.match(raw)
    return match[0] if match else None


def convert(raw, kind=Kind.STRING, /):
    """
    convert one raw string to the requested kind (see module docstring).
    """
    match Kind.of(kind):
        case Kind.STRING:
            return raw
        case Kind.INTEGER:
            return int(_prefix(_INTEGER, raw) or 0)
        case Kind.UNSIGNED:
            return int(_prefix(_UNSIGNED, raw) or 0)
        case Kind.FLOAT:
            return float(_prefix(_FLOAT, raw) or 0.0)
        case Kind.BOOLEAN:
            if not raw:
                raise ParserError(
                    FaultCode.OUT_OF_BOUNDS,
                    "cannot read a boolean from an empty value",
                    position=0,
                    title="empty value",
                    hint="pass a value starting with t or T for true",
                )
            return raw[0] in "tT"


def split(raw, separator=SEPARATOR, /):
    """
    split a stored string into its ordered pieces; "" yields [""].
    """
    if not isinstance(separator, str) or len(separator) != 1:
        raise ValueError("separator must be a single character")
    return raw.split(separator)


def convert_many(raw, kind=Kind.STRING, separator=SEPARATOR, /):
    """
    split then convert every piece, preserving order.
    """
    kind = Kind.of(kind)
    return [convert(piece, kind) for piece in split(raw, separator)]


__all__ = (
    "Kind",
    "convert",
    "split",
    "convert_many",
)
