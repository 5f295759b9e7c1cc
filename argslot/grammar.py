r"""
Argslot token grammar (stateless predicates).

Key tags
- short form: '-X'     exactly one non-dash character after a single dash.
- long form:  '--NAME' two or more characters after a double dash.

The canonical key name is the tag with its dash prefix stripped ('--name' -> 'name').
A registrable key is a key tag whose canonical name contains no dash and is not
reserved for help ('h', 'help').

Note that the tag grammar itself matches '-h' and '--help'; the help pre-scan
(check_for_help) runs before any token is classified, so these never reach the
tokenizer as regular keys.
"""
import re

from .faults import ParserError

HELP_TAGS = ("-h", "--help")
RESERVED_NAMES = ("h", "help")

_KEY_TAG = re.compile(r"-[^-]|--.{2,}", re.DOTALL)


def is_key_tag(token, /):
    """
    return True when the token has the shape of a key tag ('-X' or '--NAME').
    """
    return _KEY_TAG.fullmatch(token) is not None


def key_name(tag, /):
    """
    strip the dash prefix of a key tag.

    raises ParserError(INVALID_KEY) when the token is not a key tag.
    """
    if not is_key_tag(tag):
        raise ParserError.invalid_key(tag)
    return tag[2:] if tag.startswith("--") else tag[1:]


def is_valid_key(key, /):
    """
    return True when the raw key may be registered (existence is checked by the parser).
    """
    if key in HELP_TAGS or not is_key_tag(key):
        return False
    name = key_name(key)
    return name not in RESERVED_NAMES and "-" not in name


def check_for_help(tokens, /):
    """
    scan an argv-like sequence (argv[0] skipped) for a literal '-h' or '--help'.

    raises ParserError(HELP_REQUESTED) on the first occurrence.
    """
    for token in tokens[1:]:
        if token in HELP_TAGS:
            raise ParserError.help_requested()


__all__ = (
    "HELP_TAGS",
    "RESERVED_NAMES",
    "is_key_tag",
    "key_name",
    "is_valid_key",
    "check_for_help",
)
