"""
Argslot parser: declare, parse and retrieve command-line arguments.

What this module provides
- Parser: owns the declared arguments and one parse session.
  • Registration: ordered positional arguments and keyed arguments ('-k', '--name').
  • Parsing: a two-state tokenizer routes each token to its argument, then a
    finalizer applies defaults and enforces required arguments.
  • Retrieval: typed access to a parsed value (get) or to its separator-joined
    pieces (get_many).
  • Help: a rich-rendered listing of ordered and keyword arguments.

Quick start
    from argslot import Parser, Argument

    parser = Parser()
    parser.add_argument(Argument("input file"))
    parser.add_argument("--name", Argument("user name", required=False, default="anon"))
    parser.add_argument("-n", Argument("repetitions", required=False, default="1"))
    parser.parse(["exe", "input.txt", "-n", "3"])

    parser.get(0)          # "input.txt"
    parser.get("name")     # "anon"
    parser.get("n", int)   # 3

Failure policy (see Parser.parse)
- exit_on_failure=True: the fault is rendered on the diagnostic stream and the
  process exits with status 1.
- exit_on_failure=False: the ParserError is raised to the caller.
- print_help_on_failure=True: the help listing is rendered before either of the above.
- '-h' / '--help' anywhere in the input always renders the help and then follows
  the exit_on_failure policy, whatever else is missing.

Configuration
- Constructor options: prog, stream, colorful, fancy.
- Host hooks in __main__: __prog__, __styles__, __codes__ and __docs__.
"""
import itertools
import logging
import os.path
import shlex
import sys
from collections import defaultdict
from collections.abc import Iterable
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .arguments import SEPARATOR, Argument
from .conversions import convert, convert_many
from .faults import *
from .grammar import check_for_help, is_key_tag, is_valid_key, key_name
from .utils import *

logger = logging.getLogger(__name__)


class Parser:
    """
    argument registry plus a single parse session.

    state
    - positionals: arguments consumed in registration order.
    - keywords: canonical key name -> argument (insertion order drives help output).
    - parsed: gates retrieval; set once per session, cleared by reset().

    options (keyword-only)
    - prog: program name shown in faults and in the help panel title
      (defaults to __main__.__prog__, then to the basename of argv[0]).
    - stream: diagnostic sink for help and faults (defaults to stderr).
    - colorful: style the help and faults (default True).
    - fancy: wrap the help and faults in rich panels (default False).
    """

    def __init__(self, *, prog=Unset, stream=Unset, colorful=True, fancy=False):
        if not isinstance(prog, str | Unset):
            raise TypeError("parser 'prog' must be a string")
        if not isinstance(colorful, bool):
            raise TypeError("parser 'colorful' must be a bool")
        if not isinstance(fancy, bool):
            raise TypeError("parser 'fancy' must be a bool")
        if stream is not Unset and not callable(getattr(stream, "write", None)):
            raise TypeError("parser 'stream' must be a writable text stream")

        self._prog = prog
        self._stream = stream
        self._colorful = colorful
        self._fancy = fancy
        self._argv0 = ""

        self._positionals = []
        self._keywords = {}
        self._parsed = False

    @property
    def positionals(self):
        return tuple(self._positionals)

    @property
    def keywords(self):
        return MappingProxyType(self._keywords)

    @property
    def parsed(self):
        return self._parsed

    @property
    def prog(self):
        return getattr(__import__("__main__"), "__prog__", coalesce(self._prog, self._argv0))

    # --- registration -------------------------------------------------------

    def _unparsed_or_exception(self):
        if self._parsed:
            raise ParserError.generic("arguments cannot be registered after parsing, reset the parser first")

    def add_positional(self, argument, /):
        """
        append a positional argument; its index is its registration order.
        """
        if not isinstance(argument, Argument):
            raise TypeError("add_positional() argument must be an Argument")
        self._unparsed_or_exception()
        self._positionals.append(argument)
        logger.debug("registered positional argument %d: %r", len(self._positionals) - 1, argument)
        return argument

    def add_keyword(self, key, argument, /):
        """
        register a keyed argument under its raw tag ('-k' or '--name').

        raises ParserError(INVALID_KEY) when the tag is malformed, reserved for
        help, contains an inner dash, or its name is already registered.
        """
        if not isinstance(key, str):
            raise TypeError("add_keyword() first argument must be a string")
        if not isinstance(argument, Argument):
            raise TypeError("add_keyword() second argument must be an Argument")
        self._unparsed_or_exception()
        if not is_valid_key(key) or self.key_exists(name := key_name(key)):
            raise ParserError.invalid_key(key)
        self._keywords[name] = argument
        logger.debug("registered keyword argument %r: %r", name, argument)
        return argument

    def add_argument(self, *parameters):
        """
        register an argument.

        forms
        - add_argument(argument)       -> positional
        - add_argument(key, argument)  -> keyed
        """
        match parameters:
            case (Argument() as argument,):
                return self.add_positional(argument)
            case (str() as key, Argument() as argument):
                return self.add_keyword(key, argument)
            case _:
                raise TypeError("add_argument() takes an Argument, optionally preceded by a key")

    def key_exists(self, name, /):
        return name in self._keywords

    def position_exists(self, index, /):
        return 0 <= index < len(self._positionals)

    def reset(self, keep=True):
        """
        start a new session: clear the parsed flag and every collected value.

        with keep=False the declared arguments are discarded as well.
        """
        self._parsed = False
        self._clear()
        if not keep:
            self._positionals.clear()
            self._keywords.clear()

    def _clear(self):
        for argument in itertools.chain(self._positionals, self._keywords.values()):
            argument.value.clear()

    # --- parsing ------------------------------------------------------------

    def _tokenize(self, tokens):
        """
        route every token (argv[0] skipped) to its argument.

        states
        - current is None: expecting a value or a key.
        - current is a name: expecting the value for that key.
        """
        cursor = 0
        current = None

        for token in tokens[1:]:
            match current, is_key_tag(token):
                case None, True:
                    if not self.key_exists(name := key_name(token)):
                        raise ParserError.out_of_bounds(token)
                    current = name
                case None, False:
                    if not self.position_exists(cursor):
                        raise ParserError.out_of_bounds(cursor)
                    self._positionals[cursor].assign(token)
                    logger.debug("routed %r to position %d", token, cursor)
                    cursor += 1
                case _, False:
                    self._keywords[current].assign(token)
                    logger.debug("routed %r to key %r", token, current)
                    current = None
                case _, True:
                    raise ParserError.generic("the key %r cannot follow the key %r" % (token, current), key=token)

        if current is not None:
            raise ParserError.generic("the key %r is uninitialized" % current, key=current)

    def _settle(self, argument):
        # an empty default leaves the slot unset, so required arguments still fail
        if not argument.satisfied and argument.default:
            argument.assign(argument.default)
            return True
        return False

    def _finalize(self):
        """
        apply defaults and enforce required arguments, positionals first.

        the first unsatisfied required argument fails the parse.
        """
        for index, argument in enumerate(self._positionals):
            if self._settle(argument):
                logger.debug("applied default %r to position %d", argument.default, index)
            if argument.required and not argument.satisfied:
                raise ParserError.generic("the ordered argument at position %d is not given" % index, position=index)

        for name, argument in self._keywords.items():
            if self._settle(argument):
                logger.debug("applied default %r to key %r", argument.default, name)
            if argument.required and not argument.satisfied:
                raise ParserError.generic("the keyword argument %r is not given" % name, key=name)

    def _tokens(self, argv):
        """
        normalize argv into a list of strings (argv[0] being the program name).

        - Unset: sys.argv.
        - str: shell-like command line, split with shlex.split.
        - Iterable[str]: used as-is.
        """
        if argv is Unset:
            return list(sys.argv)
        if isinstance(argv, str):
            return shlex.split(argv)
        if isinstance(argv, Iterable):
            tokens = list(argv)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
            return tokens
        raise TypeError("parse() argument must be a string or an iterable of strings")

    def parse(self, argv=Unset, /, exit_on_failure=True, print_help_on_failure=True):
        """
        consume argv into the declared arguments.

        phases
        - help pre-scan: '-h' / '--help' anywhere short-circuits the parse.
        - tokenize: route tokens to positionals (in order) and keys.
        - finalize: apply defaults, then fail on the first missing required argument.

        failures
        - a second call without reset() raises ParserError(GENERIC) directly,
          independent of the flags below.
        - with exit_on_failure the fault banner is rendered, followed by the help
          when print_help_on_failure is set (help requests always render it),
          then the process exits with status 1.
        - otherwise the help is rendered under the same condition and the
          ParserError is raised.
        - on failure every collected value is cleared so the same session can
          be parsed again with fixed input.
        """
        if self._parsed:
            raise ParserError.generic("content has already been parsed")

        tokens = self._tokens(argv)
        if tokens:
            self._argv0 = os.path.basename(tokens[0])

        try:
            check_for_help(tokens)
            self._tokenize(tokens)
            self._finalize()
        except ParserError as fault:
            logger.debug("parse failed with %s: %s", fault.code.name, fault.message)
            self._clear()
            helpful = print_help_on_failure or fault.code is FaultCode.HELP_REQUESTED
            if helpful and not exit_on_failure:
                self.print_help()
            epilogue = self.render_help() if helpful and exit_on_failure else None
            self.trigger(fault, exit=exit_on_failure, epilogue=epilogue)
            raise  # unreachable: trigger() either raises or exits

        self._parsed = True
        logger.debug("parsed %d token(s)", max(len(tokens) - 1, 0))
        return self

    def trigger(self, fault, /, **options):
        """
        surface a fault with this parser's console and rendering options.
        """
        trigger(
            fault,
            **options,
            console=self._console(),
            prog=self.prog,
            colorful=self._colorful,
            fancy=self._fancy,
        )

    # --- retrieval ----------------------------------------------------------

    def _lookup(self, where):
        if not self._parsed:
            raise ParserError.generic("parsing has not been done")
        match where:
            case bool():
                raise TypeError("get() argument must be a position or a key name")
            case int():
                if not self.position_exists(where):
                    raise ParserError.out_of_bounds(where)
                return self._positionals[where]
            case str():
                if not self.key_exists(where):
                    raise ParserError.out_of_bounds(where)
                return self._keywords[where]
            case _:
                raise TypeError("get() argument must be a position or a key name")

    def get(self, where, /, type=str):
        """
        return the stored value of a position or key name, converted to 'type'
        (a Kind, or one of str, int, float, bool).
        """
        return convert(self._lookup(where).value.raw, type)

    def get_many(self, where, /, type=str, separator=SEPARATOR):
        """
        split the stored value on 'separator' and convert every piece to 'type'.
        """
        return convert_many(self._lookup(where).value.raw, type, separator)

    def __getitem__(self, where):
        return self.get(where)

    # --- help ---------------------------------------------------------------

    def _console(self, file=Unset):
        if (file := coalesce(file, self._stream)) is Unset:
            return Console(stderr=True, highlight=False)
        return Console(file=file, highlight=False)

    def render_help(self):
        """
        build the help renderable.

        layout
            Ordered Arguments List :
                <help> default : <default>
            Keyword Arguments List :
                -k      : <help> default : <default>
                --name  : <help> default : <default>

        palette keys: group-label, argument-description, option-name,
        default-label, default-value, panel-title. Override any entry with a
        __styles__ mapping in __main__.
        """
        styles = defaultdict(str, {
            "group-label": "bold #FFFFFF",  # pure white headers
            "argument-description": "#9CA3AF",  # muted gray
            "option-name": "bold #00E6FF",  # cyan for keys
            "default-label": "dim",
            "default-value": "bold #FFD600",  # amber for defaults
            "panel-title": "bold #FF4D94",  # magenta branding
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self._colorful else ""

        def text(fragment, style=""):
            return Text(str(fragment), styler(style))

        def tail(argument):
            return Text.assemble(
                text(argument.help, "argument-description"),
                text(" default : ", "default-label"),
                text(argument.default, "default-value"),
            )

        ordered = text("Ordered Arguments List", "group-label").append(" : ")
        for argument in self._positionals:
            ordered.append("\n    ").append(tail(argument))

        tags = {name: ("-" if len(name) == 1 else "--") + name for name in self._keywords}
        width = max(map(len, tags.values()), default=0)

        keyword = text("Keyword Arguments List", "group-label").append(" : ")
        for name, argument in self._keywords.items():
            keyword.append("\n    ").append(text(tags[name].ljust(width), "option-name"))
            keyword.append(" : ").append(tail(argument))

        renderable = Group(ordered, keyword)

        if self._fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[ ", f"{self.prog} HELP".strip().upper(), " ]", style=styler("panel-title")),
                title_align="left",
            )

        return renderable

    def print_help(self, file=Unset):
        """
        render the help listing on 'file' (defaults to the parser stream, then stderr).
        """
        self._console(file).print(self.render_help(), soft_wrap=True)

    def __rich_repr__(self):
        yield "positionals", self.positionals
        yield "keywords", dict(self._keywords)
        yield "parsed", self._parsed

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join("%s=%r" % pair for pair in self.__rich_repr__()))


__all__ = (
    "Parser",
)
