import logging

# Stream
from .Stream import RewindableStream, Snapshot, END_OF_INPUT

# Core
from .Config import ParserConfig, default_config
from .Parsec import Parser, State, ParseError, ParseFailure, ErrorKind, Ok, Error, Reply

# Recovery strategies
from .Recovery import (
    Strategy, run, resolve,
    with_default, replace_errors, with_errors, with_error, bind_error
)

# Primitives
from .Prim import create_parser, run_parser, recognize, accept, pure, fail, lazy

# Combinators
from .Combinators import (
    chain, choice, option, many, repeat,
    eof, any_token, parser_trace, parser_traced
)

logging.getLogger(__name__).addHandler(logging.NullHandler())
