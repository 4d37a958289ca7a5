from typing import Any, Callable, Iterable, Optional, Tuple

from .Config import ParserConfig
from .Parsec import Parser, State, ParseError, ErrorKind, Reply, Ok, Error, T
from .Recovery import run, with_error
from .Stream import END_OF_INPUT


def create_parser(source: Iterable[Any], config: Optional[ParserConfig] = None) -> State:
    """Wrap `source` in a rewindable buffer and return the initial state."""
    return State.from_source(source, config)


def pure(value: T) -> Parser[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(state: State) -> Reply:
        return Ok(value, state)
    return Parser(parse)


def fail(msg: str) -> Parser[Any]:
    """A parser that always fails with a message."""
    def parse(state: State) -> Reply:
        return Error(ParseError(ErrorKind.MESSAGE, (msg,)))
    return Parser(parse)


def recognize(predicate: Callable[[Any], bool]) -> Parser[Any]:
    """Parse a single token for which `predicate` holds."""
    if not callable(predicate):
        raise TypeError(f"recognize expects a callable predicate, got {predicate!r}")

    def parse(state: State) -> Reply:
        token, new_state = state.next_token()
        if token is END_OF_INPUT:
            return Error(ParseError(ErrorKind.END_OF_INPUT, (state.config.end_of_input_message,)))
        if not predicate(token):
            return Error(ParseError(ErrorKind.MISMATCH, (state.config.mismatch(token),), token))
        return Ok(token, new_state)
    return Parser(parse)


def accept(expected: Any) -> Parser[Any]:
    """Parse exactly `expected`, adding "Expected <token>" to the failure."""
    matcher = recognize(lambda token: token == expected)

    def parse(state: State) -> Reply:
        return run(matcher, with_error(state.config.expected(expected)))(state)
    return Parser(parse)


def lazy(thunk: Callable[[], Parser[T]]) -> Parser[T]:
    """Build the parser on first use, so grammars can refer to themselves."""
    cache = []

    def parse(state: State) -> Reply:
        if not cache:
            cache.append(thunk())
        return cache[0](state)
    return Parser(parse)


def run_parser(parser: Parser[T],
               source: Iterable[Any],
               config: Optional[ParserConfig] = None) -> Tuple[Optional[T], Optional[ParseError]]:
    reply = parser(create_parser(source, config))
    if isinstance(reply, Error):
        return None, reply.error
    return reply.value, None
