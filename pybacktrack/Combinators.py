import logging
from typing import Any, List, Sequence, Union

from .Parsec import Parser, State, ParseError, ErrorKind, Reply, Ok, Error, T
from .Prim import pure, recognize
from .Recovery import run, bind_error

logger = logging.getLogger(__name__)


def _as_list(parsers: Sequence[Union[Parser, Sequence[Parser]]]) -> List[Parser]:
    # choice([a, b]) and choice(a, b) are both accepted
    if len(parsers) == 1 and isinstance(parsers[0], (list, tuple)):
        return list(parsers[0])
    return list(parsers)


# 1. chain: Runs parsers in sequence, collecting their results
def chain(*parsers: Parser[T]) -> Parser[List[T]]:
    """
    Applies each parser in order to the evolving state.
    The first failure is returned as is; partial results are dropped.
    """
    steps = _as_list(parsers)

    def parse(state: State) -> Reply:
        values = []
        current = state
        for p in steps:
            reply = run(p)(current)
            if isinstance(reply, Error):
                return reply
            values.append(reply.value)
            current = reply.state
        return Ok(values, current)
    return Parser(parse)


# 2. choice: Tries parsers in order until one succeeds
def choice(*parsers: Parser[T]) -> Parser[T]:
    """
    Tries each alternative in turn from the same starting state. When all
    fail, the messages of every attempt are kept, last attempt first.
    The first alternative to succeed wins.
    """
    alternatives = _as_list(parsers)
    if not alternatives:
        return Parser(lambda state: Error(ParseError(ErrorKind.EMPTY_CHOICE)))

    def parse(state: State) -> Reply:
        failures = []
        for p in alternatives:
            reply = run(p)(state)
            if isinstance(reply, Ok):
                return reply
            failures.append(reply.error)
        # later failures are the inner cause, earlier ones the outer context
        messages = tuple(msg for err in reversed(failures) for msg in err.messages)
        return Error(ParseError(ErrorKind.CHOICE_EXHAUSTED, messages, failures[0].token))
    return Parser(parse)


# 3. option: Zero or one occurrence
def option(p: Parser[T]) -> Parser[List[T]]:
    """
    Tries p once: [value] on success, [] on failure with nothing consumed.
    """
    return run(p.map(lambda value: [value]), bind_error(lambda _: pure([])))


# 4. many: Zero or more occurrences
def many(p: Parser[T]) -> Parser[List[T]]:
    """
    Applies p until it fails and returns the values collected so far.
    The failing attempt is discarded. A p that succeeds without consuming
    input loops forever.
    """
    def parse(state: State) -> Reply:
        values = []
        current = state
        while True:
            reply = p(current)
            if isinstance(reply, Error):
                return Ok(values, current)
            values.append(reply.value)
            current = reply.state
    return Parser(parse)


# 5. repeat: One or more occurrences
def repeat(p: Parser[T]) -> Parser[List[T]]:
    """
    Applies p one or more times; fails with p's error if the first attempt fails.
    """
    return p.bind(lambda x: many(p).map(lambda xs: [x] + xs))


# 6. eof: Succeeds only at the end of input
def eof() -> Parser[None]:
    def parse(state: State) -> Reply:
        if state.at_end():
            return Ok(None, state)
        token, _ = state.next_token()
        messages = (state.config.mismatch(token), state.config.expected_end_message)
        return Error(ParseError(ErrorKind.MISMATCH, messages, token))
    return Parser(parse)


# 7. anyToken: Accepts any single token
def any_token() -> Parser[Any]:
    return recognize(lambda _: True)


def _trace(state: State, msg: str, *args: Any) -> None:
    level = logging.INFO if state.config.trace else logging.DEBUG
    logger.log(level, msg, *args)


# 8. parserTrace: Logs the cursor position without consuming input
def parser_trace(label: str) -> Parser[None]:
    def parse(state: State) -> Reply:
        _trace(state, "%s: at position %d", label, state.position)
        return Ok(None, state)
    return Parser(parse)


# 9. parserTraced: Logs entry, and backtracking when p fails
def parser_traced(label: str, p: Parser[T]) -> Parser[T]:
    enter = parser_trace(label)

    def parse(state: State) -> Reply:
        enter(state)
        reply = p(state)
        if isinstance(reply, Error):
            _trace(state, "%s backtracked to position %d", label, state.position)
            return Error(reply.error.extend_messages([f"{label} backtracked and parser failed"]))
        return reply
    return Parser(parse)
