import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from .Parsec import Parser, State, Reply, Ok, Error, ParseError, T

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class Strategy:
    """
    What `run` does with a failure.

    Only ``replace`` and ``extend`` may be combined (replace first, then
    extend); ``default`` and ``handler`` each stand alone.
    """
    default: Any = _MISSING
    replace: Optional[Tuple[str, ...]] = None
    extend: Optional[Tuple[str, ...]] = None
    handler: Optional[Callable[[Tuple[str, ...]], Parser]] = None

    def __post_init__(self):
        for name in ('replace', 'extend'):
            if isinstance(getattr(self, name), str):
                raise TypeError(f"{name} expects a sequence of messages, not a single str; use with_error for one message")
        if self.replace is not None:
            object.__setattr__(self, 'replace', tuple(self.replace))
        if self.extend is not None:
            object.__setattr__(self, 'extend', tuple(self.extend))
        rewrites = self.replace is not None or self.extend is not None
        chosen = [self.has_default, self.handler is not None, rewrites]
        if sum(chosen) > 1:
            raise ValueError("with_default and bind_error cannot be combined with any other strategy")
        if self.handler is not None and not callable(self.handler):
            raise TypeError(f"bind_error handler must be callable, got {self.handler!r}")

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING

    def __add__(self, other: 'Strategy') -> 'Strategy':
        """Merge two message-rewriting strategies."""
        if not isinstance(other, Strategy):
            return NotImplemented
        if self.has_default or other.has_default or self.handler or other.handler:
            raise ValueError("only replace_errors and with_errors strategies can be combined")
        replace_msgs = other.replace if other.replace is not None else self.replace
        extend_msgs = None
        if self.extend is not None or other.extend is not None:
            extend_msgs = (self.extend or ()) + (other.extend or ())
        return Strategy(replace=replace_msgs, extend=extend_msgs)


def with_default(value: Any) -> Strategy:
    """Swallow the failure and succeed with `value`, consuming nothing."""
    return Strategy(default=value)


def replace_errors(messages: Sequence[str]) -> Strategy:
    """Discard the accumulated messages in favour of `messages`."""
    return Strategy(replace=messages)


def with_errors(messages: Sequence[str]) -> Strategy:
    """Append `messages` to the accumulated ones."""
    return Strategy(extend=messages)


def with_error(message: str) -> Strategy:
    return Strategy(extend=(message,))


def bind_error(handler: Callable[[Tuple[str, ...]], Parser]) -> Strategy:
    """On failure, build a new parser from the messages and run it from the original state."""
    return Strategy(handler=handler)


def resolve(strategy: Optional[Strategy], error: ParseError, state: State) -> Reply:
    """Apply `strategy` to a failure that happened when parsing from `state`."""
    if strategy is None:
        return Error(error)

    if strategy.handler is not None:
        logger.debug("Recovering at position %d with handler %r", state.position, strategy.handler)
        return strategy.handler(error.messages)(state)

    if strategy.has_default:
        logger.debug("Recovering at position %d with default %r", state.position, strategy.default)
        return Ok(strategy.default, state)

    new_error = error
    if strategy.replace is not None:
        new_error = new_error.replace_messages(strategy.replace)
    if strategy.extend is not None:
        new_error = new_error.extend_messages(strategy.extend)
    return Error(new_error)


def run(parser: Parser[T], strategy: Optional[Strategy] = None) -> Parser[T]:
    """
    Attach a recovery strategy to `parser`.

    The parser is evaluated once against the incoming state. Success is passed
    through untouched; failure is handed to `resolve` together with the
    pre-attempt state, so a recovered parse never sees a half-consumed cursor.
    """
    def parse(state: State) -> Reply:
        reply = parser(state)
        if isinstance(reply, Ok):
            return reply
        return resolve(strategy, reply.error, state)
    return Parser(parse)
