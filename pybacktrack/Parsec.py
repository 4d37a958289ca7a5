from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Callable, Generic, Iterable, Optional, Sequence, Tuple, TypeVar, Union

from .Config import ParserConfig, default_config
from .Stream import END_OF_INPUT, Snapshot, _TokenBuffer

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')


class ErrorKind(Enum):
    END_OF_INPUT = auto()
    MISMATCH = auto()
    CHOICE_EXHAUSTED = auto()
    EMPTY_CHOICE = auto()
    MESSAGE = auto()


@dataclass(frozen=True)
class ParseError:
    """
    A failed parse: its kind and the diagnostic messages collected so far,
    innermost cause first, outer context appended after it.
    """
    kind: ErrorKind
    messages: Tuple[str, ...] = ()
    token: Any = None

    def __post_init__(self):
        object.__setattr__(self, 'messages', tuple(self.messages))

    def replace_messages(self, messages: Sequence[str]) -> 'ParseError':
        return replace(self, messages=tuple(messages))

    def extend_messages(self, messages: Sequence[str]) -> 'ParseError':
        return replace(self, messages=self.messages + tuple(messages))

    def __str__(self) -> str:
        return "\n".join(self.messages)


class ParseFailure(Exception):
    """Raised by ``Parser.parse`` when a top-level parse fails."""
    def __init__(self, error: ParseError):
        super().__init__(str(error))
        self.error = error

    @property
    def messages(self) -> Tuple[str, ...]:
        return self.error.messages


@dataclass(frozen=True)
class State:
    """Parser state: a snapshot into the shared token buffer plus the run's config."""
    snapshot: Snapshot
    config: ParserConfig = field(default=default_config)

    @classmethod
    def from_source(cls, source: Iterable[Any], config: Optional[ParserConfig] = None) -> 'State':
        return cls(Snapshot(_TokenBuffer(source)), config or default_config)

    @property
    def position(self) -> int:
        return self.snapshot.index

    def next_token(self) -> Tuple[Any, 'State']:
        """Pull one token; the returned state is advanced, this one is untouched."""
        item, snapshot = self.snapshot.pull()
        if item is END_OF_INPUT:
            return item, self
        return item, State(snapshot, self.config)

    def at_end(self) -> bool:
        return self.snapshot.at_end()


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    state: State


@dataclass(frozen=True)
class Error:
    error: ParseError

    @property
    def messages(self) -> Tuple[str, ...]:
        return self.error.messages

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


Reply = Union[Ok, Error]


class Parser(Generic[T]):
    """A parser: a function from a State to either Ok(value, new_state) or Error."""
    def __init__(self, parse_fn: Callable[[State], Reply]):
        self.parse_fn = parse_fn

    def __call__(self, state: State) -> Reply:
        return self.parse_fn(state)

    # Monadic bind (>>=)
    def bind(self, f: Callable[[T], 'Parser[U]']) -> 'Parser[U]':
        def parse(state: State) -> Reply:
            reply = self(state)
            if isinstance(reply, Error):
                return reply
            return f(reply.value)(reply.state)
        return Parser(parse)

    def map(self, f: Callable[[T], U]) -> 'Parser[U]':
        def parse(state: State) -> Reply:
            reply = self(state)
            if isinstance(reply, Error):
                return reply
            return Ok(f(reply.value), reply.state)
        return Parser(parse)

    # Alternative (<|>)
    def __or__(self, other: 'Parser[T]') -> 'Parser[T]':
        from .Combinators import choice
        return choice(self, other)

    def __rshift__(self, f: Callable[[T], 'Parser[U]']) -> 'Parser[U]':
        return self.bind(f)

    def parse(self, source: Iterable[Any], config: Optional[ParserConfig] = None) -> T:
        """Run against a fresh source; raise ParseFailure if the parse fails."""
        reply = self(State.from_source(source, config))
        if isinstance(reply, Error):
            raise ParseFailure(reply.error)
        return reply.value
