from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Optional, Tuple


class _EndOfInput:
    """Marker returned in place of a token once the source is exhausted."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "END_OF_INPUT"

    def __bool__(self) -> bool:
        return False


END_OF_INPUT = _EndOfInput()


class _TokenBuffer:
    """
    Append-only cache of every token pulled from a one-shot source.
    Shared by reference between all snapshots of the same stream.
    """
    def __init__(self, source: Iterable[Any]):
        self._source: Iterator[Any] = iter(source)
        self._items: List[Any] = []
        self._exhausted = False

    def __len__(self) -> int:
        return len(self._items)

    def get(self, index: int) -> Any:
        # Only ever called with index <= len(self): positions are reached in order.
        while index >= len(self._items):
            if self._exhausted:
                return END_OF_INPUT
            try:
                self._items.append(next(self._source))
            except StopIteration:
                self._exhausted = True
                return END_OF_INPUT
        return self._items[index]


@dataclass(frozen=True)
class Snapshot:
    """An immutable read index into a shared token buffer."""
    buffer: _TokenBuffer = field(repr=False)
    index: int = 0

    def pull(self) -> Tuple[Any, 'Snapshot']:
        """Return the token at this index and the snapshot one past it.

        At end of input the returned snapshot is this one.
        """
        item = self.buffer.get(self.index)
        if item is END_OF_INPUT:
            return item, self
        return item, Snapshot(self.buffer, self.index + 1)

    def at_end(self) -> bool:
        return self.buffer.get(self.index) is END_OF_INPUT


class RewindableStream:
    """
    Cursor over a memoizing token source.

    ``next()`` advances only this cursor; ``snapshot()`` hands out an
    independent cursor at the current position without copying anything.
    """
    def __init__(self, source: Iterable[Any] = (), *, _snapshot: Optional[Snapshot] = None):
        self._snapshot = _snapshot if _snapshot is not None else Snapshot(_TokenBuffer(source))

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> 'RewindableStream':
        return cls(_snapshot=snapshot)

    def next(self) -> Any:
        item, self._snapshot = self._snapshot.pull()
        return item

    def snapshot(self) -> 'RewindableStream':
        return RewindableStream.from_snapshot(self._snapshot)

    @property
    def position(self) -> int:
        return self._snapshot.index

    @property
    def cursor(self) -> Snapshot:
        return self._snapshot

    def __iter__(self) -> Iterator[Any]:
        while True:
            item = self.next()
            if item is END_OF_INPUT:
                return
            yield item

    def __repr__(self) -> str:
        return f"RewindableStream(position={self.position}, buffered={len(self._snapshot.buffer)})"
