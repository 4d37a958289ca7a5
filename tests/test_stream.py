from hypothesis import given
from hypothesis import strategies as st

from pybacktrack.Stream import END_OF_INPUT, RewindableStream, Snapshot, _TokenBuffer


class CountingSource:
    """Iterable that records how many items were pulled from it."""
    def __init__(self, items):
        self.items = list(items)
        self.pulled = 0

    def __iter__(self):
        for item in self.items:
            self.pulled += 1
            yield item


def test_next_returns_tokens_then_end_marker():
    stream = RewindableStream("ab")
    assert stream.next() == "a"
    assert stream.next() == "b"
    assert stream.next() is END_OF_INPUT
    # stays at the end
    assert stream.next() is END_OF_INPUT
    assert stream.position == 2


def test_source_is_read_only_once():
    source = CountingSource("abc")
    stream = RewindableStream(source)
    branch = stream.snapshot()

    assert [stream.next() for _ in range(3)] == ["a", "b", "c"]
    assert [branch.next() for _ in range(3)] == ["a", "b", "c"]
    assert source.pulled == 3


def test_snapshot_starts_at_current_position():
    stream = RewindableStream("abcd")
    stream.next()
    branch = stream.snapshot()
    assert branch.position == 1
    assert branch.next() == "b"
    # the original cursor did not move
    assert stream.position == 1
    assert stream.next() == "b"


def test_snapshots_are_independent():
    stream = RewindableStream("xyz")
    left = stream.snapshot()
    right = stream.snapshot()

    assert left.next() == "x"
    assert left.next() == "y"
    assert right.next() == "x"
    assert left.next() == "z"
    assert right.next() == "y"


def test_infinite_source():
    def naturals():
        n = 0
        while True:
            yield n
            n += 1

    stream = RewindableStream(naturals())
    assert [stream.next() for _ in range(5)] == [0, 1, 2, 3, 4]
    replay = stream.snapshot()
    assert replay.next() == 5


def test_iteration_stops_at_end():
    stream = RewindableStream([1, 2, 3])
    stream.next()
    assert list(stream.snapshot()) == [2, 3]
    assert stream.position == 1


def test_end_marker_is_falsy_singleton():
    assert not END_OF_INPUT
    assert type(END_OF_INPUT)() is END_OF_INPUT
    assert repr(END_OF_INPUT) == "END_OF_INPUT"


def test_snapshot_pull_does_not_mutate():
    snap = Snapshot(_TokenBuffer("ab"))
    token, after = snap.pull()
    assert token == "a"
    assert snap.index == 0
    assert after.index == 1
    assert snap.pull() == ("a", after)


def test_snapshot_at_end_returns_itself():
    snap = Snapshot(_TokenBuffer(""))
    token, after = snap.pull()
    assert token is END_OF_INPUT
    assert after is snap
    assert snap.at_end()


@given(st.lists(st.integers()), st.integers(min_value=0, max_value=20))
def test_snapshot_is_a_transparent_replay(items, k):
    # k reads, snapshot, k more reads == 2k reads straight through
    direct = RewindableStream(items)
    expected = [direct.next() for _ in range(2 * k)]

    stream = RewindableStream(items)
    first = [stream.next() for _ in range(k)]
    branch = stream.snapshot()
    second = [branch.next() for _ in range(k)]

    assert first + second == expected


@given(st.lists(st.text(max_size=2)), st.integers(min_value=0, max_value=10))
def test_same_index_same_future(items, k):
    stream = RewindableStream(items)
    for _ in range(k):
        stream.next()
    a = stream.snapshot()
    b = stream.snapshot()
    assert list(a) == list(b)


def test_stream_from_explicit_snapshot():
    buffer = _TokenBuffer("abc")
    stream = RewindableStream.from_snapshot(Snapshot(buffer, 1))
    assert stream.position == 1
    assert stream.next() == "b"
    assert RewindableStream().next() is END_OF_INPUT
