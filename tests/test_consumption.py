# tests/test_consumption.py
from pybacktrack.Parsec import Error, Ok
from pybacktrack.Prim import accept, create_parser
from pybacktrack.Combinators import chain, choice, many


def test_choice_backtracks_after_consumption():
    """
    chain(A, B) | A
    Input: 'AC'

    1. First branch matches 'A', then fails on 'C'.
    2. The failed branch left no mark on the shared state.
    3. The second branch starts over at 'A' and succeeds.
    4. Result: 'A', cursor after the first token.
    """
    parser = chain(accept("A"), accept("B")) | accept("A")

    state = create_parser("AC")
    result = parser(state)

    assert isinstance(result, Ok)
    assert result.value == "A"
    assert result.state.position == 1
    assert state.position == 0


def test_failed_parse_leaves_caller_state_untouched():
    state = create_parser("AAB")
    before = state.position
    result = chain(accept("A"), accept("A"), accept("A"))(state)

    assert isinstance(result, Error)
    assert state.position == before
    # the same state can still be parsed from the start
    assert chain(accept("A"), accept("A"), accept("B"))(state).value == ["A", "A", "B"]


def test_generator_source_is_shared_between_branches():
    pulled = []

    def source():
        for c in "ABAB":
            pulled.append(c)
            yield c

    item = choice(chain(accept("A"), accept("A")), chain(accept("A"), accept("B")))
    result = many(item)(create_parser(source()))

    assert result.value == [["A", "B"], ["A", "B"]]
    # every token came from the generator exactly once despite backtracking
    assert pulled == ["A", "B", "A", "B"]
