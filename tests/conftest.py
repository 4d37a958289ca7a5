# tests/conftest.py
import pytest

from pybacktrack.Parsec import Error, Ok, Reply
from pybacktrack.Prim import create_parser


def assert_reply_eq(res1: Reply, res2: Reply):
    """
    Deep comparison of two replies.
    """
    if isinstance(res1, Ok):
        assert isinstance(res2, Ok), "Reply mismatch: Ok vs Error"
        assert res1.value == res2.value
        assert res1.state.position == res2.state.position
    else:
        assert isinstance(res2, Error), "Reply mismatch: Error vs Ok"
        assert res1.error.kind == res2.error.kind
        assert res1.error.messages == res2.error.messages


@pytest.fixture
def initial_state():
    def _make(input_data, config=None):
        return create_parser(input_data, config)

    return _make
