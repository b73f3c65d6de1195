from itertools import product

import numpy as np
import pytest

from cowmaze.errors import MazeInvariantError
from cowmaze.state import (
    GOAL,
    ILLEGAL,
    MAZEPOINTS,
    START_STATE,
    TOTAL_STATES,
    State,
    decode_state,
    encode_state,
    format_state,
    iter_keyed_states,
)


def _all_keyed():
    for m0, m1, p0, p1, r60 in product((False, True), (False, True), MAZEPOINTS, MAZEPOINTS, (False, True)):
        yield State(pencils=(p0, p1), moved=(m0, m1), rule60=r60)


def test_encoding_is_a_bijection_onto_the_table():
    seen = set()
    for s in _all_keyed():
        idx = encode_state(s)
        assert 0 <= idx < TOTAL_STATES
        assert decode_state(idx) == s
        seen.add(idx)
    assert TOTAL_STATES == 2048
    assert seen == set(range(TOTAL_STATES))


def test_digit_order_most_significant_first():
    # moved0 is the most significant digit, rule60 the least
    assert encode_state(State(pencils=(1, 1))) == 0
    assert encode_state(State(pencils=(1, 1), rule60=True)) == 1
    assert encode_state(State(pencils=(1, 2))) == 2
    assert encode_state(State(pencils=(2, 1))) == 32
    assert encode_state(State(pencils=(1, 1), moved=(False, True))) == 512
    assert encode_state(State(pencils=(1, 1), moved=(True, False))) == 1024
    assert encode_state(State(pencils=(75, 75), moved=(True, True), rule60=True)) == TOTAL_STATES - 1


def test_iter_keyed_states_covers_everything_once_in_dump_order():
    states = list(iter_keyed_states())
    assert len(states) == TOTAL_STATES
    assert len(set(states)) == TOTAL_STATES
    assert states[0] == State(pencils=(1, 1), moved=(True, True), rule60=True)
    assert states[1] == State(pencils=(1, 1), moved=(True, True), rule60=False)
    assert states[-1] == State(pencils=(75, 75), moved=(False, False), rule60=False)


@pytest.mark.parametrize("sentinel", [GOAL, ILLEGAL])
def test_sentinels_cannot_be_encoded(sentinel):
    with pytest.raises(MazeInvariantError):
        encode_state(State(pencils=(sentinel, 7)))
    with pytest.raises(MazeInvariantError):
        encode_state(State(pencils=(1, sentinel)))


def test_unknown_maze_point_and_index_are_rejected():
    with pytest.raises(MazeInvariantError):
        State(pencils=(3, 7))
    with pytest.raises(MazeInvariantError):
        decode_state(TOTAL_STATES)
    with pytest.raises(MazeInvariantError):
        decode_state(-1)
    with pytest.raises(MazeInvariantError):
        START_STATE.pencil(2)


def test_states_are_values():
    a = State(pencils=(1, 7))
    b = a.with_pencil(0, 2).with_moved(0)
    assert a == START_STATE
    assert b == State(pencils=(2, 7), moved=(True, False))
    assert a != b
    assert hash(State(pencils=(1, 7))) == hash(a)


@pytest.mark.parametrize(
    "state, text",
    [
        (START_STATE, "(.., 1, 7, )"),
        (State(pencils=(2, 7), moved=(True, False)), "(m., 2, 7, )"),
        (State(pencils=(61, 75), moved=(False, True), rule60=True), "(.m,61,75,*)"),
        (State(pencils=(GOAL, 50), moved=(True, False)), "(m.,GG,50, )"),
        (State(pencils=(ILLEGAL, ILLEGAL), rule60=True), "(..,XX,XX,*)"),
    ],
)
def test_format_state(state, text):
    assert format_state(state) == text
    assert str(state) == text


def test_decode_uses_numpy_unravel_layout():
    idx = np.ravel_multi_index((1, 0, 3, 7, 1), (2, 2, 16, 16, 2))
    s = decode_state(int(idx))
    assert s == State(pencils=(MAZEPOINTS[3], MAZEPOINTS[7]), moved=(True, False), rule60=True)
