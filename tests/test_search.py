from pathlib import Path

import numpy as np
import pytest

from cowmaze.errors import MazeInvariantError
from cowmaze.report import render_transcript
from cowmaze.search import StateSpace, run_search
from cowmaze.state import START_STATE, TOTAL_STATES, State, encode_state, format_state

REFERENCE = Path(__file__).resolve().parent / "data" / "reference_transcript.txt"


@pytest.fixture(scope="module")
def space():
    return StateSpace()


def test_table_is_complete_and_alternates_only_at_box55(space):
    assert len(space) == TOTAL_STATES
    for index in range(TOTAL_STATES):
        t = space[index]
        assert encode_state(t.current) == index
        assert t.next(0) is not None and t.next(1) is not None
        for p in (0, 1):
            assert t.has_alt(p) == (t.current.pencil(p) == 55)


def test_lookup_out_of_range(space):
    with pytest.raises(MazeInvariantError):
        space[TOTAL_STATES]
    with pytest.raises(MazeInvariantError):
        space.lookup(State())


def test_first_goal_transcript_matches_reference(space):
    result = space.search()
    assert result.found
    assert result.goal_depth == 251
    assert result.max_depth == 272
    assert result.illegal_hits == 0
    lines = render_transcript(space, result)
    expected = REFERENCE.read_text(encoding="utf-8").splitlines()
    assert lines == expected


def test_trace_starts_at_the_start_state(space):
    result = space.search()
    trace = [format_state(s) for s in result.trace]
    assert len(trace) == result.goal_depth
    assert trace[:3] == ["(.., 1, 7, )", "(m., 2, 7, )", "(m.,15, 7, )"]
    assert trace[-1] == "(.m,50,50, )"
    assert result.goal_state.is_goal()
    assert format_state(result.goal_state) == "(m.,GG,50, )"


def test_search_is_deterministic(space):
    first = render_transcript(space, space.search())
    second = render_transcript(*run_search())
    assert first == second


def test_max_depth_bounds_visited_marks(space):
    result = space.search()
    depths = space.visited_depths()
    assert depths.shape == (TOTAL_STATES,)
    assert 0 < result.max_depth <= TOTAL_STATES
    assert depths.max() <= result.max_depth
    assert int(np.count_nonzero(depths)) == 431
    assert space.lookup(START_STATE).visited == 1


def test_search_resets_visited_marks(space):
    space.search()
    before = space.visited_depths().copy()
    space.search()
    assert np.array_equal(before, space.visited_depths())
    space.reset()
    assert not space.visited_depths().any()


def test_exhaustive_mode_reports_every_goal():
    space = StateSpace()
    result = space.search(stop_at_goal=False)
    depths = [h.depth for h in result.goals]
    assert len(depths) == 150
    assert depths[:3] == [251, 251, 248]
    assert min(depths) == 37
    assert result.max_depth == 272
    assert int(np.count_nonzero(space.visited_depths())) == 552
    assert all(h.trace is not None and len(h.trace) == h.depth for h in result.goals)
    assert all(h.trace[0] == START_STATE for h in result.goals)


def test_trace_deeper_than_buffer_is_not_dumped():
    space, result = run_search(trace_capacity=100)
    assert result.found and result.goal_depth == 251
    assert result.trace is None
    lines = render_transcript(space, result, dump=False)
    assert lines == [
        "Goal state encountered at 251!",
        "The maximal search depth encountered is 272",
    ]


def test_search_from_a_dead_end():
    # both pencils on 26: every successor from here is illegal
    space = StateSpace()
    result = space.search(start=State(pencils=(26, 26)))
    assert not result.found
    assert result.max_depth == 1
    assert result.illegal_hits == 1
    assert render_transcript(space, result) == [
        "The maximal search depth encountered is 1",
        "(..,26,26, ) -> (..,XX,XX, ) (p0) & (..,XX,XX, ) (p1)  visited: 1",
    ]


def test_invalid_trace_capacity():
    with pytest.raises(ValueError):
        StateSpace(trace_capacity=0)


def test_successors_are_states_in_search_order(space):
    t = space.lookup(State(pencils=(55, 1), moved=(False, True)))
    succ = t.successors()
    assert all(isinstance(s, State) for s in succ)
    assert succ == [t.next(0), t.alt_next(0), t.next(1)]
    assert [format_state(s) for s in succ[:2]] == ["(m.,15, 1, )", "(m., 7, 1, )"]
