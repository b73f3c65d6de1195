# -*- coding: utf-8 -*-
"""
cowmaze/state.py
One point of the 5-d state space: where each pencil is, whether each pencil
moved in the last round, and whether the box-60 rule is active.

Keyed states (pencils on real maze points) map onto [0, 2048) through a
mixed-radix encoding, most significant digit first:
  moved0(2), moved1(2), pencil0(16), pencil1(16), rule60(2)
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from itertools import product
from typing import Iterator, Tuple

import numpy as np

from .errors import MazeInvariantError, check_pencil

__all__ = [
    "MAZEPOINTS",
    "MAZEPOINT_COUNT",
    "GOAL",
    "ILLEGAL",
    "STATE_SHAPE",
    "TOTAL_STATES",
    "START_PENCILS",
    "START_STATE",
    "State",
    "mazepoint_index",
    "encode_state",
    "decode_state",
    "iter_keyed_states",
    "format_position",
    "format_state",
]

MAZEPOINTS: Tuple[int, ...] = (1, 2, 5, 7, 9, 15, 25, 26, 35, 40, 50, 55, 60, 61, 65, 75)
MAZEPOINT_COUNT = len(MAZEPOINTS)

# sentinels, outside the range of maze point labels
GOAL = 100
ILLEGAL = 101

STATE_SHAPE = (2, 2, MAZEPOINT_COUNT, MAZEPOINT_COUNT, 2)
TOTAL_STATES = int(np.prod(STATE_SHAPE))

_POINT_INDEX = {mp: i for i, mp in enumerate(MAZEPOINTS)}


def mazepoint_index(mp: int) -> int:
    try:
        return _POINT_INDEX[mp]
    except KeyError:
        raise MazeInvariantError(f"mazepoint_index(): illegal maze point value {mp!r}") from None


@dataclass(frozen=True)
class State:
    pencils: Tuple[int, int] = (ILLEGAL, ILLEGAL)
    moved: Tuple[bool, bool] = (False, False)
    rule60: bool = False

    def __post_init__(self):
        for mp in self.pencils:
            if mp not in (GOAL, ILLEGAL):
                mazepoint_index(mp)

    def pencil(self, p: int) -> int:
        return self.pencils[check_pencil(p, "State.pencil()")]

    def has_moved(self, p: int) -> bool:
        return self.moved[check_pencil(p, "State.has_moved()")]

    def is_illegal(self) -> bool:
        return ILLEGAL in self.pencils

    def is_goal(self) -> bool:
        return GOAL in self.pencils

    def is_keyed(self) -> bool:
        return not (self.is_illegal() or self.is_goal())

    def with_pencil(self, p: int, mp: int) -> "State":
        check_pencil(p, "State.with_pencil()")
        pencils = list(self.pencils)
        pencils[p] = mp
        return replace(self, pencils=tuple(pencils))

    def with_moved(self, p: int, flag: bool = True) -> "State":
        check_pencil(p, "State.with_moved()")
        moved = list(self.moved)
        moved[p] = bool(flag)
        return replace(self, moved=tuple(moved))

    def with_rule60(self, flag: bool) -> "State":
        return replace(self, rule60=bool(flag))

    def __str__(self) -> str:
        return format_state(self)


START_PENCILS = (1, 7)
START_STATE = State(pencils=START_PENCILS)


def encode_state(s: State) -> int:
    if not s.is_keyed():
        raise MazeInvariantError(f"encode_state(): not a keyed state {format_state(s)}")
    digits = (
        int(s.moved[0]),
        int(s.moved[1]),
        mazepoint_index(s.pencils[0]),
        mazepoint_index(s.pencils[1]),
        int(s.rule60),
    )
    return int(np.ravel_multi_index(digits, STATE_SHAPE))


def decode_state(index: int) -> State:
    if not 0 <= int(index) < TOTAL_STATES:
        raise MazeInvariantError(f"decode_state(): index {index} outside [0, {TOTAL_STATES})")
    m0, m1, p0, p1, r60 = (int(d) for d in np.unravel_index(int(index), STATE_SHAPE))
    return State(pencils=(MAZEPOINTS[p0], MAZEPOINTS[p1]), moved=(bool(m0), bool(m1)), rule60=bool(r60))


def iter_keyed_states() -> Iterator[State]:
    """All 2048 keyed states, in the order the table is built and dumped."""
    for m0, m1, p0, p1, r60 in product((True, False), (True, False), MAZEPOINTS, MAZEPOINTS, (True, False)):
        yield State(pencils=(p0, p1), moved=(m0, m1), rule60=r60)


def format_position(mp: int) -> str:
    if mp == ILLEGAL:
        return "XX"
    if mp == GOAL:
        return "GG"
    return f"{mp:2d}"


def format_state(s: State) -> str:
    flags = "".join("m" if m else "." for m in s.moved)
    r60 = "*" if s.rule60 else " "
    return f"({flags},{format_position(s.pencils[0])},{format_position(s.pencils[1])},{r60})"
