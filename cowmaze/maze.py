# -*- coding: utf-8 -*-
"""
cowmaze/maze.py
The 16 boxes of the maze and their rules.

evaluate(current, chosen) answers: if the pencil `chosen` is picked in state
`current`, where do the pencils end up, and along which path did it leave?
Every rule except box 9 and box 26 tests the box the *other* pencil is in.
Box 9 tests whether the other pencil moved last round; box 26 asks whether
the other pencil, if it were chosen now, would leave on NO.

Red-text boxes (7, 9, 25, 26, 40, 50, 61) follow YES unconditionally while
rule 60 is active. Box 60 switches the rule on, box 65 switches it off.
"""

from __future__ import annotations
import enum
import logging
from dataclasses import replace
from typing import Callable, Dict, NamedTuple, Optional, Tuple

from .errors import MazeInvariantError, check_pencil
from .state import GOAL, ILLEGAL, State, format_state

__all__ = [
    "PathKind",
    "RuleOutcome",
    "RED_TEXT_BOXES",
    "yes_target",
    "no_target",
    "evaluate",
    "outcomes",
]

logger = logging.getLogger(__name__)


class PathKind(enum.Enum):
    YES = 0
    NO = 1
    LUGNUT = 2  # both YES and LUGNUT may be taken
    NONE = 3    # deadly embrace, no exit


class RuleOutcome(NamedTuple):
    next: State
    alt_next: Optional[State]
    path: PathKind


# ---------------- box text categories ----------------
RED_OR_GREEN_TEXT = frozenset({7, 26, 61, 25, 50, 60, 9, 40})
GREEN_TEXT_OR_WORD = frozenset({60, 5, 25, 2, 65, 40, 1})
RED_OR_GREEN_WORD = frozenset({5, 25, 2, 60, 1, 40, 65})
WORD_WORD = frozenset({35, 5})
REFERS_TO_COWS = frozenset({50})
IF_SENTENCE = frozenset({61, 26, 65})

RED_TEXT_BOXES = frozenset({7, 9, 25, 26, 40, 50, 61})

_YES: Dict[int, int] = {
    1: 2, 2: 7, 5: 25, 7: 26, 9: 2, 15: 5, 25: 7, 26: 61,
    35: 40, 40: 65, 50: GOAL, 55: 15, 60: 25, 61: 1, 65: 75, 75: 1,
}

_NO: Dict[int, int] = {
    1: 9, 2: 15, 5: 2, 7: 5, 9: 35, 15: 40, 25: 50, 26: 55,
    35: 1, 40: 60, 50: 26, 75: 50,
}

LUGNUT_TARGET = 7

# box -> test(current, other pencil); True means YES
_Test = Callable[[State, int], bool]
_TESTS: Dict[int, _Test] = {
    1: lambda s, o: s.pencil(o) in RED_OR_GREEN_TEXT,
    2: lambda s, o: s.pencil(o) in GREEN_TEXT_OR_WORD,
    5: lambda s, o: s.pencil(o) in RED_OR_GREEN_WORD,
    7: lambda s, o: s.pencil(o) % 2 == 1,
    9: lambda s, o: s.has_moved(o),
    15: lambda s, o: s.pencil(o) % 5 == 0,
    25: lambda s, o: s.pencil(o) in RED_OR_GREEN_TEXT,
    35: lambda s, o: s.pencil(o) in WORD_WORD,
    # "Is the text in this box green?" -- it is red
    40: lambda s, o: False,
    50: lambda s, o: s.pencil(o) in REFERS_TO_COWS,
    75: lambda s, o: s.pencil(o) in IF_SENTENCE,
}


def yes_target(box: int) -> int:
    try:
        return _YES[box]
    except KeyError:
        raise MazeInvariantError(f"yes_target(): no such box {box!r}") from None


def no_target(box: int) -> Optional[int]:
    """NO exit of `box`, or None for boxes that only have a YES exit."""
    if box not in _YES:
        raise MazeInvariantError(f"no_target(): no such box {box!r}")
    return _NO.get(box)


def _move(template: State, chosen: int, box: int) -> State:
    return template.with_pencil(chosen, box).with_moved(chosen, True)


def evaluate(current: State, chosen: int) -> RuleOutcome:
    """
    Apply the rule of the box pencil `chosen` points to.

    Raises
    ------
    MazeInvariantError
        If `current` is not a keyed state or the box is unknown.
    """
    check_pencil(chosen, "evaluate()")
    if not current.is_keyed():
        raise MazeInvariantError(f"evaluate(): not a normal current state {format_state(current)}")
    other = 1 - chosen
    box = current.pencil(chosen)
    template = replace(current, moved=(False, False))

    if box in RED_TEXT_BOXES and current.rule60:
        # ignore red text, just move through YES
        return RuleOutcome(_move(template, chosen, yes_target(box)), None, PathKind.YES)

    if box == 26:
        if current.pencil(other) == 26:
            logger.debug("deadly embrace at %s", format_state(current))
            dead = template.with_pencil(chosen, ILLEGAL).with_pencil(other, ILLEGAL)
            return RuleOutcome(dead, None, PathKind.NONE)
        # the other pencil is never on 26 here, so this recurses once at most
        if evaluate(current, other).path is PathKind.NO:
            return RuleOutcome(_move(template, chosen, _YES[26]), None, PathKind.YES)
        return RuleOutcome(_move(template, chosen, _NO[26]), None, PathKind.NO)

    if box == 55:
        nxt = _move(template, chosen, _YES[55])
        return RuleOutcome(nxt, nxt.with_pencil(chosen, LUGNUT_TARGET), PathKind.LUGNUT)

    if box == 60:
        return RuleOutcome(_move(template, chosen, _YES[60]).with_rule60(True), None, PathKind.YES)

    if box == 61:
        # move the other pencil along its YES path as well
        nxt = _move(template, chosen, _YES[61])
        nxt = _move(nxt, other, yes_target(current.pencil(other)))
        return RuleOutcome(nxt, None, PathKind.YES)

    if box == 65:
        return RuleOutcome(_move(template, chosen, _YES[65]).with_rule60(False), None, PathKind.YES)

    test = _TESTS.get(box)
    if test is None:
        raise MazeInvariantError(f"evaluate(): no such box {box!r}")
    if test(current, other):
        return RuleOutcome(_move(template, chosen, _YES[box]), None, PathKind.YES)
    return RuleOutcome(_move(template, chosen, _NO[box]), None, PathKind.NO)


def outcomes(current: State) -> Tuple[RuleOutcome, RuleOutcome]:
    return evaluate(current, 0), evaluate(current, 1)
