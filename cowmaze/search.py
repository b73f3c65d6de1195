# -*- coding: utf-8 -*-
"""
cowmaze/search.py
The whole state space as a dense table of transitions, indexed by
encode_state(), and the depth-first search over it.

Search from a keyed state at depth 1:
  - a state already visited at the same or a smaller depth is pruned;
  - otherwise its depth is stored in `visited`, and it is written to the
    trace buffer if the depth fits;
  - successors are tried in the order p0, p0 alt, p1, p1 alt. A GOAL
    successor ends the search (or only the current state's frame when
    stop_at_goal is False). An ILLEGAL successor ends the current frame,
    dropping its remaining siblings.
An explicit stack stands in for recursion; depth can exceed Python's
default recursion limit.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import numpy as np

from . import config
from .errors import MazeInvariantError
from .maze import outcomes
from .state import START_STATE, TOTAL_STATES, State, encode_state, format_state, iter_keyed_states
from .transition import Transition

__all__ = ["GoalHit", "SearchResult", "StateSpace", "run_search"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalHit:
    depth: int
    state: State
    # None when the path is deeper than the trace buffer
    trace: Optional[Tuple[State, ...]]


@dataclass
class SearchResult:
    start: State
    stop_at_goal: bool
    trace_capacity: int
    max_depth: int = 0
    goals: List[GoalHit] = field(default_factory=list)
    illegal_hits: int = 0

    @property
    def found(self) -> bool:
        return bool(self.goals)

    @property
    def goal_depth(self) -> Optional[int]:
        return self.goals[0].depth if self.goals else None

    @property
    def goal_state(self) -> Optional[State]:
        return self.goals[0].state if self.goals else None

    @property
    def trace(self) -> Optional[Tuple[State, ...]]:
        return self.goals[0].trace if self.goals else None


class StateSpace:
    """Owns the 2048-entry transition table; built once, searched any number of times."""

    def __init__(self, trace_capacity: Optional[int] = None):
        self.trace_capacity = config.normalize_trace_entries(
            config.TRACE_ENTRIES if trace_capacity is None else trace_capacity
        )
        self.table: List[Transition] = self.build()

    # --------------------- construction ---------------------
    @staticmethod
    def build() -> List[Transition]:
        logger.info("Allocating state space...")
        table: List[Optional[Transition]] = [None] * TOTAL_STATES
        for s in iter_keyed_states():
            index = encode_state(s)
            table[index] = Transition.from_outcomes(s, *outcomes(s))
        missing = [i for i, t in enumerate(table) if t is None or not t.is_complete()]
        if missing:
            raise MazeInvariantError(f"StateSpace.build(): {len(missing)} table entries left empty")
        logger.info("state space ready: %d transitions", len(table))
        return table  # type: ignore[return-value]

    def __len__(self) -> int:
        return len(self.table)

    def __getitem__(self, index: int) -> Transition:
        if not 0 <= index < TOTAL_STATES:
            raise MazeInvariantError(f"StateSpace: index {index} outside [0, {TOTAL_STATES})")
        return self.table[index]

    def lookup(self, s: State) -> Transition:
        return self.table[encode_state(s)]

    # --------------------- visited marks ---------------------
    def reset(self) -> None:
        for t in self.table:
            t.visited = 0

    def visited_depths(self) -> np.ndarray:
        return np.fromiter((t.visited for t in self.table), dtype=np.int64, count=len(self.table))

    def iter_transitions(self, visited_only: bool = False) -> Iterator[Transition]:
        """Transitions in canonical dump order (see iter_keyed_states)."""
        for s in iter_keyed_states():
            t = self.table[encode_state(s)]
            if visited_only and t.visited <= 0:
                continue
            yield t

    def visited_transitions(self) -> Iterator[Transition]:
        return self.iter_transitions(visited_only=True)

    # --------------------- traversal ---------------------
    def search(self, start: State = START_STATE, stop_at_goal: Optional[bool] = None) -> SearchResult:
        if stop_at_goal is None:
            stop_at_goal = config.STOP_AT_GOAL
        self.reset()
        cap = self.trace_capacity
        res = SearchResult(start=start, stop_at_goal=bool(stop_at_goal), trace_capacity=cap)
        trace: List[Optional[State]] = [None] * cap

        def enter(index: int, depth: int):
            t = self.table[index]
            if 0 < t.visited <= depth:
                # been here at the same or a shallower depth
                return None
            t.visited = depth
            if res.max_depth < depth:
                res.max_depth = depth
            if depth <= cap:
                trace[depth - 1] = t.current
            return iter(t.successors())

        stack = []
        first = enter(encode_state(start), 1)
        if first is not None:
            stack.append((first, 1))

        while stack:
            successors, depth = stack[-1]
            nxt = next(successors, None)
            if nxt is None:
                stack.pop()
                continue
            if nxt.is_illegal():
                logger.debug("Illegal state encountered! %s", format_state(nxt))
                res.illegal_hits += 1
                stack.pop()
                continue
            if nxt.is_goal():
                logger.info("Goal state encountered at %d!", depth)
                recorded = tuple(trace[:depth]) if depth <= cap else None
                res.goals.append(GoalHit(depth=depth, state=nxt, trace=recorded))
                if res.stop_at_goal:
                    break
                stack.pop()
                continue
            child = enter(encode_state(nxt), depth + 1)
            if child is not None:
                stack.append((child, depth + 1))

        logger.info("search finished: found=%s max_depth=%d visited=%d",
                    res.found, res.max_depth, int(np.count_nonzero(self.visited_depths())))
        return res


def run_search(stop_at_goal: Optional[bool] = None, trace_capacity: Optional[int] = None) -> Tuple[StateSpace, SearchResult]:
    space = StateSpace(trace_capacity=trace_capacity)
    return space, space.search(stop_at_goal=stop_at_goal)
