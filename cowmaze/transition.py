# -*- coding: utf-8 -*-
"""
cowmaze/transition.py
Edges out of one keyed state: for each pencil, the state reached by choosing
it, plus the alternate state where the box offers a free choice (box 55).
`visited` holds the depth at which the search last recorded this state
(0 = never).
"""

from __future__ import annotations
from typing import List, Optional

from .errors import check_pencil
from .maze import RuleOutcome
from .state import State, format_state

__all__ = ["Transition", "format_transition"]


class Transition:
    __slots__ = ("current", "_next", "_alt_next", "visited")

    def __init__(self, current: State):
        self.current = current
        self._next: List[Optional[State]] = [None, None]
        self._alt_next: List[Optional[State]] = [None, None]
        self.visited = 0

    @classmethod
    def from_outcomes(cls, current: State, out0: RuleOutcome, out1: RuleOutcome) -> "Transition":
        t = cls(current)
        for p, out in enumerate((out0, out1)):
            t.set_next(p, out.next)
            if out.alt_next is not None:
                t.set_alt_next(p, out.alt_next)
        return t

    def set_next(self, p: int, nxt: State) -> None:
        self._next[check_pencil(p, "Transition.set_next()")] = nxt

    def set_alt_next(self, p: int, nxt: State) -> None:
        self._alt_next[check_pencil(p, "Transition.set_alt_next()")] = nxt

    def next(self, p: int) -> Optional[State]:
        return self._next[check_pencil(p, "Transition.next()")]

    def alt_next(self, p: int) -> Optional[State]:
        return self._alt_next[check_pencil(p, "Transition.alt_next()")]

    def has_alt(self, p: int) -> bool:
        return self.alt_next(p) is not None

    def is_complete(self) -> bool:
        return self._next[0] is not None and self._next[1] is not None

    def successors(self) -> List[State]:
        """Next states in search order: p0, p0 alt, p1, p1 alt."""
        out: List[State] = []
        for p in (0, 1):
            out.append(self._next[p])
            if self._alt_next[p] is not None:
                out.append(self._alt_next[p])
        return out

    def __str__(self) -> str:
        return format_transition(self)

    def __repr__(self) -> str:
        return f"Transition({format_transition(self)!r})"


def format_transition(t: Transition) -> str:
    parts = [format_state(t.current), " -> "]
    for p in (0, 1):
        parts.append(format_state(t.next(p)))
        alt = t.alt_next(p)
        if alt is not None:
            parts.append(" or " + format_state(alt))
        parts.append(" (p0) & " if p == 0 else " (p1) ")
    if t.visited > 0:
        parts.append(f" visited: {t.visited}")
    return "".join(parts)
