# -*- coding: utf-8 -*-
"""
cowmaze/errors.py
Domain-invariant violations. These mean the fixed rule table or a caller is
inconsistent; nothing in the library catches them.
"""

from __future__ import annotations


class MazeInvariantError(RuntimeError):
    """Raised for an impossible pencil index, maze point, box or lookup key."""


def check_pencil(p: int, where: str) -> int:
    if p not in (0, 1):
        raise MazeInvariantError(f"{where}: illegal pencil index {p!r}")
    return p


__all__ = ["MazeInvariantError", "check_pencil"]
