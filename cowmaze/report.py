# -*- coding: utf-8 -*-
"""
cowmaze/report.py
Text transcript of a search and its CSV/JSON export.

Transcript layout:
  Goal state encountered at <depth>!        (per goal hit)
  ---- Stack trace, depth <depth>           (unless deeper than the buffer)
  <state>                                   (x depth)
  The maximal search depth encountered is <n>
  <transition>                              (every visited one, dump order)
"""

from __future__ import annotations
import json
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, TextIO, Tuple

from .search import GoalHit, SearchResult, StateSpace
from .state import encode_state, format_state
from .transition import format_transition
from .utils_io import ensure_dir, write_csv

__all__ = [
    "render_goal",
    "render_transcript",
    "write_transcript",
    "dump_transitions",
    "transition_rows",
    "summary_dict",
    "export_run",
]

CSV_FIELDS = ["index", "current", "next0", "alt0", "next1", "alt1", "visited"]


def render_goal(hit: GoalHit) -> List[str]:
    lines = [f"Goal state encountered at {hit.depth}!"]
    if hit.trace is not None:
        lines.append(f"---- Stack trace, depth {hit.depth}")
        lines.extend(format_state(s) for s in hit.trace)
    return lines


def render_transcript(space: StateSpace, result: SearchResult, dump: bool = True) -> List[str]:
    lines: List[str] = []
    for hit in result.goals:
        lines.extend(render_goal(hit))
    lines.append(f"The maximal search depth encountered is {result.max_depth}")
    if dump:
        lines.extend(format_transition(t) for t in space.visited_transitions())
    return lines


def write_transcript(space: StateSpace, result: SearchResult, stream: Optional[TextIO] = None,
                     dump: bool = True) -> int:
    out = stream if stream is not None else sys.stdout
    lines = render_transcript(space, result, dump=dump)
    for line in lines:
        out.write(line + "\n")
    out.flush()
    return len(lines)


def dump_transitions(space: StateSpace, stream: Optional[TextIO] = None, visited_only: bool = False) -> int:
    out = stream if stream is not None else sys.stdout
    count = 0
    for t in space.iter_transitions(visited_only=visited_only):
        out.write(format_transition(t) + "\n")
        count += 1
    out.flush()
    return count


def _fmt_opt(s) -> str:
    return "" if s is None else format_state(s)


def transition_rows(space: StateSpace, visited_only: bool = True) -> List[Dict]:
    rows = []
    for t in space.iter_transitions(visited_only=visited_only):
        rows.append({
            "index": encode_state(t.current),
            "current": format_state(t.current),
            "next0": format_state(t.next(0)),
            "alt0": _fmt_opt(t.alt_next(0)),
            "next1": format_state(t.next(1)),
            "alt1": _fmt_opt(t.alt_next(1)),
            "visited": t.visited,
        })
    return rows


def summary_dict(space: StateSpace, result: SearchResult) -> Dict:
    depths = space.visited_depths()
    return {
        "start": format_state(result.start),
        "stop_at_goal": result.stop_at_goal,
        "trace_capacity": result.trace_capacity,
        "found": result.found,
        "goal_depth": result.goal_depth,
        "goal_state": _fmt_opt(result.goal_state),
        "goals": [h.depth for h in result.goals],
        "max_depth": result.max_depth,
        "visited_count": int((depths > 0).sum()),
        "illegal_hits": result.illegal_hits,
    }


def export_run(space: StateSpace, result: SearchResult, out_dir: str | Path, run_tag: str) -> Tuple[str, str]:
    """Write transitions.csv and summary.json under out_dir/run_tag; returns both paths."""
    run_dir = ensure_dir(Path(out_dir) / run_tag)
    csv_path = write_csv(run_dir / "transitions.csv", transition_rows(space), fieldnames=CSV_FIELDS)
    json_path = run_dir / "summary.json"
    tmp = json_path.with_suffix(".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump({"run_tag": run_tag, **summary_dict(space, result)}, f, ensure_ascii=False, indent=2)
    tmp.replace(json_path)
    return csv_path, str(json_path)
