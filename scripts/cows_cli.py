# -*- coding: utf-8 -*-
"""CLI for the cows-in-the-maze search.
Commands: search (default), table, export, plot.
"""
from __future__ import annotations
import sys, argparse, logging
from pathlib import Path
from typing import List, Optional

# Ensure in-repo execution works without PYTHONPATH tweaks.
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from cowmaze import config as _config
from cowmaze.errors import MazeInvariantError
from cowmaze.logging_setup import get_logger, setup_logging

LOGGER = get_logger("cows_cli")

_VERBOSITY_LEVELS = {0: "WARNING", 1: "INFO", 2: "DEBUG"}


# --- global flag pre-parser so --verbosity can appear anywhere ---
def _preparse_global_flags(argv: List[str]) -> Optional[int]:
    """Extract --verbosity/-v from argv regardless of position; remove it from argv and return level."""
    v = None
    i = 0
    while i < len(argv):
        tok = argv[i]
        if tok.startswith("--verbosity=") or tok in ("--verbosity", "-v"):
            if "=" in tok:
                try:
                    v = int(tok.split("=", 1)[1])
                except ValueError:
                    v = 1
                argv.pop(i)
                continue
            # consume next token as value
            if i + 1 < len(argv):
                try:
                    v = int(argv[i + 1])
                    argv.pop(i)      # flag
                    argv.pop(i)      # value
                    continue
                except ValueError:
                    # malformed value; drop flag only
                    argv.pop(i)
                    v = 1
                    continue
            argv.pop(i)
            v = 1
            continue
        i += 1
    if v is None:
        return None
    return max(0, min(2, v))


def _stop_at_goal(args) -> Optional[bool]:
    return False if getattr(args, "all_goals", False) else None


# ---------------- commands ----------------
def cmd_search(args) -> int:
    from cowmaze.search import run_search
    from cowmaze.report import write_transcript
    space, result = run_search(stop_at_goal=_stop_at_goal(args), trace_capacity=args.trace_entries)
    dump = not args.no_dump
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            n = write_transcript(space, result, stream=f, dump=dump)
        LOGGER.info("[search] %d lines written to %s", n, out_path.resolve())
    else:
        write_transcript(space, result, dump=dump)
    return 0


def cmd_table(args) -> int:
    from cowmaze.search import StateSpace
    from cowmaze.report import dump_transitions
    space = StateSpace(trace_capacity=args.trace_entries)
    if not args.no_search:
        space.search(stop_at_goal=_stop_at_goal(args))
    dump_transitions(space, visited_only=False)
    return 0


def cmd_export(args) -> int:
    from cowmaze.search import run_search
    from cowmaze.report import export_run
    from cowmaze.utils_io import make_run_tag
    space, result = run_search(stop_at_goal=_stop_at_goal(args), trace_capacity=args.trace_entries)
    tag = args.run_tag or make_run_tag("all" if args.all_goals else "first")
    csv_path, json_path = export_run(space, result, args.out_csv, tag)
    print("  transitions CSV:", csv_path)
    print("  summary JSON   :", json_path)
    return 0


def cmd_plot(args) -> int:
    from cowmaze.search import run_search
    from cowmaze.viz import plot_visited_depths
    style = _config.normalize_style(args.style)
    space, result = run_search(stop_at_goal=_stop_at_goal(args), trace_capacity=args.trace_entries)
    path = plot_visited_depths(space, result, out_dir=args.out_dir, style=style,
                               bin_width=args.bin_width, logy=args.logy)
    print("[plot] saved:", Path(path).resolve())
    return 0


def _add_search_flags(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("--all-goals", action="store_true",
                    help="keep searching after a goal; report every goal encounter")
    sp.add_argument("--trace-entries", type=int, default=None,
                    help=f"stack trace buffer size (default {_config.TRACE_ENTRIES})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cows-maze", description="Cows in the Maze: exhaustive state-space search")
    # bare invocation behaves like `search`
    parser.set_defaults(func=cmd_search, all_goals=False, trace_entries=None, no_dump=False, out=None)
    subparsers = parser.add_subparsers(dest="cmd")

    # --- search ---
    sp = subparsers.add_parser("search", help="search from (1, 7) and print the transcript")
    _add_search_flags(sp)
    sp.add_argument("--no-dump", action="store_true", help="omit the visited-transition dump")
    sp.add_argument("--out", default=None, help="write the transcript to this file")
    sp.set_defaults(func=cmd_search)

    # --- table ---
    sp = subparsers.add_parser("table", help="print every transition of the state space")
    _add_search_flags(sp)
    sp.add_argument("--no-search", action="store_true", help="dump the table without searching first")
    sp.set_defaults(func=cmd_table)

    # --- export ---
    sp = subparsers.add_parser("export", help="write visited transitions (CSV) and a summary (JSON)")
    _add_search_flags(sp)
    sp.add_argument("--out-dir", "--out-csv", dest="out_csv", default=str(_config.OUT_CSV_DEFAULT))
    sp.add_argument("--run-tag", default=None)
    sp.set_defaults(func=cmd_export)

    # --- plot ---
    sp = subparsers.add_parser("plot", help="histogram of visited depths")
    _add_search_flags(sp)
    sp.add_argument("--out-dir", default=str(_config.OUT_FIG_DEFAULT))
    sp.add_argument("--style", default=_config.DEFAULT_STYLE, choices=["default", "ieee", "acm", "nature"])
    sp.add_argument("--bin-width", type=int, default=10)
    sp.add_argument("--logy", action="store_true")
    sp.set_defaults(func=cmd_plot)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    verbosity = _preparse_global_flags(argv)
    setup_logging(_config.LOG_LEVEL if verbosity is None else _VERBOSITY_LEVELS[verbosity])
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except MazeInvariantError:
        logging.exception("[%s] maze invariant violated", args.cmd or "search")
        return 2


if __name__ == "__main__":
    sys.exit(main())
