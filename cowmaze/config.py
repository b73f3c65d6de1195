# -*- coding: utf-8 -*-
"""
cowmaze/config.py
Light global configuration: trace buffer, search mode, logging, output dirs.
The maze itself (points, rules, start state) is fixed and not configurable.
"""

from __future__ import annotations
from pathlib import Path
import os

from typing import Optional, Union

# stack trace buffer; traces deeper than this are not dumped.
# Kept raw here, parsed by normalize_trace_entries().
TRACE_ENTRIES = os.getenv("COWS_TRACE_ENTRIES", "300")

# stop the whole search at the first goal (0 = keep going, report every goal)
STOP_AT_GOAL = os.getenv("COWS_STOP_AT_GOAL", "1") != "0"

LOG_LEVEL = os.getenv("COWS_LOG_LEVEL", "INFO")

# plot style (viz.apply_style)
DEFAULT_STYLE = os.getenv("COWS_STYLE", "default")

RESULTS_ROOT = Path(os.getenv("COWS_RESULTS_ROOT", "./results")).resolve()
OUT_CSV_DEFAULT = RESULTS_ROOT / "out_csv"
OUT_FIG_DEFAULT = RESULTS_ROOT / "figs"

# -------------------------
# normalization / validation
# -------------------------

_STYLE_CHOICES = {"default", "ieee", "acm", "nature"}


def normalize_trace_entries(value: Optional[Union[int, str]]) -> int:
    v = TRACE_ENTRIES if value is None else value
    try:
        n = int(v)
    except (TypeError, ValueError):
        raise ValueError(f"trace entries must be an integer, got {value!r}") from None
    if n < 1:
        raise ValueError(f"trace entries must be >= 1, got {n}")
    return n


def normalize_style(style: Optional[str]) -> str:
    s = (style or DEFAULT_STYLE).strip().lower()
    if s not in _STYLE_CHOICES:
        raise ValueError(f"style must be one of {sorted(_STYLE_CHOICES)}, got '{style}'")
    return s


__all__ = [
    "TRACE_ENTRIES",
    "STOP_AT_GOAL",
    "LOG_LEVEL",
    "DEFAULT_STYLE",
    "RESULTS_ROOT",
    "OUT_CSV_DEFAULT",
    "OUT_FIG_DEFAULT",
    "normalize_trace_entries",
    "normalize_style",
]
