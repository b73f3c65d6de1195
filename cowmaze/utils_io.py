# -*- coding: utf-8 -*-
"""
cowmaze/utils_io.py
Common I/O helpers: directory creation, CSV writing, run tags.
"""

from __future__ import annotations
import datetime
from pathlib import Path
from typing import List, Dict, Optional
import re, csv

def ensure_dir(p: str | Path) -> Path:
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p

def write_csv(path: str | Path, rows: List[Dict], fieldnames: Optional[List[str]] = None) -> str:
    path = str(path)
    if not rows:
        # header only if one was given; otherwise an empty file
        with open(path, "w", newline="", encoding="utf-8") as f:
            if fieldnames:
                w = csv.DictWriter(f, fieldnames=fieldnames); w.writeheader()
        return path
    if fieldnames is None:
        keys = set()
        for r in rows:
            keys |= set(r.keys())
        fieldnames = sorted(keys)
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader(); w.writerows(rows)
    return path

def slugify(s: str) -> str:
    s = s.strip().lower()
    s = re.sub(r"[^0-9a-zA-Z_]+", "_", s)
    s = re.sub(r"_{2,}", "_", s).strip("_")
    return s or "run"

def make_run_tag(mode: str = "first", add_timestamp: bool = True, suffix: str = "") -> str:
    """
    Run tag:
      - add_timestamp=False for stable names (tests, reruns)
      - add_timestamp=True for new runs
    """
    base = f"cows_{slugify(mode)}"
    if add_timestamp:
        ts = datetime.datetime.now().strftime("%Y-%m-%d_%H-%M")
        tag = f"{base}_{ts}"
    else:
        tag = f"{base}"
    if suffix:
        tag += f"_{slugify(suffix)}"
    return tag
