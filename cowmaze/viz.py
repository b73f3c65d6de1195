# -*- coding: utf-8 -*-
from __future__ import annotations
import os
from typing import Optional

import numpy as np
import matplotlib as mpl
import matplotlib.pyplot as plt

from .search import SearchResult, StateSpace

# ---------------- styles ----------------
_STYLES = {
    "default": {"figure.dpi":120,"savefig.dpi":170,"font.size":10,"axes.titlesize":11,"axes.labelsize":10,
                "legend.fontsize":9,"xtick.labelsize":9,"ytick.labelsize":9,"axes.spines.top":False,
                "axes.spines.right":False,"axes.grid":True,"grid.alpha":0.25,"lines.linewidth":1.3,
                "lines.markersize":4.5,"legend.frameon":False},
    "ieee":    {"figure.dpi":120,"savefig.dpi":200,"font.size":9,"axes.titlesize":10,"axes.labelsize":9,
                "legend.fontsize":8,"xtick.labelsize":8,"ytick.labelsize":8,"axes.spines.top":False,
                "axes.spines.right":False,"axes.grid":True,"grid.alpha":0.25,"lines.linewidth":1.2,
                "lines.markersize":4.0,"legend.frameon":False},
    "acm":     {"figure.dpi":120,"savefig.dpi":200,"font.size":10,"axes.titlesize":12,"axes.labelsize":10,
                "legend.fontsize":9,"xtick.labelsize":9,"ytick.labelsize":9,"axes.spines.top":False,
                "axes.spines.right":False,"axes.grid":True,"grid.alpha":0.25,"lines.linewidth":1.4,
                "lines.markersize":5.0,"legend.frameon":False},
    "nature":  {"figure.dpi":120,"savefig.dpi":200,"font.size":11,"axes.titlesize":13,"axes.labelsize":11,
                "legend.fontsize":10,"xtick.labelsize":10,"ytick.labelsize":10,"axes.spines.top":False,
                "axes.spines.right":False,"axes.grid":True,"grid.alpha":0.25,"lines.linewidth":1.2,
                "lines.markersize":4.8,"legend.frameon":False},
}
def apply_style(style:str="default"): mpl.rcParams.update(_STYLES.get(style,_STYLES["default"]))
apply_style("default")

# ---------------- helpers ----------------
def _unique_path(path:str)->str:
    if not os.path.exists(path): return path
    b,e = os.path.splitext(path); i=1
    while True:
        cand=f"{b}_{i}{e}"
        if not os.path.exists(cand): return cand
        i+=1

def depth_histogram(depths: np.ndarray, bin_width: int = 10):
    """(counts, edges) over the visited (non-zero) depths."""
    d = np.asarray(depths)
    d = d[d > 0]
    if d.size == 0:
        return np.zeros(0, dtype=np.int64), np.zeros(1)
    top = int(d.max())
    edges = np.arange(1, top + bin_width + 1, bin_width)
    counts, edges = np.histogram(d, bins=edges)
    return counts, edges

# ---------------- plots ----------------
def plot_visited_depths(space: StateSpace, result: SearchResult, out_dir: str = "out_fig",
                        style: str = "default", bin_width: int = 10, logy: bool = False,
                        fname: Optional[str] = None) -> str:
    """
    Histogram of the depth stored in each visited transition, with the
    goal depth and the maximal search depth marked.
    """
    apply_style(style)
    os.makedirs(out_dir, exist_ok=True)
    depths = space.visited_depths()
    counts, edges = depth_histogram(depths, bin_width=bin_width)

    fig, ax = plt.subplots(figsize=(6.4, 3.6))
    if counts.size:
        ax.bar(edges[:-1], counts, width=np.diff(edges), align="edge", alpha=0.8, label="visited states")
    if result.found:
        ax.axvline(result.goal_depth, color="tab:green", linestyle="--", label=f"goal @ {result.goal_depth}")
    ax.axvline(result.max_depth, color="tab:red", linestyle=":", label=f"max depth {result.max_depth}")
    if logy: ax.set_yscale("log")
    ax.set_xlabel("visited depth")
    ax.set_ylabel("# states")
    ax.set_title(f"Cows in the maze: {int((depths > 0).sum())} states visited")
    ax.legend(loc="best")
    fig.tight_layout()

    path = _unique_path(os.path.join(out_dir, fname or "visited_depths.png"))
    fig.savefig(path)
    plt.close(fig)
    return path


__all__ = ["apply_style", "depth_histogram", "plot_visited_depths"]
