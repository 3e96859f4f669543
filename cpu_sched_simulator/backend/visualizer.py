from __future__ import annotations

from typing import Optional, Dict
import os
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from .algorithm_info import ALGORITHM_INFO
from .core import SimulationResult

FALLBACK_COLOR = "#777777"


def ensure_dir(path: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)


def _finish(fig, out_path: Optional[str]) -> None:
    fig.tight_layout()
    if out_path:
        ensure_dir(out_path)
        fig.savefig(out_path, dpi=150)
        plt.close(fig)
    else:
        plt.show()


def plot_gantt(result: SimulationResult, out_path: Optional[str] = None) -> None:
    pids_order = [m.pid for m in result.metrics]
    y_positions: Dict[str, int] = {pid: i for i, pid in enumerate(pids_order)}
    names = {m.pid: m.name for m in result.metrics}

    fig, ax = plt.subplots(figsize=(12, 3 + 0.3 * max(1, len(pids_order))))

    for block in result.timeline:
        if block.is_idle:
            # idle spans the whole chart height
            ax.axvspan(block.start_time, block.end_time, facecolor="none", edgecolor="#999999", hatch="//", alpha=0.5)
            continue
        ax.barh(
            y_positions[block.pid],
            block.duration,
            left=block.start_time,
            color=block.color or FALLBACK_COLOR,
            edgecolor="black",
            alpha=0.9,
        )
        ax.text(block.start_time + block.duration / 2, y_positions[block.pid], block.name,
                ha="center", va="center", fontsize=8)

    end = result.timeline.end_time
    ax.set_yticks([y_positions[pid] for pid in pids_order])
    ax.set_yticklabels([names[pid] for pid in pids_order])
    ax.set_xticks(np.arange(0, end + 1, max(1, end // 20)))
    ax.set_xlim(0, max(1, end))
    ax.invert_yaxis()
    ax.set_xlabel("Time")
    title = ALGORITHM_INFO[result.policy].name
    ax.set_title(f"{title}  (avg WT {result.avg_waiting_time:.2f}, avg TAT {result.avg_turnaround_time:.2f})")
    ax.grid(True, axis="x", linestyle=":", alpha=0.5)
    _finish(fig, out_path)


def plot_comparison(frame: pd.DataFrame, out_path: Optional[str] = None) -> None:
    """Grouped bars of average waiting and turnaround time per policy."""
    x = np.arange(len(frame))
    width = 0.38

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.bar(x - width / 2, frame["avg_waiting_time"], width, label="Avg Waiting Time", color="#33adff")
    ax.bar(x + width / 2, frame["avg_turnaround_time"], width, label="Avg Turnaround Time", color="#ff33cc")
    ax.set_xticks(x)
    ax.set_xticklabels(frame["name"], rotation=15)
    ax.set_ylabel("Time units")
    ax.set_title("Algorithm Comparison")
    ax.legend()
    ax.grid(True, axis="y", linestyle=":", alpha=0.5)
    _finish(fig, out_path)
