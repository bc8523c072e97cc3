from __future__ import annotations

from typing import List, Optional, Dict
import os
import matplotlib.pyplot as plt

from .core import ProcessRecord
from .utils import EventLogger


def ensure_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def plot_gantt(processes: List[ProcessRecord], logger: EventLogger, out_path: Optional[str] = None, title: str = "Gantt Chart"):
    fig, ax = plt.subplots(figsize=(12, 3 + 0.4 * max(1, len(processes))))

    cmap = plt.get_cmap("tab10")
    pids_order = sorted(p.pid for p in processes)
    y_positions: Dict[int, int] = {pid: i for i, pid in enumerate(pids_order)}
    pid_to_color = {pid: cmap(i % 10) for i, pid in enumerate(pids_order)}

    # Draw execution bars, idle gaps as a grey band underneath
    for seg in logger.timeline:
        pid = seg.get("pid")
        start = seg["start"]
        end = seg["end"]
        if pid is None:
            ax.axvspan(start, end, color="#dddddd", alpha=0.6, zorder=0)
            continue
        ax.barh(y_positions[pid], end - start, left=start, color=pid_to_color[pid], edgecolor="black", alpha=0.9)
        ax.text(start + (end - start) / 2, y_positions[pid], f"P{pid}", va="center", ha="center", fontsize=8)

    # Aging steps as small markers on the waiting process' row
    for ev in logger.process_events:
        if ev["event"] == "age" and ev["pid"] in y_positions:
            ax.plot(ev["time"], y_positions[ev["pid"]], marker="v", color="#444444", markersize=5)

    ax.set_yticks([y_positions[pid] for pid in pids_order])
    ax.set_yticklabels([f"P{pid}" for pid in pids_order])
    ax.set_xlabel("Time")
    ax.set_title(title)
    ax.grid(True, axis="x", linestyle=":", alpha=0.5)
    fig.tight_layout()

    if out_path:
        ensure_dir(out_path)
        fig.savefig(out_path, dpi=150)
        plt.close(fig)
    else:
        plt.show()
    return fig
