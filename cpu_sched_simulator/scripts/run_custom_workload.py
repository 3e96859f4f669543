from __future__ import annotations

import os
import sys

# ensure repo root on sys.path when running from scripts/
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
REPO_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, os.pardir, os.pardir))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from cpu_sched_simulator.backend.algorithm_info import ALGORITHM_INFO
from cpu_sched_simulator.backend.core import Policy, Process
from cpu_sched_simulator.backend.simulator import simulate
from cpu_sched_simulator.backend.workload import palette_color


def make_workload():
    # P2 has the best priority but arrives after P1 starts; P4 is the shortest job
    rows = [
        ("P1", 0, 5, 2),
        ("P2", 1, 3, 1),
        ("P3", 2, 8, 4),
        ("P4", 3, 2, 3),
    ]
    return [
        Process(pid=pid, arrival_time=at, burst_time=bt, priority=pr, color=palette_color(i))
        for i, (pid, at, bt, pr) in enumerate(rows)
    ]


if __name__ == '__main__':
    procs = make_workload()

    for policy in Policy:
        result = simulate(procs, policy=policy, time_quantum=2)
        print(f"--- {ALGORITHM_INFO[policy].name} ---")
        print(" ".join(f"[{b.name}:{b.start_time}-{b.end_time}]" for b in result.timeline))
        print(f"Avg waiting: {result.avg_waiting_time:.2f}, Avg turnaround: {result.avg_turnaround_time:.2f}, "
              f"Context switches: {result.context_switches}")
        print()
