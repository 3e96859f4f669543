from __future__ import annotations

from typing import Dict, Iterable, Optional

import pandas as pd

from .algorithm_info import ALGORITHM_INFO
from .core import Policy, Process, SimulationResult, validate_processes
from .simulator import simulate

COMPARISON_COLUMNS = [
    "policy",
    "name",
    "avg_waiting_time",
    "avg_turnaround_time",
    "avg_response_time",
    "cpu_utilization",
    "throughput",
    "context_switches",
]


def compare_policies(processes: Iterable[Process], time_quantum: Optional[int] = None) -> Dict[Policy, SimulationResult]:
    """Run every policy over the same process set, in Policy declaration order."""
    procs = validate_processes(processes)
    return {policy: simulate(procs, policy, time_quantum) for policy in Policy}


def comparison_frame(results: Dict[Policy, SimulationResult]) -> pd.DataFrame:
    rows = []
    for policy, result in results.items():
        rows.append({
            "policy": policy.value,
            "name": ALGORITHM_INFO[policy].label,
            "avg_waiting_time": result.avg_waiting_time,
            "avg_turnaround_time": result.avg_turnaround_time,
            "avg_response_time": result.avg_response_time,
            "cpu_utilization": result.cpu_utilization,
            "throughput": result.throughput,
            "context_switches": result.context_switches,
        })
    return pd.DataFrame(rows, columns=COMPARISON_COLUMNS).round(2)


def best_policy(frame: pd.DataFrame, column: str = "avg_waiting_time") -> str:
    """Policy value with the lowest `column`; the first listed wins ties."""
    if frame.empty:
        raise ValueError("comparison frame is empty")
    return frame.loc[frame[column].idxmin(), "policy"]
