"""
Descriptive information about each scheduling policy, for display only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .core import Policy


@dataclass(frozen=True)
class AlgorithmInfo:
    label: str
    name: str
    description: str
    advantages: Tuple[str, ...]
    disadvantages: Tuple[str, ...]


ALGORITHM_INFO: Dict[Policy, AlgorithmInfo] = {
    Policy.FCFS: AlgorithmInfo(
        label="FCFS",
        name="First-Come, First-Served (FCFS)",
        description=("Processes are executed in the order they arrive in the ready queue. "
                     "The first process to request the CPU gets it first."),
        advantages=(
            "Simple to understand and implement",
            "No starvation - every process gets executed",
            "Fair in terms of arrival order",
        ),
        disadvantages=(
            "Convoy Effect - short processes wait for long ones",
            "High average waiting time",
            "Non-preemptive - no priority handling",
        ),
    ),
    Policy.SJF: AlgorithmInfo(
        label="SJF",
        name="Shortest Job First (SJF)",
        description=("Selects the process with the smallest burst time. "
                     "Non-preemptive version runs the selected process to completion."),
        advantages=(
            "Optimal average waiting time for non-preemptive",
            "Reduces average turnaround time",
            "Efficient for batch systems",
        ),
        disadvantages=(
            "Starvation possible for long processes",
            "Requires knowing burst time in advance",
            "Not suitable for interactive systems",
        ),
    ),
    Policy.SRTF: AlgorithmInfo(
        label="SRTF",
        name="Shortest Remaining Time First (SRTF)",
        description=("Preemptive version of SJF. The process with the shortest remaining time is "
                     "always selected. New arrivals can preempt the running process."),
        advantages=(
            "Optimal average waiting time",
            "Better response time than SJF",
            "Efficient CPU utilization",
        ),
        disadvantages=(
            "High overhead due to frequent context switches",
            "Starvation for longer processes",
            "Requires continuous burst time monitoring",
        ),
    ),
    Policy.RR: AlgorithmInfo(
        label="RR",
        name="Round Robin (RR)",
        description=("Each process gets a fixed time quantum. After the quantum expires, "
                     "the process is moved to the back of the queue."),
        advantages=(
            "Fair - all processes get equal CPU time",
            "Good response time for short processes",
            "No starvation",
        ),
        disadvantages=(
            "Performance depends on time quantum size",
            "Higher average waiting time than SJF",
            "Context switch overhead",
        ),
    ),
    Policy.PRIORITY_NP: AlgorithmInfo(
        label="Priority (NP)",
        name="Priority Scheduling (Non-Preemptive)",
        description=("Each process has a priority. The highest priority process (lowest number) "
                     "is selected. Once started, it runs to completion."),
        advantages=(
            "Important processes run first",
            "Good for real-time systems",
            "Flexible priority assignment",
        ),
        disadvantages=(
            "Starvation for low-priority processes",
            "Priority inversion problems",
            "No guarantee for response time",
        ),
    ),
    Policy.PRIORITY_P: AlgorithmInfo(
        label="Priority (P)",
        name="Priority Scheduling (Preemptive)",
        description=("Like non-preemptive, but a higher priority process can preempt "
                     "the current running process."),
        advantages=(
            "Immediate response for high-priority processes",
            "Better for real-time systems",
            "Dynamic priority adjustment possible",
        ),
        disadvantages=(
            "More context switches",
            "Starvation for low-priority processes",
            "Complex implementation",
        ),
    ),
}


def get_info(policy) -> AlgorithmInfo:
    return ALGORITHM_INFO[Policy.parse(policy)]
