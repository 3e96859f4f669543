from __future__ import annotations

from typing import Iterable, Optional

from .core import Policy, Process, SimulationResult
from .schedulers import make_scheduler
from .steps import StepSequence, project_result


def simulate(
    processes: Iterable[Process],
    policy=Policy.FCFS,
    time_quantum: Optional[int] = None,
) -> SimulationResult:
    """Run one policy over a process set.

    `policy` may be a Policy or any name accepted by `Policy.parse`.
    `time_quantum` is only used by Round Robin (default 2).
    """
    scheduler = make_scheduler(policy, time_quantum)
    return scheduler.run(processes)


def project_steps(
    processes: Iterable[Process],
    policy=Policy.FCFS,
    time_quantum: Optional[int] = None,
) -> StepSequence:
    """Run a policy and expand its timeline into one snapshot per tick."""
    return project_result(simulate(processes, policy, time_quantum))
