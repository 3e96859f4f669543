"""
Step projection: one playback snapshot per tick of a finished simulation.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import List, Optional

from .core import ProcessMetrics, SimulationResult
from .timeline import ExecutionBlock


@dataclass(frozen=True)
class SimulationStep:
    current_time: int
    running_process: Optional[str]
    ready_queue: List[str]
    timeline: List[ExecutionBlock]
    # always the final metrics of the run, not the state as of current_time
    metrics: List[ProcessMetrics]


class StepSequence(Sequence):
    """Lazily built snapshots for ticks 0..end_time inclusive.

    Indexing computes the step on demand, so the sequence can be iterated any
    number of times and sliced without materialising every step.
    """

    def __init__(self, result: SimulationResult):
        self.result = result

    def __len__(self) -> int:
        end = self.result.timeline.end_time
        return end + 1 if len(self.result.timeline) else 0

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        n = len(self)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError("step index out of range")
        return self._step_at(index)

    def _step_at(self, t: int) -> SimulationStep:
        timeline = self.result.timeline
        current = timeline.block_at(t)
        running_pid = None if current is None or current.is_idle else current.pid
        ready = [
            m.name for m in self.result.metrics
            if m.arrival_time <= t and m.completion_time > t and m.pid != running_pid
        ]
        return SimulationStep(
            current_time=t,
            running_process=None if running_pid is None else current.name,
            ready_queue=ready,
            timeline=timeline.until(t),
            metrics=self.result.metrics,
        )


def project_result(result: SimulationResult) -> StepSequence:
    return StepSequence(result)
