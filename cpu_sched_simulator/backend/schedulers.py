"""
Scheduler implementations: FCFS, SJF, SRTF, Round Robin and the two Priority variants.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Dict, Iterable, Optional, Type

from .core import (
    DEFAULT_TIME_QUANTUM,
    InvariantViolation,
    MetricsTracker,
    Policy,
    Process,
    ProcessMetrics,
    SimulationResult,
    validate_processes,
    validate_quantum,
)
from .timeline import Timeline
from .utils import EventLogger, compute_avg, compute_throughput, compute_utilization


class BaseScheduler(ABC):
    """Abstract base class for all schedulers.

    A scheduler instance only holds configuration. Every call to `run` builds
    its own tracker, timeline and logger, so runs never share mutable state.
    """

    policy: Policy

    def __init__(self, time_quantum: Optional[int] = None):
        self.time_quantum = time_quantum

    def run(self, processes: Iterable[Process]) -> SimulationResult:
        procs = validate_processes(processes)
        tracker = MetricsTracker(procs)
        timeline = Timeline()
        logger = EventLogger()
        self._execute(tracker, timeline, logger)
        if not tracker.all_done():
            raise InvariantViolation(f"{self.policy.value}: run ended with unfinished processes")
        return self._build_result(tracker, timeline, logger)

    @abstractmethod
    def _execute(self, tracker: MetricsTracker, timeline: Timeline, logger: EventLogger) -> None:
        """Drive the tracker to completion, appending blocks to the timeline."""

    def _run_slice(self, tracker: MetricsTracker, timeline: Timeline, logger: EventLogger,
                   idx: int, start: int, units: int) -> int:
        """Run process `idx` for `units` ticks from `start` as one block. Returns the end tick."""
        m = tracker[idx]
        if tracker.dispatch(idx, start):
            logger.log_process_event(start, m.pid, "start")
        end = start + units
        timeline.add_block(m.pid, m.name, start, end, m.color)
        if tracker.execute(idx, units, end):
            logger.log_process_event(end, m.pid, "complete")
        else:
            logger.log_process_event(end, m.pid, "preempt")
        return end

    def _build_result(self, tracker: MetricsTracker, timeline: Timeline, logger: EventLogger) -> SimulationResult:
        metrics = tracker.snapshot()
        total_time = timeline.end_time
        for block in timeline:
            logger.log_timeline_slice(block.start_time, block.end_time,
                                      None if block.is_idle else block.pid, self.policy.value)
        return SimulationResult(
            policy=self.policy,
            timeline=timeline,
            metrics=metrics,
            avg_waiting_time=compute_avg([m.waiting_time for m in metrics]),
            avg_turnaround_time=compute_avg([m.turnaround_time for m in metrics]),
            avg_response_time=compute_avg([m.response_time for m in metrics if m.response_time is not None]),
            total_time=total_time,
            cpu_utilization=compute_utilization(timeline.busy_time(), total_time),
            throughput=compute_throughput(len(metrics), total_time),
            context_switches=timeline.context_switches(),
            time_quantum=self.time_quantum,
            logger=logger,
        )


class FCFSScheduler(BaseScheduler):
    """First Come First Serve scheduler implementation."""

    policy = Policy.FCFS

    def _execute(self, tracker: MetricsTracker, timeline: Timeline, logger: EventLogger) -> None:
        clock = 0
        for idx in tracker.arrival_order():
            m = tracker[idx]
            if clock < m.arrival_time:
                timeline.add_idle(clock, m.arrival_time)
                clock = m.arrival_time
            clock = self._run_slice(tracker, timeline, logger, idx, clock, m.remaining_time)


class SelectionScheduler(BaseScheduler):
    """Non-preemptive: pick the best-ranked ready process and run it to completion.

    `min` keeps the first of equal ranks, and ready indices come in input
    order, so ties go to the earliest process in the input.
    """

    @abstractmethod
    def rank(self, m: ProcessMetrics) -> int:
        """Lower rank is scheduled first."""

    def _execute(self, tracker: MetricsTracker, timeline: Timeline, logger: EventLogger) -> None:
        clock = 0
        while not tracker.all_done():
            ready = tracker.available(clock)
            if not ready:
                timeline.add_idle(clock, clock + 1)
                clock += 1
                continue
            chosen = min(ready, key=lambda i: self.rank(tracker[i]))
            clock = self._run_slice(tracker, timeline, logger, chosen, clock, tracker[chosen].remaining_time)


class SJFScheduler(SelectionScheduler):
    """Shortest Job First scheduler implementation."""

    policy = Policy.SJF

    def rank(self, m: ProcessMetrics) -> int:
        return m.burst_time


class PriorityScheduler(SelectionScheduler):
    """Non-preemptive priority scheduler (lower number = higher priority)."""

    policy = Policy.PRIORITY_NP

    def rank(self, m: ProcessMetrics) -> int:
        return m.priority


class PreemptiveScheduler(BaseScheduler):
    """Re-evaluates the ready set every tick; a better-ranked process takes the CPU."""

    @abstractmethod
    def rank(self, m: ProcessMetrics) -> int:
        """Lower rank is scheduled first."""

    def _execute(self, tracker: MetricsTracker, timeline: Timeline, logger: EventLogger) -> None:
        ceiling = tracker.time_ceiling()
        clock = 0
        running: Optional[int] = None
        block_start = 0

        while not tracker.all_done():
            if clock >= ceiling:
                raise InvariantViolation(
                    f"{self.policy.value}: clock reached {clock} (ceiling {ceiling}) with work remaining")

            ready = tracker.available(clock)
            if not ready:
                timeline.add_idle(clock, clock + 1)
                clock += 1
                continue

            chosen = min(ready, key=lambda i: self.rank(tracker[i]))
            if chosen != running:
                if running is not None:
                    prev = tracker[running]
                    timeline.add_block(prev.pid, prev.name, block_start, clock, prev.color)
                    logger.log_process_event(clock, prev.pid, "preempt")
                running, block_start = chosen, clock
                if tracker.dispatch(chosen, clock):
                    logger.log_process_event(clock, tracker[chosen].pid, "start")

            clock += 1
            if tracker.execute(chosen, 1, clock):
                done = tracker[chosen]
                timeline.add_block(done.pid, done.name, block_start, clock, done.color)
                logger.log_process_event(clock, done.pid, "complete")
                running = None


class SRTFScheduler(PreemptiveScheduler):
    """Shortest Remaining Time First (preemptive SJF) scheduler."""

    policy = Policy.SRTF

    def rank(self, m: ProcessMetrics) -> int:
        return m.remaining_time


class PreemptivePriorityScheduler(PreemptiveScheduler):
    """Preemptive priority scheduler (lower number = higher priority)."""

    policy = Policy.PRIORITY_P

    def rank(self, m: ProcessMetrics) -> int:
        return m.priority


class RoundRobinScheduler(BaseScheduler):
    """Round Robin scheduler implementation."""

    policy = Policy.RR

    def __init__(self, time_quantum: int = DEFAULT_TIME_QUANTUM):
        super().__init__(validate_quantum(time_quantum))

    def _execute(self, tracker: MetricsTracker, timeline: Timeline, logger: EventLogger) -> None:
        pending = tracker.arrival_order()
        queue: Deque[int] = deque()
        next_arrival = 0
        clock = 0

        def arrive_new(now: int) -> None:
            nonlocal next_arrival
            while next_arrival < len(pending) and tracker[pending[next_arrival]].arrival_time <= now:
                queue.append(pending[next_arrival])
                next_arrival += 1

        arrive_new(clock)
        while queue or next_arrival < len(pending):
            if not queue:
                # jump to next arrival
                arrival = tracker[pending[next_arrival]].arrival_time
                if clock < arrival:
                    timeline.add_idle(clock, arrival)
                    clock = arrival
                arrive_new(clock)

            idx = queue.popleft()
            units = min(self.time_quantum, tracker[idx].remaining_time)
            clock = self._run_slice(tracker, timeline, logger, idx, clock, units)

            # arrivals up to the end of the slice go ahead of the preempted process
            arrive_new(clock)
            if tracker[idx].remaining_time > 0:
                queue.append(idx)


SCHEDULERS: Dict[Policy, Type[BaseScheduler]] = {
    Policy.FCFS: FCFSScheduler,
    Policy.SJF: SJFScheduler,
    Policy.SRTF: SRTFScheduler,
    Policy.RR: RoundRobinScheduler,
    Policy.PRIORITY_NP: PriorityScheduler,
    Policy.PRIORITY_P: PreemptivePriorityScheduler,
}


def make_scheduler(policy, time_quantum: Optional[int] = None) -> BaseScheduler:
    """Build the scheduler for `policy`. The quantum only applies to Round Robin."""
    policy = Policy.parse(policy)
    if policy is Policy.RR:
        return RoundRobinScheduler(DEFAULT_TIME_QUANTUM if time_quantum is None else time_quantum)
    return SCHEDULERS[policy]()
