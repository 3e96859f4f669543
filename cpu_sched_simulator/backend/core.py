"""
Core data structures for the CPU scheduling simulator.
Includes Process, ProcessMetrics, the per-run MetricsTracker and input validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from .timeline import IDLE_PID, Timeline
from .utils import EventLogger

DEFAULT_TIME_QUANTUM = 2


class SchedulingError(Exception):
    """Base class for simulator errors."""


class ContractViolation(SchedulingError, ValueError):
    """Malformed input rejected before a run starts."""


class InvariantViolation(SchedulingError, RuntimeError):
    """The engine reached a state that a correct run can never reach."""


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Policy(str, Enum):
    """The six supported scheduling policies."""
    FCFS = "fcfs"
    SJF = "sjf"
    SRTF = "srtf"
    RR = "rr"
    PRIORITY_NP = "priority-np"
    PRIORITY_P = "priority-p"

    @property
    def preemptive(self) -> bool:
        return self in (Policy.SRTF, Policy.RR, Policy.PRIORITY_P)

    @property
    def uses_priority(self) -> bool:
        return self in (Policy.PRIORITY_NP, Policy.PRIORITY_P)

    @classmethod
    def parse(cls, value) -> "Policy":
        """Resolve a policy from its value or a common alias ("RR", "Round Robin", ...)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "-").replace(" ", "-")
        try:
            return _POLICY_ALIASES[key]
        except KeyError:
            choices = ", ".join(p.value for p in cls)
            raise ContractViolation(f"unknown policy {value!r} (expected one of: {choices})") from None


_POLICY_ALIASES: Dict[str, Policy] = {p.value: p for p in Policy}
_POLICY_ALIASES.update({
    "first-come-first-served": Policy.FCFS,
    "shortest-job-first": Policy.SJF,
    "shortest-remaining-time-first": Policy.SRTF,
    "round-robin": Policy.RR,
    "roundrobin": Policy.RR,
    "priority": Policy.PRIORITY_NP,
    "priority-nonpreemptive": Policy.PRIORITY_NP,
    "priority-non-preemptive": Policy.PRIORITY_NP,
    "priority-preemptive": Policy.PRIORITY_P,
})


@dataclass(frozen=True)
class Process:
    """A process to schedule. Immutable for the duration of a run."""
    pid: str
    burst_time: int
    priority: int = 0
    arrival_time: int = 0
    name: Optional[str] = None
    color: Optional[str] = None

    def __post_init__(self) -> None:
        if self.name is None:
            object.__setattr__(self, "name", self.pid)


@dataclass
class ProcessMetrics:
    """Per-run mutable state of one process."""
    pid: str
    name: str
    arrival_time: int
    burst_time: int
    priority: int
    color: Optional[str]
    remaining_time: int
    start_time: Optional[int] = None
    completion_time: int = 0
    turnaround_time: int = 0
    waiting_time: int = 0
    response_time: Optional[int] = None

    @classmethod
    def from_process(cls, process: Process) -> "ProcessMetrics":
        return cls(
            pid=process.pid,
            name=process.name,
            arrival_time=process.arrival_time,
            burst_time=process.burst_time,
            priority=process.priority,
            color=process.color,
            remaining_time=process.burst_time,
        )

    @property
    def completed(self) -> bool:
        return self.remaining_time == 0


class MetricsTracker:
    """Index-addressed metrics owned by a single run.

    Positions follow the input order of the process set, which is also the
    tie-break order used by the selection-based policies.
    """

    def __init__(self, processes: Sequence[Process]):
        self._items: List[ProcessMetrics] = [ProcessMetrics.from_process(p) for p in processes]
        self._index: Dict[str, int] = {m.pid: i for i, m in enumerate(self._items)}
        self._completed = 0

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, idx: int) -> ProcessMetrics:
        return self._items[idx]

    def index_of(self, pid: str) -> int:
        return self._index[pid]

    def get(self, pid: str) -> ProcessMetrics:
        return self._items[self._index[pid]]

    def available(self, now: int) -> List[int]:
        """Indices of processes that have arrived by `now` and are not completed."""
        return [i for i, m in enumerate(self._items) if m.arrival_time <= now and m.remaining_time > 0]

    def arrival_order(self) -> List[int]:
        # sorted() is stable, so equal arrivals keep input order
        return sorted(range(len(self._items)), key=lambda i: self._items[i].arrival_time)

    def dispatch(self, idx: int, now: int) -> bool:
        """Record a dispatch. Returns True on the process's first dispatch."""
        m = self._items[idx]
        if m.start_time is None:
            m.start_time = now
            m.response_time = now - m.arrival_time
            return True
        return False

    def execute(self, idx: int, units: int, now: int) -> bool:
        """Consume `units` of CPU ending at `now`. Returns True if the process completed."""
        m = self._items[idx]
        if units > m.remaining_time:
            raise InvariantViolation(f"{m.pid} ran {units} units with only {m.remaining_time} remaining")
        m.remaining_time -= units
        if m.remaining_time == 0:
            self._complete(m, now)
            return True
        return False

    def _complete(self, m: ProcessMetrics, now: int) -> None:
        m.completion_time = now
        m.turnaround_time = now - m.arrival_time
        m.waiting_time = m.turnaround_time - m.burst_time
        if m.waiting_time < 0:
            raise InvariantViolation(f"{m.pid} completed at {now} before arrival + burst")
        self._completed += 1

    def all_done(self) -> bool:
        return self._completed == len(self._items)

    def time_ceiling(self) -> int:
        """Latest tick by which a work-conserving run must have finished."""
        if not self._items:
            return 0
        return max(m.arrival_time for m in self._items) + sum(m.burst_time for m in self._items)

    def snapshot(self) -> List[ProcessMetrics]:
        """Detached copies, so nothing the caller holds aliases run state."""
        return [replace(m) for m in self._items]


def validate_processes(processes: Iterable[Process]) -> List[Process]:
    """Reject malformed process sets. Returns the processes as a list."""
    procs = list(processes)
    seen = set()
    for p in procs:
        if not isinstance(p, Process):
            raise ContractViolation(f"expected Process, got {type(p).__name__}")
        if not isinstance(p.pid, str) or not p.pid:
            raise ContractViolation(f"process id must be a non-empty string, got {p.pid!r}")
        if p.pid == IDLE_PID:
            raise ContractViolation(f"process id {IDLE_PID!r} is reserved for idle time")
        if p.pid in seen:
            raise ContractViolation(f"duplicate process id {p.pid!r}")
        seen.add(p.pid)
        if not _is_int(p.burst_time) or p.burst_time < 1:
            raise ContractViolation(f"{p.pid}: burst time must be an integer >= 1, got {p.burst_time!r}")
        if not _is_int(p.arrival_time) or p.arrival_time < 0:
            raise ContractViolation(f"{p.pid}: arrival time must be an integer >= 0, got {p.arrival_time!r}")
        if not _is_int(p.priority):
            raise ContractViolation(f"{p.pid}: priority must be an integer, got {p.priority!r}")
    return procs


def validate_quantum(time_quantum) -> int:
    if not _is_int(time_quantum) or time_quantum < 1:
        raise ContractViolation(f"time quantum must be an integer >= 1, got {time_quantum!r}")
    return time_quantum


@dataclass
class SimulationResult:
    policy: Policy
    timeline: Timeline
    metrics: List[ProcessMetrics]
    avg_waiting_time: float
    avg_turnaround_time: float
    avg_response_time: float = 0.0
    total_time: int = 0
    cpu_utilization: float = 0.0
    throughput: float = 0.0
    context_switches: int = 0
    time_quantum: Optional[int] = None
    logger: EventLogger = field(default_factory=EventLogger, compare=False, repr=False)

    def metrics_for(self, pid: str) -> ProcessMetrics:
        for m in self.metrics:
            if m.pid == pid:
                return m
        raise KeyError(pid)
