"""
Execution timeline: ordered, contiguous blocks of CPU time including idle gaps.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

IDLE_PID = "idle"
IDLE_NAME = "Idle"
IDLE_COLOR = "transparent"


@dataclass(frozen=True)
class ExecutionBlock:
    pid: str
    name: str
    start_time: int
    end_time: int
    color: Optional[str] = None

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE_PID

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class Timeline:
    """Blocks in start order, pairwise non-overlapping and gap-free from 0."""
    blocks: List[ExecutionBlock] = field(default_factory=list)

    def __iter__(self) -> Iterator[ExecutionBlock]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def __getitem__(self, idx: int) -> ExecutionBlock:
        return self.blocks[idx]

    @property
    def end_time(self) -> int:
        return self.blocks[-1].end_time if self.blocks else 0

    def add_block(self, pid: str, name: str, start: int, end: int, color: Optional[str] = None) -> ExecutionBlock:
        if start >= end:
            raise ValueError(f"empty block for {pid}: [{start}, {end})")
        if start != self.end_time:
            raise ValueError(f"block for {pid} starts at {start}, timeline ends at {self.end_time}")
        block = ExecutionBlock(pid, name, start, end, color)
        self.blocks.append(block)
        return block

    def add_idle(self, start: int, end: int) -> ExecutionBlock:
        """Append idle time, merging into a trailing idle block."""
        if self.blocks and self.blocks[-1].is_idle and self.blocks[-1].end_time == start:
            last = self.blocks.pop()
            return self.add_block(IDLE_PID, IDLE_NAME, last.start_time, end, IDLE_COLOR)
        return self.add_block(IDLE_PID, IDLE_NAME, start, end, IDLE_COLOR)

    def block_at(self, t: int) -> Optional[ExecutionBlock]:
        """The block covering tick `t`, or None past the end."""
        if t < 0 or t >= self.end_time:
            return None
        idx = bisect_right([b.start_time for b in self.blocks], t) - 1
        return self.blocks[idx]

    def until(self, t: int) -> List[ExecutionBlock]:
        """Blocks that have started by tick `t`."""
        return [b for b in self.blocks if b.start_time <= t]

    def busy_time(self) -> int:
        return sum(b.duration for b in self.blocks if not b.is_idle)

    def idle_time(self) -> int:
        return sum(b.duration for b in self.blocks if b.is_idle)

    def busy_time_by_process(self) -> Dict[str, int]:
        totals: Dict[str, int] = {}
        for b in self.blocks:
            if not b.is_idle:
                totals[b.pid] = totals.get(b.pid, 0) + b.duration
        return totals

    def context_switches(self) -> int:
        """Changes of running process between consecutive non-idle blocks."""
        switches = 0
        previous: Optional[str] = None
        for b in self.blocks:
            if b.is_idle:
                continue
            if previous is not None and b.pid != previous:
                switches += 1
            previous = b.pid
        return switches
