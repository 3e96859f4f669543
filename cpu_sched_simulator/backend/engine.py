from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from .compare import compare_policies
from .core import DEFAULT_TIME_QUANTUM, ContractViolation, Policy, Process, SimulationResult, validate_quantum
from .simulator import simulate
from .steps import StepSequence, project_result
from .workload import DEFAULT_PALETTE, generate_workload


@dataclass
class SimulationConfig:
    policy: Policy = Policy.RR
    time_quantum: int = DEFAULT_TIME_QUANTUM
    palette: Tuple[str, ...] = DEFAULT_PALETTE

    def __post_init__(self) -> None:
        self.policy = Policy.parse(self.policy)
        validate_quantum(self.time_quantum)
        self.palette = tuple(self.palette)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ContractViolation(f"unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "policy": self.policy.value,
            "time_quantum": self.time_quantum,
            "palette": list(self.palette),
        }


def load_config(path: str) -> SimulationConfig:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ContractViolation(f"config file {path} must contain a JSON object")
    return SimulationConfig.from_dict(data)


class SchedulingEngine:
    """Runs simulations with a fixed configuration.

    Thin wrapper over `simulate` so callers (terminal, CLI) can carry policy,
    quantum and palette around as one object.
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()

    def run(self, processes: Iterable[Process], policy=None) -> SimulationResult:
        return simulate(processes, policy or self.config.policy, self.config.time_quantum)

    def steps(self, processes: Iterable[Process], policy=None) -> StepSequence:
        return project_result(self.run(processes, policy))

    def compare(self, processes: Iterable[Process]) -> Dict[Policy, SimulationResult]:
        return compare_policies(processes, self.config.time_quantum)

    def random_workload(self, n: Optional[int] = None, seed: Optional[int] = None) -> Sequence[Process]:
        return generate_workload(n, seed, palette=self.config.palette)
