"""
CPU scheduling simulator: six classical policies over a fixed process set.
"""

from .backend.core import (
    ContractViolation,
    InvariantViolation,
    Policy,
    Process,
    ProcessMetrics,
    SchedulingError,
    SimulationResult,
)
from .backend.simulator import project_steps, simulate
from .backend.steps import SimulationStep, project_result
from .backend.timeline import ExecutionBlock, Timeline
from .backend.algorithm_info import ALGORITHM_INFO

__all__ = [
    'ALGORITHM_INFO',
    'ContractViolation',
    'ExecutionBlock',
    'InvariantViolation',
    'Policy',
    'Process',
    'ProcessMetrics',
    'SchedulingError',
    'SimulationResult',
    'SimulationStep',
    'Timeline',
    'project_result',
    'project_steps',
    'simulate',
]
