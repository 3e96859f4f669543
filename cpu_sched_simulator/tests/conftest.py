import os
import sys

import pytest

# headless plotting for visualizer tests
os.environ.setdefault("MPLBACKEND", "Agg")

from cpu_sched_simulator.backend.core import Process


def pytest_sessionstart(session):
    # Ensure repo root is on sys.path so 'cpu_sched_simulator' can be imported
    here = os.path.dirname(os.path.abspath(__file__))
    repo_root = os.path.abspath(os.path.join(here, os.pardir, os.pardir))
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


@pytest.fixture
def sample_processes():
    """The textbook four-process workload."""
    return [
        Process(pid="P1", arrival_time=0, burst_time=5, priority=2, color="#00ffff"),
        Process(pid="P2", arrival_time=1, burst_time=3, priority=1, color="#ff33cc"),
        Process(pid="P3", arrival_time=2, burst_time=8, priority=4, color="#ffbf00"),
        Process(pid="P4", arrival_time=3, burst_time=2, priority=3, color="#00e600"),
    ]


@pytest.fixture
def gapped_processes():
    """Two processes with idle gaps before and between them."""
    return [
        Process(pid="A", arrival_time=2, burst_time=2),
        Process(pid="B", arrival_time=7, burst_time=1),
    ]
