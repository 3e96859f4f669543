import os

from cpu_sched_simulator.backend.compare import compare_policies, comparison_frame
from cpu_sched_simulator.backend.core import Policy
from cpu_sched_simulator.backend.simulator import simulate
from cpu_sched_simulator.backend.visualizer import plot_comparison, plot_gantt


def test_gantt_written_to_file(tmp_path, gapped_processes):
    out = tmp_path / "plots" / "gantt.png"
    plot_gantt(simulate(gapped_processes, Policy.RR), str(out))
    assert out.exists() and out.stat().st_size > 0


def test_gantt_for_empty_result(tmp_path):
    out = str(tmp_path / "empty.png")
    plot_gantt(simulate([], Policy.FCFS), out)
    assert os.path.exists(out)


def test_comparison_chart(tmp_path, sample_processes):
    out = tmp_path / "compare.png"
    plot_comparison(comparison_frame(compare_policies(sample_processes)), str(out))
    assert out.exists()
