import pytest

from cpu_sched_simulator.backend.core import Policy
from cpu_sched_simulator.backend.simulator import project_steps, simulate
from cpu_sched_simulator.backend.steps import project_result


def test_one_step_per_tick_inclusive(sample_processes):
    steps = project_steps(sample_processes, Policy.FCFS)
    assert len(steps) == 19
    assert [s.current_time for s in steps] == list(range(19))


def test_ready_queue_and_running(sample_processes):
    steps = project_steps(sample_processes, Policy.FCFS)

    assert steps[0].running_process == "P1"
    assert steps[0].ready_queue == []

    assert steps[3].running_process == "P1"
    assert steps[3].ready_queue == ["P2", "P3", "P4"]

    # P1 completed at 5, so it is no longer waiting
    assert steps[5].running_process == "P2"
    assert steps[5].ready_queue == ["P3", "P4"]

    assert steps[18].running_process is None
    assert steps[18].ready_queue == []


def test_timeline_truncated_to_started_blocks(sample_processes):
    steps = project_steps(sample_processes, Policy.FCFS)
    assert [b.name for b in steps[4].timeline] == ["P1"]
    assert [b.name for b in steps[5].timeline] == ["P1", "P2"]
    assert len(steps[18].timeline) == 4


def test_steps_carry_final_metrics(sample_processes):
    result = simulate(sample_processes, Policy.SRTF)
    steps = project_result(result)
    assert steps[0].metrics == result.metrics
    assert all(m.remaining_time == 0 for m in steps[0].metrics)


def test_idle_ticks_have_no_running_process(gapped_processes):
    steps = project_steps(gapped_processes, Policy.RR)
    assert [s.running_process for s in steps] == [None, None, "A", "A", None, None, None, "B", None]
    assert steps[1].ready_queue == []


@pytest.mark.parametrize("policy", list(Policy))
def test_running_matches_covering_block(sample_processes, policy):
    result = simulate(sample_processes, policy)
    steps = project_result(result)
    assert len(steps) == result.timeline.end_time + 1
    for step in steps:
        block = result.timeline.block_at(step.current_time)
        expected = None if block is None or block.is_idle else block.name
        assert step.running_process == expected
        assert expected not in step.ready_queue


def test_sequence_is_restartable_and_sliceable(sample_processes):
    steps = project_steps(sample_processes, Policy.SJF)
    assert list(steps) == list(steps)
    assert steps[-1].current_time == 18
    assert [s.current_time for s in steps[2:5]] == [2, 3, 4]
    with pytest.raises(IndexError):
        steps[19]


def test_empty_timeline_gives_no_steps():
    assert len(project_steps([], Policy.FCFS)) == 0
    assert list(project_steps([], Policy.RR)) == []
