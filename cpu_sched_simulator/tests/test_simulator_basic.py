import pytest

from cpu_sched_simulator.backend.core import ContractViolation, Policy, Process
from cpu_sched_simulator.backend.simulator import simulate
from cpu_sched_simulator.backend.workload import generate_workload

NON_PREEMPTIVE = [Policy.FCFS, Policy.SJF, Policy.PRIORITY_NP]


def workloads():
    return [generate_workload(seed=seed) for seed in range(25)] + [
        generate_workload(n=12, seed=100 + seed) for seed in range(5)
    ]


@pytest.mark.parametrize("policy", list(Policy))
@pytest.mark.parametrize("quantum", [1, 2, 3])
def test_invariants_hold_for_random_workloads(policy, quantum):
    for procs in workloads():
        result = simulate(procs, policy, time_quantum=quantum)

        # contiguous from 0, sorted, non-overlapping
        cursor = 0
        for block in result.timeline:
            assert block.start_time == cursor
            assert block.end_time > block.start_time
            cursor = block.end_time

        busy = result.timeline.busy_time_by_process()
        for p, m in zip(procs, result.metrics):
            assert m.pid == p.pid
            assert busy[p.pid] == p.burst_time
            assert m.turnaround_time == m.completion_time - m.arrival_time
            assert m.waiting_time == m.turnaround_time - m.burst_time
            assert m.waiting_time >= 0
            assert m.remaining_time == 0

        # idle blocks are never adjacent to each other
        for prev, nxt in zip(result.timeline, list(result.timeline)[1:]):
            assert not (prev.is_idle and nxt.is_idle)

        if policy in NON_PREEMPTIVE:
            bursts = {p.pid: p.burst_time for p in procs}
            assert all(b.duration == bursts[b.pid] for b in result.timeline if not b.is_idle)
        if policy is Policy.RR:
            assert all(b.duration <= quantum for b in result.timeline if not b.is_idle)


def test_preemptive_policies_beat_fcfs_waiting(sample_processes):
    fcfs = simulate(sample_processes, Policy.FCFS)
    assert simulate(sample_processes, Policy.SRTF).avg_waiting_time <= fcfs.avg_waiting_time
    assert simulate(sample_processes, Policy.PRIORITY_P).avg_waiting_time <= fcfs.avg_waiting_time


@pytest.mark.parametrize("policy", list(Policy))
def test_runs_are_deterministic(sample_processes, policy):
    assert simulate(sample_processes, policy) == simulate(sample_processes, policy)


def test_runs_do_not_share_metrics(sample_processes):
    first = simulate(sample_processes, Policy.SRTF)
    first.metrics[0].waiting_time = 999
    second = simulate(sample_processes, Policy.SRTF)
    assert second.metrics[0].waiting_time == 5
    assert sample_processes[0].burst_time == 5


@pytest.mark.parametrize("policy", list(Policy))
def test_empty_process_set(policy):
    result = simulate([], policy)
    assert len(result.timeline) == 0
    assert result.metrics == []
    assert result.avg_waiting_time == 0
    assert result.avg_turnaround_time == 0
    assert result.cpu_utilization == 0
    assert result.throughput == 0


def test_color_and_name_pass_through():
    procs = [Process("p1", burst_time=2, name="Editor", color="hsl(180, 100%, 50%)")]
    block = simulate(procs, "srtf").timeline[0]
    assert (block.pid, block.name, block.color) == ("p1", "Editor", "hsl(180, 100%, 50%)")


def test_summary_metrics(gapped_processes):
    result = simulate(gapped_processes, Policy.FCFS)
    assert result.total_time == 8
    assert result.cpu_utilization == pytest.approx(3 / 8 * 100)
    assert result.throughput == pytest.approx(2 / 8)
    assert result.avg_response_time == 0


def test_response_time_tracks_first_dispatch(sample_processes):
    result = simulate(sample_processes, Policy.RR, time_quantum=2)
    assert {m.pid: m.response_time for m in result.metrics} == {"P1": 0, "P2": 1, "P3": 2, "P4": 5}


@pytest.mark.parametrize("procs", [
    [Process("A", burst_time=0)],
    [Process("A", burst_time=-2)],
    [Process("A", burst_time=2.5)],
    [Process("A", burst_time=2, arrival_time=-1)],
    [Process("A", burst_time=2, priority=1.5)],
    [Process("A", burst_time=2), Process("A", burst_time=3)],
    [Process("", burst_time=2)],
    [Process("idle", burst_time=2), Process("P", burst_time=1, arrival_time=5)],
])
def test_contract_violations_rejected(procs):
    with pytest.raises(ContractViolation):
        simulate(procs, Policy.FCFS)


@pytest.mark.parametrize("quantum", [0, -1, 1.5, True])
def test_bad_quantum_rejected_for_round_robin(sample_processes, quantum):
    with pytest.raises(ContractViolation):
        simulate(sample_processes, Policy.RR, time_quantum=quantum)


def test_quantum_ignored_by_other_policies(sample_processes):
    assert simulate(sample_processes, Policy.FCFS, time_quantum=0).avg_waiting_time == pytest.approx(5.75)


@pytest.mark.parametrize("name,expected", [
    ("FCFS", Policy.FCFS),
    ("Round Robin", Policy.RR),
    ("priority_p", Policy.PRIORITY_P),
    ("PRIORITY", Policy.PRIORITY_NP),
    ("srtf", Policy.SRTF),
])
def test_policy_aliases(name, expected):
    assert Policy.parse(name) is expected


def test_unknown_policy_rejected(sample_processes):
    with pytest.raises(ContractViolation):
        simulate(sample_processes, "lottery")


def test_round_robin_idle_gaps_are_not_sliced(gapped_processes):
    result = simulate(gapped_processes, Policy.RR, time_quantum=1)
    idle = [(b.start_time, b.end_time) for b in result.timeline if b.is_idle]
    assert idle == [(0, 2), (4, 7)]
    assert all(b.duration == 1 for b in result.timeline if not b.is_idle)
