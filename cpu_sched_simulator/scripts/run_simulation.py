from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Ensure repo root is on sys.path so this script can be executed directly
repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from colorama import Fore, init as colorama_init

from cpu_sched_simulator.backend.compare import comparison_frame
from cpu_sched_simulator.backend.core import Policy, SchedulingError
from cpu_sched_simulator.backend.engine import SchedulingEngine, SimulationConfig, load_config
from cpu_sched_simulator.backend.steps import project_result
from cpu_sched_simulator.backend.visualizer import plot_comparison, plot_gantt
from cpu_sched_simulator.backend.workload import load_processes


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="CPU Scheduling Simulator")
    p.add_argument("--policy", choices=[pol.value for pol in Policy], default=None)
    p.add_argument("--quantum", type=int, default=None, help="Time quantum for Round Robin (default 2)")
    p.add_argument("--n", type=int, default=None, help="Number of random processes (default 3-6)")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--input", type=str, default=None, help="Process set as .csv or .json")
    p.add_argument("--config", type=str, default=None, help="JSON config with policy/time_quantum/palette")
    p.add_argument("--steps", action="store_true", help="Print one line per tick")
    p.add_argument("--compare", action="store_true", help="Run all six policies")
    p.add_argument("--out", type=str, default=None, help="Save the chart to this path")
    p.add_argument("--log-json", type=str, default=None, help="Write the event log as JSON")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> SimulationConfig:
    config = load_config(args.config) if args.config else SimulationConfig()
    policy = args.policy if args.policy is not None else config.policy
    quantum = args.quantum if args.quantum is not None else config.time_quantum
    return SimulationConfig(policy, quantum, config.palette)


def main(argv: Optional[List[str]] = None) -> int:
    colorama_init(autoreset=True)
    args = parse_args(argv)
    try:
        engine = SchedulingEngine(build_config(args))
        procs = load_processes(args.input) if args.input else engine.random_workload(args.n, args.seed)

        if args.compare:
            frame = comparison_frame(engine.compare(procs))
            print(frame.to_string(index=False))
            if args.out:
                plot_comparison(frame, args.out)
                print(Fore.CYAN + f"Saved plot to {args.out}")
            return 0

        result = engine.run(procs)
    except (SchedulingError, OSError) as e:
        print(Fore.RED + f"Error: {e}", file=sys.stderr)
        return 1

    for b in result.timeline:
        print(f"[{b.start_time:3d} - {b.end_time:3d}] {b.name}")
    for m in result.metrics:
        print(f"{m.pid}: arrival={m.arrival_time}, burst={m.burst_time}, priority={m.priority}, "
              f"completion={m.completion_time}, turnaround={m.turnaround_time}, waiting={m.waiting_time}")
    print(f"Avg waiting: {result.avg_waiting_time:.3f}, Avg turnaround: {result.avg_turnaround_time:.3f}, "
          f"Throughput: {result.throughput:.3f}")

    if args.steps:
        for step in project_result(result):
            running = step.running_process or "idle"
            print(f"t={step.current_time:3d}  running={running:<8} ready={step.ready_queue}")
    if args.log_json:
        result.logger.export_json(args.log_json)
        print(f"Event log written to {args.log_json}")
    if args.out:
        plot_gantt(result, args.out)
        print(f"Saved plot to {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
