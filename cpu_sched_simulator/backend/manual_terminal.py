from __future__ import annotations

import shlex
from typing import List, Optional
from colorama import Fore, Style, init as colorama_init

from .algorithm_info import ALGORITHM_INFO, get_info
from .compare import comparison_frame
from .core import Policy, Process, SchedulingError, SimulationResult
from .engine import SchedulingEngine, SimulationConfig
from .steps import project_result
from .visualizer import plot_comparison, plot_gantt
from .workload import load_processes, new_process, palette_color, save_processes


class ManualTerminal:
    def __init__(self, config: Optional[SimulationConfig] = None) -> None:
        colorama_init(autoreset=True)
        self.engine = SchedulingEngine(config)
        self.processes: List[Process] = []
        self.last_result: Optional[SimulationResult] = None

    def prompt(self) -> None:
        print(Fore.CYAN + "CPU Scheduling Simulator. Type 'help' for commands.")
        while True:
            try:
                raw = input(Fore.GREEN + "> ")
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if not raw.strip():
                continue
            self.handle_command(raw)

    def handle_command(self, raw: str) -> None:
        try:
            parts = shlex.split(raw)
        except ValueError as e:
            print(Fore.RED + f"Parse error: {e}")
            return
        if not parts:
            return
        cmd, *args = parts
        cmd = cmd.lower()
        handlers = {
            "help": self._help,
            "add": self._add,
            "remove": self._remove,
            "random": self._random,
            "list": self._list,
            "run": self._run,
            "steps": self._steps,
            "compare": self._compare,
            "info": self._info,
            "load": self._load,
            "save": self._save,
            "export": self._export,
        }
        if cmd in ("exit", "quit"):
            raise SystemExit(0)
        handler = handlers.get(cmd)
        if handler is None:
            print(Fore.YELLOW + "Unknown command. Type 'help'.")
            return
        try:
            handler(args)
        except (SchedulingError, OSError) as e:
            print(Fore.RED + f"Error: {e}")

    def _help(self, args: List[str]) -> None:
        print("Commands:")
        print("  add <pid> <burst> <priority> [arrival=0]")
        print("  remove <pid>")
        print("  random [n]")
        print("  list")
        print("  run [--policy fcfs|sjf|srtf|rr|priority-np|priority-p] [--quantum Q] [--out path]")
        print("  steps")
        print("  compare [--out path]")
        print("  info [policy]")
        print("  load <path.csv|path.json>")
        print("  save <path.csv|path.json>")
        print("  export <path.json|base_path>")
        print("  exit")

    def _add(self, args: List[str]) -> None:
        if not args:
            # same defaults as a fresh table row
            proc = new_process(self.processes, self.engine.config.palette)
            self.processes.append(proc)
            print(Fore.CYAN + f"Process {proc.pid} added: burst=1, priority=1, arrival=0")
            return
        if len(args) < 3:
            print(Fore.RED + "Usage: add <pid> <burst> <priority> [arrival]")
            return
        pid = args[0]
        if any(p.pid == pid for p in self.processes):
            print(Fore.RED + f"Process {pid} already exists")
            return
        try:
            burst = int(args[1])
            priority = int(args[2])
            arrival = int(args[3]) if len(args) >= 4 else 0
        except ValueError:
            print(Fore.RED + "Invalid numeric values")
            return
        if burst < 1 or arrival < 0:
            print(Fore.RED + "Burst must be >= 1 and arrival >= 0")
            return
        color = palette_color(len(self.processes), self.engine.config.palette)
        self.processes.append(Process(pid=pid, burst_time=burst, priority=priority, arrival_time=arrival, color=color))
        print(Fore.CYAN + f"Process {pid} added: burst={burst}, priority={priority}, arrival={arrival}")

    def _remove(self, args: List[str]) -> None:
        if not args:
            print(Fore.RED + "Usage: remove <pid>")
            return
        before = len(self.processes)
        self.processes = [p for p in self.processes if p.pid != args[0]]
        if len(self.processes) == before:
            print(Fore.YELLOW + f"No process {args[0]}")
        else:
            print(Fore.CYAN + f"Process {args[0]} removed")

    def _random(self, args: List[str]) -> None:
        n: Optional[int] = None
        if args:
            try:
                n = int(args[0])
            except ValueError:
                print(Fore.RED + "Invalid count")
                return
        self.processes = list(self.engine.random_workload(n))
        print(Fore.CYAN + f"Generated {len(self.processes)} random processes")
        self._list([])

    def _list(self, args: List[str]) -> None:
        if not self.processes:
            print("No processes yet")
            return
        for p in self.processes:
            print(f"{p.pid}: burst={p.burst_time}, priority={p.priority}, arrival={p.arrival_time}")

    def _run(self, args: List[str]) -> None:
        policy = self.engine.config.policy
        quantum = self.engine.config.time_quantum
        out_path: Optional[str] = None
        # Parse simple flags
        it = iter(args)
        for token in it:
            if token == "--policy":
                policy = Policy.parse(next(it, policy))
            elif token == "--quantum":
                try:
                    quantum = int(next(it, None))
                except (TypeError, ValueError):
                    print(Fore.RED + "Invalid quantum")
                    return
            elif token == "--out":
                out_path = next(it, None)

        self.engine = SchedulingEngine(SimulationConfig(policy, quantum, self.engine.config.palette))
        result = self.engine.run(self.processes)
        self.last_result = result

        print(Style.BRIGHT + f"{ALGORITHM_INFO[result.policy].name}")
        for b in result.timeline:
            print(f"  [{b.start_time:3d} - {b.end_time:3d}] {b.name}")
        print(f"{'PID':<6}{'AT':>4}{'BT':>4}{'PR':>4}{'CT':>5}{'TAT':>5}{'WT':>5}")
        for m in result.metrics:
            print(f"{m.pid:<6}{m.arrival_time:>4}{m.burst_time:>4}{m.priority:>4}"
                  f"{m.completion_time:>5}{m.turnaround_time:>5}{m.waiting_time:>5}")
        print(Style.BRIGHT + f"Avg waiting: {result.avg_waiting_time:.2f}, Avg turnaround: {result.avg_turnaround_time:.2f}")
        if out_path:
            plot_gantt(result, out_path)
            print(Fore.CYAN + f"Saved plot to {out_path}")

    def _steps(self, args: List[str]) -> None:
        if not self.last_result:
            print("No simulation yet")
            return
        for step in project_result(self.last_result):
            running = step.running_process or "idle"
            queue = ", ".join(step.ready_queue) or "-"
            print(f"t={step.current_time:3d}  running={running:<8} ready=[{queue}]")

    def _compare(self, args: List[str]) -> None:
        if not self.processes:
            print("No processes yet")
            return
        frame = comparison_frame(self.engine.compare(self.processes))
        print(frame.to_string(index=False))
        if len(args) >= 2 and args[0] == "--out":
            plot_comparison(frame, args[1])
            print(Fore.CYAN + f"Saved plot to {args[1]}")

    def _info(self, args: List[str]) -> None:
        policies = [Policy.parse(args[0])] if args else list(Policy)
        for policy in policies:
            info = get_info(policy)
            print(Style.BRIGHT + info.name)
            print(f"  {info.description}")
            for a in info.advantages:
                print(Fore.GREEN + f"  + {a}")
            for d in info.disadvantages:
                print(Fore.RED + f"  - {d}")

    def _load(self, args: List[str]) -> None:
        if not args:
            print(Fore.RED + "Usage: load <path>")
            return
        self.processes = load_processes(args[0])
        print(Fore.CYAN + f"Loaded {len(self.processes)} processes from {args[0]}")

    def _save(self, args: List[str]) -> None:
        if not args:
            print(Fore.RED + "Usage: save <path.csv|path.json>")
            return
        save_processes(self.processes, args[0])
        print(Fore.CYAN + f"Processes written to {args[0]}")

    def _export(self, args: List[str]) -> None:
        if not args:
            print(Fore.RED + "Usage: export <path.json|base_path>")
            return
        if not self.last_result:
            print("No simulation yet")
            return
        path = args[0]
        if path.endswith(".json"):
            self.last_result.logger.export_json(path)
        else:
            self.last_result.logger.export_csv(path)
        print(Fore.CYAN + f"Event log written to {path}")


def main() -> None:
    ManualTerminal().prompt()


if __name__ == "__main__":
    main()
