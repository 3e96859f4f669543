"""
Process set helpers: display palette, random workloads and CSV/JSON files.
"""

from __future__ import annotations

import csv
import json
import os
import random
from typing import Any, Dict, List, Optional, Sequence

from .core import ContractViolation, Process, validate_processes

DEFAULT_PALETTE = (
    "#00ffff",  # cyan
    "#ff33cc",  # magenta
    "#ffbf00",  # yellow
    "#00e600",  # green
    "#ff8c1a",  # orange
    "#33adff",  # light blue
    "#b34dff",  # purple
    "#ff3333",  # red
)

FIELDS = ["pid", "name", "arrival_time", "burst_time", "priority", "color"]


def palette_color(index: int, palette: Sequence[str] = DEFAULT_PALETTE) -> Optional[str]:
    if not palette:
        return None
    return palette[index % len(palette)]


def generate_workload(n: Optional[int] = None, seed: Optional[int] = None,
                      palette: Sequence[str] = DEFAULT_PALETTE) -> List[Process]:
    """Random process set: 3-6 processes unless `n` is given.

    Arrivals fall in 0-7, bursts in 1-8 and priorities in 1-5.
    """
    rng = random.Random(seed)
    count = n if n is not None else rng.randint(3, 6)
    procs: List[Process] = []
    for i in range(count):
        procs.append(Process(
            pid=f"P{i + 1}",
            burst_time=rng.randint(1, 8),
            priority=rng.randint(1, 5),
            arrival_time=rng.randint(0, 7),
            color=palette_color(i, palette),
        ))
    return procs


def new_process(existing: Sequence[Process], palette: Sequence[str] = DEFAULT_PALETTE) -> Process:
    """Default process appended by the process table: next free P<k>, burst 1, priority 1."""
    taken = {p.pid for p in existing}
    k = len(existing) + 1
    while f"P{k}" in taken:
        k += 1
    return Process(pid=f"P{k}", burst_time=1, priority=1, arrival_time=0,
                   color=palette_color(len(existing), palette))


def _int_field(row: Dict[str, Any], key: str, default: Optional[int] = None) -> int:
    # JSON gives ints, CSV gives strings; floats and bools are never coerced
    value = row.get(key)
    if value is None or value == "":
        if default is None:
            raise KeyError(key)
        return default
    if isinstance(value, str):
        text = value.strip()
        digits = text[1:] if text.startswith("-") else text
        if digits.isascii() and digits.isdigit():
            return int(text)
    elif isinstance(value, int) and not isinstance(value, bool):
        return value
    raise ContractViolation(f"{key} must be an integer, got {value!r}")


def _process_from_row(row: Dict[str, Any]) -> Process:
    if not isinstance(row, dict):
        raise ContractViolation(f"process record must be an object, got {row!r}")
    try:
        return Process(
            pid=str(row["pid"]),
            name=row.get("name") or None,
            arrival_time=_int_field(row, "arrival_time", 0),
            burst_time=_int_field(row, "burst_time"),
            priority=_int_field(row, "priority", 0),
            color=row.get("color") or None,
        )
    except KeyError as e:
        raise ContractViolation(f"process record is missing {e.args[0]!r}") from None


def _process_to_row(p: Process) -> Dict[str, Any]:
    return {
        "pid": p.pid,
        "name": p.name,
        "arrival_time": p.arrival_time,
        "burst_time": p.burst_time,
        "priority": p.priority,
        "color": p.color or "",
    }


def load_processes(path: str) -> List[Process]:
    """Read a process set from a .csv or .json file."""
    ext = os.path.splitext(path)[1].lower()
    with open(path, "r", newline="", encoding="utf-8") as f:
        if ext == ".json":
            data = json.load(f)
            rows = data.get("processes") if isinstance(data, dict) else data
            if not isinstance(rows, list):
                raise ContractViolation(f"{path} must hold a list of processes or an object with a \"processes\" list")
        elif ext == ".csv":
            rows = list(csv.DictReader(f))
        else:
            raise ContractViolation(f"unsupported process file type: {path}")
    return validate_processes(_process_from_row(r) for r in rows)


def save_processes(processes: Sequence[Process], path: str) -> None:
    ext = os.path.splitext(path)[1].lower()
    rows = [_process_to_row(p) for p in processes]
    if ext == ".json":
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"processes": rows}, f, indent=2)
    elif ext == ".csv":
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDS)
            writer.writeheader()
            for row in rows:
                writer.writerow(row)
    else:
        raise ContractViolation(f"unsupported process file type: {path}")
