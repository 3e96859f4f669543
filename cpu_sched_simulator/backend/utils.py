from __future__ import annotations

from typing import List, Dict, Optional, Any
import json
import csv


class EventLogger:
    def __init__(self) -> None:
        self.process_events: List[Dict[str, Any]] = []
        self.timeline: List[Dict[str, Any]] = []

    def log_process_event(self, time_s: int, pid: str, event: str) -> None:
        self.process_events.append({
            "time": time_s,
            "pid": pid,
            "event": event,
        })

    def log_timeline_slice(self, start: int, end: int, pid: Optional[str], policy: str) -> None:
        self.timeline.append({
            "start": start,
            "end": end,
            "pid": pid,
            "policy": policy,
        })

    def events_for(self, pid: str) -> List[Dict[str, Any]]:
        return [e for e in self.process_events if e["pid"] == pid]

    def export_json(self, path: str) -> None:
        data = {
            "process_events": self.process_events,
            "timeline": self.timeline,
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def export_csv(self, base_path_no_ext: str) -> None:
        with open(f"{base_path_no_ext}_events.csv", "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["time", "pid", "event"])
            writer.writeheader()
            for row in self.process_events:
                writer.writerow(row)
        with open(f"{base_path_no_ext}_timeline.csv", "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["start", "end", "pid", "policy"])
            writer.writeheader()
            for row in self.timeline:
                writer.writerow(row)


def compute_avg(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_throughput(completed: int, total_time: float) -> float:
    if total_time <= 0:
        return 0.0
    return completed / total_time


def compute_utilization(busy_time: float, total_time: float) -> float:
    if total_time <= 0:
        return 0.0
    return busy_time / total_time * 100
