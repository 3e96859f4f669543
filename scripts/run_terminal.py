#!/usr/bin/env python3
"""
Launch the interactive process-table terminal.
"""

import argparse
import os
import shlex
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(SCRIPT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from cpu_sched_simulator.backend.engine import SimulationConfig, load_config
from cpu_sched_simulator.backend.manual_terminal import ManualTerminal


def main():
    parser = argparse.ArgumentParser(description="CPU scheduling terminal")
    parser.add_argument("--config", type=str, default=None, help="JSON config with policy/time_quantum/palette")
    parser.add_argument("--load", type=str, default=None, help="Process set to load on start")
    args = parser.parse_args()

    config = load_config(args.config) if args.config else SimulationConfig()
    terminal = ManualTerminal(config)
    if args.load:
        terminal.handle_command(f"load {shlex.quote(args.load)}")
    terminal.prompt()


if __name__ == "__main__":
    main()
