"""Command-line entry point that runs the timer, sensor, control and display workers."""

from __future__ import annotations

import argparse
import sys
import threading

from .control import Controller
from .display import Display
from .i2c import DEFAULT_DEVICE, I2CBus
from .sensors import SensorUnit
from .state import SharedState
from .timer import FrameTimer

_WORKER_NAMES = ("timer", "sensor", "control", "display")


def build_workers(state: SharedState, bus) -> list:
    """Create the timer, sensor, control and display workers in start order."""
    return [
        FrameTimer(state),
        SensorUnit(state, bus),
        Controller(state),
        Display(state, bus),
    ]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="imuattitude", description="Estimate attitude from I2C sensors.")
    parser.add_argument("--device", default=DEFAULT_DEVICE, help="I2C bus device")
    parser.add_argument("--frames", type=int, default=None, help="stop after this many frames")
    args = parser.parse_args(argv)

    state = SharedState()
    bus = I2CBus(args.device, lock=state.bus_lock)
    workers = build_workers(state, bus)
    workers[0].max_frames = args.frames

    stop = threading.Event()
    threads = []
    try:
        for name, worker in zip(_WORKER_NAMES, workers):
            thread = threading.Thread(target=worker.run, args=(stop,), name=f"{name}-worker", daemon=True)
            try:
                thread.start()
            except RuntimeError as exc:
                print(f"Failed to create {name} thread: {exc}", file=sys.stderr)
                stop.set()
                return 1
            threads.append(thread)
        try:
            for thread in threads:
                while thread.is_alive():
                    thread.join(0.1)
        except KeyboardInterrupt:
            stop.set()
            for thread in threads:
                thread.join()
    finally:
        stop.set()
        bus.close()

    print("All threads completed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())