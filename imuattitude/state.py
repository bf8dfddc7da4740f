"""State shared between the timer, sensor, control and display workers."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import IntEnum

MASTER_IT_RATE_HZ = 20
CALIBRATE_FRAMES = 500
ORIENTATE_FRAMES = 200
ERROR_WAIT_FRAMES = 20
FRAME_COUNTER_LIMIT = 10000


class SystemState(IntEnum):
    """Phases of the attitude system's state machine."""

    STOP = 0
    READY = 1
    INIT = 2
    CALIB = 3
    ORIENT = 4
    RUN = 5
    ERROR = 6
    WAIT = 7


@dataclass
class SharedState:
    """Raw readings, scaled values, attitude and timings shared by all workers."""

    system_state: SystemState = SystemState.STOP
    frame_counter: int = 0
    init_done: bool = False
    calib_done: bool = False
    orient_done: bool = False

    comp_x: int = 0
    comp_y: int = 0
    comp_z: int = 0

    acc_x: int = 0
    acc_y: int = 0
    acc_z: int = 0

    gyro_x: int = 0
    gyro_y: int = 0
    gyro_z: int = 0

    offs_x: int = 0
    offs_y: int = 0
    offs_z: int = 0

    s_comp_x: float = 0.0
    s_comp_y: float = 0.0
    s_comp_z: float = 0.0

    s_acc_x: float = 0.0
    s_acc_y: float = 0.0
    s_acc_z: float = 0.0

    s_gyro_x: float = 0.0
    s_gyro_y: float = 0.0
    s_gyro_z: float = 0.0

    pitch: float = 0.0
    roll: float = 0.0
    yaw: float = 0.0

    pitch_offset: float = 0.0
    roll_offset: float = 0.0
    yaw_offset: float = 0.0

    sensor_frame_time_ms: float = 0.0
    control_frame_time_ms: float = 0.0
    display_frame_time_ms: float = 0.0

    bus_lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)
    _frame_lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def advance_frame(self) -> int:
        """Step the frame counter, wrapping to zero once it passes the limit."""
        with self._frame_lock:
            self.frame_counter += 1
            if self.frame_counter > FRAME_COUNTER_LIMIT:
                self.frame_counter = 0
            return self.frame_counter


def elapsed_ms(start: float, end: float) -> float:
    """Milliseconds between two monotonic clock readings given in seconds."""
    return (end - start) * 1e3