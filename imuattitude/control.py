"""Control worker: drives the state machine and turns sensor data into attitude."""

from __future__ import annotations

import math
import sys
import threading
import time
from typing import Optional, TextIO

from .madgwick import Madgwick
from .state import ERROR_WAIT_FRAMES, SharedState, SystemState, elapsed_ms

_POLL_S = 0.001


def _wrap(angle: float) -> float:
    return angle - 360.0 if angle >= 360.0 else angle


class Controller:
    """Runs the orientation filter and advances the system through its phases."""

    def __init__(self, state: SharedState, out: Optional[TextIO] = None, ahrs: Optional[Madgwick] = None):
        self.state = state
        self.filter = ahrs if ahrs is not None else Madgwick()
        self._out = out
        self.wait_count = 0
        state.system_state = SystemState.READY
        state.init_done = False

    def _print(self, text: str) -> None:
        print(text, end="\r\n", file=self._out if self._out is not None else sys.stdout)

    def execute_filter(self) -> None:
        """Feed the latest scaled gyro and accelerometer values to the filter."""
        st = self.state
        self.filter.update_imu(st.s_gyro_x, st.s_gyro_y, st.s_gyro_z, st.s_acc_x, st.s_acc_y, st.s_acc_z)

    def calculate_angles(self) -> None:
        """Convert the filter quaternion into roll, pitch and yaw in degrees."""
        st = self.state
        q0, q1, q2, q3 = self.filter.quaternion
        roll = math.atan2((q0 * q1 + q2 * q3) * 2.0, 1 - 2.0 * (q1 * q1 + q2 * q2))
        pitch = math.asin(max(-1.0, min(1.0, (q0 * q2 - q3 * q1) * 2.0)))
        yaw = math.atan2((q0 * q3 + q1 * q2) * 2.0, 1 - 2.0 * (q2 * q2 + q3 * q3))
        st.roll = _wrap(st.roll_offset + math.degrees(roll))
        st.pitch = _wrap(st.pitch_offset + math.degrees(pitch))
        st.yaw = _wrap(st.yaw_offset + math.degrees(yaw))

    def process_frame(self) -> None:
        """Report the current attitude, then update it from new readings."""
        st = self.state
        self._print(f"AHRS: M:{int(st.system_state)} P:{st.pitch:03f}\t R:{st.roll:03f}\t Y:{st.yaw:03f}")
        self.execute_filter()
        self.calculate_angles()

    def step(self) -> None:
        """Do this frame's control work and state transitions."""
        start = time.monotonic()
        st = self.state
        phase = st.system_state
        if phase == SystemState.READY:
            pass
        elif phase == SystemState.ERROR:
            self.wait_count = 0
            st.system_state = SystemState.WAIT
        elif phase == SystemState.RUN:
            self.process_frame()
        elif phase == SystemState.CALIB:
            self.process_frame()
            if st.calib_done:
                st.system_state = SystemState.ORIENT
                st.orient_done = False
        elif phase == SystemState.ORIENT:
            self.process_frame()
            if st.orient_done:
                st.system_state = SystemState.RUN
        elif phase == SystemState.INIT:
            if st.init_done:
                st.system_state = SystemState.CALIB
        elif phase == SystemState.WAIT:
            self.wait_count += 1
            if self.wait_count > ERROR_WAIT_FRAMES:
                st.system_state = SystemState.READY
        else:
            st.system_state = SystemState.ERROR
        st.control_frame_time_ms = elapsed_ms(start, time.monotonic())

    def run(self, stop: threading.Event) -> None:
        """Step once per new frame until ``stop`` is set."""
        last = 0
        while not stop.is_set():
            frame = self.state.frame_counter
            if frame == last:
                stop.wait(_POLL_S)
                continue
            last = frame
            self.step()