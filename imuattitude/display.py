"""Display worker: brings up the OLED panel and tracks the attitude to show."""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from .i2c import I2CError
from .registers import S0018
from .state import SharedState, SystemState, elapsed_ms

log = logging.getLogger(__name__)

_POLL_S = 0.001


class Display:
    """Drives the S0018 display from the shared state."""

    def __init__(self, state: SharedState, bus):
        self.state = state
        self.bus = bus
        self.frame: Optional[tuple[float, float, float]] = None

    def init_display(self) -> None:
        """Send the power-up command sequence to the panel."""
        for command in (S0018.ENTIRE_ON, S0018.NORMAL, S0018.DISP_ON):
            self.bus.write_register(S0018.ADDR, S0018.COMMAND, command)

    def process(self) -> tuple[float, float, float]:
        """Capture the current pitch, roll and yaw as the frame to show."""
        st = self.state
        self.frame = (st.pitch, st.roll, st.yaw)
        return self.frame

    def step(self) -> None:
        """Do this frame's display work for the current system state."""
        start = time.monotonic()
        phase = self.state.system_state
        if phase == SystemState.INIT:
            self.init_display()
        elif phase == SystemState.RUN:
            self.process()
        self.state.display_frame_time_ms = elapsed_ms(start, time.monotonic())

    def run(self, stop: threading.Event) -> None:
        """Step once per new frame until ``stop`` is set."""
        last = 0
        while not stop.is_set():
            frame = self.state.frame_counter
            if frame == last:
                stop.wait(_POLL_S)
                continue
            last = frame
            try:
                self.step()
            except I2CError as exc:
                log.error("display frame failed: %s", exc)