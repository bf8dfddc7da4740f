"""Frame timer: paces the system by advancing the shared frame counter."""

from __future__ import annotations

import sys
import threading
import time
from typing import Callable, Optional, TextIO

from .state import MASTER_IT_RATE_HZ, SharedState, elapsed_ms

_REPORT_EVERY = 100


class FrameTimer:
    """Advances the frame counter at a fixed rate and reports worker timings."""

    def __init__(
        self,
        state: SharedState,
        interval: float = 1.0 / MASTER_IT_RATE_HZ,
        out: Optional[TextIO] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        max_frames: Optional[int] = None,
    ):
        self.state = state
        self.interval = interval
        self.max_frames = max_frames
        self.frame_time_ms = 0.0
        self._out = out
        self._sleep = sleep
        self._clock = clock

    def tick(self) -> int:
        """Run one frame period and return the new frame counter."""
        st = self.state
        start = self._clock()
        if st.frame_counter % _REPORT_EVERY == 0:
            print(
                f"C:{st.control_frame_time_ms:0.3f}ms S:{st.sensor_frame_time_ms:0.3f}ms "
                f"D:{st.display_frame_time_ms:0.3f}ms F: {self.frame_time_ms:0.3f}ms",
                file=self._out if self._out is not None else sys.stdout,
            )
        frame = st.advance_frame()
        self._sleep(self.interval)
        self.frame_time_ms = elapsed_ms(start, self._clock())
        return frame

    def run(self, stop: threading.Event) -> None:
        """Tick until ``stop`` is set, or set it after ``max_frames`` ticks."""
        ticks = 0
        while not stop.is_set():
            if self.max_frames is not None and ticks >= self.max_frames:
                stop.set()
                break
            self.tick()
            ticks += 1