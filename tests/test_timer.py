import io
import threading

import pytest

from imuattitude.state import FRAME_COUNTER_LIMIT, SharedState
from imuattitude.timer import FrameTimer


def no_sleep(_seconds):
    return None


def test_tick_advances_and_wraps():
    state = SharedState()
    timer = FrameTimer(state, out=io.StringIO(), sleep=no_sleep)
    assert timer.tick() == 1
    state.frame_counter = FRAME_COUNTER_LIMIT
    assert timer.tick() == 0
    assert state.frame_counter == 0


def test_tick_sleeps_for_interval():
    slept = []
    timer = FrameTimer(SharedState(), interval=0.25, out=io.StringIO(), sleep=slept.append)
    timer.tick()
    assert slept == [0.25]


def test_report_only_on_hundredth_frames():
    out = io.StringIO()
    state = SharedState()
    timer = FrameTimer(state, out=out, sleep=no_sleep)
    timer.tick()
    first = out.getvalue()
    assert first.startswith("C:0.000ms S:0.000ms D:0.000ms F: ")
    timer.tick()
    assert out.getvalue() == first


def test_frame_time_measured_and_reported():
    times = iter([0.0, 0.05, 1.0, 1.05])
    out = io.StringIO()
    state = SharedState()
    timer = FrameTimer(state, out=out, sleep=no_sleep, clock=lambda: next(times))
    timer.tick()
    assert timer.frame_time_ms == pytest.approx(50.0)
    state.frame_counter = 100
    timer.tick()
    assert out.getvalue().splitlines()[-1].endswith("F: 50.000ms")


def test_run_stops_after_max_frames():
    state = SharedState()
    stop = threading.Event()
    timer = FrameTimer(state, out=io.StringIO(), sleep=no_sleep, max_frames=3)
    timer.run(stop)
    assert stop.is_set()
    assert state.frame_counter == 3