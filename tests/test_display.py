import threading

from imuattitude.display import Display
from imuattitude.registers import S0018
from imuattitude.state import SharedState, SystemState


class FakeBus:
    def __init__(self):
        self.writes = []

    def read_register(self, addr, reg):
        return 0

    def write_register(self, addr, reg, val):
        self.writes.append((addr, reg, val))
        return True


def test_init_sends_power_up_sequence():
    bus = FakeBus()
    display = Display(SharedState(system_state=SystemState.INIT), bus)
    display.step()
    assert bus.writes == [
        (S0018.ADDR, S0018.COMMAND, S0018.ENTIRE_ON),
        (S0018.ADDR, S0018.COMMAND, S0018.NORMAL),
        (S0018.ADDR, S0018.COMMAND, S0018.DISP_ON),
    ]


def test_run_captures_attitude():
    state = SharedState(system_state=SystemState.RUN, pitch=1.0, roll=2.0, yaw=3.0)
    bus = FakeBus()
    display = Display(state, bus)
    display.step()
    assert display.frame == (1.0, 2.0, 3.0)
    assert bus.writes == []


def test_other_states_do_nothing():
    bus = FakeBus()
    display = Display(SharedState(system_state=SystemState.READY), bus)
    display.step()
    assert bus.writes == []
    assert display.frame is None


def test_run_stops_on_event():
    state = SharedState(system_state=SystemState.INIT, frame_counter=1)
    bus = FakeBus()
    display = Display(state, bus)
    stop = threading.Event()
    thread = threading.Thread(target=display.run, args=(stop,))
    thread.start()
    for _ in range(200):
        if bus.writes:
            break
        stop.wait(0.005)
    stop.set()
    thread.join(timeout=2)
    assert not thread.is_alive()
    assert len(bus.writes) == 3