from imuattitude.app import build_workers, main
from imuattitude.control import Controller
from imuattitude.display import Display
from imuattitude.sensors import SensorUnit
from imuattitude.state import SharedState, SystemState
from imuattitude.timer import FrameTimer


class FakeBus:
    def read_register(self, addr, reg):
        return 0

    def write_register(self, addr, reg, val):
        return True


def test_build_workers_order_and_shared_state():
    state = SharedState()
    workers = build_workers(state, FakeBus())
    assert [type(w) for w in workers] == [FrameTimer, SensorUnit, Controller, Display]
    assert all(w.state is state for w in workers)
    assert state.system_state == SystemState.READY


def test_main_runs_for_limited_frames(tmp_path, capsys):
    code = main(["--device", str(tmp_path / "missing"), "--frames", "3"])
    assert code == 0
    assert "All threads completed." in capsys.readouterr().out