import pytest

from imuattitude.i2c import I2C_SLAVE, I2CBus, I2CError


class RecordingIoctl:
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def __call__(self, fd, request, arg):
        if self.fail:
            raise OSError("no such device")
        self.calls.append((request, arg))


@pytest.fixture
def device(tmp_path):
    path = tmp_path / "i2c"
    path.write_bytes(b"")
    return path


def test_write_register_sends_register_then_value(device):
    ioctl = RecordingIoctl()
    with I2CBus(str(device), ioctl=ioctl) as bus:
        assert bus.write_register(0x3C, 0x80, 0xA6) is True
    assert device.read_bytes() == bytes([0x80, 0xA6])
    assert ioctl.calls == [(I2C_SLAVE, 0x3C)]


def test_read_register_returns_byte_after_pointer(device):
    device.write_bytes(bytes([0x00, 0x70]))
    ioctl = RecordingIoctl()
    with I2CBus(str(device), ioctl=ioctl) as bus:
        assert bus.read_register(0x68, 0x75) == 0x70
    assert device.read_bytes()[0] == 0x75
    assert ioctl.calls == [(I2C_SLAVE, 0x68)]


def test_read_register_without_data_raises(device):
    with I2CBus(str(device), ioctl=RecordingIoctl()) as bus:
        with pytest.raises(I2CError):
            bus.read_register(0x68, 0x75)


def test_failed_address_selection_raises(device):
    bus = I2CBus(str(device), ioctl=RecordingIoctl(fail=True))
    with pytest.raises(I2CError):
        bus.write_register(0x68, 0x6B, 0x00)
    bus.close()


def test_missing_device_raises(tmp_path):
    bus = I2CBus(str(tmp_path / "missing"), ioctl=RecordingIoctl())
    with pytest.raises(I2CError):
        bus.read_register(0x68, 0x75)
    assert bus.is_open is False


def test_out_of_range_value_rejected(device):
    with I2CBus(str(device), ioctl=RecordingIoctl()) as bus:
        with pytest.raises(ValueError):
            bus.write_register(0x68, 0x6B, 0x100)


def test_context_manager_closes(device):
    bus = I2CBus(str(device), ioctl=RecordingIoctl())
    with bus:
        assert bus.is_open is True
    assert bus.is_open is False