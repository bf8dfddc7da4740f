import pytest

from imuattitude.registers import HMC5883L, MPU6500, S0018, combine_word


def test_combine_word_positive():
    assert combine_word(0x12, 0x34) == 0x1234


def test_combine_word_all_ones_is_minus_one():
    assert combine_word(0xFF, 0xFF) == -1


def test_combine_word_sign_bit_only_is_most_negative():
    assert combine_word(0x80, 0x00) == -32768


@pytest.mark.parametrize("msb", [0x00, 0x01, 0x7F, 0x80, 0xFE, 0xFF])
@pytest.mark.parametrize("lsb", [0x00, 0x01, 0x7F, 0x80, 0xFF])
def test_combine_word_round_trips_through_bytes(msb, lsb):
    value = combine_word(msb, lsb)
    assert -32768 <= value <= 32767
    assert value.to_bytes(2, "big", signed=True) == bytes((msb, lsb))


@pytest.mark.parametrize("msb,lsb", [(256, 0), (0, 256), (-1, 0), (0, -1)])
def test_combine_word_rejects_non_bytes(msb, lsb):
    with pytest.raises(ValueError):
        combine_word(msb, lsb)


@pytest.mark.parametrize(
    "high,low,expected",
    [
        (MPU6500.ACCEL_XOUT_H, MPU6500.ACCEL_XOUT_L, 0x3B3C),
        (MPU6500.ACCEL_YOUT_H, MPU6500.ACCEL_YOUT_L, 0x3D3E),
        (MPU6500.ACCEL_ZOUT_H, MPU6500.ACCEL_ZOUT_L, 0x3F40),
        (MPU6500.GYRO_X_OUT_H, MPU6500.GYRO_X_OUT_L, 0x4344),
        (MPU6500.GYRO_Y_OUT_H, MPU6500.GYRO_Y_OUT_L, 0x4546),
        (MPU6500.GYRO_Z_OUT_H, MPU6500.GYRO_Z_OUT_L, 0x4748),
        (HMC5883L.REG_X_MSB, HMC5883L.REG_X_LSB, 0x0304),
        (HMC5883L.REG_Y_MSB, HMC5883L.REG_Y_LSB, 0x0708),
        (HMC5883L.REG_Z_MSB, HMC5883L.REG_Z_LSB, 0x0506),
    ],
)
def test_combine_word_of_register_pairs(high, low, expected):
    assert combine_word(high, low) == expected


def test_combine_word_of_compass_and_display_addresses():
    assert combine_word(HMC5883L.ADDR, S0018.ADDR) == 0x3C3C