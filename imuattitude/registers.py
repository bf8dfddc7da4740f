"""Register maps for the HMC5883L compass, MPU6500 IMU and S0018 OLED display."""

from __future__ import annotations


class HMC5883L:
    """Register map of the HMC5883L three-axis magnetometer."""

    ADDR = 0x1E << 1

    REG_CRA = 0x00
    REG_CRB = 0x01
    REG_MR = 0x02

    REG_X_MSB = 0x03
    REG_X_LSB = 0x04
    REG_Z_MSB = 0x05
    REG_Z_LSB = 0x06
    REG_Y_MSB = 0x07
    REG_Y_LSB = 0x08

    REG_SR = 0x09

    REG_IR_A = 0x0A
    REG_IR_B = 0x0B
    REG_IR_C = 0x0C

    CRA_MA_SAMPLES_1 = 0x00
    CRA_MA_SAMPLES_2 = 0x20
    CRA_MA_SAMPLES_4 = 0x40
    CRA_MA_SAMPLES_8 = 0x60

    CRA_DO_RATE_0_75 = 0x00
    CRA_DO_RATE_1_50 = 0x04
    CRA_DO_RATE_3_00 = 0x80
    CRA_DO_RATE_7_50 = 0xC0
    CRA_DO_RATE_15_0 = 0x10
    CRA_DO_RATE_30_0 = 0x14
    CRA_DO_RATE_75_0 = 0x18

    CRA_MS_NORMAL = 0x00
    CRA_MS_POSITIVE = 0x01
    CRA_MS_NEGATIVE = 0x02

    CRB_GN_1370 = 0x00
    CRB_GN_1090 = 0x20
    CRB_GN_0820 = 0x40
    CRB_GN_0660 = 0x60
    CRB_GN_0440 = 0x80
    CRB_GN_0390 = 0xA0
    CRB_GN_0330 = 0xC0
    CRB_GN_0230 = 0xE0

    MR_HS_OFF = 0x00
    MR_HS_ON = 0x80
    MR_MODE_CONT_M = 0x00
    MR_MODE_SINGLE_M = 0x01
    MR_MODE_IDLE_1 = 0x02
    MR_MODE_IDLE_2 = 0x03

    SR_LOCK = 0x02
    SR_RDY = 0x01


class MPU6500:
    """Register map of the MPU6500 accelerometer and gyroscope."""

    ADDR = 0x68

    XG_OFFSET_H = 0x13
    XG_OFFSET_L = 0x14
    YG_OFFSET_H = 0x15
    YG_OFFSET_L = 0x16
    ZG_OFFSET_H = 0x17
    ZG_OFFSET_L = 0x18
    SMPLRT_DIV = 0x19
    CONFIG = 0x1A
    GYRO_CONFIG = 0x1B
    ACCEL_CONFIG = 0x1C
    ACCEL_CONFIG_2 = 0x1D

    INT_PIN_CFG = 0x37

    ACCEL_XOUT_H = 0x3B
    ACCEL_XOUT_L = 0x3C
    ACCEL_YOUT_H = 0x3D
    ACCEL_YOUT_L = 0x3E
    ACCEL_ZOUT_H = 0x3F
    ACCEL_ZOUT_L = 0x40
    TEMP_OUT_H = 0x41
    TEMP_OUT_L = 0x42
    GYRO_X_OUT_H = 0x43
    GYRO_X_OUT_L = 0x44
    GYRO_Y_OUT_H = 0x45
    GYRO_Y_OUT_L = 0x46
    GYRO_Z_OUT_H = 0x47
    GYRO_Z_OUT_L = 0x48

    USER_CTRL = 0x6A
    PWR_MGMT_1 = 0x6B
    WHO_AM_I = 0x75


class S0018:
    """Command set of the S0018 (SSD1306-style) OLED display."""

    ADDR = 0x3C

    COMMAND = 0x80
    DATA = 0x00

    CONTRAST = 0x81
    ENTIRE_ON = 0xA4
    NORMAL = 0xA6
    INVERSE = 0xA7
    DISP_OFF = 0xAE
    DISP_ON = 0xAE

    MEM_ADDR = 0x20
    COL_ADDR = 0x21
    PAGE_ADDR = 0x22
    DISP_START_LINE = 0x40
    SEG_REMAP = 0xA0
    MUX_RATIO = 0xA8
    COM_OUT_DIR = 0xC0
    DISP_OFFSET = 0xD3
    COM_PIN_CFG = 0xDA
    DISP_CLK_DIV = 0xD5
    PRECHARGE = 0xD9
    VCOM_DESEL = 0xDB
    CHARGE_PUMP = 0x8D


def combine_word(msb: int, lsb: int) -> int:
    """Join a high and a low register byte into a signed 16-bit value."""
    for name, value in (("msb", msb), ("lsb", lsb)):
        if not 0 <= value <= 0xFF:
            raise ValueError(f"{name} must be a byte, got {value!r}")
    return int.from_bytes(bytes((msb, lsb)), "big", signed=True)