"""Sensor worker: brings up the IMU, calibrates it and samples it every frame."""

from __future__ import annotations

import logging
import math
import sys
import threading
import time
from typing import Optional, TextIO

from .i2c import I2CError
from .registers import HMC5883L, MPU6500, combine_word
from .state import CALIBRATE_FRAMES, ORIENTATE_FRAMES, SharedState, SystemState, elapsed_ms

log = logging.getLogger(__name__)

_POLL_S = 0.001
_ACC_SCALE = 256.0
_GYRO_SCALE = 131.0


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // b
    return q if a >= 0 else -q


class SensorUnit:
    """Reads the compass and IMU over a bus and keeps the shared state fed."""

    def __init__(self, state: SharedState, bus, out: Optional[TextIO] = None):
        self.state = state
        self.bus = bus
        self._out = out
        self.calibrate_count = 0
        self.orientate_count = 0

    def _print(self, text: str) -> None:
        print(text, file=self._out if self._out is not None else sys.stdout)

    def _read_word(self, addr: int, msb_reg: int, lsb_reg: int) -> int:
        msb = self.bus.read_register(addr, msb_reg)
        lsb = self.bus.read_register(addr, lsb_reg)
        return combine_word(msb, lsb)

    def init_compass(self) -> tuple[int, int, int]:
        """Report the compass identity and put it into continuous mode."""
        ids = tuple(
            self.bus.read_register(HMC5883L.ADDR, reg)
            for reg in (HMC5883L.REG_IR_A, HMC5883L.REG_IR_B, HMC5883L.REG_IR_C)
        )
        self._print("HMC5883L ID={:2x}{:2x}{:2x}".format(*ids))
        for mode in (HMC5883L.MR_MODE_SINGLE_M, HMC5883L.MR_MODE_CONT_M):
            self.bus.write_register(HMC5883L.ADDR, HMC5883L.REG_MR, HMC5883L.MR_HS_OFF | mode)
            current = self.bus.read_register(HMC5883L.ADDR, HMC5883L.REG_MR)
            self._print(f"Mode = {current:2x}")
        return ids

    def init_imu(self) -> int:
        """Report the IMU identity and configure power, ranges and sample rate."""
        chip_id = self.bus.read_register(MPU6500.ADDR, MPU6500.WHO_AM_I)
        self._print(f"MPU6500 id = {chip_id:02x}")
        self.bus.write_register(MPU6500.ADDR, MPU6500.PWR_MGMT_1, 0x00)
        self.bus.write_register(MPU6500.ADDR, MPU6500.GYRO_CONFIG, 0x00)
        self.bus.write_register(MPU6500.ADDR, MPU6500.ACCEL_CONFIG, 0x00)
        self.bus.write_register(MPU6500.ADDR, MPU6500.SMPLRT_DIV, 0x31)
        return chip_id

    def calibrate(self) -> None:
        """Accumulate gyro readings and, after enough frames, store the mean offsets."""
        st = self.state
        if self.calibrate_count == 0:
            self._print("Calibrating...")
        st.offs_x += st.gyro_x
        st.offs_y += st.gyro_y
        st.offs_z += st.gyro_z

        if self.calibrate_count >= CALIBRATE_FRAMES:
            st.offs_x = _trunc_div(st.offs_x, CALIBRATE_FRAMES)
            st.offs_y = _trunc_div(st.offs_y, CALIBRATE_FRAMES)
            st.offs_z = _trunc_div(st.offs_z, CALIBRATE_FRAMES)
            self._print(f"OFFSETS: X:{st.offs_x} Y:{st.offs_y} Z:{st.offs_z}")
            for offset, low, high in (
                (st.offs_x, MPU6500.XG_OFFSET_L, MPU6500.XG_OFFSET_H),
                (st.offs_y, MPU6500.YG_OFFSET_L, MPU6500.YG_OFFSET_H),
                (st.offs_z, MPU6500.ZG_OFFSET_L, MPU6500.ZG_OFFSET_H),
            ):
                self.bus.write_register(MPU6500.ADDR, low, offset & 0xFF)
                self.bus.write_register(MPU6500.ADDR, high, (offset >> 8) & 0xFF)
            st.calib_done = True
        self.calibrate_count += 1

    def orientate(self) -> None:
        """After enough frames, take the current attitude as the zero reference."""
        st = self.state
        if self.orientate_count == 0:
            self._print("Orientating...")
        if self.orientate_count >= ORIENTATE_FRAMES:
            st.pitch_offset = -st.pitch
            st.roll_offset = -st.roll
            st.yaw_offset = -st.yaw
            st.orient_done = True
        self.orientate_count += 1

    def read_compass(self) -> None:
        """Sample the magnetometer's three axes."""
        st = self.state
        st.comp_x = self._read_word(HMC5883L.ADDR, HMC5883L.REG_X_MSB, HMC5883L.REG_X_LSB)
        st.comp_y = self._read_word(HMC5883L.ADDR, HMC5883L.REG_Y_MSB, HMC5883L.REG_Y_LSB)
        st.comp_z = self._read_word(HMC5883L.ADDR, HMC5883L.REG_Z_MSB, HMC5883L.REG_Z_LSB)

    def read_imu(self) -> None:
        """Sample accelerometer and gyroscope and store raw and scaled values."""
        st = self.state
        a = MPU6500.ADDR
        st.acc_x = self._read_word(a, MPU6500.ACCEL_XOUT_H, MPU6500.ACCEL_XOUT_L)
        st.acc_y = self._read_word(a, MPU6500.ACCEL_YOUT_H, MPU6500.ACCEL_YOUT_L)
        st.acc_z = self._read_word(a, MPU6500.ACCEL_ZOUT_H, MPU6500.ACCEL_ZOUT_L)
        st.gyro_x = self._read_word(a, MPU6500.GYRO_X_OUT_H, MPU6500.GYRO_X_OUT_L)
        st.gyro_y = self._read_word(a, MPU6500.GYRO_Y_OUT_H, MPU6500.GYRO_Y_OUT_L)
        st.gyro_z = self._read_word(a, MPU6500.GYRO_Z_OUT_H, MPU6500.GYRO_Z_OUT_L)

        st.s_acc_x = st.acc_x / _ACC_SCALE
        st.s_acc_y = st.acc_y / _ACC_SCALE
        st.s_acc_z = st.acc_z / _ACC_SCALE
        st.s_gyro_x = math.radians(st.gyro_x / _GYRO_SCALE)
        st.s_gyro_y = math.radians(st.gyro_y / _GYRO_SCALE)
        st.s_gyro_z = math.radians(st.gyro_z / _GYRO_SCALE)

    def step(self) -> None:
        """Do this frame's sensor work for the current system state."""
        start = time.monotonic()
        st = self.state
        phase = st.system_state
        if phase == SystemState.READY:
            st.system_state = SystemState.INIT
        elif phase == SystemState.INIT:
            if not st.init_done:
                self.init_imu()
                st.init_done = True
                self.calibrate_count = 0
                self.orientate_count = 0
        elif phase == SystemState.CALIB:
            self.read_imu()
            self.calibrate()
        elif phase == SystemState.ORIENT:
            self.read_imu()
            self.orientate()
        elif phase == SystemState.RUN:
            self.read_imu()
        st.sensor_frame_time_ms = elapsed_ms(start, time.monotonic())

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
                log.error("sensor frame failed: %s", exc)