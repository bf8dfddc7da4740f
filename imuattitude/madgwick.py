"""Madgwick gradient-descent orientation filter for IMU and MARG sensors."""

from __future__ import annotations

import math
import struct

from .state import MASTER_IT_RATE_HZ

DEFAULT_BETA = 0.08


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value & 0x8000_0000 else value


def inv_sqrt(x: float) -> float:
    """Approximate 1/sqrt(x) with the bit-level trick and one Newton step."""
    halfx = 0.5 * x
    (i,) = struct.unpack("<i", struct.pack("<f", x))
    i = _to_int32(0x5F3759DF - (i >> 1))
    (y,) = struct.unpack("<f", struct.pack("<i", i))
    return y * (1.5 - halfx * y * y)


class Madgwick:
    """Orientation quaternion of the sensor frame, updated one sample at a time."""

    def __init__(self, beta: float = DEFAULT_BETA, sample_freq: float = float(MASTER_IT_RATE_HZ)):
        self.beta = beta
        self.sample_freq = sample_freq
        self.reset()

    def reset(self) -> None:
        """Return to the identity orientation."""
        self.q0, self.q1, self.q2, self.q3 = 1.0, 0.0, 0.0, 0.0

    @property
    def quaternion(self) -> tuple[float, float, float, float]:
        return (self.q0, self.q1, self.q2, self.q3)

    def _integrate(self, d0: float, d1: float, d2: float, d3: float) -> None:
        dt = 1.0 / self.sample_freq
        q0 = self.q0 + d0 * dt
        q1 = self.q1 + d1 * dt
        q2 = self.q2 + d2 * dt
        q3 = self.q3 + d3 * dt
        n = inv_sqrt(q0 * q0 + q1 * q1 + q2 * q2 + q3 * q3)
        self.q0, self.q1, self.q2, self.q3 = q0 * n, q1 * n, q2 * n, q3 * n

    def _gyro_rate(self, gx: float, gy: float, gz: float) -> tuple[float, float, float, float]:
        q0, q1, q2, q3 = self.quaternion
        return (
            0.5 * (-q1 * gx - q2 * gy - q3 * gz),
            0.5 * (q0 * gx + q2 * gz - q3 * gy),
            0.5 * (q0 * gy - q1 * gz + q3 * gx),
            0.5 * (q0 * gz + q1 * gy - q2 * gx),
        )

    def _apply_feedback(self, rate, step):
        n = inv_sqrt(sum(s * s for s in step))
        return tuple(r - self.beta * s * n for r, s in zip(rate, step))

    def update(self, gx, gy, gz, ax, ay, az, mx, my, mz) -> None:
        """Fuse gyroscope (rad/s), accelerometer and magnetometer readings."""
        if mx == 0.0 and my == 0.0 and mz == 0.0:
            self.update_imu(gx, gy, gz, ax, ay, az)
            return

        rate = self._gyro_rate(gx, gy, gz)

        if not (ax == 0.0 and ay == 0.0 and az == 0.0):
            n = inv_sqrt(ax * ax + ay * ay + az * az)
            ax, ay, az = ax * n, ay * n, az * n
            n = inv_sqrt(mx * mx + my * my + mz * mz)
            mx, my, mz = mx * n, my * n, mz * n

            q0, q1, q2, q3 = self.quaternion
            _2q0mx = 2.0 * q0 * mx
            _2q0my = 2.0 * q0 * my
            _2q0mz = 2.0 * q0 * mz
            _2q1mx = 2.0 * q1 * mx
            _2q0 = 2.0 * q0
            _2q1 = 2.0 * q1
            _2q2 = 2.0 * q2
            _2q3 = 2.0 * q3
            _2q0q2 = 2.0 * q0 * q2
            _2q2q3 = 2.0 * q2 * q3
            q0q0 = q0 * q0
            q0q1 = q0 * q1
            q0q2 = q0 * q2
            q0q3 = q0 * q3
            q1q1 = q1 * q1
            q1q2 = q1 * q2
            q1q3 = q1 * q3
            q2q2 = q2 * q2
            q2q3 = q2 * q3
            q3q3 = q3 * q3

            # Reference direction of Earth's magnetic field
            hx = (mx * q0q0 - _2q0my * q3 + _2q0mz * q2 + mx * q1q1 + _2q1 * my * q2
                  + _2q1 * mz * q3 - mx * q2q2 - mx * q3q3)
            hy = (_2q0mx * q3 + my * q0q0 - _2q0mz * q1 + _2q1mx * q2 - my * q1q1
                  + my * q2q2 + _2q2 * mz * q3 - my * q3q3)
            _2bx = math.sqrt(hx * hx + hy * hy)
            _2bz = (-_2q0mx * q2 + _2q0my * q1 + mz * q0q0 + _2q1mx * q3 - mz * q1q1
                    + _2q2 * my * q3 - mz * q2q2 + mz * q3q3)
            _4bx = 2.0 * _2bx
            _4bz = 2.0 * _2bz

            ex = 2.0 * q1q3 - _2q0q2 - ax
            ey = 2.0 * q0q1 + _2q2q3 - ay
            ez = 1 - 2.0 * q1q1 - 2.0 * q2q2 - az
            fx = _2bx * (0.5 - q2q2 - q3q3) + _2bz * (q1q3 - q0q2) - mx
            fy = _2bx * (q1q2 - q0q3) + _2bz * (q0q1 + q2q3) - my
            fz = _2bx * (q0q2 + q1q3) + _2bz * (0.5 - q1q1 - q2q2) - mz

            s0 = (-_2q2 * ex + _2q1 * ey - _2bz * q2 * fx
                  + (-_2bx * q3 + _2bz * q1) * fy + _2bx * q2 * fz)
            s1 = (_2q3 * ex + _2q0 * ey - 4.0 * q1 * ez + _2bz * q3 * fx
                  + (_2bx * q2 + _2bz * q0) * fy + (_2bx * q3 - _4bz * q1) * fz)
            s2 = (-_2q0 * ex + _2q3 * ey - 4.0 * q2 * ez + (-_4bx * q2 - _2bz * q0) * fx
                  + (_2bx * q1 + _2bz * q3) * fy + (_2bx * q0 - _4bz * q2) * fz)
            s3 = (_2q1 * ex + _2q2 * ey + (-_4bx * q3 + _2bz * q1) * fx
                  + (-_2bx * q0 + _2bz * q2) * fy + _2bx * q1 * fz)
            rate = self._apply_feedback(rate, (s0, s1, s2, s3))

        self._integrate(*rate)

    def update_imu(self, gx, gy, gz, ax, ay, az) -> None:
        """Fuse gyroscope (rad/s) and accelerometer readings."""
        rate = self._gyro_rate(gx, gy, gz)

        if not (ax == 0.0 and ay == 0.0 and az == 0.0):
            n = inv_sqrt(ax * ax + ay * ay + az * az)
            ax, ay, az = ax * n, ay * n, az * n

            q0, q1, q2, q3 = self.quaternion
            _2q0 = 2.0 * q0
            _2q1 = 2.0 * q1
            _2q2 = 2.0 * q2
            _2q3 = 2.0 * q3
            _4q0 = 4.0 * q0
            _4q1 = 4.0 * q1
            _4q2 = 4.0 * q2
            _8q1 = 8.0 * q1
            _8q2 = 8.0 * q2
            q0q0 = q0 * q0
            q1q1 = q1 * q1
            q2q2 = q2 * q2
            q3q3 = q3 * q3

            s0 = _4q0 * q2q2 + _2q2 * ax + _4q0 * q1q1 - _2q1 * ay
            s1 = (_4q1 * q3q3 - _2q3 * ax + 4.0 * q0q0 * q1 - _2q0 * ay - _4q1
                  + _8q1 * q1q1 + _8q1 * q2q2 + _4q1 * az)
            s2 = (4.0 * q0q0 * q2 + _2q0 * ax + _4q2 * q3q3 - _2q3 * ay - _4q2
                  + _8q2 * q1q1 + _8q2 * q2q2 + _4q2 * az)
            s3 = 4.0 * q1q1 * q3 - _2q1 * ax + 4.0 * q2q2 * q3 - _2q2 * ay
            rate = self._apply_feedback(rate, (s0, s1, s2, s3))

        self._integrate(*rate)