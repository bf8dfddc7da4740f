"""Attitude estimation from an MPU6500 IMU on an I2C bus using a Madgwick filter."""

__version__ = "0.1.0"
__all__ = ["__version__"]