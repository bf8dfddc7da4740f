[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imuattitude"
version = "0.1.0"
description = "Attitude estimation from an MPU6500 IMU on a Linux I2C bus using a Madgwick filter, run as frame-synchronised worker threads"
requires-python = ">=3.10"
dependencies = []
keywords = ["imu", "ahrs", "madgwick", "i2c", "mpu6500", "hmc5883l", "attitude", "quaternion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Human Machine Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
imuattitude = "imuattitude.app:main"

[tool.hatch.build.targets.wheel]
packages = ["imuattitude"]

[tool.pytest.ini_options]
addopts = "-ra"
