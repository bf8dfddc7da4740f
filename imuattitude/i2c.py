"""Byte-wide register access to devices on a Linux I2C bus."""

from __future__ import annotations

import fcntl
import logging
import os
import threading
from typing import Callable, Optional

log = logging.getLogger(__name__)

DEFAULT_DEVICE = "/dev/i2c-1"
I2C_SLAVE = 0x0703


class I2CError(OSError):
    """Raised when the bus cannot be opened, addressed, read or written."""


class I2CBus:
    """An I2C character device shared by several threads under one lock."""

    def __init__(
        self,
        device: str = DEFAULT_DEVICE,
        lock: Optional[threading.Lock] = None,
        ioctl: Optional[Callable] = None,
    ):
        self.device = device
        self.lock = lock if lock is not None else threading.Lock()
        self._ioctl = ioctl if ioctl is not None else fcntl.ioctl
        self._fd: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self._fd is not None

    def open(self) -> None:
        """Open the bus device unless it is already open."""
        if self._fd is not None:
            return
        try:
            self._fd = os.open(self.device, os.O_RDWR)
        except OSError as exc:
            raise I2CError(f"could not open I2C device {self.device}") from exc
        log.info("I2C device open: %s", self.device)

    def close(self) -> None:
        """Close the bus device if it is open."""
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def _select(self, addr: int) -> None:
        try:
            self._ioctl(self._fd, I2C_SLAVE, addr)
        except OSError as exc:
            raise I2CError(f"could not set I2C device address {addr:02x}") from exc

    def read_register(self, addr: int, reg: int) -> int:
        """Read one byte from register ``reg`` of the device at ``addr``."""
        payload = bytes((reg,))
        with self.lock:
            self.open()
            self._select(addr)
            try:
                if os.write(self._fd, payload) != 1:
                    raise I2CError(f"failed to write register address {reg:02x}")
                data = os.read(self._fd, 1)
            except OSError as exc:
                if isinstance(exc, I2CError):
                    raise
                raise I2CError(f"failed to read register {reg:02x} of {addr:02x}") from exc
        if len(data) != 1:
            raise I2CError(f"failed to read register {reg:02x} of {addr:02x}")
        return data[0]

    def write_register(self, addr: int, reg: int, val: int) -> bool:
        """Write one byte ``val`` to register ``reg`` of the device at ``addr``."""
        payload = bytes((reg, val))
        with self.lock:
            log.debug("write_register(%02x, %02x, %02x)", addr, reg, val)
            self.open()
            self._select(addr)
            try:
                written = os.write(self._fd, payload)
            except OSError as exc:
                raise I2CError(
                    f"could not write the pointer register and data {addr:02x}, {reg:02x}, {val:02x}"
                ) from exc
            if written != 2:
                raise I2CError(
                    f"could not write the pointer register and data {addr:02x}, {reg:02x}, {val:02x}"
                )
        return True

    def __enter__(self) -> "I2CBus":
        self.open()
        return self

    def __exit__(self, *args) -> None:
        self.close()