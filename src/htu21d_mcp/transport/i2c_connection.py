"""I2C connection to the HTU21D via the Linux i2c-dev interface.

Uses ``smbus2`` raw ``i2c_rdwr`` transfers rather than SMBus block calls:
the no-hold measurement read is a bare 3-byte read with no command byte,
which SMBus block reads cannot express.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_BUS = 1


class BusTransport(Protocol):
    """Synchronous request/response channel used by the sensor engine."""

    def open(self) -> None: ...

    def close(self) -> None: ...

    def write(self, address: int, data: bytes, stop: bool = True) -> bool: ...

    def read_exactly(self, address: int, count: int) -> bytes | None: ...


class I2CConnection:
    """Manages an i2c-dev bus handle.

    Usage::

        conn = I2CConnection(bus=1)
        conn.open()
        conn.write(0x40, b"\\xF3")
        data = conn.read_exactly(0x40, 3)
        conn.close()

    A write with ``stop=False`` is held back and sent together with the
    next read to the same address as one combined transfer, so the read
    follows a repeated start instead of a stop.
    """

    def __init__(self, bus: int = DEFAULT_BUS) -> None:
        self._bus_number = bus
        self._bus = None
        self._pending: tuple[int, bytes] | None = None

    @property
    def connected(self) -> bool:
        return self._bus is not None

    @property
    def bus_number(self) -> int:
        return self._bus_number

    def open(self) -> None:
        """Open the i2c-dev device for this bus number.

        Raises:
            ConnectionError: If the bus device cannot be opened.
        """
        if self._bus is not None:
            return

        from smbus2 import SMBus

        try:
            self._bus = SMBus(self._bus_number)
        except OSError as e:
            raise ConnectionError(
                f"Could not open I2C bus {self._bus_number}. "
                f"Ensure I2C is enabled and you have permissions. "
                f"Last error: {e}"
            ) from e

        logger.info("Opened I2C bus %d", self._bus_number)

    def close(self) -> None:
        """Close the bus handle."""
        if self._bus is None:
            return

        try:
            self._bus.close()
        except OSError as e:
            logger.warning("Error closing I2C bus: %s", e)
        finally:
            self._bus = None
            self._pending = None
            logger.info("Closed I2C bus %d", self._bus_number)

    def write(self, address: int, data: bytes, stop: bool = True) -> bool:
        """Write ``data`` to the device at ``address``.

        Args:
            address: 7-bit device address.
            data: Bytes to write (command byte plus optional payload).
            stop: If False, defer the write and combine it with the next
                read as a repeated-start transfer.

        Returns:
            True if the transfer completed (or was queued), False on a bus
            error such as a missing acknowledge.

        Raises:
            ConnectionError: If the bus is not open.
        """
        if self._bus is None:
            raise ConnectionError("I2C bus is not open")

        if not stop:
            self._pending = (address, bytes(data))
            return True

        from smbus2 import i2c_msg

        self._pending = None
        try:
            self._bus.i2c_rdwr(i2c_msg.write(address, list(data)))
        except OSError as e:
            logger.debug("Write to 0x%02X failed: %s", address, e)
            return False
        return True

    def read_exactly(self, address: int, count: int) -> bytes | None:
        """Read ``count`` bytes from the device at ``address``.

        Returns:
            The bytes read, or None if the transfer failed or came back
            short.

        Raises:
            ConnectionError: If the bus is not open.
        """
        if self._bus is None:
            raise ConnectionError("I2C bus is not open")

        from smbus2 import i2c_msg

        read = i2c_msg.read(address, count)
        messages = [read]
        pending, self._pending = self._pending, None
        if pending is not None and pending[0] == address:
            messages.insert(0, i2c_msg.write(address, list(pending[1])))

        try:
            self._bus.i2c_rdwr(*messages)
        except OSError as e:
            logger.debug("Read from 0x%02X failed: %s", address, e)
            return None

        data = bytes(list(read))
        if len(data) != count:
            return None
        return data
