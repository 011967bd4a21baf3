"""Error taxonomy for sensor transactions.

Public operations on :class:`~htu21d_mcp.sensor.HTU21D` never raise these;
they return ``False`` and keep the exception on ``last_error`` so callers
can tell a bus failure from a corrupted sample.
"""

from __future__ import annotations


class HTU21DError(Exception):
    """Base class for sensor protocol failures."""


class BusTransactionError(HTU21DError):
    """The bus write failed or the read returned the wrong number of bytes."""


class ChecksumError(HTU21DError):
    """A received sample failed CRC-8 validation."""

    def __init__(self, data: bytes, expected: int, actual: int) -> None:
        super().__init__(
            f"CRC mismatch for {data.hex(' ')}: "
            f"received 0x{actual:02X}, computed 0x{expected:02X}"
        )
        self.data = data
        self.expected = expected
        self.actual = actual


class ConfigurationVerificationError(HTU21DError):
    """The configuration register did not read back as the power-on default."""

    def __init__(self, value: int, expected: int) -> None:
        super().__init__(
            f"Configuration register is 0x{value:02X}, expected 0x{expected:02X}"
        )
        self.value = value
        self.expected = expected
