"""Decoding of measurement samples into physical units."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import BusTransactionError, ChecksumError
from ..utils.crc import check_crc8, crc8
from .commands import HUMIDITY_TEMP_COEFF

SAMPLE_SIZE = 3
STATUS_MASK = 0xFC


@dataclass
class RawSample:
    """A 3-byte measurement: two data bytes (MSB first) and a CRC byte."""

    msb: int
    lsb: int
    checksum: int

    @property
    def data(self) -> bytes:
        return bytes([self.msb, self.lsb])

    @property
    def raw_value(self) -> int:
        """16-bit measurement word with the two status bits cleared."""
        return (self.msb << 8) | (self.lsb & STATUS_MASK)

    @property
    def status(self) -> int:
        return self.lsb & 0x03

    def is_valid(self) -> bool:
        return check_crc8(self.data, self.checksum)

    def __repr__(self) -> str:
        return (
            f"RawSample(data={self.data.hex(' ')}, "
            f"checksum=0x{self.checksum:02X})"
        )


def parse_sample(data: bytes | None) -> RawSample:
    """Parse and validate a sample read from the sensor.

    Raises:
        BusTransactionError: If ``data`` is not exactly 3 bytes.
        ChecksumError: If the CRC byte does not match the data bytes.
    """
    if data is None or len(data) != SAMPLE_SIZE:
        got = "nothing" if data is None else f"{len(data)} bytes"
        raise BusTransactionError(
            f"Expected {SAMPLE_SIZE} bytes, got {got}"
        )

    sample = RawSample(msb=data[0], lsb=data[1], checksum=data[2])
    if not sample.is_valid():
        raise ChecksumError(sample.data, crc8(sample.data), sample.checksum)
    return sample


def convert_temperature(raw_value: int) -> float:
    """Convert a masked raw word to degrees Celsius."""
    return -46.85 + 175.72 * raw_value / 65536.0


def convert_humidity(raw_value: int) -> float:
    """Convert a masked raw word to uncompensated %RH."""
    return -6.0 + 125.0 * raw_value / 65536.0


def compensate_humidity(humidity: float, temperature: float) -> float:
    """Apply the temperature correction and clamp to [0, 100] %RH."""
    humidity += (25.0 - temperature) * HUMIDITY_TEMP_COEFF
    return max(0.0, min(100.0, humidity))
