"""CRC-8 used by the HTU21D to protect each measurement word.

Polynomial 0x31 (x^8 + x^5 + x^4 + 1), initial value 0, MSB first,
no input or output reflection.
"""

from __future__ import annotations

CRC8_POLYNOMIAL = 0x31
CRC8_INIT = 0x00


def crc8(data: bytes) -> int:
    """Compute the CRC-8 of ``data``.

    Args:
        data: The bytes to checksum (two data bytes for a sensor sample).

    Returns:
        The 8-bit checksum.
    """
    crc = CRC8_INIT
    for byte in data:
        crc ^= byte
        for _ in range(8):
            if crc & 0x80:
                crc = ((crc << 1) ^ CRC8_POLYNOMIAL) & 0xFF
            else:
                crc = (crc << 1) & 0xFF
    return crc


def check_crc8(data: bytes, checksum: int) -> bool:
    """Return True if ``checksum`` matches the CRC-8 of ``data``."""
    return crc8(data) == checksum
