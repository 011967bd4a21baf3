"""Shared fixtures: an in-memory bus standing in for the I2C transport."""

from __future__ import annotations

from collections import deque

import pytest

from htu21d_mcp.sensor import HTU21D
from htu21d_mcp.utils.crc import crc8


def make_sample(raw: int, corrupt: bool = False) -> bytes:
    """Encode a 16-bit raw word as the 3 bytes the sensor sends."""
    data = raw.to_bytes(2, "big")
    checksum = crc8(data)
    if corrupt:
        checksum ^= 0x01
    return data + bytes([checksum])


class FakeBus:
    """Records writes and replays queued read responses."""

    def __init__(self) -> None:
        self.opened = False
        self.closed = False
        self.open_error: Exception | None = None
        self.writes: list[tuple[int, bytes, bool]] = []
        self.reads: deque[bytes | None] = deque()
        self.write_results: deque[bool] = deque()

    def open(self) -> None:
        if self.open_error is not None:
            raise self.open_error
        self.opened = True

    def close(self) -> None:
        self.closed = True

    def write(self, address: int, data: bytes, stop: bool = True) -> bool:
        self.writes.append((address, bytes(data), stop))
        if self.write_results:
            return self.write_results.popleft()
        return True

    def read_exactly(self, address: int, count: int) -> bytes | None:
        if not self.reads:
            return None
        return self.reads.popleft()

    @property
    def commands(self) -> list[int]:
        return [data[0] for _, data, _ in self.writes]


@pytest.fixture
def bus() -> FakeBus:
    return FakeBus()


@pytest.fixture
def delays() -> list[int]:
    return []


@pytest.fixture
def sensor(bus, delays) -> HTU21D:
    return HTU21D(bus, sleep_ms=delays.append)
