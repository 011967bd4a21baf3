"""Runtime settings read from the environment.

``HTU21D_I2C_BUS``      I2C bus number (default 1)
``HTU21D_I2C_ADDRESS``  device address, hex or decimal (default 0x40)
``HTU21D_LOG_LEVEL``    logging level name (default INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from .protocol.commands import DEFAULT_ADDRESS
from .transport.i2c_connection import DEFAULT_BUS


@dataclass
class SensorSettings:
    """Where to find the sensor and how verbosely to log."""

    bus: int = DEFAULT_BUS
    address: int = DEFAULT_ADDRESS
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.bus < 0:
            raise ValueError(f"I2C bus must be >= 0, got {self.bus}")
        if not 0x03 <= self.address <= 0x77:
            raise ValueError(f"I2C address must be 0x03-0x77, got 0x{self.address:02X}")
        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{self.log_level}'")
        self.log_level = level

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SensorSettings:
        env = os.environ if environ is None else environ
        try:
            bus = int(env.get("HTU21D_I2C_BUS", DEFAULT_BUS))
            address = int(env.get("HTU21D_I2C_ADDRESS", str(DEFAULT_ADDRESS)), 0)
        except ValueError as e:
            raise ValueError(f"Invalid HTU21D setting in environment: {e}") from e
        return cls(
            bus=bus,
            address=address,
            log_level=env.get("HTU21D_LOG_LEVEL", "INFO"),
        )

    def to_dict(self) -> dict:
        return {
            "bus": self.bus,
            "address": f"0x{self.address:02X}",
            "log_level": self.log_level,
        }
