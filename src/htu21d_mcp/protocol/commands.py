"""Command codes, resolution variants, and command builders.

The HTU21D is driven by single-byte commands. Only the configuration
register write carries a payload: one byte holding the resolution code
and the heater/reserved bits::

    bit:   7      6       5   4   3     2        1        0
         +------+-------+-----------+--------+--------+------+
         | RES1 | EOB   | reserved  | heater | no OTP | RES0 |
         +------+-------+-----------+--------+--------+------+

The two resolution bits are not adjacent, so the 2-bit code is split
across bit 7 and bit 0.
"""

from __future__ import annotations

from enum import Enum, IntEnum

DEFAULT_ADDRESS = 0x40

# Value of the configuration register after a soft reset. Also the fixed
# bit pattern OR-ed into every configuration write (heater off, OTP reload
# disabled).
CONFIG_DEFAULT = 0x02

RESET_DELAY_MS = 15

# Humidity temperature coefficient, %RH per degree away from 25 C
HUMIDITY_TEMP_COEFF = -0.15


class Command(IntEnum):
    """Command byte identifiers."""

    TRIGGER_TEMP_HOLD = 0xE3
    TRIGGER_HUMIDITY_HOLD = 0xE5
    TRIGGER_TEMP_NO_HOLD = 0xF3
    TRIGGER_HUMIDITY_NO_HOLD = 0xF5
    WRITE_USER_REG = 0xE6
    READ_USER_REG = 0xE7
    SOFT_RESET = 0xFE


class Resolution(Enum):
    """Measurement resolution (humidity bits, temperature bits).

    Each variant carries its register code and the worst-case conversion
    times in milliseconds.
    """

    #          code  rh  t   t_ms  rh_ms
    RH12_T14 = (0b00, 12, 14, 50, 16)
    RH8_T12 = (0b01, 8, 12, 13, 3)
    RH10_T13 = (0b10, 10, 13, 25, 5)
    RH11_T11 = (0b11, 11, 11, 7, 8)

    def __init__(
        self,
        code: int,
        humidity_bits: int,
        temperature_bits: int,
        temperature_delay_ms: int,
        humidity_delay_ms: int,
    ) -> None:
        self.code = code
        self.humidity_bits = humidity_bits
        self.temperature_bits = temperature_bits
        self.temperature_delay_ms = temperature_delay_ms
        self.humidity_delay_ms = humidity_delay_ms

    @property
    def config_byte(self) -> int:
        """Configuration register value selecting this resolution."""
        return (self.code & 0x01) | ((self.code & 0x02) << 6) | CONFIG_DEFAULT

    @classmethod
    def default(cls) -> Resolution:
        return cls.RH12_T14

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "humidity_bits": self.humidity_bits,
            "temperature_bits": self.temperature_bits,
            "temperature_delay_ms": self.temperature_delay_ms,
            "humidity_delay_ms": self.humidity_delay_ms,
        }


def build_command(command: Command, payload: bytes = b"") -> bytes:
    """Build the bytes written to the bus for a command."""
    return bytes([command.value]) + payload


def build_trigger_temperature() -> bytes:
    """Build a no-hold temperature trigger (0xF3)."""
    return build_command(Command.TRIGGER_TEMP_NO_HOLD)


def build_trigger_humidity() -> bytes:
    """Build a no-hold humidity trigger (0xF5)."""
    return build_command(Command.TRIGGER_HUMIDITY_NO_HOLD)


def build_write_config(resolution: Resolution) -> bytes:
    """Build a user register write selecting ``resolution``."""
    if not isinstance(resolution, Resolution):
        raise ValueError(f"Expected a Resolution, got {resolution!r}")
    return build_command(Command.WRITE_USER_REG, bytes([resolution.config_byte]))


def build_read_config() -> bytes:
    """Build a user register read request (0xE7)."""
    return build_command(Command.READ_USER_REG)


def build_soft_reset() -> bytes:
    """Build a soft reset command (0xFE)."""
    return build_command(Command.SOFT_RESET)
