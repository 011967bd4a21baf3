"""Tests for command codes, resolution variants, and builders."""

import pytest

from htu21d_mcp.protocol.commands import (
    CONFIG_DEFAULT,
    DEFAULT_ADDRESS,
    Command,
    Resolution,
    build_command,
    build_read_config,
    build_soft_reset,
    build_trigger_humidity,
    build_trigger_temperature,
    build_write_config,
)


def test_command_enum_values():
    """Command bytes must match the device's instruction set."""
    assert Command.TRIGGER_TEMP_NO_HOLD == 0xF3
    assert Command.TRIGGER_HUMIDITY_NO_HOLD == 0xF5
    assert Command.WRITE_USER_REG == 0xE6
    assert Command.READ_USER_REG == 0xE7
    assert Command.SOFT_RESET == 0xFE
    assert CONFIG_DEFAULT == 0x02
    assert DEFAULT_ADDRESS == 0x40


def test_single_byte_builders():
    assert build_trigger_temperature() == b"\xF3"
    assert build_trigger_humidity() == b"\xF5"
    assert build_read_config() == b"\xE7"
    assert build_soft_reset() == b"\xFE"


def test_build_command_with_payload():
    assert build_command(Command.WRITE_USER_REG, b"\x83") == b"\xE6\x83"


def test_resolution_bit_widths():
    assert (Resolution.RH12_T14.humidity_bits, Resolution.RH12_T14.temperature_bits) == (12, 14)
    assert (Resolution.RH8_T12.humidity_bits, Resolution.RH8_T12.temperature_bits) == (8, 12)
    assert (Resolution.RH10_T13.humidity_bits, Resolution.RH10_T13.temperature_bits) == (10, 13)
    assert (Resolution.RH11_T11.humidity_bits, Resolution.RH11_T11.temperature_bits) == (11, 11)


def test_resolution_delays():
    """Conversion delays in ms, in variant order."""
    assert [r.temperature_delay_ms for r in Resolution] == [50, 13, 25, 7]
    assert [r.humidity_delay_ms for r in Resolution] == [16, 3, 5, 8]


@pytest.mark.parametrize(
    "resolution, expected",
    [
        (Resolution.RH12_T14, 0x02),
        (Resolution.RH8_T12, 0x03),
        (Resolution.RH10_T13, 0x82),
        (Resolution.RH11_T11, 0x83),
    ],
)
def test_config_byte_splits_code_across_bit7_and_bit0(resolution, expected):
    assert resolution.config_byte == expected
    assert build_write_config(resolution) == bytes([0xE6, expected])


def test_default_resolution():
    assert Resolution.default() is Resolution.RH12_T14


def test_write_config_rejects_non_resolution():
    with pytest.raises(ValueError):
        build_write_config(1)


def test_resolution_to_dict():
    d = Resolution.RH10_T13.to_dict()
    assert d["name"] == "RH10_T13"
    assert d["humidity_bits"] == 10
    assert d["temperature_bits"] == 13
    assert d["temperature_delay_ms"] == 25
    assert d["humidity_delay_ms"] == 5
