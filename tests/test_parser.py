"""Tests for sample decoding and unit conversion."""

import pytest

from htu21d_mcp.errors import BusTransactionError, ChecksumError
from htu21d_mcp.protocol.parser import (
    RawSample,
    compensate_humidity,
    convert_humidity,
    convert_temperature,
    parse_sample,
)

from conftest import make_sample


def test_parse_sample_masks_status_bits():
    sample = parse_sample(make_sample(0x6E92))
    assert sample.raw_value == 0x6E90
    assert sample.status == 0x02


def test_parse_sample_short_read():
    with pytest.raises(BusTransactionError):
        parse_sample(b"\x6E\x92")


def test_parse_sample_none():
    with pytest.raises(BusTransactionError) as excinfo:
        parse_sample(None)
    assert "got nothing" in str(excinfo.value)


def test_parse_sample_long_read():
    with pytest.raises(BusTransactionError):
        parse_sample(make_sample(0x6E92) + b"\x00")


def test_parse_sample_bad_checksum():
    with pytest.raises(ChecksumError) as excinfo:
        parse_sample(make_sample(0x6E92, corrupt=True))
    assert excinfo.value.actual != excinfo.value.expected


def test_raw_sample_is_valid():
    data = make_sample(0x6E92)
    assert RawSample(msb=data[0], lsb=data[1], checksum=data[2]).is_valid()
    assert not RawSample(msb=data[0], lsb=data[1], checksum=data[2] ^ 0xFF).is_valid()


def test_raw_sample_repr():
    r = repr(RawSample(msb=0x6E, lsb=0x92, checksum=0x1A))
    assert "6e 92" in r
    assert "0x1A" in r


def test_temperature_spot_value():
    raw = parse_sample(make_sample(0x6E92)).raw_value
    assert convert_temperature(raw) == pytest.approx(-46.85 + 175.72 * 0x6E90 / 65536.0)
    assert convert_temperature(raw) == pytest.approx(29.04, abs=0.01)


def test_temperature_formula_bounds():
    assert convert_temperature(0x0000) == pytest.approx(-46.85)
    top = convert_temperature(0xFFFC)
    assert top == pytest.approx(-46.85 + 175.72 * 0xFFFC / 65536.0)
    assert abs(top - 128.0) < 1.0


def test_humidity_formula():
    assert convert_humidity(0x0000) == pytest.approx(-6.0)
    assert convert_humidity(0x7C80) == pytest.approx(-6.0 + 125.0 * 0x7C80 / 65536.0)


def test_compensation_at_reference_temperature_is_identity():
    assert compensate_humidity(42.0, 25.0) == pytest.approx(42.0)


def test_compensation_applies_coefficient():
    # 10 degrees above reference adds 1.5 %RH
    assert compensate_humidity(50.0, 35.0) == pytest.approx(51.5)
    assert compensate_humidity(50.0, 15.0) == pytest.approx(48.5)


def test_compensation_clamps_low():
    assert compensate_humidity(convert_humidity(0x0000), 25.0) == 0.0


def test_compensation_clamps_high():
    assert compensate_humidity(convert_humidity(0xFFFC), 25.0) == 100.0
