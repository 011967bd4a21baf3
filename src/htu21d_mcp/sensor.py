"""HTU21D protocol engine.

Drives the measurement cycle, the configuration register, and the soft
reset over an injected :class:`~htu21d_mcp.transport.BusTransport`.

Usage::

    sensor = HTU21D(I2CConnection(bus=1))
    if sensor.begin() and sensor.measure():
        print(sensor.temperature, sensor.humidity)

Every public operation that talks to the bus returns ``True``/``False``.
The cause of the last failure is kept on :attr:`HTU21D.last_error`.
Operations block for the bus transfer plus the conversion delay and are
not safe to call concurrently on one instance.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from .errors import BusTransactionError, ConfigurationVerificationError, HTU21DError
from .models.reading import Reading
from .protocol.commands import (
    CONFIG_DEFAULT,
    DEFAULT_ADDRESS,
    RESET_DELAY_MS,
    Resolution,
    build_read_config,
    build_soft_reset,
    build_trigger_humidity,
    build_trigger_temperature,
    build_write_config,
)
from .protocol.parser import (
    SAMPLE_SIZE,
    compensate_humidity,
    convert_humidity,
    convert_temperature,
    parse_sample,
)
from .transport.i2c_connection import BusTransport

logger = logging.getLogger(__name__)


def _sleep_ms(ms: int) -> None:
    time.sleep(ms / 1000.0)


class HTU21D:
    """Temperature and humidity sensor on a two-wire bus.

    Args:
        bus: Transport used for every transaction. The engine owns it for
            its lifetime.
        address: 7-bit device address.
        sleep_ms: Blocking delay primitive taking milliseconds.
    """

    def __init__(
        self,
        bus: BusTransport,
        address: int = DEFAULT_ADDRESS,
        sleep_ms: Callable[[int], None] = _sleep_ms,
    ) -> None:
        self._bus = bus
        self._address = address
        self._sleep_ms = sleep_ms
        self._resolution = Resolution.default()
        self._reading = Reading()
        self._initialized = False
        self.last_error: HTU21DError | None = None

    @property
    def address(self) -> int:
        return self._address

    @property
    def initialized(self) -> bool:
        """True once :meth:`begin` has completed a successful reset."""
        return self._initialized

    @property
    def resolution(self) -> Resolution:
        """Currently selected resolution. Cached, no bus access."""
        return self._resolution

    @property
    def reading(self) -> Reading:
        return self._reading

    @property
    def temperature(self) -> float | None:
        """Temperature in C from the last measurement, or None."""
        return self._reading.temperature

    @property
    def humidity(self) -> float | None:
        """Compensated relative humidity in % from the last measurement, or None."""
        return self._reading.humidity

    # ─── bus helpers ─────────────────────────────────────────────────

    def _write(self, data: bytes, stop: bool = True) -> None:
        try:
            ok = self._bus.write(self._address, data, stop=stop)
        except ConnectionError as e:
            raise BusTransactionError(str(e)) from e
        if not ok:
            raise BusTransactionError(
                f"Write of {data.hex(' ')} to 0x{self._address:02X} failed"
            )

    def _read(self, count: int) -> bytes:
        try:
            data = self._bus.read_exactly(self._address, count)
        except ConnectionError as e:
            raise BusTransactionError(str(e)) from e
        if data is None or len(data) != count:
            got = "nothing" if data is None else f"{len(data)} bytes"
            raise BusTransactionError(
                f"Expected {count} bytes from 0x{self._address:02X}, got {got}"
            )
        return data

    def _fail(self, operation: str, error: HTU21DError) -> bool:
        self.last_error = error
        logger.warning("%s failed: %s", operation, error)
        return False

    # ─── measurement ─────────────────────────────────────────────────

    def _measure_temperature(self) -> float:
        self._write(build_trigger_temperature())
        self._sleep_ms(self._resolution.temperature_delay_ms)
        sample = parse_sample(self._read(SAMPLE_SIZE))
        temperature = convert_temperature(sample.raw_value)
        logger.debug("Temperature raw=0x%04X -> %.2f C", sample.raw_value, temperature)
        return temperature

    def _measure_humidity(self, temperature: float) -> float:
        self._write(build_trigger_humidity())
        self._sleep_ms(self._resolution.humidity_delay_ms)
        sample = parse_sample(self._read(SAMPLE_SIZE))
        humidity = compensate_humidity(convert_humidity(sample.raw_value), temperature)
        logger.debug("Humidity raw=0x%04X -> %.2f %%RH", sample.raw_value, humidity)
        return humidity

    def measure(self) -> bool:
        """Measure temperature, then humidity compensated by that temperature.

        Both stored values are cleared first. If the temperature step fails
        the humidity step is skipped.

        Returns:
            True if both values were read and validated.
        """
        self.last_error = None
        self._reading = Reading()

        try:
            temperature = self._measure_temperature()
        except HTU21DError as e:
            return self._fail("Temperature measurement", e)
        self._reading = Reading(temperature=temperature)

        try:
            humidity = self._measure_humidity(temperature)
        except HTU21DError as e:
            return self._fail("Humidity measurement", e)
        self._reading = Reading(temperature=temperature, humidity=humidity)

        return True

    # ─── configuration ───────────────────────────────────────────────

    def set_resolution(self, resolution: Resolution) -> bool:
        """Write the configuration register to select ``resolution``.

        The cached resolution is updated only when the write completes.
        """
        self.last_error = None
        try:
            self._write(build_write_config(resolution))
        except HTU21DError as e:
            return self._fail("Set resolution", e)

        self._resolution = resolution
        logger.info("Resolution set to %s", resolution.name)
        return True

    def reset(self) -> bool:
        """Soft-reset the sensor and verify the configuration register.

        On success the cached resolution returns to the default. On failure
        the cached resolution and readings are left as they were.
        """
        self.last_error = None
        try:
            self._write(build_soft_reset())
            self._sleep_ms(RESET_DELAY_MS)
            self._write(build_read_config(), stop=False)
            value = self._read(1)[0]
            if value != CONFIG_DEFAULT:
                raise ConfigurationVerificationError(value, CONFIG_DEFAULT)
        except HTU21DError as e:
            return self._fail("Reset", e)

        self._resolution = Resolution.default()
        logger.info("Sensor at 0x%02X reset", self._address)
        return True

    def begin(self) -> bool:
        """Open the bus and reset the sensor."""
        self.last_error = None
        try:
            self._bus.open()
        except ConnectionError as e:
            return self._fail("Open bus", BusTransactionError(str(e)))

        self._initialized = self.reset()
        return self._initialized
