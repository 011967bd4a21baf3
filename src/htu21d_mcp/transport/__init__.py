"""Bus transports for talking to the sensor."""

from .i2c_connection import BusTransport, I2CConnection
