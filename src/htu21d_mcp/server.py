"""MCP server entry point for the HTU21D sensor.

Exposes the sensor operations as tools and the resolution catalog as a
resource via the Model Context Protocol, using the official Python MCP SDK
with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .config import SensorSettings
from .protocol.commands import Resolution
from .sensor import HTU21D
from .transport.i2c_connection import I2CConnection

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "htu21d",
    instructions="MCP server for the HTU21D temperature and humidity sensor",
)

# Global connection state
_connection: I2CConnection | None = None
_sensor: HTU21D | None = None


def _get_sensor() -> HTU21D:
    """Get the active sensor, raising if not connected."""
    if _sensor is None:
        raise RuntimeError(
            "Not connected to sensor. Use the 'connect' tool first."
        )
    return _sensor


def _error_name(sensor: HTU21D) -> str | None:
    if sensor.last_error is None:
        return None
    return f"{type(sensor.last_error).__name__}: {sensor.last_error}"


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(bus: int | None = None, address: int | None = None) -> dict[str, Any]:
    """Open the I2C bus and initialize the HTU21D.

    Runs a soft reset and checks that the configuration register reads
    back its power-on default.

    Args:
        bus: I2C bus number (default from HTU21D_I2C_BUS, usually 1).
        address: Device address (default from HTU21D_I2C_ADDRESS, 0x40).
    """
    global _connection, _sensor
    if _sensor is not None:
        return {
            "connected": True,
            "message": "Already connected",
            "address": f"0x{_sensor.address:02X}",
        }

    settings = SensorSettings.from_env()
    bus = settings.bus if bus is None else bus
    address = settings.address if address is None else address

    connection = I2CConnection(bus)
    sensor = HTU21D(connection, address=address)
    if not sensor.begin():
        connection.close()
        return {"connected": False, "error": _error_name(sensor)}

    _connection = connection
    _sensor = sensor
    logger.info("Connected to HTU21D at 0x%02X on bus %d", address, bus)
    return {
        "connected": True,
        "bus": bus,
        "address": f"0x{address:02X}",
        "resolution": sensor.resolution.name,
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the I2C bus."""
    global _connection, _sensor
    if _connection is not None:
        _connection.close()
    _connection = None
    _sensor = None
    return {"disconnected": True}


# ─── MEASUREMENT TOOLS ────────────────────────────────────────────────

@mcp.tool()
def measure() -> dict[str, Any]:
    """Measure temperature (C) and compensated relative humidity (%).

    Temperature is always measured first; a failed temperature read skips
    the humidity read. Failed values are reported as null.
    """
    sensor = _get_sensor()
    ok = sensor.measure()
    result: dict[str, Any] = {"ok": ok}
    result.update(sensor.reading.to_dict())
    if not ok:
        result["error"] = _error_name(sensor)
    return result


@mcp.tool()
def get_reading() -> dict[str, Any]:
    """Return the values from the last measurement without touching the bus."""
    return _get_sensor().reading.to_dict()


# ─── CONFIGURATION TOOLS ──────────────────────────────────────────────

@mcp.tool()
def set_resolution(resolution: str) -> dict[str, Any]:
    """Select the measurement resolution.

    Args:
        resolution: One of RH12_T14, RH8_T12, RH10_T13, RH11_T11
                    (humidity bits / temperature bits).
    """
    try:
        selected = Resolution[resolution.upper()]
    except KeyError:
        return {
            "error": f"Unknown resolution '{resolution}'. "
            f"Valid: {[r.name for r in Resolution]}"
        }

    sensor = _get_sensor()
    if not sensor.set_resolution(selected):
        return {"ok": False, "error": _error_name(sensor)}
    return {"ok": True, "resolution": selected.to_dict()}


@mcp.tool()
def get_resolution() -> dict[str, Any]:
    """Return the currently selected resolution."""
    return _get_sensor().resolution.to_dict()


@mcp.tool()
def reset() -> dict[str, Any]:
    """Soft-reset the sensor, restoring the default resolution."""
    sensor = _get_sensor()
    if not sensor.reset():
        return {"ok": False, "error": _error_name(sensor)}
    return {"ok": True, "resolution": sensor.resolution.name}


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("htu21d://catalog/resolutions")
def resource_resolutions() -> str:
    """Available resolutions with bit widths and conversion times."""
    return json.dumps({"resolutions": [r.to_dict() for r in Resolution]})


@mcp.resource("htu21d://config/settings")
def resource_settings() -> str:
    """Bus settings taken from the environment."""
    return json.dumps({"settings": SensorSettings.from_env().to_dict()})


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    settings = SensorSettings.from_env()
    logging.basicConfig(level=settings.log_level)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
