"""HTU21D temperature and humidity sensor driver with an MCP server."""

from .sensor import HTU21D
from .protocol.commands import Resolution
from .models.reading import Reading
