"""Last measurement held by the sensor engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Reading:
    """Temperature in degrees Celsius and relative humidity in percent.

    ``None`` means no valid value: nothing measured yet, or the last
    measurement cycle failed before producing it.
    """

    temperature: float | None = None
    humidity: float | None = None

    def to_dict(self) -> dict:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
        }
