"""Data models for sensor readings."""

from .reading import Reading
