"""Shared helpers."""

from .crc import crc8, check_crc8
