"""Protocol layer: command codes, resolution variants, and sample decoding."""

from .commands import Command, Resolution, build_command
from .parser import RawSample, parse_sample
