"""Super I/O probe output to coreboot devicetree conversion."""

from .mapper import sio_to_device_tree
from .models import (
    AutoportError,
    LogicalDevice,
    MappingError,
    ProbeError,
    ProbeParseError,
    Register,
    SuperIOChip,
)
from .parser import SuperIOParser, parse_probe_output

__all__ = [
    "AutoportError",
    "LogicalDevice",
    "MappingError",
    "ProbeError",
    "ProbeParseError",
    "Register",
    "SuperIOChip",
    "SuperIOParser",
    "parse_probe_output",
    "sio_to_device_tree",
]
