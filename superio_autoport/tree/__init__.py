"""Device tree nodes and rendering."""

from .nodes import (
    Chip,
    CommentNode,
    CpuClusterDevice,
    Device,
    DomainDevice,
    EnclosedNode,
    Io,
    Irq,
    Node,
    PciDevice,
    PnpDevice,
    Register,
    Subsystem,
    array_index,
    chip,
)
from .renderer import render

__all__ = [
    "Chip",
    "CommentNode",
    "CpuClusterDevice",
    "Device",
    "DomainDevice",
    "EnclosedNode",
    "Io",
    "Irq",
    "Node",
    "PciDevice",
    "PnpDevice",
    "Register",
    "Subsystem",
    "array_index",
    "chip",
    "render",
]
