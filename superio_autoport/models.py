#!/usr/bin/env python3
"""
Data models for Super I/O probing.

Contains the typed chip model produced by the parser and the error types
raised throughout the conversion pipeline.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


class AutoportError(Exception):
    """Base class for every failure of a conversion run."""


class ProbeParseError(AutoportError, ValueError):
    """The probe output does not follow the expected line grammar."""


class MappingError(AutoportError, RuntimeError):
    """The register set of a logical device cannot be mapped to the tree."""


class ProbeError(AutoportError, RuntimeError):
    """The probe utility could not be run or reported a failure."""


@dataclass(frozen=True)
class Register:
    """A single LDN register; value/default are None when unknown."""
    index: int
    value: Optional[int] = None
    default: Optional[int] = None

    def to_dict(self) -> Dict:
        """Convert register to dictionary for JSON serialization."""
        return {
            "index": self.index,
            "value": self.value,
            "default": self.default,
        }


@dataclass(frozen=True)
class LogicalDevice:
    """A logical device number block and its registers, keyed by index."""
    index: int
    names: Tuple[str, ...]
    registers: Dict[int, Register] = field(default_factory=dict)

    @property
    def is_multi_device(self) -> bool:
        """Several sub-devices share this register block."""
        return len(self.names) > 1

    def to_dict(self) -> Dict:
        return {
            "index": self.index,
            "names": list(self.names),
            "registers": [reg.to_dict() for reg in self.registers.values()],
        }


@dataclass(frozen=True)
class SuperIOChip:
    """Root of the parsed model: chip identity plus its logical devices."""
    name: str
    id: int
    base_address: int
    devices: Dict[int, LogicalDevice] = field(default_factory=dict)

    @property
    def tree_name(self) -> str:
        """Chip path fragment, e.g. 'Nuvoton NCT6776' -> 'nuvoton/nct6776'."""
        return self.name.lower().replace(' ', '/')

    def sorted_devices(self) -> List[LogicalDevice]:
        return [self.devices[index] for index in sorted(self.devices)]

    def to_dict(self) -> Dict:
        """Convert chip to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "id": self.id,
            "base_address": self.base_address,
            "devices": [ldn.to_dict() for ldn in self.devices.values()],
        }
