#!/usr/bin/env python3
"""
Super I/O model to device tree mapping.

Interprets LDN registers (enable mask, I/O port pairs, IRQ-like settings)
and builds the chip/device/irq/io node tree.
"""

import logging
from typing import List

from .models import LogicalDevice, MappingError, Register, SuperIOChip
from .tree import Chip, PnpDevice, chip

logger = logging.getLogger(__name__)

ROOT_CHIP = "superio/common"
ENABLE_REGISTER = 0x30
PORT_REGISTERS = range(0x60, 0x64)
PORT_HIGH_REGISTERS = (0x60, 0x62)
SUBDEVICE_STRIDE = 0x100

# Registers owned by each sub-device of a shared LDN, keyed by sub-device id
ID_TO_REGS = {
    # GPIO7
    107: (0xE0, 0xE1),
    # GPIO3
    109: (0xE4, 0xE5, 0xEA),
    # GPIO4
    209: (0xF0, 0xF1),
    # GPIO5
    309: (0xF4, 0xF5),
}


def mask_extract_ones(mask: int) -> List[int]:
    """Bit positions set in an 8-bit mask, least significant first."""
    return [bit for bit in range(8) if (mask >> bit) & 1]


def is_port_register(index: int) -> bool:
    return index in PORT_REGISTERS


def sub_device_id(bit: int, ldn_index: int) -> int:
    """Synthetic id of the sub-device enabled by a mask bit (e.g. 0x107)."""
    return SUBDEVICE_STRIDE * bit + ldn_index


def ldn_reg_to_device_tree(device: PnpDevice, ldn: LogicalDevice, reg: Register) -> None:
    """Add the irq/io element for a single register, if it yields one."""
    if reg.value is None:
        return

    if not is_port_register(reg.index):
        device.irq(reg.index, reg.value)
        return

    if reg.index not in PORT_HIGH_REGISTERS:
        # Low byte, consumed together with its high byte
        return

    low_index = reg.index + 1
    low_reg = ldn.registers.get(low_index)
    if low_reg is None:
        raise MappingError(
            f"LDN 0x{ldn.index:02x}: expected register 0x{low_index:02x}, but not found"
        )
    if low_reg.value is None:
        raise MappingError(
            f"LDN 0x{ldn.index:02x}: expected register 0x{low_index:02x}, but value not found"
        )

    port = ((reg.value << 8) | low_reg.value) & 0xFFFF
    device.io(reg.index, port)


def ldn_regs_to_device_tree(device: PnpDevice, ldn: LogicalDevice) -> None:
    """Fill a sub-device with the registers that belong to it."""
    if not ldn.is_multi_device:
        for reg in ldn.registers.values():
            ldn_reg_to_device_tree(device, ldn, reg)
        return

    owned = ID_TO_REGS.get(device.id)
    if owned is None:
        logger.debug(f"No register table for sub-device 0x{device.id:x}, leaving it empty")
        return

    for index, reg in ldn.registers.items():
        if index in owned:
            ldn_reg_to_device_tree(device, ldn, reg)


def ldn_to_device_tree(parent: Chip, sio: SuperIOChip, ldn: LogicalDevice) -> None:
    """Add one pnp device per enabled sub-device of an LDN."""
    enable_mask = ldn.registers.get(ENABLE_REGISTER)
    if enable_mask is None or enable_mask.value is None:
        # No enable register observed, assume disabled
        logger.debug(f"LDN 0x{ldn.index:02x} ({', '.join(ldn.names)}) has no enable mask")
        parent.pnp_device(sio.base_address, ldn.index, False)
        return

    for bit in mask_extract_ones(enable_mask.value):
        device_id = sub_device_id(bit, ldn.index)
        logger.debug(f"LDN 0x{ldn.index:02x}: enabling sub-device 0x{device_id:x}")
        device = parent.pnp_device(sio.base_address, device_id)
        ldn_regs_to_device_tree(device, ldn)


def sio_to_device_tree(sio: SuperIOChip, sort_ldns: bool = False) -> Chip:
    """Build the full device tree for a probed chip."""
    root = chip(ROOT_CHIP)
    config = root.pnp_device(sio.base_address, 0)
    sio_chip = config.chip(f"superio/{sio.tree_name}")

    ldns = sio.sorted_devices() if sort_ldns else list(sio.devices.values())
    for ldn in ldns:
        ldn_to_device_tree(sio_chip, sio, ldn)

    return root
