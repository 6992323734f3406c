"""Device tree node hierarchy.

Each node class only contributes its own head text; the depth-first
traversal lives in renderer.py.
"""

from __future__ import annotations

from typing import TypeVar

N = TypeVar("N", bound="Node")


class Node:
    """A renderable element with an inline head and ordered children."""

    enclosed = False

    def __init__(self, tag: str, comment: str = "") -> None:
        self.tag = tag
        self.comment = comment
        self.children: list[Node] = []

    def add_child(self, node: N) -> N:
        """Append a child and return it for further configuration."""
        self.children.append(node)
        return node

    def head(self) -> str:
        """Text following the tag on the node's line."""
        return ""

    def head_post(self) -> str:
        """Trailing text after the head, before the comment."""
        return ""

    def comment_line(self, text: str) -> CommentNode:
        return self.add_child(CommentNode(text))


class EnclosedNode(Node):
    """A node whose children are followed by an 'end' line."""

    enclosed = True


class CommentNode(Node):
    """A standalone '# text' line."""

    def __init__(self, text: str) -> None:
        super().__init__("#")
        self.text = text

    def head(self) -> str:
        return f" {self.text}"


class Chip(EnclosedNode):
    def __init__(self, chip_name: str, comment: str = "") -> None:
        super().__init__("chip", comment)
        self.chip_name = chip_name

    def head(self) -> str:
        return f" {self.chip_name}"

    def register(self, name: str, value: str) -> Register:
        return self.add_child(Register(name, value))

    def pci_device(self, device: int, function: int, enabled: bool = True) -> PciDevice:
        return self.add_child(PciDevice(enabled, device, function))

    def pnp_device(self, address: int, id: int, enabled: bool = True) -> PnpDevice:
        return self.add_child(PnpDevice(enabled, address, id))

    def cpu_cluster(self, cluster: int, enabled: bool = True) -> CpuClusterDevice:
        return self.add_child(CpuClusterDevice(enabled, cluster))

    def domain(self, domain: int, enabled: bool = True) -> DomainDevice:
        return self.add_child(DomainDevice(enabled, domain))


class Register(Node):
    """A chip register assignment: register "name" = "value"."""

    def __init__(self, reg_name: str, reg_value: str) -> None:
        super().__init__("register")
        self.reg_name = reg_name
        self.reg_value = reg_value

    def head(self) -> str:
        return f' "{self.reg_name}" = "{self.reg_value}"'


class Device(EnclosedNode):
    """Base for every 'device <bus> ... on|off' block."""

    def __init__(self, bus: str, enabled: bool) -> None:
        super().__init__("device")
        self.bus = bus
        self.enabled = enabled

    def head(self) -> str:
        return f" {self.bus}"

    def head_post(self) -> str:
        return " on" if self.enabled else " off"

    def chip(self, chip_name: str) -> Chip:
        return self.add_child(Chip(chip_name))


class CpuClusterDevice(Device):
    def __init__(self, enabled: bool, cluster: int) -> None:
        super().__init__("cpu_cluster", enabled)
        self.cluster = cluster

    def head(self) -> str:
        return super().head() + f" {self.cluster:x}"


class DomainDevice(Device):
    def __init__(self, enabled: bool, domain: int) -> None:
        super().__init__("domain", enabled)
        self.domain = domain

    def head(self) -> str:
        return super().head() + f" {self.domain:x}"


class Subsystem(Node):
    def __init__(self, vendor: int, product: int) -> None:
        super().__init__("subsystem")
        self.vendor = vendor
        self.product = product

    def head(self) -> str:
        return f" 0x{self.vendor:x} 0x{self.product:x}"


class PciDevice(Device):
    def __init__(self, enabled: bool, device: int, function: int) -> None:
        super().__init__("pci", enabled)
        self.device = device
        self.function = function

    def head(self) -> str:
        return super().head() + " %02x.%x" % (self.device, self.function)

    def subsystem(self, vendor: int, product: int) -> Subsystem:
        return self.add_child(Subsystem(vendor, product))


class Irq(Node):
    def __init__(self, irq_num: int, value: int) -> None:
        super().__init__("irq")
        self.irq_num = irq_num
        self.value = value

    def head(self) -> str:
        return " 0x%02x = 0x%02x" % (self.irq_num, self.value)


class Io(Node):
    def __init__(self, port_num: int, value: int) -> None:
        super().__init__("io")
        self.port_num = port_num
        self.value = value

    def head(self) -> str:
        return " 0x%02x = 0x%04x" % (self.port_num, self.value)


class PnpDevice(Device):
    """A plug-and-play function at <address>.<id> of a Super I/O chip."""

    def __init__(self, enabled: bool, address: int, id: int) -> None:
        super().__init__("pnp", enabled)
        self.address = address
        self.id = id

    def head(self) -> str:
        return super().head() + " %02x.%x" % (self.address, self.id)

    def irq(self, irq_num: int, value: int) -> Irq:
        return self.add_child(Irq(irq_num, value))

    def io(self, port_num: int, value: int) -> Io:
        return self.add_child(Io(port_num, value))


def chip(name: str) -> Chip:
    """Create a root chip node."""
    return Chip(name)


def array_index(name: str, index: int) -> str:
    """Register value referring to an array element, e.g. 'gpe0_dw[1]'."""
    return f"{name}[{index}]"
