#!/usr/bin/env python3
"""
Parser for the diagnostic dump of a Super I/O probing utility.

The dump starts with a chip identification line followed by one block of
four lines per logical device:

    Found Nuvoton NCT6776 (id=0xc333) at 0x2e
    LDN 0x07 (GPIO6, GPIO7, GPIO8, GPIO9)
    idx 30 60 61 e0 e1
    val 01 NA 0f 00 ff
    def 00 00 0f 00 ff
"""

import logging
import re
from itertools import islice
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .models import LogicalDevice, ProbeParseError, Register, SuperIOChip

logger = logging.getLogger(__name__)

# Tokens the probe prints for registers it could not read
UNKNOWN_TOKENS = frozenset({'NA', 'RR', 'MM'})

LDN_GROUP_SIZE = 4

HEX_TOKEN = re.compile(r'(?:0[xX])?([0-9a-fA-F]+)')
DECIMAL_TOKEN = re.compile(r'[0-9]+')


def parse_hex(token: str) -> int:
    """Parse hex digits with an optional 0x prefix, nothing else."""
    match = HEX_TOKEN.fullmatch(token)
    if not match:
        raise ProbeParseError(f"Invalid hex token: {token!r}")
    return int(match.group(1), 16)


def decode_value(token: str) -> Optional[int]:
    """Decode a register byte; None means the probe did not know it."""
    if token in UNKNOWN_TOKENS:
        return None
    return parse_hex(token) & 0xFF


def decode_int(token: str) -> int:
    """Decode a hex (0x or # prefixed) or decimal number."""
    if token.startswith('#'):
        return parse_hex(token[1:])
    if token[:2] in ('0x', '0X'):
        return parse_hex(token)
    if not DECIMAL_TOKEN.fullmatch(token):
        raise ProbeParseError(f"Invalid number: {token!r}")
    return int(token, 10)


class SuperIOParser:
    """
    Line-oriented parser turning probe output into a SuperIOChip.

    Lines are consumed from a single iterator, so a lazily produced
    sequence (e.g. a pipe) is read only once.
    """

    def __init__(self):
        self.found_pattern = re.compile(r'Found (.*) \(id=(.*)\) at (.*)')
        self.names_separator = re.compile(r',\s+')

    def parse(self, lines: Iterable[str]) -> SuperIOChip:
        """Parse the whole dump. Raises ProbeParseError on malformed input."""
        iterator = (line.rstrip('\r\n') for line in lines)

        name, chip_id, base_address = self._parse_found(iterator)
        logger.debug(f"Found chip {name} id=0x{chip_id:04x} at 0x{base_address:x}")

        devices: Dict[int, LogicalDevice] = {}
        for group in self._ldn_groups(iterator):
            ldn = self._parse_ldn_group(group)
            if ldn.index in devices:
                logger.warning(f"LDN 0x{ldn.index:02x} reported twice, keeping the last block")
            devices[ldn.index] = ldn

        logger.info(f"Parsed {len(devices)} logical device(s) for {name}")
        return SuperIOChip(name=name, id=chip_id, base_address=base_address, devices=devices)

    def _parse_found(self, iterator: Iterator[str]) -> Tuple[str, int, int]:
        """Skip to the 'Found' line and extract name, id and address."""
        for line in iterator:
            if not line.startswith('Found '):
                continue
            match = self.found_pattern.fullmatch(line)
            if not match:
                raise ProbeParseError(f"Malformed chip identification line: {line!r}")
            name, id_string, address_string = match.groups()
            return name, decode_int(id_string), decode_int(address_string)

        raise ProbeParseError("No Super I/O chip found in probe output")

    def _ldn_groups(self, iterator: Iterator[str]) -> Iterator[List[str]]:
        """Yield complete 4-line LDN groups; a trailing partial group is dropped."""
        first = next((line for line in iterator if line.startswith('LDN ')), None)
        if first is None:
            return

        group = [first] + list(islice(iterator, LDN_GROUP_SIZE - 1))
        while len(group) == LDN_GROUP_SIZE:
            yield group
            group = list(islice(iterator, LDN_GROUP_SIZE))

        if group:
            logger.debug(f"Ignoring {len(group)} trailing line(s) after last LDN block")

    def _parse_ldn_group(self, group: List[str]) -> LogicalDevice:
        ldn_line, idx_line, val_line, def_line = group

        index, names = self._parse_ldn_header(ldn_line)
        indices = [parse_hex(token) for token in self._row_tokens(idx_line, 'idx')]
        values = [decode_value(token) for token in self._row_tokens(val_line, 'val')]
        defaults = [decode_value(token) for token in self._row_tokens(def_line, 'def')]

        if not len(indices) == len(values) == len(defaults):
            raise ProbeParseError(
                f"LDN 0x{index:02x}: {len(indices)} indices, {len(values)} values "
                f"and {len(defaults)} defaults do not line up"
            )

        registers = {
            reg_index: Register(reg_index, value, default)
            for reg_index, value, default in zip(indices, values, defaults)
        }
        return LogicalDevice(index=index, names=names, registers=registers)

    def _parse_ldn_header(self, line: str) -> Tuple[int, Tuple[str, ...]]:
        """Parse 'LDN <hex index> (<name>, <name>...)'."""
        parts = line.split(' ', 2)
        if len(parts) < 3:
            raise ProbeParseError(f"LDN line without device names: {line!r}")
        _, index_string, other = parts

        index = parse_hex(index_string)

        # Strip the enclosing delimiters, e.g. the parentheses
        names = tuple(self.names_separator.split(other[1:-1]))
        return index, names

    def _row_tokens(self, line: str, keyword: str) -> List[str]:
        tokens = line.split()
        if not tokens or tokens[0] != keyword:
            raise ProbeParseError(f"Expected '{keyword}' line, got: {line!r}")
        return tokens[1:]


def parse_probe_output(lines: Iterable[str]) -> SuperIOChip:
    """Convenience wrapper around SuperIOParser.parse."""
    return SuperIOParser().parse(lines)
