"""
Tests for the probe output parser.

Covers chip identification, LDN block grouping, value decoding and the
structural errors that abort a run.
"""

import logging

import pytest

from superio_autoport.models import ProbeParseError, Register
from superio_autoport.parser import (
    SuperIOParser,
    decode_int,
    decode_value,
    parse_probe_output,
)


class TestValueDecoding:
    """Register value and number decoding."""

    @pytest.mark.parametrize("token", ["NA", "RR", "MM"])
    def test_sentinels_are_unknown(self, token):
        """Unreadable register tokens decode to None, not zero."""
        assert decode_value(token) is None

    def test_bare_and_prefixed_hex(self):
        """Tokens decode as hex with or without a 0x prefix."""
        assert decode_value("0f") == 0x0F
        assert decode_value("ff") == 0xFF
        assert decode_value("0x1f") == 0x1F
        assert decode_value("00") == 0

    def test_values_are_truncated_to_a_byte(self):
        """Decoded values keep only the low 8 bits."""
        assert decode_value("1ff") == 0xFF
        assert decode_value("0x123") == 0x23

    def test_round_trip_of_every_byte(self):
        """Re-encoding a decoded byte and decoding it again is stable."""
        for byte in range(256):
            assert decode_value(f"{byte:02x}") == byte
            assert decode_value(f"0x{byte:02X}") == byte

    def test_invalid_token(self):
        """Garbage in a value row is a structural error."""
        with pytest.raises(ProbeParseError):
            decode_value("zz")

    @pytest.mark.parametrize("token", ["1_f", "+f", "-1", " 0f", "0f ", "0x", ""])
    def test_malformed_hex_tokens_are_rejected(self, token):
        """Only plain hex digits, optionally 0x prefixed, are register values."""
        with pytest.raises(ProbeParseError, match="Invalid hex token"):
            decode_value(token)

    @pytest.mark.parametrize("token", ["1_0", "+46", "4e", ""])
    def test_decode_int_rejects_garbage(self, token):
        """Id and address must be clean hex or decimal numbers."""
        with pytest.raises(ProbeParseError):
            decode_int(token)

    def test_invalid_register_index(self):
        """Index rows are held to the same hex rule."""
        lines = [
            "Found A (id=0x1) at 0x2e",
            "LDN 0x02 (COM1)",
            "idx 30 6_0",
            "val 01 03",
            "def 01 03",
        ]
        with pytest.raises(ProbeParseError, match="6_0"):
            parse_probe_output(lines)

    def test_decode_int_hex_and_decimal(self):
        """Chip id and address accept hex and decimal notation."""
        assert decode_int("0xc333") == 0xC333
        assert decode_int("0X2E") == 0x2E
        assert decode_int("#4e") == 0x4E
        assert decode_int("46") == 46


class TestSuperIOParser:
    """Parsing of complete probe dumps."""

    def test_chip_identification(self, sample_lines):
        """The Found line yields name, id and base address."""
        sio = parse_probe_output(sample_lines)

        assert sio.name == "Nuvoton NCT6776"
        assert sio.id == 0xC333
        assert sio.base_address == 0x2E
        assert sio.tree_name == "nuvoton/nct6776"

    def test_ldn_blocks(self, sample_lines):
        """Each 4-line block becomes one logical device, in input order."""
        sio = parse_probe_output(sample_lines)

        assert list(sio.devices) == [0x07, 0x02, 0x05]

        gpio = sio.devices[0x07]
        assert gpio.names == ("GPIO6", "GPIO7", "GPIO8", "GPIO9")
        assert gpio.is_multi_device

        com1 = sio.devices[0x02]
        assert com1.names == ("COM1",)
        assert not com1.is_multi_device
        assert list(com1.registers) == [0x30, 0x60, 0x61, 0x70, 0xF0]
        assert com1.registers[0x60] == Register(0x60, 0x03, 0x03)
        assert com1.registers[0x61] == Register(0x61, 0xF8, 0xF8)

    def test_unknown_values_stay_unknown(self, sample_lines):
        """NA values are kept as None next to a known default."""
        sio = parse_probe_output(sample_lines)

        reg = sio.devices[0x07].registers[0xE4]
        assert reg.value is None
        assert reg.default == 0x00

    def test_global_register_dump_is_skipped(self, sample_lines):
        """The idx/val/def rows before the first LDN are not a device."""
        sio = parse_probe_output(sample_lines)

        assert 0x20 not in sio.devices
        assert len(sio.devices) == 3

    def test_reads_a_lazy_iterator_once(self, sample_lines):
        """A one-shot generator is enough as input."""
        sio = SuperIOParser().parse(line for line in sample_lines)
        assert len(sio.devices) == 3

    def test_minimal_fragment(self):
        """The smallest dump: one chip and one LDN."""
        lines = [
            "Found ChipX (id=0x1234) at 0x2e",
            "LDN 0x07 GPIO, GPIO2",
            "idx 30 60 61 62 63",
            "val 01 NA 0f 00 00",
            "def 00 00 0f 00 00",
        ]
        sio = parse_probe_output(lines)

        assert sio.name == "ChipX"
        assert sio.id == 0x1234
        ldn = sio.devices[0x07]
        assert set(ldn.registers) == {0x30, 0x60, 0x61, 0x62, 0x63}
        assert ldn.registers[0x60].value is None
        assert ldn.registers[0x61].value == 0x0F
        assert ldn.is_multi_device

    def test_decimal_identification(self):
        """Id and address may be printed in decimal."""
        sio = parse_probe_output(["Found Foo Bar (id=4660) at 46"])

        assert sio.id == 4660
        assert sio.base_address == 46
        assert sio.devices == {}

    def test_missing_found_line(self):
        """Output without a detected chip aborts the run."""
        with pytest.raises(ProbeParseError, match="No Super I/O chip"):
            parse_probe_output(["superiotool r4.12", "No Super I/O found"])

    def test_malformed_found_line(self):
        """A Found line that does not match the grammar is rejected."""
        with pytest.raises(ProbeParseError, match="Malformed"):
            parse_probe_output(["Found something odd"])

    @pytest.mark.parametrize("row, keyword", [(1, "idx"), (2, "val"), (3, "def")])
    def test_wrong_row_keyword(self, row, keyword):
        """Every block row must start with its keyword."""
        block = ["LDN 0x02 (COM1)", "idx 30 60", "val 01 03", "def 01 03"]
        block[row] = "xyz 30 60"

        with pytest.raises(ProbeParseError, match=f"Expected '{keyword}'"):
            parse_probe_output(["Found A (id=0x1) at 0x2e"] + block)

    def test_misaligned_rows(self):
        """Index, value and default rows must have the same length."""
        lines = [
            "Found A (id=0x1) at 0x2e",
            "LDN 0x02 (COM1)",
            "idx 30 60 61",
            "val 01 03",
            "def 01 03 f8",
        ]
        with pytest.raises(ProbeParseError, match="do not line up"):
            parse_probe_output(lines)

    def test_trailing_partial_block_is_dropped(self, sample_lines):
        """Fewer than four lines after the last block are ignored."""
        lines = sample_lines + ["LDN 0x0a (ACPI)\n", "idx 30 70\n"]
        sio = parse_probe_output(lines)

        assert 0x0A not in sio.devices
        assert len(sio.devices) == 3

    def test_duplicate_ldn_last_one_wins(self, caplog):
        """A repeated LDN index replaces the earlier block with a warning."""
        lines = [
            "Found A (id=0x1) at 0x2e",
            "LDN 0x02 (COM1)", "idx 30", "val 00", "def 00",
            "LDN 0x02 (COM1)", "idx 30", "val 01", "def 00",
        ]
        with caplog.at_level(logging.WARNING):
            sio = parse_probe_output(lines)

        assert sio.devices[0x02].registers[0x30].value == 0x01
        assert "reported twice" in caplog.text
