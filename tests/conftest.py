"""Shared fixtures for the Super I/O autoport tests."""

import pytest


SAMPLE_DUMP = """\
superiotool r4.12
Found Nuvoton NCT6776 (id=0xc333) at 0x2e
Register dump:
idx 02 07 20 21 22 24 25 26 27 28 2a 2b 2c 2f
val 00 0b c3 33 ff 04 00 00 00 00 00 00 00 00
def 00 00 c3 33 ff 04 00 MM 00 00 c0 00 00 00
LDN 0x07 (GPIO6, GPIO7, GPIO8, GPIO9)
idx 30 e0 e1 e4 e5 ea
val 03 ff 00 NA 7f 00
def 00 ff 00 00 7f 00
LDN 0x02 (COM1)
idx 30 60 61 70 f0
val 01 03 f8 04 00
def 01 03 f8 04 00
LDN 0x05 (Keyboard)
idx 60 61 62 63 70
val 00 60 00 64 01
def 00 60 00 64 01
"""


@pytest.fixture
def sample_lines():
    """Probe output lines as they come out of a text stream."""
    return SAMPLE_DUMP.splitlines(keepends=True)


@pytest.fixture
def sample_dump_file(tmp_path):
    """The sample probe output saved to disk."""
    dump = tmp_path / "superiotool-d.txt"
    dump.write_text(SAMPLE_DUMP, encoding="utf-8")
    return dump
