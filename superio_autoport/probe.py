#!/usr/bin/env python3
"""
Probe utility plumbing.

Runs the Super I/O probing tool in diagnostic mode, or reads a dump saved
from an earlier run.
"""

import logging
import subprocess
from pathlib import Path
from typing import Iterator, List, Sequence

from .models import ProbeError

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = ["superiotool"]
DIAGNOSTIC_FLAG = "-d"


def run_probe(command: Sequence[str]) -> List[str]:
    """Run the probe with the diagnostic flag and return its output lines."""
    cmd = list(command) + [DIAGNOSTIC_FLAG]
    logger.info(f"Running probe: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
        )
    except OSError as e:
        raise ProbeError(f"Cannot run {cmd[0]}: {e}") from e
    except UnicodeDecodeError as e:
        raise ProbeError(f"{cmd[0]} printed output that is not UTF-8: {e}") from e

    if result.returncode != 0:
        logger.debug(f"Probe stdout: {result.stdout}")
        raise ProbeError(
            f"{' '.join(cmd)} exited with status {result.returncode}: {result.stderr.strip()}"
        )

    return result.stdout.splitlines()


def read_dump(path: Path) -> Iterator[str]:
    """Yield the lines of a saved probe output file."""
    logger.info(f"Reading probe dump from {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            yield from f
    except OSError as e:
        raise ProbeError(f"Cannot read dump {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ProbeError(f"Dump {path} is not UTF-8 text: {e}") from e
