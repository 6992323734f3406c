#!/usr/bin/env python3
"""
CLI entry point for Super I/O device tree generation.

Usage:
    superio-autoport [options] [superiotool [args...]]
    superio-autoport --dump superiotool-d.txt --sort-ldns
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .dump import render_json
from .mapper import sio_to_device_tree
from .models import AutoportError
from .parser import SuperIOParser
from .probe import DEFAULT_COMMAND, read_dump, run_probe
from .tree import render

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate a coreboot devicetree fragment from Super I/O probe output.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--dump",
        type=Path,
        help="Parse a saved probe output file instead of running the probe",
    )
    parser.add_argument(
        "--format",
        choices=["devicetree", "json"],
        default="devicetree",
        help="Output format (default: devicetree)",
    )
    parser.add_argument(
        "--sort-ldns",
        action="store_true",
        help="Emit logical devices in ascending index order",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "probe_command",
        nargs="*",
        default=DEFAULT_COMMAND,
        help="Probe utility and its arguments, '-d' is appended (default: superiotool)",
    )
    args, probe_options = parser.parse_known_args(argv)
    # Options we do not know belong to the probe, e.g. superiotool -V
    args.probe_command = list(args.probe_command) + probe_options
    return args


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )


def generate(args: argparse.Namespace) -> str:
    """Collect probe output, parse it and render the requested format."""
    lines = read_dump(args.dump) if args.dump else run_probe(args.probe_command)
    sio = SuperIOParser().parse(lines)

    if args.format == "json":
        return render_json(sio) + "\n"
    return render(sio_to_device_tree(sio, sort_ldns=args.sort_ldns))


def main(argv: Optional[List[str]] = None) -> None:
    """Probe the Super I/O chip and print its device tree."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        output = generate(args)
    except AutoportError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.stdout.write(output)


if __name__ == "__main__":
    main()
