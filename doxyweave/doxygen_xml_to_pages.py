"""Convert Doxygen XML output to Markdown, HTML or plain text pages.

This module is the command line entry point: it parses arguments, configures
logging and runs the conversion pipeline.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from doxyweave.errors import DoxyweaveError
from doxyweave.escaping import OUTPUT_FORMATS
from doxyweave.run_conversion import run_conversion

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser of the ``doxyweave`` command."""
    ap = argparse.ArgumentParser(
        description="Convert Doxygen XML output to documentation pages.",
    )
    ap.add_argument(
        "xml_dir",
        type=Path,
        help="Directory containing index.xml and the compound XML files",
    )
    ap.add_argument(
        "out_dir",
        type=Path,
        help="Output directory for the generated pages",
    )
    ap.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: from config, else markdown)",
    )
    ap.add_argument(
        "--config",
        help="Path to a YAML configuration file",
    )
    ap.add_argument(
        "--base-url",
        help="URL prefix for generated links (default: /api/)",
    )
    ap.add_argument(
        "--workers",
        type=int,
        help="Threads used to parse and render (default: 1)",
    )
    ap.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages",
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and render without writing files",
    )
    return ap


def main(argv: list[str] | None = None) -> int:
    """Run the conversion process."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run_conversion(args)
    except DoxyweaveError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
