"""Main orchestration script for running Doxygen and generating documentation pages."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> None:
    """Run the full documentation generation pipeline."""
    parser = argparse.ArgumentParser(
        description="Run Doxygen and convert its XML output to documentation pages."
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run development checks (linting, tests) before generating documentation",
    )
    parser.add_argument(
        "--doxyfile",
        type=Path,
        help="Run doxygen with this Doxyfile first (GENERATE_XML must be YES)",
    )
    parser.add_argument(
        "--xml-dir",
        type=Path,
        help="Doxygen XML output directory (default: ./xml)",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        help="Output directory (default: ./docs_out)",
    )
    parser.add_argument(
        "--format",
        choices=("markdown", "html", "text"),
        help="Output format",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and render without writing files",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    args = parser.parse_args()

    root_dir = Path(__file__).parent

    if args.dev:
        print("--- Running Development Checks ---")
        run_command([sys.executable, str(root_dir / "dev.py"), "--ci"])
        print(
            "\nDevelopment checks passed. Proceeding with documentation generation.\n"
        )

    # 1. Generate the XML with doxygen
    if args.doxyfile:
        print("--- Step 1: Running Doxygen ---")
        run_command(["doxygen", args.doxyfile.name], cwd=args.doxyfile.parent)

    # 2. Convert the XML to pages
    print("\n--- Step 2: Converting Doxygen XML ---")
    xml_dir = args.xml_dir or root_dir / "xml"
    out_dir = args.out_dir or root_dir / "docs_out"

    cmd = [
        sys.executable,
        "-m",
        "doxyweave.doxygen_xml_to_pages",
        str(xml_dir),
        str(out_dir),
    ]

    if args.format:
        cmd.extend(["--format", args.format])
    if args.dry_run:
        cmd.append("--dry-run")
    if args.config:
        cmd.extend(["--config", args.config])

    run_command(cmd)

    print(f"\nSUCCESS: Documentation generated in {out_dir}")


if __name__ == "__main__":
    main()
