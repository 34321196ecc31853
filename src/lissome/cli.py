"""
Command-line interface for lissome.

    lissome build            # Compile src/*.gleam to JavaScript and bundle it
    lissome build --minify   # Same, with minified bundles

Set LISSOME_VERBOSE=1 to see the toolchain commands and every written file.
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from lissome import __version__
from lissome.build import BuildResult, run_build
from lissome.errors import BuildError
from lissome.output import init_timer, log_header, set_verbose


@dataclass
class BuildArgs:
    """Arguments for the build command."""

    project_dir: Path
    minify: bool = False
    verbose: bool = False


def _summary_table(result: BuildResult) -> Table:
    table = Table(title="Gleam entry modules", show_header=True, header_style="bold")
    table.add_column("Module")
    table.add_column("Entry file")
    for entry in result.entries:
        table.add_row(entry.name.split(".entry.")[0], str(entry))
    return table


def build_command(args: BuildArgs, console: Optional[Console] = None) -> int:
    """Run the JavaScript build and report the outcome.

    Returns:
        Process exit code: 0 on success or nothing to do, 1 on a build error,
        130 when interrupted
    """
    console = console if console is not None else Console()
    init_timer()
    set_verbose(args.verbose)
    log_header("lissome", __version__)

    try:
        result = run_build(args.project_dir, minify=args.minify)
    except BuildError as e:
        console.print()
        console.print("[bold red]✗ JavaScript build failed[/bold red]")
        console.print(e.message, markup=False, highlight=False)
        return 1
    except KeyboardInterrupt:
        console.print()
        console.print("[bold yellow]✗ Build interrupted[/bold yellow]")
        return 130

    if result.skipped:
        console.print("[dim]Nothing to build[/dim]")
        return 0

    console.print()
    console.print("[bold green]✓ JavaScript build successful![/bold green]")
    if result.entries:
        console.print(_summary_table(result))
    return 0


def main() -> None:
    """lissome - Gleam to JavaScript build pipeline."""
    parser = argparse.ArgumentParser(
        prog="lissome",
        description="Compile Gleam sources to JavaScript and bundle them with esbuild",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    build_parser = subparsers.add_parser(
        "build",
        help="Compile and bundle the gleam frontend",
    )
    build_parser.add_argument(
        "--minify",
        action="store_true",
        help="Minify the bundled output",
    )

    parsed_args = parser.parse_args()

    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    verbose = os.environ.get("LISSOME_VERBOSE", "") not in ("", "0")
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if parsed_args.command == "build":
        args = BuildArgs(project_dir=Path.cwd(), minify=parsed_args.minify, verbose=verbose)
        sys.exit(build_command(args))


if __name__ == "__main__":
    main()
