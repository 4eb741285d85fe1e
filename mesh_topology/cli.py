#!/usr/bin/env python3
"""
Command-line interface for the mesh topology checker.

This module handles the CLI side of things: argument parsing, loading files,
pretty printing and exit codes. The analysis itself lives in the rest of the
package and can be imported and used programmatically.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import AnalysisConfig
from .constants import (
    DEGENERATE_POLICIES,
    DEGENERATE_POLICY,
    FLOATER_THRESHOLD_PERCENT,
    MAX_LISTED_EDGES,
    SUPPORTED_MESH_EXTENSIONS,
    __version__
)
from .json_utils import dumps_compact_arrays
from .mesh import load_mesh
from .topology_report import TopologyResult, analyze_topology, result_to_dict

# Create Rich consoles for output and errors
console = Console()
error_console = Console(stderr=True)


def is_mesh_file(filepath: Path) -> bool:
    """Check if a file is a supported mesh format."""
    return filepath.suffix.lower() in SUPPORTED_MESH_EXTENSIONS


def collect_mesh_files(paths: Sequence[str], recurse: bool = False) -> List[Path]:
    """
    Expand the paths given on the command line into a list of mesh files.

    Files are taken as-is (so an unsupported extension still gets a proper
    load error later); directories contribute every mesh file inside them.
    """
    files: List[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            candidates = path.rglob('*') if recurse else path.iterdir()
            files.extend(sorted(f for f in candidates if f.is_file() and is_mesh_file(f)))
        else:
            files.append(path)
    return files


def analyze_files(
    files: Sequence[Path],
    config: AnalysisConfig
) -> Tuple[List[TopologyResult], List[Dict[str, str]]]:
    """
    Load and analyze each mesh file.

    Returns:
        Tuple of (results for files that loaded, failures as
        {'input_file', 'error'} dicts)
    """
    results: List[TopologyResult] = []
    failures: List[Dict[str, str]] = []

    for path in files:
        try:
            mesh = load_mesh(path)
            results.append(analyze_topology(mesh, config))
        except (FileNotFoundError, ValueError) as e:
            # InvalidGeometry is a ValueError too
            failures.append({'input_file': str(path), 'error': str(e)})

    return results, failures


def build_summary_table(results: Sequence[TopologyResult]) -> Table:
    """One row per analyzed mesh."""
    table = Table(title="Topology Summary", box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Mesh", style="bold yellow")
    table.add_column("Status")
    table.add_column("Triangles", justify="right")
    table.add_column("Edges", justify="right")
    table.add_column("Boundary", justify="right")
    table.add_column("Non-Manifold", justify="right")
    table.add_column("Components", justify="right")

    for result in results:
        stats = result.stats
        if not result.is_valid:
            status = "[red]❌ FAIL[/red]"
        elif result.warnings:
            status = "[yellow]⚠️  WARN[/yellow]"
        else:
            status = "[green]✅ PASS[/green]"
        table.add_row(
            result.mesh_name,
            status,
            f"{stats.get('triangles', 0):,}",
            f"{stats.get('edges', 0):,}",
            str(stats.get('boundary_edges', 0)),
            str(stats.get('non_manifold_edges', 0)),
            str(stats.get('components', 0))
        )

    return table


def _print_details(result: TopologyResult) -> None:
    if not result.errors and not result.warnings:
        return
    console.print(f"[bold]{result.mesh_name}[/bold]")
    for error in result.errors:
        console.print(f"  [red]❌ {error}[/red]", highlight=False)
    for warning in result.warnings:
        console.print(f"  [yellow]⚠️  {warning}[/yellow]", highlight=False)
    console.print()


def _enable_verbose_logging() -> None:
    # Only touch our own package logger so we don't fight other configs
    package_logger = logging.getLogger('mesh_topology')
    package_logger.setLevel(logging.DEBUG)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('   [TOPOLOGY] %(name)s: %(message)s'))
        package_logger.addHandler(handler)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main CLI entry point."""

    parser = argparse.ArgumentParser(
        description="Check triangle meshes for topology defects that break 3D printing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s model.stl
  %(prog)s part_a.obj part_b.3mf --json
  %(prog)s exports/ --recurse --degenerate flag

Checks performed:
  - Non-manifold edges (shared by 3+ faces)
  - Boundary edges (holes - the mesh isn't watertight)
  - Disconnected floating components
  - Degenerate triangles (with --degenerate flag/reject)
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show program's version number and exit"
    )

    parser.add_argument(
        "paths",
        nargs='+',
        help="Mesh files (STL, OBJ, PLY, OFF, 3MF, ...) or folders containing them"
    )

    parser.add_argument(
        "--recurse",
        action="store_true",
        help="Search folders recursively for mesh files"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of tables"
    )

    parser.add_argument(
        "--degenerate",
        type=str,
        choices=list(DEGENERATE_POLICIES),
        default=DEGENERATE_POLICY,
        help="How to treat triangles with repeated vertex indices: 'count' them like any other, "
             "'flag' them as warnings, or 'reject' the mesh (default: %(default)s)"
    )

    parser.add_argument(
        "--floater-threshold",
        type=float,
        default=FLOATER_THRESHOLD_PERCENT,
        help="Components smaller than this percentage of all faces are reported as floaters "
             "(default: %(default)s)"
    )

    parser.add_argument(
        "--max-edges",
        type=int,
        default=MAX_LISTED_EDGES,
        help="Maximum number of bad edges listed per mesh (default: %(default)s)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging from the analysis"
    )

    args = parser.parse_args(argv)

    try:
        config = AnalysisConfig(
            degenerate_policy=args.degenerate,
            floater_threshold=args.floater_threshold,
            max_listed_edges=args.max_edges
        )
    except ValueError as e:
        error_console.print(f"[red]❌ Error: Invalid configuration: {e}[/red]")
        sys.exit(1)

    if args.verbose:
        _enable_verbose_logging()

    files = collect_mesh_files(args.paths, recurse=args.recurse)
    if not files:
        error_console.print("[yellow]⚠️  No mesh files found[/yellow]")
        sys.exit(1)

    results, failures = analyze_files(files, config)

    if args.json:
        payload = {
            "results": [result_to_dict(r) for r in results],
            "failed": failures,
        }
        print(dumps_compact_arrays(payload))
    else:
        console.print(Panel.fit(
            "[bold cyan]🔍 Mesh Topology Checker[/bold cyan]",
            border_style="cyan"
        ))
        console.print()

        if results:
            console.print(build_summary_table(results))
            console.print()
            for result in results:
                _print_details(result)

        for failure in failures:
            error_console.print(f"[red]❌ Failed: {failure['input_file']}: {failure['error']}[/red]")

    if failures or any(not r.is_valid for r in results):
        sys.exit(1)


if __name__ == "__main__":
    main()
