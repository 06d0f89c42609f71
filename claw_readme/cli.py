"""
claw-readme Command-Line Interface

This module provides the CLI entry point. It orchestrates the full
pipeline: analysis -> rendering -> output.

Usage:
    claw-readme                     # Analyze the current directory
    claw-readme ./my-project        # Analyze a specific directory
    claw-readme --stdout            # Preview without writing
    claw-readme --json              # Dump the analysis as JSON
    claw-readme --force --badges    # Overwrite README.md, add badges
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from claw_readme import __version__
from claw_readme.analyzer import AnalysisOptions, analyze_project
from claw_readme.errors import ClawReadmeError, ReadmeExists, TargetNotFound
from claw_readme.renderer import RenderOptions, render_json, render_readme

README_FILENAME = "README.md"


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="claw-readme",
        description="claw-readme: Generate README.md from code analysis.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  claw-readme                    # Analyze current directory\n"
            "  claw-readme ./my-project       # Analyze specific directory\n"
            "  claw-readme --stdout           # Preview without writing\n"
            "  claw-readme --force            # Overwrite existing README\n"
            "  claw-readme --badges           # Include GitHub badges\n"
            "\n"
            "What it analyzes:\n"
            "  package.json (name, description, scripts, bin)\n"
            "  Entry point (CLI commands, flags, usage patterns)\n"
            "  Existing LICENSE file\n"
            "  Git remote for badges\n"
            "  CLI --help output (dynamic analysis)\n"
        ),
    )

    parser.add_argument(
        "path",
        type=str,
        nargs="?",
        default=".",
        help="Path to the project to analyze (default: current directory)",
    )

    # Output modes
    parser.add_argument(
        "-j", "--json",
        action="store_true",
        help="Output analysis as JSON (no file write)",
    )

    parser.add_argument(
        "-s", "--stdout",
        action="store_true",
        help="Print README to stdout (no file write)",
    )

    parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite existing README.md",
    )

    # Content options
    parser.add_argument(
        "-b", "--badges",
        action="store_true",
        help="Include GitHub badges",
    )

    # Analysis options
    parser.add_argument(
        "--no-probe",
        action="store_true",
        help="Do not run the program with --help",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Help probe timeout (default: 2.0, or $CLAW_README_PROBE_TIMEOUT)",
    )

    parser.add_argument(
        "--node",
        type=str,
        default=None,
        metavar="PATH",
        help="Interpreter for the help probe (default: node, or $CLAW_README_NODE)",
    )

    # Verbosity
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed progress information",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all output except errors",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def log(message: str, quiet: bool = False) -> None:
    """Print a status message to stderr."""
    if not quiet:
        print(f"[claw-readme] {message}", file=sys.stderr)


def log_verbose(message: str, verbose: bool, quiet: bool) -> None:
    """Print a message only in verbose mode."""
    if verbose and not quiet:
        print(f"  {message}", file=sys.stderr)


def run_pipeline(
    repo_path: Path,
    analysis_options: AnalysisOptions,
    render_options: RenderOptions,
    json_output: bool = False,
    to_stdout: bool = False,
    force: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> int:
    """
    Run the full claw-readme pipeline.

    Args:
        repo_path: Project directory
        analysis_options: Probe configuration
        render_options: Rendering options
        json_output: Print the analysis as JSON instead of a README
        to_stdout: Print the README instead of writing it
        force: Overwrite an existing README.md
        verbose: Show detailed progress
        quiet: Suppress non-error output

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    output_path = repo_path / README_FILENAME
    writes_file = not (json_output or to_stdout)

    try:
        if not repo_path.is_dir():
            raise TargetNotFound(f"Directory not found: {repo_path}")

        if writes_file and output_path.exists() and not force:
            raise ReadmeExists(
                f"{README_FILENAME} already exists. "
                "Use --force to overwrite or --stdout to preview."
            )

        log("Analyzing project...", quiet=quiet or json_output)
        result = analyze_project(
            repo_path,
            analysis_options,
            reporter=lambda message: log_verbose(message, verbose, quiet),
        )
    except ClawReadmeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if json_output:
        print(render_json(result))
        return 0

    readme_content = render_readme(result, render_options)

    if to_stdout:
        print(readme_content)
        return 0

    try:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(readme_content)
    except OSError as e:
        print(f"Error writing file: {e}", file=sys.stderr)
        return 1

    size = len(readme_content.encode("utf-8"))
    log(f"Generated {README_FILENAME} ({size} bytes)", quiet=quiet)
    log(f"  {result.name} v{result.version}", quiet=quiet)
    if result.commands:
        names = ", ".join(c.name for c in result.commands)
        log(f"  Commands: {names}", quiet=quiet)
    if result.repository:
        log(f"  GitHub: {result.repository.slug}", quiet=quiet)

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    repo_path = Path(args.path).resolve()

    analysis_options = AnalysisOptions.from_env(
        probe=False if args.no_probe else None,
        probe_timeout=args.timeout,
        interpreter=args.node,
    )
    render_options = RenderOptions(include_badges=args.badges)

    return run_pipeline(
        repo_path=repo_path,
        analysis_options=analysis_options,
        render_options=render_options,
        json_output=args.json,
        to_stdout=args.stdout,
        force=args.force,
        verbose=args.verbose,
        quiet=args.quiet,
    )


if __name__ == "__main__":
    sys.exit(main())
