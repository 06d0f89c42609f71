"""
Analysis Pipeline

Runs every analysis stage against a project directory and returns the
merged AnalysisResult:

    manifest -> repository -> {help probe -> help parser} + {static scan}
             -> merge -> AnalysisResult

Only manifest problems are fatal (ManifestMissing, ManifestInvalid).
Every other stage degrades to "no data" on failure.

Configuration:
    AnalysisOptions.from_env() reads:
        - CLAW_README_NODE: interpreter used for the help probe
        - CLAW_README_PROBE_TIMEOUT: probe timeout in seconds
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from claw_readme.errors import TargetNotFound
from claw_readme.help_parser import HelpData, parse_help_output
from claw_readme.manifest import load_manifest
from claw_readme.merge import merge_commands, merge_flags
from claw_readme.probe import DEFAULT_INTERPRETER, DEFAULT_TIMEOUT, run_help
from claw_readme.repository import identify_repository
from claw_readme.scanner import candidate_files, scan_sources
from claw_readme.schema import AnalysisResult

Reporter = Callable[[str], None]


@dataclass
class AnalysisOptions:
    """
    Configuration for the analysis pipeline.

    Attributes:
        probe: Run the program with --help
        probe_timeout: Probe wall-clock limit in seconds
        interpreter: Executable used to run the entry file
    """
    probe: bool = True
    probe_timeout: float = DEFAULT_TIMEOUT
    interpreter: str = DEFAULT_INTERPRETER

    @classmethod
    def from_env(cls, **overrides) -> "AnalysisOptions":
        """
        Build options from environment variables, then apply overrides.

        Unparseable values fall back to the defaults. Overrides set to
        None are ignored.
        """
        options = cls()

        interpreter = os.environ.get("CLAW_README_NODE")
        if interpreter:
            options.interpreter = interpreter

        timeout = os.environ.get("CLAW_README_PROBE_TIMEOUT")
        if timeout:
            try:
                options.probe_timeout = float(timeout)
            except ValueError:
                pass

        for key, value in overrides.items():
            if value is not None:
                setattr(options, key, value)
        return options


def _silent(message: str) -> None:
    pass


def _display_path(path: Path, root_path: Path) -> str:
    try:
        return str(path.relative_to(root_path))
    except ValueError:
        return str(path)


def analyze_project(
    root_path: Path,
    options: Optional[AnalysisOptions] = None,
    reporter: Optional[Reporter] = None,
) -> AnalysisResult:
    """
    Analyze a Node.js project directory.

    Args:
        root_path: Project directory
        options: Pipeline options (defaults if not provided)
        reporter: Called with one-line progress details

    Returns:
        The merged AnalysisResult

    Raises:
        TargetNotFound: If root_path is not a directory
        ManifestMissing: If package.json does not exist
        ManifestInvalid: If package.json is not a JSON object
    """
    options = options or AnalysisOptions()
    report = reporter or _silent
    root_path = Path(root_path).resolve()

    if not root_path.is_dir():
        raise TargetNotFound(f"Directory not found: {root_path}")

    manifest = load_manifest(root_path)
    report(f"Manifest: {manifest.name} v{manifest.version}")

    repository = identify_repository(manifest, root_path)
    if repository:
        report(f"Repository: {repository.slug}")

    # Dynamic analysis
    dynamic = HelpData()
    main_file = root_path / manifest.main
    if not options.probe:
        report("Help probe disabled")
    elif main_file.is_file():
        output = run_help(
            main_file,
            root_path,
            timeout=options.probe_timeout,
            interpreter=options.interpreter,
        )
        dynamic = parse_help_output(output)
        report(
            f"Help probe: {len(dynamic.commands)} commands, "
            f"{len(dynamic.flags)} flags"
        )
    else:
        report(f"Help probe skipped: {manifest.main} not found")

    # Static analysis
    findings = scan_sources(candidate_files(manifest, root_path))
    for path in findings.files_scanned:
        report(f"Scanned {_display_path(path, root_path)}")
    report(
        f"Static scan: {len(findings.commands)} commands, "
        f"{len(findings.flags)} flags"
    )

    return AnalysisResult(
        manifest=manifest,
        commands=merge_commands(findings.commands, dynamic.commands),
        flags=merge_flags(findings.flags, dynamic.flags),
        usage=tuple(findings.usage),
        repository=repository,
        has_license_file=(root_path / "LICENSE").is_file(),
    )
