"""
Dynamic Help Probe

Runs the analyzed program with --help and captures what it prints. This
is best-effort: a missing interpreter, a crash or a hang all produce an
empty string, and the pipeline falls back to static findings.
"""

import os
import subprocess
from pathlib import Path

DEFAULT_TIMEOUT = 2.0
DEFAULT_INTERPRETER = "node"
HELP_ARGUMENT = "--help"

# Ask common terminal-colour libraries (chalk, colors, kleur) for plain text.
NO_COLOR_ENV = {"FORCE_COLOR": "0", "NO_COLOR": "1"}


def build_help_command(main_file: Path, interpreter: str = DEFAULT_INTERPRETER) -> list[str]:
    """Get the argv used to ask the program for its help text."""
    return [interpreter, str(main_file), HELP_ARGUMENT]


def run_help(
    main_file: Path,
    root_path: Path,
    timeout: float = DEFAULT_TIMEOUT,
    interpreter: str = DEFAULT_INTERPRETER,
) -> str:
    """
    Execute the program's help invocation and return its stdout.

    stderr and the exit code are ignored. On timeout the child is killed
    and any partial output is discarded.

    Args:
        main_file: Entry file to run (must exist)
        root_path: Working directory for the child process
        timeout: Wall-clock limit in seconds
        interpreter: Executable that runs main_file

    Returns:
        Captured stdout, or "" if the probe failed
    """
    env = {**os.environ, **NO_COLOR_ENV}

    try:
        result = subprocess.run(
            build_help_command(main_file, interpreter),
            cwd=root_path,
            env=env,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError, ValueError):
        return ""

    return result.stdout or ""
