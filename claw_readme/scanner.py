"""
Static Source Scanner

This module pattern-matches command and flag literals out of a project's
entry-point source files without executing them. It is lexical analysis
only: patterns run over the whole file text and know nothing about
JavaScript syntax.

Recognized command forms:
    switch (cmd) { case 'build': ... }
    if (args[0] === 'deploy') ...
    if (command === 'init') ...
    if (sub === 'serve') ...

Recognized flag forms:
    args.includes('--force'), argv.indexOf('-v'), x === '--dry-run'
    opts.verbose -> --verbose, flags.f -> -f

Each recognizer is an independent rule, so rules can be tested one by
one. Static findings carry no descriptions; the help probe supplies those.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator

from claw_readme.schema import ProjectManifest

QUOTE = r"['\"`]"

COMMAND_STOPLIST = frozenset({
    "help", "version", "default", "true", "false",
    "command", "cmd", "action", "error", "exit",
})

# Array/string members picked up by the options-property rule.
FLAG_STOPLIST = frozenset({
    "--", "-", "-1", "---", "--help", "-h",
    "--push", "--pop", "--shift", "--unshift", "--slice", "--splice",
    "--map", "--filter", "--reduce", "--forEach", "--find", "--join",
    "--includes", "--indexOf", "--toString", "--length", "--concat",
})

PLACEHOLDER_FLAGS = frozenset({
    "--flag", "--cmd", "--opt", "--arg", "--args", "--foo", "--bar",
})

FLAG_SHAPE = re.compile(r"^-{1,2}[a-zA-Z]")

USAGE_PATTERN = re.compile(r"Usage:[ \t]*(.+)", re.IGNORECASE)


def property_to_flag(prop: str) -> str:
    """
    Convert an options property name to a flag.

    >>> property_to_flag("f")
    '-f'
    >>> property_to_flag("force")
    '--force'
    """
    if prop.startswith("-"):
        return prop
    if len(prop) == 1:
        return f"-{prop}"
    return f"--{prop}"


@dataclass(frozen=True)
class PatternRule:
    """
    One recognizer: a regex whose first group is the candidate.

    Attributes:
        name: Rule identifier, for debugging and tests
        pattern: Compiled regex, applied to the whole text
        normalize: Maps the captured group to the candidate name
    """
    name: str
    pattern: re.Pattern
    normalize: Callable[[str], str] = str

    def candidates(self, text: str) -> Iterator[str]:
        """Yield every raw candidate this rule finds in text."""
        for match in self.pattern.finditer(text):
            yield self.normalize(match.group(1))


COMMAND_RULES: list[PatternRule] = [
    PatternRule("case-label", re.compile(rf"case\s+{QUOTE}(\w+){QUOTE}\s*:")),
    PatternRule("positional-arg", re.compile(rf"args\[0\]\s*===?\s*{QUOTE}(\w+){QUOTE}")),
    PatternRule("command-variable", re.compile(rf"command\s*===?\s*{QUOTE}(\w+){QUOTE}")),
    PatternRule(
        "if-equality",
        re.compile(rf"if\s*\(\s*\w+\s*===?\s*{QUOTE}(\w+){QUOTE}\s*\)"),
    ),
]

FLAG_RULES: list[PatternRule] = [
    PatternRule(
        "flag-literal",
        re.compile(rf"(?:===|==|case|includes\(|indexOf\()\s*{QUOTE}(-{{1,2}}[\w-]+){QUOTE}"),
    ),
    PatternRule(
        "options-property",
        re.compile(r"\b(?:argv|opts|options|flags)\.([a-zA-Z0-9_]+)"),
        normalize=property_to_flag,
    ),
]


def is_command_candidate(name: str) -> bool:
    return bool(name) and name.lower() not in COMMAND_STOPLIST


def is_flag_candidate(flag: str) -> bool:
    """Check a normalized flag against the stoplists and the basic shape."""
    if flag in FLAG_STOPLIST or flag in PLACEHOLDER_FLAGS:
        return False
    return bool(FLAG_SHAPE.match(flag))


def find_commands(text: str, rules: Iterable[PatternRule] = COMMAND_RULES) -> set[str]:
    """Collect command candidates from text."""
    found = set()
    for rule in rules:
        found.update(c for c in rule.candidates(text) if is_command_candidate(c))
    return found


def find_flags(text: str, rules: Iterable[PatternRule] = FLAG_RULES) -> set[str]:
    """Collect flag candidates from text."""
    found = set()
    for rule in rules:
        found.update(f for f in rule.candidates(text) if is_flag_candidate(f))
    return found


def find_usage(text: str) -> str:
    """Get the trailing text of the first "Usage:" line, or ""."""
    match = USAGE_PATTERN.search(text)
    if match:
        return match.group(1).strip()
    return ""


@dataclass
class StaticFindings:
    """
    Aggregate of one static scan.

    Attributes:
        commands: Command names (set semantics)
        flags: Normalized flag names (set semantics)
        usage: Captured usage lines, first occurrence per file
        files_scanned: Files that were actually read
    """
    commands: set[str] = field(default_factory=set)
    flags: set[str] = field(default_factory=set)
    usage: list[str] = field(default_factory=list)
    files_scanned: list[Path] = field(default_factory=list)

    def add_text(self, text: str) -> None:
        self.commands |= find_commands(text)
        self.flags |= find_flags(text)
        usage = find_usage(text)
        if usage and usage not in self.usage:
            self.usage.append(usage)


def candidate_files(manifest: ProjectManifest, root_path: Path) -> list[Path]:
    """
    Get the files worth scanning: the main entry plus every bin target.

    Paths are resolved against root_path and de-duplicated in order.
    Existence is not checked here.

    Args:
        manifest: The loaded manifest
        root_path: Project directory

    Returns:
        Absolute paths, main entry first
    """
    root_path = Path(root_path).resolve()
    paths: list[Path] = []
    for relative in [manifest.main, *manifest.bin.values()]:
        path = (root_path / relative).resolve()
        if path not in paths:
            paths.append(path)
    return paths


def scan_sources(paths: Iterable[Path]) -> StaticFindings:
    """
    Scan source files for commands, flags and usage lines.

    Missing or unreadable files are skipped silently.

    Args:
        paths: Files to scan

    Returns:
        StaticFindings for all readable files
    """
    findings = StaticFindings()
    for path in paths:
        if not path.is_file():
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        findings.files_scanned.append(path)
        findings.add_text(text)
    return findings
