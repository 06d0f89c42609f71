"""
Help-Text Parser

Turns free-form --help output into CommandRecord and FlagRecord lists.

The parser walks the text line by line with a section cursor:

    Commands:                    <- header, sets cursor to "commands"
      build    Build the project <- CommandRecord("build", "Build the project")

    Options:                     <- header, sets cursor to "options"
      -f, --force  Overwrite     <- FlagRecord("--force", "Overwrite")

Records come back in encounter order; deduplication and sorting are the
merge step's job.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from claw_readme.schema import CommandRecord, FlagRecord

SECTION_HEADER = re.compile(r"^(Commands|Usage|Options|Flags):", re.IGNORECASE)

COMMAND_LINE = re.compile(r"^\s{2,}(\w[\w-]*)\s+(.+)$")

FLAG_LINE = re.compile(r"^\s{2,}(-[a-zA-Z0-9-]+(?:,\s+-[a-zA-Z0-9-]+)*)\s+(.+)$")

FLAG_SECTIONS = {"options", "flags"}


@dataclass
class HelpData:
    """Records recovered from one help text."""
    commands: list[CommandRecord] = field(default_factory=list)
    flags: list[FlagRecord] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.commands and not self.flags


def canonical_flag(alternatives: str) -> str:
    """
    Pick the canonical name among comma-separated flag spellings.

    The first long form wins; otherwise the first spelling.

    >>> canonical_flag("-f, --force")
    '--force'
    """
    names = [n.strip() for n in alternatives.split(",")]
    for name in names:
        if name.startswith("--"):
            return name
    return names[0]


def parse_command_line(line: str) -> Optional[CommandRecord]:
    match = COMMAND_LINE.match(line)
    if match:
        return CommandRecord(name=match.group(1), description=match.group(2))
    return None


def parse_flag_line(line: str) -> Optional[FlagRecord]:
    match = FLAG_LINE.match(line)
    if match:
        return FlagRecord(name=canonical_flag(match.group(1)), description=match.group(2))
    return None


def parse_help_output(output: str) -> HelpData:
    """
    Parse --help output into commands and flags.

    Args:
        output: Raw help text

    Returns:
        HelpData with records in encounter order
    """
    result = HelpData()
    section: Optional[str] = None

    for line in output.splitlines():
        stripped = line.strip()

        header = SECTION_HEADER.match(stripped)
        if header:
            section = header.group(1).lower()
            continue

        if not stripped:
            continue

        if section == "commands":
            command = parse_command_line(line)
            if command:
                result.commands.append(command)
        elif section in FLAG_SECTIONS:
            flag = parse_flag_line(line)
            if flag:
                result.flags.append(flag)

    return result
