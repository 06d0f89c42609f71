"""
Merge Engine

Reconciles static scanner findings with records parsed from --help
output. Both sources are keyed by name; the dynamic source always wins
on conflict, because a program's own help text is more authoritative
than a regex over its source.

Usage:
    index = RecordIndex()
    index.seed(static_names)
    index.overlay(dynamic_records)
    merged = index.records(CommandRecord)
"""

from typing import Iterable, Type, TypeVar, Union

from claw_readme.schema import CommandRecord, FlagRecord

Record = Union[CommandRecord, FlagRecord]
R = TypeVar("R", CommandRecord, FlagRecord)


class RecordIndex:
    """
    Ordered name -> description mapping with source priority.

    seed() only inserts names that are not present yet; overlay() always
    overwrites. records() returns entries sorted by name.
    """

    def __init__(self):
        self._descriptions: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._descriptions)

    def __contains__(self, name: str) -> bool:
        return name in self._descriptions

    def seed(self, names: Iterable[str]) -> None:
        """Insert static names with empty descriptions."""
        for name in names:
            if name:
                self._descriptions.setdefault(name, "")

    def overlay(self, records: Iterable[Record]) -> None:
        """Insert dynamic records, replacing any existing entry."""
        for record in records:
            if record.name:
                self._descriptions[record.name] = record.description

    def records(self, record_type: Type[R]) -> tuple[R, ...]:
        """
        Emit the entries as records sorted ascending by name.

        Args:
            record_type: CommandRecord or FlagRecord

        Returns:
            Tuple of record_type instances
        """
        return tuple(
            record_type(name=name, description=self._descriptions[name])
            for name in sorted(self._descriptions)
        )


def merge_records(
    static_names: Iterable[str],
    dynamic_records: Iterable[R],
    record_type: Type[R],
) -> tuple[R, ...]:
    """
    Merge static names and dynamic records into a sorted, unique tuple.

    Args:
        static_names: Names from the static scanner
        dynamic_records: Records from the help parser
        record_type: Type of the records to emit

    Returns:
        Records sorted by name, dynamic descriptions taking precedence
    """
    index = RecordIndex()
    index.seed(static_names)
    index.overlay(dynamic_records)
    return index.records(record_type)


def merge_commands(
    static_names: Iterable[str],
    dynamic_records: Iterable[CommandRecord],
) -> tuple[CommandRecord, ...]:
    return merge_records(static_names, dynamic_records, CommandRecord)


def merge_flags(
    static_names: Iterable[str],
    dynamic_records: Iterable[FlagRecord],
) -> tuple[FlagRecord, ...]:
    return merge_records(static_names, dynamic_records, FlagRecord)
