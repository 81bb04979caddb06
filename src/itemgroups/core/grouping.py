"""Pure grouping logic - turns sorted records into presentation rows."""

from dataclasses import dataclass
from typing import Iterable

from .records import Record, validate_and_sort


@dataclass(frozen=True)
class GroupHeader:
    """One header per distinct group key in the validated set."""

    group_key: int
    member_count: int
    expanded: bool = False


@dataclass(frozen=True)
class GroupMember:
    """A single record shown under its (expanded) group header."""

    record: Record


PresentationRow = GroupHeader | GroupMember


def _runs(records: list[Record]) -> list[tuple[int, list[Record]]]:
    """Split records into contiguous runs sharing a group key."""
    runs: list[tuple[int, list[Record]]] = []
    for record in records:
        if runs and runs[-1][0] == record.group_key:
            runs[-1][1].append(record)
        else:
            runs.append((record.group_key, [record]))
    return runs


def group_records(
    sorted_records: list[Record],
    expanded: Iterable[int] = frozenset(),
) -> list[PresentationRow]:
    """
    Build the presentation sequence from validated, sorted records.

    Emits a header for every group (count covers all members, expanded
    or not), followed by member rows only for expanded groups. Input must
    already be sorted by group key; a single pass finds the groups.

    Pure function - no I/O.
    """
    expanded = frozenset(expanded)
    rows: list[PresentationRow] = []

    for group_key, members in _runs(sorted_records):
        is_expanded = group_key in expanded
        rows.append(GroupHeader(group_key, len(members), is_expanded))
        if is_expanded:
            rows.extend(GroupMember(r) for r in members)

    return rows


def build_rows(
    records: list[Record],
    expanded: Iterable[int] = frozenset(),
) -> list[PresentationRow]:
    """
    Full pipeline: validate, sort, group.

    Pure function - no I/O. Same input and expansion set always yields
    the same rows.
    """
    return group_records(validate_and_sort(records), expanded)


def toggle_expansion(expanded: frozenset[int], group_key: int) -> frozenset[int]:
    """Return a new expansion set with group_key flipped."""
    if group_key in expanded:
        return expanded - {group_key}
    return expanded | {group_key}


def group_keys(rows: list[PresentationRow]) -> list[int]:
    """Group keys in display order, one per header."""
    return [row.group_key for row in rows if isinstance(row, GroupHeader)]

