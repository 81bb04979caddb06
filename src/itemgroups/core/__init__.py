"""Functional core - pure business logic with no I/O."""

from .records import (
    Record,
    is_valid,
    filter_valid,
    record_sort_key,
    sort_records,
    validate_and_sort,
)
from .grouping import (
    GroupHeader,
    GroupMember,
    PresentationRow,
    group_records,
    build_rows,
    toggle_expansion,
    group_keys,
)
from .state import Idle, Loading, Success, Failed, FetchState, describe_state

__all__ = [
    # Records
    "Record",
    "is_valid",
    "filter_valid",
    "record_sort_key",
    "sort_records",
    "validate_and_sort",
    # Grouping
    "GroupHeader",
    "GroupMember",
    "PresentationRow",
    "group_records",
    "build_rows",
    "toggle_expansion",
    "group_keys",
    # Fetch state
    "Idle",
    "Loading",
    "Success",
    "Failed",
    "FetchState",
    "describe_state",
]
