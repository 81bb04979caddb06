"""Fetch lifecycle states."""

from dataclasses import dataclass

from .records import Record


@dataclass(frozen=True)
class Idle:
    """No fetch has been requested yet."""


@dataclass(frozen=True)
class Loading:
    """A fetch is in flight."""


@dataclass(frozen=True)
class Success:
    """Last fetch succeeded; records are validated and sorted."""

    records: tuple[Record, ...] = ()


@dataclass(frozen=True)
class Failed:
    """Last fetch failed."""

    description: str


FetchState = Idle | Loading | Success | Failed


def describe_state(state: FetchState) -> str:
    """Short human-readable label for a fetch state."""
    match state:
        case Idle():
            return "idle"
        case Loading():
            return "loading"
        case Success(records=records):
            return f"loaded {len(records)} records"
        case Failed(description=description):
            return f"failed: {description}"
    raise TypeError(f"Unknown fetch state: {state!r}")
