"""Text rendering of presentation rows."""

import click

from .core.grouping import GroupHeader, GroupMember, PresentationRow
from .core.state import FetchState, Failed, Idle, Loading, Success

EXPANDED_MARKER = "▾"
COLLAPSED_MARKER = "▸"


def format_row(row: PresentationRow) -> str:
    """
    Format a single row for display.

    Pure function - no I/O.
    """
    match row:
        case GroupHeader(group_key=key, member_count=count, expanded=expanded):
            marker = EXPANDED_MARKER if expanded else COLLAPSED_MARKER
            noun = "item" if count == 1 else "items"
            return f"{marker} List ID: {key} ({count} {noun})"
        case GroupMember(record=record):
            return f"    {record.name}  (Item ID: {record.id})"
    raise TypeError(f"Unknown row type: {row!r}")


def format_rows(rows: list[PresentationRow]) -> str:
    """Format all rows, one per line."""
    return "\n".join(format_row(r) for r in rows)


def row_to_dict(row: PresentationRow) -> dict:
    """JSON-friendly representation of a row."""
    match row:
        case GroupHeader(group_key=key, member_count=count, expanded=expanded):
            return {"type": "header", "list_id": key, "count": count, "expanded": expanded}
        case GroupMember(record=record):
            return {
                "type": "item",
                "id": record.id,
                "list_id": record.group_key,
                "name": record.name,
            }
    raise TypeError(f"Unknown row type: {row!r}")


class TerminalRenderer:
    """
    Prints rows and fetch status with click.

    Implements Renderer protocol.
    """

    def __init__(self, empty_msg: str = "No items to show."):
        self.empty_msg = empty_msg

    def render(
        self,
        rows: list[PresentationRow],
        state: FetchState,
        expanded: frozenset[int],
    ) -> None:
        match state:
            case Idle():
                return
            case Loading():
                click.echo("Loading...")
                return
            case Failed(description=description):
                click.echo(f"Error: {description}", err=True)
            case Success():
                pass

        if rows:
            click.echo(format_rows(rows))
        elif isinstance(state, Success):
            click.echo(self.empty_msg)
