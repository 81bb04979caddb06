"""Rendering collaborator interface."""

from typing import Protocol

from itemgroups.core.grouping import PresentationRow
from itemgroups.core.state import FetchState


class Renderer(Protocol):
    """Interface for anything that displays presentation rows."""

    def render(
        self,
        rows: list[PresentationRow],
        state: FetchState,
        expanded: frozenset[int],
    ) -> None:
        """Display the current rows and fetch state."""
        ...
