"""Record source interface."""

from typing import Protocol

from itemgroups.core.records import Record


class RecordSource(Protocol):
    """Interface for fetching raw records from any backend."""

    async def fetch_all(self) -> list[Record]:
        """Fetch every record. Raises FetchError on failure."""
        ...

    def close(self) -> None:
        """Release any resources held by the source."""
        ...
