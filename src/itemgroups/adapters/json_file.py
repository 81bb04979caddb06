"""File-based record source adapter."""

import asyncio
import json
import logging
from pathlib import Path

from itemgroups.core.records import Record

from .errors import MalformedResponseError, TransportError
from .hiring_api import parse_records

logger = logging.getLogger(__name__)


class JsonFileSource:
    """
    Local JSON file record source.

    Implements RecordSource protocol. Reads the same JSON array the
    hiring endpoint serves; the file is re-read on every fetch.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read(self) -> list[Record]:
        try:
            text = self.path.read_text()
        except OSError as e:
            raise TransportError(f"Could not read {self.path}: {e.strerror or e}") from e

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"{self.path} is not valid JSON: {e}") from e

        records = parse_records(payload)
        logger.info(f"Read {len(records)} records from {self.path}")
        return records

    async def fetch_all(self) -> list[Record]:
        """Read all records from the file."""
        return await asyncio.to_thread(self._read)

    def close(self) -> None:
        """Nothing to release; the file is opened per fetch."""
