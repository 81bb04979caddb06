"""Hiring API adapter - HTTP client for record fetching."""

import asyncio
import logging

import requests

from itemgroups.config import Config, load_config
from itemgroups.core.records import Record

from .errors import MalformedResponseError, ServerError, TransportError

logger = logging.getLogger(__name__)

ITEMS_ENDPOINT = "/hiring.json"


def parse_records(payload) -> list[Record]:
    """Turn a decoded JSON body into records. A null body means no records."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise MalformedResponseError(
            f"Expected a JSON array, got {type(payload).__name__}"
        )

    records = []
    for index, item in enumerate(payload):
        try:
            records.append(Record.from_api(item))
        except ValueError as e:
            raise MalformedResponseError(f"Malformed record at index {index}: {e}") from e
    return records


class HiringApiSource:
    """
    Hiring API adapter.

    Implements RecordSource protocol. One GET, no auth, no business
    logic - just I/O and error mapping.
    """

    def __init__(self, config: Config | None = None, session: requests.Session | None = None):
        self.config = config or load_config()
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.config.api_base_url.rstrip('/')}{ITEMS_ENDPOINT}"

    def _get_items(self) -> list[Record]:
        """Blocking GET of the items endpoint."""
        url = self.url
        logger.debug(f"GET {url}")

        try:
            resp = self._session.get(url, timeout=self.config.timeouts)
        except requests.Timeout as e:
            raise TransportError(f"Request to {url} timed out") from e
        except requests.ConnectionError as e:
            raise TransportError(f"Could not connect to {url}: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        logger.debug(f"Response {resp.status_code} from {url} ({len(resp.content)} bytes)")

        if not resp.ok:
            raise ServerError(resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response from {url} is not valid JSON") from e

        records = parse_records(payload)
        logger.info(f"Received {len(records)} records from {url}")
        return records

    async def fetch_all(self) -> list[Record]:
        """Fetch all records without blocking the event loop."""
        return await asyncio.to_thread(self._get_items)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HiringApiSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
