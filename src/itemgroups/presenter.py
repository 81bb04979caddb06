"""Presentation state holder.

Owns the fetch state, the last good records and the expansion set, and
re-derives the presentation rows from scratch whenever any of them change.
Renderers only read rows and send intents back through the public methods.
"""

import asyncio
import logging
from typing import Callable

from .adapters.errors import FetchError
from .core.grouping import PresentationRow, group_records, toggle_expansion
from .core.records import Record, validate_and_sort
from .core.state import FetchState, Failed, Idle, Loading, Success, describe_state
from .ports.record_source import RecordSource

logger = logging.getLogger(__name__)

Listener = Callable[[list[PresentationRow], FetchState, frozenset[int]], None]


class ItemListPresenter:
    """
    Single owner of all list state.

    At most one fetch is outstanding at a time: request_fetch() while a
    fetch is in flight returns the in-flight task and changes nothing.
    """

    def __init__(self, source: RecordSource, *, retain_on_failure: bool = True):
        self.source = source
        self.retain_on_failure = retain_on_failure
        self._state: FetchState = Idle()
        self._records: tuple[Record, ...] = ()
        self._expanded: frozenset[int] = frozenset()
        self._rows: list[PresentationRow] = []
        self._pending: asyncio.Task | None = None
        self._listeners: list[Listener] = []

    # ============== Read-only state ==============

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def records(self) -> tuple[Record, ...]:
        """Validated, sorted records from the last successful fetch."""
        return self._records

    @property
    def rows(self) -> list[PresentationRow]:
        return list(self._rows)

    @property
    def expanded(self) -> frozenset[int]:
        return self._expanded

    @property
    def error(self) -> str | None:
        if isinstance(self._state, Failed):
            return self._state.description
        return None

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    # ============== Listeners ==============

    def subscribe(self, listener: Listener) -> None:
        """Register a listener and immediately send it the current snapshot."""
        self._listeners.append(listener)
        self._call(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _call(self, listener: Listener) -> None:
        try:
            listener(list(self._rows), self._state, self._expanded)
        except Exception:
            logger.exception(f"Listener {listener!r} failed")

    # ============== Intents ==============

    def request_fetch(self) -> asyncio.Task:
        """
        Start a fetch unless one is already in flight.

        Must be called from a running event loop. Returns the task that
        completes when the (new or already pending) fetch has been applied.
        """
        if self._fetch_in_flight():
            logger.debug("Fetch already in flight, not starting another")
            return self._pending

        loop = asyncio.get_running_loop()
        self._update(state=Loading())
        self._pending = loop.create_task(self._run_fetch())
        return self._pending

    async def load(self) -> None:
        """Request a fetch and wait until its result has been applied."""
        await self.request_fetch()

    def pull_to_refresh(self) -> asyncio.Task:
        """Collapse every group, then re-fetch."""
        self.reset_expansion()
        return self.request_fetch()

    def toggle_group(self, group_key: int) -> None:
        """Expand a collapsed group or collapse an expanded one. No re-fetch."""
        self._update(expanded=toggle_expansion(self._expanded, group_key))

    def reset_expansion(self) -> None:
        """Collapse all groups."""
        self._update(expanded=frozenset())

    def expand_all(self) -> None:
        """Expand every group present in the current records."""
        self._update(expanded=frozenset(r.group_key for r in self._records))

    # ============== Fetch completion ==============

    def _fetch_in_flight(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def on_fetch_succeeded(self, raw_records: list[Record]) -> None:
        """
        Validate and sort fresh records, then show them.

        Ignored while a fetch started by request_fetch() is still pending;
        only that fetch may move the state out of Loading.
        """
        if self._fetch_in_flight():
            logger.warning("Ignoring fetch result reported while another fetch is pending")
            return
        self._apply_success(raw_records)

    def on_fetch_failed(self, description: str) -> None:
        """
        Record the failure; keep or drop old records per retain_on_failure.

        Ignored while a fetch started by request_fetch() is still pending.
        """
        if self._fetch_in_flight():
            logger.warning("Ignoring fetch failure reported while another fetch is pending")
            return
        self._apply_failure(description)

    def _apply_success(self, raw_records: list[Record]) -> None:
        records = tuple(validate_and_sort(list(raw_records)))
        self._update(state=Success(records), records=records)

    def _apply_failure(self, description: str) -> None:
        if self.retain_on_failure:
            self._update(state=Failed(description))
        else:
            self._update(state=Failed(description), records=())

    async def _run_fetch(self) -> None:
        try:
            raw_records = await self.source.fetch_all()
        except FetchError as e:
            logger.warning(f"Fetch failed: {e}")
            self._apply_failure(str(e))
        except asyncio.CancelledError:
            self._apply_failure("Fetch cancelled")
            raise
        except Exception as e:
            logger.exception("Unexpected error while fetching records")
            self._apply_failure(str(e) or "Unknown error occurred")
        else:
            self._apply_success(raw_records)

    # ============== Derivation ==============

    def _update(
        self,
        state: FetchState | None = None,
        records: tuple[Record, ...] | None = None,
        expanded: frozenset[int] | None = None,
    ) -> None:
        """Apply changes, rebuild every row, then notify listeners."""
        if state is not None:
            logger.debug(f"State {describe_state(self._state)} -> {describe_state(state)}")
            self._state = state
        if records is not None:
            self._records = records
        if expanded is not None:
            self._expanded = expanded

        self._rows = group_records(list(self._records), self._expanded)

        for listener in list(self._listeners):
            self._call(listener)
