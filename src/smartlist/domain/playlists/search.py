"""Debounced seed-track search.

SeedSearchController owns a SeedSelectionState and drives it from an event
loop: keystrokes go in through type_query() / handle_key(), and tick() is
called regularly to fire settled searches and apply finished ones. Searches
run on an executor so the loop never blocks on the network.

In-flight requests are never aborted; a response that arrives after a newer
keystroke is simply dropped by the sequence check in seeds.py.
"""

import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional, Protocol

from loguru import logger

from smartlist.api.exceptions import SmartlistAPIError
from smartlist.core.config import LimitsConfig, SearchConfig
from smartlist.ui.keys.seed_search import handle_seed_search_key
from smartlist.utils.debounce import Debouncer

from .seeds import (
    SeedSelectionState,
    SeedTrack,
    begin_search,
    receive_search_error,
    receive_search_results,
    remove_seed_track,
    reset_search,
    select_seed_track,
    set_query,
    to_similarity_value,
)
from .values import SimilarityValue


class SeedSearchBackend(Protocol):
    def search_seed_tracks(self, query: str, limit: int) -> list[SeedTrack]: ...


class SeedSearchController:
    """Debounce, dispatch and sequence seed-track searches."""

    def __init__(
        self,
        client: SeedSearchBackend,
        search_config: SearchConfig,
        limits: LimitsConfig,
        executor: Optional[Executor] = None,
        clock: Callable[[], float] = time.monotonic,
        state: Optional[SeedSelectionState] = None,
    ) -> None:
        self.client = client
        self.search_config = search_config
        self.limits = limits
        self.state = state or SeedSelectionState()
        self._debouncer: Debouncer[str] = Debouncer(search_config.debounce_ms, clock)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="seed-search"
        )
        self._in_flight: dict[int, Future] = {}

    @property
    def value(self) -> SimilarityValue:
        return to_similarity_value(self.state)

    def type_query(self, text: str) -> None:
        """Record the search box text after a keystroke."""
        self.state = set_query(self.state, text)
        self._debouncer.push(text)

    def handle_key(self, event: dict) -> bool:
        """Route a key event through the keyboard contract.

        Returns:
            True if the event was handled
        """
        new_state = handle_seed_search_key(self.state, event, self.limits)
        if new_state is None:
            return False
        if new_state.query != self.state.query:
            self._debouncer.push(new_state.query)
        self.state = new_state
        return True

    def select(self, track: SeedTrack) -> None:
        self.state = select_seed_track(self.state, track, self.limits)

    def remove(self, track_id: str) -> None:
        self.state = remove_seed_track(self.state, track_id)

    def tick(self) -> SeedSelectionState:
        """Fire a settled search and apply any finished responses."""
        settled, query = self._debouncer.poll()
        if settled:
            self._dispatch((query or "").strip())
        self._harvest()
        return self.state

    @property
    def is_idle(self) -> bool:
        return not self._in_flight and not self._debouncer.has_pending

    def close(self) -> None:
        self._debouncer.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def _dispatch(self, query: str) -> None:
        if len(query) < self.search_config.min_query_length:
            self.state = reset_search(self.state)
            return

        self.state, seq = begin_search(self.state, query)
        logger.debug(f"Seed search #{seq}: {query!r}")
        self._in_flight[seq] = self._executor.submit(
            self.client.search_seed_tracks, query, self.search_config.result_limit
        )

    def _harvest(self) -> None:
        for seq, future in list(self._in_flight.items()):
            if not future.done():
                continue
            del self._in_flight[seq]
            try:
                results = future.result()
            except SmartlistAPIError as e:
                logger.warning(f"Seed search #{seq} failed: {e}")
                self.state = receive_search_error(
                    self.state, seq, "Search failed. Keep typing to retry."
                )
                continue
            self.state = receive_search_results(self.state, seq, results)
