"""Seed-track selection state for similar_to rules - immutable state updates.

Holds the ordered, duplicate-free list of chosen seed track IDs together with
the search box that feeds it. Display data for every track ever chosen is
cached by ID, so a track removed and then picked again is shown without
another search round-trip.

Search responses are matched to requests by sequence number: every keystroke
and every issued search bumps search_seq, and a response is only applied
when it carries the latest number. Older responses are dropped on arrival.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from loguru import logger

from smartlist.core.config import LimitsConfig

from .values import SimilarityValue


@dataclass(frozen=True)
class SeedTrack:
    """Denormalized display data for a track shown as a seed chip or result."""

    id: str
    title: str
    artist_name: str
    album_title: str = ""
    cover_art_url: Optional[str] = None
    duration_ms: int = 0
    formatted_duration: str = ""
    genres: tuple[str, ...] = ()


@dataclass(frozen=True)
class SeedSelectionState:
    """Immutable seed selector state."""

    track_ids: tuple[str, ...] = ()
    track_cache: dict[str, SeedTrack] = field(default_factory=dict)

    # Search box
    query: str = ""
    is_open: bool = False
    focused_index: int = -1  # -1 = no result focused
    results: tuple[SeedTrack, ...] = ()
    search_query: str = ""  # Query of the latest issued search
    search_seq: int = 0
    is_loading: bool = False
    status_message: Optional[str] = None  # Inline, non-blocking search error
    min_score: Optional[float] = None  # Carried through to the rule value


def create_seed_state(
    value: Optional[SimilarityValue] = None,
    known_tracks: Iterable[SeedTrack] = (),
) -> SeedSelectionState:
    """Create selector state for an existing similar_to value."""
    track_ids = value.track_ids if value else ()
    return SeedSelectionState(
        track_ids=tuple(dict.fromkeys(track_ids)),
        track_cache={track.id: track for track in known_tracks},
        min_score=value.min_score if value else None,
    )


def to_similarity_value(state: SeedSelectionState) -> SimilarityValue:
    """Rule value for the current selection, in selection order."""
    return SimilarityValue(track_ids=state.track_ids, min_score=state.min_score)


def is_max_reached(state: SeedSelectionState, limits: LimitsConfig) -> bool:
    return len(state.track_ids) >= limits.max_seed_tracks


def selected_tracks(state: SeedSelectionState) -> list[SeedTrack]:
    """Cached display data for the selected tracks, in selection order.

    IDs without cached data (e.g. loaded from a saved playlist) are skipped.
    """
    return [
        state.track_cache[track_id]
        for track_id in state.track_ids
        if track_id in state.track_cache
    ]


def select_seed_track(
    state: SeedSelectionState, track: SeedTrack, limits: LimitsConfig
) -> SeedSelectionState:
    """Append a track to the selection and cache its display data.

    Selecting a track that is already selected, or selecting while at
    max_seed_tracks, leaves the state unchanged.
    """
    if track.id in state.track_ids or is_max_reached(state, limits):
        return state

    cache = dict(state.track_cache)
    cache[track.id] = track
    return replace(
        state,
        track_ids=state.track_ids + (track.id,),
        track_cache=cache,
        query="",
        focused_index=-1,
    )


def remove_seed_track(state: SeedSelectionState, track_id: str) -> SeedSelectionState:
    """Remove a track from the selection. Its cached display data is kept."""
    if track_id not in state.track_ids:
        return state
    return replace(
        state,
        track_ids=tuple(t for t in state.track_ids if t != track_id),
    )


def remove_last_seed_track(state: SeedSelectionState) -> SeedSelectionState:
    """Remove the most recently added track (backspace on an empty query)."""
    if not state.track_ids:
        return state
    return remove_seed_track(state, state.track_ids[-1])


def set_query(state: SeedSelectionState, text: str) -> SeedSelectionState:
    """Record typed text and open the result list.

    Bumps the sequence number so a response for an earlier query can no
    longer be applied.
    """
    return replace(
        state,
        query=text,
        is_open=True,
        search_seq=state.search_seq + 1,
    )


def open_results(state: SeedSelectionState) -> SeedSelectionState:
    return replace(state, is_open=True)


def close_results(state: SeedSelectionState) -> SeedSelectionState:
    return replace(state, is_open=False, focused_index=-1)


def clear_query(state: SeedSelectionState) -> SeedSelectionState:
    """Close the result list and empty the search box."""
    return replace(
        state,
        query="",
        is_open=False,
        focused_index=-1,
        search_seq=state.search_seq + 1,
    )


def move_focus(state: SeedSelectionState, delta: int) -> SeedSelectionState:
    """Move result focus by delta, clamped to the result list (no wrapping)."""
    if not state.results:
        return state
    new_index = max(0, min(state.focused_index + delta, len(state.results) - 1))
    return replace(state, focused_index=new_index)


def focus_first(state: SeedSelectionState) -> SeedSelectionState:
    if not state.results:
        return state
    return replace(state, focused_index=0)


def focus_last(state: SeedSelectionState) -> SeedSelectionState:
    if not state.results:
        return state
    return replace(state, focused_index=len(state.results) - 1)


def focused_track(state: SeedSelectionState) -> Optional[SeedTrack]:
    if 0 <= state.focused_index < len(state.results):
        return state.results[state.focused_index]
    return None


def dropdown_visible(state: SeedSelectionState, min_query_length: int) -> bool:
    """Whether the result list should be shown."""
    return state.is_open and len(state.search_query) >= min_query_length


def begin_search(
    state: SeedSelectionState, query: str
) -> tuple[SeedSelectionState, int]:
    """Issue a search for a settled query.

    Returns:
        (new_state, seq) - seq must accompany the response
    """
    seq = state.search_seq + 1
    return (
        replace(
            state,
            search_query=query,
            search_seq=seq,
            is_loading=True,
            status_message=None,
        ),
        seq,
    )


def receive_search_results(
    state: SeedSelectionState, seq: int, results: Iterable[SeedTrack]
) -> SeedSelectionState:
    """Apply a search response unless a newer query has superseded it."""
    if seq != state.search_seq:
        logger.debug(f"Dropping stale seed search response (seq={seq}, latest={state.search_seq})")
        return state
    return replace(
        state,
        results=tuple(results),
        focused_index=-1,
        is_loading=False,
        status_message=None,
    )


def receive_search_error(
    state: SeedSelectionState, seq: int, message: str
) -> SeedSelectionState:
    """Show a failed search as an inline message. The selection is untouched."""
    if seq != state.search_seq:
        return state
    return replace(
        state,
        results=(),
        focused_index=-1,
        is_loading=False,
        status_message=message,
    )


def reset_search(state: SeedSelectionState) -> SeedSelectionState:
    """Forget results when the settled query is too short to search."""
    return replace(
        state,
        results=(),
        search_query="",
        focused_index=-1,
        is_loading=False,
        status_message=None,
    )
