"""Keyboard handler for the seed-track search box."""

from typing import Optional

from smartlist.core.config import LimitsConfig
from smartlist.domain.playlists.seeds import (
    SeedSelectionState,
    clear_query,
    close_results,
    focus_first,
    focus_last,
    focused_track,
    move_focus,
    open_results,
    remove_last_seed_track,
    select_seed_track,
    set_query,
)


def handle_seed_search_key(
    state: SeedSelectionState, event: dict, limits: LimitsConfig
) -> Optional[SeedSelectionState]:
    """Handle a key event while the seed search box has focus.

    Args:
        state: Current selector state
        event: Parsed key event (see ui.keys.utils.parse_key)
        limits: Seed ceiling for selections

    Returns:
        New state, or None if the key is not handled here
    """
    match event.get("type"):
        case "arrow_down":
            if not state.is_open:
                return open_results(state)
            return move_focus(state, 1)

        case "arrow_up":
            return move_focus(state, -1)

        case "home":
            return focus_first(state)

        case "end":
            return focus_last(state)

        case "enter":
            track = focused_track(state)
            if track is None:
                return state
            return select_seed_track(state, track, limits)

        case "escape":
            return clear_query(state)

        case "tab":
            return close_results(state)

        case "backspace":
            if not state.query:
                return remove_last_seed_track(state)
            return set_query(state, state.query[:-1])

        case "char":
            char = event.get("char")
            if not char:
                return None
            return set_query(state, state.query + char)

        case _:
            return None
