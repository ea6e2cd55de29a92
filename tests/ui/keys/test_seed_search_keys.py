"""Tests for the seed search keyboard contract."""

from dataclasses import replace

import pytest

from smartlist.core.config import LimitsConfig
from smartlist.domain.playlists.seeds import SeedSelectionState, SeedTrack
from smartlist.ui.keys.seed_search import handle_seed_search_key


def _track(track_id: str) -> SeedTrack:
    return SeedTrack(id=track_id, title=track_id, artist_name="Artist")


@pytest.fixture
def limits() -> LimitsConfig:
    return LimitsConfig(max_seed_tracks=3)


@pytest.fixture
def open_state() -> SeedSelectionState:
    """Open dropdown showing three results, nothing focused."""
    return SeedSelectionState(
        query="bo",
        is_open=True,
        results=(_track("a"), _track("b"), _track("c")),
        search_query="bo",
    )


def press(state, limits, key_type, **extra):
    return handle_seed_search_key(state, {"type": key_type, **extra}, limits)


class TestNavigation:
    def test_arrow_down_opens_closed_list(self, open_state, limits):
        closed = replace(open_state, is_open=False)
        state = press(closed, limits, "arrow_down")
        assert state.is_open
        assert state.focused_index == -1

    def test_arrow_down_ceiling(self, open_state, limits):
        state = open_state
        for _ in range(5):
            state = press(state, limits, "arrow_down")
        assert state.focused_index == 2

    def test_arrow_up_floor(self, open_state, limits):
        state = press(open_state, limits, "end")
        for _ in range(5):
            state = press(state, limits, "arrow_up")
        assert state.focused_index == 0

    def test_home_end(self, open_state, limits):
        assert press(open_state, limits, "end").focused_index == 2
        assert press(open_state, limits, "home").focused_index == 0


class TestSelection:
    def test_enter_selects_focused(self, open_state, limits):
        state = press(press(open_state, limits, "arrow_down"), limits, "enter")
        assert state.track_ids == ("a",)
        assert state.query == ""

    def test_enter_without_focus_is_noop(self, open_state, limits):
        assert press(open_state, limits, "enter") is open_state

    def test_enter_on_selected_track_is_noop(self, open_state, limits):
        state = replace(open_state, track_ids=("a",), focused_index=0)
        assert press(state, limits, "enter") is state

    def test_enter_at_max_is_noop(self, open_state, limits):
        state = replace(open_state, track_ids=("x", "y", "z"), focused_index=0)
        assert press(state, limits, "enter") is state


class TestEditing:
    def test_escape_closes_and_clears(self, open_state, limits):
        state = press(replace(open_state, focused_index=1), limits, "escape")
        assert state.query == ""
        assert not state.is_open
        assert state.focused_index == -1

    def test_tab_closes_only(self, open_state, limits):
        state = press(open_state, limits, "tab")
        assert not state.is_open
        assert state.query == "bo"

    def test_backspace_on_empty_query_removes_last_chip(self, limits):
        state = SeedSelectionState(track_ids=("a", "b"))
        assert press(state, limits, "backspace").track_ids == ("a",)

    def test_backspace_edits_query(self, open_state, limits):
        state = press(replace(open_state, track_ids=("a",)), limits, "backspace")
        assert state.query == "b"
        assert state.track_ids == ("a",)

    def test_char_appends(self, open_state, limits):
        assert press(open_state, limits, "char", char="a").query == "boa"

    def test_unknown_key_not_handled(self, open_state, limits):
        assert press(open_state, limits, "page_down") is None
