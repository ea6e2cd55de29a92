"""Tests for seed-track selection state."""

import pytest

from smartlist.core.config import LimitsConfig
from smartlist.domain.playlists.seeds import (
    SeedSelectionState,
    SeedTrack,
    begin_search,
    create_seed_state,
    dropdown_visible,
    move_focus,
    receive_search_error,
    receive_search_results,
    remove_last_seed_track,
    remove_seed_track,
    reset_search,
    select_seed_track,
    selected_tracks,
    set_query,
    to_similarity_value,
)
from smartlist.domain.playlists.values import SimilarityValue


def _track(track_id: str) -> SeedTrack:
    return SeedTrack(id=track_id, title=f"Title {track_id}", artist_name="Artist")


@pytest.fixture
def limits() -> LimitsConfig:
    return LimitsConfig(max_seed_tracks=5)


@pytest.fixture
def two_seeds(limits) -> SeedSelectionState:
    state = SeedSelectionState()
    state = select_seed_track(state, _track("t1"), limits)
    return select_seed_track(state, _track("t2"), limits)


class TestSelection:
    def test_select_appends_and_caches(self, two_seeds):
        assert two_seeds.track_ids == ("t1", "t2")
        assert [t.id for t in selected_tracks(two_seeds)] == ["t1", "t2"]

    def test_reselect_is_noop(self, two_seeds, limits):
        assert select_seed_track(two_seeds, _track("t1"), limits) is two_seeds

    def test_select_at_max_is_noop(self, limits):
        state = SeedSelectionState()
        for i in range(limits.max_seed_tracks):
            state = select_seed_track(state, _track(f"t{i}"), limits)
        assert len(state.track_ids) == limits.max_seed_tracks
        assert select_seed_track(state, _track("extra"), limits) is state

    def test_select_clears_query(self, limits):
        state = set_query(SeedSelectionState(), "boards")
        state = select_seed_track(state, _track("t1"), limits)
        assert state.query == ""
        assert state.focused_index == -1

    def test_remove_keeps_cache(self, two_seeds, limits):
        state = remove_seed_track(two_seeds, "t1")
        assert state.track_ids == ("t2",)
        assert "t1" in state.track_cache

        # Re-selected from a bare ID result, display data is still cached
        state = select_seed_track(state, _track("t1"), limits)
        assert state.track_ids == ("t2", "t1")
        assert state.track_cache["t1"].title == "Title t1"

    def test_remove_unknown_is_noop(self, two_seeds):
        assert remove_seed_track(two_seeds, "zzz") is two_seeds

    def test_remove_last(self, two_seeds):
        assert remove_last_seed_track(two_seeds).track_ids == ("t1",)
        assert remove_last_seed_track(SeedSelectionState()) == SeedSelectionState()

    def test_similarity_value(self, two_seeds):
        assert to_similarity_value(two_seeds) == SimilarityValue(("t1", "t2"))

    def test_min_score_carried_through(self):
        state = create_seed_state(SimilarityValue(("a",), min_score=0.6))
        assert to_similarity_value(state) == SimilarityValue(("a",), min_score=0.6)

    def test_create_from_value_dedupes(self):
        state = create_seed_state(SimilarityValue(("a", "b", "a")), [_track("a")])
        assert state.track_ids == ("a", "b")
        assert [t.id for t in selected_tracks(state)] == ["a"]


class TestSearchSequencing:
    def test_latest_response_applied(self):
        state, seq = begin_search(SeedSelectionState(), "boards")
        assert state.is_loading
        state = receive_search_results(state, seq, [_track("t1")])
        assert [t.id for t in state.results] == ["t1"]
        assert not state.is_loading

    def test_stale_response_dropped(self):
        state, first = begin_search(SeedSelectionState(), "bo")
        state, second = begin_search(state, "boards")
        after = receive_search_results(state, first, [_track("old")])
        assert after is state
        after = receive_search_results(state, second, [_track("new")])
        assert [t.id for t in after.results] == ["new"]

    def test_keystroke_invalidates_in_flight(self):
        state, seq = begin_search(SeedSelectionState(), "boa")
        state = set_query(state, "boar")
        assert receive_search_results(state, seq, [_track("t1")]) is state

    def test_error_is_inline_and_keeps_selection(self, two_seeds):
        state, seq = begin_search(two_seeds, "boards")
        state = receive_search_error(state, seq, "Search failed")
        assert state.status_message == "Search failed"
        assert state.track_ids == ("t1", "t2")
        assert not state.is_loading

    def test_stale_error_dropped(self):
        state, seq = begin_search(SeedSelectionState(), "bo")
        state, _ = begin_search(state, "boards")
        assert receive_search_error(state, seq, "boom") is state

    def test_reset_search(self):
        state, seq = begin_search(SeedSelectionState(), "boards")
        state = receive_search_results(state, seq, [_track("t1")])
        state = reset_search(state)
        assert state.results == ()
        assert state.search_query == ""


class TestFocusAndVisibility:
    def test_move_focus_clamps(self):
        state, seq = begin_search(SeedSelectionState(), "boards")
        state = receive_search_results(state, seq, [_track("a"), _track("b")])
        state = move_focus(state, 1)
        assert state.focused_index == 0
        state = move_focus(move_focus(state, 1), 1)
        assert state.focused_index == 1
        state = move_focus(move_focus(state, -1), -1)
        assert state.focused_index == 0

    def test_move_focus_without_results(self):
        state = SeedSelectionState()
        assert move_focus(state, 1) is state

    def test_dropdown_needs_open_and_long_query(self):
        state = set_query(SeedSelectionState(), "b")
        state, _ = begin_search(state, "b")
        assert not dropdown_visible(state, 2)
        state, _ = begin_search(state, "bo")
        assert dropdown_visible(state, 2)
