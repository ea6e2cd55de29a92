"""Tests for the seed picker frame."""

from smartlist.core.config import Config, LimitsConfig
from smartlist.domain.playlists.seeds import SeedSelectionState, SeedTrack
from smartlist.ui.seed_picker import render_lines


def _track(track_id: str) -> SeedTrack:
    return SeedTrack(id=track_id, title=f"Song {track_id}", artist_name="Band", formatted_duration="3:00")


class TestRenderLines:
    def test_empty_state(self):
        lines = render_lines(SeedSelectionState(), Config())
        assert lines[0] == "Seed tracks (0/10)"
        assert "  (none selected)" in lines

    def test_chips_and_focused_result(self):
        state = SeedSelectionState(
            track_ids=("a",),
            track_cache={"a": _track("a")},
            query="so",
            is_open=True,
            results=(_track("a"), _track("b")),
            search_query="so",
            focused_index=1,
        )
        lines = render_lines(state, Config())
        assert "  • Song a - Band" in lines
        assert "    Song a - Band [3:00] ✓" in lines
        assert "  > Song b - Band [3:00]" in lines

    def test_max_reached_notice(self):
        config = Config(limits=LimitsConfig(max_seed_tracks=1))
        state = SeedSelectionState(track_ids=("a",), track_cache={"a": _track("a")})
        assert "Maximum of 1 seed tracks reached" in render_lines(state, config)

    def test_status_message_shown(self):
        state = SeedSelectionState(
            query="so", is_open=True, search_query="so", status_message="Search failed"
        )
        assert "  Search failed" in render_lines(state, Config())

    def test_no_results(self):
        state = SeedSelectionState(query="zz", is_open=True, search_query="zz")
        assert "  No tracks found for 'zz'" in render_lines(state, Config())
